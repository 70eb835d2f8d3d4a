# 📄 File: identity_store/modules/user_management/infrastructure/database/memory_repository.py
# 🧭 Purpose (Layman Explanation):
# A storage that keeps user records in the program's memory, used for tests, demos and
# single-process deployments where nothing has to survive a restart.
# 🧪 Purpose (Technical Summary):
# DocumentRepository held in a dict, with id and unique-field enforcement. Each operation runs
# without an await between its check and its write, so it is atomic under asyncio.
# 🔗 Dependencies:
# copy, typing, domain.repositories.document_repository, shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# infrastructure.factory (STORE_BACKEND=memory), tests

import copy
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from identity_store.modules.user_management.domain.repositories.document_repository import (
    Document,
    DocumentRepository,
)
from identity_store.shared.core.exceptions import DuplicateKeyError, InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


class InMemoryDocumentRepository(DocumentRepository):
    """In-process document collection. Documents are copied on the way in and out."""

    def __init__(self, collection: str, unique_fields: Sequence[str] = ()):
        self.collection = collection
        self.unique_fields = tuple(unique_fields)
        self._documents: Dict[str, Document] = {}

    async def get(self, document_id: str) -> Optional[Document]:
        document = self._documents.get(document_id)
        return copy.deepcopy(document) if document is not None else None

    async def get_all(self) -> List[Document]:
        return [copy.deepcopy(document) for document in self._documents.values()]

    async def find_by_field(self, field: str, value: Any) -> List[Document]:
        return [
            copy.deepcopy(document)
            for document in self._documents.values()
            if document.get(field) == value
        ]

    async def query(self, predicate: Callable[[Document], bool]) -> List[Document]:
        return [
            copy.deepcopy(document)
            for document in self._documents.values()
            if predicate(document)
        ]

    async def insert(self, document: Document) -> Document:
        document_id = self._document_id(document)
        if document_id in self._documents:
            raise DuplicateKeyError(
                f"Document {document_id} already exists in {self.collection}",
                collection=self.collection,
                field="id",
                value=document_id,
            )
        self._check_unique_fields(document)
        self._documents[document_id] = copy.deepcopy(document)
        logger.debug(f"Inserted {self.collection}/{document_id}")
        return copy.deepcopy(document)

    async def update(self, document: Document) -> Document:
        document_id = self._document_id(document)
        if document_id not in self._documents:
            raise NotFoundError(
                f"Document {document_id} not found in {self.collection}",
                resource_type=self.collection,
                resource_id=document_id,
            )
        self._check_unique_fields(document)
        self._documents[document_id] = copy.deepcopy(document)
        logger.debug(f"Updated {self.collection}/{document_id}")
        return copy.deepcopy(document)

    async def upsert(self, document: Document) -> Document:
        document_id = self._document_id(document)
        self._check_unique_fields(document)
        self._documents[document_id] = copy.deepcopy(document)
        logger.debug(f"Upserted {self.collection}/{document_id}")
        return copy.deepcopy(document)

    async def remove(self, document_id: str) -> bool:
        removed = self._documents.pop(document_id, None) is not None
        if removed:
            logger.debug(f"Removed {self.collection}/{document_id}")
        return removed

    def _document_id(self, document: Document) -> str:
        document_id = document.get("id") if document else None
        if not document_id:
            raise InvalidArgumentError("Document id is required", argument="id")
        return document_id

    def _check_unique_fields(self, document: Document) -> None:
        """None values never conflict, matching SQL UNIQUE semantics."""
        document_id = document["id"]
        for field in self.unique_fields:
            value = document.get(field)
            if value is None:
                continue
            for other_id, other in self._documents.items():
                if other_id != document_id and other.get(field) == value:
                    raise DuplicateKeyError(
                        f"{field} {value!r} already exists in {self.collection}",
                        collection=self.collection,
                        field=field,
                        value=value,
                    )
