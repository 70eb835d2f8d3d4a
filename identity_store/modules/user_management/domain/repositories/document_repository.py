# 📄 File: identity_store/modules/user_management/domain/repositories/document_repository.py
# 🧭 Purpose (Layman Explanation):
# Describes the minimum a storage system must offer for the identity store to keep user
# records in it: fetch, search by a field, add, replace and remove records.
# 🧪 Purpose (Technical Summary):
# Repository interface over one collection of JSON-like documents keyed by "id", with optional
# unique fields enforced by the backend; decouples the store from any database client library.
# 🔗 Dependencies:
# abc, typing
# 🔄 Connected Modules / Calls From:
# UserStore, InMemoryDocumentRepository, SqlAlchemyDocumentRepository

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

Document = Dict[str, Any]


class DocumentRepository(ABC):
    """
    Repository interface for a collection of documents.

    Every document is a JSON-serializable dict with a string ``id``.
    Backends enforce uniqueness of ``id`` and of every field named in
    ``unique_fields``; that constraint is the authoritative guard
    against concurrent writers, the validator's lookups being only a
    best-effort pre-check.

    Implementation Notes:
    - "Not found" is reported as None / False, never as an exception
    - Transport or I/O failures raise StoreUnavailableError
    - Returned documents are copies; mutating them never changes stored state
    """

    collection: str
    unique_fields: Sequence[str] = ()

    @abstractmethod
    async def get(self, document_id: str) -> Optional[Document]:
        """
        Get a document by id.

        Args:
            document_id: Document identifier

        Returns:
            The document if found, None otherwise
        """

    @abstractmethod
    async def get_all(self) -> List[Document]:
        """Return every document of the collection."""

    @abstractmethod
    async def find_by_field(self, field: str, value: Any) -> List[Document]:
        """
        Find documents whose top-level ``field`` equals ``value``.

        Args:
            field: Top-level document key
            value: Exact value to match

        Returns:
            Matching documents, possibly empty
        """

    @abstractmethod
    async def query(self, predicate: Callable[[Document], bool]) -> List[Document]:
        """Return documents for which ``predicate`` is true."""

    @abstractmethod
    async def insert(self, document: Document) -> Document:
        """
        Insert a new document.

        Raises:
            DuplicateKeyError: If the id or a unique field value already exists
        """

    @abstractmethod
    async def update(self, document: Document) -> Document:
        """
        Replace an existing document.

        Raises:
            NotFoundError: If no document has this id
            DuplicateKeyError: If a unique field value belongs to another document
        """

    @abstractmethod
    async def upsert(self, document: Document) -> Document:
        """
        Insert or replace a document.

        Raises:
            DuplicateKeyError: If a unique field value belongs to another document
        """

    @abstractmethod
    async def remove(self, document_id: str) -> bool:
        """
        Remove a document.

        Returns:
            True if removed, False if not found
        """
