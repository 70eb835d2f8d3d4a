# 📄 File: identity_store/modules/user_management/infrastructure/database/sqlalchemy_repository.py
# 🧭 Purpose (Layman Explanation):
# Keeps user records in a SQL database (SQLite or PostgreSQL) while looking, to the rest of
# the identity store, exactly like any other record storage.
#
# 🧪 Purpose (Technical Summary):
# DocumentRepository over the identity_documents / identity_document_keys tables using async
# SQLAlchemy sessions, one transaction per operation. IntegrityError maps to DuplicateKeyError,
# any other SQLAlchemyError to StoreUnavailableError.
#
# 🔗 Dependencies:
# - SQLAlchemy async session and query operations
# - infrastructure.database.models (DocumentModel, DocumentKeyModel)
# - shared.core.exceptions
#
# 🔄 Connected Modules / Calls From:
# - infrastructure.factory (STORE_BACKEND=sql)
# - UserStore (through the DocumentRepository interface)

import logging
from typing import Any, Callable, List, Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from identity_store.modules.user_management.domain.repositories.document_repository import (
    Document,
    DocumentRepository,
)
from identity_store.modules.user_management.infrastructure.database.models import (
    DocumentKeyModel,
    DocumentModel,
)
from identity_store.shared.core.exceptions import (
    DuplicateKeyError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
)

logger = logging.getLogger(__name__)


class SqlAlchemyDocumentRepository(DocumentRepository):
    """
    SQLAlchemy implementation of the DocumentRepository interface.

    Several repositories can share the same tables; each one only sees
    rows of its own ``collection``.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        collection: str,
        unique_fields: Sequence[str] = ()
    ):
        """
        Initialize the repository.

        Args:
            session_factory: Async session factory bound to an engine
            collection: Collection name stored with every row
            unique_fields: Top-level fields kept unique across the collection
        """
        self._session_factory = session_factory
        self.collection = collection
        self.unique_fields = tuple(unique_fields)

    # =========================================================================
    # READS
    # =========================================================================

    async def get(self, document_id: str) -> Optional[Document]:
        try:
            async with self._session_factory() as session:
                model = await session.get(DocumentModel, (self.collection, document_id))
                return dict(model.body) if model is not None else None
        except SQLAlchemyError as e:
            raise self._unavailable("get", e) from e

    async def get_all(self) -> List[Document]:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.collection == self.collection)
            .order_by(DocumentModel.created_at, DocumentModel.document_id)
        )
        return await self._fetch("get_all", stmt)

    async def find_by_field(self, field: str, value: Any) -> List[Document]:
        """
        Documents whose top-level ``field`` equals ``value``.

        Always reads the document bodies, never the key table, so rows
        written before ``field`` became unique are still found.
        """
        if isinstance(value, str):
            stmt = (
                select(DocumentModel)
                .where(
                    DocumentModel.collection == self.collection,
                    DocumentModel.body[field].as_string() == value,
                )
                .order_by(DocumentModel.created_at, DocumentModel.document_id)
            )
            return await self._fetch("find_by_field", stmt)

        return await self.query(lambda document: document.get(field) == value)

    async def query(self, predicate: Callable[[Document], bool]) -> List[Document]:
        return [document for document in await self.get_all() if predicate(document)]

    # =========================================================================
    # WRITES
    # =========================================================================

    async def insert(self, document: Document) -> Document:
        document_id = self._document_id(document)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    if await session.get(DocumentModel, (self.collection, document_id)) is not None:
                        raise DuplicateKeyError(
                            f"Document {document_id} already exists in {self.collection}",
                            collection=self.collection,
                            field="id",
                            value=document_id,
                        )
                    session.add(DocumentModel(
                        collection=self.collection,
                        document_id=document_id,
                        body=dict(document),
                    ))
                    session.add_all(self._key_models(document))
        except IntegrityError as e:
            raise self._duplicate(document_id, e) from e
        except SQLAlchemyError as e:
            raise self._unavailable("insert", e) from e

        logger.debug(f"Inserted {self.collection}/{document_id}")
        return dict(document)

    async def update(self, document: Document) -> Document:
        document_id = self._document_id(document)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    model = await session.get(DocumentModel, (self.collection, document_id))
                    if model is None:
                        raise NotFoundError(
                            f"Document {document_id} not found in {self.collection}",
                            resource_type=self.collection,
                            resource_id=document_id,
                        )
                    model.body = dict(document)
                    await self._replace_keys(session, document)
        except IntegrityError as e:
            raise self._duplicate(document_id, e) from e
        except SQLAlchemyError as e:
            raise self._unavailable("update", e) from e

        logger.debug(f"Updated {self.collection}/{document_id}")
        return dict(document)

    async def upsert(self, document: Document) -> Document:
        document_id = self._document_id(document)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    model = await session.get(DocumentModel, (self.collection, document_id))
                    if model is None:
                        session.add(DocumentModel(
                            collection=self.collection,
                            document_id=document_id,
                            body=dict(document),
                        ))
                    else:
                        model.body = dict(document)
                    await self._replace_keys(session, document)
        except IntegrityError as e:
            raise self._duplicate(document_id, e) from e
        except SQLAlchemyError as e:
            raise self._unavailable("upsert", e) from e

        logger.debug(f"Upserted {self.collection}/{document_id}")
        return dict(document)

    async def remove(self, document_id: str) -> bool:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    result = await session.execute(
                        delete(DocumentModel).where(
                            DocumentModel.collection == self.collection,
                            DocumentModel.document_id == document_id,
                        )
                    )
                    await session.execute(
                        delete(DocumentKeyModel).where(
                            DocumentKeyModel.collection == self.collection,
                            DocumentKeyModel.document_id == document_id,
                        )
                    )
                    removed = result.rowcount > 0
        except SQLAlchemyError as e:
            raise self._unavailable("remove", e) from e

        if removed:
            logger.debug(f"Removed {self.collection}/{document_id}")
        return removed

    async def rebuild_keys(self) -> int:
        """
        Re-derive the unique-key rows of this collection from the stored documents.

        Needed when ``unique_fields`` grows on a database already holding
        documents (for example when email uniqueness is switched on).

        Returns:
            Number of key rows written

        Raises:
            DuplicateKeyError: If stored documents already share a unique value
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        delete(DocumentKeyModel).where(DocumentKeyModel.collection == self.collection)
                    )
                    result = await session.execute(
                        select(DocumentModel).where(DocumentModel.collection == self.collection)
                    )
                    keys = []
                    for model in result.scalars().all():
                        keys.extend(self._key_models(model.body))
                    session.add_all(keys)
        except IntegrityError as e:
            logger.warning(f"Existing documents in {self.collection} violate unique fields: {e.orig}")
            raise DuplicateKeyError(
                f"Existing documents in {self.collection} share a unique value",
                collection=self.collection,
            ) from e
        except SQLAlchemyError as e:
            raise self._unavailable("rebuild_keys", e) from e

        logger.info(f"Rebuilt {len(keys)} unique keys for {self.collection}")
        return len(keys)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _fetch(self, operation: str, stmt) -> List[Document]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [dict(model.body) for model in result.scalars().all()]
        except SQLAlchemyError as e:
            raise self._unavailable(operation, e) from e

    async def _replace_keys(self, session: AsyncSession, document: Document) -> None:
        await session.execute(
            delete(DocumentKeyModel).where(
                DocumentKeyModel.collection == self.collection,
                DocumentKeyModel.document_id == document["id"],
            )
        )
        session.add_all(self._key_models(document))

    def _key_models(self, document: Document) -> List[DocumentKeyModel]:
        """None values are not indexed, so they never conflict."""
        return [
            DocumentKeyModel(
                collection=self.collection,
                field=field,
                value=str(document[field]),
                document_id=document["id"],
            )
            for field in self.unique_fields
            if document.get(field) is not None
        ]

    def _document_id(self, document: Document) -> str:
        document_id = document.get("id") if document else None
        if not document_id:
            raise InvalidArgumentError("Document id is required", argument="id")
        return document_id

    def _duplicate(self, document_id: str, error: IntegrityError) -> DuplicateKeyError:
        logger.warning(f"Unique constraint violated in {self.collection} for {document_id}: {error.orig}")
        return DuplicateKeyError(
            f"Duplicate key in {self.collection} for document {document_id}",
            collection=self.collection,
            value=document_id,
        )

    def _unavailable(self, operation: str, error: SQLAlchemyError) -> StoreUnavailableError:
        logger.error(f"Database error during {operation} on {self.collection}: {error}")
        return StoreUnavailableError(
            f"Failed to {operation} in {self.collection}: {error}",
            operation=operation,
            collection=self.collection,
        )
