# 📄 File: identity_store/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines the two SQL tables that hold user records: one for the records themselves and one
# listing the values (like usernames) that no two records may share.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for a generic JSON document store: documents keyed by
# (collection, document_id) and a unique-key table whose primary key
# (collection, field, value) enforces unique fields at the database level.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - shared.infrastructure.database.connection (declarative Base)
#
# 🔄 Connected Modules / Calls From:
# - sqlalchemy_repository.py (CRUD operations)
# - init_models (schema creation)

from sqlalchemy import JSON, Column, DateTime, String, Text, func

from identity_store.shared.infrastructure.database.connection import Base


class DocumentModel(Base):
    """One JSON document of one collection."""
    __tablename__ = "identity_documents"

    collection = Column(
        String(100),
        primary_key=True,
        comment="Logical collection name (users, user_logins)"
    )
    document_id = Column(
        Text,
        primary_key=True,
        comment="Document id, unique within its collection"
    )
    body = Column(
        JSON,
        nullable=False,
        comment="Full document"
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )

    def __repr__(self):
        return f"<DocumentModel({self.collection}/{self.document_id})>"


class DocumentKeyModel(Base):
    """Unique field value held by a document; the primary key is the constraint."""
    __tablename__ = "identity_document_keys"

    collection = Column(String(100), primary_key=True)
    field = Column(String(100), primary_key=True)
    value = Column(Text, primary_key=True)
    document_id = Column(Text, nullable=False, index=True)

    def __repr__(self):
        return f"<DocumentKeyModel({self.collection}.{self.field}={self.value!r})>"
