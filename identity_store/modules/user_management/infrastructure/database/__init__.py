# 📄 File: identity_store/modules/user_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# The storage side of user management: where and how user records are actually kept.
# 🧪 Purpose (Technical Summary):
# Exports the UserStore adapter and the document repository backends.

from .memory_repository import InMemoryDocumentRepository
from .sqlalchemy_repository import SqlAlchemyDocumentRepository
from .user_store import UserStore

__all__ = [
    "InMemoryDocumentRepository",
    "SqlAlchemyDocumentRepository",
    "UserStore",
]
