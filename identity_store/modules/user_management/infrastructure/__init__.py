# 📄 File: identity_store/modules/user_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Connects user management to real storage and builds ready-to-use stores from settings.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer package: persistence adapters and wiring factories.

from .database import InMemoryDocumentRepository, SqlAlchemyDocumentRepository, UserStore
from .factory import build_user_manager, build_user_store

__all__ = [
    "InMemoryDocumentRepository",
    "SqlAlchemyDocumentRepository",
    "UserStore",
    "build_user_manager",
    "build_user_store",
]
