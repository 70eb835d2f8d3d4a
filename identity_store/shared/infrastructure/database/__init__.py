# 📄 File: identity_store/shared/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Database plumbing shared by every storage implementation.
# 🧪 Purpose (Technical Summary):
# Exports async engine/session helpers and the declarative Base.

from .connection import Base, create_engine, create_session_factory, dispose_engine, init_models

__all__ = [
    "Base",
    "create_engine",
    "create_session_factory",
    "dispose_engine",
    "init_models",
]
