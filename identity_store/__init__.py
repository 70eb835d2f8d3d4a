# 📄 File: identity_store/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The identity store: checks user accounts (username, email) before they are saved and keeps
# them, with their linked outside logins, in a pluggable record storage.
#
# 🧪 Purpose (Technical Summary):
# Package initialization re-exporting the public API: entities, validator, manager, store,
# document repositories, factories and the exception hierarchy.
#
# 🔄 Connected Modules / Calls From:
# - Applications embedding the identity store

"""
Identity Store - user account validation and persistence adapter.
"""

from identity_store.modules.user_management.domain import (
    DocumentRepository,
    IdentityResult,
    IdentityUser,
    SmartUserValidator,
    UserLoginInfo,
    UserManager,
    UserRepository,
    UserValidator,
)
from identity_store.modules.user_management.infrastructure import (
    InMemoryDocumentRepository,
    SqlAlchemyDocumentRepository,
    UserStore,
    build_user_manager,
    build_user_store,
)
from identity_store.shared.config import Messages, Settings, get_settings
from identity_store.shared.core import (
    DuplicateBindingError,
    DuplicateKeyError,
    IdentityStoreException,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
    ValidationFailedError,
)

__version__ = "1.0.0"
__title__ = "identity-store"

__all__ = [
    "__version__",
    "__title__",
    "DocumentRepository",
    "IdentityResult",
    "IdentityUser",
    "SmartUserValidator",
    "UserLoginInfo",
    "UserManager",
    "UserRepository",
    "UserValidator",
    "InMemoryDocumentRepository",
    "SqlAlchemyDocumentRepository",
    "UserStore",
    "build_user_manager",
    "build_user_store",
    "Messages",
    "Settings",
    "get_settings",
    "DuplicateBindingError",
    "DuplicateKeyError",
    "IdentityStoreException",
    "InvalidArgumentError",
    "NotFoundError",
    "StoreUnavailableError",
    "ValidationFailedError",
]
