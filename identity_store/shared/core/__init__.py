# 📄 File: identity_store/shared/core/__init__.py
# 🧭 Purpose (Layman Explanation):
# Shared building blocks every part of the identity store relies on, mainly its error types.
# 🧪 Purpose (Technical Summary):
# Core package exporting the exception hierarchy.
# 🔄 Connected Modules / Calls From:
# Repositories, store, validator, manager

from .exceptions import (
    DuplicateBindingError,
    DuplicateKeyError,
    IdentityStoreException,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
    ValidationFailedError,
)

__all__ = [
    "IdentityStoreException",
    "InvalidArgumentError",
    "ValidationFailedError",
    "NotFoundError",
    "DuplicateKeyError",
    "DuplicateBindingError",
    "StoreUnavailableError",
]
