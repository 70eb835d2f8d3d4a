# 📄 File: identity_store/modules/user_management/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The heart of user management: what a user is, the rules it must follow, and the contracts storage must meet.
# 🧪 Purpose (Technical Summary):
# Domain layer package: entities, repository interfaces and domain services, free of storage details.

"""
User Management Domain Layer

- models: IdentityUser, UserLoginInfo, IdentityResult
- repositories: UserRepository, DocumentRepository interfaces
- services: UserValidator / SmartUserValidator, UserManager
"""

from .models import IdentityResult, IdentityUser, UserLoginInfo
from .repositories import DocumentRepository, UserRepository
from .services import SmartUserValidator, UserManager, UserValidator

__all__ = [
    "IdentityResult",
    "IdentityUser",
    "UserLoginInfo",
    "DocumentRepository",
    "UserRepository",
    "SmartUserValidator",
    "UserManager",
    "UserValidator",
]
