# 📄 File: identity_store/modules/user_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rule keepers for user accounts: the checker run before saving and the manager that saves.
# 🧪 Purpose (Technical Summary):
# Domain services package exporting the validator interface/implementation and UserManager.
# 🔄 Connected Modules / Calls From:
# infrastructure.factory, application code

from .user_manager import UserManager
from .user_validator import SmartUserValidator, UserValidator

__all__ = [
    "SmartUserValidator",
    "UserManager",
    "UserValidator",
]
