# 📄 File: identity_store/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the core "things" of the identity store: users, their outside logins and check results.
# 🧪 Purpose (Technical Summary):
# Domain models package initialization exporting entities and the result type.
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, infrastructure store

from .result import IdentityResult
from .user import IdentityUser, UserLoginInfo, login_index_key

__all__ = [
    "IdentityResult",
    "IdentityUser",
    "UserLoginInfo",
    "login_index_key",
]
