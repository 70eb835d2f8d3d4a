# 📄 File: identity_store/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings and message wording that tell the identity store
# how strict to be and where to keep its data.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization with exports for settings management
# and validation message templates.
#
# 🔄 Connected Modules / Calls From:
# - All modules requiring configuration

"""
Configuration Management Package

Handles all application configuration including:
- Environment-based settings
- Validation message templates
"""

from .messages import Messages
from .settings import Settings, get_settings, reset_settings_cache

__all__ = [
    "Messages",
    "Settings",
    "get_settings",
    "reset_settings_cache",
]
