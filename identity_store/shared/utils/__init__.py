# 📄 File: identity_store/shared/utils/__init__.py
# 🧭 Purpose (Layman Explanation):
# Helper tools used across the identity store: logging setup and field checkers.
# 🧪 Purpose (Technical Summary):
# Utility package exporting structured logging and field validation helpers.
# 🔄 Connected Modules / Calls From:
# Validator, store, manager, application startup

from .logging import get_logger, log_context, setup_logging
from .validators import is_blank, is_valid_email_address, is_valid_user_name, normalize_email

__all__ = [
    "get_logger",
    "log_context",
    "setup_logging",
    "is_blank",
    "is_valid_email_address",
    "is_valid_user_name",
    "normalize_email",
]
