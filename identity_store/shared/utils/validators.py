# 📄 File: identity_store/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# Small checkers that decide whether a username uses allowed characters and whether
# an email address is written correctly, before anything is looked up or saved.
# 🧪 Purpose (Technical Summary):
# Pure field-level validation helpers (blank check, user name charset, mailbox syntax,
# email normalization) shared by the validator and the user store.
# 🔗 Dependencies:
# re, email-validator
# 🔄 Connected Modules / Calls From:
# SmartUserValidator, UserStore document mapping

import re
from typing import Optional

from email_validator import EmailNotValidError, validate_email

# Letters, digits, '@', '_' and '.' only
USERNAME_PATTERN = re.compile(r'[A-Za-z0-9@_.]+')


def is_blank(value: Optional[str]) -> bool:
    """True for None, the empty string and whitespace-only strings."""
    return value is None or not value.strip()


def is_valid_user_name(user_name: str) -> bool:
    """
    Check a user name against the alphanumeric charset.

    Args:
        user_name: Candidate user name

    Returns:
        True if every character is a letter, digit, '@', '_' or '.'
    """
    return USERNAME_PATTERN.fullmatch(user_name) is not None


def is_valid_email_address(email: str) -> bool:
    """
    Check mailbox syntax without any DNS or deliverability lookup.

    Single-label domains (``admin@intranet``) are accepted. Special-use
    names such as ``localhost`` and ``.local`` are still rejected by
    email-validator.

    Args:
        email: Email address to validate

    Returns:
        True if email-validator accepts the address
    """
    try:
        validate_email(email, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


def normalize_email(email: Optional[str]) -> Optional[str]:
    """Lower-case and trim an email for case-insensitive lookups."""
    if email is None:
        return None
    return email.strip().lower()
