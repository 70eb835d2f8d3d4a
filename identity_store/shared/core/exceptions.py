# 📄 File: identity_store/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Defines the special error types the identity store uses to say exactly what went wrong,
# like "that user does not exist" or "that login is already used by someone else".
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error kinds with HTTP-style status codes,
# error details, and dictionary serialization for callers that expose them over an API.
# 🔗 Dependencies:
# typing, http.HTTPStatus
# 🔄 Connected Modules / Calls From:
# Document repositories, UserStore, SmartUserValidator, UserManager, IdentityResult

from http import HTTPStatus
from typing import Any, Dict, List, Optional


class IdentityStoreException(Exception):
    """
    Base exception class for the identity store.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = int(status_code)
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }


# =============================================================================
# ARGUMENT & VALIDATION EXCEPTIONS
# =============================================================================

class InvalidArgumentError(IdentityStoreException):
    """
    Exception raised when a required argument is missing or unusable.
    Used for a None user handed to the validator or the store.
    """

    def __init__(
        self,
        message: str = "Invalid argument",
        argument: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}
        if argument:
            details["argument"] = argument

        super().__init__(
            message=message,
            status_code=HTTPStatus.BAD_REQUEST,
            details=details,
            error_code="INVALID_ARGUMENT"
        )


class ValidationFailedError(IdentityStoreException):
    """
    Exception raised when a user fails one or more validation rules.

    Carries every violated-rule message in the order the validator
    produced them.
    """

    def __init__(
        self,
        errors: List[str],
        message: str = "User validation failed",
        details: Optional[Dict[str, Any]] = None
    ):
        self.errors = list(errors)
        if not details:
            details = {}
        details["errors"] = self.errors

        super().__init__(
            message=message,
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_FAILED"
        )


# =============================================================================
# STORE EXCEPTIONS
# =============================================================================

class NotFoundError(IdentityStoreException):
    """
    Exception raised when requested resource is not found.
    Used by update/delete/add_login on an identifier the store does not hold.
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=HTTPStatus.NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DuplicateKeyError(IdentityStoreException):
    """
    Exception raised when a write violates a uniqueness constraint.
    Used for an existing document id or a unique field already held by another document.
    """

    def __init__(
        self,
        message: str = "Duplicate key",
        collection: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "DUPLICATE_KEY"
    ):
        if not details:
            details = {}

        if collection:
            details["collection"] = collection
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            status_code=HTTPStatus.CONFLICT,
            details=details,
            error_code=error_code
        )


class DuplicateBindingError(DuplicateKeyError):
    """Exception raised when a (provider, key) login pair is already bound to a user."""

    def __init__(
        self,
        login_provider: str,
        provider_key: str,
        message: str = "Login is already bound to a user",
        user_id: Optional[str] = None
    ):
        self.login_provider = login_provider
        self.provider_key = provider_key
        details = {"login_provider": login_provider, "provider_key": provider_key}
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            details=details,
            error_code="DUPLICATE_BINDING"
        )


class StoreUnavailableError(IdentityStoreException):
    """
    Exception raised for I/O or transport failures of the backing repository.
    Never retried by this package.
    """

    def __init__(
        self,
        message: str = "Store unavailable",
        operation: Optional[str] = None,
        collection: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if collection:
            details["collection"] = collection

        super().__init__(
            message=message,
            status_code=HTTPStatus.SERVICE_UNAVAILABLE,
            details=details,
            error_code="STORE_UNAVAILABLE"
        )
