# 📄 File: identity_store/modules/user_management/domain/models/result.py
# 🧭 Purpose (Layman Explanation):
# The answer the identity store gives after checking or saving a user: either "all good"
# or "not accepted" together with every reason why.
# 🧪 Purpose (Technical Summary):
# Result object aggregating ordered error messages; validation failures are returned,
# not raised, unless the caller opts in via raise_for_errors().
# 🔗 Dependencies:
# typing, shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# SmartUserValidator, UserManager, API layers consuming validated users

from typing import Iterable, List

from identity_store.shared.core.exceptions import ValidationFailedError


class IdentityResult:
    """Result object for validation and manager operations"""

    def __init__(self, succeeded: bool = True, errors: Iterable[str] = None):
        self.errors: List[str] = list(errors or [])
        self.succeeded = succeeded and not self.errors

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(True)

    @classmethod
    def failed(cls, *errors: str) -> "IdentityResult":
        return cls(False, errors)

    def add_error(self, error: str) -> None:
        """Add validation error"""
        self.errors.append(error)
        self.succeeded = False

    def raise_for_errors(self) -> None:
        """
        Raise ValidationFailedError carrying every message if the result failed.

        Raises:
            ValidationFailedError: If the result is not a success
        """
        if not self.succeeded:
            raise ValidationFailedError(self.errors)

    def __bool__(self) -> bool:
        return self.succeeded

    def __repr__(self) -> str:
        if self.succeeded:
            return "IdentityResult(succeeded=True)"
        return f"IdentityResult(succeeded=False, errors={self.errors!r})"
