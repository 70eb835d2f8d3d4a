# 📄 File: identity_store/modules/user_management/domain/services/user_validator.py
# 🧭 Purpose (Layman Explanation):
# Checks a user account before it is saved: the username must be filled in, use allowed
# characters and not belong to someone else; when required, the email must look right and be unused.
# 🧪 Purpose (Technical Summary):
# UserValidator interface and SmartUserValidator implementation producing an IdentityResult
# with every violated rule in order (username rules before email rules). Duplicate lookups go
# through the UserRepository and are a best-effort pre-check; the store's uniqueness
# constraint stays the authoritative guard under concurrent writers.
# 🔗 Dependencies:
# UserRepository, IdentityResult, Messages, shared.utils.validators, logging
# 🔄 Connected Modules / Calls From:
# UserManager (before create/update), API layers validating input up front

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from identity_store.shared.config.messages import Messages
from identity_store.shared.config.settings import Settings, get_settings
from identity_store.shared.core.exceptions import InvalidArgumentError
from identity_store.shared.utils.validators import (
    is_blank,
    is_valid_email_address,
    is_valid_user_name,
)

from ..models.result import IdentityResult
from ..models.user import IdentityUser
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserValidator(ABC):
    """Capability consumed by whatever commits users."""

    @abstractmethod
    async def validate(self, user: IdentityUser) -> IdentityResult:
        """
        Validate a candidate user.

        Raises:
            InvalidArgumentError: If user is None
        """


class SmartUserValidator(UserValidator):
    """
    Validator checking user name and email shape and uniqueness.

    Stateless apart from its configuration, so one instance can serve
    concurrent callers. Store failures raised by the lookups propagate
    untouched: a failed lookup is never read as "no duplicate".
    """

    def __init__(
        self,
        repository: UserRepository,
        messages: Optional[Messages] = None,
        require_unique_email: Optional[bool] = None,
        allow_only_alphanumeric_user_names: Optional[bool] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.repository = repository
        self.messages = messages or settings.MESSAGES
        self.require_unique_email = (
            settings.REQUIRE_UNIQUE_EMAIL if require_unique_email is None else require_unique_email
        )
        self.allow_only_alphanumeric_user_names = (
            settings.ALLOW_ONLY_ALPHANUMERIC_USER_NAMES
            if allow_only_alphanumeric_user_names is None
            else allow_only_alphanumeric_user_names
        )

    async def validate(self, user: IdentityUser) -> IdentityResult:
        if user is None:
            raise InvalidArgumentError("User is required", argument="user")

        errors: List[str] = []
        await self._validate_user_name(user, errors)

        if self.require_unique_email:
            await self._validate_email(user, errors)

        if errors:
            logger.debug(f"User validation failed for {user.id or '<new>'}: {errors}")
            return IdentityResult.failed(*errors)

        logger.debug(f"User validation successful for {user.id or '<new>'}")
        return IdentityResult.success()

    async def _validate_user_name(self, user: IdentityUser, errors: List[str]) -> None:
        if is_blank(user.user_name):
            errors.append(self.messages.user_name_too_short)
        elif self.allow_only_alphanumeric_user_names and not is_valid_user_name(user.user_name):
            errors.append(self.messages.invalid_user_name.format(user.user_name))
        else:
            owner = await self.repository.find_by_name(user.user_name)
            if owner is not None and owner.id != user.id:
                errors.append(self.messages.duplicate_name.format(user.user_name))

    async def _validate_email(self, user: IdentityUser, errors: List[str]) -> None:
        if is_blank(user.email):
            errors.append(self.messages.email_too_short)
            return

        if not is_valid_email_address(user.email):
            errors.append(self.messages.invalid_email.format(user.email))
            return

        owner = await self.repository.find_by_email(user.email)
        if owner is not None and owner.id != user.id:
            errors.append(self.messages.duplicate_email.format(user.email))
