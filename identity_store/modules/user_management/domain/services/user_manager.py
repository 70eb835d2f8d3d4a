# 📄 File: identity_store/modules/user_management/domain/services/user_manager.py
# 🧭 Purpose (Layman Explanation):
# The front desk for user accounts: it checks every new or changed account before saving it,
# links and unlinks outside logins, and keeps an audit line of what happened.
# 🧪 Purpose (Technical Summary):
# Domain service committing IdentityUser entities through a UserRepository, running the
# UserValidator before create/update and returning IdentityResult instead of raising for
# rule violations. Store failures (not found, duplicates, unavailable) propagate.
# 🔗 Dependencies:
# UserRepository, UserValidator, IdentityResult, shared.utils.logging
# 🔄 Connected Modules / Calls From:
# infrastructure.factory (build_user_manager), authentication layers consuming users

from typing import List, Optional

from identity_store.shared.config.messages import Messages
from identity_store.shared.config.settings import Settings, get_settings
from identity_store.shared.core.exceptions import DuplicateBindingError
from identity_store.shared.utils.logging import get_logger

from ..models.result import IdentityResult
from ..models.user import IdentityUser, UserLoginInfo
from ..repositories.user_repository import UserRepository
from .user_validator import SmartUserValidator, UserValidator

logger = get_logger(__name__)


class UserManager:
    """
    Domain service for user account commits.

    Validation is a pre-check only: two concurrent creates with the
    same user name can both pass it, and the store's uniqueness
    constraint then rejects the second with DuplicateKeyError.
    """

    def __init__(
        self,
        store: UserRepository,
        validator: Optional[UserValidator] = None,
        settings: Optional[Settings] = None,
        messages: Optional[Messages] = None,
    ):
        settings = settings or get_settings()
        self.store = store
        self.messages = messages or settings.MESSAGES
        self.validator = validator or SmartUserValidator(store, messages=self.messages, settings=settings)

    # =========================================================================
    # USER CREATION AND LIFECYCLE
    # =========================================================================

    async def create_user(self, user: IdentityUser) -> IdentityResult:
        """
        Validate and persist a new user.

        Args:
            user: User to create; gets an id assigned if it has none

        Returns:
            IdentityResult: failure with every violated rule, or success

        Raises:
            InvalidArgumentError: If user is None
            DuplicateKeyError: If the store rejects the write
        """
        result = await self.validator.validate(user)
        if not result.succeeded:
            logger.log_user_action("create_user", user.id or "<new>", result="rejected",
                                   extra={"errors": result.errors})
            return result

        await self.store.create(user)
        logger.log_user_action("create_user", user.id)
        return result

    async def update_user(self, user: IdentityUser) -> IdentityResult:
        """
        Validate and persist changes to an existing user.

        Raises:
            NotFoundError: If the user does not exist
        """
        result = await self.validator.validate(user)
        if not result.succeeded:
            logger.log_user_action("update_user", user.id, result="rejected",
                                   extra={"errors": result.errors})
            return result

        await self.store.update(user)
        logger.log_user_action("update_user", user.id)
        return result

    async def delete_user(self, user: IdentityUser) -> IdentityResult:
        await self.store.delete(user)
        logger.log_user_action("delete_user", user.id)
        return IdentityResult.success()

    async def set_email(self, user: IdentityUser, email: Optional[str]) -> IdentityResult:
        """Change the email (which clears its confirmation) and save through update_user."""
        user.set_email(email)
        return await self.update_user(user)

    async def confirm_email(self, user: IdentityUser) -> IdentityResult:
        user.confirm_email()
        await self.store.update(user)
        logger.log_user_action("confirm_email", user.id)
        return IdentityResult.success()

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    async def find_by_id(self, user_id: str) -> Optional[IdentityUser]:
        return await self.store.find_by_id(user_id)

    async def find_by_name(self, user_name: str) -> Optional[IdentityUser]:
        return await self.store.find_by_name(user_name)

    async def find_by_email(self, email: str) -> Optional[IdentityUser]:
        return await self.store.find_by_email(email)

    async def find_by_login(self, login_provider: str, provider_key: str) -> Optional[IdentityUser]:
        return await self.store.find_by_login(login_provider, provider_key)

    # =========================================================================
    # EXTERNAL LOGINS
    # =========================================================================

    async def add_login(self, user: IdentityUser, login_provider: str, provider_key: str) -> IdentityResult:
        """
        Bind an external login to a user.

        Returns a failed result when the login already belongs to a
        user, including a binding the store still holds for a user that
        is gone or one taken by a concurrent bind.
        """
        owner = await self.store.find_by_login(login_provider, provider_key)
        if owner is not None:
            logger.log_user_action("add_login", user.id, result="rejected",
                                   extra={"login_provider": login_provider})
            return IdentityResult.failed(self.messages.login_already_associated)

        try:
            await self.store.add_login(user, login_provider, provider_key)
        except DuplicateBindingError:
            logger.log_user_action("add_login", user.id, result="rejected",
                                   extra={"login_provider": login_provider})
            return IdentityResult.failed(self.messages.login_already_associated)

        logger.log_user_action("add_login", user.id, extra={"login_provider": login_provider})
        return IdentityResult.success()

    async def remove_login(self, user: IdentityUser, login_provider: str, provider_key: str) -> IdentityResult:
        await self.store.remove_login(user, login_provider, provider_key)
        logger.log_user_action("remove_login", user.id, extra={"login_provider": login_provider})
        return IdentityResult.success()

    async def get_logins(self, user: IdentityUser) -> List[UserLoginInfo]:
        return await self.store.get_logins(user)
