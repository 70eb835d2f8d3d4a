# 📄 File: identity_store/modules/user_management/infrastructure/database/user_store.py
# 🧭 Purpose (Layman Explanation):
# Saves user accounts into the underlying record storage and finds them again by id, name,
# email or linked outside login, keeping a side list of logins so each one points to one user.
#
# 🧪 Purpose (Technical Summary):
# Concrete UserRepository mapping IdentityUser entities onto a user DocumentRepository, plus a
# login index DocumentRepository keyed by (provider, key) whose unique id enforces that a
# binding belongs to one user. Multi-document writes compensate on failure.
#
# 🔗 Dependencies:
# - domain.repositories (UserRepository, DocumentRepository interfaces)
# - domain.models.user (IdentityUser, UserLoginInfo)
# - shared.core.exceptions, shared.utils.validators
#
# 🔄 Connected Modules / Calls From:
# - UserManager (commits), SmartUserValidator (lookups)
# - infrastructure.factory (wiring from settings)

"""
User Store Implementation

Document layout of the user collection:
    id, user_name, email, normalized_email, email_confirmed,
    logins: [{login_provider, provider_key}], password_hash, security_stamp

Document layout of the login index collection:
    id (login_index_key), login_provider, provider_key, user_id

Policies:
- update() and delete() of an unknown id raise NotFoundError
- find_by_email() compares the trimmed, lower-cased address
- find_by_name() is an exact match
"""

import logging
from typing import Iterable, List, Optional
from uuid import uuid4

from identity_store.modules.user_management.domain.models.user import (
    IdentityUser,
    UserLoginInfo,
    login_index_key,
)
from identity_store.modules.user_management.domain.repositories.document_repository import (
    Document,
    DocumentRepository,
)
from identity_store.modules.user_management.domain.repositories.user_repository import UserRepository
from identity_store.shared.core.exceptions import (
    DuplicateBindingError,
    DuplicateKeyError,
    IdentityStoreException,
    InvalidArgumentError,
    NotFoundError,
)
from identity_store.shared.utils.validators import normalize_email

logger = logging.getLogger(__name__)


class UserStore(UserRepository):
    """
    Document-backed implementation of the UserRepository interface.

    Holds no mutable state of its own; every call goes to the two
    injected repositories, so one instance can serve concurrent tasks.
    """

    def __init__(self, users: DocumentRepository, logins: DocumentRepository):
        """
        Initialize the user store.

        Args:
            users: Repository of user documents
            logins: Repository used as the login binding index
        """
        self._users = users
        self._logins = logins

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def create(self, user: IdentityUser) -> IdentityUser:
        self._require_user(user)
        if not user.id:
            user.id = str(uuid4())

        await self._users.insert(self._domain_to_document(user))
        try:
            await self._bind_logins(user.id, user.logins)
        except IdentityStoreException:
            await self._users.remove(user.id)
            raise

        logger.info(f"Created user with ID: {user.id}")
        return user

    async def update(self, user: IdentityUser) -> IdentityUser:
        self._require_user(user)
        stored = await self._get_document(user.id)
        if stored is None:
            logger.debug(f"User not found for update: {user.id}")
            raise NotFoundError(f"User not found: {user.id}", resource_type="user", resource_id=user.id)

        stored_keys = {
            login_index_key(login["login_provider"], login["provider_key"])
            for login in stored.get("logins", [])
        }
        wanted = {login.index_key: login for login in user.logins}

        added = [login for key, login in wanted.items() if key not in stored_keys]
        dropped = [key for key in stored_keys if key not in wanted]

        inserted = await self._bind_logins(user.id, added)
        try:
            await self._users.update(self._domain_to_document(user))
        except IdentityStoreException:
            await self._unbind_logins(inserted)
            raise
        await self._unbind_logins(dropped)

        logger.info(f"Updated user: {user.id}")
        return user

    async def delete(self, user: IdentityUser) -> None:
        self._require_user(user)
        stored = await self._get_document(user.id)
        if stored is None:
            logger.debug(f"User not found for deletion: {user.id}")
            raise NotFoundError(f"User not found: {user.id}", resource_type="user", resource_id=user.id)

        # document first: a failed removal must leave the bindings in place
        if not await self._users.remove(user.id):
            raise NotFoundError(f"User not found: {user.id}", resource_type="user", resource_id=user.id)
        await self._unbind_logins(
            login_index_key(login["login_provider"], login["provider_key"])
            for login in stored.get("logins", [])
        )

        logger.info(f"Deleted user: {user.id}")

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    async def find_by_id(self, user_id: str) -> Optional[IdentityUser]:
        document = await self._get_document(user_id)
        if document is None:
            logger.debug(f"User not found: {user_id}")
            return None
        return self._document_to_domain(document)

    async def find_by_name(self, user_name: str) -> Optional[IdentityUser]:
        if user_name is None:
            return None
        documents = await self._users.find_by_field("user_name", user_name)
        return self._first(documents)

    async def find_by_email(self, email: str) -> Optional[IdentityUser]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        documents = await self._users.find_by_field("normalized_email", normalized)
        return self._first(documents)

    async def find_by_login(self, login_provider: str, provider_key: str) -> Optional[IdentityUser]:
        entry = await self._logins.get(login_index_key(login_provider, provider_key))
        if entry is None:
            logger.debug(f"No user bound to login: {login_provider}/{provider_key}")
            return None

        user = await self.find_by_id(entry["user_id"])
        if user is None:
            logger.warning(f"Login {login_provider}/{provider_key} points to missing user {entry['user_id']}")
        return user

    # =========================================================================
    # LOGIN BINDINGS
    # =========================================================================

    async def add_login(self, user: IdentityUser, login_provider: str, provider_key: str) -> IdentityUser:
        self._require_user(user)
        stored = await self._require_stored(user.id)
        login = UserLoginInfo(login_provider=login_provider, provider_key=provider_key)

        inserted = await self._bind_logins(stored.id, [login])
        stored.add_login(login)
        try:
            await self._users.update(self._domain_to_document(stored))
        except IdentityStoreException:
            await self._unbind_logins(inserted)
            raise

        user.add_login(login)
        logger.info(f"Added login {login_provider} to user: {user.id}")
        return user

    async def remove_login(self, user: IdentityUser, login_provider: str, provider_key: str) -> IdentityUser:
        self._require_user(user)
        stored = await self._require_stored(user.id)

        if stored.remove_login(login_provider, provider_key):
            await self._users.update(self._domain_to_document(stored))
            key = login_index_key(login_provider, provider_key)
            entry = await self._logins.get(key)
            if entry is not None and entry["user_id"] == stored.id:
                await self._logins.remove(key)
            logger.info(f"Removed login {login_provider} from user: {user.id}")

        user.remove_login(login_provider, provider_key)
        return user

    async def get_logins(self, user: IdentityUser) -> List[UserLoginInfo]:
        self._require_user(user)
        stored = await self._require_stored(user.id)
        return list(stored.logins)

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _bind_logins(self, user_id: str, logins: Iterable[UserLoginInfo]) -> List[str]:
        """
        Insert login index entries, all or nothing.

        Returns:
            Index keys inserted

        Raises:
            DuplicateBindingError: If any pair is already bound; entries
                inserted by this call are removed first
        """
        inserted: List[str] = []
        for login in {login.index_key: login for login in logins}.values():
            try:
                await self._logins.insert({
                    "id": login.index_key,
                    "login_provider": login.login_provider,
                    "provider_key": login.provider_key,
                    "user_id": user_id,
                })
            except DuplicateKeyError as e:
                await self._unbind_logins(inserted)
                logger.warning(f"Login {login.login_provider}/{login.provider_key} already bound")
                raise DuplicateBindingError(login.login_provider, login.provider_key, user_id=user_id) from e
            inserted.append(login.index_key)
        return inserted

    async def _unbind_logins(self, keys: Iterable[str]) -> None:
        for key in keys:
            await self._logins.remove(key)

    async def _get_document(self, user_id: Optional[str]) -> Optional[Document]:
        if not user_id:
            return None
        return await self._users.get(user_id)

    async def _require_stored(self, user_id: str) -> IdentityUser:
        stored = await self.find_by_id(user_id)
        if stored is None:
            raise NotFoundError(f"User not found: {user_id}", resource_type="user", resource_id=user_id)
        return stored

    @staticmethod
    def _require_user(user: IdentityUser) -> None:
        if user is None:
            raise InvalidArgumentError("User is required", argument="user")

    def _first(self, documents: List[Document]) -> Optional[IdentityUser]:
        if not documents:
            return None
        return self._document_to_domain(documents[0])

    @staticmethod
    def _domain_to_document(user: IdentityUser) -> Document:
        """
        Convert a domain IdentityUser to a user document.

        Args:
            user: Domain entity

        Returns:
            JSON-serializable document
        """
        return {
            "id": user.id,
            "user_name": user.user_name,
            "email": user.email,
            "normalized_email": normalize_email(user.email),
            "email_confirmed": user.email_confirmed,
            "logins": [login.model_dump() for login in user.logins],
            "password_hash": user.password_hash,
            "security_stamp": user.security_stamp,
        }

    @staticmethod
    def _document_to_domain(document: Document) -> IdentityUser:
        """
        Convert a user document to a domain IdentityUser.

        Args:
            document: Stored document

        Returns:
            Domain entity
        """
        return IdentityUser(
            id=document["id"],
            user_name=document.get("user_name"),
            email=document.get("email"),
            email_confirmed=document.get("email_confirmed", False),
            logins=[UserLoginInfo(**login) for login in document.get("logins", [])],
            password_hash=document.get("password_hash"),
            security_stamp=document.get("security_stamp"),
        )
