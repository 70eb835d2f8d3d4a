# 📄 File: identity_store/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save, find, update, and delete user accounts and their
# outside logins without saying which database is used.
# 🧪 Purpose (Technical Summary):
# Repository interface for IdentityUser lifecycle and lookups, consumed by the validator
# (duplicate detection) and the user manager (commits).
# 🔗 Dependencies:
# Domain models (IdentityUser, UserLoginInfo), typing, abc
# 🔄 Connected Modules / Calls From:
# SmartUserValidator, UserManager, UserStore (infrastructure implementation)

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.user import IdentityUser, UserLoginInfo


class UserRepository(ABC):
    """
    Repository interface for IdentityUser data access operations.

    Implementation Notes:
    - All operations are async for non-blocking I/O
    - Methods return domain entities, never raw documents
    - Lookups return None for "no such user"; store failures raise
    """

    @abstractmethod
    async def create(self, user: IdentityUser) -> IdentityUser:
        """
        Create a new user, assigning a fresh id when ``user.id`` is empty.

        Args:
            user: User entity to create

        Returns:
            The user, with its id populated

        Raises:
            DuplicateKeyError: If the id (or a unique field) already exists
            DuplicateBindingError: If one of the user's logins is bound elsewhere
        """

    @abstractmethod
    async def update(self, user: IdentityUser) -> IdentityUser:
        """
        Overwrite the mutable fields of an existing user.

        Raises:
            NotFoundError: If no user has this id
            DuplicateBindingError: If a newly added login is bound elsewhere
        """

    @abstractmethod
    async def delete(self, user: IdentityUser) -> None:
        """
        Delete a user and its login index entries.

        Raises:
            NotFoundError: If no user has this id
        """

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[IdentityUser]:
        """Get user by ID, None if absent."""

    @abstractmethod
    async def find_by_name(self, user_name: str) -> Optional[IdentityUser]:
        """Get user by exact user name, None if absent."""

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[IdentityUser]:
        """Get user by email address (case-insensitive), None if absent."""

    @abstractmethod
    async def find_by_login(self, login_provider: str, provider_key: str) -> Optional[IdentityUser]:
        """Get the user bound to an external login, None if unbound."""

    @abstractmethod
    async def add_login(self, user: IdentityUser, login_provider: str, provider_key: str) -> IdentityUser:
        """
        Bind an external login to a user and persist it.

        Raises:
            NotFoundError: If the user does not exist
            DuplicateBindingError: If the pair is already bound to any user
        """

    @abstractmethod
    async def remove_login(self, user: IdentityUser, login_provider: str, provider_key: str) -> IdentityUser:
        """Unbind an external login from a user; no-op if the user does not hold it."""

    @abstractmethod
    async def get_logins(self, user: IdentityUser) -> List[UserLoginInfo]:
        """List the stored login bindings of a user."""
