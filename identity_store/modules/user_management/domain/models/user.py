# 📄 File: identity_store/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user account" is for the identity store: its id, username, email,
# whether the email was confirmed, and which outside login providers it is linked to.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for the user entity and its external login bindings, with the
# helpers the store uses to keep binding lists and the login index consistent.
# 🔗 Dependencies:
# pydantic, typing
# 🔄 Connected Modules / Calls From:
# user_store.py, user_validator.py, user_service.py, user_repository.py

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def login_index_key(login_provider: str, provider_key: str) -> str:
    """
    Build the login index key for a (provider, key) pair.

    The provider length prefix keeps the key unambiguous whatever
    characters the provider or key contain.
    """
    return f"{len(login_provider)}:{login_provider}:{provider_key}"


class UserLoginInfo(BaseModel):
    """An external login binding: provider name plus the provider's key for the user."""

    model_config = ConfigDict(frozen=True)

    login_provider: str
    provider_key: str

    @property
    def index_key(self) -> str:
        return login_index_key(self.login_provider, self.provider_key)


class IdentityUser(BaseModel):
    """
    User account entity.

    ``id`` stays empty until the store assigns one (or the caller sets
    it before the first create); after that it never changes. The
    store keys documents by it and compares it to tell an update of
    the same user apart from a duplicate.

    ``password_hash`` and ``security_stamp`` are carried opaquely for
    the authentication layer that consumes validated users.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = ""
    user_name: Optional[str] = None
    email: Optional[str] = None
    email_confirmed: bool = False
    logins: List[UserLoginInfo] = Field(default_factory=list)
    password_hash: Optional[str] = None
    security_stamp: Optional[str] = None

    def has_login(self, login_provider: str, provider_key: str) -> bool:
        return any(
            login.login_provider == login_provider and login.provider_key == provider_key
            for login in self.logins
        )

    def add_login(self, login: UserLoginInfo) -> None:
        """Append a binding unless the user already holds it."""
        if not self.has_login(login.login_provider, login.provider_key):
            self.logins = [*self.logins, login]

    def remove_login(self, login_provider: str, provider_key: str) -> bool:
        """
        Drop a binding from this user.

        Returns:
            True if the binding was present
        """
        remaining = [
            login for login in self.logins
            if not (login.login_provider == login_provider and login.provider_key == provider_key)
        ]
        removed = len(remaining) != len(self.logins)
        self.logins = remaining
        return removed

    def set_email(self, email: Optional[str]) -> None:
        """Change the email; a new address is unconfirmed until confirmed again."""
        if email != self.email:
            self.email = email
            self.email_confirmed = False

    def confirm_email(self) -> None:
        self.email_confirmed = True
