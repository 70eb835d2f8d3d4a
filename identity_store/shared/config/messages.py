# 📄 File: identity_store/shared/config/messages.py
# 🧭 Purpose (Layman Explanation):
# Holds the wording of every error a user can see when their username or email is rejected,
# so a deployment can change the text without touching the checking code.
# 🧪 Purpose (Technical Summary):
# Pydantic model of user-overridable validation message templates; invalid/duplicate templates
# take one positional substitution ({0}) with the offending value.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# shared.config.settings, SmartUserValidator

from pydantic import BaseModel, ConfigDict, Field


class Messages(BaseModel):
    """
    Error message templates used by the user validator.

    Each field can be set either by its snake_case name or by its
    alias (``UserNameTooShort``, ``InvalidUserName`` ...), which keeps
    configuration files written for other identity stacks usable as-is.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_name_too_short: str = Field(
        default="Name cannot be null or empty.",
        alias="UserNameTooShort",
    )
    invalid_user_name: str = Field(
        default="User name {0} is invalid, can only contain letters or digits.",
        alias="InvalidUserName",
    )
    duplicate_name: str = Field(
        default="Name {0} is already taken.",
        alias="DuplicateName",
    )
    email_too_short: str = Field(
        default="Email cannot be null or empty.",
        alias="EmailTooShort",
    )
    invalid_email: str = Field(
        default="Email '{0}' is invalid.",
        alias="InvalidEmail",
    )
    duplicate_email: str = Field(
        default="Email '{0}' is already taken.",
        alias="DuplicateEmail",
    )
    login_already_associated: str = Field(
        default="A user with that external login already exists.",
        alias="LoginAlreadyAssociated",
    )
