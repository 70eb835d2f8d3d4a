"""UserManager tests: validation gates every commit and rule violations come back as results.
"""

import pytest

from identity_store.modules.user_management.domain.models.result import IdentityResult
from identity_store.modules.user_management.domain.models.user import IdentityUser, login_index_key
from identity_store.modules.user_management.domain.services.user_manager import UserManager
from identity_store.modules.user_management.infrastructure.database.memory_repository import (
    InMemoryDocumentRepository,
)
from identity_store.modules.user_management.infrastructure.database.user_store import UserStore
from identity_store.shared.config.messages import Messages
from identity_store.shared.core.exceptions import NotFoundError, ValidationFailedError

MESSAGES = Messages()


class TestCreateUser:

    @pytest.mark.asyncio
    async def test_valid_user_is_persisted(self, manager):
        user = IdentityUser(user_name="alice", email="alice@example.com")

        result = await manager.create_user(user)

        assert result.succeeded
        assert user.id
        assert (await manager.find_by_name("alice")).id == user.id

    @pytest.mark.asyncio
    async def test_invalid_user_is_not_persisted(self, manager):
        user = IdentityUser(user_name="bad name", email="nope")

        result = await manager.create_user(user)

        assert not result.succeeded
        assert result.errors == [
            MESSAGES.invalid_user_name.format("bad name"),
            MESSAGES.invalid_email.format("nope"),
        ]
        assert await manager.find_by_name("bad name") is None
        assert user.id == ""

    @pytest.mark.asyncio
    async def test_second_user_with_same_name_is_rejected(self, manager):
        await manager.create_user(IdentityUser(user_name="bob", email="bob@example.com"))

        result = await manager.create_user(IdentityUser(user_name="bob", email="bobby@example.com"))

        assert result.errors == [MESSAGES.duplicate_name.format("bob")]

    @pytest.mark.asyncio
    async def test_failed_result_can_be_raised(self, manager):
        result = await manager.create_user(IdentityUser(user_name="", email=""))

        with pytest.raises(ValidationFailedError) as exc_info:
            result.raise_for_errors()

        assert exc_info.value.errors == [MESSAGES.user_name_too_short, MESSAGES.email_too_short]
        assert exc_info.value.to_dict()["error"]["details"]["errors"] == exc_info.value.errors


class TestUpdateUser:

    @pytest.mark.asyncio
    async def test_unchanged_user_revalidates_cleanly(self, manager):
        user = IdentityUser(user_name="carol", email="carol@example.com")
        await manager.create_user(user)

        result = await manager.update_user(user)

        assert result.succeeded

    @pytest.mark.asyncio
    async def test_rename_to_taken_name_is_rejected(self, manager):
        await manager.create_user(IdentityUser(user_name="dave", email="dave@example.com"))
        erin = IdentityUser(user_name="erin", email="erin@example.com")
        await manager.create_user(erin)

        erin.user_name = "dave"
        result = await manager.update_user(erin)

        assert result.errors == [MESSAGES.duplicate_name.format("dave")]
        assert (await manager.find_by_id(erin.id)).user_name == "erin"

    @pytest.mark.asyncio
    async def test_update_unknown_user_raises_not_found(self, manager):
        with pytest.raises(NotFoundError):
            await manager.update_user(IdentityUser(id="ghost", user_name="ghost", email="ghost@example.com"))

    @pytest.mark.asyncio
    async def test_set_email_clears_confirmation(self, manager):
        user = IdentityUser(user_name="frank", email="frank@example.com")
        await manager.create_user(user)
        await manager.confirm_email(user)
        assert (await manager.find_by_id(user.id)).email_confirmed is True

        result = await manager.set_email(user, "frank@new.example.com")

        stored = await manager.find_by_email("frank@new.example.com")
        assert result.succeeded
        assert stored.id == user.id
        assert stored.email_confirmed is False

    @pytest.mark.asyncio
    async def test_set_email_to_taken_address_is_rejected(self, manager):
        await manager.create_user(IdentityUser(user_name="grace", email="grace@example.com"))
        heidi = IdentityUser(user_name="heidi", email="heidi@example.com")
        await manager.create_user(heidi)

        result = await manager.set_email(heidi, "Grace@Example.com")

        assert result.errors == [MESSAGES.duplicate_email.format("Grace@Example.com")]
        assert (await manager.find_by_id(heidi.id)).email == "heidi@example.com"


class TestLoginsAndDelete:

    @pytest.mark.asyncio
    async def test_add_login_taken_returns_failed_result(self, manager):
        ivan = IdentityUser(user_name="ivan", email="ivan@example.com")
        judy = IdentityUser(user_name="judy", email="judy@example.com")
        await manager.create_user(ivan)
        await manager.create_user(judy)

        first = await manager.add_login(ivan, "github", "123")
        second = await manager.add_login(judy, "github", "123")

        assert first.succeeded
        assert second.errors == [MESSAGES.login_already_associated]
        assert (await manager.find_by_login("github", "123")).id == ivan.id
        assert await manager.get_logins(judy) == []

    @pytest.mark.asyncio
    async def test_add_login_bound_to_vanished_user_returns_failed_result(self, settings):
        logins = InMemoryDocumentRepository(settings.LOGIN_COLLECTION)
        manager = UserManager(UserStore(InMemoryDocumentRepository(settings.USER_COLLECTION), logins), settings=settings)
        user = IdentityUser(user_name="nina", email="nina@example.com")
        await manager.create_user(user)
        await logins.insert({
            "id": login_index_key("github", "77"),
            "login_provider": "github",
            "provider_key": "77",
            "user_id": "deleted-user",
        })

        result = await manager.add_login(user, "github", "77")

        assert result.errors == [MESSAGES.login_already_associated]
        assert await manager.get_logins(user) == []

    @pytest.mark.asyncio
    async def test_remove_login(self, manager):
        user = IdentityUser(user_name="kim", email="kim@example.com")
        await manager.create_user(user)
        await manager.add_login(user, "google", "g")

        result = await manager.remove_login(user, "google", "g")

        assert result.succeeded
        assert await manager.find_by_login("google", "g") is None

    @pytest.mark.asyncio
    async def test_delete_user(self, manager):
        user = IdentityUser(user_name="leo", email="leo@example.com")
        await manager.create_user(user)

        result = await manager.delete_user(user)

        assert result.succeeded
        assert await manager.find_by_id(user.id) is None


@pytest.mark.asyncio
async def test_custom_validator_is_used(store, settings):
    class RejectAll:
        async def validate(self, user):
            return IdentityResult.failed("nope")

    manager = UserManager(store, validator=RejectAll(), settings=settings)

    result = await manager.create_user(IdentityUser(user_name="mallory", email="m@example.com"))

    assert result.errors == ["nope"]
    assert await store.find_by_name("mallory") is None
