"""UserStore tests over in-memory repositories.

Invariants:
    - Ids are assigned once (UUID4 when missing) and never change
    - update/delete of an unknown id raise NotFoundError
    - A (provider, key) login belongs to at most one user; deleting a user frees its logins
    - Failed multi-document writes leave no partial state behind
"""

import asyncio
import uuid

import pytest

from identity_store.modules.user_management.domain.models.user import IdentityUser, UserLoginInfo
from identity_store.modules.user_management.infrastructure.database.memory_repository import (
    InMemoryDocumentRepository,
)
from identity_store.modules.user_management.infrastructure.database.user_store import UserStore
from identity_store.shared.core.exceptions import (
    DuplicateBindingError,
    DuplicateKeyError,
    InvalidArgumentError,
    NotFoundError,
    StoreUnavailableError,
)


def _user(n: int, **kwargs) -> IdentityUser:
    return IdentityUser(user_name=f"test-user-{n}", email=f"test.user.{n}@test.com", **kwargs)


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_then_find_by_email(self, store):
        user = _user(1)
        await store.create(user)

        saved = await store.find_by_email(user.email)

        assert saved is not None
        assert saved.email == user.email
        assert saved.user_name == user.user_name

    @pytest.mark.asyncio
    async def test_missing_id_defaults_to_new_uuid(self, store):
        first = await store.create(_user(2))
        second = await store.create(_user(3))

        saved = await store.find_by_id(first.id)

        assert saved is not None
        assert uuid.UUID(saved.id).version == 4
        assert first.id != second.id

    @pytest.mark.asyncio
    async def test_custom_id_persists(self, store):
        await store.create(_user(4, id="test-user-id-4"))

        saved = await store.find_by_id("test-user-id-4")

        assert saved.id == "test-user-id-4"

    @pytest.mark.asyncio
    async def test_existing_id_is_duplicate_key(self, store):
        await store.create(_user(5, id="same"))

        with pytest.raises(DuplicateKeyError):
            await store.create(_user(6, id="same"))

    @pytest.mark.asyncio
    async def test_duplicate_user_name_rejected_by_backing_store(self, store):
        await store.create(IdentityUser(user_name="taken", email="a@test.com"))

        with pytest.raises(DuplicateKeyError) as exc_info:
            await store.create(IdentityUser(user_name="taken", email="b@test.com"))

        assert exc_info.value.details["field"] == "user_name"

    @pytest.mark.asyncio
    async def test_concurrent_creates_with_same_name_admit_one(self, store):
        results = await asyncio.gather(
            store.create(IdentityUser(user_name="racer", email="r1@test.com")),
            store.create(IdentityUser(user_name="racer", email="r2@test.com")),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], DuplicateKeyError)

    @pytest.mark.asyncio
    async def test_create_with_taken_login_leaves_nothing_behind(self, store):
        owner = await store.create(_user(7))
        await store.add_login(owner, "github", "42")
        intruder = _user(8, id="intruder", logins=[
            UserLoginInfo(login_provider="google", provider_key="g-1"),
            UserLoginInfo(login_provider="github", provider_key="42"),
        ])

        with pytest.raises(DuplicateBindingError):
            await store.create(intruder)

        assert await store.find_by_id("intruder") is None
        assert await store.find_by_login("google", "g-1") is None

    @pytest.mark.asyncio
    async def test_create_with_initial_logins_indexes_them(self, store):
        user = await store.create(_user(9, logins=[UserLoginInfo(login_provider="apple", provider_key="a-9")]))

        found = await store.find_by_login("apple", "a-9")

        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_none_user_is_invalid_argument(self, store):
        with pytest.raises(InvalidArgumentError):
            await store.create(None)


class TestUpdate:

    @pytest.mark.asyncio
    async def test_updates_are_applied_to_user(self, store):
        await store.create(_user(10))
        saved = await store.find_by_email("test.user.10@test.com")

        saved.email_confirmed = True
        await store.update(saved)
        saved = await store.find_by_email("test.user.10@test.com")

        assert saved.email_confirmed is True

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.update(_user(11, id="ghost"))

    @pytest.mark.asyncio
    async def test_update_without_id_is_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.update(_user(12))

    @pytest.mark.asyncio
    async def test_changed_email_moves_lookup(self, store):
        user = await store.create(_user(13))

        user.email = "renamed@test.com"
        await store.update(user)

        assert await store.find_by_email("test.user.13@test.com") is None
        assert (await store.find_by_email("RENAMED@test.com")).id == user.id
        assert (await store.find_by_id(user.id)).email == "renamed@test.com"

    @pytest.mark.asyncio
    async def test_update_with_login_of_other_user_writes_nothing(self, store):
        owner = await store.create(_user(14))
        await store.add_login(owner, "github", "owned")
        other = await store.create(_user(15))

        other.user_name = "changed"
        other.logins = [UserLoginInfo(login_provider="github", provider_key="owned")]
        with pytest.raises(DuplicateBindingError):
            await store.update(other)

        stored = await store.find_by_id(other.id)
        assert stored.user_name == "test-user-15"
        assert stored.logins == []
        assert (await store.find_by_login("github", "owned")).id == owner.id

    @pytest.mark.asyncio
    async def test_update_dropping_login_frees_binding(self, store):
        user = await store.create(_user(16))
        await store.add_login(user, "google", "g-16")

        user.logins = []
        await store.update(user)

        assert await store.find_by_login("google", "g-16") is None
        other = await store.create(_user(17))
        await store.add_login(other, "google", "g-16")
        assert (await store.find_by_login("google", "g-16")).id == other.id

    @pytest.mark.asyncio
    async def test_found_users_are_copies(self, store):
        user = await store.create(_user(18))

        found = await store.find_by_id(user.id)
        found.user_name = "mutated"

        assert (await store.find_by_id(user.id)).user_name == "test-user-18"


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_user_and_logins(self, store):
        user = await store.create(_user(19))
        await store.add_login(user, "github", "gh-19")

        await store.delete(user)

        assert await store.find_by_id(user.id) is None
        assert await store.find_by_login("github", "gh-19") is None
        other = await store.create(_user(20))
        await store.add_login(other, "github", "gh-19")

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.delete(_user(21, id="ghost"))

    @pytest.mark.asyncio
    async def test_failed_document_removal_keeps_bindings(self, settings):
        class FailingRemove(InMemoryDocumentRepository):
            async def remove(self, document_id):
                raise StoreUnavailableError("disk gone", operation="remove", collection=self.collection)

        store = UserStore(FailingRemove(settings.USER_COLLECTION), InMemoryDocumentRepository(settings.LOGIN_COLLECTION))
        user = await store.create(_user(32))
        await store.add_login(user, "github", "gh-32")

        with pytest.raises(StoreUnavailableError):
            await store.delete(user)

        assert (await store.find_by_login("github", "gh-32")).id == user.id


class TestLogins:

    @pytest.mark.asyncio
    async def test_can_find_user_by_login_info(self, store):
        await store.create(_user(22))
        user = await store.find_by_email("test.user.22@test.com")

        await store.add_login(user, "ATestLoginProvider", "ATestKey292929")
        by_login = await store.find_by_login("ATestLoginProvider", "ATestKey292929")

        assert by_login is not None
        assert by_login.id == user.id
        assert user.has_login("ATestLoginProvider", "ATestKey292929")

    @pytest.mark.asyncio
    async def test_same_login_for_another_user_is_duplicate_binding(self, store):
        first = await store.create(_user(23))
        second = await store.create(_user(24))
        await store.add_login(first, "p", "k")

        with pytest.raises(DuplicateBindingError) as exc_info:
            await store.add_login(second, "p", "k")

        assert isinstance(exc_info.value, DuplicateKeyError)
        assert exc_info.value.details["login_provider"] == "p"
        assert await store.get_logins(second) == []

    @pytest.mark.asyncio
    async def test_same_login_twice_for_same_user_is_duplicate_binding(self, store):
        user = await store.create(_user(25))
        await store.add_login(user, "p", "k")

        with pytest.raises(DuplicateBindingError):
            await store.add_login(user, "p", "k")

    @pytest.mark.asyncio
    async def test_add_login_to_unknown_user_is_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.add_login(_user(26, id="ghost"), "p", "k")
        assert await store.find_by_login("p", "k") is None

    @pytest.mark.asyncio
    async def test_provider_and_key_do_not_collide_across_separator(self, store):
        first = await store.create(_user(27))
        second = await store.create(_user(28))

        await store.add_login(first, "a:b", "c")
        await store.add_login(second, "a", "b:c")

        assert (await store.find_by_login("a:b", "c")).id == first.id
        assert (await store.find_by_login("a", "b:c")).id == second.id

    @pytest.mark.asyncio
    async def test_remove_login(self, store):
        user = await store.create(_user(29))
        await store.add_login(user, "google", "g-29")
        await store.add_login(user, "github", "gh-29")

        await store.remove_login(user, "google", "g-29")

        assert await store.find_by_login("google", "g-29") is None
        assert await store.get_logins(user) == [UserLoginInfo(login_provider="github", provider_key="gh-29")]
        assert user.logins == [UserLoginInfo(login_provider="github", provider_key="gh-29")]

    @pytest.mark.asyncio
    async def test_remove_login_not_held_is_noop(self, store):
        owner = await store.create(_user(30))
        other = await store.create(_user(31))
        await store.add_login(owner, "google", "g-30")

        await store.remove_login(other, "google", "g-30")

        assert (await store.find_by_login("google", "g-30")).id == owner.id
