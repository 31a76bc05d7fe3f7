"""Integration tests for the SQLAlchemy profile repository."""

import pytest

from domain.entities.profile import ProfileFields
from domain.entities.user import NewUser
from infrastructure.database.dialects import SqliteBackend


async def create_user(backend: SqliteBackend, discord_user_id: int = 1001) -> int:
    async with backend.unit_of_work() as uow:
        user = await uow.users.create(NewUser(discord_user_id=discord_user_id))
        await uow.commit()
    return user.id


async def insert(backend: SqliteBackend, user_id: int, **values) -> int:
    async with backend.unit_of_work(serializable=True) as uow:
        profile = await uow.profiles.insert_version(user_id, ProfileFields(**values))
        await uow.commit()
    return profile.id


async def active_ids(backend: SqliteBackend, user_id: int) -> list[int]:
    async with backend.unit_of_work() as uow:
        history = await uow.profiles.list_history(user_id)
    return [profile.id for profile in history if profile.is_active]


# --- insert_version ---


class TestInsertVersion:
    @pytest.mark.asyncio
    async def test_first_version_is_active(self, backend: SqliteBackend):
        user_id = await create_user(backend)

        async with backend.unit_of_work(serializable=True) as uow:
            profile = await uow.profiles.insert_version(user_id, ProfileFields(nature="Jolly"))
            await uow.commit()

        assert profile.is_active
        assert profile.user_id == user_id
        assert profile.fields.nature == "Jolly"
        assert profile.created_at is not None

    @pytest.mark.asyncio
    async def test_new_version_deactivates_previous(self, backend: SqliteBackend):
        user_id = await create_user(backend)
        first = await insert(backend, user_id, nature="Jolly")
        second = await insert(backend, user_id, nature="Bold")

        assert await active_ids(backend, user_id) == [second]

        async with backend.unit_of_work() as uow:
            old = await uow.profiles.get(first)
            active = await uow.profiles.get_active(user_id)

        assert old is not None and not old.is_active
        assert old.fields.nature == "Jolly"
        assert active is not None and active.fields.nature == "Bold"

    @pytest.mark.asyncio
    async def test_other_users_untouched(self, backend: SqliteBackend):
        alice = await create_user(backend, 1)
        bob = await create_user(backend, 2)
        bob_profile = await insert(backend, bob, nature="Calm")

        await insert(backend, alice, nature="Jolly")

        assert await active_ids(backend, bob) == [bob_profile]

    @pytest.mark.asyncio
    async def test_rolled_back_insert_leaves_previous_active(self, backend: SqliteBackend):
        user_id = await create_user(backend)
        first = await insert(backend, user_id, nature="Jolly")

        async with backend.unit_of_work(serializable=True) as uow:
            await uow.profiles.insert_version(user_id, ProfileFields(nature="Bold"))
            await uow.rollback()

        assert await active_ids(backend, user_id) == [first]


# --- lookups ---


class TestLookups:
    @pytest.mark.asyncio
    async def test_get_active_by_discord_id(self, backend: SqliteBackend):
        user_id = await create_user(backend, 555)
        profile_id = await insert(backend, user_id, likes="Berries")

        async with backend.unit_of_work() as uow:
            profile = await uow.profiles.get_active_by_discord_id(555)
            missing = await uow.profiles.get_active_by_discord_id(556)

        assert profile is not None and profile.id == profile_id
        assert missing is None

    @pytest.mark.asyncio
    async def test_history_is_newest_first(self, backend: SqliteBackend):
        user_id = await create_user(backend, 555)
        ids = [await insert(backend, user_id, nature=str(i)) for i in range(3)]

        async with backend.unit_of_work() as uow:
            by_user = await uow.profiles.list_history(user_id)
            by_discord = await uow.profiles.list_history_by_discord_id(555)

        assert [p.id for p in by_user] == list(reversed(ids))
        assert [p.id for p in by_discord] == list(reversed(ids))

    @pytest.mark.asyncio
    async def test_no_history(self, backend: SqliteBackend):
        async with backend.unit_of_work() as uow:
            assert await uow.profiles.list_history_by_discord_id(404) == []
            assert await uow.profiles.get(404) is None


# --- promote ---


class TestPromote:
    @pytest.mark.asyncio
    async def test_restores_older_version(self, backend: SqliteBackend):
        user_id = await create_user(backend)
        first = await insert(backend, user_id, nature="Jolly")
        await insert(backend, user_id, nature="Bold")

        async with backend.unit_of_work(serializable=True) as uow:
            assert await uow.profiles.promote(user_id, first) is True
            await uow.commit()

        assert await active_ids(backend, user_id) == [first]

    @pytest.mark.asyncio
    async def test_promoting_active_version_is_a_no_op(self, backend: SqliteBackend):
        user_id = await create_user(backend)
        only = await insert(backend, user_id, nature="Jolly")

        async with backend.unit_of_work(serializable=True) as uow:
            assert await uow.profiles.promote(user_id, only) is True
            await uow.commit()

        assert await active_ids(backend, user_id) == [only]

    @pytest.mark.asyncio
    async def test_foreign_version_is_rejected(self, backend: SqliteBackend):
        alice = await create_user(backend, 1)
        bob = await create_user(backend, 2)
        alice_profile = await insert(backend, alice, nature="Jolly")
        bob_profile = await insert(backend, bob, nature="Calm")

        async with backend.unit_of_work(serializable=True) as uow:
            assert await uow.profiles.promote(alice, bob_profile) is False
            await uow.rollback()

        assert await active_ids(backend, alice) == [alice_profile]
        assert await active_ids(backend, bob) == [bob_profile]

    @pytest.mark.asyncio
    async def test_missing_version_is_rejected(self, backend: SqliteBackend):
        user_id = await create_user(backend)
        only = await insert(backend, user_id, nature="Jolly")

        async with backend.unit_of_work(serializable=True) as uow:
            assert await uow.profiles.promote(user_id, 9999) is False

        assert await active_ids(backend, user_id) == [only]
