"""Unit tests for command permission checks."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from bot.checks import require_member, require_self_or_staff, require_staff
from core.exceptions import MemberRequiredError, StaffOnlyError


def make_member(user_id: int = 1, role_ids: tuple[int, ...] = ()) -> MagicMock:
    member = MagicMock(spec=discord.Member)
    member.id = user_id
    member.roles = [SimpleNamespace(id=role_id) for role_id in role_ids]
    return member


def make_interaction(user) -> SimpleNamespace:
    return SimpleNamespace(user=user, command=SimpleNamespace(qualified_name="profile restore"))


@pytest.fixture
def staff_service() -> AsyncMock:
    return AsyncMock()


class TestRequireMember:
    def test_member(self):
        member = make_member()

        assert require_member(make_interaction(member)) is member

    def test_direct_message(self):
        with pytest.raises(MemberRequiredError):
            require_member(make_interaction(SimpleNamespace(id=1)))


class TestRequireStaff:
    @pytest.mark.asyncio
    async def test_staff_passes(self, staff_service: AsyncMock):
        staff_service.is_staff.return_value = True

        await require_staff(make_interaction(make_member(role_ids=(10, 20))), staff_service)

        assert list(staff_service.is_staff.await_args.args[0]) == [10, 20]

    @pytest.mark.asyncio
    async def test_non_staff_rejected(self, staff_service: AsyncMock):
        staff_service.is_staff.return_value = False

        with pytest.raises(StaffOnlyError) as exc_info:
            await require_staff(make_interaction(make_member()), staff_service)

        assert exc_info.value.command_name == "profile restore"

    @pytest.mark.asyncio
    async def test_outside_guild_is_never_staff(self, staff_service: AsyncMock):
        with pytest.raises(StaffOnlyError):
            await require_staff(make_interaction(SimpleNamespace(id=1)), staff_service)

        staff_service.is_staff.assert_not_called()


class TestRequireSelfOrStaff:
    @pytest.mark.asyncio
    async def test_self_needs_no_role(self, staff_service: AsyncMock):
        member = make_member(user_id=1)

        await require_self_or_staff(make_interaction(member), staff_service, member)

        staff_service.is_staff.assert_not_called()

    @pytest.mark.asyncio
    async def test_other_member_needs_staff(self, staff_service: AsyncMock):
        staff_service.is_staff.return_value = False

        with pytest.raises(StaffOnlyError):
            await require_self_or_staff(make_interaction(make_member(user_id=1)), staff_service, make_member(user_id=2))
