"""Unit tests for StaffService."""

import pytest

from domain.services.staff_service import StaffService
from tests.unit.conftest import FakeUnitOfWork


@pytest.fixture
def service(uow_factory) -> StaffService:
    return StaffService(uow_factory)


class TestIsStaff:
    @pytest.mark.asyncio
    async def test_any_matching_role(self, service: StaffService, uow: FakeUnitOfWork):
        uow.staff_roles.contains_any.return_value = True

        assert await service.is_staff(iter([10, 20])) is True
        uow.staff_roles.contains_any.assert_awaited_once_with([10, 20])

    @pytest.mark.asyncio
    async def test_no_roles_skips_lookup(self, service: StaffService, uow: FakeUnitOfWork):
        assert await service.is_staff([]) is False
        uow.staff_roles.contains_any.assert_not_called()


class TestListRoles:
    @pytest.mark.asyncio
    async def test_lists(self, service: StaffService, uow: FakeUnitOfWork):
        uow.staff_roles.list_all.return_value = [10, 20]

        assert await service.list_roles() == [10, 20]


class TestAddRole:
    @pytest.mark.asyncio
    async def test_added(self, service: StaffService, uow: FakeUnitOfWork):
        uow.staff_roles.add.return_value = True

        assert await service.add_role(10) is True
        assert uow.committed

    @pytest.mark.asyncio
    async def test_already_staff(self, service: StaffService, uow: FakeUnitOfWork):
        uow.staff_roles.add.return_value = False

        assert await service.add_role(10) is False


class TestRemoveRole:
    @pytest.mark.asyncio
    async def test_removed(self, service: StaffService, uow: FakeUnitOfWork):
        uow.staff_roles.remove.return_value = True

        assert await service.remove_role(10) is True
        uow.staff_roles.remove.assert_awaited_once_with(10)
        assert uow.committed

    @pytest.mark.asyncio
    async def test_not_staff(self, service: StaffService, uow: FakeUnitOfWork):
        uow.staff_roles.remove.return_value = False

        assert await service.remove_role(10) is False
