"""Staff role service layer."""

from collections.abc import Iterable

import structlog

from domain.repositories.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger()


class StaffService:
    """Service layer for the roles that grant staff access."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def is_staff(self, role_ids: Iterable[int]) -> bool:
        """Check whether any of a member's roles is a staff role."""
        role_ids = list(role_ids)
        if not role_ids:
            return False
        async with self._uow_factory() as uow:
            return await uow.staff_roles.contains_any(role_ids)

    async def list_roles(self) -> list[int]:
        async with self._uow_factory() as uow:
            return await uow.staff_roles.list_all()

    async def add_role(self, role_id: int) -> bool:
        """Mark a role as staff. Returns False if it already was."""
        async with self._uow_factory() as uow:
            added = await uow.staff_roles.add(role_id)
            await uow.commit()

        if added:
            logger.info("staff_role_added", role_id=role_id)
        return added

    async def remove_role(self, role_id: int) -> bool:
        """Unmark a staff role. Returns False if it was not one."""
        async with self._uow_factory() as uow:
            removed = await uow.staff_roles.remove(role_id)
            await uow.commit()

        if removed:
            logger.info("staff_role_removed", role_id=role_id)
        return removed
