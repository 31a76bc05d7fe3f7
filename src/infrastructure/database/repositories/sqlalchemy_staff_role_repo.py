"""SQLAlchemy implementation of StaffRole repository."""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import StaffRoleModel


class SQLAlchemyStaffRoleRepository:
    """SQLAlchemy implementation of IStaffRoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def is_staff_role(self, discord_role_id: int) -> bool:
        """Check whether a single role is a staff role."""
        stmt = select(StaffRoleModel.id).where(StaffRoleModel.discord_role_id == discord_role_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[int]:
        """Get all staff role IDs."""
        stmt = select(StaffRoleModel.discord_role_id).order_by(StaffRoleModel.id)
        result = await self._session.execute(stmt)
        return list(result.scalars())

    async def contains_any(self, discord_role_ids: list[int]) -> bool:
        """Check whether any of the given roles is a staff role."""
        if not discord_role_ids:
            return False
        stmt = (
            select(StaffRoleModel.id)
            .where(StaffRoleModel.discord_role_id.in_(discord_role_ids))
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def add(self, discord_role_id: int) -> bool:
        """Mark a role as staff."""
        # Check if already marked
        if await self.is_staff_role(discord_role_id):
            return False

        self._session.add(StaffRoleModel(discord_role_id=discord_role_id))
        await self._session.flush()
        return True

    async def remove(self, discord_role_id: int) -> bool:
        """Unmark a staff role."""
        stmt = delete(StaffRoleModel).where(StaffRoleModel.discord_role_id == discord_role_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return result.rowcount > 0
