"""Staff role repository protocol."""

from typing import Protocol


class IStaffRoleRepository(Protocol):
    """Repository interface for Discord roles that grant staff access."""

    async def is_staff_role(self, discord_role_id: int) -> bool:
        """Check whether a single role is a staff role."""
        ...

    async def list_all(self) -> list[int]:
        """Get all staff role IDs."""
        ...

    async def contains_any(self, discord_role_ids: list[int]) -> bool:
        """Check whether any of the given roles is a staff role."""
        ...

    async def add(self, discord_role_id: int) -> bool:
        """Mark a role as staff. Returns False if it already was."""
        ...

    async def remove(self, discord_role_id: int) -> bool:
        """Unmark a staff role. Returns False if it was not one."""
        ...
