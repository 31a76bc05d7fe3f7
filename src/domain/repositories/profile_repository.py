"""Profile repository protocol."""

from typing import Protocol

from domain.entities.profile import Profile, ProfileFields


class IProfileRepository(Protocol):
    """Repository interface for versioned Profile snapshots."""

    async def insert_version(self, user_id: int, profile_fields: ProfileFields) -> Profile:
        """Insert a new snapshot and leave it as the user's only active one."""
        ...

    async def get(self, id: int) -> Profile | None:
        """Get a snapshot by ID."""
        ...

    async def get_active(self, user_id: int) -> Profile | None:
        """Get the active snapshot for a user."""
        ...

    async def get_active_by_discord_id(self, discord_user_id: int) -> Profile | None:
        """Get the active snapshot for a Discord user."""
        ...

    async def list_history(self, user_id: int) -> list[Profile]:
        """All snapshots for a user, newest first."""
        ...

    async def list_history_by_discord_id(self, discord_user_id: int) -> list[Profile]:
        """All snapshots for a Discord user, newest first."""
        ...

    async def promote(self, user_id: int, profile_id: int) -> bool:
        """Make a snapshot the active one. False if it does not exist."""
        ...
