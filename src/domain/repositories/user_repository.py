"""User repository protocol."""

from typing import Protocol

from domain.entities.user import NewUser, User


class IUserRepository(Protocol):
    """Repository interface for User entities."""

    async def get(self, id: int) -> User | None:
        """Get a user by internal ID."""
        ...

    async def get_by_discord_id(self, discord_user_id: int) -> User | None:
        """Get a user by Discord user ID."""
        ...

    async def create(self, new_user: NewUser) -> User:
        """Insert a new user. Fails if the Discord user ID already exists."""
        ...

    async def replace(self, user: User) -> User | None:
        """Overwrite all fields of an existing user.

        Returns the record as it was before the update, or None (without
        writing anything) if no user has that ID.
        """
        ...
