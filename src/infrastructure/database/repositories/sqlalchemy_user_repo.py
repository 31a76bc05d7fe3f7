"""SQLAlchemy implementation of User repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.user import NewUser, User
from infrastructure.database.models import UserModel


class SQLAlchemyUserRepository:
    """SQLAlchemy implementation of IUserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> User | None:
        """Get a user by internal ID."""
        stmt = select(UserModel).where(UserModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_discord_id(self, discord_user_id: int) -> User | None:
        """Get a user by Discord user ID."""
        stmt = select(UserModel).where(UserModel.discord_user_id == discord_user_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def create(self, new_user: NewUser) -> User:
        """Insert a new user. The unique constraint rejects duplicates."""
        model = UserModel(
            discord_user_id=new_user.discord_user_id,
            pokemon_go_code=new_user.pokemon_go_code,
            pokemon_pocket_code=new_user.pokemon_pocket_code,
            switch_code=new_user.switch_code,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def replace(self, user: User) -> User | None:
        """Overwrite every field of a user and return the previous record."""
        stmt = select(UserModel).where(UserModel.id == user.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        previous = self._to_entity(model)

        model.discord_user_id = user.discord_user_id
        model.pokemon_go_code = user.pokemon_go_code
        model.pokemon_pocket_code = user.pokemon_pocket_code
        model.switch_code = user.switch_code

        await self._session.flush()
        return previous

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity."""
        return User(
            id=model.id,
            discord_user_id=model.discord_user_id,
            pokemon_go_code=model.pokemon_go_code,
            pokemon_pocket_code=model.pokemon_pocket_code,
            switch_code=model.switch_code,
        )
