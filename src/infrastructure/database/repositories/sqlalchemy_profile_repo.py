"""SQLAlchemy implementation of Profile repository."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile, ProfileFields
from infrastructure.database.models import ProfileModel, UserModel, utcnow


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository.

    Mutating methods only flush; the caller's unit of work owns the
    transaction and should be opened with strict isolation for them.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert_version(self, user_id: int, profile_fields: ProfileFields) -> Profile:
        """Insert a new active snapshot for a user.

        Existing snapshots are deactivated before the insert so the user never
        has two active rows, not even inside this transaction.
        """
        deactivate = (
            update(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(deactivate)

        model = ProfileModel(
            user_id=user_id,
            created_at=utcnow(),
            is_active=True,
            **profile_fields.to_dict(),
        )
        self._session.add(model)
        await self._session.flush()

        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_id == user_id, ProfileModel.is_active.is_(True))
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return self._to_entity(result.scalar_one())

    async def get(self, id: int) -> Profile | None:
        """Get a snapshot by ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_active(self, user_id: int) -> Profile | None:
        """Get the active snapshot for a user."""
        stmt = select(ProfileModel).where(
            ProfileModel.user_id == user_id,
            ProfileModel.is_active.is_(True),
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def get_active_by_discord_id(self, discord_user_id: int) -> Profile | None:
        """Get the active snapshot for a Discord user."""
        stmt = (
            select(ProfileModel)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .where(
                UserModel.discord_user_id == discord_user_id,
                ProfileModel.is_active.is_(True),
            )
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def list_history(self, user_id: int) -> list[Profile]:
        """All snapshots for a user, newest first."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_id == user_id)
            .order_by(ProfileModel.created_at.desc(), ProfileModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def list_history_by_discord_id(self, discord_user_id: int) -> list[Profile]:
        """All snapshots for a Discord user, newest first."""
        stmt = (
            select(ProfileModel)
            .join(UserModel, ProfileModel.user_id == UserModel.id)
            .where(UserModel.discord_user_id == discord_user_id)
            .order_by(ProfileModel.created_at.desc(), ProfileModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def promote(self, user_id: int, profile_id: int) -> bool:
        """Make one of the user's snapshots the active one.

        The target is activated first; if no row matched, nothing else is
        touched and False is returned. Otherwise every other active snapshot
        of the user is deactivated.
        """
        activate = (
            update(ProfileModel)
            .where(ProfileModel.id == profile_id, ProfileModel.user_id == user_id)
            .values(is_active=True)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(activate)
        if result.rowcount == 0:
            return False

        deactivate_siblings = (
            update(ProfileModel)
            .where(
                ProfileModel.user_id == user_id,
                ProfileModel.id != profile_id,
                ProfileModel.is_active.is_(True),
            )
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(deactivate_siblings)
        await self._session.flush()
        return True

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            fields=ProfileFields(
                thumbnail_url=model.thumbnail_url,
                image_url=model.image_url,
                trainer_class=model.trainer_class,
                nature=model.nature,
                partner_pokemon=model.partner_pokemon,
                starting_region=model.starting_region,
                favourite_food=model.favourite_food,
                likes=model.likes,
                quotes=model.quotes,
                pokemon_go_code=model.pokemon_go_code,
                pokemon_pocket_code=model.pokemon_pocket_code,
                switch_code=model.switch_code,
            ),
            created_at=model.created_at,
            is_active=model.is_active,
        )
