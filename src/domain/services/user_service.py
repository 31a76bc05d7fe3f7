"""User service layer: the friend codes stored on a user."""

import structlog

from domain.entities.draft import Draft
from domain.entities.user import CODE_FIELDS, NewUser, User
from domain.repositories.unit_of_work import IUnitOfWork, UnitOfWorkFactory
from domain.services.edit_session import EditorUI, EditSession
from domain.services.field_groups import CODES_GROUP, FieldGroup

logger = structlog.get_logger()


class UserService:
    """Service layer for User business logic."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def get_by_discord_id(self, discord_user_id: int) -> User | None:
        async with self._uow_factory() as uow:
            return await uow.users.get_by_discord_id(discord_user_id)

    async def load_codes_draft(self, discord_user_id: int) -> Draft:
        """Copy the user's codes into a new draft."""
        user = await self.get_by_discord_id(discord_user_id)
        if user is None:
            return Draft(values={name: None for name in CODE_FIELDS})
        return Draft(values=user.codes(), owner_id=user.id)

    async def save_codes(self, discord_user_id: int, draft: Draft) -> User:
        """Write the drafted codes to the user, creating the user if needed."""
        codes = {name: draft.values.get(name) for name in CODE_FIELDS}

        async def work(uow: IUnitOfWork) -> tuple[User, User | None]:
            user = None
            if draft.owner_id is not None:
                user = await uow.users.get(draft.owner_id)
            if user is None:
                user = await uow.users.get_by_discord_id(discord_user_id)
            if user is None:
                created = await uow.users.create(NewUser(discord_user_id=discord_user_id, **codes))
                return created, None

            updated = User(id=user.id, discord_user_id=user.discord_user_id, **codes)
            previous = await uow.users.replace(updated)
            return updated, previous

        async with self._uow_factory() as uow:
            user, previous = await uow.within_transaction(work)

        if previous is None:
            logger.info("user_created", discord_user_id=discord_user_id, user_id=user.id)
        else:
            changed = sorted(name for name in CODE_FIELDS if getattr(previous, name) != getattr(user, name))
            logger.info("user_codes_updated", discord_user_id=discord_user_id, user_id=user.id, changed=changed)
        return user

    def open_codes_session(self, discord_user_id: int, ui: EditorUI) -> EditSession[User]:
        """Create an editor session for the user's own friend codes."""
        return EditSession(
            target=UserCodesDraftTarget(self, discord_user_id),
            ui=ui,
            discord_user_id=discord_user_id,
        )


class UserCodesDraftTarget:
    """Drafts of the codes stored directly on a user."""

    groups: tuple[FieldGroup, ...] = (CODES_GROUP,)

    def __init__(self, service: UserService, discord_user_id: int) -> None:
        self._service = service
        self._discord_user_id = discord_user_id

    async def load(self) -> Draft:
        return await self._service.load_codes_draft(self._discord_user_id)

    async def save(self, draft: Draft) -> User:
        return await self._service.save_codes(self._discord_user_id, draft)
