"""Profile service layer: versioned profiles and their editor."""

import structlog

from domain.entities.draft import Draft
from domain.entities.profile import Profile, ProfileCard, ProfileFields
from domain.entities.user import CODE_FIELDS, NewUser, User
from domain.repositories.unit_of_work import IUnitOfWork, UnitOfWorkFactory
from domain.services.edit_session import EditorUI, EditSession
from domain.services.field_groups import PROFILE_GROUPS, FieldGroup

logger = structlog.get_logger()


def build_card(discord_user_id: int, profile: Profile | None, user: User | None = None) -> ProfileCard:
    """Combine a snapshot with the user's own codes for display.

    Codes left empty on the snapshot fall back to the ones stored on the user.
    """
    values = profile.fields.to_dict() if profile else ProfileFields().to_dict()
    if user is not None:
        for name in CODE_FIELDS:
            if values.get(name) is None:
                values[name] = getattr(user, name)

    return ProfileCard(
        discord_user_id=discord_user_id,
        profile_id=profile.id if profile else None,
        fields=ProfileFields.from_mapping(values),
        created_at=profile.created_at if profile else None,
        is_active=profile.is_active if profile else False,
    )


class ProfileService:
    """Service layer for versioned profile snapshots."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def get_profile_for_display(self, discord_user_id: int) -> ProfileCard | None:
        """The member's active profile, or None if there is nothing to show."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_discord_id(discord_user_id)
            if not user:
                return None
            profile = await uow.profiles.get_active(user.id)

        card = build_card(discord_user_id, profile, user)
        if profile is None and card.fields.is_empty():
            return None
        return card

    async def list_profile_history(self, discord_user_id: int) -> list[ProfileCard]:
        """Every snapshot of the member, newest first."""
        async with self._uow_factory() as uow:
            history = await uow.profiles.list_history_by_discord_id(discord_user_id)
        return [build_card(discord_user_id, profile) for profile in history]

    async def set_active_version(self, discord_user_id: int, profile_id: int) -> bool:
        """Make one of the member's snapshots the active one.

        Returns False, changing nothing, if the snapshot does not exist or
        belongs to someone else.
        """
        async with self._uow_factory(serializable=True) as uow:
            user = await uow.users.get_by_discord_id(discord_user_id)
            if not user:
                return False

            promoted = await uow.profiles.promote(user.id, profile_id)
            if not promoted:
                await uow.rollback()
                return False

            await uow.commit()

        logger.info("profile_version_promoted", discord_user_id=discord_user_id, profile_id=profile_id)
        return True

    async def load_draft(self, discord_user_id: int) -> Draft:
        """Copy the active snapshot's fields into a new draft."""
        async with self._uow_factory() as uow:
            user = await uow.users.get_by_discord_id(discord_user_id)
            profile = await uow.profiles.get_active(user.id) if user else None

        values = profile.fields.to_dict() if profile else ProfileFields().to_dict()
        return Draft(values=values, owner_id=user.id if user else None)

    async def save_draft(self, discord_user_id: int, draft: Draft) -> Profile:
        """Persist a draft as the member's new active snapshot.

        Creates the user first when the draft has no owner yet. Both steps run
        in one transaction.
        """
        profile_fields = ProfileFields.from_mapping(draft.values)

        async def work(uow: IUnitOfWork) -> Profile:
            owner_id = draft.owner_id
            if owner_id is None:
                # The user may have been created by a concurrent session since the draft was loaded
                user = await uow.users.get_by_discord_id(discord_user_id)
                if user is None:
                    user = await uow.users.create(NewUser(discord_user_id=discord_user_id))
                    logger.info("user_created", discord_user_id=discord_user_id, user_id=user.id)
                owner_id = user.id
            return await uow.profiles.insert_version(owner_id, profile_fields)

        async with self._uow_factory(serializable=True) as uow:
            profile = await uow.within_transaction(work)

        logger.info(
            "profile_version_inserted",
            discord_user_id=discord_user_id,
            user_id=profile.user_id,
            profile_id=profile.id,
        )
        return profile

    def open_edit_session(self, discord_user_id: int, ui: EditorUI) -> EditSession[Profile]:
        """Create an editor session for the member's profile."""
        return EditSession(
            target=ProfileDraftTarget(self, discord_user_id),
            ui=ui,
            discord_user_id=discord_user_id,
        )


class ProfileDraftTarget:
    """Drafts of a member's profile, saved as a new snapshot."""

    groups: tuple[FieldGroup, ...] = PROFILE_GROUPS

    def __init__(self, service: ProfileService, discord_user_id: int) -> None:
        self._service = service
        self._discord_user_id = discord_user_id

    async def load(self) -> Draft:
        return await self._service.load_draft(self._discord_user_id)

    async def save(self, draft: Draft) -> Profile:
        return await self._service.save_draft(self._discord_user_id, draft)
