"""Permission checks used inside command callbacks."""

import discord

from core.exceptions import MemberRequiredError, StaffOnlyError
from domain.services.staff_service import StaffService


def require_member(interaction: discord.Interaction) -> discord.Member:
    """The invoking guild member. Raises outside of a server."""
    if not isinstance(interaction.user, discord.Member):
        raise MemberRequiredError()
    return interaction.user


async def is_staff(interaction: discord.Interaction, staff_service: StaffService) -> bool:
    if not isinstance(interaction.user, discord.Member):
        return False
    return await staff_service.is_staff(role.id for role in interaction.user.roles)


async def require_staff(interaction: discord.Interaction, staff_service: StaffService) -> None:
    """Raise ``StaffOnlyError`` unless the invoker holds a staff role."""
    if not await is_staff(interaction, staff_service):
        command_name = interaction.command.qualified_name if interaction.command else "unknown"
        raise StaffOnlyError(command_name)


async def require_self_or_staff(
    interaction: discord.Interaction,
    staff_service: StaffService,
    target: discord.abc.User,
) -> None:
    """Acting on another member's data needs a staff role."""
    if target.id != interaction.user.id:
        await require_staff(interaction, staff_service)
