"""/profile commands and the "Show Profile" context menu."""

from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands

from bot.checks import require_member, require_self_or_staff, require_staff
from bot.editor import DiscordEditorUI, run_editor
from bot.embeds import (
    bot_colour,
    codes_embed,
    editor_embed,
    error_embed,
    history_embed,
    profile_card_embed,
    profile_embed,
)
from domain.entities.draft import Draft
from domain.entities.profile import ProfileFields
from domain.services.field_groups import CODES_GROUP, PROFILE_GROUPS

if TYPE_CHECKING:
    from bot.client import CipherBot


def _preview(member: discord.abc.User, colour: discord.Colour):
    def render(draft: Draft, errors: list[str]) -> discord.Embed:
        return editor_embed(member, ProfileFields.from_mapping(draft.values), errors, colour)

    return render


def register_profile_commands(bot: "CipherBot") -> None:
    """Register /profile, /profile codes and the profile context menu."""
    profile = app_commands.Group(name="profile", description="Edit and show profiles.", guild_only=True)
    codes = app_commands.Group(name="codes", description="Manage friend codes.", parent=profile)

    async def send_profile(interaction: discord.Interaction, member: discord.abc.User, ephemeral: bool) -> None:
        colour = bot_colour(interaction)
        card = await bot.profiles.get_profile_for_display(member.id)
        if card is None:
            embed = profile_embed(member, ProfileFields(), colour)
        else:
            embed = profile_card_embed(member, card, colour)
        await interaction.response.send_message(embed=embed, ephemeral=ephemeral)

    @profile.command(name="show", description="Show a member's profile.")
    @app_commands.describe(member="The profile to show. Defaults to yours.")
    async def show(interaction: discord.Interaction, member: Optional[discord.Member] = None) -> None:
        await send_profile(interaction, member or require_member(interaction), ephemeral=False)

    @profile.command(name="edit", description="Edit a profile. Editing someone else's requires staff.")
    @app_commands.describe(member="The profile to edit. Defaults to yours.")
    async def edit(interaction: discord.Interaction, member: Optional[discord.Member] = None) -> None:
        target = member or require_member(interaction)
        await require_self_or_staff(interaction, bot.staff, target)

        colour = bot_colour(interaction)
        ui = DiscordEditorUI(
            interaction,
            PROFILE_GROUPS,
            render=_preview(target, colour),
            timeout=bot.settings.editor_timeout_seconds,
        )
        await run_editor(bot.profiles.open_edit_session(target.id, ui), ui, colour)

    @profile.command(name="history", description="List every saved version of a profile.")
    @app_commands.describe(member="The profile to list. Defaults to yours.")
    async def history(interaction: discord.Interaction, member: Optional[discord.Member] = None) -> None:
        target = member or require_member(interaction)
        cards = await bot.profiles.list_profile_history(target.id)
        await interaction.response.send_message(
            embed=history_embed(target, cards, bot_colour(interaction)),
            ephemeral=True,
        )

    @profile.command(name="restore", description="Make an earlier version of a profile the active one.")
    @app_commands.describe(
        version="The version number shown by /profile history.",
        member="The profile to restore. Defaults to yours.",
    )
    async def restore(
        interaction: discord.Interaction,
        version: app_commands.Range[int, 1, None],
        member: Optional[discord.Member] = None,
    ) -> None:
        target = member or require_member(interaction)
        await require_self_or_staff(interaction, bot.staff, target)

        if await bot.profiles.set_active_version(target.id, version):
            embed = discord.Embed(
                title="Profile Restored",
                description=f"Version `#{version}` is now the active profile.",
                colour=bot_colour(interaction),
            )
        else:
            embed = error_embed("Version Not Found", f"There is no version `#{version}` of this profile.")
        await interaction.response.send_message(embed=embed, ephemeral=True)

    def open_codes_editor(interaction: discord.Interaction, target: discord.abc.User):
        colour = bot_colour(interaction)
        ui = DiscordEditorUI(
            interaction,
            (CODES_GROUP,),
            render=_preview(target, colour),
            timeout=bot.settings.editor_timeout_seconds,
        )
        return run_editor(bot.users.open_codes_session(target.id, ui), ui, colour)

    @codes.command(name="edit", description="Edit your friend codes.")
    async def codes_edit(interaction: discord.Interaction) -> None:
        await open_codes_editor(interaction, require_member(interaction))

    @codes.command(name="overwrite", description="Edit any member's friend codes.")
    @app_commands.describe(member="The member whose codes to edit.")
    async def codes_overwrite(interaction: discord.Interaction, member: discord.Member) -> None:
        await require_staff(interaction, bot.staff)
        await open_codes_editor(interaction, member)

    @codes.command(name="show", description="Show a member's friend codes.")
    @app_commands.describe(member="The member whose codes to show. Defaults to you.")
    async def codes_show(interaction: discord.Interaction, member: Optional[discord.Member] = None) -> None:
        target = member or require_member(interaction)
        user = await bot.users.get_by_discord_id(target.id)
        await interaction.response.send_message(embed=codes_embed(target, user, bot_colour(interaction)))

    @app_commands.guild_only()
    async def show_profile_menu(interaction: discord.Interaction, member: discord.Member) -> None:
        await send_profile(interaction, member, ephemeral=True)

    bot.tree.add_command(profile)
    bot.tree.add_command(app_commands.ContextMenu(name="Show Profile", callback=show_profile_menu))
