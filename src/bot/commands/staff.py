"""/staff commands for managing staff roles."""

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from bot.embeds import bot_colour

if TYPE_CHECKING:
    from bot.client import CipherBot


def register_staff_commands(bot: "CipherBot") -> None:
    staff = app_commands.Group(
        name="staff",
        description="Manage the roles that count as staff.",
        guild_only=True,
        default_permissions=discord.Permissions(administrator=True),
    )

    @staff.command(name="add", description="Mark a role as staff.")
    @app_commands.describe(role="The role to mark as staff.")
    @app_commands.checks.has_permissions(administrator=True)
    async def add(interaction: discord.Interaction, role: discord.Role) -> None:
        if await bot.staff.add_role(role.id):
            description = f"{role.mention} is now a staff role."
        else:
            description = f"{role.mention} already is a staff role."
        embed = discord.Embed(title="Staff Roles", description=description, colour=bot_colour(interaction))
        await interaction.response.send_message(embed=embed, ephemeral=True)

    @staff.command(name="remove", description="Stop treating a role as staff.")
    @app_commands.describe(role="The role to unmark.")
    @app_commands.checks.has_permissions(administrator=True)
    async def remove(interaction: discord.Interaction, role: discord.Role) -> None:
        if await bot.staff.remove_role(role.id):
            description = f"{role.mention} is no longer a staff role."
        else:
            description = f"{role.mention} was not a staff role."
        embed = discord.Embed(title="Staff Roles", description=description, colour=bot_colour(interaction))
        await interaction.response.send_message(embed=embed, ephemeral=True)

    @staff.command(name="list", description="List the staff roles.")
    async def list_(interaction: discord.Interaction) -> None:
        role_ids = await bot.staff.list_roles()
        description = "\n".join(f"<@&{role_id}>" for role_id in role_ids) or "No staff roles configured."
        embed = discord.Embed(title="Staff Roles", description=description, colour=bot_colour(interaction))
        await interaction.response.send_message(embed=embed, ephemeral=True)

    bot.tree.add_command(staff)
