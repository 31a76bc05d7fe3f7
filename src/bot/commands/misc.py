"""/about and /ping."""

from typing import TYPE_CHECKING

import discord
from discord import app_commands

from bot.embeds import bot_colour

if TYPE_CHECKING:
    from bot.client import CipherBot


def register_misc_commands(bot: "CipherBot") -> None:
    settings = bot.settings

    @bot.tree.command(name="about", description="Show information about the bot.")
    @app_commands.describe(ephemeral="Hide reply from other users. Defaults to True.")
    async def about(interaction: discord.Interaction, ephemeral: bool = True) -> None:
        embed = discord.Embed(
            title=settings.about_title,
            description=settings.about_description,
            colour=bot_colour(interaction),
        )
        me = interaction.guild.me if interaction.guild else bot.user
        if me is not None:
            embed.set_thumbnail(url=me.display_avatar.url)
        if settings.source_code_url:
            embed.add_field(name="Source Code", value=settings.source_code_url, inline=False)
        await interaction.response.send_message(embed=embed, ephemeral=ephemeral)

    @bot.tree.command(name="ping", description="Is the bot alive or dead? :thinking:")
    async def ping(interaction: discord.Interaction) -> None:
        embed = discord.Embed(title="Pong :ping_pong:", colour=bot_colour(interaction))
        embed.set_footer(text=f"Gateway latency: {bot.latency * 1000:.0f} ms")
        await interaction.response.send_message(embed=embed)
