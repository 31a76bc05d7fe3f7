"""/pokemon commands backed by PokéAPI."""

import asyncio
import math
from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands

from bot.embeds import bot_colour, pokemon_embed, pokemon_not_found_embed, pokemon_page_embed, working_embed
from core.exceptions import PokemonNotFoundError

if TYPE_CHECKING:
    from bot.client import CipherBot

PAGER_TIMEOUT_SECONDS = 60.0


class PokemonPagerView(discord.ui.View):
    """Previous/Next buttons for the Pokémon list."""

    def __init__(self, owner_id: int, timeout: float = PAGER_TIMEOUT_SECONDS) -> None:
        super().__init__(timeout=timeout)
        self.owner_id = owner_id
        self.steps: asyncio.Queue[Optional[int]] = asyncio.Queue()

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id == self.owner_id:
            return True
        await interaction.response.send_message("These buttons belong to someone else.", ephemeral=True)
        return False

    async def on_timeout(self) -> None:
        self.steps.put_nowait(None)

    def update_buttons(self, page_number: int, page_count: int) -> None:
        self.previous_page.disabled = page_number <= 1
        self.next_page.disabled = page_number >= page_count

    @discord.ui.button(label="Previous", style=discord.ButtonStyle.secondary)
    async def previous_page(self, interaction: discord.Interaction, button: discord.ui.Button) -> None:
        await interaction.response.defer()
        self.steps.put_nowait(-1)

    @discord.ui.button(label="Next", style=discord.ButtonStyle.secondary)
    async def next_page(self, interaction: discord.Interaction, button: discord.ui.Button) -> None:
        await interaction.response.defer()
        self.steps.put_nowait(1)


def register_pokemon_commands(bot: "CipherBot") -> None:
    pokemon = app_commands.Group(name="pokemon", description="Get information about Pokémon.", guild_only=True)

    @pokemon.command(name="search", description="Search for a Pokémon by name.")
    @app_commands.describe(name="The name of the Pokémon")
    async def search(interaction: discord.Interaction, name: str) -> None:
        colour = bot_colour(interaction)
        await interaction.response.defer(ephemeral=True)
        try:
            found = await bot.pokeapi.get_pokemon(name)
        except PokemonNotFoundError:
            await interaction.followup.send(embed=pokemon_not_found_embed(colour), ephemeral=True)
            return
        await interaction.followup.send(embed=pokemon_embed(found, colour), ephemeral=True)

    @pokemon.command(name="list", description="List all of the Pokémon.")
    @app_commands.describe(
        page="The page to show. Default is 1.",
        amount="The number of results to show per page. Default is 10.",
    )
    async def list_(
        interaction: discord.Interaction,
        page: app_commands.Range[int, 1, None] = 1,
        amount: app_commands.Range[int, 1, 20] = 10,
    ) -> None:
        colour = bot_colour(interaction)
        await interaction.response.send_message(embed=working_embed(colour), ephemeral=True)

        view = PokemonPagerView(interaction.user.id)
        page_number = page
        while True:
            result = await bot.pokeapi.list_pokemon(offset=(page_number - 1) * amount, limit=amount)
            page_count = max(1, math.ceil(result.count / amount))
            if page_number > page_count:
                page_number = page_count
                continue

            view.update_buttons(page_number, page_count)
            await interaction.edit_original_response(
                embed=pokemon_page_embed(result, page_number, page_count, colour),
                view=view,
            )

            step = await view.steps.get()
            if step is None:
                break
            page_number = min(max(page_number + step, 1), page_count)
            await interaction.edit_original_response(embed=working_embed(colour), view=None)

        await interaction.delete_original_response()

    bot.tree.add_command(pokemon)
