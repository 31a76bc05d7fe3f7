"""Discord client for Cipher."""

import discord
import structlog
from discord.ext import commands

from bot.commands.misc import register_misc_commands
from bot.commands.pokemon import register_pokemon_commands
from bot.commands.profile import register_profile_commands
from bot.commands.staff import register_staff_commands
from bot.errors import on_app_command_error
from core.config import Settings
from domain.services.profile_service import ProfileService
from domain.services.staff_service import StaffService
from domain.services.user_service import UserService
from infrastructure.database.dialects import DatabaseBackend
from infrastructure.pokeapi.client import PokeApiClient

logger = structlog.get_logger()


class CipherBot(commands.Bot):
    """The bot process: slash commands on top of the profile services.

    Owns the database backend and the PokéAPI client and releases both on
    close.
    """

    def __init__(
        self,
        settings: Settings,
        backend: DatabaseBackend,
        pokeapi: PokeApiClient,
    ) -> None:
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=discord.Intents.default(),
            help_command=None,
            description=settings.about_description,
        )
        self.settings = settings
        self.backend = backend
        self.pokeapi = pokeapi

        self.profiles = ProfileService(backend.unit_of_work)
        self.users = UserService(backend.unit_of_work)
        self.staff = StaffService(backend.unit_of_work)

        self.tree.error(on_app_command_error)

    async def setup_hook(self) -> None:
        """Register slash commands and sync them with Discord."""
        register_profile_commands(self)
        register_pokemon_commands(self)
        register_staff_commands(self)
        register_misc_commands(self)

        guild_ids = self.settings.command_guild_id_list
        if not guild_ids:
            synced = await self.tree.sync()
            logger.info("commands_synced", scope="global", count=len(synced))
            return

        for guild_id in guild_ids:
            guild = discord.Object(id=guild_id)
            self.tree.copy_global_to(guild=guild)
            try:
                synced = await self.tree.sync(guild=guild)
            except discord.HTTPException as e:
                logger.warning("commands_sync_failed", guild_id=guild_id, error=str(e))
                continue
            logger.info("commands_synced", scope="guild", guild_id=guild_id, count=len(synced))

    async def on_ready(self) -> None:
        logger.info("bot_ready", user=str(self.user), guild_count=len(self.guilds))

    async def close(self) -> None:
        try:
            await super().close()
        finally:
            await self.pokeapi.aclose()
            await self.backend.dispose()
            logger.info("bot_closed")
