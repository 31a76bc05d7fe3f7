"""Mapping of command errors to user-facing messages."""

import logging
from dataclasses import dataclass

import discord
import structlog
from discord import app_commands

from bot.embeds import error_embed
from core.exceptions import (
    BackendError,
    MemberRequiredError,
    PokeApiError,
    PokemonNotFoundError,
    StaffOnlyError,
    ValidationError,
)

logger = structlog.get_logger()

_CONTACT_ADMIN = "Please contact a bot administrator to review the logs for further details."


@dataclass(frozen=True)
class ErrorMessage:
    """What the member sees and what gets logged for one failure."""

    title: str
    description: str
    log_message: str
    log_level: int = logging.ERROR


def _format_permissions(permissions: list[str]) -> str:
    return ", ".join(f"`{name}`" for name in permissions)


def describe_error(error: Exception, command_name: str) -> ErrorMessage:
    """Translate an exception raised while running ``/command_name``."""
    if isinstance(error, app_commands.CommandInvokeError):
        error = error.original

    if isinstance(error, BackendError):
        return ErrorMessage(
            "Repository Backend Error",
            _CONTACT_ADMIN,
            f"repository backend error: {error.message}",
        )
    if isinstance(error, PokemonNotFoundError):
        return ErrorMessage(
            "Could not find requested Pokémon",
            "Either no Pokémon exists with that name or a network error has occurred.",
            f"pokémon not found in command `{command_name}`: {error.message}",
            logging.INFO,
        )
    if isinstance(error, PokeApiError):
        return ErrorMessage(
            "PokéAPI Error",
            "Failed to get resource from Pokémon.",
            f"failed to get resource from PokéAPI: {error.message}",
            logging.WARNING,
        )
    if isinstance(error, StaffOnlyError):
        return ErrorMessage(
            "Staff Only Command",
            error.message,
            f"staff-only command `{error.command_name}` cannot be run by non-staff users",
            logging.INFO,
        )
    if isinstance(error, (MemberRequiredError, app_commands.NoPrivateMessage)):
        return ErrorMessage(
            "Guild Only Command",
            f"`/{command_name}` can only be used in a server.",
            f"guild-only command `{command_name}` cannot be run in DMs",
            logging.INFO,
        )
    if isinstance(error, ValidationError):
        return ErrorMessage(
            "Validation Error",
            error.message,
            f"validation failed in command `{command_name}`",
            logging.DEBUG,
        )
    if isinstance(error, app_commands.CommandOnCooldown):
        return ErrorMessage(
            "Cooldown Hit",
            f"You can't use that command right now. Try again in {error.retry_after:.0f}s.",
            f"cooldown hit in command `{command_name}` ({error.retry_after:.1f}s remaining)",
            logging.INFO,
        )
    if isinstance(error, app_commands.BotMissingPermissions):
        return ErrorMessage(
            "Insufficient Bot Permissions",
            f"The bot is missing the following permissions: {_format_permissions(error.missing_permissions)}.",
            f"bot is missing permissions {error.missing_permissions} to execute command `{command_name}`",
            logging.INFO,
        )
    if isinstance(error, app_commands.MissingPermissions):
        return ErrorMessage(
            "Insufficient User Permissions",
            f"You are missing the following permissions: {_format_permissions(error.missing_permissions)}.",
            f"user is missing permissions {error.missing_permissions} to execute command `{command_name}`",
            logging.INFO,
        )
    if isinstance(error, app_commands.CheckFailure):
        return ErrorMessage(
            "Command Check Failed",
            f"A pre-command check failed. {_CONTACT_ADMIN}",
            f"pre-command check for command `{command_name}` denied access",
            logging.WARNING,
        )
    if isinstance(error, app_commands.TransformerError):
        return ErrorMessage(
            "Argument Parse Error",
            f"Failed to parse argument in command. {_CONTACT_ADMIN}",
            f"failed to parse argument in command `{command_name}` on input {error.value!r}",
        )
    if isinstance(error, app_commands.CommandSignatureMismatch):
        return ErrorMessage(
            "Command Structure Mismatch",
            f"Unexpected application command structure. {_CONTACT_ADMIN}",
            f"unexpected application command structure in command `{command_name}`",
        )
    if isinstance(error, discord.HTTPException):
        return ErrorMessage(
            "Internal Error",
            _CONTACT_ADMIN,
            f"discord request failed in command `{command_name}`: {error}",
        )
    return ErrorMessage(
        "Unexpected Error",
        f"An unexpected error has occurred. {_CONTACT_ADMIN}",
        f"unknown error in command `{command_name}`: {error!r}",
    )


async def on_app_command_error(interaction: discord.Interaction, error: app_commands.AppCommandError) -> None:
    """Tree-wide error handler: log, then reply with an ephemeral red embed."""
    command_name = interaction.command.qualified_name if interaction.command else "unknown"
    message = describe_error(error, command_name)

    cause = error.original if isinstance(error, app_commands.CommandInvokeError) else error
    logger.log(
        message.log_level,
        message.log_message,
        command=command_name,
        discord_user_id=interaction.user.id,
        exc_info=cause if message.log_level >= logging.ERROR else None,
    )

    embed = error_embed(message.title, message.description)
    try:
        if interaction.response.is_done():
            await interaction.followup.send(embed=embed, ephemeral=True)
        else:
            await interaction.response.send_message(embed=embed, ephemeral=True)
    except discord.HTTPException:
        logger.warning("error_reply_failed", command=command_name, exc_info=True)
