"""Command line entry point for the Cipher bot."""

import argparse
import asyncio
import os
from pathlib import Path
from typing import Optional, Sequence

import structlog
from alembic import command
from alembic.config import Config
from dotenv import load_dotenv

from bot.client import CipherBot
from core.config import Settings, get_settings
from core.logging import setup_logging
from infrastructure.database.dialects import create_backend
from infrastructure.pokeapi.client import PokeApiClient

logger = structlog.get_logger()

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cipher", description="Trainer profiles and friend codes for Discord.")
    parser.add_argument(
        "--dotenv",
        metavar="PATH",
        default=os.environ.get("DOTENV"),
        help="Load environment variables from this file first (env: DOTENV)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("start", help="Run pending migrations, then start the bot")
    subparsers.add_parser("migrate", help="Run pending migrations and exit")
    return parser


def load_settings(dotenv: Optional[str]) -> Settings:
    """Read settings, optionally after loading a dotenv file into the environment."""
    if dotenv:
        path = Path(dotenv)
        if not path.is_file():
            raise SystemExit(f"dotenv file not found: {dotenv}")
        # Variables already set in the environment win
        load_dotenv(path, override=False)
    get_settings.cache_clear()
    return get_settings()


def alembic_config() -> Config:
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    return config


def run_migrations(settings: Settings) -> None:
    logger.info("migrations_started", dialect=settings.database_dialect.value)
    command.upgrade(alembic_config(), "head")
    logger.info("migrations_finished")


async def run_bot(settings: Settings) -> None:
    backend = create_backend(settings)
    pokeapi = PokeApiClient.from_settings(settings)
    bot = CipherBot(settings, backend, pokeapi)
    async with bot:
        await bot.start(settings.discord_token)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.dotenv)
    setup_logging()

    if args.command == "migrate":
        run_migrations(settings)
        return 0

    if not settings.discord_token:
        logger.error("discord_token_missing")
        return 2

    run_migrations(settings)
    try:
        asyncio.run(run_bot(settings))
    except KeyboardInterrupt:
        logger.info("bot_interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
