"""Unit tests for the command line entry point."""

from unittest.mock import patch

import pytest

import main


class TestBuildParser:
    def test_requires_a_command(self):
        with pytest.raises(SystemExit):
            main.build_parser().parse_args([])

    def test_dotenv_option(self):
        args = main.build_parser().parse_args(["--dotenv", "prod.env", "migrate"])

        assert args.command == "migrate"
        assert args.dotenv == "prod.env"


class TestLoadSettings:
    def test_missing_dotenv_file(self, tmp_path):
        with pytest.raises(SystemExit):
            main.load_settings(str(tmp_path / "missing.env"))

    def test_environment_wins_over_dotenv(self, tmp_path, monkeypatch: pytest.MonkeyPatch):
        dotenv = tmp_path / "cipher.env"
        dotenv.write_text("APP_NAME=FromFile\nEDITOR_TIMEOUT_SECONDS=120\n")
        monkeypatch.setenv("APP_NAME", "FromEnv")
        monkeypatch.delenv("EDITOR_TIMEOUT_SECONDS", raising=False)

        try:
            settings = main.load_settings(str(dotenv))
        finally:
            monkeypatch.delenv("EDITOR_TIMEOUT_SECONDS", raising=False)
            main.get_settings.cache_clear()

        assert settings.app_name == "FromEnv"
        assert settings.editor_timeout_seconds == 120


class TestMain:
    def test_start_without_token_fails(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
        monkeypatch.delenv("BOT_TOKEN", raising=False)

        with patch.object(main, "setup_logging"), patch.object(main, "run_migrations") as migrate:
            assert main.main(["start"]) == 2

        migrate.assert_not_called()
        main.get_settings.cache_clear()

    def test_migrate_only_migrates(self):
        with patch.object(main, "setup_logging"), patch.object(main, "run_migrations") as migrate, patch.object(
            main, "run_bot"
        ) as run_bot:
            assert main.main(["migrate"]) == 0

        migrate.assert_called_once()
        run_bot.assert_not_called()
        main.get_settings.cache_clear()
