"""Unit tests for embed builders."""

from datetime import datetime
from types import SimpleNamespace

import discord
import pytest

from bot.embeds import (
    HISTORY_LIMIT,
    codes_embed,
    discarded_embed,
    editor_embed,
    history_embed,
    profile_card_embed,
    profile_embed,
)
from domain.entities.profile import ProfileCard, ProfileFields
from domain.entities.user import User

SPACER = "\u200e"


@pytest.fixture
def member():
    return SimpleNamespace(
        display_name="Red",
        display_avatar=SimpleNamespace(url="https://cdn.example.com/red.png"),
        colour=discord.Colour.default(),
    )


@pytest.fixture
def colour() -> discord.Colour:
    return discord.Colour.blurple()


class TestProfileEmbed:
    def test_empty_profile(self, member, colour):
        embed = profile_embed(member, ProfileFields(), colour)

        assert embed.description == "No information to show."
        assert embed.fields == []

    def test_profile_and_codes_separated_by_spacer(self, member, colour):
        fields = ProfileFields(nature="Jolly", quotes="Gotta catch 'em all", switch_code="SW-1234-5678-9012")

        embed = profile_embed(member, fields, colour)

        assert embed.description == "**User Profile**"
        assert [f.name for f in embed.fields] == ["Nature", "Quotes", SPACER, "Nintendo Switch Friend Code"]
        assert embed.fields[2].value == "**Friend Codes**"
        assert embed.fields[1].inline is False

    def test_codes_only(self, member, colour):
        embed = profile_embed(member, ProfileFields(pokemon_go_code="1234 5678 9012"), colour)

        assert embed.description == "**Friend Codes**"
        assert len(embed.fields) == 1

    def test_images(self, member, colour):
        fields = ProfileFields(thumbnail_url="https://example.com/t.png", image_url="https://example.com/i.png")

        embed = profile_embed(member, fields, colour)

        assert embed.thumbnail.url == "https://example.com/t.png"
        assert embed.image.url == "https://example.com/i.png"

    def test_falls_back_to_given_colour(self, member, colour):
        assert profile_embed(member, ProfileFields(), colour).colour == colour

    def test_uses_member_colour(self, member, colour):
        member.colour = discord.Colour.green()

        assert profile_embed(member, ProfileFields(), colour).colour == discord.Colour.green()


class TestProfileCardEmbed:
    def test_footer_names_version(self, member, colour):
        card = ProfileCard(
            discord_user_id=1,
            profile_id=12,
            fields=ProfileFields(nature="Jolly"),
            created_at=datetime(2024, 5, 1),
            is_active=True,
        )

        embed = profile_card_embed(member, card, colour)

        assert embed.footer.text == "Version #12"
        assert embed.timestamp is not None

    def test_codes_only_card_has_no_footer(self, member, colour):
        card = ProfileCard(discord_user_id=1, profile_id=None, fields=ProfileFields(switch_code="SW-1234-5678-9012"))

        assert profile_card_embed(member, card, colour).footer.text is None


class TestCodesEmbed:
    def test_renders_user_codes(self, member, colour):
        user = User(id=1, discord_user_id=1, pokemon_pocket_code="1234 5678 9012 3456")

        embed = codes_embed(member, user, colour)

        assert [f.name for f in embed.fields] == ["Pokémon TCG Pocket Friend Code"]

    def test_no_user(self, member, colour):
        assert codes_embed(member, None, colour).description == "No information to show."


class TestHistoryEmbed:
    def test_marks_active_version(self, member, colour):
        cards = [
            ProfileCard(1, 3, ProfileFields(), datetime(2024, 5, 2), is_active=True),
            ProfileCard(1, 1, ProfileFields(), datetime(2024, 5, 1)),
        ]

        lines = history_embed(member, cards, colour).description.splitlines()

        assert lines[0].startswith("`#3`")
        assert lines[0].endswith("**(active)**")
        assert "(active)" not in lines[1]

    def test_empty(self, member, colour):
        assert history_embed(member, [], colour).description == "No profile versions to show."

    def test_long_history_fits_in_one_embed(self, member, colour):
        cards = [ProfileCard(1, 1000 + i, ProfileFields(), datetime(2025, 1, 1)) for i in range(250, 0, -1)]

        embed = history_embed(member, cards, colour)
        lines = embed.description.splitlines()

        assert len(embed.description) <= 4096
        assert len(embed) <= 6000
        assert len(lines) == HISTORY_LIMIT + 1
        assert lines[0].startswith("`#1250`")
        assert lines[-1] == f"…and {250 - HISTORY_LIMIT} older versions."

    def test_old_active_version_stays_listed(self, member, colour):
        cards = [ProfileCard(1, i, ProfileFields(), datetime(2025, 1, 1)) for i in range(200, 0, -1)]
        cards[-1] = ProfileCard(1, 1, ProfileFields(), datetime(2025, 1, 1), is_active=True)

        lines = history_embed(member, cards, colour).description.splitlines()

        assert lines[-1].startswith("`#1`")
        assert lines[-1].endswith("**(active)**")
        assert lines[-2] == f"…and {200 - HISTORY_LIMIT} older versions."


class TestEditorEmbed:
    def test_shows_validation_errors_in_red(self, member, colour):
        embed = editor_embed(member, ProfileFields(), ["`x` is not a valid switch friend code."], colour)

        assert embed.fields[-1].name == "Validation Error"
        assert embed.colour == discord.Colour.red()

    def test_without_errors(self, member, colour):
        embed = editor_embed(member, ProfileFields(), [], colour)

        assert all(f.name != "Validation Error" for f in embed.fields)


class TestDiscardedEmbed:
    def test_timeout_reason(self, colour):
        assert "timed out" in discarded_embed("timeout", colour).description

    def test_cancelled(self, colour):
        assert discarded_embed("cancelled", colour).description == "No changes were saved."
