"""Embed builders for bot replies."""

from datetime import datetime, timezone
from typing import Optional, Union

import discord

from domain.entities.profile import ProfileCard, ProfileFields
from domain.entities.user import User
from infrastructure.pokeapi.client import Pokemon, PokemonPage

Person = Union[discord.Member, discord.User]

# Zero-width left-to-right mark, renders as an empty field name
_SPACER = "\u200e"

# Newest versions listed by /profile history. Embed descriptions are capped at 4096 characters
HISTORY_LIMIT = 25

# (field name, label, inline)
_PROFILE_LAYOUT: tuple[tuple[str, str, bool], ...] = (
    ("trainer_class", "Trainer Class", True),
    ("nature", "Nature", True),
    ("partner_pokemon", "Partner Pokémon", True),
    ("favourite_food", "Favourite Food", True),
    ("starting_region", "Starting Region", True),
    ("likes", "Likes", True),
    ("quotes", "Quotes", False),
)

_CODES_LAYOUT: tuple[tuple[str, str], ...] = (
    ("pokemon_go_code", "Pokémon Go Friend Code"),
    ("pokemon_pocket_code", "Pokémon TCG Pocket Friend Code"),
    ("switch_code", "Nintendo Switch Friend Code"),
)


def bot_colour(interaction: discord.Interaction) -> discord.Colour:
    """The bot's role colour in the current guild, blurple elsewhere."""
    me = interaction.guild.me if interaction.guild else None
    if me is not None and me.colour.value:
        return me.colour
    return discord.Colour.blurple()


def member_colour(member: Person, fallback: discord.Colour) -> discord.Colour:
    colour = getattr(member, "colour", None)
    return colour if colour is not None and colour.value else fallback


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def profile_embed(member: Person, profile_fields: ProfileFields, colour: discord.Colour) -> discord.Embed:
    """Render a member's profile: descriptive fields first, then friend codes."""
    embed = discord.Embed(colour=member_colour(member, colour))
    embed.set_author(name=member.display_name, icon_url=member.display_avatar.url)

    if profile_fields.thumbnail_url:
        embed.set_thumbnail(url=profile_fields.thumbnail_url)
    if profile_fields.image_url:
        embed.set_image(url=profile_fields.image_url)

    values = profile_fields.to_dict()
    has_profile = False
    for name, label, inline in _PROFILE_LAYOUT:
        if values[name]:
            embed.add_field(name=label, value=values[name], inline=inline)
            has_profile = True

    has_codes = any(values[name] for name, _ in _CODES_LAYOUT)

    if has_profile and has_codes:
        embed.description = "**User Profile**"
        embed.add_field(name=_SPACER, value="**Friend Codes**", inline=False)
    elif has_profile:
        embed.description = "**User Profile**"
    elif has_codes:
        embed.description = "**Friend Codes**"
    else:
        embed.description = "No information to show."

    for name, label in _CODES_LAYOUT:
        if values[name]:
            embed.add_field(name=label, value=values[name], inline=False)

    return embed


def profile_card_embed(member: Person, card: ProfileCard, colour: discord.Colour) -> discord.Embed:
    embed = profile_embed(member, card.fields, colour)
    if card.profile_id is not None and card.created_at is not None:
        embed.set_footer(text=f"Version #{card.profile_id}")
        embed.timestamp = _as_utc(card.created_at)
    return embed


def codes_embed(member: Person, user: Optional[User], colour: discord.Colour) -> discord.Embed:
    codes = user.codes() if user else {}
    return profile_embed(member, ProfileFields.from_mapping(codes), colour)


def _history_line(card: ProfileCard) -> str:
    when = discord.utils.format_dt(_as_utc(card.created_at), style="f") if card.created_at else "unknown"
    marker = " **(active)**" if card.is_active else ""
    return f"`#{card.profile_id}` {when}{marker}"


def history_embed(member: Person, cards: list[ProfileCard], colour: discord.Colour) -> discord.Embed:
    """List the newest versions of a member's profile and count the rest."""
    embed = discord.Embed(title="Profile History", colour=member_colour(member, colour))
    embed.set_author(name=member.display_name, icon_url=member.display_avatar.url)

    if not cards:
        embed.description = "No profile versions to show."
        return embed

    shown = cards[:HISTORY_LIMIT]
    lines = [_history_line(card) for card in shown]

    older = len(cards) - len(shown)
    if older:
        lines.append(f"…and {older} older version{'s' if older != 1 else ''}.")
        # The active version stays listed even when it is not among the newest
        active = next((card for card in cards[HISTORY_LIMIT:] if card.is_active), None)
        if active is not None:
            lines.append(_history_line(active))

    embed.description = "\n".join(lines)
    embed.set_footer(text="Use /profile restore to make an older version active.")
    return embed


def editor_embed(member: Person, profile_fields: ProfileFields, errors: list[str], colour: discord.Colour) -> discord.Embed:
    """The live preview shown while an edit session is open."""
    embed = profile_embed(member, profile_fields, colour)
    if errors:
        embed.add_field(name="Validation Error", value="\n".join(errors)[:1024], inline=False)
        embed.colour = discord.Colour.red()
    embed.set_footer(text="Changes are not saved until you press Save.")
    return embed


def saved_embed(colour: discord.Colour) -> discord.Embed:
    return discord.Embed(
        title="Changes Saved",
        description="Your changes have been saved successfully.",
        colour=colour,
    )


def discarded_embed(reason: Optional[str], colour: discord.Colour) -> discord.Embed:
    if reason == "timeout":
        description = "The editor timed out. No changes were saved."
    else:
        description = "No changes were saved."
    return discord.Embed(title="Changes Discarded", description=description, colour=colour)


def error_embed(title: str, description: str) -> discord.Embed:
    return discord.Embed(title=title, description=description, colour=discord.Colour.red())


def pokemon_embed(pokemon: Pokemon, colour: discord.Colour) -> discord.Embed:
    embed = discord.Embed(title=f"{pokemon.name} #{pokemon.id}", colour=colour)
    embed.add_field(name="Forms", value=", ".join(pokemon.forms) or "None", inline=False)
    if pokemon.sprite_url:
        embed.set_thumbnail(url=pokemon.sprite_url)
    return embed


def pokemon_not_found_embed(colour: discord.Colour) -> discord.Embed:
    return discord.Embed(
        title="Could not find requested Pokémon",
        description="Either no Pokémon exists with that name or a network error has occurred.",
        colour=colour,
    )


def pokemon_page_embed(page: PokemonPage, page_number: int, page_count: int, colour: discord.Colour) -> discord.Embed:
    description = "\n".join(f"{entry.name} #{entry.id}" for entry in page.entries)
    return discord.Embed(
        title=f"Pokémon Page {page_number}/{page_count}",
        description=description or "Nothing to show.",
        colour=colour,
    )


def working_embed(colour: discord.Colour) -> discord.Embed:
    return discord.Embed(title="Consulting the Pokédex", description="Just a moment...", colour=colour)
