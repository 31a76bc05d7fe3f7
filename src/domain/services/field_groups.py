"""Field groups editable together in one sub-form."""

from dataclasses import dataclass
from typing import Callable, Optional

import pydantic
from pydantic import HttpUrl, TypeAdapter

from core.exceptions import ValidationError
from domain.services.friend_codes import (
    parse_pokemon_go_code,
    parse_pokemon_pocket_code,
    parse_switch_code,
)

# Discord modals hold at most five text inputs
MAX_FIELDS_PER_GROUP = 5

_http_url = TypeAdapter(HttpUrl)


@dataclass(frozen=True)
class FieldSpec:
    """One editable field: how it is labelled and how its input is checked."""

    name: str
    label: str
    placeholder: Optional[str] = None
    max_length: int = 100
    multiline: bool = False
    parser: Optional[Callable[[str], Optional[str]]] = None
    error_template: str = "`{value}` is not a valid value."


@dataclass(frozen=True)
class FieldGroup:
    """A fixed subset of fields submitted together."""

    key: str
    title: str
    button_label: str
    fields: tuple[FieldSpec, ...]

    def __post_init__(self) -> None:
        if len(self.fields) > MAX_FIELDS_PER_GROUP:
            raise ValueError(f"Field group {self.key!r} has more than {MAX_FIELDS_PER_GROUP} fields")

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def validate(self, submitted: dict[str, Optional[str]]) -> dict[str, Optional[str]]:
        """Clean a submission for this group.

        Every field of the group is present in the result. Blank values become
        ``None``; the rest are stripped and canonicalized by the field parser.
        Raises ``ValidationError`` listing every rejected field.
        """
        cleaned: dict[str, Optional[str]] = {}
        errors: list[str] = []

        for spec in self.fields:
            raw = submitted.get(spec.name)
            value = raw.strip() if raw else ""
            if not value:
                cleaned[spec.name] = None
                continue

            if spec.parser is None:
                cleaned[spec.name] = value
                continue

            parsed = spec.parser(value)
            if parsed is None:
                errors.append(spec.error_template.format(value=value))
            else:
                cleaned[spec.name] = parsed

        if errors:
            raise ValidationError(errors)
        return cleaned


def parse_http_url(value: str) -> Optional[str]:
    """Return ``value`` unchanged if it is an http(s) URL."""
    try:
        _http_url.validate_python(value)
    except pydantic.ValidationError:
        return None
    return value


POKEMON_GO_CODE = FieldSpec(
    name="pokemon_go_code",
    label="Pokémon Go Friend Code",
    placeholder="0000 0000 0000",
    max_length=14,
    parser=parse_pokemon_go_code,
    error_template="`{value}` is not a valid Pokémon Go friend code.",
)
POKEMON_POCKET_CODE = FieldSpec(
    name="pokemon_pocket_code",
    label="Pokémon TCG Pocket Friend Code",
    placeholder="0000 0000 0000 0000",
    max_length=19,
    parser=parse_pokemon_pocket_code,
    error_template="`{value}` is not a valid Pokémon TCG Pocket friend code.",
)
SWITCH_CODE = FieldSpec(
    name="switch_code",
    label="Nintendo Switch Friend Code",
    placeholder="SW-0000-0000-0000",
    max_length=17,
    parser=parse_switch_code,
    error_template="`{value}` is not a valid switch friend code.",
)

POKEMON_GROUP = FieldGroup(
    key="pokemon",
    title="Pokémon Info",
    button_label="Edit Pokémon Info",
    fields=(
        FieldSpec("trainer_class", "Trainer Class", "Ace Trainer"),
        FieldSpec("nature", "Nature", "Jolly"),
        FieldSpec("partner_pokemon", "Partner Pokémon", "Pikachu"),
        FieldSpec("starting_region", "Starting Region", "Kanto"),
    ),
)

PERSONAL_GROUP = FieldGroup(
    key="personal",
    title="Personal Info",
    button_label="Edit Personal Info",
    fields=(
        FieldSpec("favourite_food", "Favourite Food"),
        FieldSpec("likes", "Likes", max_length=300, multiline=True),
        FieldSpec("quotes", "Quotes", max_length=1000, multiline=True),
    ),
)

CODES_GROUP = FieldGroup(
    key="codes",
    title="Friend Codes",
    button_label="Edit Friend Codes",
    fields=(POKEMON_GO_CODE, POKEMON_POCKET_CODE, SWITCH_CODE),
)

IMAGES_GROUP = FieldGroup(
    key="images",
    title="Images",
    button_label="Edit Images",
    fields=(
        FieldSpec(
            "thumbnail_url",
            "Thumbnail URL",
            "https://",
            max_length=500,
            parser=parse_http_url,
            error_template="`{value}` is not a valid thumbnail URL.",
        ),
        FieldSpec(
            "image_url",
            "Image URL",
            "https://",
            max_length=500,
            parser=parse_http_url,
            error_template="`{value}` is not a valid image URL.",
        ),
    ),
)

PROFILE_GROUPS: tuple[FieldGroup, ...] = (POKEMON_GROUP, PERSONAL_GROUP, CODES_GROUP, IMAGES_GROUP)
