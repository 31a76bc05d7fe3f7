"""Profile domain entities."""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime


@dataclass
class ProfileFields:
    """The editable, optional text attributes of one profile version."""

    thumbnail_url: str | None = None
    image_url: str | None = None

    trainer_class: str | None = None
    nature: str | None = None
    partner_pokemon: str | None = None
    starting_region: str | None = None
    favourite_food: str | None = None
    likes: str | None = None
    quotes: str | None = None

    pokemon_go_code: str | None = None
    pokemon_pocket_code: str | None = None
    switch_code: str | None = None

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Field names in storage order."""
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(cls, values: dict[str, str | None]) -> "ProfileFields":
        """Build from a mapping, ignoring keys that are not profile fields."""
        known = set(cls.names())
        return cls(**{k: v for k, v in values.items() if k in known})

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)

    def is_empty(self) -> bool:
        return all(value is None for value in self.to_dict().values())


@dataclass
class Profile:
    """One immutable snapshot of a user's profile.

    Snapshots are append-only. Only ``is_active`` ever changes after insert,
    and at most one snapshot per user is active at a time.
    """

    id: int
    user_id: int
    fields: ProfileFields = field(default_factory=ProfileFields)
    created_at: datetime = field(default_factory=datetime.now)
    is_active: bool = False


@dataclass(frozen=True, slots=True)
class ProfileCard:
    """Read-only value object: what the bot renders for a member's profile."""

    discord_user_id: int
    profile_id: int | None
    fields: ProfileFields
    created_at: datetime | None = None
    is_active: bool = False
