"""User domain entities."""

from dataclasses import dataclass

CODE_FIELDS: tuple[str, ...] = ("pokemon_go_code", "pokemon_pocket_code", "switch_code")


@dataclass
class User:
    """A registered Discord user.

    ``discord_user_id`` is unique and never changes. The friend codes are
    stored directly on the user and replaced as a whole on update.
    """

    id: int
    discord_user_id: int
    pokemon_go_code: str | None = None
    pokemon_pocket_code: str | None = None
    switch_code: str | None = None

    def codes(self) -> dict[str, str | None]:
        return {name: getattr(self, name) for name in CODE_FIELDS}


@dataclass
class NewUser:
    """Fields for a user that has not been inserted yet."""

    discord_user_id: int
    pokemon_go_code: str | None = None
    pokemon_pocket_code: str | None = None
    switch_code: str | None = None
