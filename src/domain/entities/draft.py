"""Draft entity for the interactive editor."""

from dataclasses import dataclass, field


@dataclass
class Draft:
    """In-memory working copy of the fields being edited in one session.

    ``owner_id`` is the internal user id backing the draft, or ``None`` when
    the user has never been persisted. Nothing here touches storage.
    """

    values: dict[str, str | None] = field(default_factory=dict)
    owner_id: int | None = None

    def subset(self, names: tuple[str, ...]) -> dict[str, str | None]:
        """Current values for the given field names only."""
        return {name: self.values.get(name) for name in names}

    def merge(self, submitted: dict[str, str | None]) -> None:
        """Replace the submitted fields, including explicit clears."""
        self.values.update(submitted)

    def is_empty(self) -> bool:
        return all(value is None for value in self.values.values())
