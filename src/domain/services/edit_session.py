"""Interactive multi-step edit session.

An ``EditSession`` stages edits to a ``Draft`` across several UI round trips
and persists the draft only when the user saves. The session never talks to
Discord directly: it drives an ``EditorUI`` and persists through a
``DraftTarget``, so the same state machine serves profile versions and the
user's own friend codes.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, Optional, Protocol, TypeVar

import structlog

from core.exceptions import ValidationError
from domain.entities.draft import Draft
from domain.services.field_groups import FieldGroup

logger = structlog.get_logger()

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

SAVE = "save"
CANCEL = "cancel"


class EditState(StrEnum):
    LOADING = "loading"
    AWAITING_CHOICE = "awaiting_choice"
    AWAITING_SUBMISSION = "awaiting_submission"
    COMMITTED = "committed"
    ABANDONED = "abandoned"


class EditorUI(Protocol):
    """What the session needs from the user interface."""

    async def choose(self, draft: Draft, errors: list[str]) -> Optional[str]:
        """Show the draft and wait for one choice.

        Returns a group key, ``SAVE`` or ``CANCEL``; ``None`` on timeout.
        ``errors`` lists the validation failures of the previous submission.
        """
        ...

    async def fill(self, group: FieldGroup, defaults: dict[str, Optional[str]]) -> Optional[dict[str, Optional[str]]]:
        """Present a sub-form pre-filled with ``defaults``.

        Returns the submitted values, or ``None`` if the form was dismissed
        or timed out.
        """
        ...


class DraftTarget(Protocol[T_co]):
    """Where a draft comes from and where it goes on save."""

    groups: tuple[FieldGroup, ...]

    async def load(self) -> Draft:
        ...

    async def save(self, draft: Draft) -> T_co:
        ...


@dataclass
class EditOutcome(Generic[T]):
    """Terminal result of a session."""

    state: EditState
    saved: Optional[T] = None
    reason: Optional[str] = None


@dataclass
class EditSession(Generic[T]):
    """State machine for one editor invocation.

    Owned by exactly one task. Validation failures are reported back to the
    UI and leave the draft untouched; any other failure abandons the session
    and propagates.
    """

    target: DraftTarget[T]
    ui: EditorUI
    discord_user_id: int
    state: EditState = EditState.LOADING
    draft: Optional[Draft] = None
    _groups: dict[str, FieldGroup] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._groups = {group.key: group for group in self.target.groups}
        for reserved in (SAVE, CANCEL):
            if reserved in self._groups:
                raise ValueError(f"Field group key {reserved!r} is reserved")

    @property
    def groups(self) -> tuple[FieldGroup, ...]:
        return self.target.groups

    async def run(self) -> EditOutcome[T]:
        """Drive the session until it is committed or abandoned."""
        log = logger.bind(discord_user_id=self.discord_user_id)
        try:
            return await self._run(log)
        except BaseException as e:
            # Validation errors are handled inside; anything reaching here ends the session
            self.state = EditState.ABANDONED
            log.warning("edit_session_failed", error_type=type(e).__name__)
            raise

    async def _run(self, log: Any) -> EditOutcome[T]:
        self.state = EditState.LOADING
        draft = await self.target.load()
        self.draft = draft
        log.info("edit_session_opened", has_owner=draft.owner_id is not None)

        errors: list[str] = []
        while True:
            self.state = EditState.AWAITING_CHOICE
            choice = await self.ui.choose(draft, errors)
            errors = []

            if choice is None:
                return self._abandon(log, "timeout")
            if choice == CANCEL:
                return self._abandon(log, "cancelled")
            if choice == SAVE:
                saved = await self.target.save(draft)
                self.state = EditState.COMMITTED
                log.info("edit_session_committed")
                return EditOutcome(state=self.state, saved=saved)

            group = self._groups.get(choice)
            if group is None:
                raise ValueError(f"Unknown edit choice: {choice!r}")

            self.state = EditState.AWAITING_SUBMISSION
            submitted = await self.ui.fill(group, draft.subset(group.names))
            if submitted is None:
                log.debug("edit_session_form_dismissed", group=group.key)
                continue

            try:
                cleaned = group.validate(submitted)
            except ValidationError as e:
                errors = e.errors
                log.info("edit_session_validation_failed", group=group.key, error_count=len(errors))
                continue

            draft.merge(cleaned)
            log.debug("edit_session_group_merged", group=group.key)

    def _abandon(self, log: Any, reason: str) -> EditOutcome[T]:
        self.state = EditState.ABANDONED
        self.draft = None
        log.info("edit_session_abandoned", reason=reason)
        return EditOutcome(state=self.state, reason=reason)
