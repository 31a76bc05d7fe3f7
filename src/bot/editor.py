"""Discord UI for edit sessions.

``DiscordEditorUI`` implements the ``EditorUI`` capability on top of one
ephemeral message: an ``EditorView`` with a button per field group plus Save
and Cancel, and a ``FieldGroupModal`` per sub-form. The view only accepts
interactions from the member who opened it.
"""

import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

import discord
import structlog

from bot.embeds import discarded_embed, error_embed, saved_embed
from domain.entities.draft import Draft
from domain.services.edit_session import CANCEL, SAVE, EditOutcome, EditSession, EditState
from domain.services.field_groups import FieldGroup

logger = structlog.get_logger()

Renderer = Callable[[Draft, list[str]], discord.Embed]


class FieldGroupModal(discord.ui.Modal):
    """Sub-form for one field group, pre-filled from the draft."""

    def __init__(self, group: FieldGroup, defaults: dict[str, Optional[str]], timeout: Optional[float]) -> None:
        super().__init__(title=group.title, timeout=timeout)
        self.group = group
        self.values: Optional[dict[str, Optional[str]]] = None
        self.interaction: Optional[discord.Interaction] = None
        self._inputs: dict[str, discord.ui.TextInput] = {}

        for spec in group.fields:
            text_input = discord.ui.TextInput(
                label=spec.label,
                style=discord.TextStyle.paragraph if spec.multiline else discord.TextStyle.short,
                placeholder=spec.placeholder,
                default=defaults.get(spec.name),
                required=False,
                max_length=spec.max_length,
            )
            self._inputs[spec.name] = text_input
            self.add_item(text_input)

    async def on_submit(self, interaction: discord.Interaction) -> None:
        # The response is sent by the editor once the submission is merged
        self.values = {name: text_input.value for name, text_input in self._inputs.items()}
        self.interaction = interaction
        self.stop()


@dataclass
class EditorEvent:
    choice: str
    interaction: discord.Interaction
    modal: Optional[FieldGroupModal] = None


class EditorView(discord.ui.View):
    """Buttons of an open editor. Clicks are queued for ``DiscordEditorUI``."""

    def __init__(self, owner_id: int, groups: tuple[FieldGroup, ...], timeout: float) -> None:
        super().__init__(timeout=timeout)
        self.owner_id = owner_id
        self.draft = Draft()
        self._events: asyncio.Queue[Optional[EditorEvent]] = asyncio.Queue()

        for group in groups:
            button = discord.ui.Button(label=group.button_label, style=discord.ButtonStyle.secondary)
            button.callback = self._group_callback(group)
            self.add_item(button)

        save = discord.ui.Button(label="Save", style=discord.ButtonStyle.success, row=1)
        save.callback = self._final_callback(SAVE)
        self.add_item(save)

        cancel = discord.ui.Button(label="Cancel", style=discord.ButtonStyle.danger, row=1)
        cancel.callback = self._final_callback(CANCEL)
        self.add_item(cancel)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id == self.owner_id:
            return True
        await interaction.response.send_message("This editor belongs to someone else.", ephemeral=True)
        return False

    async def on_timeout(self) -> None:
        self._events.put_nowait(None)

    async def next_event(self) -> Optional[EditorEvent]:
        """Wait for the next click. ``None`` once the view has timed out."""
        return await self._events.get()

    def _group_callback(self, group: FieldGroup):
        async def callback(interaction: discord.Interaction) -> None:
            # A modal must be the direct response to the click
            modal = FieldGroupModal(group, self.draft.subset(group.names), timeout=self.timeout)
            await interaction.response.send_modal(modal)
            self._events.put_nowait(EditorEvent(group.key, interaction, modal))

        return callback

    def _final_callback(self, choice: str):
        async def callback(interaction: discord.Interaction) -> None:
            await interaction.response.defer()
            self._events.put_nowait(EditorEvent(choice, interaction))

        return callback


class DiscordEditorUI:
    """Drives an ``EditorView`` on behalf of an ``EditSession``."""

    def __init__(
        self,
        interaction: discord.Interaction,
        groups: tuple[FieldGroup, ...],
        render: Renderer,
        timeout: float,
    ) -> None:
        self._interaction = interaction
        self._render = render
        self._view = EditorView(interaction.user.id, groups, timeout)
        self._responder: Optional[discord.Interaction] = None
        self._pending: Optional[EditorEvent] = None
        self._stashed: list[Optional[EditorEvent]] = []
        self._sent = False

    @property
    def view(self) -> EditorView:
        return self._view

    async def choose(self, draft: Draft, errors: list[str]) -> Optional[str]:
        self._view.draft = draft
        await self._show(self._render(draft, errors), self._view)

        event = self._stashed.pop(0) if self._stashed else await self._view.next_event()
        self._pending = event
        if event is None:
            return None
        self._responder = event.interaction
        return event.choice

    async def fill(self, group: FieldGroup, defaults: dict[str, Optional[str]]) -> Optional[dict[str, Optional[str]]]:
        modal = self._pending.modal if self._pending else None
        if modal is None or modal.group.key != group.key:
            raise RuntimeError(f"No open form for field group {group.key!r}")

        # A click on the editor while the form is open means the form was dismissed
        submitted = asyncio.ensure_future(modal.wait())
        clicked = asyncio.ensure_future(self._view.next_event())
        try:
            await asyncio.wait({submitted, clicked}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            submitted.cancel()

        if clicked.done():
            self._stashed.append(clicked.result())
        else:
            clicked.cancel()

        if modal.values is None or modal.interaction is None:
            modal.stop()
            # The click that opened the form was answered with the modal, not a message
            self._responder = None
            return None

        self._responder = modal.interaction
        return modal.values

    def close(self) -> None:
        """Stop listening for clicks."""
        self._view.stop()

    async def finish(self, embed: discord.Embed) -> None:
        """Replace the editor with a final message and stop listening."""
        self.close()
        await self._show(embed, None)

    async def abort(self, embed: discord.Embed) -> None:
        """Stop listening and strip the buttons after the session failed."""
        self.close()
        if not self._sent:
            return
        try:
            await self._show(embed, None)
        except discord.HTTPException:
            logger.warning("editor_abort_failed", discord_user_id=self._interaction.user.id, exc_info=True)

    async def _show(self, embed: discord.Embed, view: Optional[discord.ui.View]) -> None:
        if not self._sent:
            self._sent = True
            if view is None:
                await self._interaction.response.send_message(embed=embed, ephemeral=True)
            else:
                await self._interaction.response.send_message(embed=embed, view=view, ephemeral=True)
            return

        responder = self._responder
        self._responder = None
        try:
            if responder is not None and not responder.response.is_done():
                await responder.response.edit_message(embed=embed, view=view)
            elif responder is not None:
                await responder.edit_original_response(embed=embed, view=view)
            else:
                await self._interaction.edit_original_response(embed=embed, view=view)
        except discord.NotFound:
            # The ephemeral message was dismissed by the member
            logger.info("editor_message_gone", discord_user_id=self._interaction.user.id)


async def run_editor(session: EditSession, ui: DiscordEditorUI, colour: discord.Colour) -> EditOutcome:
    """Run a session to completion and replace the editor with its outcome."""
    try:
        outcome = await session.run()
    except Exception:
        await ui.abort(error_embed("Editor Closed", "Something went wrong. No changes were saved."))
        raise
    except BaseException:
        ui.close()
        raise

    if outcome.state is EditState.COMMITTED:
        await ui.finish(saved_embed(colour))
    else:
        await ui.finish(discarded_embed(outcome.reason, colour))
    return outcome
