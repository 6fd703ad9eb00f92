"""Command ("normal") mode: counts, motions and editing commands."""

from __future__ import annotations

from typing import List

from termvi import keycodes
from termvi.runtime import telemetry
from termvi.state import EditMode

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import KeymapPort

NEWLINE = 0x0A


class NormalMode(Mode):
    """Resolves keys through the normal keymap.

    The repeat count survives digits, pending sequences (``g`` of ``gg``)
    and the wait after ``r``; every other key clears it once handled.
    """

    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("termvi.modes.normal")
        self.keymap = KeymapPort.attach(context)
        self._pending: List[int] = []

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        command = self.state.command
        if command.mode is not EditMode.COMMAND:
            command.mode = EditMode.COMMAND

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        command = self.state.command
        if command.mode is EditMode.REPLACE_PENDING:
            return self._finish_replace(key)

        self.keymap.set_flag("count_pending", command.repeat_count > 0)
        self._pending.append(key.code)
        result = self.keymap.lookup(self.name, self._pending)

        if result.status == "pending":
            return ModeResult(
                consumed=True, status="pending", message="awaiting_sequence"
            )

        dropped = len(self._pending) > 1
        self._pending.clear()

        if result.status == "match" and result.match:
            outcome = self.keymap.run(result.match)
            keeps_count = result.match.action.keeps_count
            if not keeps_count and command.mode is not EditMode.REPLACE_PENDING:
                command.reset_count()
            return outcome

        command.reset_count()
        return ModeResult(consumed=dropped, status="miss")

    def _finish_replace(self, key: KeyInput) -> ModeResult:
        command = self.state.command
        command.mode = EditMode.COMMAND
        command.reset_count()
        buf = self.state.buffer
        if key.code == keycodes.ESC or not key.is_byte:
            return ModeResult(consumed=True, status="replace_cancel")
        if buf.char_at(buf.dot) in (NEWLINE, None):
            return ModeResult(consumed=True, status="noop")
        buf.replace_byte(buf.dot, key.code)
        return ModeResult(consumed=True, status="replaced")
