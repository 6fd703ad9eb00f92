"""Insert mode: typed bytes go into the buffer at the cursor."""

from __future__ import annotations

from termvi.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import KeymapPort


class InsertMode(Mode):
    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("termvi.modes.insert")
        self.keymap = KeymapPort.attach(context)

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.state.command.enter_insert_mode()

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self.keymap.lookup(self.name, (key.code,))
        if result.status == "match" and result.match:
            return self.keymap.run(result.match)

        # NUL and the negative keycodes without a binding are dropped.
        if not key.is_byte or key.code == 0:
            return ModeResult(consumed=False, status="miss")

        buf = self.state.buffer
        buf.dot = buf.insert_char(buf.dot, key.code, self.state.command)
        return ModeResult(consumed=True, status="inserted")
