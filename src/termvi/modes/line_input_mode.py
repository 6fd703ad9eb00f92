"""Status-row line input used for colon commands and search patterns."""

from __future__ import annotations

from typing import Optional

from termvi.config import MAX_INPUT_LEN
from termvi.runtime import telemetry
from termvi.state import LineInput

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import KeymapPort

TAB = 0x09


def _accepts(code: int) -> bool:
    return code == TAB or (0x20 <= code <= 0xFF and code != 0x7F)


class LineInputMode(Mode):
    """Collects one line after the prompt held in ``extras["line_input"]``.

    Typed bytes are echoed straight to the terminal; the submit, cancel and
    erase keys are bound in the ``line_input`` keymap.
    """

    name = "line_input"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("termvi.modes.line_input")
        self.keymap = KeymapPort.attach(context)

    @property
    def current(self) -> Optional[LineInput]:
        pending = self.context.extras.get("line_input")
        return pending if isinstance(pending, LineInput) else None

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.keymap.set_flag("line_input_active", True)
        pending = self.current
        self.redisplay()
        self.context.bus.emit("line_input.start", pending.prompt if pending else b"")

    def redisplay(self) -> None:
        """Draw the prompt and the text typed so far on the status row."""

        pending = self.current
        self.state.screen.go_bottom_and_clear_to_eol()
        if pending is not None:
            self.state.driver.write(pending.prompt + pending.value)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.keymap.set_flag("line_input_active", False)
        self.context.bus.emit("line_input.end", None)

    def handle_key(self, key: KeyInput) -> ModeResult:
        pending = self.current
        if pending is None:
            return ModeResult(consumed=True, switch_to="normal", status="line_input_lost")

        result = self.keymap.lookup(self.name, (key.code,))
        if result.status == "match" and result.match:
            return self.keymap.run(result.match)

        if not key.is_byte or not _accepts(key.code):
            return ModeResult(consumed=False, status="miss")
        if len(pending.text) >= MAX_INPUT_LEN:
            return ModeResult(consumed=True, status="full")
        pending.text.append(key.code)
        self.state.driver.write(bytes((key.code,)))
        return ModeResult(consumed=True, status="editing")
