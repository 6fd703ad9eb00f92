"""One editing session per file: load, read-dispatch-refresh loop, teardown."""

from __future__ import annotations

from functools import partial
from typing import Iterable, Optional

from termvi import keycodes
from termvi.buffer import count_lines
from termvi.config import EditorConfig
from termvi.modes.base_mode import KeyInput, ModeBus, ModeContext
from termvi.modes.line_input_mode import LineInputMode
from termvi.modes.mode_manager import ModeManager
from termvi.runtime import telemetry
from termvi.state import EditorState
from termvi.terminal import FileStore, TerminalDriver


class EditSession:
    """Drives a single ``EditorState`` until a quit command ends it."""

    def __init__(self, state: EditorState, *, bus: Optional[ModeBus] = None) -> None:
        self.state = state
        self.bus = bus or ModeBus()
        self.context = ModeContext(state=state, bus=self.bus)
        self.modes = ModeManager.with_default_modes(self.context)
        self.logger = telemetry.get_logger("termvi.session")

    @classmethod
    def open(
        cls,
        filename: str,
        *,
        driver: TerminalDriver,
        store: FileStore,
        config: Optional[EditorConfig] = None,
        bus: Optional[ModeBus] = None,
    ) -> "EditSession":
        state = EditorState.create(
            driver=driver, store=store, config=config, filename=filename
        )
        session = cls(state, bus=bus)
        session.load()
        return session

    def load(self) -> int:
        """Read the file into the empty buffer.

        A missing or unreadable file starts a one-newline buffer that counts
        as unmodified. Returns the bytes read, or ``-1`` for a new file.
        """

        state = self.state
        buf = state.buffer
        name = state.filename
        count = -1
        if name:
            count = buf.insert_from_source(partial(state.store.read_all, name), 0)
        if count < 0:
            buf.insert_char(0, keycodes.LF)
            buf.modified_count = 0
            if name:
                state.status.set(f'"{name}" [New file]')
        else:
            state.status.set(f'"{name}" {count_lines(buf)}L, {buf.length}C')
        buf.dot = 0
        telemetry.record_event(
            "session.open",
            data={"file": name or "[No Name]", "bytes": count},
        )
        return count

    def resize(self) -> None:
        """Adopt the current window size and repaint everything."""

        state = self.state
        size = state.driver.query_window_size()
        if size is None:
            size = (state.config.default_rows, state.config.default_columns)
        rows, columns = size
        state.screen.new_screen(rows, columns)
        telemetry.record_event(
            "session.resize",
            level="debug",
            data={"rows": state.viewport.rows, "columns": state.viewport.columns},
        )
        state.screen.redraw(full_redraw=True)
        active = self.modes.active_mode
        if isinstance(active, LineInputMode):
            active.redisplay()

    def handle_code(self, code: int) -> None:
        if code == keycodes.RESIZE:
            self.resize()
            return
        self.modes.handle_key(KeyInput(code))

    def render(self) -> None:
        """Refresh the text rows, then show any pending status message.

        Skipped while the status row is collecting line input so the
        terminal cursor stays after the typed text.
        """

        if self.modes.active_name == LineInputMode.name:
            return
        self.state.screen.refresh()
        self.state.status.show(self.state.screen)

    def run(self) -> None:
        """Loop until quit; ``DriverReadError`` propagates to the caller."""

        state = self.state
        self.resize()
        state.status.show(state.screen)
        while state.command.editing:
            self.handle_code(state.driver.read_code())
            if state.command.editing and not state.driver.has_pending():
                self.render()
        telemetry.record_event(
            "session.end",
            data={"file": state.filename or "[No Name]", "modified": state.buffer.modified},
        )


def edit_files(
    files: Iterable[str],
    *,
    driver: TerminalDriver,
    store: FileStore,
    config: Optional[EditorConfig] = None,
) -> None:
    """Edit each file in turn; no files means one unnamed buffer."""

    names = list(files) or [""]
    for name in names:
        EditSession.open(name, driver=driver, store=store, config=config).run()


__all__ = ["EditSession", "edit_files"]
