"""Differential renderer keeping the terminal in step with the buffer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from termvi.buffer import TextBuffer, count_lines, next_line, total_lines
from termvi.runtime import telemetry

from . import escapes
from .cursor import is_control, sync_cursor
from .viewport import ViewportState, VirtualScreen

if TYPE_CHECKING:
    from termvi.terminal import TerminalDriver

NEWLINE = 0x0A
TAB = 0x09
FILLER = b"~"


class ScreenModel:
    """Formats visible lines and writes only the cells that changed."""

    def __init__(
        self,
        buffer: TextBuffer,
        viewport: ViewportState,
        driver: "TerminalDriver",
    ) -> None:
        self.buffer = buffer
        self.viewport = viewport
        self.driver = driver
        self.logger = telemetry.get_logger("termvi.screen")
        self.virtual = VirtualScreen(viewport.rows, viewport.columns)

    def new_screen(self, rows: int, columns: int) -> None:
        self.viewport.resize(rows, columns)
        self.virtual = VirtualScreen(self.viewport.rows, self.viewport.columns)

    # -- terminal primitives -------------------------------------------

    def place_cursor(self, row: int, col: int) -> None:
        row = max(0, min(row, self.viewport.rows - 1))
        col = max(0, min(col, self.viewport.columns - 1))
        self.driver.write(escapes.cursor_position(row, col))

    def clear_to_eol(self) -> None:
        self.driver.write(escapes.CLEAR_TO_EOL)

    def clear_to_eos(self) -> None:
        self.driver.write(escapes.CLEAR_TO_EOS)

    def go_bottom_and_clear_to_eol(self) -> None:
        self.place_cursor(self.viewport.rows - 1, 0)
        self.clear_to_eol()

    def place_text_cursor(self) -> None:
        vp = self.viewport
        self.place_cursor(vp.crow, vp.ccol + vp.line_number_width)

    # -- formatting ----------------------------------------------------

    def update_gutter(self) -> int:
        vp = self.viewport
        if not vp.line_numbers:
            vp.line_number_width = 0
        else:
            vp.line_number_width = len(str(max(1, total_lines(self.buffer)))) + 1
        return vp.line_number_width

    def _gutter(self, offset: int) -> bytes:
        width = self.viewport.line_number_width
        if not width:
            return b""
        number = count_lines(self.buffer, 0, offset) + 1
        return b"%*d " % (width - 1, number)

    def filler_row(self) -> bytes:
        return FILLER + b" " * (self.viewport.columns - 1)

    def format_line(self, offset: int) -> bytes:
        """Render the line starting at ``offset`` into ``columns`` cells."""

        vp = self.viewport
        buf = self.buffer
        if offset >= buf.length:
            return self.filler_row()

        width = vp.line_number_width
        limit = vp.columns + vp.tabstop
        out = bytearray(self._gutter(offset))
        col = width
        src = offset
        while col < limit and src < buf.length:
            byte = buf.data[src]
            src += 1
            if byte == NEWLINE:
                break
            if byte == TAB:
                out.append(0x20)
                col += 1
                while (col - width) % vp.tabstop:
                    out.append(0x20)
                    col += 1
            elif is_control(byte):
                out.append(0x5E)  # ^
                out.append(byte ^ 0x40)
                col += 2
            else:
                out.append(byte)
                col += 1
        if len(out) < vp.columns:
            out.extend(b" " * (vp.columns - len(out)))
        return bytes(out[: vp.columns])

    # -- drawing -------------------------------------------------------

    def refresh(self, full_redraw: bool = False) -> int:
        """Bring the terminal in line with the buffer.

        Returns the number of text cells written, which is proportional to
        the changed columns unless ``full_redraw`` is set.
        """

        vp = self.viewport
        buf = self.buffer
        written = 0
        with telemetry.span(
            "screen::refresh",
            component="screen",
            metadata={"full": full_redraw, "buffer": buf.name or "[No Name]"},
        ) as handle:
            self.update_gutter()
            sync_cursor(buf, vp)
            offset = vp.screenbegin
            more = offset < buf.length
            for li in range(vp.text_rows):
                if more:
                    out = self.format_line(offset)
                    following = next_line(buf, offset)
                    more = following < buf.length
                    offset = following
                else:
                    out = self.filler_row()
                changed = self._changed_span(li, out, full_redraw)
                if changed is None:
                    continue
                cs, ce = changed
                chunk = out[cs : ce + 1]
                self.virtual.write(li, cs, chunk)
                self.place_cursor(li, cs)
                self.driver.write(chunk)
                written += len(chunk)
            handle.add_metadata("cells", written)
            self.place_text_cursor()
        return written

    def _changed_span(
        self, li: int, out: bytes, full_redraw: bool
    ) -> Optional[tuple[int, int]]:
        last = self.viewport.columns - 1
        if full_redraw:
            return 0, last
        current = self.virtual.row(li)
        if current == out:
            return None
        cs = 0
        ce = last
        changed = False
        while cs <= ce:
            if out[cs] != current[cs]:
                changed = True
                break
            cs += 1
        while ce >= cs:
            if out[ce] != current[ce]:
                changed = True
                break
            ce -= 1
        if not changed:
            return None
        cs = max(cs, 0)
        ce = min(ce, last)
        if cs > ce:
            return 0, last
        return cs, ce

    def redraw(self, full_redraw: bool = False) -> int:
        """Clear the terminal and repaint every text row."""

        self.place_cursor(0, 0)
        self.clear_to_eos()
        self.virtual.erase()
        return self.refresh(full_redraw)


__all__ = ["ScreenModel"]
