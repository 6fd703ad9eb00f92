"""Map the buffer cursor ("dot") to a screen position.

Column rule shared with the renderer: a tab advances to the next tab stop,
any other control byte is shown in caret notation and takes two cells.
"""

from __future__ import annotations

from typing import Tuple

from termvi.buffer import TextBuffer, count_lines, end_screen, line_begin, next_line

from .viewport import ViewportState

NEWLINE = 0x0A
TAB = 0x09


def is_control(byte: int) -> bool:
    return byte < 0x20 or byte == 0x7F


def next_tabstop(col: int, tabstop: int) -> int:
    """Last cell of the tab cell that contains ``col``."""

    return col + ((tabstop - 1) - (col % tabstop))


def advance_column(col: int, byte: int, tabstop: int) -> int:
    """Column following ``byte`` when it is drawn starting at ``col``."""

    if byte == TAB:
        return next_tabstop(col, tabstop) + 1
    if is_control(byte):
        return col + 2
    return col + 1


def column_of(buffer: TextBuffer, offset: int, tabstop: int) -> int:
    """Display column of ``offset`` within its line."""

    col = 0
    pos = line_begin(buffer, offset)
    while pos < offset:
        byte = buffer.data[pos]
        if byte == NEWLINE:
            break
        col = advance_column(col, byte, tabstop)
        pos += 1
    if buffer.char_at(offset) == TAB:
        col = next_tabstop(col, tabstop)
    return col


def scroll_to_cursor(buffer: TextBuffer, viewport: ViewportState) -> None:
    """Move ``screenbegin`` the minimum needed to show the cursor's line."""

    begin = line_begin(buffer, buffer.dot)
    if begin < viewport.screenbegin:
        viewport.screenbegin = begin
        return
    last = end_screen(buffer, viewport.screenbegin, viewport.rows)
    if begin > last:
        for _ in range(count_lines(buffer, last, begin)):
            viewport.screenbegin = next_line(buffer, viewport.screenbegin)


def sync_cursor(buffer: TextBuffer, viewport: ViewportState) -> Tuple[int, int]:
    """Scroll if needed and return ``(crow, ccol)`` for ``buffer.dot``.

    ``ccol`` excludes the line number gutter. Both values are stored on the
    viewport for column-preserving vertical motion.
    """

    scroll_to_cursor(buffer, viewport)
    begin = line_begin(buffer, buffer.dot)
    row = 0
    pos = viewport.screenbegin
    while row < viewport.text_rows and pos != begin:
        pos = next_line(buffer, pos)
        row += 1
    row = min(row, viewport.text_rows - 1)
    col = column_of(buffer, buffer.dot, viewport.tabstop)
    viewport.crow, viewport.ccol = row, col
    return row, col


def move_to_col(buffer: TextBuffer, offset: int, col: int, tabstop: int) -> int:
    """Offset on the line of ``offset`` displayed at or before column ``col``.

    Never lands on the line terminator of a non-empty line.
    """

    begin = line_begin(buffer, offset)
    pos = begin
    current = 0
    while pos < buffer.length:
        byte = buffer.data[pos]
        if byte == NEWLINE:
            break
        following = advance_column(current, byte, tabstop)
        if following > col:
            break
        current = following
        pos += 1
    if pos > begin and buffer.char_at(pos) in (NEWLINE, None):
        pos -= 1
    return pos


__all__ = [
    "is_control",
    "next_tabstop",
    "advance_column",
    "column_of",
    "scroll_to_cursor",
    "sync_cursor",
    "move_to_col",
]
