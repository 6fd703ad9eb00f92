"""Line boundary queries over a TextBuffer.

All functions are pure: they read ``buffer.data[:buffer.length]`` and return
offsets, never touching ``dot``.
"""

from __future__ import annotations

from .text import TextBuffer

NEWLINE = 0x0A


def line_begin(buffer: TextBuffer, offset: int) -> int:
    """Offset just after the nearest ``\\n`` before ``offset``, else 0."""

    if offset <= 0:
        return 0
    offset = min(offset, buffer.length)
    found = buffer.data.rfind(b"\n", 0, offset)
    return found + 1


def line_end(buffer: TextBuffer, offset: int) -> int:
    """Offset of the next ``\\n`` at or after ``offset``, else buffer end."""

    if offset < 0 or offset >= buffer.length:
        return max(0, min(offset, buffer.length))
    found = buffer.data.find(b"\n", offset, buffer.length)
    return buffer.length if found < 0 else found


def prev_line(buffer: TextBuffer, offset: int) -> int:
    offset = line_begin(buffer, offset)
    if 0 < offset <= buffer.length and buffer.data[offset - 1] == NEWLINE:
        offset -= 1
    return line_begin(buffer, offset)


def next_line(buffer: TextBuffer, offset: int) -> int:
    offset = line_end(buffer, offset)
    if offset < buffer.length and buffer.data[offset] == NEWLINE:
        offset += 1
    return offset


def count_lines(buffer: TextBuffer, start: int = 0, end: int | None = None) -> int:
    """Number of ``\\n`` bytes in ``[start, end)``."""

    stop = buffer.length if end is None else min(end, buffer.length)
    start = max(0, start)
    if start >= stop:
        return 0
    return buffer.data.count(b"\n", start, stop)


def line_at_index(buffer: TextBuffer, index: int) -> int:
    """Start offset of the 1-based ``index``-th line."""

    offset = 0
    while index > 1:
        offset = next_line(buffer, offset)
        index -= 1
    return offset


def total_lines(buffer: TextBuffer) -> int:
    """Displayed line count: an unterminated last line still counts."""

    count = count_lines(buffer)
    if buffer.length and buffer.data[buffer.length - 1] != NEWLINE:
        count += 1
    return count


def end_screen(buffer: TextBuffer, screenbegin: int, rows: int) -> int:
    """End offset of the last text line that fits above the status row."""

    offset = screenbegin
    for _ in range(rows - 2):
        offset = next_line(buffer, offset)
    return line_end(buffer, offset)


__all__ = [
    "line_begin",
    "line_end",
    "prev_line",
    "next_line",
    "count_lines",
    "line_at_index",
    "total_lines",
    "end_screen",
]
