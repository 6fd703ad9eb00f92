"""Cursor motions and viewport scrolling bound in the normal keymap.

Every motion honours the pending repeat count and is a silent no-op at the
buffer boundaries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from termvi.buffer import (
    end_screen,
    line_at_index,
    line_begin,
    line_end,
    next_line,
    prev_line,
)
from termvi.screen import move_to_col

if TYPE_CHECKING:
    from termvi.keymaps import ResolutionMatch
    from termvi.modes.base_mode import ModeContext
    from termvi.state import EditorState

NEWLINE = 0x0A
BLANKS = (0x20, 0x09)


def _repeat(state: "EditorState", step: Callable[["EditorState"], bool]) -> None:
    """Run ``step`` up to count times, stopping once it cannot move."""

    for _ in range(state.command.take_count()):
        if not step(state):
            break


def step_left(state: "EditorState") -> bool:
    buf = state.buffer
    if buf.dot > 0 and buf.data[buf.dot - 1] != NEWLINE:
        buf.dot -= 1
        return True
    return False


def step_right(state: "EditorState") -> bool:
    buf = state.buffer
    if (
        buf.dot < buf.length - 1
        and buf.data[buf.dot] != NEWLINE
        and buf.data[buf.dot + 1] != NEWLINE
    ):
        buf.dot += 1
        return True
    return False


def step_down(state: "EditorState") -> bool:
    buf = state.buffer
    target = next_line(buf, buf.dot)
    if target >= buf.length:
        return False
    buf.dot = move_to_col(buf, target, state.viewport.ccol, state.viewport.tabstop)
    return True


def step_up(state: "EditorState") -> bool:
    buf = state.buffer
    if line_begin(buf, buf.dot) == 0:
        return False
    target = prev_line(buf, buf.dot)
    buf.dot = move_to_col(buf, target, state.viewport.ccol, state.viewport.tabstop)
    return True


def skip_whitespace(state: "EditorState") -> None:
    """Advance past blanks on the current line, never onto its terminator."""

    buf = state.buffer
    while buf.dot < buf.length - 1 and buf.char_at(buf.dot) in BLANKS:
        buf.dot += 1


def last_line_begin(state: "EditorState") -> int:
    buf = state.buffer
    return line_begin(buf, max(buf.length - 1, 0))


def move_left(context: "ModeContext", match: "ResolutionMatch") -> None:
    del match
    _repeat(context.state, step_left)


def move_right(context: "ModeContext", match: "ResolutionMatch") -> None:
    del match
    _repeat(context.state, step_right)


def move_down(context: "ModeContext", match: "ResolutionMatch") -> None:
    del match
    _repeat(context.state, step_down)


def move_up(context: "ModeContext", match: "ResolutionMatch") -> None:
    del match
    _repeat(context.state, step_up)


def move_line_begin(context: "ModeContext", match: "ResolutionMatch") -> None:
    del match
    buf = context.state.buffer
    buf.dot = line_begin(buf, buf.dot)


def move_line_end(context: "ModeContext", match: "ResolutionMatch") -> None:
    """Land on the last character of the line (the line begin when empty)."""

    del match
    buf = context.state.buffer
    begin = line_begin(buf, buf.dot)
    end = line_end(buf, buf.dot)
    buf.dot = end - 1 if end > begin else begin


def goto_line(state: "EditorState", number: int) -> None:
    """Jump to the start of the 1-based line ``number`` (clamped to the last)."""

    buf = state.buffer
    target = line_at_index(buf, max(1, number))
    if target >= buf.length:
        target = last_line_begin(state)
    buf.dot = target
    skip_whitespace(state)


def goto_counted_line(context: "ModeContext", match: "ResolutionMatch") -> None:
    """``G``: line ``count``, or the end of the buffer without a count."""

    del match
    state = context.state
    count = state.command.repeat_count
    if count > 0:
        goto_line(state, count)
    else:
        state.buffer.dot = max(state.buffer.length - 1, 0)
        skip_whitespace(state)


def goto_first_line(context: "ModeContext", match: "ResolutionMatch") -> None:
    """``gg``: like ``G`` but the count defaults to 1."""

    del match
    state = context.state
    goto_line(state, state.command.take_count())


def scroll(state: "EditorState", lines: int, direction: int) -> None:
    """Shift ``screenbegin`` by ``lines`` and pull dot back into view."""

    buf = state.buffer
    vp = state.viewport
    for _ in range(lines):
        if direction < 0:
            if vp.screenbegin == 0:
                break
            vp.screenbegin = prev_line(buf, vp.screenbegin)
        else:
            following = next_line(buf, vp.screenbegin)
            if following >= buf.length:
                break
            vp.screenbegin = following
    if buf.dot < vp.screenbegin:
        buf.dot = vp.screenbegin
    bottom = end_screen(buf, vp.screenbegin, vp.rows)
    if buf.dot > bottom:
        buf.dot = line_begin(buf, bottom)
    skip_whitespace(state)


def _scroll_amount(state: "EditorState", size: str) -> int:
    page = max(state.viewport.rows - 2, 1)
    if size == "page":
        return page
    if size == "half":
        return max(page // 2, 1)
    return 1


def scroll_screen(
    context: "ModeContext",
    match: "ResolutionMatch",
    *,
    size: str = "line",
    direction: int = 1,
) -> None:
    del match
    state = context.state
    lines = _scroll_amount(state, size) * state.command.take_count()
    scroll(state, lines, direction)


__all__ = [
    "move_left",
    "move_right",
    "move_down",
    "move_up",
    "move_line_begin",
    "move_line_end",
    "goto_line",
    "goto_counted_line",
    "goto_first_line",
    "scroll",
    "scroll_screen",
    "skip_whitespace",
]
