"""Text mutations: inserting, deleting, replacing and case toggling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from termvi import keycodes
from termvi.buffer import line_begin, line_end, prev_line
from termvi.modes.base_mode import ModeResult

from .motion import step_right

if TYPE_CHECKING:
    from termvi.keymaps import ResolutionMatch
    from termvi.modes.base_mode import ModeContext
    from termvi.state import EditorState

NEWLINE = 0x0A


def insert_code(state: "EditorState", code: int) -> None:
    """Insert one typed code at dot (ESC leaves Insert mode instead)."""

    buf = state.buffer
    buf.dot = buf.insert_char(buf.dot, code, state.command)


def _enter_insert() -> ModeResult:
    return ModeResult(consumed=True, switch_to="insert", message="enter_insert")


def insert_before(context: "ModeContext", match: "ResolutionMatch") -> ModeResult:
    del match
    return _enter_insert()


def append_after(context: "ModeContext", match: "ResolutionMatch") -> ModeResult:
    del match
    buf = context.state.buffer
    if buf.char_at(buf.dot) not in (NEWLINE, None):
        buf.dot += 1
    return _enter_insert()


def append_line_end(context: "ModeContext", match: "ResolutionMatch") -> ModeResult:
    del match
    buf = context.state.buffer
    buf.dot = line_end(buf, buf.dot)
    return _enter_insert()


def open_below(context: "ModeContext", match: "ResolutionMatch") -> ModeResult:
    del match
    state = context.state
    state.buffer.dot = line_end(state.buffer, state.buffer.dot)
    insert_code(state, keycodes.LF)
    return _enter_insert()


def open_above(context: "ModeContext", match: "ResolutionMatch") -> ModeResult:
    del match
    state = context.state
    buf = state.buffer
    buf.dot = line_begin(buf, buf.dot)
    insert_code(state, keycodes.LF)
    buf.dot = prev_line(buf, buf.dot)
    return _enter_insert()


def leave_insert(context: "ModeContext", match: "ResolutionMatch") -> ModeResult:
    del match
    insert_code(context.state, keycodes.ESC)
    return ModeResult(consumed=True, switch_to="normal", message="exit_insert")


def erase_before(context: "ModeContext", match: "ResolutionMatch") -> None:
    """Backspace in Insert mode; stops at the start of the line."""

    del match
    buf = context.state.buffer
    if buf.dot > line_begin(buf, buf.dot):
        buf.delete(buf.dot - 1, 1)
        buf.dot -= 1


def delete_under(context: "ModeContext", match: "ResolutionMatch") -> None:
    """``x``: remove up to count characters without joining lines."""

    del match
    state = context.state
    buf = state.buffer
    for _ in range(state.command.take_count()):
        if buf.char_at(buf.dot) in (NEWLINE, None):
            break
        buf.delete(buf.dot, 1)
    if buf.dot > line_begin(buf, buf.dot) and buf.char_at(buf.dot) in (NEWLINE, None):
        buf.dot -= 1


def begin_replace(context: "ModeContext", match: "ResolutionMatch") -> ModeResult:
    del match
    context.state.command.enter_replace_pending()
    return ModeResult(consumed=True, status="pending", message="replace")


def toggle_case(context: "ModeContext", match: "ResolutionMatch") -> None:
    del match
    state = context.state
    buf = state.buffer
    for _ in range(state.command.take_count()):
        current = buf.char_at(buf.dot)
        if current is None:
            break
        swapped = bytes([current]).swapcase()[0]
        if swapped != current:
            buf.replace_byte(buf.dot, swapped)
        if not step_right(state):
            break


__all__ = [
    "insert_code",
    "insert_before",
    "append_after",
    "append_line_end",
    "open_below",
    "open_above",
    "leave_insert",
    "erase_before",
    "delete_under",
    "begin_replace",
    "toggle_case",
]
