"""Literal pattern search started by ``/`` and ``?`` and repeated by ``n``/``N``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from termvi.modes.base_mode import ModeResult
from termvi.runtime import telemetry
from termvi.state import SearchPattern

if TYPE_CHECKING:
    from termvi.keymaps import ResolutionMatch
    from termvi.modes.base_mode import ModeContext
    from termvi.state import EditorState


def find_next(state: "EditorState", pattern: SearchPattern) -> bool:
    """Move dot to the next match of ``pattern``; report a miss on the status row."""

    buf = state.buffer
    if pattern.direction > 0:
        found = buf.search(buf.dot + 1, pattern.text, 1)
    else:
        found = buf.search(buf.dot, pattern.text, -1)
    if found < 0:
        state.status.set(b"Pattern not found: " + pattern.text)
        telemetry.record_event(
            "search.miss",
            level="debug",
            data={"pattern": pattern.text, "direction": pattern.direction},
        )
        return False
    buf.dot = found
    return True


def search_from_prompt(
    context: "ModeContext", text: bytes, *, direction: int
) -> ModeResult:
    """Run a search typed after the prompt; empty text reuses the last pattern."""

    command = context.state.command
    if text:
        pattern = SearchPattern(direction=direction, text=text)
    elif command.last_search is None:
        context.state.status.set("No previous search pattern")
        return ModeResult(consumed=True, switch_to="normal", status="search_empty")
    else:
        pattern = SearchPattern(direction=direction, text=command.last_search.text)
    command.last_search = pattern
    found = find_next(context.state, pattern)
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="search_hit" if found else "search_miss",
    )


def repeat_search(
    context: "ModeContext", match: "ResolutionMatch", *, reverse: bool = False
) -> None:
    del match
    state = context.state
    pattern = state.command.last_search
    if pattern is None:
        state.status.set("No previous search pattern")
        return
    if reverse:
        pattern = pattern.reversed()
    for _ in range(state.command.take_count()):
        if not find_next(state, pattern):
            break


__all__ = ["find_next", "search_from_prompt", "repeat_search"]
