"""Core action implementations shared across modes."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, Optional

from termvi.modes.base_mode import ModeContext, ModeResult
from termvi.screen import escapes
from termvi.state import LineInput

from .command import run_command_line
from .search import search_from_prompt

if TYPE_CHECKING:
    from termvi.keymaps import ResolutionMatch

LineHandler = Callable[[ModeContext, bytes], ModeResult]


def count_digit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    digit = int(match.binding.last_token)
    count = context.state.command.add_digit(digit)
    return ModeResult(consumed=True, status="count", message=str(count))


def cancel_pending(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.state.command.enter_command_mode()
    return ModeResult(consumed=True, status="noop")


def redraw_screen(context: ModeContext, match: ResolutionMatch) -> None:
    del match
    context.state.screen.redraw(full_redraw=True)


# -- status-row line input -----------------------------------------------


def _line_input(context: ModeContext) -> Optional[LineInput]:
    pending = context.extras.get("line_input")
    return pending if isinstance(pending, LineInput) else None


def start_line_input(
    context: ModeContext, match: ResolutionMatch, *, prompt: bytes
) -> ModeResult:
    del match
    context.extras["line_input"] = LineInput(prompt=prompt)
    return ModeResult(consumed=True, switch_to="line_input", message="enter_line_input")


def submit_line_input(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    pending = context.extras.pop("line_input", None)
    if not isinstance(pending, LineInput):
        return ModeResult(consumed=True, switch_to="normal", status="line_input_lost")
    handler = _LINE_HANDLERS.get(pending.prompt)
    if handler is None:
        return ModeResult(consumed=True, switch_to="normal", status="line_input_unknown")
    return handler(context, pending.value)


def cancel_line_input(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.extras.pop("line_input", None)
    context.state.screen.go_bottom_and_clear_to_eol()
    return ModeResult(consumed=True, switch_to="normal", status="line_input_cancel")


def erase_line_input(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Erase the last typed byte; erasing into the prompt cancels."""

    pending = _line_input(context)
    if pending is None or not pending.text:
        return cancel_line_input(context, match)
    pending.text.pop()
    context.state.driver.write(escapes.ERASE_BACK)
    return ModeResult(consumed=True, status="editing")


_LINE_HANDLERS: Dict[bytes, LineHandler] = {
    b":": run_command_line,
    b"/": partial(search_from_prompt, direction=1),
    b"?": partial(search_from_prompt, direction=-1),
}


__all__ = [
    "count_digit",
    "cancel_pending",
    "redraw_screen",
    "start_line_input",
    "submit_line_input",
    "cancel_line_input",
    "erase_line_input",
]
