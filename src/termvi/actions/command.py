"""Actions that evaluate colon command lines."""

from __future__ import annotations

import os
from functools import partial
from typing import Callable, Dict, List

from termvi.buffer import count_lines
from termvi.modes.base_mode import ModeContext, ModeResult
from termvi.runtime import telemetry

from .motion import goto_line

CommandHandler = Callable[[ModeContext, List[str]], ModeResult]


def run_command_line(context: ModeContext, raw: bytes) -> ModeResult:
    """Evaluate the text typed after ``:``."""

    text = os.fsdecode(raw).strip()
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, switch_to="normal", status="command_empty")
    if text.isdigit():
        goto_line(context.state, int(text))
        return ModeResult(
            consumed=True, switch_to="normal", status="command_goto", message=text
        )
    parts = text.split()
    command = parts[0]
    args = parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _unknown_command(context, command)
    return handler(context, args)


def _unknown_command(context: ModeContext, command: str) -> ModeResult:
    context.bus.emit("command.error", command)
    context.state.status.set_bold(f"Not an editor command: {command}")
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="command_error",
        message=command,
    )


def write_buffer(context: ModeContext, args: List[str], *, force: bool) -> bool:
    """Save the whole buffer; the outcome is reported on the status line."""

    state = context.state
    name = args[0] if args else state.filename
    if not name:
        state.status.set_bold("No file name")
        return False
    data = state.buffer.content()
    try:
        state.store.write_all(name, data)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        state.status.set_bold(f"Write error: {reason}")
        telemetry.record_event(
            "session.write",
            level="warning",
            data={"file": name, "error": reason},
        )
        return False

    if not state.filename:
        state.filename = name
        state.buffer.name = name
    if name == state.filename:
        state.buffer.modified_count = 0
    lines = count_lines(state.buffer)
    state.status.set(f'"{name}" {lines}L, {len(data)}C written')
    telemetry.record_event(
        "session.write", data={"file": name, "bytes": len(data), "lines": lines}
    )
    context.bus.emit("command.write", {"file": name, "bytes": len(data), "force": force})
    return True


def _quit(context: ModeContext, *, force: bool) -> None:
    context.state.command.editing = False
    context.bus.emit("command.quit", {"force": force})


def _handle_write(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    written = write_buffer(context, args, force=force)
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="command_write" if written else "command_write_failed",
        message="write!" if force else "write",
    )


def _handle_quit(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    del args
    _quit(context, force=force)
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="command_quit_force" if force else "command_quit",
        message="quit!" if force else "quit",
    )


def _handle_wq(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    if not write_buffer(context, args, force=force):
        return ModeResult(
            consumed=True, switch_to="normal", status="command_write_failed"
        )
    _quit(context, force=force)
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="command_wq_force" if force else "command_wq",
        message="wq!" if force else "wq",
    )


def _handle_x(
    context: ModeContext, args: List[str], *, force: bool = False
) -> ModeResult:
    """Write only when there is something to save, then quit."""

    if args or context.state.buffer.modified:
        if not write_buffer(context, args, force=force):
            return ModeResult(
                consumed=True, switch_to="normal", status="command_write_failed"
            )
    _quit(context, force=force)
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="command_x_force" if force else "command_x",
        message="x!" if force else "x",
    )


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "write": _handle_write,
    "w": _handle_write,
    "write!": partial(_handle_write, force=True),
    "w!": partial(_handle_write, force=True),
    "quit": _handle_quit,
    "q": _handle_quit,
    "quit!": partial(_handle_quit, force=True),
    "q!": partial(_handle_quit, force=True),
    "wq": _handle_wq,
    "wq!": partial(_handle_wq, force=True),
    "x": _handle_x,
    "x!": partial(_handle_x, force=True),
}


__all__ = ["run_command_line", "write_buffer"]
