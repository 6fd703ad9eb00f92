"""Built-in keymaps for the normal, insert and line-input modes."""

from __future__ import annotations

from functools import partial
from typing import Iterable, Sequence

from termvi.actions import core as core_actions
from termvi.actions import edit as edit_actions
from termvi.actions import motion as motion_actions
from termvi.actions import search as search_actions

from .models import ActionRef, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

# Actions flagged this way leave the pending repeat count untouched.
KEEPS_COUNT = {"keeps_count": True}

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="core.count_digit",
        handler=core_actions.count_digit,
        description="Accumulate a repeat count",
        metadata=KEEPS_COUNT,
    ),
    ActionRef(
        id="core.cancel",
        handler=core_actions.cancel_pending,
        description="Drop the pending count",
    ),
    ActionRef(
        id="core.redraw",
        handler=core_actions.redraw_screen,
        description="Repaint the whole screen",
    ),
    ActionRef(
        id="motion.left",
        handler=motion_actions.move_left,
        description="Move left within the line",
    ),
    ActionRef(
        id="motion.right",
        handler=motion_actions.move_right,
        description="Move right within the line",
    ),
    ActionRef(
        id="motion.up",
        handler=motion_actions.move_up,
        description="Move up keeping the column",
    ),
    ActionRef(
        id="motion.down",
        handler=motion_actions.move_down,
        description="Move down keeping the column",
    ),
    ActionRef(
        id="motion.line_begin",
        handler=motion_actions.move_line_begin,
        description="Move to the start of the line",
    ),
    ActionRef(
        id="motion.line_end",
        handler=motion_actions.move_line_end,
        description="Move to the last character of the line",
    ),
    ActionRef(
        id="motion.goto_line",
        handler=motion_actions.goto_counted_line,
        description="Jump to line count, or the last line",
    ),
    ActionRef(
        id="motion.goto_first",
        handler=motion_actions.goto_first_line,
        description="Jump to line count, or the first line",
    ),
    ActionRef(
        id="scroll.page_back",
        handler=partial(motion_actions.scroll_screen, size="page", direction=-1),
        description="Scroll back a screen",
    ),
    ActionRef(
        id="scroll.page_forward",
        handler=partial(motion_actions.scroll_screen, size="page", direction=1),
        description="Scroll forward a screen",
    ),
    ActionRef(
        id="scroll.half_back",
        handler=partial(motion_actions.scroll_screen, size="half", direction=-1),
        description="Scroll back half a screen",
    ),
    ActionRef(
        id="scroll.half_forward",
        handler=partial(motion_actions.scroll_screen, size="half", direction=1),
        description="Scroll forward half a screen",
    ),
    ActionRef(
        id="scroll.line_back",
        handler=partial(motion_actions.scroll_screen, size="line", direction=-1),
        description="Scroll back one line",
    ),
    ActionRef(
        id="scroll.line_forward",
        handler=partial(motion_actions.scroll_screen, size="line", direction=1),
        description="Scroll forward one line",
    ),
    ActionRef(
        id="edit.insert",
        handler=edit_actions.insert_before,
        description="Insert before the cursor",
    ),
    ActionRef(
        id="edit.append",
        handler=edit_actions.append_after,
        description="Insert after the cursor",
    ),
    ActionRef(
        id="edit.append_line_end",
        handler=edit_actions.append_line_end,
        description="Insert at the end of the line",
    ),
    ActionRef(
        id="edit.open_below",
        handler=edit_actions.open_below,
        description="Open a line below",
    ),
    ActionRef(
        id="edit.open_above",
        handler=edit_actions.open_above,
        description="Open a line above",
    ),
    ActionRef(
        id="edit.replace",
        handler=edit_actions.begin_replace,
        description="Replace the character under the cursor",
    ),
    ActionRef(
        id="edit.toggle_case",
        handler=edit_actions.toggle_case,
        description="Flip letter case and advance",
    ),
    ActionRef(
        id="edit.delete",
        handler=edit_actions.delete_under,
        description="Delete the character under the cursor",
    ),
    ActionRef(
        id="edit.leave_insert",
        handler=edit_actions.leave_insert,
        description="Return to normal mode",
    ),
    ActionRef(
        id="edit.backspace",
        handler=edit_actions.erase_before,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="line.colon",
        handler=partial(core_actions.start_line_input, prompt=b":"),
        description="Read a colon command",
    ),
    ActionRef(
        id="line.search_forward",
        handler=partial(core_actions.start_line_input, prompt=b"/"),
        description="Read a forward search pattern",
    ),
    ActionRef(
        id="line.search_backward",
        handler=partial(core_actions.start_line_input, prompt=b"?"),
        description="Read a backward search pattern",
    ),
    ActionRef(
        id="line.submit",
        handler=core_actions.submit_line_input,
        description="Evaluate the status-row input",
    ),
    ActionRef(
        id="line.cancel",
        handler=core_actions.cancel_line_input,
        description="Abandon the status-row input",
    ),
    ActionRef(
        id="line.erase",
        handler=core_actions.erase_line_input,
        description="Erase the last typed character",
    ),
    ActionRef(
        id="search.next",
        handler=search_actions.repeat_search,
        description="Repeat the last search",
    ),
    ActionRef(
        id="search.previous",
        handler=partial(search_actions.repeat_search, reverse=True),
        description="Repeat the last search backwards",
    ),
)


def _binding(
    mode: str,
    keys: Sequence[str],
    action_id: str,
    description: str = "",
    *,
    when: Iterable[str] = (),
) -> Binding:
    suffix = "".join(keys)
    if when:
        suffix = f"{suffix}[{','.join(when)}]"
    return Binding(
        id=f"{mode}.{suffix}",
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
        description=description,
        when=tuple(WhenClause.parse(clause) for clause in when),
    )


_NORMAL_KEYS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("h",), "motion.left"),
    (("<Left>",), "motion.left"),
    (("l",), "motion.right"),
    (("<Right>",), "motion.right"),
    (("k",), "motion.up"),
    (("<Up>",), "motion.up"),
    (("j",), "motion.down"),
    (("<Down>",), "motion.down"),
    (("<Home>",), "motion.line_begin"),
    (("$",), "motion.line_end"),
    (("<End>",), "motion.line_end"),
    (("G",), "motion.goto_line"),
    (("g", "g"), "motion.goto_first"),
    (("<C-b>",), "scroll.page_back"),
    (("<PageUp>",), "scroll.page_back"),
    (("<C-f>",), "scroll.page_forward"),
    (("<PageDown>",), "scroll.page_forward"),
    (("<C-u>",), "scroll.half_back"),
    (("<C-d>",), "scroll.half_forward"),
    (("<C-y>",), "scroll.line_back"),
    (("<C-e>",), "scroll.line_forward"),
    (("<C-l>",), "core.redraw"),
    (("<Esc>",), "core.cancel"),
    (("i",), "edit.insert"),
    (("<Insert>",), "edit.insert"),
    (("a",), "edit.append"),
    (("A",), "edit.append_line_end"),
    (("o",), "edit.open_below"),
    (("O",), "edit.open_above"),
    (("r",), "edit.replace"),
    (("~",), "edit.toggle_case"),
    (("x",), "edit.delete"),
    (("<Del>",), "edit.delete"),
    ((":",), "line.colon"),
    (("/",), "line.search_forward"),
    (("?",), "line.search_backward"),
    (("n",), "search.next"),
    (("N",), "search.previous"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *(
        _binding("normal", (digit,), "core.count_digit", "Repeat count digit")
        for digit in "123456789"
    ),
    _binding(
        "normal",
        ("0",),
        "core.count_digit",
        "Repeat count digit",
        when=("count_pending",),
    ),
    _binding(
        "normal",
        ("0",),
        "motion.line_begin",
        "Move to the start of the line",
        when=("!count_pending",),
    ),
    *(_binding("normal", keys, action_id) for keys, action_id in _NORMAL_KEYS),
    _binding("insert", ("<Esc>",), "edit.leave_insert", "Leave insert mode"),
    _binding("insert", ("<BS>",), "edit.backspace", "Erase backwards"),
    _binding("insert", ("<C-h>",), "edit.backspace", "Erase backwards"),
    _binding("line_input", ("<CR>",), "line.submit", "Submit the input"),
    _binding("line_input", ("<NL>",), "line.submit", "Submit the input"),
    _binding("line_input", ("<Esc>",), "line.cancel", "Cancel the input"),
    _binding("line_input", ("<BS>",), "line.erase", "Erase backwards"),
    _binding("line_input", ("<C-h>",), "line.erase", "Erase backwards"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    excluded = set(exclude_bindings or ())

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "KEEPS_COUNT"]
