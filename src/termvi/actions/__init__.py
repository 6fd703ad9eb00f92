"""Editing verbs bound to keys by the default keymaps."""

from .core import (
    cancel_line_input,
    cancel_pending,
    count_digit,
    erase_line_input,
    redraw_screen,
    start_line_input,
    submit_line_input,
)
from .command import run_command_line, write_buffer
from .edit import (
    append_after,
    append_line_end,
    begin_replace,
    delete_under,
    erase_before,
    insert_before,
    insert_code,
    leave_insert,
    open_above,
    open_below,
    toggle_case,
)
from .motion import (
    goto_counted_line,
    goto_first_line,
    goto_line,
    move_down,
    move_left,
    move_line_begin,
    move_line_end,
    move_right,
    move_up,
    scroll,
    scroll_screen,
    skip_whitespace,
)
from .search import find_next, repeat_search, search_from_prompt

__all__ = [
    "cancel_line_input",
    "cancel_pending",
    "count_digit",
    "erase_line_input",
    "redraw_screen",
    "start_line_input",
    "submit_line_input",
    "run_command_line",
    "write_buffer",
    "append_after",
    "append_line_end",
    "begin_replace",
    "delete_under",
    "erase_before",
    "insert_before",
    "insert_code",
    "leave_insert",
    "open_above",
    "open_below",
    "toggle_case",
    "goto_counted_line",
    "goto_first_line",
    "goto_line",
    "move_down",
    "move_left",
    "move_line_begin",
    "move_line_end",
    "move_right",
    "move_up",
    "scroll",
    "scroll_screen",
    "skip_whitespace",
    "find_next",
    "repeat_search",
    "search_from_prompt",
]
