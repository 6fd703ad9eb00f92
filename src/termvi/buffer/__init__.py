"""Text buffer storage and line index helpers."""

from .lines import (
    count_lines,
    end_screen,
    line_at_index,
    line_begin,
    line_end,
    next_line,
    prev_line,
    total_lines,
)
from .text import TextBuffer, Transaction
from .validation import BufferValidationError, ensure_offset, ensure_size

__all__ = [
    "TextBuffer",
    "Transaction",
    "BufferValidationError",
    "ensure_offset",
    "ensure_size",
    "line_begin",
    "line_end",
    "prev_line",
    "next_line",
    "count_lines",
    "line_at_index",
    "total_lines",
    "end_screen",
]
