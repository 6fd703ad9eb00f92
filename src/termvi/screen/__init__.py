"""Screen model: viewport, cursor sync, differential rendering, status line."""

from .cursor import (
    advance_column,
    column_of,
    move_to_col,
    next_tabstop,
    scroll_to_cursor,
    sync_cursor,
)
from .render import ScreenModel
from .status import StatusLine
from .viewport import ViewportState, VirtualScreen

__all__ = [
    "ScreenModel",
    "StatusLine",
    "ViewportState",
    "VirtualScreen",
    "advance_column",
    "column_of",
    "move_to_col",
    "next_tabstop",
    "scroll_to_cursor",
    "sync_cursor",
]
