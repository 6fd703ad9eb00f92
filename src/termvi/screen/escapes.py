"""VT100 control sequences emitted by the renderer."""

from __future__ import annotations

ESC = b"\x1b"

BOLD_TEXT = ESC + b"[7m"
NORMAL_TEXT = ESC + b"[m"
CLEAR_TO_EOL = ESC + b"[K"
# Default parameter: erase below the cursor.
CLEAR_TO_EOS = ESC + b"[J"
ALT_SCREEN_ON = ESC + b"[?1049h"
ALT_SCREEN_OFF = ESC + b"[?1049l"
ERASE_BACK = b"\b \b"


def cursor_position(row: int, col: int) -> bytes:
    """``ESC[<row>;<col>H`` for 0-based ``row``/``col``."""

    return b"%s[%d;%dH" % (ESC, row + 1, col + 1)


__all__ = [
    "ESC",
    "BOLD_TEXT",
    "NORMAL_TEXT",
    "CLEAR_TO_EOL",
    "CLEAR_TO_EOS",
    "ALT_SCREEN_ON",
    "ALT_SCREEN_OFF",
    "ERASE_BACK",
    "cursor_position",
]
