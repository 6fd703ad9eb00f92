"""Input code space: raw bytes plus negative sentinels for special keys."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

UP = -2
DOWN = -3
RIGHT = -4
LEFT = -5
HOME = -6
END = -7
INSERT = -8
DELETE = -9
PAGEUP = -10
PAGEDOWN = -11
BACKSPACE = -12  # only when Alt/Ctrl/Shift modified
ALT_D = -13

# Not a key: terminal resize notifications travel through the same loop.
RESIZE = -64

ESC = 27
CR = 13
LF = 10
BS = 8
DEL = 127

KEY_BUFFER_SIZE = 16

# Special keycodes always dispatch through the Command table.
NAVIGATION_CODES = frozenset(
    {UP, DOWN, LEFT, RIGHT, HOME, END, PAGEUP, PAGEDOWN, DELETE}
)

_NAMES: Dict[int, str] = {
    UP: "<Up>",
    DOWN: "<Down>",
    RIGHT: "<Right>",
    LEFT: "<Left>",
    HOME: "<Home>",
    END: "<End>",
    INSERT: "<Insert>",
    DELETE: "<Del>",
    PAGEUP: "<PageUp>",
    PAGEDOWN: "<PageDown>",
    BACKSPACE: "<M-BS>",
    ALT_D: "<M-d>",
    RESIZE: "<Resize>",
    ESC: "<Esc>",
    CR: "<CR>",
    LF: "<NL>",
    9: "<Tab>",
    DEL: "<BS>",
}

# Sequence tails following ESC, as sent by VT100/xterm/linux consoles.
_SEQUENCES: Dict[bytes, int] = {
    b"OA": UP,
    b"OB": DOWN,
    b"OC": RIGHT,
    b"OD": LEFT,
    b"OH": HOME,
    b"OF": END,
    b"[A": UP,
    b"[B": DOWN,
    b"[C": RIGHT,
    b"[D": LEFT,
    b"[H": HOME,
    b"[F": END,
    b"[1~": HOME,
    b"[2~": INSERT,
    b"[3~": DELETE,
    b"[4~": END,
    b"[5~": PAGEUP,
    b"[6~": PAGEDOWN,
    b"[7~": HOME,
    b"[8~": END,
    b"[1;5A": UP,
    b"[1;5B": DOWN,
    b"[1;5C": RIGHT,
    b"[1;5D": LEFT,
    b"\x7f": BACKSPACE,
    b"\x08": BACKSPACE,
    b"d": ALT_D,
}

_MAX_SEQUENCE = max(len(tail) for tail in _SEQUENCES)


def token_for(code: int) -> str:
    """Return the keymap token used to bind ``code``."""

    name = _NAMES.get(code)
    if name is not None:
        return name
    if code < 0:
        return f"<Key{code}>"
    if code < 0x20:
        return f"<C-{chr(code + 0x60)}>"
    return chr(code)


def decode_key(data: bytes) -> Tuple[Optional[int], int]:
    """Decode the first input code in ``data``.

    Returns ``(code, consumed)``. ``code`` is ``None`` while ``data`` is a
    strict prefix of a known escape sequence and more bytes may follow. A
    lone ESC, or ESC followed by an unknown tail, decodes as plain ESC.
    """

    if not data:
        return None, 0
    first = data[0]
    if first != ESC:
        return first, 1
    tail = data[1 : 1 + _MAX_SEQUENCE]
    for length in range(len(tail), 0, -1):
        code = _SEQUENCES.get(bytes(tail[:length]))
        if code is not None:
            return code, 1 + length
    if tail and any(seq.startswith(bytes(tail)) for seq in _SEQUENCES):
        return None, 0
    return ESC, 1


__all__ = [
    "UP",
    "DOWN",
    "RIGHT",
    "LEFT",
    "HOME",
    "END",
    "INSERT",
    "DELETE",
    "PAGEUP",
    "PAGEDOWN",
    "BACKSPACE",
    "ALT_D",
    "RESIZE",
    "ESC",
    "CR",
    "LF",
    "BS",
    "DEL",
    "KEY_BUFFER_SIZE",
    "NAVIGATION_CODES",
    "token_for",
    "decode_key",
]
