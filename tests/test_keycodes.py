from __future__ import annotations

import pytest

from termvi import keycodes


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        (b"\x1b[A", keycodes.UP),
        (b"\x1bOB", keycodes.DOWN),
        (b"\x1b[C", keycodes.RIGHT),
        (b"\x1b[D", keycodes.LEFT),
        (b"\x1b[1~", keycodes.HOME),
        (b"\x1bOF", keycodes.END),
        (b"\x1b[2~", keycodes.INSERT),
        (b"\x1b[3~", keycodes.DELETE),
        (b"\x1b[5~", keycodes.PAGEUP),
        (b"\x1b[6~", keycodes.PAGEDOWN),
        (b"\x1b\x7f", keycodes.BACKSPACE),
        (b"\x1bd", keycodes.ALT_D),
    ],
)
def test_decode_known_sequences(data: bytes, expected: int) -> None:
    assert keycodes.decode_key(data) == (expected, len(data))


def test_decode_plain_byte() -> None:
    assert keycodes.decode_key(b"jk") == (ord("j"), 1)


def test_decode_partial_sequence_waits_for_more() -> None:
    assert keycodes.decode_key(b"\x1b[") == (None, 0)
    assert keycodes.decode_key(b"\x1b[1") == (None, 0)
    assert keycodes.decode_key(b"\x1b[5") == (None, 0)


def test_decode_lone_and_unknown_escape() -> None:
    assert keycodes.decode_key(b"\x1b") == (keycodes.ESC, 1)
    assert keycodes.decode_key(b"\x1bz") == (keycodes.ESC, 1)


def test_decode_leaves_trailing_bytes() -> None:
    code, consumed = keycodes.decode_key(b"\x1b[Ajj")

    assert code == keycodes.UP
    assert consumed == 3


def test_keycode_values_are_stable() -> None:
    assert [
        keycodes.UP,
        keycodes.DOWN,
        keycodes.RIGHT,
        keycodes.LEFT,
        keycodes.HOME,
        keycodes.END,
        keycodes.INSERT,
        keycodes.DELETE,
        keycodes.PAGEUP,
        keycodes.PAGEDOWN,
        keycodes.BACKSPACE,
        keycodes.ALT_D,
    ] == list(range(-2, -14, -1))


@pytest.mark.parametrize(
    ("code", "token"),
    [
        (ord("j"), "j"),
        (2, "<C-b>"),
        (8, "<C-h>"),
        (keycodes.ESC, "<Esc>"),
        (keycodes.CR, "<CR>"),
        (keycodes.DEL, "<BS>"),
        (keycodes.PAGEDOWN, "<PageDown>"),
    ],
)
def test_token_for(code: int, token: str) -> None:
    assert keycodes.token_for(code) == token
