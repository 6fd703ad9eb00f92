from __future__ import annotations

import pytest

from termvi import keycodes
from termvi.buffer import BufferValidationError, TextBuffer
from termvi.state import CommandState, EditMode


def make_buffer(text: bytes = b"", *, slack: int = 16) -> TextBuffer:
    return TextBuffer(text, name="test.txt", slack=slack)


def test_make_hole_shifts_tail_and_grows_with_slack() -> None:
    buffer = make_buffer(b"abcdef", slack=4)
    assert buffer.capacity == 10

    buffer.make_hole(2, 6)

    assert buffer.length == 12
    assert buffer.capacity == 12 + 4
    assert bytes(buffer.data[8:12]) == b"cdef"
    assert bytes(buffer.data[:2]) == b"ab"


def test_make_hole_ignores_non_positive_size() -> None:
    buffer = make_buffer(b"abc")

    buffer.make_hole(1, 0)
    buffer.make_hole(1, -3)

    assert buffer.content() == b"abc"


def test_make_hole_rejects_offset_past_end() -> None:
    buffer = make_buffer(b"abc")

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.make_hole(4, 1)

    assert excinfo.value.offset == 4


def test_insert_char_keeps_length_and_offset_in_step() -> None:
    buffer = make_buffer(b"xy")
    command = CommandState(mode=EditMode.INSERT)
    pos = 1

    for code in b"hello":
        before = buffer.length
        pos = buffer.insert_char(pos, code, command)
        assert buffer.length == before + 1
        assert buffer.data[pos - 1] == code

    assert buffer.content() == b"xhelloy"
    assert pos == 6
    assert buffer.modified_count == 5


def test_insert_char_escape_returns_to_command_mode() -> None:
    buffer = make_buffer(b"abc")
    command = CommandState(mode=EditMode.INSERT, repeat_count=7)

    pos = buffer.insert_char(2, keycodes.ESC, command)

    assert pos == 2
    assert buffer.content() == b"abc"
    assert command.mode is EditMode.COMMAND
    assert command.repeat_count == 0
    assert not buffer.modified


def test_insert_char_translates_carriage_return() -> None:
    buffer = make_buffer()

    buffer.insert_char(0, keycodes.CR)

    assert buffer.content() == b"\n"


def test_insert_char_rejects_special_keycodes() -> None:
    buffer = make_buffer()

    with pytest.raises(BufferValidationError):
        buffer.insert_char(0, keycodes.UP)


def test_insert_from_source_copies_payload() -> None:
    buffer = make_buffer(b"<>")

    copied = buffer.insert_from_source(lambda: b"middle", 1)

    assert copied == 6
    assert buffer.content() == b"<middle>"
    assert not buffer.modified


def test_insert_from_source_clamps_position() -> None:
    buffer = make_buffer(b"ab")

    buffer.insert_from_source(lambda: b"!", 99)

    assert buffer.content() == b"ab!"


def test_insert_from_source_reports_unreadable_source() -> None:
    buffer = make_buffer(b"keep")

    def broken() -> bytes:
        raise PermissionError("denied")

    assert buffer.insert_from_source(broken, 0) == -1
    assert buffer.content() == b"keep"


def test_search_round_trip() -> None:
    buffer = make_buffer(b"one two three")
    buffer.insert_from_source(lambda: b"needle", 4)

    assert buffer.search(0, b"needle", 1) == 4
    assert buffer.search(buffer.length, b"needle", -1) == 4


def test_search_backward_finds_last_match_before_start() -> None:
    buffer = make_buffer(b"ab ab ab")

    assert buffer.search(6, b"ab", -1) == 3
    assert buffer.search(8, b"ab", -1) == 6


def test_search_out_of_range_and_missing() -> None:
    buffer = make_buffer(b"abc")

    assert buffer.search(3, b"a", 1) == -1
    assert buffer.search(-1, b"a", 1) == -1
    assert buffer.search(0, b"a", -1) == -1
    assert buffer.search(0, b"zz", 1) == -1
    assert buffer.search(0, b"", 1) == -1


def test_delete_closes_gap_and_clamps_dot() -> None:
    buffer = make_buffer(b"abcdef")
    buffer.dot = 6

    removed = buffer.delete(3, 10)

    assert removed == 3
    assert buffer.content() == b"abc"
    assert buffer.dot == 3
    assert buffer.modified


def test_replace_byte_counts_only_real_changes() -> None:
    buffer = make_buffer(b"abc")

    buffer.replace_byte(1, ord("b"))
    assert not buffer.modified

    buffer.replace_byte(1, ord("X"))
    assert buffer.content() == b"aXc"
    assert buffer.modified_count == 1

    with pytest.raises(BufferValidationError):
        buffer.replace_byte(3, ord("z"))


def test_char_at_outside_text_is_none() -> None:
    buffer = make_buffer(b"a")

    assert buffer.char_at(0) == ord("a")
    assert buffer.char_at(1) is None
    assert buffer.char_at(-1) is None
