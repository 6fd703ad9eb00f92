from __future__ import annotations

from termvi import keycodes
from termvi.state import EditMode

ESC = keycodes.ESC


def content(session) -> bytes:
    return session.state.buffer.content()


def test_insert_before_cursor(make_session, press) -> None:
    session = press(make_session(b"world\n"), "ihello ", ESC)

    assert content(session) == b"hello world\n"
    assert session.state.buffer.modified
    assert session.modes.active_name == "normal"
    assert session.state.command.mode is EditMode.COMMAND


def test_insert_key_enters_insert_mode(make_session, press) -> None:
    session = press(make_session(b"b\n"), keycodes.INSERT, "a", ESC)

    assert content(session) == b"ab\n"


def test_append_after_cursor(make_session, press) -> None:
    session = press(make_session(b"ac\n"), "ab", ESC)

    assert content(session) == b"abc\n"


def test_append_on_empty_line_stays_put(make_session, press) -> None:
    session = press(make_session(b"\nx\n"), "az", ESC)

    assert content(session) == b"z\nx\n"


def test_append_at_line_end(make_session, press) -> None:
    session = press(make_session(b"ab\ncd\n"), "A!", ESC)

    assert content(session) == b"ab!\ncd\n"


def test_open_line_below(make_session, press) -> None:
    session = press(make_session(b"ab\ncd\n"), "oxy", ESC)

    assert content(session) == b"ab\nxy\ncd\n"


def test_open_line_above(make_session, press) -> None:
    session = press(make_session(b"ab\ncd\n"), "j", "Oxy", ESC)

    assert content(session) == b"ab\nxy\ncd\n"


def test_open_line_above_first_line(make_session, press) -> None:
    session = press(make_session(b"ab\n"), "OX", ESC)

    assert content(session) == b"X\nab\n"


def test_return_splits_line_in_insert(make_session, press) -> None:
    session = press(make_session(b"abcd\n"), "ll", "i\r", ESC)

    assert content(session) == b"ab\ncd\n"
    assert session.state.dot == 3


def test_insert_mode_arrow_keeps_inserting(make_session, press) -> None:
    session = press(make_session(b"ab\ncd\n"), "i", keycodes.DOWN, "X", ESC)

    assert content(session) == b"ab\nXcd\n"


def test_toggle_case_with_count(make_session, press) -> None:
    session = press(make_session(b"aBc-d\n"), "3~")

    assert content(session) == b"AbC-d\n"
    assert session.state.dot == 3


def test_toggle_case_stops_at_line_end(make_session, press) -> None:
    session = press(make_session(b"ab\ncd\n"), "9~")

    assert content(session) == b"AB\ncd\n"
    assert session.state.dot == 1


def test_toggle_case_on_empty_line_leaves_next_line(make_session, press) -> None:
    session = press(make_session(b"\nabc\n"), "3~")

    assert content(session) == b"\nabc\n"
    assert session.state.dot == 0


def test_replace_character_under_cursor(make_session, press) -> None:
    session = press(make_session(b"cat\n"), "l", "ro")

    assert content(session) == b"cot\n"
    assert session.state.dot == 1
    assert session.state.command.mode is EditMode.COMMAND


def test_delete_under_cursor(make_session, press) -> None:
    session = press(make_session(b"abc\n"), "x")

    assert content(session) == b"bc\n"
    assert session.state.dot == 0


def test_delete_with_count_never_joins_lines(make_session, press) -> None:
    session = press(make_session(b"abc\ndef\n"), "5x")

    assert content(session) == b"\ndef\n"
    assert session.state.dot == 0


def test_delete_last_character_steps_back(make_session, press) -> None:
    session = press(make_session(b"abc\n"), "$", keycodes.DELETE)

    assert content(session) == b"ab\n"
    assert session.state.dot == 1


def test_delete_on_empty_line_is_noop(make_session, press) -> None:
    session = press(make_session(b"\nab\n"), "x")

    assert content(session) == b"\nab\n"
    assert not session.state.buffer.modified


def test_backspace_in_insert_stops_at_line_start(make_session, press) -> None:
    session = press(make_session(b"ab\ncd\n"), "j", "A", 127, 127, 127, ESC)

    assert content(session) == b"ab\n\n"


def test_edits_are_redrawn(make_session, press, terminal) -> None:
    session = press(make_session(b"abc\n"), "x")

    assert session.state.screen.virtual.row(0).startswith(b"bc ")
    assert b"bc" in terminal.output
