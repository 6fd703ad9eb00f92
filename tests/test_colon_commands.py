from __future__ import annotations

import errno

import pytest

from termvi.screen import escapes


def test_write_saves_buffer_and_clears_modified(make_session, press, store, terminal) -> None:
    session = press(make_session(b"abc\n"), "x", ":w\r")

    assert store.writes == [("notes.txt", b"bc\n")]
    assert not session.state.buffer.modified
    assert session.state.command.editing
    assert b'"notes.txt" 1L, 3C written' in terminal.output


def test_write_long_form_and_force(make_session, press, store) -> None:
    session = make_session(b"abc\n")

    press(session, ":write\r", ":w!\r", ":write!\r")

    assert [name for name, _ in store.writes] == ["notes.txt"] * 3
    assert session.state.command.editing


def test_write_to_other_name_keeps_modified(make_session, press, store) -> None:
    session = press(make_session(b"abc\n"), "x", ":w copy.txt\r")

    assert store.files["copy.txt"] == b"bc\n"
    assert session.state.filename == "notes.txt"
    assert session.state.buffer.modified


def test_write_unnamed_buffer(make_session, press, store, terminal) -> None:
    session = make_session(None, filename="")

    press(session, ":w\r")
    assert store.writes == []
    assert escapes.BOLD_TEXT + b"No file name" + escapes.NORMAL_TEXT in terminal.output

    press(session, "ihi", 27, ":w named.txt\r")
    assert store.files["named.txt"] == b"hi\n"
    assert session.state.filename == "named.txt"
    assert not session.state.buffer.modified


def test_write_error_is_reported(make_session, press, store, terminal) -> None:
    session = make_session(b"abc\n")
    store.fail_with = PermissionError(errno.EACCES, "Permission denied")

    press(session, ":wq\r")

    assert session.state.command.editing
    assert b"Write error: Permission denied" in terminal.output


@pytest.mark.parametrize("command", [":q\r", ":quit\r", ":q!\r", ":quit!\r"])
def test_quit_commands(make_session, press, store, command) -> None:
    session = press(make_session(b"abc\n"), "x", command)

    assert not session.state.command.editing
    assert store.writes == []


def test_write_quit(make_session, press, store) -> None:
    session = press(make_session(b"abc\n"), "x", ":wq\r")

    assert not session.state.command.editing
    assert store.writes == [("notes.txt", b"bc\n")]


def test_exit_writes_only_when_modified(make_session, press, store) -> None:
    clean = press(make_session(b"abc\n"), ":x\r")
    assert not clean.state.command.editing
    assert store.writes == []

    dirty = press(make_session(b"abc\n"), "x", ":x\r")
    assert not dirty.state.command.editing
    assert store.writes == [("notes.txt", b"bc\n")]


def test_unknown_command(make_session, press, terminal) -> None:
    session = press(make_session(b"abc\n"), ":frob now\r")

    assert session.state.command.editing
    assert session.modes.active_name == "normal"
    assert (
        escapes.BOLD_TEXT + b"Not an editor command: frob" + escapes.NORMAL_TEXT
        in terminal.output
    )


def test_line_number_command(make_session, press) -> None:
    session = press(make_session(b"one\ntwo\n  three\n"), ":3\r")

    assert session.state.dot == 10


def test_empty_command_line(make_session, press) -> None:
    session = press(make_session(b"abc\n"), ":  \r")

    assert session.modes.active_name == "normal"
    assert session.state.command.editing


def test_escape_cancels_command_line(make_session, press, store) -> None:
    session = press(make_session(b"abc\n"), ":wq", 27)

    assert session.modes.active_name == "normal"
    assert session.state.command.editing
    assert store.writes == []


def test_backspace_edits_command_line(make_session, press) -> None:
    session = press(make_session(b"abc\n"), ":qx", 127, "\r")

    assert not session.state.command.editing


def test_quit_is_announced_on_bus(make_session, press) -> None:
    session = make_session(b"abc\n")
    seen = []
    session.bus.subscribe("command.quit", seen.append)

    press(session, ":q!\r")

    assert seen == [{"force": True}]
