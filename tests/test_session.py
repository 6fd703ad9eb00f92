from __future__ import annotations

import pytest

from termvi import cli, keycodes
from termvi.config import EditorConfig
from termvi.screen import escapes
from termvi.session import EditSession, edit_files
from termvi.terminal import DriverReadError

from conftest import FakeStore, FakeTerminal


def test_insert_text_then_write_quit(make_session, press, store) -> None:
    session = make_session(b"")

    press(session, "i", "hi\n", keycodes.ESC, ":wq\r")

    assert store.writes == [("notes.txt", b"hi\n")]
    assert not session.state.command.editing


def test_open_existing_file_reports_size(terminal) -> None:
    store = FakeStore({"a.txt": b"one\ntwo\n"})

    session = EditSession.open("a.txt", driver=terminal, store=store)

    assert session.state.buffer.content() == b"one\ntwo\n"
    assert session.state.status.message == b'"a.txt" 2L, 8C'
    assert not session.state.buffer.modified
    assert session.state.dot == 0


def test_open_missing_file_starts_new_buffer(terminal, store) -> None:
    session = EditSession.open("fresh.txt", driver=terminal, store=store)

    assert session.state.buffer.content() == b"\n"
    assert session.state.status.message == b'"fresh.txt" [New file]'
    assert not session.state.buffer.modified


def test_open_without_name(terminal, store) -> None:
    session = EditSession.open("", driver=terminal, store=store)

    assert session.state.buffer.content() == b"\n"
    assert session.state.status.message == b""


def test_open_empty_file_keeps_empty_buffer(terminal) -> None:
    session = EditSession.open("e.txt", driver=terminal, store=FakeStore({"e.txt": b""}))

    assert session.state.buffer.length == 0
    assert session.state.status.message == b'"e.txt" 0L, 0C'


def test_resize_adopts_window_size(make_session, terminal) -> None:
    session = make_session(b"abc\n")
    terminal.size = (10, 40)

    session.handle_code(keycodes.RESIZE)

    assert (session.state.viewport.rows, session.state.viewport.columns) == (10, 40)
    assert terminal.output.startswith(
        escapes.cursor_position(0, 0) + escapes.CLEAR_TO_EOS
    )


def test_resize_falls_back_to_configured_size(make_session, terminal) -> None:
    session = make_session(
        b"abc\n", config=EditorConfig(default_rows=12, default_columns=50)
    )
    terminal.size = None

    session.resize()

    assert (session.state.viewport.rows, session.state.viewport.columns) == (12, 50)


def test_resize_redraws_pending_line_input(make_session, press, terminal) -> None:
    session = press(make_session(b"abc\n"), "/fo")
    terminal.clear()
    terminal.size = (10, 40)

    session.handle_code(keycodes.RESIZE)

    assert session.modes.active_name == "line_input"
    assert terminal.output.endswith(
        escapes.cursor_position(9, 0) + escapes.CLEAR_TO_EOL + b"/fo"
    )

    press(session, "o\r")
    assert session.state.command.last_search.text == b"foo"


def test_render_skipped_during_line_input(make_session, press, terminal) -> None:
    session = press(make_session(b"abc\n"), ":")
    terminal.clear()

    session.render()

    assert terminal.writes == []


def test_run_until_quit(terminal, store) -> None:
    store.files["r.txt"] = b"abc\n"
    terminal.feed("x", ":wq\r")
    session = EditSession.open("r.txt", driver=terminal, store=store)

    session.run()

    assert store.files["r.txt"] == b"bc\n"
    assert b'"r.txt" 1L, 4C' in terminal.output


def test_run_propagates_read_failure(terminal, store) -> None:
    terminal.feed("ihello")
    session = EditSession.open("r.txt", driver=terminal, store=store)

    with pytest.raises(DriverReadError):
        session.run()

    assert store.writes == []


def test_edit_files_runs_each_file(terminal, store) -> None:
    terminal.feed("ia", 27, ":wq\r", "ib", 27, ":wq\r")

    edit_files(["a.txt", "b.txt"], driver=terminal, store=store)

    assert store.writes == [("a.txt", b"a\n"), ("b.txt", b"b\n")]


def test_edit_files_without_names(terminal, store) -> None:
    terminal.feed(":q\r")

    edit_files([], driver=terminal, store=store)

    assert store.writes == []
    assert not terminal.codes


@pytest.fixture
def fake_cli(monkeypatch: pytest.MonkeyPatch):
    """Swap the real terminal and file store in ``termvi.cli``."""

    terminal = FakeTerminal()
    store = FakeStore()
    monkeypatch.setattr(cli, "PosixTerminal", lambda **kwargs: terminal)
    monkeypatch.setattr(cli, "LocalFileStore", lambda: store)
    return terminal, store


def test_main_returns_zero_after_quit(fake_cli) -> None:
    terminal, store = fake_cli
    terminal.feed("ihi", 27, ":wq\r")

    assert cli.main(["out.txt"]) == 0

    assert store.files["out.txt"] == b"hi\n"
    assert terminal.writes[0] == escapes.ALT_SCREEN_ON
    assert terminal.writes[-1] == escapes.ALT_SCREEN_OFF
    assert terminal.restored == 1


def test_main_returns_one_when_input_fails(fake_cli) -> None:
    terminal, store = fake_cli

    assert cli.main([]) == 1

    assert terminal.writes[-1] == escapes.ALT_SCREEN_OFF
    assert terminal.restored == 1
    assert store.writes == []
