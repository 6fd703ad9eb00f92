from __future__ import annotations

import pytest

from termvi.buffer import TextBuffer, end_screen, line_begin
from termvi.screen import (
    ViewportState,
    column_of,
    move_to_col,
    next_tabstop,
    sync_cursor,
)


def make_viewport(rows: int = 6, columns: int = 40, tabstop: int = 8) -> ViewportState:
    return ViewportState(rows=rows, columns=columns, tabstop=tabstop)


@pytest.mark.parametrize("tabstop", [1, 2, 4, 8, 32])
def test_next_tabstop_lands_on_last_cell_of_stop(tabstop: int) -> None:
    for col in range(3 * tabstop):
        stop = next_tabstop(col, tabstop)
        assert stop % tabstop == tabstop - 1
        assert col <= stop < col + tabstop


def test_tab_then_character_lands_on_next_stop() -> None:
    buffer = TextBuffer(b"\tA\n")

    assert column_of(buffer, 1, 8) == 8


def test_tab_run_places_character_after_all_stops() -> None:
    buffer = TextBuffer(b"\t" * 8 + b"x")

    assert column_of(buffer, 8, 8) == 64


def test_cursor_on_tab_sits_at_end_of_expansion() -> None:
    buffer = TextBuffer(b"ab\tc")

    assert column_of(buffer, 2, 8) == 7


def test_control_bytes_take_two_columns() -> None:
    buffer = TextBuffer(b"\x01b")

    assert column_of(buffer, 1, 8) == 2


def test_move_to_col_stays_before_wider_target() -> None:
    buffer = TextBuffer(b"x\ta\nshort\n")

    assert move_to_col(buffer, 0, 4, 8) == 1
    assert move_to_col(buffer, 0, 8, 8) == 2


def test_move_to_col_never_lands_on_terminator() -> None:
    buffer = TextBuffer(b"abc\n\nxyz\n")

    assert move_to_col(buffer, 0, 40, 8) == 2
    assert move_to_col(buffer, 4, 10, 8) == 4


def test_sync_cursor_reports_row_and_column() -> None:
    buffer = TextBuffer(b"one\n\ttwo\n")
    buffer.dot = 5
    viewport = make_viewport()

    assert sync_cursor(buffer, viewport) == (1, 8)
    assert (viewport.crow, viewport.ccol) == (1, 8)


def test_sync_cursor_scrolls_down_to_show_dot() -> None:
    buffer = TextBuffer(b"".join(b"%d\n" % n for n in range(20)))
    viewport = make_viewport(rows=6)
    buffer.dot = line_begin(buffer, buffer.length - 1)

    row, _ = sync_cursor(buffer, viewport)

    assert viewport.screenbegin <= buffer.dot
    assert buffer.dot <= end_screen(buffer, viewport.screenbegin, viewport.rows)
    assert row == viewport.text_rows - 1


def test_sync_cursor_scrolls_up_to_line_begin() -> None:
    buffer = TextBuffer(b"".join(b"%d\n" % n for n in range(20)))
    viewport = make_viewport(rows=6)
    viewport.screenbegin = 20
    buffer.dot = 4

    sync_cursor(buffer, viewport)

    assert viewport.screenbegin == 4
    assert viewport.crow == 0
