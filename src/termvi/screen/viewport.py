"""Viewport geometry and the virtual copy of the terminal grid."""

from __future__ import annotations

from dataclasses import dataclass

from termvi.config import MAX_SCR_COLS, MAX_SCR_ROWS, clamp_tabstop


@dataclass(slots=True)
class ViewportState:
    """Terminal size, first visible line and last cursor placement."""

    rows: int = 24
    columns: int = 80
    screenbegin: int = 0
    tabstop: int = 8
    line_numbers: bool = False
    line_number_width: int = 0
    crow: int = 0
    ccol: int = 0

    def __post_init__(self) -> None:
        self.resize(self.rows, self.columns)
        self.tabstop = clamp_tabstop(self.tabstop)

    @property
    def text_rows(self) -> int:
        """Rows available for text; the last row is the status line."""

        return self.rows - 1

    def resize(self, rows: int, columns: int) -> None:
        # Two rows minimum: one text row plus the status line.
        self.rows = max(2, min(rows, MAX_SCR_ROWS))
        self.columns = max(1, min(columns, MAX_SCR_COLS))


class VirtualScreen:
    """``rows x columns`` cells mirroring what the terminal displays."""

    def __init__(self, rows: int, columns: int) -> None:
        self.rows = rows
        self.columns = columns
        self.cells = bytearray(b" " * (rows * columns))

    def row(self, index: int) -> bytes:
        start = index * self.columns
        return bytes(self.cells[start : start + self.columns])

    def write(self, index: int, col: int, data: bytes) -> None:
        if not 0 <= index < self.rows:
            raise IndexError(f"row {index} outside screen")
        if col < 0 or col + len(data) > self.columns:
            raise IndexError(f"span {col}+{len(data)} outside row")
        start = index * self.columns + col
        self.cells[start : start + len(data)] = data

    def erase(self) -> None:
        self.cells[:] = b" " * len(self.cells)


__all__ = ["ViewportState", "VirtualScreen"]
