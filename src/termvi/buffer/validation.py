"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .text import TextBuffer


class BufferValidationError(RuntimeError):
    """Raised when an offset or size falls outside the buffer."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


def ensure_offset(buffer: "TextBuffer", offset: int) -> int:
    if offset < 0 or offset > buffer.length:
        raise BufferValidationError(
            f"Offset {offset} out of range [0, {buffer.length}]", offset=offset
        )
    return offset


def ensure_size(size: int) -> int:
    if size < 0:
        raise BufferValidationError(f"Negative size {size}")
    return size
