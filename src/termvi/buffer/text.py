"""Offset-addressed byte buffer holding the text being edited."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, ContextManager, Optional, TYPE_CHECKING

from termvi import keycodes
from termvi.runtime import telemetry

from .validation import BufferValidationError, ensure_offset, ensure_size

if TYPE_CHECKING:
    from termvi.state import CommandState

DEFAULT_SLACK = 10240

ByteSource = Callable[[], bytes]


class TextBuffer:
    """Growable byte storage with a logical end and a cursor ("dot").

    ``data`` carries slack past ``length``; only ``data[:length]`` is text.
    """

    def __init__(
        self, initial: bytes = b"", *, name: str = "", slack: int = DEFAULT_SLACK
    ) -> None:
        self.name = name
        self.slack = slack
        self.data = bytearray(len(initial) + slack)
        self.data[: len(initial)] = initial
        self.length = len(initial)
        self.dot = 0
        self.modified_count = 0

    @classmethod
    def from_bytes(cls, text: bytes, *, name: str = "") -> "TextBuffer":
        return cls(text, name=name)

    @property
    def capacity(self) -> int:
        return len(self.data)

    @property
    def modified(self) -> bool:
        return self.modified_count != 0

    def content(self) -> bytes:
        return bytes(self.data[: self.length])

    def char_at(self, pos: int) -> Optional[int]:
        """Byte at ``pos`` or ``None`` outside ``[0, length)``."""

        if 0 <= pos < self.length:
            return self.data[pos]
        return None

    def make_hole(self, pos: int, size: int) -> None:
        """Open a ``size`` byte gap at ``pos``, shifting the tail forward."""

        ensure_offset(self, pos)
        if size <= 0:
            return
        old_length = self.length
        new_length = old_length + size
        if new_length >= self.capacity:
            grown = bytearray(new_length + self.slack)
            grown[:old_length] = self.data[:old_length]
            self.data = grown
        self.data[pos + size : new_length] = self.data[pos:old_length]
        self.length = new_length

    def delete(self, pos: int, size: int) -> int:
        """Close a ``size`` byte gap at ``pos``; returns bytes removed."""

        ensure_offset(self, pos)
        ensure_size(size)
        size = min(size, self.length - pos)
        if size == 0:
            return 0
        with Transaction(self, "delete"):
            old_length = self.length
            self.data[pos : old_length - size] = self.data[pos + size : old_length]
            self.length = old_length - size
            self.modified_count += 1
            if self.dot > self.length:
                self.dot = self.length
        return size

    def replace_byte(self, pos: int, value: int) -> None:
        if not 0 <= pos < self.length:
            raise BufferValidationError(f"Offset {pos} has no byte", offset=pos)
        if self.data[pos] != value:
            self.data[pos] = value
            self.modified_count += 1

    def insert_char(
        self, pos: int, c: int, command: Optional["CommandState"] = None
    ) -> int:
        """Insert ``c`` at ``pos`` and return the offset after it.

        ESC inserts nothing: it drops ``command`` back to Command mode with
        the repeat count cleared and returns ``pos`` unchanged.
        """

        if c == keycodes.ESC:
            if command is not None:
                command.enter_command_mode()
            return pos
        if c == keycodes.CR:
            c = keycodes.LF
        if not 0 <= c <= 0xFF:
            raise BufferValidationError(f"Code {c} is not a byte", offset=pos)
        self.make_hole(pos, 1)
        self.data[pos] = c
        self.modified_count += 1
        return pos + 1

    def insert_from_source(self, reader: ByteSource, pos: int) -> int:
        """Copy the bytes produced by ``reader`` into a hole at ``pos``.

        Returns the number of bytes copied, or ``-1`` when the source cannot
        be opened.
        """

        pos = max(0, min(pos, self.length))
        with Transaction(self, "insert_from_source") as tx:
            try:
                payload = reader()
            except OSError as exc:
                tx.note("error", exc)
                return -1
            size = len(payload)
            self.make_hole(pos, size)
            self.data[pos : pos + size] = payload
            tx.note("size", size)
        return size

    def search(self, start: int, pattern: bytes, direction: int) -> int:
        """Literal search; ``-1`` when nothing matches. No wraparound."""

        if not pattern:
            return -1
        if direction > 0:
            if start < 0 or start >= self.length:
                return -1
            return self.data.find(pattern, start, self.length)
        if start <= 0 or start > self.length:
            return -1
        return self.data.rfind(pattern, 0, start)


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span around a multi-byte buffer operation."""

    def __init__(self, buffer: TextBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name or "[No Name]"},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def note(self, key: str, value: object) -> None:
        if self._handle is not None:
            self._handle.add_metadata(key, value)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["TextBuffer", "Transaction", "ByteSource", "DEFAULT_SLACK"]
