"""Deferred one-line messages shown on the bottom row."""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import escapes

if TYPE_CHECKING:
    from .render import ScreenModel


class StatusLine:
    """Holds at most one message until the next refresh cycle shows it."""

    def __init__(self) -> None:
        self._message = b""

    @property
    def pending(self) -> bool:
        return bool(self._message)

    @property
    def message(self) -> bytes:
        return self._message

    def set(self, text: str | bytes) -> None:
        self._message = _encode(text)

    def set_bold(self, text: str | bytes) -> None:
        self._message = escapes.BOLD_TEXT + _encode(text) + escapes.NORMAL_TEXT

    def clear(self) -> None:
        self._message = b""

    def show(self, screen: "ScreenModel") -> bool:
        if not self._message:
            return False
        screen.go_bottom_and_clear_to_eol()
        screen.driver.write(self._message)
        self._message = b""
        screen.place_text_cursor()
        return True


def _encode(text: str | bytes) -> bytes:
    if isinstance(text, bytes):
        return text
    return text.encode("utf-8", "surrogateescape")


__all__ = ["StatusLine"]
