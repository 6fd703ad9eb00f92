"""Mutable editor state bundled into one explicit context object."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from termvi.buffer import TextBuffer
from termvi.config import EditorConfig
from termvi.screen import ScreenModel, StatusLine, ViewportState
from termvi.terminal import FileStore, TerminalDriver


class EditMode(str, Enum):
    """Modal states of the command interpreter."""

    COMMAND = "command"
    INSERT = "insert"
    REPLACE_PENDING = "replace_pending"


@dataclass(frozen=True, slots=True)
class SearchPattern:
    direction: int
    text: bytes

    def reversed(self) -> "SearchPattern":
        return SearchPattern(direction=-self.direction, text=self.text)


@dataclass(slots=True)
class LineInput:
    """Text collected on the status row after a prompt such as ``:`` or ``/``."""

    prompt: bytes
    text: bytearray = field(default_factory=bytearray)

    @property
    def value(self) -> bytes:
        return bytes(self.text)


@dataclass(slots=True)
class CommandState:
    """Mode, pending repeat count and remembered search."""

    mode: EditMode = EditMode.COMMAND
    repeat_count: int = 0
    last_search: Optional[SearchPattern] = None
    editing: bool = True
    count_limit: int = 99999

    def add_digit(self, digit: int) -> int:
        """Accumulate a decimal digit, saturating at ``count_limit``."""

        self.repeat_count = min(self.repeat_count * 10 + digit, self.count_limit)
        return self.repeat_count

    def take_count(self, default: int = 1) -> int:
        return self.repeat_count if self.repeat_count > 0 else default

    def reset_count(self) -> None:
        self.repeat_count = 0

    def enter_command_mode(self) -> None:
        self.mode = EditMode.COMMAND
        self.repeat_count = 0

    def enter_insert_mode(self) -> None:
        self.mode = EditMode.INSERT

    def enter_replace_pending(self) -> None:
        self.mode = EditMode.REPLACE_PENDING


@dataclass
class EditorState:
    """Everything one editing session mutates."""

    buffer: TextBuffer
    viewport: ViewportState
    screen: ScreenModel
    driver: TerminalDriver
    store: FileStore
    config: EditorConfig = field(default_factory=EditorConfig)
    status: StatusLine = field(default_factory=StatusLine)
    command: CommandState = field(default_factory=CommandState)
    filename: str = ""

    @classmethod
    def create(
        cls,
        *,
        driver: TerminalDriver,
        store: FileStore,
        config: Optional[EditorConfig] = None,
        filename: str = "",
        buffer: Optional[TextBuffer] = None,
    ) -> "EditorState":
        config = config or EditorConfig()
        buffer = buffer or TextBuffer(name=filename, slack=config.hole_slack)
        viewport = ViewportState(
            rows=config.default_rows,
            columns=config.default_columns,
            tabstop=config.tabstop,
            line_numbers=config.line_numbers,
        )
        return cls(
            buffer=buffer,
            viewport=viewport,
            screen=ScreenModel(buffer, viewport, driver),
            driver=driver,
            store=store,
            config=config,
            command=CommandState(count_limit=config.count_limit),
            filename=filename,
        )

    @property
    def dot(self) -> int:
        return self.buffer.dot

    @dot.setter
    def dot(self, value: int) -> None:
        self.buffer.dot = max(0, min(value, self.buffer.length))


__all__ = [
    "EditMode",
    "SearchPattern",
    "LineInput",
    "CommandState",
    "EditorState",
]
