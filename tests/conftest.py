from __future__ import annotations

from collections import deque
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

import pytest

from termvi.config import EditorConfig
from termvi.session import EditSession
from termvi.terminal import DriverReadError

Key = Union[str, bytes, int]


def codes_for(keys: Iterable[Key]) -> List[int]:
    """Flatten strings, bytes and raw keycodes into one code list."""

    codes: List[int] = []
    for key in keys:
        if isinstance(key, int):
            codes.append(key)
        elif isinstance(key, bytes):
            codes.extend(key)
        else:
            codes.extend(key.encode("latin-1"))
    return codes


class FakeTerminal:
    """Scripted ``TerminalDriver``: replays codes, records every write."""

    def __init__(
        self, keys: Iterable[Key] = (), *, size: Optional[Tuple[int, int]] = (24, 80)
    ) -> None:
        self.codes: deque[int] = deque(codes_for(keys))
        self.size = size
        self.writes: List[bytes] = []
        self.raw = False
        self.restored = 0

    def feed(self, *keys: Key) -> None:
        self.codes.extend(codes_for(keys))

    def enter_raw_mode(self) -> None:
        self.raw = True

    def restore_mode(self) -> None:
        self.raw = False
        self.restored += 1

    def query_window_size(self) -> Optional[Tuple[int, int]]:
        return self.size

    def read_code(self) -> int:
        if not self.codes:
            raise DriverReadError("input stream closed")
        return self.codes.popleft()

    def has_pending(self) -> bool:
        return False

    def write(self, data: bytes) -> None:
        self.writes.append(bytes(data))

    @property
    def output(self) -> bytes:
        return b"".join(self.writes)

    def clear(self) -> None:
        self.writes.clear()

    def __enter__(self) -> "FakeTerminal":
        self.enter_raw_mode()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore_mode()
        return False


class FakeStore:
    """Dict-backed ``FileStore``; ``fail_with`` makes every write raise."""

    def __init__(self, files: Optional[Dict[str, bytes]] = None) -> None:
        self.files: Dict[str, bytes] = dict(files or {})
        self.writes: List[Tuple[str, bytes]] = []
        self.fail_with: Optional[OSError] = None

    def read_all(self, path: str) -> bytes:
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]

    def write_all(self, path: str, data: bytes) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.files[path] = bytes(data)
        self.writes.append((path, bytes(data)))


@pytest.fixture
def terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def make_session(
    terminal: FakeTerminal, store: FakeStore
) -> Callable[..., EditSession]:
    def factory(
        text: Optional[bytes] = b"",
        *,
        filename: str = "notes.txt",
        rows: int = 24,
        columns: int = 80,
        config: Optional[EditorConfig] = None,
    ) -> EditSession:
        if text is not None and filename:
            store.files[filename] = text
        terminal.size = (rows, columns)
        session = EditSession.open(
            filename,
            driver=terminal,
            store=store,
            config=config or EditorConfig(default_rows=rows, default_columns=columns),
        )
        session.resize()
        session.state.status.clear()
        terminal.clear()
        return session

    return factory


@pytest.fixture
def press() -> Callable[..., EditSession]:
    """Feed keys through the session exactly as the main loop would."""

    def run(session: EditSession, *keys: Key) -> EditSession:
        for code in codes_for(keys):
            session.handle_code(code)
            if session.state.command.editing:
                session.render()
        return session

    return run
