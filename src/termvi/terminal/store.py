"""Whole-file persistence for editing sessions."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class FileStore(Protocol):
    """Reads and writes complete files; failures raise ``OSError``."""

    def read_all(self, path: str) -> bytes:
        ...

    def write_all(self, path: str, data: bytes) -> None:
        ...


class LocalFileStore:
    """``FileStore`` backed by the local filesystem."""

    def read_all(self, path: str) -> bytes:
        if not path:
            raise FileNotFoundError("no file name")
        return Path(path).read_bytes()

    def write_all(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)


__all__ = ["FileStore", "LocalFileStore"]
