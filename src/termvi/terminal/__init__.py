"""Terminal and file-system collaborators of the editor core."""

from .driver import DriverReadError, PosixTerminal, TerminalDriver
from .store import FileStore, LocalFileStore

__all__ = [
    "TerminalDriver",
    "PosixTerminal",
    "DriverReadError",
    "FileStore",
    "LocalFileStore",
]
