"""Raw-mode terminal access: one input code in, raw bytes out."""

from __future__ import annotations

import os
import select
import selectors
import shutil
import signal
import sys
import termios
from collections import deque
from contextlib import AbstractContextManager
from typing import Deque, List, Optional, Protocol, Tuple

from termvi import keycodes
from termvi.runtime import telemetry


class DriverReadError(RuntimeError):
    """Raised when the input stream fails or closes."""


class TerminalDriver(Protocol):
    """Capabilities the editor core needs from a terminal."""

    def enter_raw_mode(self) -> None:
        ...

    def restore_mode(self) -> None:
        ...

    def query_window_size(self) -> Optional[Tuple[int, int]]:
        """Return ``(rows, columns)`` or ``None`` when unknown."""
        ...

    def read_code(self) -> int:
        """Block until one input code (byte, keycode or RESIZE) arrives."""
        ...

    def has_pending(self) -> bool:
        """True when more input is already buffered."""
        ...

    def write(self, data: bytes) -> None:
        ...


class PosixTerminal(AbstractContextManager["PosixTerminal"]):
    """``TerminalDriver`` over a POSIX tty.

    SIGWINCH is delivered through a self-pipe so resizes arrive as
    ``keycodes.RESIZE`` codes in the same blocking read loop as keys.
    """

    def __init__(
        self,
        *,
        stdin_fd: Optional[int] = None,
        stdout_fd: Optional[int] = None,
        escape_timeout: float = 0.025,
    ) -> None:
        self.stdin_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
        self.stdout_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
        self.escape_timeout = escape_timeout
        self.logger = telemetry.get_logger("termvi.terminal")
        self._saved: Optional[List] = None
        self._pending: Deque[int] = deque()
        self._selector: Optional[selectors.BaseSelector] = None
        self._wake_r: Optional[int] = None
        self._wake_w: Optional[int] = None
        self._old_wakeup_fd: Optional[int] = None
        self._old_winch = None
        self._resized = False

    # -- mode switching ------------------------------------------------

    def enter_raw_mode(self) -> None:
        if self._saved is not None:
            return
        saved = termios.tcgetattr(self.stdin_fd)
        raw = termios.tcgetattr(self.stdin_fd)
        # No line buffering, no echo.
        raw[3] &= ~(termios.ICANON | termios.ECHO | termios.ECHONL)
        # CR/NL and XON/XOFF are delivered as ordinary bytes.
        raw[0] &= ~(termios.IXON | termios.ICRNL)
        raw[6][termios.VMIN] = 1
        raw[6][termios.VTIME] = 0
        termios.tcsetattr(self.stdin_fd, termios.TCSANOW, raw)
        self._saved = saved
        self._install_resize_handler()

    def restore_mode(self) -> None:
        self._remove_resize_handler()
        if self._saved is None:
            return
        termios.tcsetattr(self.stdin_fd, termios.TCSANOW, self._saved)
        self._saved = None

    def __enter__(self) -> "PosixTerminal":
        self.enter_raw_mode()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.restore_mode()
        return False

    # -- geometry ------------------------------------------------------

    def query_window_size(self) -> Optional[Tuple[int, int]]:
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            fallback = shutil.get_terminal_size((0, 0))
            if not fallback.lines or not fallback.columns:
                return None
            return fallback.lines, fallback.columns
        return size.lines, size.columns

    # -- output --------------------------------------------------------

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            count = os.write(self.stdout_fd, view)
            view = view[count:]

    # -- input ---------------------------------------------------------

    def has_pending(self) -> bool:
        return bool(self._pending) or self._wait_readable(0.0)

    def read_code(self) -> int:
        if self._resized:
            self._resized = False
            return keycodes.RESIZE
        if not self._pending:
            self._fill(None)
        if self._resized and not self._pending:
            self._resized = False
            return keycodes.RESIZE
        first = self._pending.popleft()
        if first != keycodes.ESC:
            return first
        return self._decode_escape()

    def _decode_escape(self) -> int:
        data = bytearray([keycodes.ESC])
        while len(data) < keycodes.KEY_BUFFER_SIZE:
            if not self._pending and not self._fill(self.escape_timeout):
                break
            data.append(self._pending.popleft())
            code, consumed = keycodes.decode_key(bytes(data))
            if code is not None:
                leftover = data[consumed:]
                self._pending.extendleft(reversed(leftover))
                return code
        code, consumed = keycodes.decode_key(bytes(data))
        if code is None:
            code, consumed = keycodes.ESC, 1
        self._pending.extendleft(reversed(data[consumed:]))
        return code

    def _fill(self, timeout: Optional[float]) -> bool:
        """Read available bytes into the pending queue.

        Returns False when ``timeout`` expired first. A resize wakes the
        blocking read and is reported through ``_resized``.
        """

        if not self._wait_readable(timeout):
            return False
        if self._resized and timeout is None:
            return False
        try:
            chunk = os.read(self.stdin_fd, keycodes.KEY_BUFFER_SIZE)
        except OSError as exc:
            raise DriverReadError(str(exc)) from exc
        if not chunk:
            raise DriverReadError("input stream closed")
        self._pending.extend(chunk)
        return True

    def _wait_readable(self, timeout: Optional[float]) -> bool:
        if self._selector is None:
            ready, _, _ = select.select([self.stdin_fd], [], [], timeout)
            return bool(ready)
        while True:
            for key, _ in self._selector.select(timeout):
                if key.fd == self._wake_r:
                    self._drain_wakeup()
                    self._resized = True
                    if timeout is None:
                        return True
                    continue
                return True
            if timeout is not None:
                return False

    # -- resize plumbing -----------------------------------------------

    def _install_resize_handler(self) -> None:
        if self._selector is not None or not hasattr(signal, "SIGWINCH"):
            return
        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_r, False)
        os.set_blocking(self._wake_w, False)
        self._old_wakeup_fd = signal.set_wakeup_fd(self._wake_w)
        self._old_winch = signal.signal(signal.SIGWINCH, self._on_winch)
        self._selector = selectors.DefaultSelector()
        self._selector.register(self.stdin_fd, selectors.EVENT_READ)
        self._selector.register(self._wake_r, selectors.EVENT_READ)

    def _remove_resize_handler(self) -> None:
        if self._selector is None:
            return
        signal.signal(signal.SIGWINCH, self._old_winch or signal.SIG_DFL)
        signal.set_wakeup_fd(
            self._old_wakeup_fd if self._old_wakeup_fd is not None else -1
        )
        self._selector.close()
        self._selector = None
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                os.close(fd)
        self._wake_r = self._wake_w = None

    def _on_winch(self, signum, frame) -> None:
        del signum, frame
        # The wakeup fd carries the notification; nothing to do here.

    def _drain_wakeup(self) -> None:
        assert self._wake_r is not None
        try:
            while os.read(self._wake_r, 64):
                pass
        except BlockingIOError:
            pass


__all__ = ["TerminalDriver", "PosixTerminal", "DriverReadError"]
