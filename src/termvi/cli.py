"""Command-line entry point: ``termvi [FILE ...]``."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from termvi.config import EditorConfig
from termvi.runtime import telemetry
from termvi.screen import escapes
from termvi.session import edit_files
from termvi.terminal import DriverReadError, LocalFileStore, PosixTerminal


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="termvi", description="Edit files with a small vi-style editor."
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="files to edit one after another (none starts an empty buffer)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    config = EditorConfig.from_env()
    store = LocalFileStore()
    try:
        with PosixTerminal(escape_timeout=config.escape_timeout) as terminal:
            terminal.write(escapes.ALT_SCREEN_ON)
            try:
                edit_files(args.files, driver=terminal, store=store, config=config)
            finally:
                terminal.write(escapes.ALT_SCREEN_OFF)
    except DriverReadError as exc:
        telemetry.record_event(
            "session.abort", level="error", data={"reason": str(exc)}
        )
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    raise SystemExit(main())
