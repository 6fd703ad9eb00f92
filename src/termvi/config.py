"""Editor configuration resolved from defaults and ``TERMVI_*`` variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = "TERMVI_"

MAX_TABSTOP = 32
# User input line length. Lines in the edited file can be longer.
MAX_INPUT_LEN = 128
MAX_SCR_COLS = 4096
MAX_SCR_ROWS = 4096


def _env(
    name: str, default: Optional[str] = None, *, environ: Mapping[str, str] | None = None
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool, *, environ: Mapping[str, str] | None = None) -> bool:
    raw = _env(name, environ=environ)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, fallback: int, *, environ: Mapping[str, str] | None = None) -> int:
    raw = _env(name, environ=environ)
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


def clamp_tabstop(value: int) -> int:
    return max(1, min(value, MAX_TABSTOP))


@dataclass(slots=True)
class EditorConfig:
    """Tunables shared by every editing session."""

    tabstop: int = 8
    line_numbers: bool = False
    count_limit: int = 99999
    hole_slack: int = 10240
    escape_timeout: float = 0.025
    default_rows: int = 24
    default_columns: int = 80

    def __post_init__(self) -> None:
        self.tabstop = clamp_tabstop(self.tabstop)
        if self.count_limit < 1:
            raise ValueError("count_limit must be positive")
        if self.hole_slack < 1:
            raise ValueError("hole_slack must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EditorConfig":
        defaults = cls()
        timeout_ms = _env_int(
            "ESCAPE_TIMEOUT_MS",
            int(defaults.escape_timeout * 1000),
            environ=environ,
        )
        count_limit = _env_int("COUNT_LIMIT", defaults.count_limit, environ=environ)
        return cls(
            tabstop=_env_int("TABSTOP", defaults.tabstop, environ=environ),
            line_numbers=_env_flag("NUMBER", defaults.line_numbers, environ=environ),
            count_limit=count_limit if count_limit > 0 else defaults.count_limit,
            escape_timeout=max(0, timeout_ms) / 1000.0,
        )


__all__ = [
    "EditorConfig",
    "ENV_PREFIX",
    "MAX_TABSTOP",
    "MAX_INPUT_LEN",
    "MAX_SCR_COLS",
    "MAX_SCR_ROWS",
    "clamp_tabstop",
]
