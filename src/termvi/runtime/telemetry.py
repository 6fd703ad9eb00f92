"""Logging and profiling for the editor, backed by telelog.

The terminal itself is the editing surface, so nothing is printed to it by
default: set ``TERMVI_LOG_FILE`` to collect records in a file, or
``TERMVI_LOG_CONSOLE=1`` when the output is redirected elsewhere.

``configure(...)`` -- adopt settings, a preset or a ready ``tl.Config``
``get_logger(name)`` -- cached telelog logger per name
``record_event(name, ...)`` -- one structured ``event::<name>`` record
``span(name, ...)`` -- profiled block with optional component tracking
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "TERMVI_"
DEFAULT_LOGGER_NAME = "termvi"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class TelemetrySettings:
    """What telelog should do with the editor's records."""

    level: str = "INFO"
    log_file: str = ""
    console: bool = False
    colored: bool = True
    json: bool = False
    buffered: bool = False
    buffer_size: int = 2048
    profile: bool = False
    logger_name: str = DEFAULT_LOGGER_NAME

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "TelemetrySettings":
        env = os.environ if environ is None else environ

        def flag(name: str, default: bool) -> bool:
            raw = env.get(f"{ENV_PREFIX}{name}")
            return default if raw is None else raw.strip().lower() in _TRUTHY

        try:
            buffer_size = int(env.get(f"{ENV_PREFIX}LOG_BUFFER_SIZE", "2048"))
        except ValueError:
            buffer_size = 2048
        return cls(
            level=(env.get(f"{ENV_PREFIX}LOG_LEVEL") or "INFO").upper(),
            log_file=env.get(f"{ENV_PREFIX}LOG_FILE", ""),
            console=flag("LOG_CONSOLE", False),
            colored=not flag("NO_COLOR", False),
            json=flag("LOG_JSON", False),
            buffered=flag("LOG_BUFFERED", False),
            buffer_size=max(buffer_size, 1),
            profile=flag("PROFILE", False),
            logger_name=env.get(f"{ENV_PREFIX}LOGGER") or DEFAULT_LOGGER_NAME,
        )

    def with_preset(self, preset: str) -> "TelemetrySettings":
        overrides = PRESETS.get(preset.lower())
        if overrides is None:
            raise ValueError(f"Unknown preset '{preset}'.")
        settings = replace(self, **overrides)
        if preset.lower() != "production" and not settings.log_file:
            settings = replace(settings, log_file=f"{self.logger_name}-{preset.lower()}.log")
        return settings

    def build(self) -> Any:
        config = tl.Config()
        config.with_min_level(self.level)
        config.with_console_output(self.console)
        if self.console:
            config.with_colored_output(self.colored)
        if self.json:
            config.with_json_format(True)
        if self.log_file:
            config.with_file_output(self.log_file)
        if self.buffered:
            config.with_buffering(True)
            config.with_buffer_size(self.buffer_size)
        config.with_profiling(self.profile)
        return config


PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {"level": "DEBUG", "console": False, "profile": True},
    "production": {"level": "WARNING", "console": False, "buffered": True},
    "performance": {"level": "DEBUG", "json": True, "buffered": True, "profile": True},
}

_LOGGERS: MutableMapping[str, Any] = {}
_CONFIG: Optional[Any] = None
_SETTINGS: TelemetrySettings = TelemetrySettings()


def configure(
    *,
    settings: Optional[TelemetrySettings] = None,
    preset: Optional[str] = None,
    config: Optional[Any] = None,
) -> TelemetrySettings:
    """Replace the active telelog configuration and forget cached loggers.

    ``config`` is a ready ``tl.Config`` and wins over everything else;
    otherwise ``settings`` (default: read from the environment) is built,
    after applying ``preset`` when one is named.
    """

    global _CONFIG, _SETTINGS
    if config is not None and (settings is not None or preset is not None):
        raise ValueError("Provide `config` on its own.")
    base = settings or TelemetrySettings.from_env()
    if preset:
        base = base.with_preset(preset)
    _SETTINGS = base
    _CONFIG = config if config is not None else base.build()
    _LOGGERS.clear()
    return base


def _active_config() -> Any:
    if _CONFIG is None:
        configure()
    return _CONFIG


def get_logger(name: Optional[str] = None) -> Any:
    config = _active_config()
    logger_name = name or _SETTINGS.logger_name
    logger = _LOGGERS.get(logger_name)
    if logger is None:
        logger = _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, config)
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        # Buffer contents and patterns are raw bytes; keep them lossless.
        return bytes(value).decode("latin-1")
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _pairs(data: Mapping[str, Any]) -> list[Tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def _emit(logger: Any, level: str, message: str, data: Mapping[str, Any]) -> None:
    name = level.lower()
    structured = getattr(logger, f"{name}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
        return
    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(_pairs(data))}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Lets the body of a ``span`` attach results or flag a failure."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _emit(self.logger, "error", "span::fail", payload)


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile the block under ``name``.

    ``component=True`` tracks the block as component ``name``; a string picks
    another component name. ``metadata`` becomes logger context while the
    block runs. An exception escaping the block is reported, then re-raised.
    """

    logger = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _text(value) for key, value in (metadata or {}).items()}

    with ExitStack() as stack:
        for key, value in context.items():
            logger.add_context(key, value)
            stack.callback(logger.remove_context, key)
        if component_name:
            stack.enter_context(logger.track_component(component_name))
        stack.enter_context(logger.profile(name))
        handle = SpanHandle(
            logger=logger,
            span_name=name,
            component_name=cast(Optional[str], component_name),
            metadata=dict(context),
        )
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc) or type(exc).__name__)
            raise


__all__ = [
    "TelemetrySettings",
    "PRESETS",
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
