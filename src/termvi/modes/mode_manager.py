"""Active-mode bookkeeping and key dispatch for one editing session."""

from __future__ import annotations

from typing import Dict, Optional, Type

from termvi.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from termvi.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .insert_mode import InsertMode
from .line_input_mode import LineInputMode
from .normal_mode import NormalMode

DEFAULT_MODES: tuple[Type[Mode], ...] = (NormalMode, InsertMode, LineInputMode)


class ModeManager:
    """Routes every key to the active mode and applies the switch it requests.

    The first registered mode becomes active. Navigation keycodes (arrows,
    Home/End, PageUp/PageDown, Delete) typed in Insert mode are resolved by
    the normal keymap while Insert mode stays active.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.logger = telemetry.get_logger("termvi.modes")
        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="termvi.keymaps")
            if load_defaults:
                load_default_keymaps(keymap_registry)
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            keymap_registry, logger_name="termvi.keymaps"
        )
        for key, value in (
            ("keymap_registry", self.keymap_registry),
            ("keymap_resolver", self.keymap_resolver),
            ("keymap_flags", {}),
            ("mode_manager", self),
        ):
            context.extras.setdefault(key, value)
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[Mode] = None

    @classmethod
    def with_default_modes(cls, context: ModeContext, **kwargs: object) -> "ModeManager":
        manager = cls(context, **kwargs)  # type: ignore[arg-type]
        for mode_cls in DEFAULT_MODES:
            manager.register_mode(mode_cls)
        return manager

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._active

    @property
    def active_name(self) -> Optional[str]:
        return self._active.name if self._active else None

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        if mode_cls.name in self._modes:
            raise ValueError(f"Mode '{mode_cls.name}' already registered")
        mode = mode_cls(self.context)
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        target = self._modes.get(name)
        if target is None:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self._active
        if previous is target:
            return
        if previous is not None:
            previous.on_exit(name)
        self._active = target
        target.on_enter(previous.name if previous else None)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"mode": name, "previous": previous.name if previous else ""},
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self._active
        if mode is None:
            raise RuntimeError("No active mode registered")
        handler = mode
        if mode.name == InsertMode.name and key.is_navigation:
            handler = self._modes.get(NormalMode.name, mode)
        with telemetry.span(
            name=f"mode::{handler.name}",
            component=True,
            metadata={"key": key.token, "mode": mode.name},
        ):
            result = handler.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["ModeManager", "DEFAULT_MODES"]
