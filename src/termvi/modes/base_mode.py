"""Key input, results and the context object every editor mode shares."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, DefaultDict, Dict, List, Optional

from termvi import keycodes

if TYPE_CHECKING:
    from termvi.state import EditorState

Listener = Callable[[object], None]


@dataclass(frozen=True, slots=True)
class KeyInput:
    """One input code: a byte ``0..255`` or a negative special keycode."""

    code: int

    @property
    def token(self) -> str:
        return keycodes.token_for(self.code)

    @property
    def is_byte(self) -> bool:
        return 0 <= self.code <= 0xFF

    @property
    def is_navigation(self) -> bool:
        return self.code in keycodes.NAVIGATION_CODES


@dataclass(slots=True)
class ModeResult:
    """Outcome of one key.

    ``status`` is a short machine-readable tag (``"miss"``, ``"pending"``,
    ``"command_write"``...); ``switch_to`` names the mode to activate next.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Synchronous publish/subscribe channel between actions and the session."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event: str, callback: Listener) -> None:
        self._listeners[event].append(callback)

    def unsubscribe(self, event: str, callback: Listener) -> None:
        listeners = self._listeners.get(event)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in tuple(self._listeners.get(event, ())):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    state: "EditorState"
    bus: ModeBus
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    """A modal key handler; subclasses set ``name`` and ``handle_key``."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def state(self) -> "EditorState":
        return self.context.state

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(
        self, key: KeyInput
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError
