"""Value objects for key bindings: strokes, sequences, guards and actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Sequence

from termvi import keycodes


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """One key as named in a keymap: ``"j"``, ``"<C-f>"``, ``"<PageDown>"``."""

    token: str

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("token cannot be empty")

    @classmethod
    def from_code(cls, code: int) -> "KeyStroke":
        return cls(keycodes.token_for(code))

    @property
    def is_named(self) -> bool:
        return len(self.token) > 1 and self.token.startswith("<")


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    def __len__(self) -> int:
        return len(self.strokes)

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(KeyStroke(key) for key in keys if key))

    @classmethod
    def from_codes(cls, codes: Sequence[int]) -> "KeySequence":
        return cls(tuple(KeyStroke.from_code(code) for code in codes))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Guard on one interpreter flag, written ``flag`` or ``!flag``."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        text = expression.strip()
        negated = text.startswith("!")
        return cls(text[1:] if negated else text, not negated)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) is self.expected

    def __str__(self) -> str:
        return self.flag if self.expected else f"!{self.flag}"


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editor verb; keymaps bind key sequences to these ids."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    @property
    def keeps_count(self) -> bool:
        """True when running the action must not clear the repeat count."""

        return bool(self.metadata.get("keeps_count", False))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


def _clauses(items: Iterable[WhenClause | str]) -> tuple[WhenClause, ...]:
    return tuple(
        item if isinstance(item, WhenClause) else WhenClause.parse(item)
        for item in items
    )


@dataclass(frozen=True, slots=True)
class Binding:
    """Key sequence bound to an action id within a single mode."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for label in ("id", "mode", "action_id"):
            if not getattr(self, label):
                raise ValueError(f"binding {label} cannot be empty")
        object.__setattr__(self, "when", _clauses(self.when))

    @property
    def tokens(self) -> tuple[str, ...]:
        return self.sequence.tokens

    @property
    def last_token(self) -> str:
        return self.sequence.tokens[-1]

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    @property
    def guards(self) -> frozenset[tuple[str, bool]]:
        return frozenset(self.when_map.items())

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "KeyStroke",
    "KeySequence",
    "WhenClause",
    "ActionRef",
    "Binding",
]
