"""Registry of editor actions and the key bindings that reach them."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import DefaultDict, Dict, Iterable, Iterator, Optional, Tuple

from termvi.runtime import telemetry

from .models import ActionRef, Binding

# A binding slot: mode, key tokens and the exact set of flag guards.
Slot = Tuple[str, Tuple[str, ...], frozenset]


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding would share its mode, keys and guards with another one."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        taken = ", ".join(existing.id for existing in self.conflicts)
        super().__init__(
            f"Binding '{binding.id}' ({' '.join(binding.tokens)}) clashes with {taken}"
        )


def _slot(binding: Binding) -> Slot:
    return binding.mode, binding.tokens, binding.guards


class KeymapRegistry:
    """Action table plus bindings grouped by mode.

    Bindings for the same keys may coexist only when their ``when`` guards
    differ, as with ``0`` bound once for ``count_pending`` and once for
    ``!count_pending``. Every binding change bumps ``revision()`` so the
    resolver knows to rebuild its tries.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[Slot, str] = {}
        self._by_mode: DefaultDict[str, set[str]] = defaultdict(set)
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        action = self._actions.get(action_id)
        if action is None:
            raise KeyError(f"Action '{action_id}' is not registered")
        return action

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with telemetry.span(
            "keymaps::bind",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.fail("unknown_action")
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )
            clashes = self.detect_conflicts(binding)
            if clashes and not replace:
                handle.fail("conflict")
                raise KeymapConflictError(binding, clashes)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in clashes:
                self._drop(stale)
            if binding.id in self._bindings:
                self._drop(self._bindings[binding.id])

            self._bindings[binding.id] = binding
            self._slots[_slot(binding)] = binding.id
            self._by_mode[binding.mode].add(binding.id)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        """Bindings in id order, optionally limited to one mode."""

        ids = self._bindings if mode is None else self._by_mode.get(mode, ())
        for binding_id in sorted(ids):
            yield self._bindings[binding_id]

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        holder = self._slots.get(_slot(binding))
        if holder is None or holder == binding.id:
            return []
        return [self._bindings[holder]]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted(mode for mode, ids in self._by_mode.items() if ids)),
        )

    def _drop(self, binding: Binding) -> None:
        del self._bindings[binding.id]
        self._slots.pop(_slot(binding), None)
        members = self._by_mode.get(binding.mode)
        if members is not None:
            members.discard(binding.id)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
