"""Per-mode key tries turning input codes into bound actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence

from termvi import keycodes
from termvi.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    bindings: list[str] = field(default_factory=list)
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def descend(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    def next_tokens(self) -> tuple[str, ...]:
        return tuple(sorted(self.children))


@dataclass(slots=True)
class KeymapTrie:
    """Trie of every binding registered for one mode."""

    mode: str
    revision: int
    root: TrieNode = field(default_factory=TrieNode)

    def insert(self, binding: Binding) -> None:
        node = self.root
        for token in binding.sequence.tokens:
            node = node.descend(token)
        node.bindings.append(binding.id)

    def walk(self, tokens: Sequence[str]) -> tuple[Optional[TrieNode], int]:
        node = self.root
        depth = 0
        for token in tokens:
            child = node.children.get(token)
            if child is None:
                return None, depth
            node = child
            depth += 1
        return node, depth


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``match`` runs an action, ``pending`` waits for more keys, ``miss`` drops them."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Resolves key token sequences against the registry, one trie per mode."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, KeymapTrie] = {}

    def resolve_codes(
        self,
        mode: str,
        codes: Sequence[int],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        return self.resolve(
            mode, [keycodes.token_for(code) for code in codes], context=context
        )

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        flags = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": " ".join(tokens)},
        ) as handle:
            node, depth = self._trie_for(mode).walk(tokens)
            if node is None:
                handle.add_metadata("status", "miss")
                return ResolutionResult(status="miss", consumed=depth)

            match = self._best_match(node, flags)
            if match is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", match.binding.id)
                return ResolutionResult(status="match", match=match, consumed=depth)

            if node.children:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    consumed=depth,
                    next_expected=node.next_tokens(),
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=depth)

    def invalidate(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._tries.clear()
        else:
            self._tries.pop(mode, None)

    def _trie_for(self, mode: str) -> KeymapTrie:
        revision = self._registry.revision()
        trie = self._tries.get(mode)
        if trie is not None and trie.revision == revision:
            return trie
        trie = KeymapTrie(mode=mode, revision=revision)
        for binding in self._registry.iter_bindings(mode):
            trie.insert(binding)
        self._tries[mode] = trie
        return trie

    def _best_match(
        self, node: TrieNode, flags: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        candidates = [
            binding
            for binding in map(self._registry.get_binding, node.bindings)
            if binding.allows(flags)
        ]
        if not candidates:
            return None
        # Highest priority wins; the id breaks ties deterministically.
        best = min(candidates, key=lambda b: (-b.priority, b.id))
        return ResolutionMatch(
            binding=best, action=self._registry.get_action(best.action_id)
        )


__all__ = [
    "KeymapResolver",
    "KeymapTrie",
    "ResolutionResult",
    "ResolutionMatch",
]
