"""Glue between a mode and the keymap resolver kept in ``ModeContext.extras``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import MutableMapping, Sequence, cast

from termvi.keymaps import KeymapResolver, ResolutionMatch, ResolutionResult
from termvi.runtime import telemetry

from .base_mode import ModeContext, ModeResult


@dataclass(slots=True)
class KeymapPort:
    """A mode's handle on the shared resolver and its guard flags."""

    context: ModeContext
    resolver: KeymapResolver
    flags: MutableMapping[str, bool]

    @classmethod
    def attach(cls, context: ModeContext) -> "KeymapPort":
        resolver = context.extras.get("keymap_resolver")
        if not isinstance(resolver, KeymapResolver):
            raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
        flags = context.extras.setdefault("keymap_flags", {})
        return cls(context, resolver, cast(MutableMapping[str, bool], flags))

    def set_flag(self, name: str, value: bool) -> None:
        self.flags[name] = value

    def lookup(self, mode: str, codes: Sequence[int]) -> ResolutionResult:
        return self.resolver.resolve_codes(mode, codes, context=self.flags)

    def run(self, match: ResolutionMatch) -> ModeResult:
        """Call the bound action; a ``None`` outcome counts as consumed."""

        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)
        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["KeymapPort"]
