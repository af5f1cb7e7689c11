"""Reusable key-combo registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .state import ViewerState

KeyAction = Callable[[ViewerState], ViewerState]


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single state transition."""

    combos: tuple[str, ...]
    handler: KeyAction


class KeyComboRegistry:
    """Small exact-match key-dispatch table."""

    def __init__(self) -> None:
        self._handlers: dict[str, KeyAction] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str, state: ViewerState) -> ViewerState | None:
        """Apply the handler bound to ``key``; ``None`` when the key is unbound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler(state)

    def bound_keys(self) -> tuple[str, ...]:
        return tuple(self._handlers)
