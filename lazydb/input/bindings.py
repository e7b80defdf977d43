"""Per-mode key-sequence binding table."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..action import Action
from ..mode import Mode

KeySequence = tuple[str, ...]


def parse_key_sequence(text: str) -> KeySequence:
    """Split a config-file sequence such as ``"g g"`` into key tokens."""
    return tuple(token for token in str(text).split() if token)


def format_key_sequence(sequence: KeySequence) -> str:
    return " ".join(sequence)


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one key sequence to a single action."""

    sequence: KeySequence
    action: Action


class KeyBindingTable:
    """Read-only ``Mode -> (key sequence -> Action)`` table.

    Built once at startup; ``register_binding`` is only used while loading.
    """

    def __init__(self, bindings: Mapping[Mode, Mapping[KeySequence, Action]] | None = None) -> None:
        self._bindings: dict[Mode, dict[KeySequence, Action]] = {}
        self._prefixes: dict[Mode, set[KeySequence]] = {}
        if bindings:
            for mode, mode_bindings in bindings.items():
                for sequence, action in mode_bindings.items():
                    self.register_binding(mode, KeyBinding(tuple(sequence), action))

    def register_binding(self, mode: Mode, binding: KeyBinding) -> KeyBindingTable:
        """Register one binding, overwriting an existing one for the same sequence."""
        if not binding.sequence:
            raise ValueError("key sequence must not be empty")
        self._bindings.setdefault(mode, {})[binding.sequence] = binding.action
        prefixes = self._prefixes.setdefault(mode, set())
        for size in range(1, len(binding.sequence)):
            prefixes.add(binding.sequence[:size])
        return self

    def register_bindings(self, mode: Mode, bindings: Iterable[KeyBinding]) -> KeyBindingTable:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(mode, binding)
        return self

    def lookup(self, mode: Mode, sequence: KeySequence) -> Action | None:
        return self._bindings.get(mode, {}).get(tuple(sequence))

    def has_longer(self, mode: Mode, sequence: KeySequence) -> bool:
        """Return whether some bound sequence strictly extends ``sequence``."""
        return tuple(sequence) in self._prefixes.get(mode, set())

    def bindings_for(self, mode: Mode) -> dict[KeySequence, Action]:
        return dict(self._bindings.get(mode, {}))

    def merged(self, overrides: KeyBindingTable) -> KeyBindingTable:
        """Return a new table with ``overrides`` layered over this one."""
        combined = KeyBindingTable()
        for source in (self, overrides):
            for mode, mode_bindings in source._bindings.items():
                for sequence, action in mode_bindings.items():
                    combined.register_binding(mode, KeyBinding(sequence, action))
        return combined

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyBindingTable):
            return NotImplemented
        return self._bindings == other._bindings
