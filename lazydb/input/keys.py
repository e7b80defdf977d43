"""Key-sequence resolution against the binding table.

``resolve`` is the pure lookup. ``KeyResolver`` owns the pending chord for the
orchestrator: keys accumulate until a binding matches, no binding can match,
or a ``Tick`` clears them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..action import Action, ChangeMode, ToggleZoom
from ..mode import Mode
from .bindings import KeyBindingTable, KeySequence, format_key_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Matched:
    action: Action


class _Marker:
    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name


PENDING_LONGER = _Marker("PENDING_LONGER")
NO_MATCH = _Marker("NO_MATCH")

Resolution = Matched | _Marker

GLOBAL_SHORTCUTS: dict[str, Action] = {
    "ALT_0": ChangeMode(Mode.EXPLORE_SCHEMAS),
    "ALT_1": ChangeMode(Mode.EXPLORE_TABLES),
    "ALT_2": ChangeMode(Mode.EDIT_QUERY),
    "ALT_3": ChangeMode(Mode.EXPLORE_RESULTS),
    "ALT_4": ChangeMode(Mode.EXPLORE_STRUCTURE),
    "ALT_z": ToggleZoom(),
}


def resolve(pending: KeySequence, mode: Mode, table: KeyBindingTable) -> Resolution:
    """Resolve the whole pending sequence in ``mode``.

    An exact binding wins even when it is also the prefix of a longer one.
    """
    sequence = tuple(pending)
    if not sequence:
        return NO_MATCH
    action = table.lookup(mode, sequence)
    if action is not None:
        return Matched(action)
    if table.has_longer(mode, sequence):
        return PENDING_LONGER
    return NO_MATCH


class KeyResolver:
    """Stateful chord accumulator used by the orchestrator loop."""

    def __init__(self, table: KeyBindingTable, global_shortcuts: dict[str, Action] | None = None) -> None:
        self.table = table
        self.global_shortcuts = dict(GLOBAL_SHORTCUTS if global_shortcuts is None else global_shortcuts)
        self.pending: list[str] = []

    def clear(self) -> None:
        self.pending.clear()

    def feed(self, key: str, mode: Mode) -> Action | None:
        """Add ``key`` to the pending chord and return the action it completes."""
        self.pending.append(key)
        resolution = resolve(tuple(self.pending), mode, self.table)
        if isinstance(resolution, Matched):
            logger.info("Key %s -> %s", format_key_sequence(tuple(self.pending)), resolution.action)
            self.clear()
            return resolution.action
        if resolution is PENDING_LONGER:
            return None

        stale = len(self.pending) > 1
        self.clear()
        if stale:
            # The broken chord is dropped; the last key gets a fresh start.
            return self.feed(key, mode)
        return self.global_shortcuts.get(key)


__all__ = [
    "GLOBAL_SHORTCUTS",
    "KeyResolver",
    "Matched",
    "NO_MATCH",
    "PENDING_LONGER",
    "Resolution",
    "resolve",
]
