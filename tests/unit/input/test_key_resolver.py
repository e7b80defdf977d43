"""Chord resolution against per-mode binding tables.

Covers exact/prefix/no-match resolution, Tick clearing, stale chord
recovery, and the mode-independent shortcuts.
"""

from __future__ import annotations

import unittest

from lazydb.action import ChangeMode, NavDown, Quit, ToggleZoom, Yank
from lazydb.input.bindings import KeyBinding, KeyBindingTable
from lazydb.input.keys import NO_MATCH, PENDING_LONGER, KeyResolver, Matched, resolve
from lazydb.mode import Mode

MODE = Mode.EXPLORE_RESULTS


def _table() -> KeyBindingTable:
    return KeyBindingTable().register_bindings(
        MODE,
        [
            KeyBinding(("a",), Quit()),
            KeyBinding(("b", "c"), Yank()),
        ],
    )


class ResolveTests(unittest.TestCase):
    def test_single_key_binding_matches(self) -> None:
        self.assertEqual(resolve(("a",), MODE, _table()), Matched(Quit()))

    def test_prefix_of_chord_is_pending(self) -> None:
        self.assertIs(resolve(("b",), MODE, _table()), PENDING_LONGER)

    def test_full_chord_matches(self) -> None:
        self.assertEqual(resolve(("b", "c"), MODE, _table()), Matched(Yank()))

    def test_broken_chord_is_no_match(self) -> None:
        self.assertIs(resolve(("b", "d"), MODE, _table()), NO_MATCH)

    def test_bindings_are_scoped_to_their_mode(self) -> None:
        self.assertIs(resolve(("a",), Mode.EDIT_QUERY, _table()), NO_MATCH)

    def test_exact_match_wins_over_longer_binding(self) -> None:
        table = _table().register_binding(MODE, KeyBinding(("b",), NavDown()))
        self.assertEqual(resolve(("b",), MODE, table), Matched(NavDown()))

    def test_no_case_folding(self) -> None:
        self.assertIs(resolve(("A",), MODE, _table()), NO_MATCH)

    def test_empty_sequence_is_no_match(self) -> None:
        self.assertIs(resolve((), MODE, _table()), NO_MATCH)


class KeyResolverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = KeyResolver(_table())

    def test_chord_accumulates_then_matches(self) -> None:
        self.assertIsNone(self.resolver.feed("b", MODE))
        self.assertEqual(self.resolver.pending, ["b"])
        self.assertEqual(self.resolver.feed("c", MODE), Yank())
        self.assertEqual(self.resolver.pending, [])

    def test_broken_chord_clears_pending(self) -> None:
        self.resolver.feed("b", MODE)
        self.assertIsNone(self.resolver.feed("d", MODE))
        self.assertEqual(self.resolver.pending, [])

    def test_tick_between_chord_keys_evaluates_second_key_fresh(self) -> None:
        self.resolver.feed("b", MODE)
        self.resolver.clear()
        self.assertIsNone(self.resolver.feed("c", MODE))
        self.assertEqual(self.resolver.pending, [])

    def test_broken_chord_retries_last_key_alone(self) -> None:
        self.resolver.feed("b", MODE)
        self.assertEqual(self.resolver.feed("a", MODE), Quit())
        self.assertEqual(self.resolver.pending, [])

    def test_broken_chord_can_start_a_new_chord(self) -> None:
        self.resolver.feed("b", MODE)
        self.assertIsNone(self.resolver.feed("b", MODE))
        self.assertEqual(self.resolver.pending, ["b"])

    def test_global_shortcuts_apply_when_nothing_is_bound(self) -> None:
        self.assertEqual(self.resolver.feed("ALT_2", MODE), ChangeMode(Mode.EDIT_QUERY))
        self.assertEqual(self.resolver.feed("ALT_0", MODE), ChangeMode(Mode.EXPLORE_SCHEMAS))
        self.assertEqual(self.resolver.feed("ALT_4", Mode.EDIT_QUERY), ChangeMode(Mode.EXPLORE_STRUCTURE))
        self.assertEqual(self.resolver.feed("ALT_z", MODE), ToggleZoom())

    def test_global_shortcut_after_broken_chord(self) -> None:
        self.resolver.feed("b", MODE)
        self.assertEqual(self.resolver.feed("ALT_3", MODE), ChangeMode(Mode.EXPLORE_RESULTS))

    def test_bound_key_shadows_global_shortcut(self) -> None:
        table = _table().register_binding(MODE, KeyBinding(("ALT_1",), Quit()))
        resolver = KeyResolver(table)
        self.assertEqual(resolver.feed("ALT_1", MODE), Quit())

    def test_unknown_key_yields_nothing(self) -> None:
        self.assertIsNone(self.resolver.feed("x", MODE))
        self.assertEqual(self.resolver.pending, [])


if __name__ == "__main__":
    unittest.main()
