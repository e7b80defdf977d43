from __future__ import annotations

import unittest

from lazydb.action import NavDown, NavUp, Quit, Yank
from lazydb.input.bindings import (
    KeyBinding,
    KeyBindingTable,
    format_key_sequence,
    parse_key_sequence,
)
from lazydb.mode import Mode


class KeySequenceTests(unittest.TestCase):
    def test_parse_splits_on_whitespace(self) -> None:
        self.assertEqual(parse_key_sequence("y  y"), ("y", "y"))
        self.assertEqual(parse_key_sequence("CTRL_R"), ("CTRL_R",))
        self.assertEqual(parse_key_sequence("   "), ())

    def test_format_joins_with_spaces(self) -> None:
        self.assertEqual(format_key_sequence(("g", "g")), "g g")


class KeyBindingTableTests(unittest.TestCase):
    def test_register_and_lookup(self) -> None:
        table = KeyBindingTable().register_binding(Mode.EXPLORE_TABLES, KeyBinding(("j",), NavDown()))
        self.assertEqual(table.lookup(Mode.EXPLORE_TABLES, ("j",)), NavDown())
        self.assertIsNone(table.lookup(Mode.EXPLORE_SCHEMAS, ("j",)))

    def test_has_longer_tracks_strict_prefixes_only(self) -> None:
        table = KeyBindingTable({Mode.EXPLORE_RESULTS: {("y", "y", "y"): Yank()}})
        self.assertTrue(table.has_longer(Mode.EXPLORE_RESULTS, ("y",)))
        self.assertTrue(table.has_longer(Mode.EXPLORE_RESULTS, ("y", "y")))
        self.assertFalse(table.has_longer(Mode.EXPLORE_RESULTS, ("y", "y", "y")))

    def test_empty_sequence_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            KeyBindingTable().register_binding(Mode.EDIT_QUERY, KeyBinding((), Quit()))

    def test_merged_overrides_without_mutating_either_table(self) -> None:
        base = KeyBindingTable({Mode.EXPLORE_TABLES: {("j",): NavDown(), ("k",): NavUp()}})
        overrides = KeyBindingTable({Mode.EXPLORE_TABLES: {("j",): Quit()}})

        combined = base.merged(overrides)

        self.assertEqual(combined.lookup(Mode.EXPLORE_TABLES, ("j",)), Quit())
        self.assertEqual(combined.lookup(Mode.EXPLORE_TABLES, ("k",)), NavUp())
        self.assertEqual(base.lookup(Mode.EXPLORE_TABLES, ("j",)), NavDown())

    def test_bindings_for_returns_a_copy(self) -> None:
        table = KeyBindingTable({Mode.EXPLORE_TABLES: {("j",): NavDown()}})
        snapshot = table.bindings_for(Mode.EXPLORE_TABLES)
        snapshot[("x",)] = Quit()
        self.assertIsNone(table.lookup(Mode.EXPLORE_TABLES, ("x",)))


if __name__ == "__main__":
    unittest.main()
