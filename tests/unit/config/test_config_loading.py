from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydb import config
from lazydb.action import ChangeMode, MakeSelection, NavDown, Quit, Yank
from lazydb.database.connection import ConnectionConfig
from lazydb.errors import ConfigError
from lazydb.mode import Mode


class ConfigLoadingTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "config.json"

    def _write(self, payload: object) -> None:
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        loaded = config.load_config(self.path)
        self.assertEqual(loaded.connections, {})
        self.assertEqual(loaded.keybindings, config.default_keybindings())
        self.assertEqual(loaded.path, self.path)

    def test_connections_are_parsed_and_sorted_by_name(self) -> None:
        self._write(
            {
                "connections": {
                    "staging": {"host": "db.internal", "port": 5433},
                    "local": {
                        "host": "localhost",
                        "port": 5432,
                        "user": "postgres",
                        "password": "secret",
                        "database_name": "app",
                    },
                }
            }
        )
        loaded = config.load_config(self.path)
        self.assertEqual(loaded.connection_names(), ["local", "staging"])
        self.assertEqual(
            loaded.connections["local"],
            ConnectionConfig("localhost", 5432, "postgres", "secret", "app"),
        )

    def test_user_keybindings_layer_over_defaults(self) -> None:
        self._write(
            {
                "keybindings": {
                    "ExploreResults": {"y": "Yank", "g g": "NavDown"},
                    "EDIT_QUERY": {"CTRL_Q": "Quit", "F2": "ChangeMode:ExploreResults"},
                }
            }
        )
        table = config.load_config(self.path).keybindings
        self.assertEqual(table.lookup(Mode.EXPLORE_RESULTS, ("y",)), Yank())
        self.assertEqual(table.lookup(Mode.EXPLORE_RESULTS, ("g", "g")), NavDown())
        self.assertEqual(table.lookup(Mode.EXPLORE_RESULTS, ("ENTER",)), MakeSelection())
        self.assertEqual(table.lookup(Mode.EDIT_QUERY, ("CTRL_Q",)), Quit())
        self.assertEqual(table.lookup(Mode.EDIT_QUERY, ("F2",)), ChangeMode(Mode.EXPLORE_RESULTS))

    def test_env_var_locates_config(self) -> None:
        self._write({"connections": {"env": {}}})
        with mock.patch.dict(os.environ, {config.CONFIG_ENV_VAR: str(self.path)}):
            self.assertEqual(config.load_config().connection_names(), ["env"])

    def test_explicit_path_beats_env_var(self) -> None:
        with mock.patch.dict(os.environ, {config.CONFIG_ENV_VAR: "/nonexistent/elsewhere.json"}):
            self.assertEqual(config.resolve_config_path(self.path), self.path)

    def test_invalid_documents_raise_config_error(self) -> None:
        cases = {
            "not json": "{",
            "not an object": "[]",
            "connections not an object": {"connections": []},
            "connection entry not an object": {"connections": {"x": 1}},
            "port not an int": {"connections": {"x": {"port": "5432"}}},
            "port is a bool": {"connections": {"x": {"port": True}}},
            "host not a string": {"connections": {"x": {"host": 1}}},
            "unknown mode": {"keybindings": {"Nowhere": {"q": "Quit"}}},
            "unknown action": {"keybindings": {"EditQuery": {"q": "Explode"}}},
            "unknown mode argument": {"keybindings": {"EditQuery": {"q": "ChangeMode:Nowhere"}}},
            "empty sequence": {"keybindings": {"EditQuery": {" ": "Quit"}}},
        }
        for label, payload in cases.items():
            with self.subTest(label):
                if isinstance(payload, str):
                    self.path.write_text(payload, encoding="utf-8")
                else:
                    self._write(payload)
                with self.assertRaises(ConfigError):
                    config.load_config(self.path)

    def test_error_names_offending_key(self) -> None:
        self._write({"connections": {"broken": {"port": "x"}}})
        with self.assertRaises(ConfigError) as caught:
            config.load_config(self.path)
        self.assertIn("connections.broken.port", str(caught.exception))


class DefaultBindingTests(unittest.TestCase):
    def test_every_mode_has_bindings(self) -> None:
        table = config.default_keybindings()
        for mode in Mode:
            with self.subTest(mode=mode):
                self.assertTrue(table.bindings_for(mode))

    def test_edit_query_leaves_printable_keys_unbound(self) -> None:
        bound = config.default_keybindings().bindings_for(Mode.EDIT_QUERY)
        self.assertFalse([sequence for sequence in bound if len(sequence[0]) == 1])

    def test_results_yank_is_a_chord(self) -> None:
        table = config.default_keybindings()
        self.assertEqual(table.lookup(Mode.EXPLORE_RESULTS, ("y", "y")), Yank())
        self.assertTrue(table.has_longer(Mode.EXPLORE_RESULTS, ("y",)))


if __name__ == "__main__":
    unittest.main()
