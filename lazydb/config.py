"""JSON config: connection directory and key bindings.

The file is located by explicit path, then ``LAZYDB_CONFIG``, then the
platform config directory. A missing file yields no connections and the
default bindings; a malformed one raises ``ConfigError`` naming the bad key.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .action import (
    Action,
    ChangeMode,
    Clear,
    Help,
    MakeSelection,
    NavDown,
    NavLeft,
    NavRight,
    NavUp,
    Quit,
    Search,
    Suspend,
    ViewStructure,
    Yank,
    action_from_name,
)
from .database.connection import ConnectionConfig
from .errors import ConfigError
from .input.bindings import KeyBinding, KeyBindingTable, parse_key_sequence
from .mode import Mode, parse_mode

APP_NAME = "lazydb"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "LAZYDB_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class Config:
    """Read-only configuration snapshot shared with every component."""

    connections: Mapping[str, ConnectionConfig] = field(default_factory=dict)
    keybindings: KeyBindingTable = field(default_factory=lambda: default_keybindings())
    path: Path | None = None

    def connection_names(self) -> list[str]:
        return sorted(self.connections)


def _list_bindings() -> list[KeyBinding]:
    return [
        KeyBinding(("j",), NavDown()),
        KeyBinding(("DOWN",), NavDown()),
        KeyBinding(("k",), NavUp()),
        KeyBinding(("UP",), NavUp()),
        KeyBinding(("ENTER",), MakeSelection()),
        KeyBinding(("/",), Search()),
        KeyBinding(("ESC",), Clear()),
        KeyBinding(("y",), Yank()),
    ]


def _grid_bindings() -> list[KeyBinding]:
    return [
        KeyBinding(("j",), NavDown()),
        KeyBinding(("DOWN",), NavDown()),
        KeyBinding(("k",), NavUp()),
        KeyBinding(("UP",), NavUp()),
        KeyBinding(("h",), NavLeft()),
        KeyBinding(("LEFT",), NavLeft()),
        KeyBinding(("l",), NavRight()),
        KeyBinding(("RIGHT",), NavRight()),
        KeyBinding(("ENTER",), MakeSelection()),
        KeyBinding(("ESC",), Clear()),
        KeyBinding(("y", "y"), Yank()),
    ]


def _common_bindings() -> list[KeyBinding]:
    return [
        KeyBinding(("q",), Quit()),
        KeyBinding(("CTRL_C",), Quit()),
        KeyBinding(("CTRL_Z",), Suspend()),
        KeyBinding(("?",), Help()),
    ]


def default_keybindings() -> KeyBindingTable:
    """Return the built-in binding table."""
    table = KeyBindingTable()
    table.register_bindings(
        Mode.CONNECTION_MENU,
        _common_bindings()
        + [
            KeyBinding(("j",), NavDown()),
            KeyBinding(("DOWN",), NavDown()),
            KeyBinding(("k",), NavUp()),
            KeyBinding(("UP",), NavUp()),
            KeyBinding(("ENTER",), MakeSelection()),
        ],
    )
    table.register_bindings(
        Mode.EDIT_QUERY,
        [
            KeyBinding(("CTRL_C",), Quit()),
            KeyBinding(("CTRL_Z",), Suspend()),
            KeyBinding(("ESC",), ChangeMode(Mode.EXPLORE_TABLES)),
        ],
    )
    table.register_bindings(
        Mode.EXPLORE_TABLES,
        _common_bindings() + _list_bindings() + [KeyBinding(("s",), ViewStructure())],
    )
    table.register_bindings(Mode.EXPLORE_SCHEMAS, _common_bindings() + _list_bindings())
    table.register_bindings(Mode.EXPLORE_RESULTS, _common_bindings() + _grid_bindings())
    table.register_bindings(Mode.EXPLORE_STRUCTURE, _common_bindings() + _grid_bindings())
    return table


def resolve_config_path(explicit: Path | str | None = None) -> Path:
    """Return the config path to read: explicit, env override, then default."""
    if explicit is not None:
        return Path(explicit).expanduser()
    env_value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    return DEFAULT_CONFIG_PATH


def read_config_data(path: Path) -> dict[str, object]:
    """Load the top-level JSON object, or ``{}`` when the file does not exist."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a JSON object")
    return data


def _optional_str(name: str, key: str, value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"connections.{name}.{key} must be a string")
    return value


def parse_connections(raw: object) -> dict[str, ConnectionConfig]:
    """Validate the ``connections`` object into ``ConnectionConfig`` values."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("connections must be an object")

    connections: dict[str, ConnectionConfig] = {}
    for name, entry in raw.items():
        if not isinstance(entry, dict):
            raise ConfigError(f"connections.{name} must be an object")
        port = entry.get("port")
        if port is not None and (isinstance(port, bool) or not isinstance(port, int)):
            raise ConfigError(f"connections.{name}.port must be an integer")
        connections[str(name)] = ConnectionConfig(
            host=_optional_str(name, "host", entry.get("host")),
            port=port,
            user=_optional_str(name, "user", entry.get("user")),
            password=_optional_str(name, "password", entry.get("password")),
            database_name=_optional_str(name, "database_name", entry.get("database_name")),
        )
    return connections


def parse_keybindings(raw: object) -> KeyBindingTable:
    """Validate the ``keybindings`` object into a binding table."""
    table = KeyBindingTable()
    if raw is None:
        return table
    if not isinstance(raw, dict):
        raise ConfigError("keybindings must be an object")

    for mode_name, mode_bindings in raw.items():
        try:
            mode = parse_mode(mode_name)
        except ValueError as exc:
            raise ConfigError(f"keybindings: {exc}") from exc
        if not isinstance(mode_bindings, dict):
            raise ConfigError(f"keybindings.{mode_name} must be an object")
        for sequence_text, action_name in mode_bindings.items():
            sequence = parse_key_sequence(sequence_text)
            if not sequence:
                raise ConfigError(f"keybindings.{mode_name}: empty key sequence")
            if not isinstance(action_name, str):
                raise ConfigError(f"keybindings.{mode_name}.{sequence_text} must name an action")
            action: Action = action_from_name(action_name)
            table.register_binding(mode, KeyBinding(sequence, action))
    return table


def load_config(path: Path | str | None = None) -> Config:
    """Load and validate the config, layering user bindings over the defaults."""
    config_path = resolve_config_path(path)
    data = read_config_data(config_path)
    return Config(
        connections=parse_connections(data.get("connections")),
        keybindings=default_keybindings().merged(parse_keybindings(data.get("keybindings"))),
        path=config_path,
    )


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "Config",
    "DEFAULT_CONFIG_PATH",
    "default_keybindings",
    "load_config",
    "parse_connections",
    "parse_keybindings",
    "read_config_data",
    "resolve_config_path",
]
