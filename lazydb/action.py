"""User and system intents consumed by the orchestrator and components.

Every variant is an immutable dataclass, so broadcasting the same instance to
every component is safe. ``action_from_name`` parses the names used in the
key-binding table of the config file.
"""

from __future__ import annotations

from dataclasses import dataclass

from .database.query import QueryRequest
from .errors import ConfigError
from .mode import Mode, parse_mode


@dataclass(frozen=True)
class Action:
    """Base class for all actions."""


@dataclass(frozen=True)
class Tick(Action):
    pass


@dataclass(frozen=True)
class Render(Action):
    pass


@dataclass(frozen=True)
class Resize(Action):
    width: int
    height: int


@dataclass(frozen=True)
class Suspend(Action):
    pass


@dataclass(frozen=True)
class Resume(Action):
    pass


@dataclass(frozen=True)
class Quit(Action):
    pass


@dataclass(frozen=True)
class ClearScreen(Action):
    pass


@dataclass(frozen=True)
class Error(Action):
    text: str


@dataclass(frozen=True)
class Help(Action):
    pass


@dataclass(frozen=True)
class ChangeMode(Action):
    mode: Mode


@dataclass(frozen=True)
class ToggleZoom(Action):
    pass


@dataclass(frozen=True)
class MakeSelection(Action):
    pass


@dataclass(frozen=True)
class OpenConnection(Action):
    name: str


@dataclass(frozen=True)
class ViewStructure(Action):
    pass


@dataclass(frozen=True)
class ChangeSchema(Action):
    name: str


@dataclass(frozen=True)
class ExecuteQuery(Action):
    request: QueryRequest


@dataclass(frozen=True)
class NavUp(Action):
    pass


@dataclass(frozen=True)
class NavDown(Action):
    pass


@dataclass(frozen=True)
class NavLeft(Action):
    pass


@dataclass(frozen=True)
class NavRight(Action):
    pass


@dataclass(frozen=True)
class Yank(Action):
    pass


@dataclass(frozen=True)
class Search(Action):
    pass


@dataclass(frozen=True)
class Clear(Action):
    pass


@dataclass(frozen=True)
class SelectCell(Action):
    text: str


@dataclass(frozen=True)
class SelectRow(Action):
    columns: tuple[str, ...]
    row: tuple[str, ...]


_SIMPLE_ACTIONS: dict[str, type[Action]] = {
    cls.__name__: cls
    for cls in (
        Tick,
        Render,
        Suspend,
        Resume,
        Quit,
        ClearScreen,
        Help,
        ToggleZoom,
        MakeSelection,
        ViewStructure,
        NavUp,
        NavDown,
        NavLeft,
        NavRight,
        Yank,
        Search,
        Clear,
    )
}


def action_from_name(text: str) -> Action:
    """Parse a binding-table action name.

    Accepts bare names of parameterless actions (``"Quit"``) and
    ``"ChangeMode:<Mode>"``, ``"OpenConnection:<name>"`` or
    ``"ChangeSchema:<name>"``. Raises ``ConfigError`` for anything else.
    """
    raw = str(text).strip()
    name, sep, argument = raw.partition(":")
    name = name.strip()
    argument = argument.strip()
    if not sep:
        action_cls = _SIMPLE_ACTIONS.get(name)
        if action_cls is None:
            raise ConfigError(f"unknown action: {raw!r}")
        return action_cls()
    if not argument:
        raise ConfigError(f"action {name!r} requires an argument")
    if name == "ChangeMode":
        try:
            return ChangeMode(parse_mode(argument))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    if name == "OpenConnection":
        return OpenConnection(argument)
    if name == "ChangeSchema":
        return ChangeSchema(argument)
    raise ConfigError(f"unknown action: {raw!r}")


__all__ = [
    "Action",
    "ChangeMode",
    "ChangeSchema",
    "Clear",
    "ClearScreen",
    "Error",
    "ExecuteQuery",
    "Help",
    "MakeSelection",
    "NavDown",
    "NavLeft",
    "NavRight",
    "NavUp",
    "OpenConnection",
    "Quit",
    "Render",
    "Resize",
    "Resume",
    "Search",
    "SelectCell",
    "SelectRow",
    "Suspend",
    "Tick",
    "ToggleZoom",
    "ViewStructure",
    "Yank",
    "action_from_name",
]
