"""UI modes, component identities, and the mode -> focus map.

Exactly one ``Mode`` is active at a time. It decides which component owns
input focus and which layout the planner produces.
"""

from __future__ import annotations

from enum import Enum


class Mode(Enum):
    CONNECTION_MENU = "ConnectionMenu"
    EDIT_QUERY = "EditQuery"
    EXPLORE_RESULTS = "ExploreResults"
    EXPLORE_TABLES = "ExploreTables"
    EXPLORE_STRUCTURE = "ExploreStructure"
    EXPLORE_SCHEMAS = "ExploreSchemas"


INITIAL_MODE = Mode.CONNECTION_MENU


class ComponentId(Enum):
    TITLE = "title"
    CONNECTION_MENU = "connection_menu"
    TEXT_EDITOR = "text_editor"
    RESULTS_TABLE = "results_table"
    STRUCTURE_TABLE = "structure_table"
    TABLE_LIST = "table_list"
    SCHEMA_LIST = "schema_list"
    MESSAGES = "messages"
    CELL_POPUP = "cell_popup"


_FOCUS_BY_MODE: dict[Mode, ComponentId] = {
    Mode.CONNECTION_MENU: ComponentId.CONNECTION_MENU,
    Mode.EDIT_QUERY: ComponentId.TEXT_EDITOR,
    Mode.EXPLORE_RESULTS: ComponentId.RESULTS_TABLE,
    Mode.EXPLORE_TABLES: ComponentId.TABLE_LIST,
    Mode.EXPLORE_STRUCTURE: ComponentId.STRUCTURE_TABLE,
    Mode.EXPLORE_SCHEMAS: ComponentId.SCHEMA_LIST,
}


def focused_component(mode: Mode) -> ComponentId:
    """Return the component that owns input focus in ``mode``."""
    return _FOCUS_BY_MODE[mode]


def parse_mode(name: str) -> Mode:
    """Parse ``"EditQuery"`` or ``"EDIT_QUERY"`` into a ``Mode``.

    Raises ``ValueError`` for unknown names.
    """
    stripped = str(name).strip()
    for mode in Mode:
        if stripped in (mode.value, mode.name):
            return mode
    raise ValueError(f"unknown mode: {name!r}")


__all__ = ["ComponentId", "INITIAL_MODE", "Mode", "focused_component", "parse_mode"]
