"""UI panes and the registry that routes events to them."""

from __future__ import annotations

from .base import Component, FocusTracker
from .cell_popup import CellPopup
from .connection_menu import ConnectionMenu
from .list_pane import SchemaList, SearchableListPane, TableList
from .messages import Messages
from .registry import ComponentRegistry
from .results_table import ResultGrid, ResultsTable, StructureTable
from .text_editor import TextEditor
from .title import Title


def default_components() -> list[Component]:
    """Fresh instances of every pane, in broadcast order."""
    return [
        Title(),
        ConnectionMenu(),
        TextEditor(),
        ResultsTable(),
        StructureTable(),
        TableList(),
        SchemaList(),
        Messages(),
        CellPopup(),
    ]


__all__ = [
    "CellPopup",
    "Component",
    "ComponentRegistry",
    "ConnectionMenu",
    "FocusTracker",
    "Messages",
    "ResultGrid",
    "ResultsTable",
    "SchemaList",
    "SearchableListPane",
    "StructureTable",
    "TableList",
    "TextEditor",
    "Title",
    "default_components",
]
