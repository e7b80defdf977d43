"""Sidebar lists with an inline search prompt: tables and schemas."""

from __future__ import annotations

from collections.abc import Callable

from ..action import (
    Action,
    ChangeMode,
    ChangeSchema,
    Clear,
    Error,
    ExecuteQuery,
    MakeSelection,
    NavDown,
    NavUp,
    Search,
    ViewStructure,
    Yank,
)
from ..app_event import AppEvent, ConnectionEstablished, QueryResult
from ..clipboard import copy_text_to_clipboard
from ..database.query import QueryKind, QueryTag, parse_table_ref, system_query
from ..errors import IdentifierError
from ..layout import Rect
from ..mode import ComponentId, Mode
from ..render.frame import Frame
from .base import Component
from .widgets import ListState, SearchInput, draw_list


class SearchableListPane(Component):
    """List pane whose items can be filtered by a substring search."""

    title = ""
    placeholder = ""

    def __init__(self, copy_to_clipboard: Callable[[str], bool] | None = None) -> None:
        super().__init__()
        self.items: list[str] = []
        self.list_state = ListState()
        self.search_input = SearchInput(self.placeholder)
        self.searching = False
        self.copy_to_clipboard = copy_text_to_clipboard if copy_to_clipboard is None else copy_to_clipboard

    def visible_items(self) -> list[str]:
        return list(self.items)

    def display_items(self) -> list[str]:
        query = self.search_input.text
        items = self.visible_items()
        if not query:
            return items
        return [item for item in items if query in item]

    def selection(self) -> str | None:
        items = self.display_items()
        self.list_state.clamp(len(items))
        if not items:
            return None
        return items[self.list_state.selected]

    def captures_text_input(self) -> bool:
        return self.focused and self.searching

    def handle_key(self, key: str) -> Action | None:
        if not self.captures_text_input():
            return None
        if key in {"ENTER", "ESC"}:
            return None
        if self.search_input.handle_key(key):
            self.list_state.select_first()
        return None

    def select(self, item: str) -> Action | None:
        return None

    def view_structure(self, item: str) -> Action | None:
        return None

    def update(self, action: Action) -> Action | None:
        if self.focus.observe(action) and not self.focused:
            self.searching = False
        if not self.focused:
            return None

        if isinstance(action, Clear):
            self.search_input.clear()
            self.searching = False
            self.list_state.select_first()
            return None
        if self.searching:
            if isinstance(action, MakeSelection):
                self.searching = False
            return None

        if isinstance(action, NavDown):
            self.list_state.select_next(len(self.display_items()))
        elif isinstance(action, NavUp):
            self.list_state.select_previous()
        elif isinstance(action, Search):
            self.searching = True
        elif isinstance(action, MakeSelection):
            item = self.selection()
            if item is not None:
                return self.select(item)
        elif isinstance(action, ViewStructure):
            item = self.selection()
            if item is not None:
                return self.view_structure(item)
        elif isinstance(action, Yank):
            item = self.selection()
            if item is not None and not self.copy_to_clipboard(item):
                return Error("Could not copy to the clipboard")
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        inner = frame.draw_box(area, self.title, self.border_style(), thick=self.focused)
        if inner.height <= 0:
            return
        if self.searching or self.search_input.text:
            if self.search_input.text:
                frame.write(inner.x, inner.y, "/" + self.search_input.text, self.theme.search_input, max_width=inner.width)
            else:
                frame.write(inner.x, inner.y, self.placeholder, self.theme.search_placeholder, max_width=inner.width)
            inner = Rect(inner.x, inner.y + 1, inner.width, max(0, inner.height - 1))
        draw_list(
            frame,
            inner,
            self.display_items(),
            self.list_state,
            self.theme,
            highlight=self.focused and not self.searching,
        )


class TableList(SearchableListPane):
    """Tables of the connected database as ``schema.table``."""

    component_id = ComponentId.TABLE_LIST
    title = "tables [alt+1]"
    placeholder = "Search tables"

    def __init__(self, copy_to_clipboard: Callable[[str], bool] | None = None) -> None:
        super().__init__(copy_to_clipboard)
        self.schema: str | None = None

    def visible_items(self) -> list[str]:
        if self.schema is None:
            return list(self.items)
        prefix = self.schema + "."
        return [item for item in self.items if item.startswith(prefix)]

    def _system_query(self, tag: QueryTag) -> Action:
        try:
            return ExecuteQuery(system_query(tag))
        except IdentifierError as exc:
            return Error(str(exc))

    def select(self, item: str) -> Action | None:
        return self._system_query(QueryTag.initial_table(parse_table_ref(item)))

    def view_structure(self, item: str) -> Action | None:
        return self._system_query(QueryTag.table_structure(parse_table_ref(item)))

    def update(self, action: Action) -> Action | None:
        if isinstance(action, ChangeSchema):
            self.schema = action.name
            self.list_state.select_first()
            return ChangeMode(Mode.EXPLORE_TABLES)
        return super().update(action)

    def handle_app_event(self, event: AppEvent) -> Action | None:
        if isinstance(event, ConnectionEstablished):
            self.items = []
            self.schema = None
            self.list_state.select_first()
            return ExecuteQuery(system_query(QueryTag.list_tables()))
        if isinstance(event, QueryResult) and event.tag.kind is QueryKind.LIST_TABLES:
            self.items = [
                f"{row[0]}.{row[1]}" if len(row) >= 2 else "---"
                for row in event.result.rows
            ]
            self.list_state.clamp(len(self.display_items()))
        return None


class SchemaList(SearchableListPane):
    """Distinct schemas seen in the table listing."""

    component_id = ComponentId.SCHEMA_LIST
    title = "schemas [alt+0]"
    placeholder = "Search schemas"

    def select(self, item: str) -> Action | None:
        return ChangeSchema(item)

    def handle_app_event(self, event: AppEvent) -> Action | None:
        if isinstance(event, QueryResult) and event.tag.kind is QueryKind.LIST_TABLES:
            self.items = sorted({row[0] if row else "unknown" for row in event.result.rows})
            self.list_state.clamp(len(self.display_items()))
        return None
