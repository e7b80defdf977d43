"""Result grids: interactive query results and table structure."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable

from ..action import (
    Action,
    ChangeMode,
    Error,
    MakeSelection,
    NavDown,
    NavLeft,
    NavRight,
    NavUp,
    SelectCell,
    SelectRow,
    Yank,
)
from ..app_event import AppEvent, QueryResult
from ..clipboard import copy_text_to_clipboard
from ..database.query import QueryKind, ResultSet, TableRef
from ..layout import Rect
from ..mode import ComponentId, Mode
from ..render.frame import Frame
from .base import Component
from .widgets import TableState, draw_table


class ResultGrid(Component):
    """Shared navigation, yank, and drawing for result-set panes."""

    def __init__(self, copy_to_clipboard: Callable[[str], bool] | None = None) -> None:
        super().__init__()
        self.result = ResultSet()
        self.state = TableState()
        self.copy_to_clipboard = copy_text_to_clipboard if copy_to_clipboard is None else copy_to_clipboard

    def set_data(self, result: ResultSet) -> None:
        self.result = result
        self.state.reset()

    def selected_row(self) -> tuple[str, ...] | None:
        if not self.result.rows:
            return None
        self.state.clamp(len(self.result.rows))
        return self.result.rows[self.state.selected]

    def selected_cell(self) -> str | None:
        row = self.selected_row()
        if row is None or self.state.column is None or self.state.column >= len(row):
            return None
        return row[self.state.column]

    def yank(self) -> Action | None:
        text = self.selected_cell()
        if text is None:
            row = self.selected_row()
            if row is None:
                return None
            text = " ".join(row)
        if not self.copy_to_clipboard(text):
            return Error("Could not copy to the clipboard")
        return None

    def navigate(self, action: Action) -> bool:
        if isinstance(action, NavDown):
            self.state.select_next(len(self.result.rows))
        elif isinstance(action, NavUp):
            self.state.select_previous()
        elif isinstance(action, NavRight):
            self.state.select_next_column(len(self.result.columns))
        elif isinstance(action, NavLeft):
            self.state.select_previous_column()
        else:
            return False
        return True

    @abstractmethod
    def title(self) -> str:
        """Box title, including the focus shortcut."""

    def draw(self, frame: Frame, area: Rect) -> None:
        inner = frame.draw_box(area, self.title(), self.border_style(), thick=self.focused)
        draw_table(
            frame,
            inner,
            self.result.columns,
            self.result.rows,
            self.state,
            self.theme,
            highlight=self.focused,
        )


class ResultsTable(ResultGrid):
    component_id = ComponentId.RESULTS_TABLE

    def handle_app_event(self, event: AppEvent) -> Action | None:
        if isinstance(event, QueryResult) and event.tag.is_user_visible:
            self.set_data(event.result)
        return None

    def update(self, action: Action) -> Action | None:
        self.focus.observe(action)
        if not self.focused:
            return None
        if self.navigate(action):
            return None
        if isinstance(action, MakeSelection):
            cell = self.selected_cell()
            if cell is not None:
                return SelectCell(cell)
            row = self.selected_row()
            if row is not None:
                return SelectRow(self.result.columns, row)
        elif isinstance(action, Yank):
            return self.yank()
        return None

    def title(self) -> str:
        if not self.result.columns:
            return "results [alt+3]"
        noun = "row" if self.result.row_count == 1 else "rows"
        return f"results ({self.result.row_count} {noun}) [alt+3]"


class StructureTable(ResultGrid):
    component_id = ComponentId.STRUCTURE_TABLE

    def __init__(self, copy_to_clipboard: Callable[[str], bool] | None = None) -> None:
        super().__init__(copy_to_clipboard)
        self.table: TableRef | None = None

    def handle_app_event(self, event: AppEvent) -> Action | None:
        if isinstance(event, QueryResult) and event.tag.kind is QueryKind.TABLE_STRUCTURE:
            self.table = event.tag.table
            self.set_data(event.result)
            return ChangeMode(Mode.EXPLORE_STRUCTURE)
        return None

    def update(self, action: Action) -> Action | None:
        self.focus.observe(action)
        if not self.focused:
            return None
        if self.navigate(action):
            return None
        if isinstance(action, Yank):
            return self.yank()
        return None

    def title(self) -> str:
        if self.table is None:
            return "Select a table and press 's' [alt+4]"
        return f"{self.table.display_name()} [alt+4]"
