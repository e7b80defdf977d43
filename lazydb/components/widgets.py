"""Selection state and drawing helpers shared by list and table panes."""

from __future__ import annotations

from collections.abc import Sequence

from ..layout import Rect
from ..render.frame import Frame
from ..render.theme import UITheme

SELECTED_MARKER = "▹ "
ROW_MARKER = "▷ "


class ListState:
    """Selected index over a list whose length can change under it."""

    def __init__(self) -> None:
        self.selected = 0
        self.offset = 0

    def clamp(self, length: int) -> None:
        if length <= 0:
            self.selected = 0
        else:
            self.selected = max(0, min(self.selected, length - 1))

    def select_next(self, length: int) -> None:
        if length > 0 and self.selected < length - 1:
            self.selected += 1

    def select_previous(self) -> None:
        if self.selected > 0:
            self.selected -= 1

    def select_first(self) -> None:
        self.selected = 0
        self.offset = 0

    def visible_window(self, rows: int) -> range:
        """Scroll so the selection is visible in ``rows`` rows; return the slice."""
        if rows <= 0:
            return range(0)
        if self.selected < self.offset:
            self.offset = self.selected
        elif self.selected >= self.offset + rows:
            self.offset = self.selected - rows + 1
        return range(self.offset, self.offset + rows)


class TableState(ListState):
    """Row selection plus an optional selected column."""

    def __init__(self) -> None:
        super().__init__()
        self.column: int | None = None

    def select_next_column(self, width: int) -> None:
        if width <= 0:
            return
        if self.column is None:
            self.column = 0
        elif self.column < width - 1:
            self.column += 1

    def select_previous_column(self) -> None:
        if self.column is None:
            self.column = 0
        elif self.column > 0:
            self.column -= 1

    def reset(self) -> None:
        self.selected = 0
        self.offset = 0
        self.column = None


class SearchInput:
    """Single-line filter prompt."""

    def __init__(self, placeholder: str) -> None:
        self.placeholder = placeholder
        self.text = ""

    def handle_key(self, key: str) -> bool:
        """Apply an editing key; return whether the text changed."""
        if key == "BACKSPACE":
            if not self.text:
                return False
            self.text = self.text[:-1]
            return True
        if len(key) == 1 and key.isprintable():
            self.text += key
            return True
        return False

    def clear(self) -> None:
        self.text = ""


def draw_list(
    frame: Frame,
    area: Rect,
    items: Sequence[str],
    state: ListState,
    theme: UITheme,
    *,
    highlight: bool,
) -> None:
    """Draw ``items`` with the selected one marked and the window scrolled."""
    state.clamp(len(items))
    for row_offset, index in enumerate(state.visible_window(area.height)):
        if index >= len(items):
            break
        y = area.y + row_offset
        if index == state.selected and highlight:
            frame.write(area.x, y, SELECTED_MARKER + items[index], theme.list_selected, max_width=area.width)
        else:
            frame.write(area.x, y, "  " + items[index], theme.list_item, max_width=area.width)


def column_widths(columns: Sequence[str], rows: Sequence[Sequence[str]], max_width: int = 40) -> list[int]:
    """Width per column: longest header or cell, capped at ``max_width``."""
    widths = [len(name) for name in columns]
    for row in rows:
        for idx, cell in enumerate(row[: len(widths)]):
            widths[idx] = max(widths[idx], len(cell))
    return [max(1, min(width, max_width)) for width in widths]


def _fit(text: str, width: int) -> str:
    if len(text) <= width:
        return text.ljust(width)
    if width <= 1:
        return text[:width]
    return text[: width - 1] + "…"


def draw_table(
    frame: Frame,
    area: Rect,
    columns: Sequence[str],
    rows: Sequence[Sequence[str]],
    state: TableState,
    theme: UITheme,
    *,
    highlight: bool,
) -> None:
    """Draw a header row, a blank spacer, and the visible window of rows."""
    if area.height <= 0 or area.width <= 0 or not columns:
        return
    widths = column_widths(columns, rows)
    indent = len(ROW_MARKER)
    header = [(" " * indent, theme.table_header)]
    for idx, name in enumerate(columns):
        header.append((_fit(name, widths[idx]) + " ", theme.table_header))
    frame.write_segments(area.x, area.y, header, max_width=area.width)

    body = Rect(area.x, area.y + 2, area.width, max(0, area.height - 2))
    state.clamp(len(rows))
    for row_offset, index in enumerate(state.visible_window(body.height)):
        if index >= len(rows):
            break
        row = rows[index]
        is_selected = highlight and index == state.selected
        base = theme.table_selected_row if is_selected else theme.table_cell
        segments = [(ROW_MARKER if is_selected else " " * indent, base)]
        for col_idx, width in enumerate(widths):
            cell = row[col_idx] if col_idx < len(row) else ""
            style = base
            if is_selected and state.column == col_idx:
                style = theme.table_selected_cell
            segments.append((_fit(cell, width), style))
            segments.append((" ", base))
        frame.write_segments(body.x, body.y + row_offset, segments, max_width=body.width)


__all__ = [
    "ListState",
    "SearchInput",
    "TableState",
    "column_widths",
    "draw_list",
    "draw_table",
]
