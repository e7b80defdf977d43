"""Multi-line SQL editor pane."""

from __future__ import annotations

from ..action import Action, ExecuteQuery
from ..database.query import QueryKind, QueryRequest, QueryTag
from ..layout import Rect
from ..mode import ComponentId
from ..render.frame import Frame
from ..render.highlight import highlight_sql_line
from .base import Component

RUN_QUERY_KEY = "CTRL_R"
TAB_WIDTH = 4


class TextEditor(Component):
    component_id = ComponentId.TEXT_EDITOR

    def __init__(self) -> None:
        super().__init__()
        self.lines: list[str] = [""]
        self.row = 0
        self.col = 0
        self.scroll = 0

    def text(self) -> str:
        return "\n".join(self.lines)

    def set_text(self, text: str) -> None:
        self.lines = text.split("\n") or [""]
        self.row = len(self.lines) - 1
        self.col = len(self.lines[self.row])

    def captures_text_input(self) -> bool:
        return self.focused

    def insert_text(self, text: str) -> None:
        for idx, chunk in enumerate(text.split("\n")):
            if idx:
                self.insert_newline()
            line = self.lines[self.row]
            self.lines[self.row] = line[: self.col] + chunk + line[self.col :]
            self.col += len(chunk)

    def insert_newline(self) -> None:
        line = self.lines[self.row]
        self.lines[self.row] = line[: self.col]
        self.lines.insert(self.row + 1, line[self.col :])
        self.row += 1
        self.col = 0

    def backspace(self) -> None:
        if self.col > 0:
            line = self.lines[self.row]
            self.lines[self.row] = line[: self.col - 1] + line[self.col :]
            self.col -= 1
        elif self.row > 0:
            previous = self.lines[self.row - 1]
            self.lines[self.row - 1] = previous + self.lines.pop(self.row)
            self.row -= 1
            self.col = len(previous)

    def delete(self) -> None:
        line = self.lines[self.row]
        if self.col < len(line):
            self.lines[self.row] = line[: self.col] + line[self.col + 1 :]
        elif self.row < len(self.lines) - 1:
            self.lines[self.row] = line + self.lines.pop(self.row + 1)

    def move_cursor(self, key: str) -> None:
        if key == "LEFT":
            if self.col > 0:
                self.col -= 1
            elif self.row > 0:
                self.row -= 1
                self.col = len(self.lines[self.row])
        elif key == "RIGHT":
            if self.col < len(self.lines[self.row]):
                self.col += 1
            elif self.row < len(self.lines) - 1:
                self.row += 1
                self.col = 0
        elif key == "UP" and self.row > 0:
            self.row -= 1
            self.col = min(self.col, len(self.lines[self.row]))
        elif key == "DOWN" and self.row < len(self.lines) - 1:
            self.row += 1
            self.col = min(self.col, len(self.lines[self.row]))
        elif key == "HOME":
            self.col = 0
        elif key == "END":
            self.col = len(self.lines[self.row])

    def handle_key(self, key: str) -> Action | None:
        if not self.focused:
            return None
        if key == RUN_QUERY_KEY:
            statement = self.text().strip()
            if not statement:
                return None
            return ExecuteQuery(QueryRequest(tag=QueryTag.user(), statement=statement))
        if key == "ENTER":
            self.insert_newline()
        elif key == "BACKSPACE":
            self.backspace()
        elif key == "DELETE":
            self.delete()
        elif key == "TAB":
            self.insert_text(" " * TAB_WIDTH)
        elif key in {"LEFT", "RIGHT", "UP", "DOWN", "HOME", "END"}:
            self.move_cursor(key)
        elif len(key) == 1 and key.isprintable():
            self.insert_text(key)
        return None

    def update(self, action: Action) -> Action | None:
        self.focus.observe(action)
        if isinstance(action, ExecuteQuery) and action.request.tag.kind is QueryKind.INITIAL_TABLE:
            # Seed the editor with the generated statement so it can be refined.
            self.row = len(self.lines) - 1
            self.col = len(self.lines[self.row])
            if self.text().strip():
                self.insert_newline()
            self.insert_text(action.request.statement)
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        inner = frame.draw_box(area, "lazydb [alt+2]", self.border_style(), thick=self.focused)
        if inner.height <= 0 or inner.width <= 0:
            return
        if self.row < self.scroll:
            self.scroll = self.row
        elif self.row >= self.scroll + inner.height:
            self.scroll = self.row - inner.height + 1

        gutter = len(str(len(self.lines))) + 1
        for offset in range(inner.height):
            index = self.scroll + offset
            if index >= len(self.lines):
                break
            y = inner.y + offset
            frame.write(inner.x, y, str(index + 1).rjust(gutter - 1) + " ", self.theme.line_number, max_width=inner.width)
            text_x = inner.x + gutter
            frame.write_segments(
                text_x,
                y,
                highlight_sql_line(self.lines[index], self.theme),
                max_width=max(0, inner.right - text_x),
            )
            if self.focused and index == self.row:
                cursor_x = text_x + self.col
                if cursor_x < inner.right:
                    line = self.lines[index]
                    under = line[self.col] if self.col < len(line) else " "
                    frame.write(cursor_x, y, under, self.theme.reverse, max_width=1)
