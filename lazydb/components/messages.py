"""Messages pane: the latest info or error line."""

from __future__ import annotations

from ..action import Action, Error, ExecuteQuery, Help, OpenConnection
from ..app_event import AppEvent, Severity, UserMessage
from ..layout import Rect
from ..mode import ComponentId
from ..render.frame import Frame
from .base import Component

HELP_TEXT = (
    "alt+0 schemas  alt+1 tables  alt+2 query  alt+3 results  alt+4 structure  "
    "alt+z zoom  ctrl+r run query  q quit"
)


class Messages(Component):
    component_id = ComponentId.MESSAGES

    def __init__(self) -> None:
        super().__init__()
        self.message: tuple[Severity, str] | None = None

    def clear(self) -> None:
        self.message = None

    def handle_app_event(self, event: AppEvent) -> Action | None:
        if isinstance(event, UserMessage):
            self.message = (event.severity, event.text)
        return None

    def update(self, action: Action) -> Action | None:
        self.focus.observe(action)
        if isinstance(action, OpenConnection):
            self.clear()
        elif isinstance(action, ExecuteQuery) and action.request.tag.is_user_visible:
            self.clear()
        elif isinstance(action, Error):
            self.message = (Severity.ERROR, action.text)
        elif isinstance(action, Help):
            self.message = (Severity.INFO, HELP_TEXT)
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        inner = frame.draw_box(area, "messages", self.border_style())
        if self.message is None or inner.height <= 0:
            return
        severity, text = self.message
        style = self.theme.message_error if severity is Severity.ERROR else self.theme.message_info
        lines = text.splitlines() or [""]
        for idx, line in enumerate(lines[: inner.height]):
            frame.write(inner.x, inner.y + idx, line, style, max_width=inner.width)
