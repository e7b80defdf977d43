"""Connection picker shown at startup."""

from __future__ import annotations

from ..action import Action, MakeSelection, NavDown, NavUp, OpenConnection
from ..layout import Rect
from ..mode import ComponentId
from ..render.frame import Frame
from .base import Component
from .widgets import ListState, draw_list

NO_CONNECTIONS_HELP = (
    "No connections are configured.",
    "1. Create a config.json file that defines \"connections\"",
    "2. Put it in the lazydb config directory, or point LAZYDB_CONFIG at it",
    "3. Restart lazydb",
)


class ConnectionMenu(Component):
    component_id = ComponentId.CONNECTION_MENU

    def __init__(self) -> None:
        super().__init__()
        self.list_state = ListState()

    def items(self) -> list[str]:
        return self.config.connection_names()

    def selection(self) -> str | None:
        items = self.items()
        self.list_state.clamp(len(items))
        if not items:
            return None
        return items[self.list_state.selected]

    def update(self, action: Action) -> Action | None:
        self.focus.observe(action)
        if not self.focused:
            return None
        if isinstance(action, MakeSelection):
            name = self.selection()
            if name is not None:
                return OpenConnection(name)
        elif isinstance(action, NavDown):
            self.list_state.select_next(len(self.items()))
        elif isinstance(action, NavUp):
            self.list_state.select_previous()
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        items = self.items()
        if items:
            inner = frame.draw_box(area, "choose a connection", self.theme.border_focused, thick=True)
            draw_list(frame, inner, items, self.list_state, self.theme, highlight=self.focused)
            return
        inner = frame.draw_box(area, "lazydb", self.theme.border_focused, thick=True)
        top = inner.y + max(0, (inner.height - len(NO_CONNECTIONS_HELP)) // 2)
        for idx, line in enumerate(NO_CONNECTIONS_HELP):
            x = inner.x + max(0, (inner.width - len(line)) // 2)
            if top + idx < inner.bottom:
                frame.write(x, top + idx, line, self.theme.list_item, max_width=inner.right - x)
