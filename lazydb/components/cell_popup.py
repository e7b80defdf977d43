"""Overlay with the full text of a selected cell or row."""

from __future__ import annotations

from ..action import Action, ChangeMode, Clear, SelectCell, SelectRow
from ..layout import Rect
from ..mode import ComponentId
from ..render.frame import Frame
from .base import Component


class CellPopup(Component):
    component_id = ComponentId.CELL_POPUP

    def __init__(self) -> None:
        super().__init__()
        self.lines: list[str] = []

    @property
    def visible(self) -> bool:
        return bool(self.lines)

    def update(self, action: Action) -> Action | None:
        self.focus.observe(action)
        if isinstance(action, SelectCell):
            self.lines = action.text.splitlines() or [""]
        elif isinstance(action, SelectRow):
            width = max((len(name) for name in action.columns), default=0)
            self.lines = [
                f"{name.ljust(width)}  {value}"
                for name, value in zip(action.columns, action.row)
            ]
        elif isinstance(action, (Clear, ChangeMode)):
            self.lines = []
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        if not self.visible:
            return
        frame.fill(area)
        inner = frame.draw_box(area, "value", self.theme.popup_border, thick=True)
        for idx, line in enumerate(self.lines[: inner.height]):
            frame.write(inner.x, inner.y + idx, line, self.theme.table_cell, max_width=inner.width)
