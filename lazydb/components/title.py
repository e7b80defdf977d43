"""Banner shown above the connection menu."""

from __future__ import annotations

from ..layout import Rect
from ..mode import ComponentId
from ..render.frame import Frame
from .base import Component

BANNER = (
    "██╗      █████╗ ███████╗██╗   ██╗██████╗ ██████╗ ",
    "██║     ██╔══██╗╚══███╔╝╚██╗ ██╔╝██╔══██╗██╔══██╗",
    "██║     ███████║  ███╔╝  ╚████╔╝ ██║  ██║██████╔╝",
    "██║     ██╔══██║ ███╔╝    ╚██╔╝  ██║  ██║██╔══██╗",
    "███████╗██║  ██║███████╗   ██║   ██████╔╝██████╔╝",
    "╚══════╝╚═╝  ╚═╝╚══════╝   ╚═╝   ╚═════╝ ╚═════╝ ",
)
COMPACT_BANNER = "lazydb"


class Title(Component):
    component_id = ComponentId.TITLE

    def draw(self, frame: Frame, area: Rect) -> None:
        if area.height <= 0 or area.width <= 0:
            return
        banner_width = max(len(line) for line in BANNER)
        lines: tuple[str, ...] = BANNER
        if area.height < len(BANNER) or area.width < banner_width:
            lines = (COMPACT_BANNER,)
        top = area.y + max(0, (area.height - len(lines)) // 2)
        for idx, line in enumerate(lines):
            x = area.x + max(0, (area.width - len(line)) // 2)
            frame.write(x, top + idx, line, self.theme.banner, max_width=area.right - x)
