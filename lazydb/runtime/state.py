from __future__ import annotations

from dataclasses import dataclass

from ..database.connection import ConnectionHandle
from ..mode import INITIAL_MODE, Mode


@dataclass
class AppState:
    mode: Mode = INITIAL_MODE
    zoomed: bool = False
    should_quit: bool = False
    should_suspend: bool = False
    connection: ConnectionHandle | None = None
    connection_generation: int = 0
    width: int = 80
    height: int = 24
    frames_rendered: int = 0
