"""Component contract shared by every pane of the UI.

A component owns only its private state. It reacts to terminal events,
app events, and actions, may return at most one follow-up action per call,
and draws itself into the rectangle the layout planner gives it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from ..action import Action, ChangeMode
from ..app_event import AppEvent
from ..config import Config
from ..input.events import KEY, TerminalEvent
from ..layout import Rect
from ..mode import INITIAL_MODE, ComponentId, Mode, focused_component
from ..render.frame import Frame
from ..render.theme import DEFAULT_THEME, UITheme


class FocusTracker:
    """Derive one component's focus from ``ChangeMode`` actions."""

    def __init__(self, owner: ComponentId, mode: Mode = INITIAL_MODE) -> None:
        self.owner = owner
        self.focused = focused_component(mode) is owner

    def observe(self, action: Action) -> bool:
        """Update focus from ``action``; return whether it was a mode change."""
        if not isinstance(action, ChangeMode):
            return False
        self.focused = focused_component(action.mode) is self.owner
        return True


class Component(ABC):
    """Base class with no-op defaults; subclasses override what they need."""

    component_id: ComponentId

    def __init__(self) -> None:
        self.send_action: Callable[[Action], None] | None = None
        self.config = Config()
        self.theme: UITheme = DEFAULT_THEME
        self.focus = FocusTracker(self.component_id)

    @property
    def focused(self) -> bool:
        return self.focus.focused

    def register_action_handler(self, send: Callable[[Action], None]) -> None:
        self.send_action = send

    def register_config_handler(self, config: Config) -> None:
        self.config = config

    def register_theme(self, theme: UITheme) -> None:
        self.theme = theme

    def init(self, width: int, height: int) -> None:
        pass

    def captures_text_input(self) -> bool:
        """Return whether printable keys are text for this component right now."""
        return False

    def handle_event(self, event: TerminalEvent) -> Action | None:
        if event.kind == KEY:
            return self.handle_key(event.key)
        return None

    def handle_key(self, key: str) -> Action | None:
        return None

    def handle_app_event(self, event: AppEvent) -> Action | None:
        return None

    def update(self, action: Action) -> Action | None:
        self.focus.observe(action)
        return None

    @abstractmethod
    def draw(self, frame: Frame, area: Rect) -> None:
        """Paint into ``area``; the registry turns exceptions into ``Error`` actions."""

    def border_style(self) -> str:
        return self.theme.border_focused if self.focused else self.theme.border


__all__ = ["Component", "FocusTracker"]
