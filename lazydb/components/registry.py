"""Components keyed by identity, with broadcast helpers for the main loop."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator

from ..action import Action, Error
from ..app_event import AppEvent
from ..config import Config
from ..errors import ChannelClosedError
from ..input.events import TerminalEvent
from ..layout import Rect
from ..mode import ComponentId, Mode, focused_component
from ..render.frame import Frame
from ..render.theme import UITheme
from .base import Component

logger = logging.getLogger(__name__)


class ComponentRegistry:
    """Ordered mapping of ``ComponentId`` to component.

    Registration order only fixes the broadcast order. Follow-up actions from
    every component are collected and returned to the caller, which owns the
    action channel. Exceptions raised by a component become ``Error`` actions
    so one misbehaving pane does not take down the loop.
    """

    def __init__(self, components: Iterable[Component] = ()) -> None:
        self._components: dict[ComponentId, Component] = {}
        for component in components:
            self.register(component)

    def register(self, component: Component) -> None:
        component_id = component.component_id
        if component_id in self._components:
            raise ValueError(f"component already registered: {component_id.value}")
        self._components[component_id] = component

    def get(self, component_id: ComponentId) -> Component | None:
        return self._components.get(component_id)

    def __getitem__(self, component_id: ComponentId) -> Component:
        return self._components[component_id]

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._components

    def __iter__(self) -> Iterator[Component]:
        return iter(list(self._components.values()))

    def __len__(self) -> int:
        return len(self._components)

    def ids(self) -> list[ComponentId]:
        return list(self._components)

    def register_action_handler(self, send: Callable[[Action], None]) -> None:
        for component in self:
            component.register_action_handler(send)

    def register_config_handler(self, config: Config) -> None:
        for component in self:
            component.register_config_handler(config)

    def register_theme(self, theme: UITheme) -> None:
        for component in self:
            component.register_theme(theme)

    def init(self, width: int, height: int) -> None:
        for component in self:
            component.init(width, height)

    def captures_text_input(self, mode: Mode) -> bool:
        component = self._components.get(focused_component(mode))
        return component is not None and component.captures_text_input()

    def _broadcast(self, stage: str, call: Callable[[Component], Action | None]) -> list[Action]:
        follow_ups: list[Action] = []
        for component in self:
            try:
                action = call(component)
            except ChannelClosedError:
                raise
            except Exception as exc:
                logger.exception("%s failed in %s", component.component_id.value, stage)
                action = Error(f"{component.component_id.value} failed: {exc}")
            if action is not None:
                follow_ups.append(action)
        return follow_ups

    def handle_event(self, event: TerminalEvent) -> list[Action]:
        return self._broadcast("handle_event", lambda component: component.handle_event(event))

    def handle_app_event(self, event: AppEvent) -> list[Action]:
        return self._broadcast("handle_app_event", lambda component: component.handle_app_event(event))

    def update(self, action: Action) -> list[Action]:
        return self._broadcast("update", lambda component: component.update(action))

    def draw(self, frame: Frame, plan: Iterable[tuple[ComponentId, Rect]]) -> list[Action]:
        """Draw each planned component; failures become ``Error`` actions."""
        errors: list[Action] = []
        for component_id, area in plan:
            component = self._components.get(component_id)
            if component is None:
                continue
            try:
                component.draw(frame, area)
            except Exception as exc:
                logger.exception("failed to draw %s", component_id.value)
                errors.append(Error(f"Failed to draw {component_id.value}: {exc}"))
        return errors


__all__ = ["ComponentRegistry"]
