"""The orchestrator: one thread that owns mode, connection, and rendering.

Each loop iteration takes one terminal event, turns it into at most one
action, then applies every queued app event before any queued action.
Background tasks reach this loop only through the app-event channel.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from ..action import (
    Action,
    ChangeMode,
    ClearScreen,
    Error,
    ExecuteQuery,
    OpenConnection,
    Quit,
    Render,
    Resize,
    Resume,
    Suspend,
    Tick,
    ToggleZoom,
)
from ..app_event import AppEvent, ConnectionEstablished, QueryResult, Severity, UserMessage
from ..components import Component, ComponentRegistry, default_components
from ..config import Config
from ..database.connection import QueryExecutor
from ..database.query import QueryKind
from ..input.events import KEY, QUIT, RENDER, RESIZE, TICK, TerminalEvent
from ..input.keys import KeyResolver
from ..layout import plan, plan_overlays
from ..mode import Mode
from ..render.frame import Frame
from ..render.theme import DEFAULT_THEME, UITheme
from .channels import Channel
from .dispatcher import CommandDispatcher, Spawn
from .events import EventSource
from .state import AppState
from .terminal import TerminalController

logger = logging.getLogger(__name__)

DEFAULT_TICK_RATE = 4.0
DEFAULT_FRAME_RATE = 30.0


def results_summary(row_count: int) -> str:
    noun = "result" if row_count == 1 else "results"
    return f"{row_count} {noun}"


def _is_text_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class Orchestrator:
    def __init__(
        self,
        config: Config,
        executor: QueryExecutor,
        *,
        tick_rate: float = DEFAULT_TICK_RATE,
        frame_rate: float = DEFAULT_FRAME_RATE,
        components: Iterable[Component] | None = None,
        event_source: EventSource | None = None,
        terminal: TerminalController | None = None,
        theme: UITheme = DEFAULT_THEME,
        spawn: Spawn | None = None,
    ) -> None:
        self.config = config
        self.tick_rate = tick_rate
        self.frame_rate = frame_rate
        self.theme = theme
        self.state = AppState()
        self.actions: Channel[Action] = Channel("action")
        self.app_events: Channel[AppEvent] = Channel("app event")
        self.registry = ComponentRegistry(default_components() if components is None else components)
        self.keys = KeyResolver(config.keybindings)
        self.dispatcher = CommandDispatcher(executor, config.connections, self.app_events.send, spawn)
        self.event_source = event_source
        self.terminal = terminal
        self.last_frame: Frame | None = None

    @property
    def mode(self) -> Mode:
        return self.state.mode

    def send(self, action: Action) -> None:
        self.actions.send(action)

    def send_all(self, actions: Iterable[Action]) -> None:
        for action in actions:
            self.actions.send(action)

    def register_components(self, width: int, height: int) -> None:
        self.state.width = width
        self.state.height = height
        self.registry.register_action_handler(self.send)
        self.registry.register_config_handler(self.config)
        self.registry.register_theme(self.theme)
        self.registry.init(width, height)

    # Phase 2: terminal input.

    def handle_key(self, key: str) -> None:
        if _is_text_key(key) and self.registry.captures_text_input(self.state.mode):
            self.keys.clear()
            return
        action = self.keys.feed(key, self.state.mode)
        if action is not None:
            self.send(action)

    def handle_terminal_event(self, event: TerminalEvent) -> None:
        if event.kind == KEY:
            self.handle_key(event.key)
        elif event.kind == TICK:
            self.send(Tick())
        elif event.kind == RENDER:
            self.send(Render())
        elif event.kind == RESIZE:
            self.send(Resize(event.width, event.height))
        elif event.kind == QUIT:
            self.send(Quit())
        self.send_all(self.registry.handle_event(event))

    # Phase 3: app events.

    def _dispatch_app_event(self, event: AppEvent) -> None:
        if isinstance(event, ConnectionEstablished):
            if event.generation and event.generation < self.state.connection_generation:
                logger.debug("ignoring superseded connection (generation %d)", event.generation)
                self.dispatcher.release(event.handle)
                return
            previous, self.state.connection = self.state.connection, event.handle
            self.state.connection_generation = event.generation
            if previous is not None and previous is not event.handle:
                self.dispatcher.release(previous)
            self.apply_action(ChangeMode(Mode.EXPLORE_TABLES))
        self.send_all(self.registry.handle_app_event(event))
        if isinstance(event, QueryResult) and event.tag.kind is QueryKind.USER:
            self._dispatch_app_event(UserMessage(Severity.INFO, results_summary(event.result.row_count)))

    def handle_app_events(self) -> None:
        for event in self.app_events.drain():
            self._dispatch_app_event(event)

    # Phase 4: actions.

    def apply_action(self, action: Action) -> None:
        if not isinstance(action, (Tick, Render)):
            logger.debug("%s", action)

        if isinstance(action, Tick):
            self.keys.clear()
        elif isinstance(action, Quit):
            self.state.should_quit = True
        elif isinstance(action, Suspend):
            self.state.should_suspend = True
        elif isinstance(action, Resume):
            self.state.should_suspend = False
        elif isinstance(action, ClearScreen):
            if self.terminal is not None:
                self.terminal.clear()
        elif isinstance(action, Resize):
            self.state.width = action.width
            self.state.height = action.height
            self.render()
        elif isinstance(action, Render):
            self.render()
        elif isinstance(action, ChangeMode):
            self.state.mode = action.mode
        elif isinstance(action, ToggleZoom):
            self.state.zoomed = not self.state.zoomed
        elif isinstance(action, OpenConnection):
            self.dispatcher.open_connection(action.name)
        elif isinstance(action, ExecuteQuery):
            self.dispatcher.execute_query(self.state.connection, action.request)
        elif isinstance(action, Error):
            logger.error("%s", action.text)

        self.send_all(self.registry.update(action))

    def handle_actions(self) -> None:
        while True:
            action = self.actions.try_receive()
            if action is None:
                return
            self.apply_action(action)

    def step(self, event: TerminalEvent) -> None:
        """Run one loop iteration for ``event``."""
        self.handle_terminal_event(event)
        self.handle_app_events()
        self.handle_actions()

    def render(self) -> Frame:
        frame = Frame(self.state.width, self.state.height)
        root = frame.area
        errors = self.registry.draw(frame, plan(self.state.mode, self.state.zoomed, root))
        errors += self.registry.draw(frame, plan_overlays(self.state.mode, root))
        self.state.frames_rendered += 1
        self.last_frame = frame
        if self.terminal is not None:
            self.terminal.write_frame(frame)
        self.send_all(errors)
        return frame

    def close(self) -> None:
        self.actions.close()
        self.app_events.close()
        connection, self.state.connection = self.state.connection, None
        if connection is not None:
            self.dispatcher.release(connection)

    def run(self) -> None:
        """Drive the loop on the real terminal until ``Quit``."""
        if self.terminal is None:
            self.terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
        if self.event_source is None:
            self.event_source = EventSource(self.terminal.stdin_fd, self.tick_rate, self.frame_rate)
        terminal = self.terminal
        try:
            with terminal.raw_mode():
                self.register_components(*terminal.size())
                while True:
                    self.step(self.event_source.next_event())
                    if self.state.should_suspend:
                        terminal.suspend()
                        self.send(Resume())
                        self.send(ClearScreen())
                    elif self.state.should_quit:
                        break
        finally:
            self.close()


__all__ = ["DEFAULT_FRAME_RATE", "DEFAULT_TICK_RATE", "Orchestrator", "results_summary"]
