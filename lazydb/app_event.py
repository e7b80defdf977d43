"""System-originated notifications not tied to a key press.

Only the command dispatcher and components reacting to other events produce
these; key input never does.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .database.connection import ConnectionHandle
from .database.query import QueryTag, ResultSet


class Severity(Enum):
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class AppEvent:
    """Base class for all app events."""


@dataclass(frozen=True)
class ConnectionEstablished(AppEvent):
    handle: ConnectionHandle
    generation: int = 0


@dataclass(frozen=True)
class QueryResult(AppEvent):
    result: ResultSet
    tag: QueryTag


@dataclass(frozen=True)
class UserMessage(AppEvent):
    severity: Severity
    text: str


__all__ = ["AppEvent", "ConnectionEstablished", "QueryResult", "Severity", "UserMessage"]
