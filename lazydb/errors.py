"""Project-wide exceptions."""

from __future__ import annotations


class LazyDbError(Exception):
    """Base exception for lazydb."""


class ConfigError(LazyDbError):
    """Raised when the config file cannot be loaded or fails validation."""


class IdentifierError(LazyDbError, ValueError):
    """Raised when a schema/table identifier is unsafe to interpolate into SQL."""


class UnknownConnectionError(LazyDbError, KeyError):
    """Raised when a connection name is absent from the connection directory."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown connection: {self.name}"


class QueryExecutionError(LazyDbError):
    """Raised by executors when connecting or running a statement fails."""


class ChannelClosedError(LazyDbError):
    """Raised when sending on a channel whose consumer has gone away."""
