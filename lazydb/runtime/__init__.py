"""Runtime orchestration: the main loop, its channels, and background tasks."""

from __future__ import annotations


def __getattr__(name: str):
    if name == "Orchestrator":
        from .app import Orchestrator

        return Orchestrator
    if name == "CommandDispatcher":
        from .dispatcher import CommandDispatcher

        return CommandDispatcher
    if name == "Channel":
        from .channels import Channel

        return Channel
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["Channel", "CommandDispatcher", "Orchestrator"]
