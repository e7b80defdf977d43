"""Public package surface for lazydb.

``main`` runs the terminal browser with optional argv.
Most implementation lives in submodules under ``lazydb``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Run the lazydb command line; the CLI module is imported on first call."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
