"""System clipboard access for the ``Yank`` action."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

logger = logging.getLogger(__name__)


def clipboard_commands() -> list[list[str]]:
    """Return candidate copy commands for the current platform, in order."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> bool:
    """Pipe ``text`` into the first available copy command; False if none worked."""
    if not text:
        return False

    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                check=False,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.warning("Clipboard command %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return True
    return False


__all__ = ["clipboard_commands", "copy_text_to_clipboard"]
