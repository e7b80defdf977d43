"""Raw terminal session used by the orchestrator loop.

Owns raw-mode lifecycle, alternate-screen switching, frame output, and
job-control suspension.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import signal
import termios
import tty

from ..render.frame import Frame

ENTER_TUI = b"\x1b[?1049h\x1b[?25l"
EXIT_TUI = b"\x1b[?25h\x1b[?1049l"
CLEAR_SCREEN = b"\x1b[2J\x1b[H"


def terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size(fallback=(80, 24))
    return size.columns, size.lines


class TerminalController:
    """Manage terminal mode transitions and frame output."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Remember the tty attributes of ``stdin_fd`` so they can be restored."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._active = False

    def size(self) -> tuple[int, int]:
        return terminal_size()

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI)
        self._active = True

    def disable_tui_mode(self) -> None:
        """Show the cursor, restore the main screen and the saved tty state."""
        os.write(self.stdout_fd, EXIT_TUI)
        self._active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def clear(self) -> None:
        os.write(self.stdout_fd, CLEAR_SCREEN)

    def write_frame(self, frame: Frame) -> None:
        os.write(self.stdout_fd, frame.to_ansi().encode("utf-8"))

    def suspend(self) -> None:
        """Hand the terminal back to the shell until the process is continued."""
        self.disable_tui_mode()
        try:
            os.kill(os.getpid(), signal.SIGTSTP)
        finally:
            self.enable_tui_mode()

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the body on the alternate screen, restoring the tty afterwards."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            if self._active:
                self.disable_tui_mode()
