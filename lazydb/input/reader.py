"""Decode raw stdin bytes into key tokens.

Tokens use the names understood by the keybinding tables.
A lone ESC is told apart from an Alt prefix by a short read timeout.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS = {
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_TOKENS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> bytes:
    """Complete a multi-byte UTF-8 character started by ``first``."""
    lead = first[0]
    if lead >= 0xF0:
        missing = 3
    elif lead >= 0xE0:
        missing = 2
    elif lead >= 0xC0:
        missing = 1
    else:
        return first
    out = first
    for _ in range(missing):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        out += nxt
    return out


def decode_control_byte(ch: bytes) -> str | None:
    """Map a single control byte to its token, or ``None`` if printable."""
    token = _CONTROL_TOKENS.get(ch)
    if token is not None:
        return token
    code = ch[0]
    if 1 <= code <= 26:
        return f"CTRL_{chr(code + 64)}"
    return None


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token; returns ``""`` when ``timeout_ms`` elapses first."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    control = decode_control_byte(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch).decode("utf-8", errors="replace")

    # Escape, Alt+key, and arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        if 0x20 < seq[0] < 0x7F:
            return f"ALT_{seq.decode('ascii')}"
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    token = _CSI_FINAL_TOKENS.get(seq)
    if token is not None:
        return token
    if seq == b"3":
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return "DELETE"
    return "ESC"


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "decode_control_byte", "read_key"]
