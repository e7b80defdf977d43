"""Input-layer public API for key decoding and key-sequence resolution.

Exports are split between low-level terminal decoding (``read_key``) and the
mode-aware binding resolution used by the orchestrator.
"""

from .bindings import KeyBinding, KeyBindingTable, KeySequence, format_key_sequence, parse_key_sequence
from .keys import GLOBAL_SHORTCUTS, NO_MATCH, PENDING_LONGER, KeyResolver, Matched, resolve
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "GLOBAL_SHORTCUTS",
    "KeyBinding",
    "KeyBindingTable",
    "KeyResolver",
    "KeySequence",
    "Matched",
    "NO_MATCH",
    "PENDING_LONGER",
    "format_key_sequence",
    "parse_key_sequence",
    "read_key",
    "resolve",
]
