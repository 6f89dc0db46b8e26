"""Input-layer public API: raw key decoding and event normalization."""

from .events import MOVEMENT_EVENTS, EventKind, KeyBinding, KeyMap, normalize_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "EventKind",
    "KeyBinding",
    "KeyMap",
    "MOVEMENT_EVENTS",
    "normalize_key",
]
