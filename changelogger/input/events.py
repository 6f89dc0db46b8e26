"""Closed event vocabulary for the interactive session.

Raw key tokens from :func:`read_key` are normalized here into a small enum so
the coordinator never sees terminal quirks. Unknown tokens map to ``IGNORED``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventKind(Enum):
    SWITCH_FOCUS = "switch-focus"
    QUIT = "quit"
    CONFIRM = "confirm"
    MOVE_UP = "move-up"
    MOVE_DOWN = "move-down"
    PAGE_UP = "page-up"
    PAGE_DOWN = "page-down"
    TOP = "top"
    BOTTOM = "bottom"
    TOGGLE_SELECTION = "toggle-selection"
    TOGGLE_FIT = "toggle-fit"
    REFRESH = "refresh"
    SHRINK_LEFT = "shrink-left"
    GROW_LEFT = "grow-left"
    IGNORED = "ignored"


MOVEMENT_EVENTS = frozenset(
    {
        EventKind.MOVE_UP,
        EventKind.MOVE_DOWN,
        EventKind.PAGE_UP,
        EventKind.PAGE_DOWN,
        EventKind.TOP,
        EventKind.BOTTOM,
    }
)


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single event."""

    combos: tuple[str, ...]
    event: EventKind


DEFAULT_BINDINGS: tuple[KeyBinding, ...] = (
    KeyBinding(("TAB", "SHIFT_TAB"), EventKind.SWITCH_FOCUS),
    KeyBinding(("q", "Q", "ESC", "CTRL_C"), EventKind.QUIT),
    KeyBinding(("ENTER",), EventKind.CONFIRM),
    KeyBinding(("UP", "k"), EventKind.MOVE_UP),
    KeyBinding(("DOWN", "j"), EventKind.MOVE_DOWN),
    KeyBinding(("PAGE_UP", "u"), EventKind.PAGE_UP),
    KeyBinding(("PAGE_DOWN", "d"), EventKind.PAGE_DOWN),
    KeyBinding(("g", "HOME"), EventKind.TOP),
    KeyBinding(("G", "END"), EventKind.BOTTOM),
    KeyBinding((" ",), EventKind.TOGGLE_SELECTION),
    KeyBinding(("f",), EventKind.TOGGLE_FIT),
    KeyBinding(("r",), EventKind.REFRESH),
    KeyBinding(("<", "SHIFT_LEFT"), EventKind.SHRINK_LEFT),
    KeyBinding((">", "SHIFT_RIGHT"), EventKind.GROW_LEFT),
)


class KeyMap:
    """Token-to-event table built from :class:`KeyBinding` entries."""

    def __init__(self, bindings: tuple[KeyBinding, ...] = DEFAULT_BINDINGS) -> None:
        self._events: dict[str, EventKind] = {}
        for binding in bindings:
            for combo in binding.combos:
                self._events[combo] = binding.event

    def normalize(self, token: str) -> EventKind:
        return self._events.get(token, EventKind.IGNORED)


_DEFAULT_KEYMAP = KeyMap()


def normalize_key(token: str) -> EventKind:
    """Translate one raw key token into an :class:`EventKind`."""
    return _DEFAULT_KEYMAP.normalize(token)
