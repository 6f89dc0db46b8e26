"""Read-only JSON config for defaults.

Supplies version-scheme defaults, output path, preview style and pane minimums.
Malformed or missing config falls back to defaults, and individual keys of
the wrong type are ignored. Nothing is ever written back.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path

from platformdirs import user_config_dir

from ..changelog.versioning import DEFAULT_BASE_PATCH, DEFAULT_MAJOR, DEFAULT_MINOR_START
from ..highlight import DEFAULT_STYLE
from .layout import DEFAULT_LEFT_MIN, DEFAULT_RIGHT_MIN

APP_NAME = "changelogger"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_OUTPUT = "CHANGELOG.md"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    major: int = DEFAULT_MAJOR
    minor_start: int = DEFAULT_MINOR_START
    base_patch: int = DEFAULT_BASE_PATCH
    output: str = DEFAULT_OUTPUT
    style: str = DEFAULT_STYLE
    left_pane_min: int = DEFAULT_LEFT_MIN
    right_pane_min: int = DEFAULT_RIGHT_MIN
    fit_full_block: bool = True


def load_raw_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path if path is not None else CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _valid_int(value: object, minimum: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


_VALIDATORS = {
    "major": lambda value: _valid_int(value, 0),
    "minor_start": lambda value: _valid_int(value, 0),
    "base_patch": lambda value: _valid_int(value, 1),
    "output": lambda value: isinstance(value, str) and bool(value.strip()),
    "style": lambda value: isinstance(value, str) and bool(value.strip()),
    "left_pane_min": lambda value: _valid_int(value, 1),
    "right_pane_min": lambda value: _valid_int(value, 1),
    "fit_full_block": lambda value: isinstance(value, bool),
}


def load_config(path: Path | None = None) -> AppConfig:
    """Return an ``AppConfig`` built from the config file over built-in defaults."""
    data = load_raw_config(path)
    values: dict[str, object] = {}
    for item in fields(AppConfig):
        if item.name not in data:
            continue
        value = data[item.name]
        if _VALIDATORS[item.name](value):
            values[item.name] = value
        else:
            logger.warning("Ignoring invalid config value %s=%r", item.name, value)
    return AppConfig(**values)
