"""Public package surface for changelogger.

Exports ``main`` for programmatic CLI invocation plus the two document entry
points. Most implementation lives in submodules under ``changelogger``.
"""

from __future__ import annotations

__version__ = "0.1.0"


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def render(*args, **kwargs):
    """Render a CHANGELOG document; see ``changelogger.changelog.render``."""
    from .changelog import render as _render

    return _render(*args, **kwargs)


def generate(*args, **kwargs):
    """Render and write a CHANGELOG document; see ``changelogger.changelog.generate``."""
    from .changelog import generate as _generate

    return _generate(*args, **kwargs)


__all__ = ["__version__", "generate", "main", "render"]
