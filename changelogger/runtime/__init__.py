"""Public runtime orchestration entry points.

This package groups the interactive session bootstrap (`run_interactive`) and
the lower-level coordinator and event loop used by tests and composition code.
"""

from __future__ import annotations


def run_interactive(*args, **kwargs):
    """Lazily import session entrypoint to avoid terminal setup on import."""
    from .app import run_interactive as _run_interactive

    return _run_interactive(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


def __getattr__(name: str):
    if name in {"FocusCoordinator", "Focus", "Outcome"}:
        from . import coordinator as _coordinator

        return getattr(_coordinator, name)
    if name == "SessionResult":
        from . import app as _app

        return _app.SessionResult
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Focus",
    "FocusCoordinator",
    "Outcome",
    "SessionResult",
    "run_interactive",
    "run_main_loop",
]
