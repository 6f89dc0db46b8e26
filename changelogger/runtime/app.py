"""Interactive session bootstrap.

Builds the coordinator from a repository and the effective configuration,
binds it to the controlling terminal, and runs the event loop.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from ..changelog import VersionScheme
from ..errors import ChangeloggerError
from ..git.repository import GitRepository
from ..git.types import Commit
from .config import AppConfig
from .coordinator import FocusCoordinator
from .loop import run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionResult:
    """Confirmed anchors plus the commit list they were chosen from."""

    anchor_identifiers: list[str]
    commits: list[Commit]


def run_interactive(
    repository: GitRepository,
    scheme: VersionScheme,
    config: AppConfig,
    *,
    style: str | None = None,
    colorize: bool = True,
) -> SessionResult | None:
    """Run the two-pane session; return the confirmed result or ``None`` on cancel."""
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if not (os.isatty(stdin_fd) and os.isatty(stdout_fd)):
        raise ChangeloggerError("interactive mode needs a terminal (use --generate with --anchors)")

    terminal = TerminalController(stdin_fd, stdout_fd)
    size = terminal.size()
    coordinator = FocusCoordinator(
        repository,
        scheme=scheme,
        style=style or config.style,
        colorize=colorize,
        fit_full_block=config.fit_full_block,
        left_min=config.left_pane_min,
        right_min=config.right_pane_min,
        columns=size.columns,
        lines=size.lines,
        info_loader=repository.info,
    )
    logger.debug(
        "Interactive session: %d commits, %d graph headers",
        len(coordinator.commits),
        len(coordinator.graph.headers),
    )
    identifiers = run_main_loop(coordinator, terminal, stdin_fd)
    if identifiers is None:
        return None
    return SessionResult(anchor_identifiers=identifiers, commits=list(coordinator.commits))
