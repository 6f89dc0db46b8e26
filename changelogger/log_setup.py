"""Logging setup for changelogger.

The interactive session owns the terminal, so console logging is only enabled
for non-interactive runs. A log file can be attached in either mode.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"


def setup_logging(
    is_verbose: bool = False,
    log_to_console: bool = True,
    log_file_path: Path | str | None = None,
) -> None:
    """Configure the root logger.

    Args:
        is_verbose: Log at DEBUG instead of WARNING.
        log_to_console: Attach a stderr handler.
        log_file_path: Optional file receiving every record at DEBUG and above.
    """
    log_level = logging.DEBUG if is_verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file_path else log_level)

    # Clear existing handlers to avoid duplicate records when called twice.
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_to_console:
        console_handler = RichHandler(
            console=Console(stderr=True),
            level=log_level,
            rich_tracebacks=True,
            show_path=is_verbose,
        )
        root_logger.addHandler(console_handler)

    if log_file_path:
        try:
            file_handler_path = Path(log_file_path)
            file_handler_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(file_handler_path, mode="a", encoding="utf-8")
        except OSError as exc:
            logging.getLogger(__name__).warning("Failed to set up file logging to %s: %s", log_file_path, exc)
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            root_logger.addHandler(file_handler)
            root_logger.debug("Logging to file: %s", file_handler_path)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())
