"""Tests for root logger configuration in console and interactive modes."""

import logging
import tempfile
import unittest
from pathlib import Path

from rich.logging import RichHandler

from changelogger.log_setup import setup_logging


class SetupLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        root = logging.getLogger()
        saved_handlers = root.handlers[:]
        saved_level = root.level

        def restore() -> None:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)

        self.addCleanup(restore)

    def test_console_uses_rich_handler_on_stderr(self) -> None:
        setup_logging(is_verbose=True)

        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], RichHandler)
        self.assertTrue(handlers[0].console.stderr)
        self.assertEqual(handlers[0].level, logging.DEBUG)

    def test_interactive_mode_has_no_console_handler(self) -> None:
        setup_logging(log_to_console=False)

        handlers = logging.getLogger().handlers
        self.assertFalse(any(isinstance(handler, RichHandler) for handler in handlers))
        self.assertTrue(all(isinstance(handler, logging.NullHandler) for handler in handlers))

    def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
        setup_logging()
        setup_logging()

        self.assertEqual(len(logging.getLogger().handlers), 1)

    def test_log_file_receives_debug_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "changelogger.log"
            setup_logging(log_to_console=False, log_file_path=log_path)

            logging.getLogger("changelogger.test").debug("cache hit")
            for handler in logging.getLogger().handlers:
                handler.flush()

            self.assertIn("cache hit", log_path.read_text(encoding="utf-8"))
            for handler in logging.getLogger().handlers[:]:
                logging.getLogger().removeHandler(handler)
                handler.close()


if __name__ == "__main__":
    unittest.main()
