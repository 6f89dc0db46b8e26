"""Preview pane: live-rendered CHANGELOG text and its scroll state."""

from .controller import ERROR_PREFIX, PLACEHOLDER_LINES, PREVIEW_HELP_TEXT, PreviewController

__all__ = ["ERROR_PREFIX", "PLACEHOLDER_LINES", "PREVIEW_HELP_TEXT", "PreviewController"]
