"""Exception taxonomy shared by the repository, changelog, and preview layers."""

from __future__ import annotations


class ChangeloggerError(Exception):
    """Base class for every error raised on purpose by changelogger."""


class ConfigurationError(ChangeloggerError):
    """A version scheme or config value is outside its allowed range."""


class InsufficientAnchors(ChangeloggerError):
    """Fewer than two distinct anchors resolved to known commits."""

    def __init__(self, resolved: int, message: str | None = None) -> None:
        self.resolved = resolved
        super().__init__(message or f"Need at least 2 valid anchor commits (resolved {resolved})")


class UnresolvableToken(ChangeloggerError):
    """An externally supplied anchor token does not name a commit."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"could not resolve {token!r} to a commit")


class RepositoryReadFailure(ChangeloggerError):
    """A git query failed or timed out."""


class RenderFailure(ChangeloggerError):
    """Version assignment or document rendering failed during a live preview."""
