"""Repository access: commit listing, graph text, cache, and REPO resolution."""

from .graph_cache import GraphCache, default_cache_path, head_state_mtime_ns
from .remote import Checkout, github_slug_to_url, open_repository
from .repository import EMPTY_GRAPH_TEXT, CommitRepository, GitRepository, parse_commit_log
from .types import Commit, RepoInfo

__all__ = [
    "Checkout",
    "Commit",
    "CommitRepository",
    "EMPTY_GRAPH_TEXT",
    "GitRepository",
    "GraphCache",
    "RepoInfo",
    "default_cache_path",
    "github_slug_to_url",
    "head_state_mtime_ns",
    "open_repository",
    "parse_commit_log",
]
