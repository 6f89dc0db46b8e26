"""Command-line front door for changelogger.

Parses CLI options, resolves the target repository (local path, GitHub slug,
or git URL), then either generates the CHANGELOG from ``--anchors`` or opens
the interactive graph/preview session.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .changelog import VersionScheme, generate, render
from .errors import ChangeloggerError, InsufficientAnchors, UnresolvableToken
from .git import Checkout, GitRepository, open_repository
from .log_setup import setup_logging
from .runtime import run_interactive
from .runtime.config import AppConfig, load_config

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_INSUFFICIENT_ANCHORS = 3

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    """argparse type for integer values >= 0."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    parsed = _non_negative_int(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _anchor_list(value: str) -> list[str]:
    return [token.strip() for token in value.split(",") if token.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="changelogger",
        description="Build a CHANGELOG from git history by picking anchor commits in a split-pane graph view.",
        epilog=(
            "REPO can be a local path, a GitHub slug (owner/repo), or a git URL (https://... or git@...)."
        ),
    )
    parser.add_argument("repo", nargs="?", default=None, metavar="REPO", help="Repository to read. Defaults to cwd.")
    parser.add_argument(
        "-g",
        "--generate",
        dest="mode",
        action="store_const",
        const="generate",
        default="tui",
        help="Non-interactive: generate the CHANGELOG from --anchors.",
    )
    parser.add_argument(
        "--tui",
        dest="mode",
        action="store_const",
        const="tui",
        help="Force the interactive session (default without --generate).",
    )
    parser.add_argument(
        "-a",
        "--anchors",
        type=_anchor_list,
        default=[],
        metavar="x,y,z",
        help="Anchors (SHA/tag/branch), 2+ required, in chronological order.",
    )
    parser.add_argument("-o", "--output", default=None, metavar="PATH", help="Output file (default: CHANGELOG.md).")
    parser.add_argument(
        "--major", type=_non_negative_int, default=None, metavar="N", help="Major version (default: 0)."
    )
    parser.add_argument(
        "--minor-start",
        type=_non_negative_int,
        default=None,
        metavar="N",
        help="Minor version of the first anchor (default: 1).",
    )
    parser.add_argument(
        "--base-patch",
        type=_positive_int,
        default=None,
        metavar="N",
        help="Patch spacing base (default: 10).",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print to stdout instead of writing the file.")
    parser.add_argument("--style", default=None, help="Pygments style name for the preview pane.")
    parser.add_argument("--no-color", action="store_true", help="Disable preview highlighting.")
    parser.add_argument("--graph-cache", default=None, metavar="PATH", help="Graph cache file location.")
    parser.add_argument("--verbose", action="store_true", help="Log debug details.")
    parser.add_argument("--log-file", default=None, metavar="PATH", help="Also write logs to PATH.")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_scheme(args: argparse.Namespace, config: AppConfig) -> VersionScheme:
    """Combine CLI values over config values into a ``VersionScheme``."""
    return VersionScheme(
        major=args.major if args.major is not None else config.major,
        minor_start=args.minor_start if args.minor_start is not None else config.minor_start,
        base_patch=args.base_patch if args.base_patch is not None else config.base_patch,
    )


def resolve_output_path(output: str, checkout: Checkout) -> Path:
    """Place a relative output path inside a local repository, else in cwd."""
    path = Path(output).expanduser()
    if path.is_absolute() or checkout.cloned:
        return path
    return checkout.root / path


def resolve_anchor_tokens(repository: GitRepository, tokens: list[str]) -> list[str]:
    """Resolve tokens to full commit ids, dropping the ones git cannot resolve."""
    resolved: list[str] = []
    for token in tokens:
        try:
            resolved.append(repository.resolve_token(token))
        except UnresolvableToken as exc:
            logger.warning("Dropping anchor: %s", exc)
    return resolved


def _emit_document(
    commits,
    identifiers: list[str],
    scheme: VersionScheme,
    output_path: Path,
    dry_run: bool,
) -> int:
    if dry_run:
        sys.stdout.write(
            render(
                commits,
                identifiers,
                major=scheme.major,
                minor_start=scheme.minor_start,
                base_patch=scheme.base_patch,
            )
        )
        return EXIT_OK
    path = generate(
        commits,
        identifiers,
        output_path,
        major=scheme.major,
        minor_start=scheme.minor_start,
        base_patch=scheme.base_patch,
    )
    print(f"Wrote {path}")
    return EXIT_OK


def run_generate(
    repository: GitRepository,
    tokens: list[str],
    scheme: VersionScheme,
    output_path: Path,
    dry_run: bool,
) -> int:
    """Headless mode: resolve anchor tokens, then print or write the document."""
    if len(tokens) < 2:
        print("Error: --generate requires at least 2 --anchors (SHA/tag/branch).", file=sys.stderr)
        return EXIT_INSUFFICIENT_ANCHORS

    resolved = resolve_anchor_tokens(repository, tokens)
    if len(resolved) < 2:
        print(f"Error: could not resolve at least two anchors: {', '.join(tokens)}", file=sys.stderr)
        return EXIT_INSUFFICIENT_ANCHORS

    commits = repository.list_commits()
    try:
        return _emit_document(commits, resolved, scheme, output_path, dry_run)
    except InsufficientAnchors as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INSUFFICIENT_ANCHORS


def run_tui(
    repository: GitRepository,
    scheme: VersionScheme,
    config: AppConfig,
    args: argparse.Namespace,
    output_path: Path,
) -> int:
    """Interactive mode: write the document for the confirmed anchors."""
    setup_logging(is_verbose=args.verbose, log_to_console=False, log_file_path=args.log_file)
    try:
        result = run_interactive(repository, scheme, config, style=args.style, colorize=not args.no_color)
    finally:
        setup_logging(is_verbose=args.verbose, log_to_console=True, log_file_path=args.log_file)
    if result is None:
        return EXIT_OK
    try:
        return _emit_document(result.commits, result.anchor_identifiers, scheme, output_path, args.dry_run)
    except InsufficientAnchors as exc:
        print(f"No CHANGELOG generated: {exc}", file=sys.stderr)
        return EXIT_INSUFFICIENT_ANCHORS


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, resolve the repository, and run the selected mode."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(is_verbose=args.verbose, log_to_console=True, log_file_path=args.log_file)

    config = load_config()
    try:
        scheme = build_scheme(args, config)
    except ChangeloggerError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR

    output = args.output or config.output
    with open_repository(args.repo) as checkout:
        cache_path = Path(args.graph_cache).expanduser() if args.graph_cache else checkout.graph_cache_path
        repository = GitRepository(checkout.root, cache_path=cache_path)
        output_path = resolve_output_path(output, checkout)
        try:
            if args.mode == "generate":
                return run_generate(repository, args.anchors, scheme, output_path, args.dry_run)
            return run_tui(repository, scheme, config, args, output_path)
        except OSError as exc:
            print(f"Error: could not write {output_path}: {exc}", file=sys.stderr)
            return EXIT_ERROR
        except ChangeloggerError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
