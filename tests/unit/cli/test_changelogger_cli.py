"""CLI behavior tests for ``changelogger.cli.main``.

Repository access is replaced by an in-memory fake so mode selection, exit
codes, and output placement can be checked without git.
"""

from __future__ import annotations

import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from changelogger import __version__, cli
from changelogger.errors import UnresolvableToken
from changelogger.git import Checkout
from changelogger.git.types import Commit
from changelogger.runtime.app import SessionResult
from changelogger.runtime.config import AppConfig

COMMITS = [
    Commit(full_id=f"{digit}" * 40, short_id=f"{digit}" * 7, date=f"2024-01-0{digit}", subject=f"change {digit}")
    for digit in "1234"
]


class FakeGitRepository:
    def __init__(self, root: Path, cache_path: Path | None = None) -> None:
        self.root = root
        self.cache_path = cache_path

    def list_commits(self) -> list[Commit]:
        return list(COMMITS)

    def resolve_token(self, token: str) -> str:
        for commit in COMMITS:
            if commit.matches(token):
                return commit.full_id
        raise UnresolvableToken(token)


class CliTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        for target, kwargs in (
            ("changelogger.cli.GitRepository", {"new": FakeGitRepository}),
            ("changelogger.cli.load_config", {"return_value": AppConfig()}),
            ("changelogger.git.remote.is_git_work_tree", {"return_value": True}),
            ("changelogger.cli.setup_logging", {}),
        ):
            patcher = mock.patch(target, **kwargs)
            patcher.start()
            self.addCleanup(patcher.stop)

    def _main(self, *argv: str) -> tuple[int, str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr):
            code = cli.main([str(self.root), *argv])
        return code, stdout.getvalue(), stderr.getvalue()


class GenerateModeTests(CliTestCase):
    def test_dry_run_prints_document(self) -> None:
        code, stdout, _stderr = self._main("-g", "-a", "1111111,4444444", "--dry-run")

        self.assertEqual(code, cli.EXIT_OK)
        self.assertTrue(stdout.startswith("## [Unreleased]\n"))
        self.assertIn("## [0.1.3] - 2024-01-02", stdout)
        self.assertIn("## [0.2.0] - 2024-01-04", stdout)
        self.assertFalse((self.root / "CHANGELOG.md").exists())

    def test_writes_default_output_inside_local_repo(self) -> None:
        code, stdout, _stderr = self._main("--generate", "--anchors", "1111111,3333333")

        target = self.root / "CHANGELOG.md"
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(stdout, f"Wrote {target}\n")
        self.assertIn("## [0.2.0] - 2024-01-03", target.read_text(encoding="utf-8"))

    def test_version_flags_shape_the_document(self) -> None:
        code, stdout, _stderr = self._main(
            "-g", "-a", "1111111,4444444", "--dry-run", "--major", "2", "--minor-start", "0", "--base-patch", "100"
        )

        self.assertEqual(code, cli.EXIT_OK)
        self.assertIn("## [2.0.0] - 2024-01-01", stdout)
        self.assertIn("## [2.0.33] - 2024-01-02", stdout)
        self.assertIn("## [2.1.0] - 2024-01-04", stdout)

    def test_fewer_than_two_anchors_exits_three(self) -> None:
        code, stdout, stderr = self._main("-g", "-a", "1111111")

        self.assertEqual(code, cli.EXIT_INSUFFICIENT_ANCHORS)
        self.assertEqual(stdout, "")
        self.assertIn("at least 2", stderr)

    def test_unresolvable_anchor_is_dropped(self) -> None:
        with self.assertLogs("changelogger.cli", level="WARNING"):
            code, _stdout, stderr = self._main("-g", "-a", "1111111,nope", "--dry-run")

        self.assertEqual(code, cli.EXIT_INSUFFICIENT_ANCHORS)
        self.assertIn("could not resolve", stderr)

    def test_cloned_repo_keeps_graph_cache_inside_the_clone(self) -> None:
        def fake_clone(_url: str, target: Path) -> bool:
            (target / ".git").mkdir(parents=True)
            return True

        stdout = io.StringIO()
        with (
            mock.patch("changelogger.git.remote._clone", side_effect=fake_clone),
            mock.patch("changelogger.cli.GitRepository", wraps=FakeGitRepository) as repository_cls,
            mock.patch("sys.stdout", stdout),
        ):
            code = cli.main(["owner/project", "-g", "-a", "1111111,4444444", "--dry-run"])

        self.assertEqual(code, cli.EXIT_OK)
        root = repository_cls.call_args.args[0]
        self.assertEqual(repository_cls.call_args.kwargs["cache_path"], root / ".git" / "changelogger.graph")
        self.assertFalse(root.exists())

    def test_explicit_graph_cache_wins(self) -> None:
        with mock.patch("changelogger.cli.GitRepository", wraps=FakeGitRepository) as repository_cls:
            self._main("-g", "-a", "1111111,4444444", "--dry-run", "--graph-cache", str(self.root / "g.txt"))

        self.assertEqual(repository_cls.call_args.kwargs["cache_path"], self.root / "g.txt")

    def test_write_failure_exits_one(self) -> None:
        blocker = self.root / "blocker"
        blocker.write_text("file", encoding="utf-8")

        code, _stdout, stderr = self._main("-g", "-a", "1111111,2222222", "-o", str(blocker / "CHANGELOG.md"))

        self.assertEqual(code, cli.EXIT_ERROR)
        self.assertIn("could not write", stderr)


class InteractiveModeTests(CliTestCase):
    def test_cancelled_session_exits_zero_without_writing(self) -> None:
        with mock.patch("changelogger.cli.run_interactive", return_value=None) as run_interactive:
            code, stdout, _stderr = self._main()

        run_interactive.assert_called_once()
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(stdout, "")
        self.assertFalse((self.root / "CHANGELOG.md").exists())

    def test_confirmed_session_writes_document(self) -> None:
        result = SessionResult(anchor_identifiers=["2222222", "4444444"], commits=list(COMMITS))
        with mock.patch("changelogger.cli.run_interactive", return_value=result):
            code, stdout, _stderr = self._main("-o", "HISTORY.md")

        target = self.root / "HISTORY.md"
        self.assertEqual(code, cli.EXIT_OK)
        self.assertEqual(stdout, f"Wrote {target}\n")
        content = target.read_text(encoding="utf-8")
        self.assertIn("## [0.1.0] - 2024-01-02", content)
        self.assertNotIn("change 1", content)

    def test_last_mode_flag_wins(self) -> None:
        with mock.patch("changelogger.cli.run_interactive", return_value=None) as run_interactive:
            code, _stdout, _stderr = self._main("-g", "--tui")

        self.assertEqual(code, cli.EXIT_OK)
        run_interactive.assert_called_once()

    def test_style_and_color_flags_reach_the_session(self) -> None:
        with mock.patch("changelogger.cli.run_interactive", return_value=None) as run_interactive:
            self._main("--style", "friendly", "--no-color")

        kwargs = run_interactive.call_args.kwargs
        self.assertEqual(kwargs["style"], "friendly")
        self.assertFalse(kwargs["colorize"])


class ParserTests(unittest.TestCase):
    def test_version_flag(self) -> None:
        stdout = io.StringIO()
        with mock.patch("sys.stdout", stdout), self.assertRaises(SystemExit) as ctx:
            cli.main(["--version"])

        self.assertEqual(ctx.exception.code, 0)
        self.assertEqual(stdout.getvalue().strip(), f"changelogger {__version__}")

    def test_invalid_base_patch_is_usage_error(self) -> None:
        with mock.patch("sys.stderr", io.StringIO()), self.assertRaises(SystemExit) as ctx:
            cli.main(["--base-patch", "0"])

        self.assertEqual(ctx.exception.code, cli.EXIT_USAGE)

    def test_anchor_list_trims_and_drops_empty_tokens(self) -> None:
        args = cli.build_parser().parse_args(["-a", " v1.0, ,main ,abc123"])

        self.assertEqual(args.anchors, ["v1.0", "main", "abc123"])
        self.assertEqual(args.mode, "tui")

    def test_relative_output_for_cloned_repo_stays_in_cwd(self) -> None:
        clone = Checkout(Path("/tmp/clone"), cloned=True)
        local = Checkout(Path("/repo"))

        self.assertEqual(cli.resolve_output_path("OUT.md", clone), Path("OUT.md"))
        self.assertEqual(cli.resolve_output_path("/abs/OUT.md", local), Path("/abs/OUT.md"))
        self.assertEqual(cli.resolve_output_path("OUT.md", local), Path("/repo/OUT.md"))


if __name__ == "__main__":
    unittest.main()
