"""Tests for anchor/in-between version assignment.

Pins the patch spreading formula (half-up rounding with monotonic repair),
segment numbering, and the insufficient-anchor failure.
"""

from __future__ import annotations

import unittest

from changelogger.changelog import VersionScheme, assign_versions, distribute_patches
from changelogger.errors import ConfigurationError, InsufficientAnchors
from changelogger.git import Commit


def _commits(count: int) -> list[Commit]:
    return [
        Commit(
            full_id=f"{idx:040x}",
            short_id=f"{idx:07x}",
            date=f"2024-01-{idx + 1:02d}",
            subject=f"Commit {idx}",
        )
        for idx in range(count)
    ]


class DistributePatchesTests(unittest.TestCase):
    def test_single_in_between_commit_lands_in_the_middle(self) -> None:
        self.assertEqual(distribute_patches(1, 10), [5])

    def test_three_in_between_commits_round_half_up(self) -> None:
        self.assertEqual(distribute_patches(3, 10), [3, 5, 8])

    def test_zero_in_between_commits(self) -> None:
        self.assertEqual(distribute_patches(0, 10), [])

    def test_monotonic_repair_can_exceed_base_patch(self) -> None:
        patches = distribute_patches(20, 10)

        self.assertEqual(len(patches), 20)
        self.assertEqual(patches[:4], [1, 2, 3, 4])
        self.assertGreater(patches[-1], 10)

    def test_patches_strictly_increase_for_many_shapes(self) -> None:
        for base_patch in (1, 2, 3, 7, 10, 100):
            for count in range(0, 40):
                patches = distribute_patches(count, base_patch)
                with self.subTest(base_patch=base_patch, count=count):
                    self.assertEqual(len(patches), count)
                    self.assertTrue(all(a < b for a, b in zip(patches, patches[1:])))
                    if patches:
                        self.assertGreaterEqual(patches[0], 1)


class AssignVersionsTests(unittest.TestCase):
    def test_two_anchors_with_three_in_between(self) -> None:
        commits = _commits(5)

        versioned = assign_versions(commits, [0, 4], VersionScheme(0, 1, 10))

        self.assertEqual(
            [(entry.position, entry.version) for entry in versioned],
            [(0, "0.1.0"), (1, "0.1.3"), (2, "0.1.5"), (3, "0.1.8"), (4, "0.2.0")],
        )
        self.assertIs(versioned[2].commit, commits[2])

    def test_anchors_are_sorted_and_deduplicated(self) -> None:
        versioned = assign_versions(_commits(5), [4, 0, 4, 2])

        self.assertEqual(
            [entry.version for entry in versioned],
            ["0.1.0", "0.1.5", "0.2.0", "0.2.5", "0.3.0"],
        )

    def test_adjacent_anchors_have_no_patch_entries(self) -> None:
        versioned = assign_versions(_commits(3), [1, 2])

        self.assertEqual([(entry.position, entry.version) for entry in versioned], [(1, "0.1.0"), (2, "0.2.0")])

    def test_commits_outside_anchor_span_are_excluded(self) -> None:
        versioned = assign_versions(_commits(8), [2, 5])

        self.assertEqual([entry.position for entry in versioned], [2, 3, 4, 5])

    def test_scheme_values_are_applied(self) -> None:
        versioned = assign_versions(_commits(3), [0, 2], VersionScheme(major=2, minor_start=7, base_patch=4))

        self.assertEqual([entry.version for entry in versioned], ["2.7.0", "2.7.2", "2.8.0"])

    def test_fewer_than_two_distinct_anchors_raise(self) -> None:
        with self.assertRaises(InsufficientAnchors) as ctx:
            assign_versions(_commits(3), [1, 1])
        self.assertEqual(ctx.exception.resolved, 1)

        with self.assertRaises(InsufficientAnchors):
            assign_versions(_commits(3), [])

    def test_out_of_range_anchor_raises_index_error(self) -> None:
        with self.assertRaises(IndexError):
            assign_versions(_commits(3), [0, 3])


class VersionSchemeTests(unittest.TestCase):
    def test_defaults(self) -> None:
        scheme = VersionScheme()
        self.assertEqual((scheme.major, scheme.minor_start, scheme.base_patch), (0, 1, 10))

    def test_invalid_values_raise_configuration_error(self) -> None:
        for kwargs in ({"base_patch": 0}, {"major": -1}, {"minor_start": -2}, {"base_patch": True}, {"major": "1"}):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ConfigurationError):
                    VersionScheme(**kwargs)


if __name__ == "__main__":
    unittest.main()
