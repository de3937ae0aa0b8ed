"""Tests for chronomark.relative_speed — ratios against the fastest command."""

from __future__ import annotations

import math
import unittest

from export_test_helpers import make_result, sleep_long, sleep_short

from chronomark.relative_speed import compute, fastest_index, fastest_of, ratio_stddev


class TestFastest(unittest.TestCase):
    """Tests for fastest_index and fastest_of."""

    def test_minimum_mean(self) -> None:
        """The smallest mean is the fastest."""
        results = [make_result("a", 3.0), make_result("b", 1.0), make_result("c", 2.0)]
        self.assertEqual(fastest_index(results), 1)
        self.assertIs(fastest_of(results), results[1])

    def test_tie_first_wins(self) -> None:
        """On a tie the earliest result wins."""
        results = [make_result("a", 2.0), make_result("b", 1.0), make_result("c", 1.0)]
        self.assertEqual(fastest_index(results), 1)

    def test_identical_results_tie(self) -> None:
        """Equal records are told apart by position, not by value."""
        results = [make_result("a", 1.0), make_result("a", 1.0)]
        entries = compute(results)
        assert entries is not None
        self.assertEqual([e.is_fastest for e in entries], [True, False])

    def test_empty(self) -> None:
        """No results means no fastest."""
        self.assertIsNone(fastest_index([]))
        self.assertIsNone(fastest_of([]))


class TestCompute(unittest.TestCase):
    """Tests for compute."""

    def test_empty_unavailable(self) -> None:
        """Empty input gives None."""
        self.assertIsNone(compute([]))

    def test_zero_mean_fastest_unavailable(self) -> None:
        """A zero fastest mean makes ratios undefined."""
        results = [make_result("true", 0.0), make_result("sleep 1", 1.0)]
        self.assertIsNone(compute(results))

    def test_single_result(self) -> None:
        """A single result is its own baseline."""
        entries = compute([make_result("a", 0.5, stddev=0.01)])
        assert entries is not None
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].relative_mean, 1.0)
        self.assertTrue(entries[0].is_fastest)

    def test_known_values(self) -> None:
        """sleep 2 is about 18.97 ± 0.29 times slower than sleep 0.1."""
        entries = compute([sleep_short(), sleep_long()])
        assert entries is not None
        slow = entries[1]
        self.assertAlmostEqual(slow.relative_mean, 2.0050 / 0.1057, places=10)
        assert slow.relative_stddev is not None
        expected = (2.0050 / 0.1057) * math.sqrt((0.0020 / 2.0050) ** 2 + (0.0016 / 0.1057) ** 2)
        self.assertAlmostEqual(slow.relative_stddev, expected, places=10)
        self.assertAlmostEqual(slow.relative_stddev, 0.2878, places=3)

    def test_fastest_normalized(self) -> None:
        """Exactly one entry is fastest, at ratio 1.0."""
        results = [make_result("a", 3.0), make_result("b", 1.5), make_result("c", 2.0)]
        entries = compute(results)
        assert entries is not None
        fastest = [e for e in entries if e.is_fastest]
        self.assertEqual(len(fastest), 1)
        self.assertIs(fastest[0].result, results[1])
        self.assertEqual(fastest[0].relative_mean, 1.0)
        for e in entries:
            self.assertGreaterEqual(e.relative_mean, 1.0)

    def test_order_preserved(self) -> None:
        """Entries follow the input order."""
        results = [make_result("slow", 3.0), make_result("fast", 1.0), make_result("mid", 2.0)]
        entries = compute(results)
        assert entries is not None
        self.assertEqual([e.result.command for e in entries], ["slow", "fast", "mid"])
        self.assertEqual([e.relative_mean for e in entries], [3.0, 1.0, 2.0])

    def test_fastest_carries_stddev(self) -> None:
        """The fastest entry's own ratio uncertainty is still computed."""
        entries = compute([sleep_short(), sleep_long()])
        assert entries is not None
        self.assertIsNotNone(entries[0].relative_stddev)

    def test_missing_stddev_on_entry(self) -> None:
        """An entry without stddev has no ratio stddev."""
        results = [make_result("a", 1.0, stddev=0.1), make_result("b", 2.0)]
        entries = compute(results)
        assert entries is not None
        self.assertIsNotNone(entries[0].relative_stddev)
        self.assertIsNone(entries[1].relative_stddev)

    def test_missing_stddev_on_fastest(self) -> None:
        """A baseline without stddev leaves every ratio stddev unknown."""
        results = [make_result("a", 1.0), make_result("b", 2.0, stddev=0.1)]
        entries = compute(results)
        assert entries is not None
        self.assertTrue(all(e.relative_stddev is None for e in entries))

    def test_zero_stddev_is_not_missing(self) -> None:
        """A zero stddev propagates as zero."""
        results = [make_result("a", 1.0, stddev=0.0), make_result("b", 2.0, stddev=0.0)]
        entries = compute(results)
        assert entries is not None
        self.assertEqual(entries[1].relative_stddev, 0.0)


class TestRatioStddev(unittest.TestCase):
    """Tests for ratio_stddev."""

    def test_none_when_unknown(self) -> None:
        """Either stddev missing gives None."""
        self.assertIsNone(ratio_stddev(2.0, 2.0, None, 1.0, 0.1))
        self.assertIsNone(ratio_stddev(2.0, 2.0, 0.1, 1.0, None))

    def test_quadrature(self) -> None:
        """Relative errors add in quadrature."""
        # 3-4-5 triangle: relative errors 0.03 and 0.04 combine to 0.05.
        self.assertAlmostEqual(ratio_stddev(2.0, 2.0, 0.06, 1.0, 0.04), 0.1)
