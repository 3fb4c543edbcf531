"""
Tests for descriptive statistics, percentiles and confidence intervals.
"""

import numpy as np
import pytest

from commute_stats.descriptive import (
    get_min, get_max, get_mean, get_median, get_std_dev,
    percentile, percentile_nearest_rank,
    confidence_interval, confidence_interval_rank, summarize,
)


class TestBasicStatistics:
    """Min / max / mean / median / std dev with the 0.0 sentinel."""

    def test_min_max(self):
        assert get_min([5, 2, 8, 1, 9]) == 1
        assert get_max([5, 2, 8, 1, 9]) == 9
        assert get_min([42]) == 42
        assert get_max([42]) == 42

    def test_mean(self):
        assert get_mean([1, 2, 3, 4, 5]) == 3
        assert get_mean([10, 20, 30]) == 20
        assert get_mean([42]) == 42

    def test_median(self):
        assert get_median([1, 2, 3, 4, 5]) == 3
        assert get_median([1, 2, 3, 4]) == 2.5
        assert get_median([5, 1, 3]) == 3
        assert get_median([42]) == 42

    def test_std_dev_is_bessel_corrected(self):
        """[1..5]: variance 10/4 = 2.5."""
        assert get_std_dev([1, 2, 3, 4, 5]) == pytest.approx(1.5811, abs=1e-4)
        assert get_std_dev([42]) == 0

    @pytest.mark.parametrize("fn", [get_min, get_max, get_mean, get_median, get_std_dev])
    def test_empty_returns_zero(self, fn):
        assert fn([]) == 0

    def test_input_not_mutated(self):
        data = [3, 1, 2]
        get_median(data)
        percentile(data, 50)
        assert data == [3, 1, 2]

    def test_ordering_properties(self):
        """min <= median <= max and mean within [min, max]."""
        rng = np.random.default_rng(7)
        for size in (1, 2, 3, 10, 57):
            data = list(rng.integers(0, 5000, size=size))
            assert get_min(data) <= get_median(data) <= get_max(data)
            assert get_min(data) <= get_mean(data) <= get_max(data)


class TestPercentiles:

    def test_interpolated(self):
        data = list(range(1, 11))
        assert percentile(data, 0) == 1
        assert percentile(data, 50) == 5.5
        assert percentile(data, 100) == 10
        assert percentile(data, 25) == pytest.approx(3.25)
        assert percentile(data, 75) == pytest.approx(7.75)

    def test_extremes_match_min_and_max(self):
        rng = np.random.default_rng(3)
        for size in (1, 2, 9, 40):
            data = list(rng.uniform(100, 4000, size=size))
            assert percentile(data, 0) == min(data)
            assert percentile(data, 100) == max(data)

    def test_nearest_rank(self):
        data = list(range(1, 11))
        assert percentile_nearest_rank(data, 0) == 1      # clamped index
        assert percentile_nearest_rank(data, 5) == 1
        assert percentile_nearest_rank(data, 50) == 5
        assert percentile_nearest_rank(data, 51) == 6
        assert percentile_nearest_rank(data, 100) == 10

    def test_order_independent(self):
        assert percentile([9, 1, 5], 50) == percentile([1, 5, 9], 50) == 5

    def test_empty(self):
        assert percentile([], 50) == 0
        assert percentile_nearest_rank([], 50) == 0


class TestConfidenceInterval:

    def test_interpolated_scenario(self, ten_to_hundred):
        ci = confidence_interval(ten_to_hundred, 90)
        assert ci.low == pytest.approx(14.5)
        assert ci.high == pytest.approx(95.5)

    def test_nearest_rank_scenario(self, ten_to_hundred):
        ci = confidence_interval_rank(ten_to_hundred, 90)
        assert ci.low == 10
        assert ci.high == 100

    def test_default_level_is_90(self, ten_to_hundred):
        assert confidence_interval(ten_to_hundred) == confidence_interval(ten_to_hundred, 90)

    @pytest.mark.parametrize("n", [0, 1, 4])
    def test_unavailable_below_five(self, n):
        data = list(range(n))
        assert confidence_interval(data) is None
        assert confidence_interval_rank(data) is None

    @pytest.mark.parametrize("n", [5, 6, 23, 100])
    def test_defined_and_ordered(self, n):
        rng = np.random.default_rng(n)
        data = list(rng.exponential(600, size=n))
        for ci in (confidence_interval(data), confidence_interval_rank(data)):
            assert ci is not None
            assert ci.low <= ci.high
            assert ci.width >= 0


class TestSummarize:

    def test_empty_is_none(self):
        assert summarize([]) is None

    def test_fields(self):
        s = summarize([1, 2, 3, 4, 5])
        assert s.n == 5
        assert (s.min, s.max, s.mean, s.median) == (1, 5, 3, 3)
        assert s.std_dev == pytest.approx(1.5811, abs=1e-4)

    def test_genuine_zero_is_not_no_data(self):
        s = summarize([0.0])
        assert s is not None
        assert s.min == 0.0 and s.std_dev == 0.0
