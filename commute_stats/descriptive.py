"""
Descriptive statistics, percentiles and empirical confidence intervals.

The public getters keep a ``0.0`` sentinel for empty input so a UI can
always render something.  Internally each statistic is computed as an
``Optional[float]`` (``None`` = no data) and only converted to the
sentinel at the public boundary, so composed code never mistakes "no
data" for a genuine zero.
"""

import math
from typing import Iterable, Optional

import numpy as np

from .constants import DEFAULT_CONFIDENCE_LEVEL, MIN_CI_SAMPLES
from .data_model import ConfidenceInterval, SummaryStatistics


def sorted_values(data: Iterable[float]) -> np.ndarray:
    """Return a sorted float64 copy of *data*; the input is never mutated."""
    return np.sort(np.asarray(list(data), dtype=float))


# ── Optional-valued core ─────────────────────────────────────────────────

def _min_or_none(vals: np.ndarray) -> Optional[float]:
    if len(vals) == 0:
        return None
    return float(np.min(vals))


def _max_or_none(vals: np.ndarray) -> Optional[float]:
    if len(vals) == 0:
        return None
    return float(np.max(vals))


def _mean_or_none(vals: np.ndarray) -> Optional[float]:
    if len(vals) == 0:
        return None
    return float(np.sum(vals)) / len(vals)


def _median_or_none(sorted_vals: np.ndarray) -> Optional[float]:
    n = len(sorted_vals)
    if n == 0:
        return None
    mid = n // 2
    if n % 2 == 0:
        return (float(sorted_vals[mid - 1]) + float(sorted_vals[mid])) / 2
    return float(sorted_vals[mid])


def _std_dev_or_none(vals: np.ndarray) -> Optional[float]:
    if len(vals) < 2:
        return None
    return float(np.std(vals, ddof=1))


def _percentile_sorted(sorted_vals: np.ndarray, p: float) -> Optional[float]:
    n = len(sorted_vals)
    if n == 0:
        return None
    index = (p / 100) * (n - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    if lower == upper:
        return float(sorted_vals[lower])
    weight = index - lower
    return float(sorted_vals[lower]) * (1 - weight) + float(sorted_vals[upper]) * weight


def _percentile_rank_sorted(sorted_vals: np.ndarray, p: float) -> Optional[float]:
    n = len(sorted_vals)
    if n == 0:
        return None
    index = math.ceil((p / 100) * n) - 1
    index = min(max(index, 0), n - 1)
    return float(sorted_vals[index])


def _or_zero(value: Optional[float]) -> float:
    return 0.0 if value is None else value


# ── Public API (0.0 sentinel for empty input) ────────────────────────────

def get_min(data: Iterable[float]) -> float:
    return _or_zero(_min_or_none(np.asarray(list(data), dtype=float)))


def get_max(data: Iterable[float]) -> float:
    return _or_zero(_max_or_none(np.asarray(list(data), dtype=float)))


def get_mean(data: Iterable[float]) -> float:
    return _or_zero(_mean_or_none(np.asarray(list(data), dtype=float)))


def get_median(data: Iterable[float]) -> float:
    return _or_zero(_median_or_none(sorted_values(data)))


def get_std_dev(data: Iterable[float]) -> float:
    """Sample standard deviation (Bessel-corrected); 0.0 for N < 2."""
    return _or_zero(_std_dev_or_none(np.asarray(list(data), dtype=float)))


def percentile(data: Iterable[float], p: float) -> float:
    """Linearly interpolated percentile at fractional rank (p/100)·(N-1).

    Parameters
    ----------
    data : iterable of float
        Observations, any order.
    p : float
        Percentile in [0, 100].

    Returns
    -------
    float
        ``percentile(data, 0)`` is the minimum, ``percentile(data, 100)``
        the maximum.  0.0 for empty input.
    """
    return _or_zero(_percentile_sorted(sorted_values(data), p))


def percentile_nearest_rank(data: Iterable[float], p: float) -> float:
    """Nearest-rank percentile: order statistic ⌈(p/100)·N⌉, 1-based."""
    return _or_zero(_percentile_rank_sorted(sorted_values(data), p))


def _interval(data, level, pick) -> Optional[ConfidenceInterval]:
    vals = sorted_values(data)
    if len(vals) < MIN_CI_SAMPLES:
        return None
    tail = (100 - level) / 2
    return ConfidenceInterval(low=pick(vals, tail), high=pick(vals, 100 - tail))


def confidence_interval(
    data: Iterable[float],
    level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> Optional[ConfidenceInterval]:
    """Empirical two-sided interval from interpolated percentiles.

    Returns ``None`` when fewer than five observations are available.
    """
    return _interval(data, level, _percentile_sorted)


def confidence_interval_rank(
    data: Iterable[float],
    level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> Optional[ConfidenceInterval]:
    """Empirical two-sided interval from nearest-rank percentiles.

    Both bounds are always observed values.  ``None`` below N = 5.
    """
    return _interval(data, level, _percentile_rank_sorted)


def summarize(data: Iterable[float]) -> Optional[SummaryStatistics]:
    """Min, max, mean, median and sample std dev; ``None`` for empty input."""
    vals = sorted_values(data)
    if len(vals) == 0:
        return None
    return SummaryStatistics(
        n=len(vals),
        min=_min_or_none(vals),
        max=_max_or_none(vals),
        mean=_mean_or_none(vals),
        median=_median_or_none(vals),
        std_dev=_or_zero(_std_dev_or_none(vals)),
    )
