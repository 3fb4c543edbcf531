"""
Shapiro-Wilk normality test (correlation-based approximation).

W is computed from the sorted sample and the expected normal order
statistics mᵢ = Φ⁻¹((i + 1 − 0.375) / (N + 0.25)) (Blom scores):

    W = (Σ mᵢ·xᵢ)² / (Σ mᵢ² · Σ (xᵢ − x̄)²)

This is *not* Royston's algorithm; scores computed elsewhere depend on
this exact form, so results differ from
``scipy.stats.shapiro``.  The p-value is read off a critical-value
table (nearest tabulated N) by banded linear interpolation.
"""

import warnings
from typing import Iterable, Optional

import numpy as np

from .constants import (
    ALPHA, MIN_NORMALITY_SAMPLES, SHAPIRO_WILK_CRITICAL_VALUES,
    W_RANGE_TOLERANCE, CriticalValues,
)
from .data_model import NormalityResult
from .descriptive import sorted_values
from .normal import normal_quantile


def blom_scores(n: int) -> np.ndarray:
    """Expected normal order statistics for a sample of size *n*."""
    return np.array([normal_quantile((i + 1 - 0.375) / (n + 0.25)) for i in range(n)])


def nearest_critical_values(n: int) -> CriticalValues:
    """Table row whose sample size is closest to *n* (ties → smaller n)."""
    best = SHAPIRO_WILK_CRITICAL_VALUES[0]
    best_diff = abs(n - best.n)
    for row in SHAPIRO_WILK_CRITICAL_VALUES[1:]:
        diff = abs(n - row.n)
        if diff < best_diff:
            best, best_diff = row, diff
    return best


def shapiro_wilk_p_value(W: float, n: int) -> float:
    """Pseudo p-value for *W* at sample size *n*, continuous over [0, 1].

    Four bands, each mapped linearly onto its nominal p-range:

    ==================  ==============
    W                   p
    ==================  ==============
    [c10, 1]            [0.10, 1.00]
    [c05, c10)          [0.05, 0.10)
    [c01, c05)          [0.01, 0.05)
    [0, c01)            [0.00, 0.01)
    ==================  ==============
    """
    if W <= 0 or W > 1:
        return 0.0
    if W == 1:
        return 1.0

    cv = nearest_critical_values(n)
    if W >= cv.p10:
        return 0.10 + (W - cv.p10) / (1.0 - cv.p10) * 0.90
    if W >= cv.p05:
        return 0.05 + (W - cv.p05) / (cv.p10 - cv.p05) * 0.05
    if W >= cv.p01:
        return 0.01 + (W - cv.p01) / (cv.p05 - cv.p01) * 0.04
    return W / cv.p01 * 0.01


def shapiro_wilk(data: Iterable[float]) -> Optional[NormalityResult]:
    """Test whether *data* could come from a normal distribution.

    Parameters
    ----------
    data : iterable of float
        Observations, any order.  At least three are required; twenty
        or more give a usable p-value.

    Returns
    -------
    NormalityResult or None
        ``None`` for N < 3, or when the statistic drifts more than
        ``W_RANGE_TOLERANCE`` outside [0, 1] (a ``RuntimeWarning`` is
        emitted in that case).  All-identical data returns
        ``W = 1, p = 1``.
    """
    x = sorted_values(data)
    n = len(x)
    if n < MIN_NORMALITY_SAMPLES:
        return None

    mean = float(np.sum(x)) / n
    ssq = float(np.sum((x - mean) ** 2))
    if ssq == 0.0 or x[0] == x[-1]:
        return NormalityResult(W=1.0, p_value=1.0, is_normal=True)

    m = blom_scores(n)
    mtm = float(np.dot(m, m))
    numerator = float(np.dot(m, x)) ** 2 / mtm
    W = numerator / ssq

    W_clamped = min(1.0, max(0.0, W))
    if abs(W - W_clamped) > W_RANGE_TOLERANCE:
        warnings.warn(
            f"Shapiro-Wilk W statistic out of range: {W!r} (N={n}). "
            f"Normality result withheld.",
            RuntimeWarning,
            stacklevel=2,
        )
        return None

    p_value = shapiro_wilk_p_value(W_clamped, n)
    return NormalityResult(W=W_clamped, p_value=p_value, is_normal=p_value > ALPHA)
