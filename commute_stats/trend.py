"""
Mann-Kendall monotonic trend test.

Observations are taken in the order supplied (chronological for commute
records).  Pairs are compared row by row: O(N²) time, O(N) memory; for
very long histories call this off the UI thread.
"""

import math
from typing import Iterable, Optional

import numpy as np

from .constants import (
    ALPHA, MIN_TREND_SAMPLES,
    TREND_INCREASING, TREND_DECREASING, TREND_NONE,
)
from .data_model import TrendResult
from .normal import classify_significance, two_tailed_p_value


def mann_kendall_s(y: np.ndarray) -> int:
    """S = Σ_{i<j} sign(y[j] − y[i]), one row of pairs at a time."""
    n = len(y)
    return int(sum(np.sign(y[i + 1:] - y[i]).sum() for i in range(n - 1)))


def mann_kendall(data: Iterable[float]) -> Optional[TrendResult]:
    """Detect a monotonic trend in a sequence of observations.

    Parameters
    ----------
    data : iterable of float
        Observations in time order.  At least ten are required.

    Returns
    -------
    TrendResult or None
        ``trend`` is ``"increasing"`` / ``"decreasing"`` only when the
        two-tailed p-value is below 0.05; otherwise ``"no trend"``.
    """
    y = np.asarray(list(data), dtype=float)
    n = len(y)
    if n < MIN_TREND_SAMPLES:
        return None

    S = mann_kendall_s(y)
    tau = 2 * S / (n * (n - 1))
    var_s = n * (n - 1) * (2 * n + 5) / 18
    sd = math.sqrt(var_s)

    # Continuity correction
    if S > 1:
        z = (S - 1) / sd
    elif S < -1:
        z = (S + 1) / sd
    else:
        z = S / sd

    p_value = two_tailed_p_value(z)

    if p_value < ALPHA:
        trend = TREND_INCREASING if S > 0 else TREND_DECREASING
    else:
        trend = TREND_NONE

    return TrendResult(
        S=S, tau=tau, z_score=z, p_value=p_value,
        trend=trend, significance=classify_significance(p_value),
    )
