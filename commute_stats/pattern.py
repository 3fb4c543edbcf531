"""
Runs test for randomness around the median.

Each observation is labelled "above" (x > median) or "below"
(x <= median) and the number of maximal runs of equal labels is
compared with its expectation under randomness.  Too few runs means
good and bad days cluster together; too many means they alternate.
"""

import math
from typing import Iterable, Optional

import numpy as np

from .constants import (
    ALPHA, MIN_PATTERN_SAMPLES,
    PATTERN_RANDOM, PATTERN_CLUSTERED, PATTERN_OSCILLATING,
)
from .data_model import PatternResult
from .descriptive import get_median
from .normal import classify_significance, two_tailed_p_value


def count_runs(labels: np.ndarray) -> int:
    """Number of maximal blocks of identical consecutive labels."""
    if len(labels) == 0:
        return 0
    return int(np.count_nonzero(labels[1:] != labels[:-1])) + 1


def runs_test(data: Iterable[float]) -> Optional[PatternResult]:
    """Wald-Wolfowitz runs test with continuity correction.

    Returns ``None`` for fewer than ten observations or when every
    value falls on one side of the median (e.g. all values equal).
    """
    y = np.asarray(list(data), dtype=float)
    n = len(y)
    if n < MIN_PATTERN_SAMPLES:
        return None

    median = get_median(y)
    above = y > median
    n1 = int(np.count_nonzero(above))
    n2 = n - n1
    if n1 == 0 or n2 == 0:
        return None

    runs = count_runs(above)
    expected = 2 * n1 * n2 / (n1 + n2) + 1
    variance = ((2 * n1 * n2 * (2 * n1 * n2 - n1 - n2))
                / ((n1 + n2) ** 2 * (n1 + n2 - 1)))
    sd = math.sqrt(variance)

    if runs > expected:
        correction = -0.5
    elif runs < expected:
        correction = 0.5
    else:
        correction = 0.0
    z = (runs - expected + correction) / sd if sd > 0 else 0.0
    p_value = two_tailed_p_value(z)

    if runs < expected and p_value < ALPHA:
        pattern = PATTERN_CLUSTERED
    elif runs > expected and p_value < ALPHA:
        pattern = PATTERN_OSCILLATING
    else:
        pattern = PATTERN_RANDOM

    return PatternResult(
        runs=runs, expected_runs=expected, z_score=z, p_value=p_value,
        pattern=pattern, significance=classify_significance(p_value),
    )
