"""
Interval scoring engine for the 90 % confidence-interval challenge.

A forecaster states an interval ``[low, high]`` they believe holds 90 %
of their commutes, plus a confidence in 5..10 that the interval really
is a good 90 % interval.  The score is the sum of five non-negative
penalty terms (lower is better):

1. **Precision**: (low − p5)² + (high − p95)², where p5 / p95 are the
   order statistics at ⌊0.05·N⌋ and ⌊0.95·N⌋.  Measures estimation
   skill, not how variable the commute is.
2. **Miss**: squared distance to the nearer bound for every observation
   outside the interval.  The smallest 10 % of misses are dropped and
   the rest are averaged over N.
3. **Overcoverage**: above 95 % coverage,
   ((coverage − 90) / 10)² · width · 0.5.
4. **Calibration**: with ideal = max(5, 10 − |outside − 10| / 10),
   ((confidence − ideal) / 5)² · width · 2.0.  Claiming 10 with a
   coverage deviation over 1 % or a tail imbalance over 2 % instead
   costs ((deviation + imbalance) / 5)² · width · 3.0.
5. **Balance**: ((|below − 5| + |above − 5|) / 10)² · width · 1.0.

The engine does not check ``low < high`` or the confidence range;
callers (see ``score_challenge``) validate first.

The checksum lets a submitted score be verified externally: the four
rounded values are joined with ``_`` and folded into a 32-bit rolling
hash (×31 + character code).
"""

import math
from typing import Iterable, Optional, Sequence

import numpy as np

from .constants import (
    TARGET_COVERAGE, TARGET_TAIL, MISS_TRIM_FRACTION, OVERCOVERAGE_MARGIN,
    OVERCOVERAGE_WEIGHT, CALIBRATION_WEIGHT, CERTAINTY_WEIGHT, BALANCE_WEIGHT,
    CERTAINTY_MAX_DEVIATION, CERTAINTY_MAX_IMBALANCE,
    CONFIDENCE_MIN, CONFIDENCE_MAX,
    PRECISION_LOW_QUANTILE, PRECISION_HIGH_QUANTILE,
    CHECKSUM_LENGTH, MIN_CHALLENGE_RECORDS,
)
from .data_model import ChallengeResult, CoverageStats, ScoreBreakdown
from .descriptive import sorted_values


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +∞ (2.5 → 3, −2.5 → −2)."""
    return int(math.floor(value + 0.5))


def coverage_stats(low: float, high: float, data: Iterable[float]) -> CoverageStats:
    """Count observations below, within (inclusive) and above ``[low, high]``."""
    x = np.asarray(list(data), dtype=float)
    below = int(np.count_nonzero(x < low))
    above = int(np.count_nonzero(x > high))
    return CoverageStats(below=below, within=len(x) - below - above, above=above)


def _calibration_penalty(confidence, coverage_deviation, tail_imbalance, width):
    if confidence == CONFIDENCE_MAX and (
        coverage_deviation > CERTAINTY_MAX_DEVIATION
        or tail_imbalance > CERTAINTY_MAX_IMBALANCE
    ):
        total_deviation = coverage_deviation + tail_imbalance
        return (total_deviation / 5) ** 2 * width * CERTAINTY_WEIGHT

    ideal_confidence = max(float(CONFIDENCE_MIN), CONFIDENCE_MAX - coverage_deviation / 10)
    mismatch = abs(confidence - ideal_confidence)
    return (mismatch / 5) ** 2 * width * CALIBRATION_WEIGHT


def score_breakdown(
    low: float,
    high: float,
    data: Iterable[float],
    confidence: float,
) -> ScoreBreakdown:
    """Compute each penalty term for the forecast ``[low, high]``.

    Raises
    ------
    ValueError
        If *data* is empty (no empirical percentiles exist).
    """
    x = sorted_values(data)
    n = len(x)
    if n == 0:
        raise ValueError("score_breakdown requires at least one observation")

    width = high - low

    p5 = float(x[math.floor(n * PRECISION_LOW_QUANTILE)])
    p95 = float(x[math.floor(n * PRECISION_HIGH_QUANTILE)])
    precision = (low - p5) ** 2 + (high - p95) ** 2

    below_mask = x < low
    above_mask = x > high
    misses = np.concatenate([(low - x[below_mask]) ** 2, (x[above_mask] - high) ** 2])
    misses.sort()
    cutoff = math.floor(len(misses) * MISS_TRIM_FRACTION)
    trimmed = misses[cutoff:]
    miss = float(np.sum(trimmed)) / n if len(trimmed) > 0 else 0.0

    n_below = int(np.count_nonzero(below_mask))
    n_above = int(np.count_nonzero(above_mask))
    coverage = (n - n_below - n_above) / n * 100
    percent_below = n_below / n * 100
    percent_above = n_above / n * 100

    overcoverage = 0.0
    if coverage > TARGET_COVERAGE + OVERCOVERAGE_MARGIN:
        excess = coverage - TARGET_COVERAGE
        overcoverage = (excess / 10) ** 2 * width * OVERCOVERAGE_WEIGHT

    percent_outside = percent_below + percent_above
    tail_imbalance = abs(percent_below - TARGET_TAIL) + abs(percent_above - TARGET_TAIL)
    coverage_deviation = abs(percent_outside - (100 - TARGET_COVERAGE))

    calibration = _calibration_penalty(confidence, coverage_deviation, tail_imbalance, width)
    balance = (tail_imbalance / 10) ** 2 * width * BALANCE_WEIGHT

    return ScoreBreakdown(
        precision=precision,
        miss=miss,
        overcoverage=overcoverage,
        calibration=calibration,
        balance=balance,
        coverage=coverage,
        percent_below=percent_below,
        percent_above=percent_above,
    )


def compute_score(low: float, high: float, data: Iterable[float], confidence: float) -> int:
    """Score a forecast interval against the observations (lower is better)."""
    return score_breakdown(low, high, data, confidence).score


# ── Checksum ─────────────────────────────────────────────────────────────

def _to_int32(value: int) -> int:
    return (value + 2 ** 31) % 2 ** 32 - 2 ** 31


def generate_checksum(low: float, high: float, score: float, confidence: float) -> str:
    """Eight-character uppercase hex checksum of the rounded inputs.

    Examples
    --------
    >>> generate_checksum(600, 1500, 42, 8) == generate_checksum(600.2, 1499.9, 42, 8)
    True
    """
    combined = "_".join(
        str(round_half_up(v)) for v in (low, high, score, confidence)
    )
    h = 0
    for ch in combined:
        h = _to_int32(h * 31 + ord(ch))
    hex_hash = format(abs(h), "X")
    return hex_hash.rjust(CHECKSUM_LENGTH, "0")[-CHECKSUM_LENGTH:]


def verify_checksum(
    low: float,
    high: float,
    score: float,
    confidence: float,
    checksum: str,
) -> bool:
    """True if *checksum* matches the inputs (case-insensitive)."""
    return generate_checksum(low, high, score, confidence) == checksum.upper()


# ── Challenge helper ─────────────────────────────────────────────────────

def score_challenge(
    low_minutes,
    high_minutes,
    durations: Sequence[float],
    confidence: int,
) -> Optional[ChallengeResult]:
    """Validate and score a forecast given in whole minutes.

    Returns ``None`` unless both bounds are whole numbers with
    ``0 < low < high``, the confidence is an integer in 5..10, and at
    least 20 durations (seconds) are available.
    """
    try:
        low = int(str(low_minutes).strip())
        high = int(str(high_minutes).strip())
    except ValueError:
        return None
    if low <= 0 or high <= low:
        return None
    if int(confidence) != confidence or not CONFIDENCE_MIN <= confidence <= CONFIDENCE_MAX:
        return None
    if len(durations) < MIN_CHALLENGE_RECORDS:
        return None

    low_seconds = low * 60
    high_seconds = high * 60
    score = compute_score(low_seconds, high_seconds, durations, confidence)
    checksum = generate_checksum(low_seconds, high_seconds, score, confidence)
    csv_row = f"{low},{high},{int(confidence)},{len(durations)},{score},{checksum}"

    return ChallengeResult(
        score=score,
        checksum=checksum,
        coverage=coverage_stats(low_seconds, high_seconds, durations),
        csv_row=csv_row,
    )
