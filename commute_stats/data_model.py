"""
Data model for Commute Stats.

Immutable dataclasses for every result the engine returns.  Results
are freshly computed on each call and never mutated afterwards.

"Not enough data" is modelled as ``None`` at the call site (functions
return ``Optional[...]``), never as a half-filled result object.
"""

import datetime
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class CommuteRecord:
    """One recorded commute.

    Parameters
    ----------
    id : int
        Record identifier from the source file.
    date : datetime.datetime
        Start of the commute (naive, local time).
    duration : float
        Duration in seconds.
    """
    id: int
    date: datetime.datetime
    duration: float


@dataclass(frozen=True)
class SummaryStatistics:
    """Basic descriptive statistics of a non-empty sample."""
    n: int
    min: float
    max: float
    mean: float
    median: float
    std_dev: float


@dataclass(frozen=True)
class ConfidenceInterval:
    """Two-sided empirical interval, ``low <= high``."""
    low: float
    high: float

    @property
    def width(self) -> float:
        return self.high - self.low


@dataclass(frozen=True)
class NormalityResult:
    """Shapiro-Wilk approximation result.

    ``p_value`` is a pseudo p-value interpolated from a critical-value
    table, continuous over [0, 1].
    """
    W: float
    p_value: float
    is_normal: bool


@dataclass(frozen=True)
class QQPoint:
    theoretical: float
    observed: float


@dataclass(frozen=True)
class QQRating:
    rating: str
    description: str
    color: str


@dataclass(frozen=True)
class TrendResult:
    """Mann-Kendall trend test result.

    Parameters
    ----------
    S : int
        Signed concordance statistic.
    tau : float
        Kendall's tau, in [-1, 1].
    z_score, p_value : float
        Continuity-corrected normal score and its two-tailed p-value.
    trend : str
        ``"increasing"``, ``"decreasing"`` or ``"no trend"``.
    significance : str
        ``"strong"``, ``"moderate"``, ``"weak"`` or ``"none"``.
    """
    S: int
    tau: float
    z_score: float
    p_value: float
    trend: str
    significance: str


@dataclass(frozen=True)
class PatternResult:
    """Wald-Wolfowitz runs test result (around the median)."""
    runs: int
    expected_runs: float
    z_score: float
    p_value: float
    pattern: str
    significance: str


@dataclass(frozen=True)
class CoverageStats:
    """Observation counts relative to an interval."""
    below: int
    within: int
    above: int

    @property
    def total(self) -> int:
        return self.below + self.within + self.above


@dataclass(frozen=True)
class ScoreBreakdown:
    """The five additive penalty terms of an interval score.

    ``coverage``, ``percent_below`` and ``percent_above`` are the
    percentages the terms were derived from.
    """
    precision: float
    miss: float
    overcoverage: float
    calibration: float
    balance: float
    coverage: float = 0.0
    percent_below: float = 0.0
    percent_above: float = 0.0

    @property
    def total(self) -> float:
        return (self.precision + self.miss + self.overcoverage
                + self.calibration + self.balance)

    @property
    def score(self) -> int:
        return int(math.floor(self.total + 0.5))


@dataclass(frozen=True)
class ChallengeResult:
    """A scored forecast, ready to be shared.

    ``csv_row`` is ``Low,High,Confidence,NumCommutes,Score,Checksum``
    with bounds in minutes.
    """
    score: int
    checksum: str
    coverage: CoverageStats
    csv_row: str


@dataclass(frozen=True)
class HistogramBin:
    """Duration bin in minutes, ``[start, end)``."""
    name: str
    start: float
    end: float
    count: int


@dataclass(frozen=True)
class HourlyBreakdown:
    """Average commute duration for one start hour."""
    hour: str
    average_minutes: float
    count: int


@dataclass(frozen=True)
class NiceTicks:
    domain: Tuple[float, float]
    ticks: List[float]


@dataclass(frozen=True)
class DurationAnalysis:
    """Everything the engine can say about one sample.

    Optional fields are ``None`` when the sample is too small or
    degenerate for that test.
    """
    summary: Optional[SummaryStatistics]
    interval: Optional[ConfidenceInterval]
    interval_rank: Optional[ConfidenceInterval]
    normality: Optional[NormalityResult]
    qq_points: List[QQPoint]
    qq_r_squared: float
    qq_rating: Optional[QQRating]
    trend: Optional[TrendResult]
    pattern: Optional[PatternResult]
    notes: List[str] = field(default_factory=list)
