"""
Constants for Commute Stats.

Centralises the numerical reference data (Beasley-Springer-Moro
coefficients, Shapiro-Wilk critical values), minimum sample sizes,
significance thresholds, scoring weights and named CSV column indices.

Everything here is process-wide immutable data: tuples, not lists.
"""

from typing import NamedTuple


# ── Named column indices for the commute-record CSV ──────────────────────
COL_ID = 0
COL_DATE = 1
COL_TIME = 2
COL_DURATION = 3

CSV_HEADERS = ("ID", "Date", "Time", "Duration (s)")

# Accepted date / time layouts, tried in order
DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d.%m.%Y", "%Y/%m/%d")
TIME_FORMATS = ("%H:%M:%S", "%H:%M")

# ── Minimum sample sizes ─────────────────────────────────────────────────
MIN_CI_SAMPLES = 5
MIN_NORMALITY_SAMPLES = 3
MIN_QQ_SAMPLES = 3
MIN_TREND_SAMPLES = 10
MIN_PATTERN_SAMPLES = 10
MIN_CHALLENGE_RECORDS = 20

# ── Defaults ─────────────────────────────────────────────────────────────
DEFAULT_CONFIDENCE_LEVEL = 90
DEFAULT_BIN_SIZE_MINUTES = 5
DEFAULT_TICK_COUNT = 5
NICE_STEPS = [1, 2, 5, 10]
HISTOGRAM_WIDTH = 40

# ── Significance ─────────────────────────────────────────────────────────
ALPHA = 0.05

# (upper p-value bound, label), checked in order
SIGNIFICANCE_BANDS = (
    (0.01, "strong"),
    (0.05, "moderate"),
    (0.10, "weak"),
)
SIGNIFICANCE_NONE = "none"

TREND_INCREASING = "increasing"
TREND_DECREASING = "decreasing"
TREND_NONE = "no trend"

PATTERN_RANDOM = "random"
PATTERN_CLUSTERED = "clustered"
PATTERN_OSCILLATING = "oscillating"

# ── Beasley-Springer-Moro inverse normal CDF coefficients ────────────────
BSM_A = (
    -3.969683028665376e+01,
    2.209460984245205e+02,
    -2.759285104469687e+02,
    1.383577518672690e+02,
    -3.066479806614716e+01,
    2.506628277459239e+00,
)
BSM_B = (
    -5.447609879822406e+01,
    1.615858368580409e+02,
    -1.556989798598866e+02,
    6.680131188771972e+01,
    -1.328068155288572e+01,
)
BSM_C = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e+00,
    -2.549732539343734e+00,
    4.374664141464968e+00,
    2.938163982698783e+00,
)
BSM_D = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e+00,
    3.754408661907416e+00,
)
BSM_P_LOW = 0.02425
BSM_P_HIGH = 1 - BSM_P_LOW

# ── Abramowitz & Stegun 7.1.26 erf coefficients ──────────────────────────
ERF_A = (0.254829592, -0.284496736, 1.421413741, -1.453152027, 1.061405429)
ERF_P = 0.3275911


# ── Shapiro-Wilk critical W values ───────────────────────────────────────
class CriticalValues(NamedTuple):
    """Critical W for one tabulated sample size."""
    n: int
    p01: float
    p05: float
    p10: float


# Sorted by n; looked up by nearest n (ties go to the smaller n)
SHAPIRO_WILK_CRITICAL_VALUES = (
    CriticalValues(20, 0.868, 0.905, 0.918),
    CriticalValues(25, 0.888, 0.918, 0.928),
    CriticalValues(30, 0.900, 0.927, 0.935),
    CriticalValues(35, 0.910, 0.934, 0.941),
    CriticalValues(40, 0.917, 0.940, 0.945),
    CriticalValues(50, 0.927, 0.947, 0.951),
    CriticalValues(60, 0.935, 0.952, 0.956),
    CriticalValues(70, 0.941, 0.956, 0.959),
    CriticalValues(80, 0.945, 0.959, 0.962),
    CriticalValues(90, 0.949, 0.962, 0.964),
    CriticalValues(100, 0.952, 0.964, 0.966),
    CriticalValues(110, 0.954, 0.966, 0.967),
    CriticalValues(120, 0.956, 0.967, 0.969),
    CriticalValues(130, 0.958, 0.968, 0.970),
    CriticalValues(140, 0.959, 0.969, 0.971),
    CriticalValues(150, 0.960, 0.970, 0.972),
    CriticalValues(160, 0.961, 0.971, 0.973),
    CriticalValues(170, 0.962, 0.972, 0.974),
    CriticalValues(180, 0.963, 0.973, 0.974),
    CriticalValues(190, 0.964, 0.973, 0.975),
    CriticalValues(200, 0.965, 0.974, 0.975),
    CriticalValues(210, 0.965, 0.974, 0.976),
    CriticalValues(220, 0.966, 0.975, 0.976),
    CriticalValues(230, 0.966, 0.975, 0.977),
    CriticalValues(240, 0.967, 0.976, 0.977),
    CriticalValues(250, 0.967, 0.976, 0.978),
)

# Pre-clamp W may drift this far outside [0, 1] before the result is rejected
W_RANGE_TOLERANCE = 0.01

# ── Q-Q R² rating bands: (lower bound, rating, description, colour) ──────
QQ_RATING_BANDS = (
    (0.99, "Excellent", "Data follows a normal distribution very closely.", "green"),
    (0.95, "Very Good", "Data is very close to normal with minor deviations.", "green"),
    (0.90, "Good", "Data is reasonably normal; small departures in the tails.", "yellow"),
    (0.80, "Moderate", "Noticeable departures from normality.", "yellow"),
    (0.70, "Fair", "Substantial departures from normality.", "orange"),
)
QQ_RATING_FLOOR = ("Poor", "Data does not follow a normal distribution.", "red")

# ── Interval scoring ─────────────────────────────────────────────────────
TARGET_COVERAGE = 90.0        # we always ask for a 90 % interval
TARGET_TAIL = 5.0             # percent expected in each tail
MISS_TRIM_FRACTION = 0.10     # smallest misses ignored
OVERCOVERAGE_MARGIN = 5.0     # penalty starts above TARGET_COVERAGE + margin
OVERCOVERAGE_WEIGHT = 0.5
CALIBRATION_WEIGHT = 2.0
CERTAINTY_WEIGHT = 3.0
BALANCE_WEIGHT = 1.0
CERTAINTY_MAX_DEVIATION = 1.0
CERTAINTY_MAX_IMBALANCE = 2.0
CONFIDENCE_MIN = 5
CONFIDENCE_MAX = 10
PRECISION_LOW_QUANTILE = 0.05
PRECISION_HIGH_QUANTILE = 0.95

CHECKSUM_LENGTH = 8
