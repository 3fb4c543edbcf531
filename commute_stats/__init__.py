"""
Commute Stats v1.0.0

Statistical analysis engine for recorded commute durations.  Computes
descriptive statistics, empirical 90 % confidence intervals, a
Shapiro-Wilk normality approximation, Q-Q diagnostics, Mann-Kendall
trend and runs-test pattern detection, and scores forecast intervals
for the 90 % confidence-interval challenge.

All functions are pure: they take an unordered collection of durations
(seconds) and return fresh, immutable result objects.
"""

APP_NAME = "Commute Stats"
APP_VERSION = "1.0.0"
APP_DATE = "2026-10-19"
__version__ = APP_VERSION
