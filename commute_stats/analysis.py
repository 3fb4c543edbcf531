"""
One-call analysis of a duration sample, plus a plain-text report.

``analyze_durations`` runs every test the engine offers and attaches
short human-readable notes (sample-size caveats, trend / pattern
findings) in the same spirit as a statistics tab's recommendation box.
``render_text_report`` and ``render_histogram`` lay results out for a
terminal.
"""

import math
from typing import Iterable, List, Optional, Sequence

from .constants import (
    DEFAULT_CONFIDENCE_LEVEL, HISTOGRAM_WIDTH, MIN_CI_SAMPLES, MIN_TREND_SAMPLES,
    PATTERN_CLUSTERED, PATTERN_OSCILLATING, TREND_NONE,
)
from .data_model import DurationAnalysis, HistogramBin
from .descriptive import confidence_interval, confidence_interval_rank, summarize
from .normality import shapiro_wilk
from .pattern import runs_test
from .qq import qq_plot_data, qq_r_squared, qq_rating
from .ticks import generate_nice_ticks
from .trend import mann_kendall

# Below this N the normality p-value is read from the N=20 table row
RELIABLE_NORMALITY_SAMPLES = 20


def format_duration(seconds: float) -> str:
    """``"12m 5s"``; ``"N/A"`` for negative or NaN input."""
    if seconds is None or math.isnan(seconds) or seconds < 0:
        return "N/A"
    return f"{int(seconds // 60)}m {int(seconds % 60)}s"


def format_clock(seconds: float) -> str:
    """``"HH:MM:SS"``; ``"N/A"`` for negative or NaN input."""
    if seconds is None or math.isnan(seconds) or seconds < 0:
        return "N/A"
    h = int(seconds // 3600)
    m = int((seconds % 3600) // 60)
    s = int(seconds % 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def _build_notes(n, normality, rating, trend, pattern) -> List[str]:
    notes: List[str] = []
    if n == 0:
        return ["No commutes recorded yet."]
    if n < MIN_CI_SAMPLES:
        notes.append(
            f"Only {n} commute(s) recorded; at least {MIN_CI_SAMPLES} are "
            f"needed for a confidence interval."
        )
    if normality is not None and n < RELIABLE_NORMALITY_SAMPLES:
        notes.append(
            f"Normality p-value is approximate for N < {RELIABLE_NORMALITY_SAMPLES}."
        )
    if normality is not None and not normality.is_normal:
        notes.append(
            "Durations are not normally distributed; prefer the "
            "percentile-based intervals over mean ± k·σ."
        )
    if rating is not None and normality is not None:
        notes.append(f"Q-Q fit: {rating.rating}. {rating.description}")
    if n < MIN_TREND_SAMPLES:
        notes.append(
            f"Trend and pattern tests need at least {MIN_TREND_SAMPLES} commutes."
        )
    if trend is not None and trend.trend != TREND_NONE:
        notes.append(
            f"Commute times are {trend.trend} over time "
            f"({trend.significance} evidence, p={trend.p_value:.3g})."
        )
    if pattern is not None and pattern.pattern == PATTERN_CLUSTERED:
        notes.append("Long and short commutes come in streaks (clustered).")
    elif pattern is not None and pattern.pattern == PATTERN_OSCILLATING:
        notes.append("Long and short commutes alternate more than chance allows.")
    return notes


def analyze_durations(
    values: Iterable[float],
    level: float = DEFAULT_CONFIDENCE_LEVEL,
) -> DurationAnalysis:
    """Run every analysis on *values* (seconds, chronological order)."""
    vals = list(values)
    n = len(vals)

    normality = shapiro_wilk(vals)
    points = qq_plot_data(vals)
    r2 = qq_r_squared(points)
    rating = qq_rating(r2) if points else None
    trend = mann_kendall(vals)
    pattern = runs_test(vals)

    return DurationAnalysis(
        summary=summarize(vals),
        interval=confidence_interval(vals, level),
        interval_rank=confidence_interval_rank(vals, level),
        normality=normality,
        qq_points=points,
        qq_r_squared=r2,
        qq_rating=rating,
        trend=trend,
        pattern=pattern,
        notes=_build_notes(n, normality, rating, trend, pattern),
    )


def _line(label: str, value: str) -> str:
    return f"  {label:<28}{value}"


def render_text_report(analysis: DurationAnalysis, title: Optional[str] = None) -> str:
    """Format *analysis* as a fixed-width text report."""
    out = [title or "Commute Statistics", "=" * 60]

    s = analysis.summary
    out.append("Summary")
    if s is None:
        out.append(_line("Total trips", "0"))
    else:
        out.append(_line("Total trips", str(s.n)))
        out.append(_line("Min duration", format_clock(s.min)))
        out.append(_line("Max duration", format_clock(s.max)))
        out.append(_line("Mean (average)", format_clock(s.mean)))
        out.append(_line("Median", format_clock(s.median)))
        out.append(_line("Std deviation", format_clock(s.std_dev)))

    out.append("")
    out.append("90% confidence interval")
    for label, ci in (("Interpolated", analysis.interval),
                      ("Nearest rank", analysis.interval_rank)):
        if ci is None:
            out.append(_line(label, "not enough data"))
        else:
            out.append(_line(label, f"{format_duration(ci.low)} - {format_duration(ci.high)}"))

    out.append("")
    out.append("Distribution")
    nr = analysis.normality
    if nr is None:
        out.append(_line("Shapiro-Wilk", "not enough data"))
    else:
        verdict = "normal" if nr.is_normal else "not normal"
        out.append(_line("Shapiro-Wilk", f"W={nr.W:.4f}  p={nr.p_value:.4f}  ({verdict})"))
    if analysis.qq_rating is None:
        out.append(_line("Q-Q R²", "not enough data"))
    else:
        out.append(_line("Q-Q R²", f"{analysis.qq_r_squared:.4f}  ({analysis.qq_rating.rating})"))

    out.append("")
    out.append("Time series")
    tr = analysis.trend
    if tr is None:
        out.append(_line("Mann-Kendall", "not enough data"))
    else:
        out.append(_line(
            "Mann-Kendall",
            f"S={tr.S}  tau={tr.tau:.3f}  p={tr.p_value:.4f}  "
            f"{tr.trend} ({tr.significance})",
        ))
    pr = analysis.pattern
    if pr is None:
        out.append(_line("Runs test", "not available"))
    else:
        out.append(_line(
            "Runs test",
            f"runs={pr.runs}  expected={pr.expected_runs:.2f}  p={pr.p_value:.4f}  "
            f"{pr.pattern} ({pr.significance})",
        ))

    if analysis.notes:
        out.append("")
        out.append("Notes")
        out.extend(f"  • {note}" for note in analysis.notes)

    return "\n".join(out)


def render_histogram(bins: Sequence[HistogramBin], width: int = HISTOGRAM_WIDTH) -> str:
    """Horizontal bar chart of *bins* with a count axis along the bottom.

    Bars are scaled so the top nice tick spans *width* characters.
    """
    if not bins:
        return "  no commutes"

    top = max(b.count for b in bins)
    axis = generate_nice_ticks(0, top, integer=True)
    scale = width / axis.domain[1]

    out = []
    for b in bins:
        bar = "#" * int(round(b.count * scale))
        out.append(f"  {b.name:>10} min |{bar} {b.count}")

    ruler = [" "] * (width + 8)
    for t in axis.ticks:
        label = f"{t:g}"
        pos = int(round(t * scale))
        ruler[pos:pos + len(label)] = label
    out.append(" " * 18 + "".join(ruler).rstrip())
    return "\n".join(out)
