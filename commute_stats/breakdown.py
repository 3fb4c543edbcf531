"""
Aggregations of commute records for display.

- ``histogram_bins``: duration counts per fixed-width minute bin.
- ``hourly_breakdown``: mean duration per start hour of day.
- ``period_total`` / ``available_periods``: total travel time per day,
  week (keyed by its Monday), month or year.

These produce plain data; drawing them is the caller's business.
"""

import datetime
import math
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

from .constants import DEFAULT_BIN_SIZE_MINUTES
from .data_model import CommuteRecord, HistogramBin, HourlyBreakdown

PERIODS = ("day", "week", "month", "year", "total")


def histogram_bins(
    durations: Iterable[float],
    bin_size_minutes: float = DEFAULT_BIN_SIZE_MINUTES,
) -> List[HistogramBin]:
    """Bin durations (seconds) into ``[k·size, (k+1)·size)`` minute bins.

    Bins run from 0 up to the bin holding the longest duration; empty
    bins in between are included so the x-axis is continuous.
    """
    if bin_size_minutes <= 0:
        raise ValueError(f"bin_size_minutes must be positive, got {bin_size_minutes}")

    minutes = [d / 60 for d in durations]
    if not minutes:
        return []

    counts: Dict[int, int] = {}
    for m in minutes:
        k = math.floor(m / bin_size_minutes)
        counts[k] = counts.get(k, 0) + 1

    bins = []
    for k in range(max(counts) + 1):
        start = k * bin_size_minutes
        end = start + bin_size_minutes
        bins.append(HistogramBin(
            name=f"{start:g}-{end:g}",
            start=start,
            end=end,
            count=counts.get(k, 0),
        ))
    return bins


def hourly_breakdown(records: Iterable[CommuteRecord]) -> List[HourlyBreakdown]:
    """Average duration in minutes for each start hour that has records."""
    totals: Dict[int, List[float]] = {}
    for rec in records:
        totals.setdefault(rec.date.hour, []).append(rec.duration)

    result = []
    for hour in sorted(totals):
        durations = totals[hour]
        result.append(HourlyBreakdown(
            hour=f"{hour:02d}:00",
            average_minutes=sum(durations) / len(durations) / 60,
            count=len(durations),
        ))
    return result


# ── Period keys ──────────────────────────────────────────────────────────

def week_start(date: datetime.date) -> datetime.date:
    """Monday of the week containing *date*."""
    return date - datetime.timedelta(days=date.weekday())


def period_key(date: datetime.datetime, period: str) -> str:
    """``YYYY-MM-DD`` (day / week Monday), ``YYYY-MM`` or ``YYYY``."""
    if period == "day":
        return date.strftime("%Y-%m-%d")
    if period == "week":
        return week_start(date.date()).strftime("%Y-%m-%d")
    if period == "month":
        return date.strftime("%Y-%m")
    if period == "year":
        return date.strftime("%Y")
    raise ValueError(f"Unknown period {period!r}; expected one of {PERIODS[:-1]}")


def period_total(
    records: Sequence[CommuteRecord],
    period: str,
    value: Optional[str] = None,
) -> float:
    """Total duration (seconds) of the records falling in one period.

    ``period="total"`` ignores *value* and sums everything.  For other
    periods, a missing *value* selects nothing and returns 0.
    """
    if period == "total":
        return float(sum(r.duration for r in records))
    if period not in PERIODS:
        raise ValueError(f"Unknown period {period!r}; expected one of {PERIODS}")
    if not value:
        return 0.0
    return float(sum(r.duration for r in records if period_key(r.date, period) == value))


def available_periods(records: Iterable[CommuteRecord]) -> Dict[str, List[str]]:
    """Distinct day / week / month / year keys present, newest first."""
    keys: Dict[str, "OrderedDict[str, None]"] = {
        p: OrderedDict() for p in ("day", "week", "month", "year")
    }
    for rec in records:
        for p in keys:
            keys[p][period_key(rec.date, p)] = None
    return {p: sorted(k, reverse=True) for p, k in keys.items()}
