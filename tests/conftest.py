"""Shared fixtures for the Commute Stats test suite."""

import datetime

import numpy as np
import pytest

from commute_stats.data_model import CommuteRecord


@pytest.fixture
def ten_to_hundred():
    return [10, 20, 30, 40, 50, 60, 70, 80, 90, 100]


@pytest.fixture
def two_clusters():
    """25 values at 20 and 25 at 80: strongly bimodal."""
    return [20.0] * 25 + [80.0] * 25


@pytest.fixture
def normal_sample():
    """Deterministic normal-ish commute durations (seconds)."""
    rng = np.random.default_rng(42)
    return list(rng.normal(1800.0, 120.0, size=200))


@pytest.fixture
def minute_durations():
    """1..100 minutes, in seconds."""
    return [m * 60.0 for m in range(1, 101)]


@pytest.fixture
def records():
    base = datetime.datetime(2025, 11, 3, 8, 15)   # a Monday
    return [
        CommuteRecord(1, base, 1200.0),
        CommuteRecord(2, base.replace(minute=45), 1800.0),
        CommuteRecord(3, base.replace(hour=17, minute=0), 2400.0),
        CommuteRecord(4, base + datetime.timedelta(days=2), 1500.0),
        CommuteRecord(5, datetime.datetime(2025, 12, 1, 8, 0), 1600.0),
        CommuteRecord(6, datetime.datetime(2024, 6, 3, 9, 30), 2000.0),
    ]


@pytest.fixture
def write_csv(tmp_path):
    """Write *text* to a CSV file and return its path."""
    def _write(text, name="records.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
