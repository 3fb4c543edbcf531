"""
CSV parser for commute records.

Loads the record export layout (``ID, Date, Time, Duration (s)``) into a
list of ``CommuteRecord``.  Handles:

- Auto-detected delimiters (tab → semicolon → comma)
- European locale decimal-comma parsing
- UTF-8 BOM markers, blank lines and ``#`` comments
- An optional header row
- ISO, US and European date layouts

Rows that cannot be parsed are skipped with a warning; a file with no
usable rows is an error.
"""

import csv
import datetime
import math
import os
import warnings
from typing import List, Optional

from .constants import (
    COL_ID, COL_DATE, COL_TIME, COL_DURATION, CSV_HEADERS,
    DATE_FORMATS, TIME_FORMATS,
)
from .data_model import CommuteRecord


# ── Locale-safe float parsing ────────────────────────────────────────────

def _locale_float(text: str) -> float:
    """Parse a numeric string that may use comma as decimal separator.

    Handles:
    - Standard period decimals: ``"3.14"``
    - European comma decimals: ``"3,14"``
    - Thousand separators: ``"1,234.56"`` / ``"1.234,56"``

    Raises ``ValueError`` for non-numeric or non-finite strings.
    """
    s = text.strip()
    if not s:
        raise ValueError("empty string")
    # If both '.' and ',' are present, the last one is the decimal
    if ',' in s and '.' in s:
        if s.rfind(',') > s.rfind('.'):
            s = s.replace('.', '').replace(',', '.')
        else:
            s = s.replace(',', '')
    elif ',' in s:
        s = s.replace(',', '.')
    result = float(s)
    if not math.isfinite(result):
        raise ValueError(f"non-finite value: {text.strip()!r}")
    return result


# ── Delimiter auto-detection ─────────────────────────────────────────────

def _detect_delimiter(sample_line: str) -> str:
    """Detect CSV delimiter from a sample line.

    Priority: tab → semicolon → comma.
    """
    if '\t' in sample_line:
        return '\t'
    if ';' in sample_line:
        return ';'
    return ','


def _split_line(line: str, delimiter: str) -> List[str]:
    rows = list(csv.reader([line], delimiter=delimiter))
    if rows:
        return [t.strip() for t in rows[0]]
    return []


# ── Date / time parsing ──────────────────────────────────────────────────

def _parse_date(text: str) -> datetime.date:
    for fmt in DATE_FORMATS:
        try:
            return datetime.datetime.strptime(text.strip(), fmt).date()
        except ValueError:
            continue
    raise ValueError(f"unrecognised date {text.strip()!r}")


def _parse_time(text: str) -> datetime.time:
    if not text.strip():
        return datetime.time(0, 0)
    for fmt in TIME_FORMATS:
        try:
            return datetime.datetime.strptime(text.strip(), fmt).time()
        except ValueError:
            continue
    raise ValueError(f"unrecognised time {text.strip()!r}")


def _is_header(tokens: List[str]) -> bool:
    if len(tokens) <= COL_DURATION:
        return False
    try:
        _locale_float(tokens[COL_DURATION])
    except ValueError:
        return True
    return False


def _parse_row(tokens: List[str]) -> CommuteRecord:
    duration = _locale_float(tokens[COL_DURATION])
    if duration < 0:
        raise ValueError(f"negative duration {duration}")
    return CommuteRecord(
        id=int(_locale_float(tokens[COL_ID])),
        date=datetime.datetime.combine(
            _parse_date(tokens[COL_DATE]), _parse_time(tokens[COL_TIME]),
        ),
        duration=duration,
    )


# ── Public loader ────────────────────────────────────────────────────────

def load_commute_csv(filepath: str) -> List[CommuteRecord]:
    """Load commute records from *filepath*, ordered by date.

    Parameters
    ----------
    filepath : str
        Path to a CSV file with columns ``ID, Date, Time, Duration (s)``.

    Returns
    -------
    list of CommuteRecord

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If no valid data rows are found.
    """
    if not os.path.isfile(filepath):
        raise FileNotFoundError(f"Commute CSV not found: {filepath}")
    name = os.path.basename(filepath)

    raw_lines: List[str] = []
    with open(filepath, 'r', encoding='utf-8-sig') as fh:
        for line in fh:
            stripped = line.rstrip('\n\r')
            if stripped.strip() == '' or stripped.strip().startswith('#'):
                continue
            raw_lines.append(stripped)

    if not raw_lines:
        raise ValueError(f"CSV file '{name}' is empty.")

    delimiter = _detect_delimiter(raw_lines[0])
    records: List[CommuteRecord] = []
    bad_lines: List[str] = []
    start = 0

    first = _split_line(raw_lines[0], delimiter)
    if _is_header(first):
        start = 1

    for line_idx, raw_line in enumerate(raw_lines[start:], start=start + 1):
        tokens = _split_line(raw_line, delimiter)
        if len(tokens) <= COL_DURATION:
            warnings.warn(
                f"Line {line_idx} in '{name}' has only {len(tokens)} columns "
                f"(expected {len(CSV_HEADERS)}); skipping.",
                stacklevel=2,
            )
            continue
        try:
            records.append(_parse_row(tokens))
        except ValueError as exc:
            bad_lines.append(f"line {line_idx}: {exc}")

    if bad_lines:
        detail = "; ".join(bad_lines[:10])
        if len(bad_lines) > 10:
            detail += f" ... and {len(bad_lines) - 10} more"
        warnings.warn(
            f"Unparseable rows in '{name}': {detail}. These rows were skipped.",
            stacklevel=2,
        )

    if not records:
        raise ValueError(f"No valid data rows found in '{name}'.")

    records.sort(key=lambda r: r.date)
    return records


def durations_of(records: Optional[List[CommuteRecord]]) -> List[float]:
    """Durations in seconds, in record order."""
    return [r.duration for r in records or []]
