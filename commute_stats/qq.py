"""
Q-Q diagnostic data against the standard normal distribution.

Each sorted observation is standardised (z-score, sample std dev) and
paired with the normal quantile at the Hazen plotting position
(i + 0.5) / N.  ``qq_r_squared`` measures how closely the points hug
the identity line, and ``qq_rating`` turns it into a readable band.
"""

from typing import List, Sequence

import numpy as np

from .constants import MIN_QQ_SAMPLES, QQ_RATING_BANDS, QQ_RATING_FLOOR
from .data_model import QQPoint, QQRating
from .descriptive import sorted_values
from .normal import normal_quantile


def qq_plot_data(data) -> List[QQPoint]:
    """Q-Q points ascending by rank; empty for fewer than three observations."""
    x = sorted_values(data)
    n = len(x)
    if n < MIN_QQ_SAMPLES:
        return []

    mean = float(np.mean(x))
    std = float(np.std(x, ddof=1))

    points = []
    for i, value in enumerate(x):
        theoretical = normal_quantile((i + 1 - 0.5) / n)
        observed = (float(value) - mean) / std if std > 0 else 0.0
        points.append(QQPoint(theoretical=theoretical, observed=observed))
    return points


def qq_r_squared(points: Sequence[QQPoint]) -> float:
    """Coefficient of determination of observed vs theoretical quantiles.

    R² = 1 − Σ(observed − theoretical)² / Σ(observed − mean(observed))²,
    clamped to [0, 1].  Returns 0.0 for fewer than three points and 1.0
    when the observed values have no spread.
    """
    if len(points) < MIN_QQ_SAMPLES:
        return 0.0

    observed = np.array([p.observed for p in points], dtype=float)
    theoretical = np.array([p.theoretical for p in points], dtype=float)

    sst = float(np.sum((observed - np.mean(observed)) ** 2))
    if sst == 0.0:
        return 1.0
    ssr = float(np.sum((observed - theoretical) ** 2))
    return min(1.0, max(0.0, 1.0 - ssr / sst))


def qq_rating(r2: float) -> QQRating:
    """Map an R² value onto Excellent / Very Good / Good / Moderate / Fair / Poor."""
    for lower, rating, description, color in QQ_RATING_BANDS:
        if r2 >= lower:
            return QQRating(rating=rating, description=description, color=color)
    return QQRating(*QQ_RATING_FLOOR)
