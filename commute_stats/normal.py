"""
Standard-normal helpers shared by the hypothesis tests.

- ``normal_quantile``: Beasley-Springer-Moro rational approximation to
  the inverse normal CDF (absolute error ~1e-9 in the central region).
- ``erf``: Abramowitz & Stegun formula 7.1.26 (max error 1.5e-7).
- ``standard_normal_cdf`` / ``two_tailed_p_value`` built on ``erf``.

The coefficient tables live in ``constants``.  Downstream tests depend
on these exact approximations, so do not swap them for library calls.
"""

import math

from .constants import (
    BSM_A, BSM_B, BSM_C, BSM_D, BSM_P_LOW, BSM_P_HIGH,
    ERF_A, ERF_P, SIGNIFICANCE_BANDS, SIGNIFICANCE_NONE,
)


def _tail_quantile(q: float) -> float:
    c, d = BSM_C, BSM_D
    return ((((((c[0] * q + c[1]) * q + c[2]) * q + c[3]) * q + c[4]) * q + c[5])
            / ((((d[0] * q + d[1]) * q + d[2]) * q + d[3]) * q + 1))


def normal_quantile(p: float) -> float:
    """Approximate Φ⁻¹(p) for p in the open interval (0, 1).

    Examples
    --------
    >>> normal_quantile(0.5)
    0.0
    >>> round(normal_quantile(0.975), 4)
    1.96
    """
    if not 0.0 < p < 1.0:
        raise ValueError(f"normal_quantile requires 0 < p < 1, got {p}")

    if p < BSM_P_LOW:
        return _tail_quantile(math.sqrt(-2 * math.log(p)))
    if p <= BSM_P_HIGH:
        a, b = BSM_A, BSM_B
        q = p - 0.5
        r = q * q
        return ((((((a[0] * r + a[1]) * r + a[2]) * r + a[3]) * r + a[4]) * r + a[5]) * q
                / (((((b[0] * r + b[1]) * r + b[2]) * r + b[3]) * r + b[4]) * r + 1))
    return -_tail_quantile(math.sqrt(-2 * math.log(1 - p)))


def erf(x: float) -> float:
    """Error function, Abramowitz & Stegun 7.1.26."""
    a1, a2, a3, a4, a5 = ERF_A
    sign = 1.0 if x >= 0 else -1.0
    x = abs(x)
    t = 1.0 / (1.0 + ERF_P * x)
    y = 1.0 - (((((a5 * t + a4) * t) + a3) * t + a2) * t + a1) * t * math.exp(-x * x)
    return sign * y


def standard_normal_cdf(z: float) -> float:
    """Φ(z) = ½·(1 + erf(z/√2))."""
    return 0.5 * (1 + erf(z / math.sqrt(2)))


def two_tailed_p_value(z: float) -> float:
    return 2 * (1 - standard_normal_cdf(abs(z)))


def classify_significance(p_value: float) -> str:
    """Bucket a p-value: strong (<0.01), moderate (<0.05), weak (<0.10), none."""
    for bound, label in SIGNIFICANCE_BANDS:
        if p_value < bound:
            return label
    return SIGNIFICANCE_NONE
