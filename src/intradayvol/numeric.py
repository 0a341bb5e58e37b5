"""Optional-value numeric helpers.

Every derived value in the package is either a float or ``None`` ("no
value"). These helpers filter undefined entries explicitly before handing
the remaining values to numpy, so no statistic ever relies on NaN
propagation.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import numpy as np


def is_missing(value: object) -> bool:
    """True for ``None`` and float NaN."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def clean_value(value: float | None) -> float | None:
    """Normalize NaN/inf to ``None`` and everything else to ``float``."""
    if value is None:
        return None
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def defined_values(values: Iterable[float | None]) -> np.ndarray:
    """Return the defined entries of ``values`` as a float array."""
    return np.array([v for v in values if not is_missing(v)], dtype=float)


def mean(values: Iterable[float | None]) -> float | None:
    arr = defined_values(values)
    if arr.size == 0:
        return None
    return float(arr.mean())


def total(values: Iterable[float | None]) -> float | None:
    """Sum of defined values; ``None`` when nothing is defined."""
    arr = defined_values(values)
    if arr.size == 0:
        return None
    return float(arr.sum())


def sample_std(values: Iterable[float | None]) -> float | None:
    """Sample (n-1) standard deviation; ``None`` below two defined values."""
    arr = defined_values(values)
    if arr.size < 2:
        return None
    return float(arr.std(ddof=1))


def skewness(values: Iterable[float | None]) -> float | None:
    """Fisher-Pearson coefficient of skewness ``g1 = m3 / m2**1.5``.

    ``m2`` and ``m3`` are population central moments (divisor ``n``), which
    matches ``scipy.stats.skew(bias=True)``. Returns ``None`` below three
    defined values or when the values have no spread.
    """
    arr = defined_values(values)
    if arr.size < 3 or np.ptp(arr) == 0.0:
        return None
    dev = arr - arr.mean()
    m2 = float(np.mean(dev ** 2))
    if m2 == 0.0:
        return None
    m3 = float(np.mean(dev ** 3))
    return m3 / m2 ** 1.5


def quartiles(values: Iterable[float | None]) -> tuple[float, float] | None:
    """25th and 75th percentiles of the defined values (linear interpolation)."""
    arr = defined_values(values)
    if arr.size == 0:
        return None
    q1, q3 = np.percentile(arr, [25.0, 75.0])
    return float(q1), float(q3)
