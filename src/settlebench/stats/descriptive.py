"""Descriptive statistics for latency samples."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

Z_95 = 1.96


@dataclass(frozen=True)
class StatisticsSummary:
    """
    Summary statistics for one group of latency values.

    An empty input produces a summary with every field zero, so callers should
    check ``count`` before trusting the other fields.
    """

    count: int
    mean: float
    std: float
    median: float
    min: float
    max: float
    q1: float
    q3: float
    iqr: float
    cv: float
    se: float
    ci95_lower: float
    ci95_upper: float

    @property
    def confidence_interval_95(self) -> tuple[float, float]:
        """95% confidence interval for the mean as (lower, upper)."""
        return (self.ci95_lower, self.ci95_upper)

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @classmethod
    def empty(cls) -> StatisticsSummary:
        """Sentinel summary for a group without values."""
        return cls(
            count=0,
            mean=0.0,
            std=0.0,
            median=0.0,
            min=0.0,
            max=0.0,
            q1=0.0,
            q3=0.0,
            iqr=0.0,
            cv=0.0,
            se=0.0,
            ci95_lower=0.0,
            ci95_upper=0.0,
        )


def sample_variance(arr: np.ndarray) -> float:
    """Sample variance with Bessel's correction; 0 for fewer than 2 values."""
    if arr.size < 2:
        return 0.0
    return float(np.var(arr, ddof=1))


def compute_statistics(values: Sequence[int | float]) -> StatisticsSummary:
    """
    Reduce a sequence of latency values to summary statistics.

    Quartiles use the nearest-rank method on the ascending sorted values
    (index ``floor(n * 0.25)`` and ``floor(n * 0.75)``, no interpolation).

    Args:
        values: Latency values, possibly empty

    Returns:
        StatisticsSummary for the values
    """
    n = len(values)
    if n == 0:
        return StatisticsSummary.empty()

    arr = np.asarray(values, dtype=float)
    ordered = np.sort(arr, kind="stable")

    mean = float(np.mean(arr))
    std = math.sqrt(sample_variance(arr))

    if n % 2 == 0:
        median = float((ordered[n // 2 - 1] + ordered[n // 2]) / 2)
    else:
        median = float(ordered[n // 2])

    q1 = float(ordered[math.floor(n * 0.25)])
    q3 = float(ordered[math.floor(n * 0.75)])

    cv = (std / mean) * 100 if mean > 0 else 0.0
    se = std / math.sqrt(n)

    return StatisticsSummary(
        count=n,
        mean=mean,
        std=std,
        median=median,
        min=float(ordered[0]),
        max=float(ordered[-1]),
        q1=q1,
        q3=q3,
        iqr=q3 - q1,
        cv=cv,
        se=se,
        ci95_lower=mean - Z_95 * se,
        ci95_upper=mean + Z_95 * se,
    )
