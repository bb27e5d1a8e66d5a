"""Sample size planning for two-group latency comparisons."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from settlebench.errors import InvalidInputError

Z_ALPHA = 1.96  # 95% confidence, two-sided
Z_BETA = 0.84  # 80% power


@dataclass(frozen=True)
class SampleSizeRecommendation:
    """Required samples per group to detect a given mean difference."""

    min_detectable_diff: float
    samples_per_group: int
    total_samples: int
    estimated_cost: float | None = None

    @property
    def degenerate(self) -> bool:
        """True when the plan is zero because no variance was observed."""
        return self.samples_per_group == 0


def required_sample_size(std_dev: float, min_detectable_diff: float) -> int:
    """
    Per-group sample count for 95% confidence and 80% power.

    ``n = ceil(2 * (z_alpha + z_beta)^2 * std^2 / diff^2)``. A zero standard
    deviation yields 0, which only means no variance was observed.

    Raises:
        InvalidInputError: If std_dev is negative or non-finite, or
            min_detectable_diff is not a positive finite number
    """
    if not math.isfinite(std_dev) or std_dev < 0:
        raise InvalidInputError(f"std_dev must be a non-negative number, got {std_dev}")
    if not math.isfinite(min_detectable_diff) or min_detectable_diff <= 0:
        raise InvalidInputError(
            f"min_detectable_diff must be positive, got {min_detectable_diff}"
        )

    n = 2 * (Z_ALPHA + Z_BETA) ** 2 * std_dev**2 / min_detectable_diff**2
    return math.ceil(n)


def plan_sample_sizes(
    std_dev: float,
    differences: Iterable[float],
    groups: int = 1,
    price_per_request: float | None = None,
) -> list[SampleSizeRecommendation]:
    """
    Build a sample size table for several detectable differences.

    Args:
        std_dev: Observed standard deviation (usually pooled across groups)
        differences: Candidate minimum detectable differences
        groups: Number of groups that will each need the samples
        price_per_request: Optional cost of one request, for cost estimates

    Returns:
        One recommendation per difference, in the given order
    """
    plan: list[SampleSizeRecommendation] = []
    for diff in differences:
        n = required_sample_size(std_dev, diff)
        total = n * groups
        plan.append(
            SampleSizeRecommendation(
                min_detectable_diff=diff,
                samples_per_group=n,
                total_samples=total,
                estimated_cost=None if price_per_request is None else total * price_per_request,
            )
        )
    return plan
