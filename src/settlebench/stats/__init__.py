"""Statistical analysis utilities for benchmark results."""

from .descriptive import StatisticsSummary, compute_statistics
from .sample_size import SampleSizeRecommendation, plan_sample_sizes, required_sample_size
from .significance import SIGNIFICANCE_LEVEL, ComparisonResult, normal_cdf, welch_t_test

__all__ = [
    "SIGNIFICANCE_LEVEL",
    "ComparisonResult",
    "SampleSizeRecommendation",
    "StatisticsSummary",
    "compute_statistics",
    "normal_cdf",
    "plan_sample_sizes",
    "required_sample_size",
    "welch_t_test",
]
