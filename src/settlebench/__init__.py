"""settlebench: latency analysis for payment facilitator benchmarks."""

from settlebench.errors import InvalidInputError, RecordParseError, SettlebenchError
from settlebench.report import (
    BenchmarkReport,
    ComparativeReporter,
    ReportConfig,
    build_report,
    format_report_summary,
    print_report,
)
from settlebench.samples import Metric, Sample, read_samples, write_samples
from settlebench.stats import (
    ComparisonResult,
    StatisticsSummary,
    compute_statistics,
    required_sample_size,
    welch_t_test,
)

__version__ = "0.1.0"

__all__ = [
    "BenchmarkReport",
    "ComparativeReporter",
    "ComparisonResult",
    "InvalidInputError",
    "Metric",
    "RecordParseError",
    "ReportConfig",
    "Sample",
    "SettlebenchError",
    "StatisticsSummary",
    "build_report",
    "compute_statistics",
    "format_report_summary",
    "print_report",
    "read_samples",
    "required_sample_size",
    "welch_t_test",
    "write_samples",
]
