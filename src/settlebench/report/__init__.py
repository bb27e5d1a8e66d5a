"""Comparative reports over benchmark samples."""

from .comparative import (
    BenchmarkReport,
    ComparativeReporter,
    FacilitatorSummary,
    MetricAnalysis,
    OverlapAnnotation,
    PairwiseComparison,
    RankingEntry,
    SkippedComparison,
    build_report,
)
from .config import ReportConfig
from .display import format_report_summary, print_report

__all__ = [
    "BenchmarkReport",
    "ComparativeReporter",
    "FacilitatorSummary",
    "MetricAnalysis",
    "OverlapAnnotation",
    "PairwiseComparison",
    "RankingEntry",
    "ReportConfig",
    "SkippedComparison",
    "build_report",
    "format_report_summary",
    "print_report",
]
