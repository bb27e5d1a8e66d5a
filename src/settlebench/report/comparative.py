"""Comparative report: ranks facilitators and tests their differences."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from itertools import combinations

from pydantic import BaseModel, ConfigDict

from settlebench.errors import InvalidInputError
from settlebench.samples.types import Metric, Sample
from settlebench.stats import (
    ComparisonResult,
    SampleSizeRecommendation,
    StatisticsSummary,
    compute_statistics,
    plan_sample_sizes,
    welch_t_test,
)

from .config import ReportConfig

logger = logging.getLogger(__name__)

OVERLAP_MESSAGE = "CIs overlap: difference may not be practically significant"
DISTINCT_MESSAGE = "CIs distinct: ordering is well supported"


class _ReportModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class FacilitatorSummary(_ReportModel):
    """Descriptive statistics for one facilitator, both metrics."""

    facilitator: str
    total: int
    successful: int
    failed: int
    facilitation: StatisticsSummary
    roundtrip: StatisticsSummary

    @property
    def success_rate(self) -> float:
        return self.successful / self.total if self.total else 0.0

    def stats(self, metric: Metric) -> StatisticsSummary:
        match metric:
            case Metric.FACILITATION:
                return self.facilitation
            case Metric.ROUNDTRIP:
                return self.roundtrip

    def has_data(self, metric: Metric) -> bool:
        return self.stats(metric).count > 0


class PairwiseComparison(_ReportModel):
    """Welch's t-test between two facilitators (A minus B)."""

    facilitator_a: str
    facilitator_b: str
    mean_a: float
    mean_b: float
    result: ComparisonResult
    significant: bool

    @property
    def faster(self) -> str | None:
        """The faster facilitator when the difference is significant."""
        if not self.significant:
            return None
        return self.facilitator_a if self.result.mean_difference < 0 else self.facilitator_b

    @property
    def slower(self) -> str | None:
        if not self.significant:
            return None
        return self.facilitator_b if self.result.mean_difference < 0 else self.facilitator_a

    @property
    def conclusion(self) -> str:
        if self.significant:
            return f"{self.faster} is significantly faster than {self.slower}"
        return "No significant difference detected"


class SkippedComparison(_ReportModel):
    """A pair that could not be tested, with the reason."""

    facilitator_a: str
    facilitator_b: str
    reason: str


class RankingEntry(_ReportModel):
    rank: int
    facilitator: str
    count: int
    mean: float
    ci95_lower: float
    ci95_upper: float


class OverlapAnnotation(_ReportModel):
    """Confidence interval overlap between adjacent facilitators in a ranking."""

    faster: str
    slower: str
    overlap: bool

    @property
    def message(self) -> str:
        return OVERLAP_MESSAGE if self.overlap else DISTINCT_MESSAGE


class MetricAnalysis(_ReportModel):
    """Ranking, comparisons and sample size plan for one metric."""

    metric: Metric
    no_data: list[str]
    comparisons: list[PairwiseComparison]
    skipped: list[SkippedComparison]
    ranking: list[RankingEntry]
    overlaps: list[OverlapAnnotation]
    pooled: StatisticsSummary
    sample_size_plan: list[SampleSizeRecommendation]

    @property
    def comparisons_possible(self) -> bool:
        return bool(self.comparisons)

    @property
    def fastest(self) -> RankingEntry | None:
        return self.ranking[0] if self.ranking else None


class BenchmarkReport(_ReportModel):
    """Complete analysis of one batch of samples."""

    total_records: int
    successful: int
    failed: int
    facilitators: list[FacilitatorSummary]
    analyses: list[MetricAnalysis]
    config: ReportConfig

    def facilitator(self, name: str) -> FacilitatorSummary:
        for summary in self.facilitators:
            if summary.facilitator == name:
                return summary
        raise KeyError(name)

    def analysis(self, metric: Metric) -> MetricAnalysis:
        for analysis in self.analyses:
            if analysis.metric == metric:
                return analysis
        raise KeyError(metric)


def _metric_values(group: Sequence[Sample], metric: Metric) -> list[int]:
    """Latencies of successful samples that recorded the metric."""
    values = []
    for sample in group:
        if not sample.success:
            continue
        value = sample.value(metric)
        if value is not None:
            values.append(value)
    return values


class ComparativeReporter:
    """
    Builds a comparative report over a finished batch of samples.

    Facilitators are kept in order of first appearance in the batch, counting
    failed samples too, so a facilitator that never succeeded still shows up
    as having no data. That order is also the tie-break for equal means.
    """

    def __init__(self, config: ReportConfig | None = None) -> None:
        self.config = config or ReportConfig()

    def _group(self, samples: Sequence[Sample]) -> dict[str, list[Sample]]:
        groups: dict[str, list[Sample]] = {}
        for sample in samples:
            groups.setdefault(sample.facilitator, []).append(sample)
        return groups

    def _summarize(self, facilitator: str, group: Sequence[Sample]) -> FacilitatorSummary:
        successful = sum(1 for s in group if s.success)
        return FacilitatorSummary(
            facilitator=facilitator,
            total=len(group),
            successful=successful,
            failed=len(group) - successful,
            facilitation=compute_statistics(_metric_values(group, Metric.FACILITATION)),
            roundtrip=compute_statistics(_metric_values(group, Metric.ROUNDTRIP)),
        )

    def _compare_pairs(
        self,
        values: dict[str, list[int]],
        summaries: dict[str, StatisticsSummary],
    ) -> tuple[list[PairwiseComparison], list[SkippedComparison]]:
        comparisons: list[PairwiseComparison] = []
        skipped: list[SkippedComparison] = []

        for name_a, name_b in combinations(values, 2):
            too_small = [
                f"{name} has {len(values[name])} value(s)"
                for name in (name_a, name_b)
                if len(values[name]) < 2
            ]
            reason = "; ".join(too_small) or None
            if reason is None:
                try:
                    result = welch_t_test(values[name_a], values[name_b])
                except InvalidInputError as e:
                    reason = str(e)

            if reason is not None:
                logger.warning(f"Skipping comparison {name_a} vs {name_b}: {reason}")
                skipped.append(
                    SkippedComparison(facilitator_a=name_a, facilitator_b=name_b, reason=reason)
                )
                continue

            logger.debug(
                f"{name_a} vs {name_b}: t={result.t_statistic:.3f} "
                f"df={result.degrees_of_freedom:.1f} p={result.p_value:.4f}"
            )
            comparisons.append(
                PairwiseComparison(
                    facilitator_a=name_a,
                    facilitator_b=name_b,
                    mean_a=summaries[name_a].mean,
                    mean_b=summaries[name_b].mean,
                    result=result,
                    significant=result.p_value < self.config.alpha,
                )
            )

        return comparisons, skipped

    def _rank(self, summaries: dict[str, StatisticsSummary]) -> list[RankingEntry]:
        with_data = [(name, s) for name, s in summaries.items() if s.count > 0]
        # sorted() is stable, so equal means keep group order
        ordered = sorted(with_data, key=lambda item: item[1].mean)
        return [
            RankingEntry(
                rank=i + 1,
                facilitator=name,
                count=s.count,
                mean=s.mean,
                ci95_lower=s.ci95_lower,
                ci95_upper=s.ci95_upper,
            )
            for i, (name, s) in enumerate(ordered)
        ]

    def _overlaps(self, ranking: list[RankingEntry]) -> list[OverlapAnnotation]:
        return [
            OverlapAnnotation(
                faster=current.facilitator,
                slower=following.facilitator,
                overlap=current.ci95_upper > following.ci95_lower,
            )
            for current, following in zip(ranking, ranking[1:])
        ]

    def _plan(self, pooled: StatisticsSummary, groups: int) -> list[SampleSizeRecommendation]:
        # groups counts only facilitators with data for the metric
        if pooled.count < 2:
            return []
        plan = plan_sample_sizes(
            pooled.std,
            self.config.detectable_differences,
            groups=groups,
            price_per_request=self.config.price_per_request,
        )
        if pooled.std == 0:
            logger.warning("Pooled standard deviation is zero; sample size plan is degenerate")
        return plan

    def analyze_metric(
        self,
        groups: dict[str, list[Sample]],
        metric: Metric,
    ) -> MetricAnalysis:
        """
        Rank facilitators and compare them on a single metric.

        Args:
            groups: Samples per facilitator, in report order
            metric: Metric to analyze

        Returns:
            MetricAnalysis for the metric
        """
        values = {name: _metric_values(group, metric) for name, group in groups.items()}
        summaries = {name: compute_statistics(v) for name, v in values.items()}

        no_data = [name for name, s in summaries.items() if s.count == 0]
        for name in no_data:
            logger.warning(f"{name}: no successful samples with {metric.value}")

        comparisons, skipped = self._compare_pairs(values, summaries)
        ranking = self._rank(summaries)
        pooled = compute_statistics([v for group in values.values() for v in group])

        return MetricAnalysis(
            metric=metric,
            no_data=no_data,
            comparisons=comparisons,
            skipped=skipped,
            ranking=ranking,
            overlaps=self._overlaps(ranking),
            pooled=pooled,
            sample_size_plan=self._plan(pooled, groups=len(ranking)),
        )

    def run(self, samples: Sequence[Sample]) -> BenchmarkReport:
        """
        Analyze a complete batch of samples.

        Args:
            samples: Every sample of the benchmark run, failed ones included

        Returns:
            BenchmarkReport with per-facilitator statistics and one
            MetricAnalysis per configured metric
        """
        logger.info(f"Analyzing {len(samples)} samples")
        groups = self._group(samples)
        successful = sum(1 for s in samples if s.success)

        report = BenchmarkReport(
            total_records=len(samples),
            successful=successful,
            failed=len(samples) - successful,
            facilitators=[self._summarize(name, group) for name, group in groups.items()],
            analyses=[self.analyze_metric(groups, metric) for metric in self.config.metrics],
            config=self.config,
        )
        logger.info(
            f"Analysis complete: {len(groups)} facilitators, "
            f"{successful}/{len(samples)} successful samples"
        )
        return report


def build_report(
    samples: Sequence[Sample],
    config: ReportConfig | None = None,
) -> BenchmarkReport:
    """
    Build a comparative report from a batch of samples.

    This is the main entry point for analyzing benchmark results.
    """
    return ComparativeReporter(config).run(samples)
