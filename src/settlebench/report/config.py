"""Configuration for comparative reports."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from settlebench.samples.types import Metric

DEFAULT_DETECTABLE_DIFFERENCES = [25.0, 50.0, 75.0, 100.0, 150.0, 200.0]


class ReportConfig(BaseModel):
    """Options for building a comparative report."""

    metrics: list[Metric] = Field(
        default_factory=lambda: [Metric.FACILITATION, Metric.ROUNDTRIP],
        min_length=1,
        description="Metrics that get ranking and pairwise comparisons",
    )
    detectable_differences: list[float] = Field(
        default_factory=lambda: list(DEFAULT_DETECTABLE_DIFFERENCES),
        description="Candidate minimum detectable differences (ms) for sample size planning",
    )
    alpha: float = Field(
        default=0.05,
        gt=0,
        lt=1,
        description="Significance level used when marking pairwise comparisons",
    )
    price_per_request: float | None = Field(
        default=0.10,
        ge=0,
        description="Cost of one request, used to estimate study cost (None to disable)",
    )

    @field_validator("detectable_differences")
    @classmethod
    def _positive_differences(cls, v: list[float]) -> list[float]:
        if any(d <= 0 for d in v):
            raise ValueError("detectable differences must be positive")
        return v

    @field_validator("metrics")
    @classmethod
    def _unique_metrics(cls, v: list[Metric]) -> list[Metric]:
        if len(set(v)) != len(v):
            raise ValueError("metrics must not repeat")
        return v
