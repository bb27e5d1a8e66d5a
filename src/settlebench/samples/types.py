"""Sample record model for benchmark observations."""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

LatencyMs = Annotated[int, Field(ge=0)]


class Metric(StrEnum):
    """Latency metrics recorded for every sample."""

    FACILITATION = "facilitation_ms"
    ROUNDTRIP = "roundtrip_ms"

    @property
    def label(self) -> str:
        """Human readable metric name."""
        match self:
            case Metric.FACILITATION:
                return "Facilitation Time"
            case Metric.ROUNDTRIP:
                return "Roundtrip Time"


class Sample(BaseModel):
    """
    One observed settlement request.

    A failed request carries no latencies and a non-empty error. A successful
    request always has a roundtrip time; its facilitation time may be missing
    when the upstream response omitted it.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: AwareDatetime
    facilitator: str = Field(min_length=1)
    network: str
    sample_num: int = Field(ge=1)
    facilitation_ms: LatencyMs | None = None
    roundtrip_ms: LatencyMs | None = None
    success: bool
    error: str = ""

    @model_validator(mode="after")
    def _check_outcome(self) -> Sample:
        if self.success:
            if self.roundtrip_ms is None:
                raise ValueError("successful sample must have roundtrip_ms")
            if self.error:
                raise ValueError("successful sample must not carry an error")
        else:
            if self.facilitation_ms is not None or self.roundtrip_ms is not None:
                raise ValueError("failed sample must not carry latencies")
            if not self.error:
                raise ValueError("failed sample must carry an error message")
        return self

    def value(self, metric: Metric) -> int | None:
        """Return the latency recorded for a metric, or None if absent."""
        match metric:
            case Metric.FACILITATION:
                return self.facilitation_ms
            case Metric.ROUNDTRIP:
                return self.roundtrip_ms
