"""Reading and writing benchmark samples as flat CSV records.

The format is unquoted: one record per line, fields separated by commas.
Error messages are sanitized on write (commas become semicolons, line breaks
become spaces) so existing benchmark files stay readable by older tooling.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from settlebench.errors import RecordParseError

from .types import Sample

logger = logging.getLogger(__name__)

FIELDS = (
    "timestamp",
    "facilitator",
    "network",
    "sample_num",
    "facilitation_ms",
    "roundtrip_ms",
    "success",
    "error",
)
CSV_HEADER = ",".join(FIELDS)

SEPARATOR = ","
SEPARATOR_SUBSTITUTE = ";"


@dataclass
class QuarantinedRecord:
    """A record rejected during lenient parsing."""

    line_number: int
    line: str
    reason: str


@dataclass
class LoadResult:
    """Samples parsed from a file, plus any records that were rejected."""

    samples: list[Sample]
    quarantined: list[QuarantinedRecord] = field(default_factory=list)


def escape_error(message: str) -> str:
    """Make an error message safe for the unquoted record format."""
    cleaned = message.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
    return cleaned.replace(SEPARATOR, SEPARATOR_SUBSTITUTE)


def _format_timestamp(ts: datetime) -> str:
    # millisecond precision matches the benchmark driver output
    timespec = "milliseconds" if ts.microsecond % 1000 == 0 else "microseconds"
    return ts.isoformat(timespec=timespec).replace("+00:00", "Z")


def format_record(sample: Sample) -> str:
    """Format a sample as a single CSV line (without trailing newline)."""
    values = [
        _format_timestamp(sample.timestamp),
        sample.facilitator,
        sample.network,
        str(sample.sample_num),
        "" if sample.facilitation_ms is None else str(sample.facilitation_ms),
        "" if sample.roundtrip_ms is None else str(sample.roundtrip_ms),
        "true" if sample.success else "false",
        escape_error(sample.error),
    ]
    for name, value in zip(FIELDS[:3], values[:3], strict=True):
        if SEPARATOR in value or "\n" in value or "\r" in value:
            raise ValueError(f"{name} cannot contain separators or line breaks: {value!r}")
    return SEPARATOR.join(values)


def _parse_int(raw: str, name: str, line_number: int | None) -> int:
    try:
        return int(raw)
    except ValueError:
        raise RecordParseError(
            f"non-integer value {raw!r} in {name}", line_number
        ) from None


def _parse_optional_int(raw: str, name: str, line_number: int | None) -> int | None:
    if raw == "":
        return None
    return _parse_int(raw, name, line_number)


def _parse_bool(raw: str, line_number: int | None) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise RecordParseError(f"success must be 'true' or 'false', got {raw!r}", line_number)


def parse_record(line: str, line_number: int | None = None) -> Sample:
    """
    Parse a single CSV line into a Sample.

    Args:
        line: Record text, without trailing newline
        line_number: 1-based line number used in error messages

    Returns:
        The parsed sample

    Raises:
        RecordParseError: If the column count, a numeric field, the success
            flag, or the success/failure invariant is invalid
    """
    values = line.rstrip("\r\n").split(SEPARATOR)
    if len(values) != len(FIELDS):
        raise RecordParseError(
            f"expected {len(FIELDS)} columns, got {len(values)}", line_number
        )

    timestamp, facilitator, network, sample_num, facilitation, roundtrip, success, error = values

    try:
        return Sample(
            timestamp=timestamp,
            facilitator=facilitator,
            network=network,
            sample_num=_parse_int(sample_num, "sample_num", line_number),
            facilitation_ms=_parse_optional_int(facilitation, "facilitation_ms", line_number),
            roundtrip_ms=_parse_optional_int(roundtrip, "roundtrip_ms", line_number),
            success=_parse_bool(success, line_number),
            error=error,
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
            for err in e.errors()
        )
        raise RecordParseError(problems, line_number) from e


def loads_samples(text: str, strict: bool = True) -> LoadResult:
    """
    Parse CSV text (header included) into samples.

    Args:
        text: Full file contents
        strict: Raise on the first malformed record instead of quarantining it

    Returns:
        LoadResult with parsed samples and quarantined records
    """
    # only \n ends a record; error text may hold other Unicode line breaks
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if not lines or lines[0].strip() != CSV_HEADER:
        found = lines[0].strip() if lines else ""
        raise RecordParseError(f"unexpected header {found!r}", 1)

    result = LoadResult(samples=[])
    for line_number, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        try:
            result.samples.append(parse_record(line, line_number))
        except RecordParseError as e:
            if strict:
                raise
            logger.warning(f"Skipping malformed record: {e}")
            result.quarantined.append(
                QuarantinedRecord(line_number=line_number, line=line, reason=str(e))
            )

    return result


def dumps_samples(samples: Iterable[Sample]) -> str:
    """Serialize samples to CSV text with header and trailing newline."""
    lines = [CSV_HEADER]
    lines.extend(format_record(sample) for sample in samples)
    return "\n".join(lines) + "\n"


def read_samples(path: str | Path, strict: bool = True) -> LoadResult:
    """
    Load samples from a benchmark CSV file.

    Args:
        path: File to read
        strict: Raise on the first malformed record instead of quarantining it

    Returns:
        LoadResult with parsed samples and quarantined records
    """
    path = Path(path)
    result = loads_samples(path.read_text(encoding="utf-8-sig"), strict=strict)
    logger.info(
        f"Loaded {len(result.samples)} samples from {path}"
        + (f" ({len(result.quarantined)} quarantined)" if result.quarantined else "")
    )
    return result


def write_samples(path: str | Path, samples: Iterable[Sample]) -> None:
    """Write samples to a benchmark CSV file, replacing any existing content."""
    Path(path).write_text(dumps_samples(samples), encoding="utf-8")
