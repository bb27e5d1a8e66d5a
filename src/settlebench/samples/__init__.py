"""Benchmark sample records and their CSV representation."""

from .csv_io import (
    CSV_HEADER,
    LoadResult,
    QuarantinedRecord,
    dumps_samples,
    escape_error,
    format_record,
    loads_samples,
    parse_record,
    read_samples,
    write_samples,
)
from .types import Metric, Sample

__all__ = [
    "CSV_HEADER",
    "LoadResult",
    "Metric",
    "QuarantinedRecord",
    "Sample",
    "dumps_samples",
    "escape_error",
    "format_record",
    "loads_samples",
    "parse_record",
    "read_samples",
    "write_samples",
]
