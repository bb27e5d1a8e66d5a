"""Tests for sample records and CSV I/O."""

from datetime import UTC, datetime

import pytest
from factories import START, make_failures, make_samples
from pydantic import ValidationError

from settlebench.errors import RecordParseError
from settlebench.samples import (
    CSV_HEADER,
    Metric,
    Sample,
    dumps_samples,
    escape_error,
    format_record,
    loads_samples,
    parse_record,
    read_samples,
    write_samples,
)


class TestSample:
    """Tests for the Sample model invariants."""

    def test_success_without_facilitation(self):
        """Test a success may omit facilitation time."""
        sample = Sample(
            timestamp=START,
            facilitator="PayAI",
            network="base",
            sample_num=1,
            roundtrip_ms=900,
            success=True,
        )
        assert sample.value(Metric.FACILITATION) is None
        assert sample.value(Metric.ROUNDTRIP) == 900

    def test_success_requires_roundtrip(self):
        """Test a success without roundtrip time is rejected."""
        with pytest.raises(ValidationError):
            Sample(timestamp=START, facilitator="A", network="base", sample_num=1, success=True)

    def test_failure_rejects_latencies(self):
        """Test a failure carrying latencies is rejected."""
        with pytest.raises(ValidationError):
            Sample(
                timestamp=START,
                facilitator="A",
                network="base",
                sample_num=1,
                roundtrip_ms=10,
                success=False,
                error="boom",
            )

    def test_failure_requires_error(self):
        """Test a failure without an error message is rejected."""
        with pytest.raises(ValidationError):
            Sample(timestamp=START, facilitator="A", network="base", sample_num=1, success=False)

    def test_rejects_negative_latency(self):
        """Test latencies must be non-negative."""
        with pytest.raises(ValidationError):
            Sample(
                timestamp=START,
                facilitator="A",
                network="base",
                sample_num=1,
                roundtrip_ms=-5,
                success=True,
            )

    def test_rejects_zero_sample_num(self):
        """Test sample numbers start at 1."""
        with pytest.raises(ValidationError):
            Sample(
                timestamp=START,
                facilitator="A",
                network="base",
                sample_num=0,
                roundtrip_ms=5,
                success=True,
            )

    def test_rejects_naive_timestamp(self):
        """Test timestamps must carry a timezone."""
        with pytest.raises(ValidationError):
            Sample(
                timestamp=datetime(2026, 1, 28, 12, 0),
                facilitator="A",
                network="base",
                sample_num=1,
                roundtrip_ms=5,
                success=True,
            )


class TestFormatRecord:
    """Tests for writing single records."""

    def test_success_row(self):
        """Test a successful sample is written with millisecond timestamp."""
        sample = make_samples("FareSide", [661])[0]
        assert format_record(sample) == "2026-01-28T12:00:00.000Z,FareSide,base,1,661,811,true,"

    def test_failure_row(self):
        """Test a failed sample has empty latencies and escaped error."""
        sample = make_failures("Coinbase", 1, error="fetch failed, timeout")[0]
        assert format_record(sample) == (
            "2026-01-28T12:00:00.000Z,Coinbase,base,1,,,false,fetch failed; timeout"
        )

    def test_escape_error(self):
        """Test commas and line breaks are substituted."""
        assert escape_error("a,b\nc") == "a;b c"

    def test_rejects_separator_in_facilitator(self):
        """Test names containing the separator cannot be written."""
        sample = make_samples("Fare,Side", [661])[0]
        with pytest.raises(ValueError):
            format_record(sample)

    @pytest.mark.parametrize("name", ["Fare\rSide", "Fare\nSide"])
    def test_rejects_line_break_in_facilitator(self, name):
        """Test names containing a record terminator cannot be written."""
        sample = make_samples(name, [661])[0]
        with pytest.raises(ValueError):
            format_record(sample)

    def test_timestamp_milliseconds(self):
        """Test whole-millisecond timestamps are written like the driver writes them."""
        sample = make_samples("A", [100])[0].model_copy(
            update={"timestamp": datetime(2026, 1, 28, 12, 34, 56, 789000, tzinfo=UTC)}
        )
        assert format_record(sample).startswith("2026-01-28T12:34:56.789Z,")

    def test_timestamp_microseconds_kept(self):
        """Test sub-millisecond precision is not truncated."""
        sample = make_samples("A", [100])[0].model_copy(
            update={"timestamp": datetime(2026, 1, 28, 12, 34, 56, 789123, tzinfo=UTC)}
        )
        line = format_record(sample)
        assert line.startswith("2026-01-28T12:34:56.789123Z,")
        assert parse_record(line).timestamp == sample.timestamp


class TestParseRecord:
    """Tests for parsing single records."""

    def test_parse_driver_record(self):
        """Test a record as written by the benchmark driver."""
        sample = parse_record("2026-01-28T12:34:56.789Z,PayAI,base,3,,1200,true,")
        assert sample.timestamp == datetime(2026, 1, 28, 12, 34, 56, 789000, tzinfo=UTC)
        assert sample.facilitator == "PayAI"
        assert sample.sample_num == 3
        assert sample.facilitation_ms is None
        assert sample.roundtrip_ms == 1200
        assert sample.success is True
        assert sample.error == ""

    def test_parse_failure(self):
        """Test parsing a failed record."""
        sample = parse_record("2026-01-28T12:34:56.789Z,PayAI,base,3,,,false,HTTP 402")
        assert not sample.success
        assert sample.error == "HTTP 402"

    def test_wrong_column_count(self):
        """Test a short record reports its line number."""
        with pytest.raises(RecordParseError, match="expected 8 columns") as exc_info:
            parse_record("2026-01-28T12:00:00Z,A,base,1,100", line_number=7)
        assert exc_info.value.line_number == 7

    def test_non_numeric_latency(self):
        """Test a non-integer latency is rejected."""
        with pytest.raises(RecordParseError, match="facilitation_ms"):
            parse_record("2026-01-28T12:00:00Z,A,base,1,fast,100,true,")

    def test_bad_success_flag(self):
        """Test only literal true/false are accepted."""
        with pytest.raises(RecordParseError, match="success"):
            parse_record("2026-01-28T12:00:00Z,A,base,1,100,200,yes,")

    def test_invariant_violation(self):
        """Test a failed record with latencies is rejected."""
        with pytest.raises(RecordParseError):
            parse_record("2026-01-28T12:00:00Z,A,base,1,100,200,false,boom")

    def test_bad_timestamp(self):
        """Test an unparseable timestamp is rejected."""
        with pytest.raises(RecordParseError, match="timestamp"):
            parse_record("yesterday,A,base,1,100,200,true,")


class TestFileRoundTrip:
    """Tests for reading and writing whole files."""

    def test_round_trip(self, tmp_path):
        """Test every field survives a write and read."""
        samples = (
            make_samples("FareSide", [661, 640, None])
            + make_failures("Coinbase", 2, error="settle failed, retry later")
        )
        path = tmp_path / "bench.csv"
        write_samples(path, samples)

        loaded = read_samples(path)
        assert loaded.quarantined == []
        assert len(loaded.samples) == len(samples)
        for original, parsed in zip(samples, loaded.samples, strict=True):
            assert parsed.model_dump(exclude={"error"}) == original.model_dump(exclude={"error"})
            assert parsed.error == escape_error(original.error)

        assert loaded.samples[-1].error == "settle failed; retry later"

    def test_header_written(self):
        """Test an empty batch writes only the header."""
        text = dumps_samples([])
        assert text == CSV_HEADER + "\n"

    def test_header_mismatch(self):
        """Test a wrong header fails on line 1."""
        with pytest.raises(RecordParseError) as exc_info:
            loads_samples("time,who\n")
        assert exc_info.value.line_number == 1

    def test_empty_text(self):
        """Test empty text has no header."""
        with pytest.raises(RecordParseError):
            loads_samples("")

    def test_blank_lines_ignored(self):
        """Test blank lines between records are skipped."""
        text = CSV_HEADER + "\n2026-01-28T12:00:00Z,A,base,1,100,200,true,\n\n"
        assert len(loads_samples(text).samples) == 1

    def test_strict_raises_with_line_number(self):
        """Test strict parsing stops at the first bad record."""
        text = CSV_HEADER + "\n2026-01-28T12:00:00Z,A,base,1,100,200,true,\nbroken\n"
        with pytest.raises(RecordParseError) as exc_info:
            loads_samples(text)
        assert exc_info.value.line_number == 3

    @pytest.mark.parametrize("char", ["\u2028", "\u2029", "\x0c", "\x0b", "\x85", "\x1c", "\x1e"])
    def test_round_trip_unicode_line_breaks(self, char):
        """Test error text with non-newline line separators survives a round trip."""
        samples = make_failures("A", 1, error=f"upstream{char}reset")
        loaded = loads_samples(dumps_samples(samples))
        assert loaded.quarantined == []
        assert len(loaded.samples) == 1
        assert loaded.samples[0].error == f"upstream{char}reset"

    def test_crlf_line_endings(self):
        """Test files with Windows line endings parse."""
        text = CSV_HEADER + "\r\n2026-01-28T12:00:00Z,A,base,1,100,200,true,\r\n"
        samples = loads_samples(text).samples
        assert len(samples) == 1
        assert samples[0].error == ""

    def test_read_file_with_bom(self, tmp_path):
        """Test a file saved with a UTF-8 byte order mark is readable."""
        path = tmp_path / "bom.csv"
        path.write_text(dumps_samples(make_samples("A", [100, 120])), encoding="utf-8-sig")
        loaded = read_samples(path)
        assert [s.facilitation_ms for s in loaded.samples] == [100, 120]

    def test_lenient_quarantines(self):
        """Test lenient parsing keeps good records and quarantines bad ones."""
        text = (
            CSV_HEADER
            + "\nbroken\n"
            + "2026-01-28T12:00:00Z,A,base,1,100,200,true,\n"
            + "2026-01-28T12:00:03Z,A,base,2,abc,200,true,\n"
        )
        result = loads_samples(text, strict=False)
        assert len(result.samples) == 1
        assert [q.line_number for q in result.quarantined] == [2, 4]
        assert result.quarantined[0].line == "broken"
