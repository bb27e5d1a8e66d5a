"""Analyze a facilitator benchmark CSV.

Prints descriptive statistics, pairwise Welch's t-tests, the ranking with
confidence interval overlap notes, and sample size recommendations.

Usage:
    python examples/analyze_benchmark.py benchmark-main-concurrent-n50.csv
"""

import logging
import sys

from settlebench import build_report, print_report, read_samples


def main():
    if len(sys.argv) != 2:
        print("Usage: python examples/analyze_benchmark.py <csv-file>")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    loaded = read_samples(sys.argv[1], strict=False)
    for record in loaded.quarantined:
        print(f"Skipped line {record.line_number}: {record.reason}")

    report = build_report(loaded.samples)
    print_report(report)


if __name__ == "__main__":
    main()
