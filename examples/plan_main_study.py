"""Size a main study from pilot benchmark data.

Runs the facilitation time analysis on a small pilot (e.g. 10 samples per
facilitator) and prints how many samples each facilitator needs to detect a
range of differences, with the cost at $0.10 per request.

Usage:
    python examples/plan_main_study.py benchmark-pilot-2026-01-28.csv
"""

import sys

from settlebench import Metric, ReportConfig, build_report, read_samples


def main():
    if len(sys.argv) != 2:
        print("Usage: python examples/plan_main_study.py <pilot-csv>")
        sys.exit(1)

    samples = read_samples(sys.argv[1]).samples
    config = ReportConfig(
        metrics=[Metric.FACILITATION],
        detectable_differences=[10, 25, 50, 100],
        price_per_request=0.10,
    )
    analysis = build_report(samples, config).analysis(Metric.FACILITATION)

    if not analysis.sample_size_plan:
        print("Not enough successful samples to estimate variance.")
        return

    print(f"Pooled std: {analysis.pooled.std:.1f}ms (n={analysis.pooled.count})")
    print("-" * 50)
    for rec in analysis.sample_size_plan:
        print(
            f"  {rec.min_detectable_diff:>5g}ms: {rec.samples_per_group:5d} samples/facilitator "
            f"(total cost: ${rec.estimated_cost:,.2f})"
        )
    if analysis.sample_size_plan[0].degenerate:
        print("Pilot showed no variance; collect more data before planning.")


if __name__ == "__main__":
    main()
