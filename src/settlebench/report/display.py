"""Console rendering of comparative reports."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from settlebench.samples.types import Metric

from .comparative import BenchmarkReport, MetricAnalysis


def _print_descriptive(report: BenchmarkReport, console: Console) -> None:
    for metric in (Metric.FACILITATION, Metric.ROUNDTRIP):
        table = Table(title=f"{metric.label} (ms)")
        table.add_column("Facilitator", style="cyan")
        table.add_column("n", justify="right")
        table.add_column("Mean ± SE", justify="right")
        table.add_column("95% CI", justify="right")
        table.add_column("Median (IQR)", justify="right")
        table.add_column("Range", justify="right")
        table.add_column("Std", justify="right")
        table.add_column("CV", justify="right")

        for fs in report.facilitators:
            s = fs.stats(metric)
            if s.count == 0:
                table.add_row(fs.facilitator, "0", "[red]no data[/red]", "", "", "", "", "")
                continue
            table.add_row(
                fs.facilitator,
                str(s.count),
                f"{s.mean:.1f} ± {s.se:.1f}",
                f"[{s.ci95_lower:.1f}, {s.ci95_upper:.1f}]",
                f"{s.median:.1f} ({s.q1:.1f} - {s.q3:.1f})",
                f"{s.min:.0f} - {s.max:.0f}",
                f"{s.std:.1f}",
                f"{s.cv:.1f}%",
            )

        console.print(table)
        console.print()


def _print_analysis(analysis: MetricAnalysis, report: BenchmarkReport, console: Console) -> None:
    label = analysis.metric.label
    console.print(f"[bold cyan]{label}[/bold cyan]")

    if not analysis.comparisons_possible:
        console.print("  No comparisons possible")
    else:
        table = Table(title=f"Pairwise Comparisons (Welch's t-test, α = {report.config.alpha})")
        table.add_column("Pair", style="cyan")
        table.add_column("Mean diff (ms)", justify="right")
        table.add_column("t", justify="right")
        table.add_column("df", justify="right")
        table.add_column("p-value", justify="right")
        table.add_column("Conclusion")

        for c in analysis.comparisons:
            table.add_row(
                f"{c.facilitator_a} vs {c.facilitator_b}",
                f"{c.result.mean_difference:.1f}",
                f"{c.result.t_statistic:.3f}",
                f"{c.result.degrees_of_freedom:.1f}",
                f"{c.result.p_value:.4f}",
                f"[green]{c.conclusion}[/green]" if c.significant else c.conclusion,
            )
        console.print(table)

    for skipped in analysis.skipped:
        console.print(
            f"  [yellow]Skipped {skipped.facilitator_a} vs {skipped.facilitator_b}:[/yellow] "
            f"{skipped.reason}"
        )
    for name in analysis.no_data:
        console.print(f"  [red]{name}: no data[/red]")

    if analysis.ranking:
        console.print()
        console.print(f"Ranking by mean {label.lower()} (fastest first):")
        for entry in analysis.ranking:
            console.print(
                f"  {entry.rank}. {entry.facilitator}: {entry.mean:.1f}ms "
                f"(95% CI: [{entry.ci95_lower:.0f}, {entry.ci95_upper:.0f}])"
            )
        for o in analysis.overlaps:
            console.print(f"  {o.faster} and {o.slower}: {o.message}")

    if analysis.sample_size_plan:
        console.print()
        pooled = analysis.pooled
        console.print(
            f"Pooled: mean {pooled.mean:.1f}ms, std {pooled.std:.1f}ms, CV {pooled.cv:.1f}%"
        )
        table = Table(title="Sample Size Recommendations (95% confidence, 80% power)")
        table.add_column("Detectable diff (ms)", justify="right")
        table.add_column("Samples / facilitator", justify="right")
        table.add_column("Total requests", justify="right")
        table.add_column("Est. cost", justify="right")

        for rec in analysis.sample_size_plan:
            cost = "" if rec.estimated_cost is None else f"${rec.estimated_cost:,.2f}"
            table.add_row(
                f"{rec.min_detectable_diff:g}",
                str(rec.samples_per_group),
                str(rec.total_samples),
                cost,
            )
        console.print(table)

    console.print()


def print_report(
    report: BenchmarkReport,
    console: Console | None = None,
) -> None:
    """
    Print a comparative report to console with Rich formatting.

    Args:
        report: Report to display
        console: Rich console (creates new one if not provided)
    """
    if console is None:
        console = Console()

    console.print()
    console.print("[bold cyan]Benchmark Analysis[/bold cyan]")
    console.print(f"  Total records: {report.total_records:,}")
    console.print(f"  Successful: {report.successful:,}")
    console.print(f"  Failed: {report.failed:,}")
    console.print()

    _print_descriptive(report, console)

    for analysis in report.analyses:
        _print_analysis(analysis, report, console)


def format_report_summary(report: BenchmarkReport) -> str:
    """
    Format a report as a brief one-line summary.

    Args:
        report: Comparative report

    Returns:
        Summary string like "90 records (88 ok), 3 facilitators, fastest: A (661.2 ms)"
    """
    parts = [
        f"{report.total_records:,} records ({report.successful:,} ok)",
        f"{len(report.facilitators)} facilitators",
    ]

    if report.analyses and report.analyses[0].fastest is not None:
        fastest = report.analyses[0].fastest
        parts.append(f"fastest: {fastest.facilitator} ({fastest.mean:.1f} ms)")

    return ", ".join(parts)
