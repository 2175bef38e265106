"""Merge several mochawesome reports into one."""

import copy
import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from ordino.report_tools.models.target_report import (
    TargetReport,
    TargetStats,
    TargetTest,
    parse_timestamp,
    percentage,
)
from ordino.report_tools.report_io import read_target_report

logger = logging.getLogger(__name__)

MERGED_FILENAME = "mochawesome-merged.json"

SUMMED_COUNTERS = (
    "suites",
    "tests",
    "passes",
    "pending",
    "failures",
    "tests_registered",
    "duration",
    "other",
    "skipped",
)


def merge(reports: Sequence[TargetReport]) -> TargetReport:
    """Combine reports into one, summing counters and concatenating results.

    Args:
        reports: Reports to merge, in output order

    Returns:
        Merged report; meta comes from the first report

    Raises:
        ValueError: If no reports are given

    """
    if not reports:
        raise ValueError("At least one report is required to merge")

    if len(reports) == 1:
        return reports[0].model_copy(deep=True)

    merged = TargetReport(
        stats=TargetStats(),
        meta=copy.deepcopy(reports[0].meta),
    )
    stats = merged.stats

    for report in reports:
        _add_stats(stats, report.stats)
        merged.results.extend(
            suite.model_copy(deep=True) for suite in report.results
        )

    stats.pass_percent = percentage(stats.passes, stats.tests)
    stats.pending_percent = percentage(stats.pending, stats.tests)
    return merged


def _add_stats(total: TargetStats, stats: TargetStats) -> None:
    for counter in SUMMED_COUNTERS:
        setattr(total, counter, getattr(total, counter) + getattr(stats, counter))

    total.has_other = total.has_other or stats.has_other
    total.has_skipped = total.has_skipped or stats.has_skipped

    start = _parse_time(stats.start)
    if start is not None and (
        total.start is None or start < parse_timestamp(total.start)
    ):
        total.start = stats.start
    end = _parse_time(stats.end)
    if end is not None and (total.end is None or end > parse_timestamp(total.end)):
        total.end = stats.end


def _parse_time(value: str | None) -> datetime | None:
    """Parse a report timestamp, or None when it is missing or malformed."""
    if not value:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        logger.warning(f"Ignoring invalid report timestamp: {value!r}")
        return None


def find_report_files(
    report_dir: Path, merged_filename: str = MERGED_FILENAME
) -> list[Path]:
    """List report JSON files in report_dir, skipping the merged output.

    Raises:
        FileNotFoundError: If report_dir doesn't exist

    """
    if not report_dir.is_dir():
        raise FileNotFoundError(f"Report directory does not exist: {report_dir}")

    return sorted(
        path
        for path in report_dir.glob("*.json")
        if path.is_file() and path.name != merged_filename
    )


def load_reports(paths: Sequence[Path]) -> list[TargetReport]:
    """Load every readable report, logging and skipping the rest."""
    reports: list[TargetReport] = []
    for index, path in enumerate(paths, start=1):
        try:
            report = read_target_report(path)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Error reading {path}: {e}")
            continue

        logger.info(
            f"Loaded report {index}: {path.name} "
            f"(tests={report.stats.tests}, passes={report.stats.passes}, "
            f"failures={report.stats.failures}, suites={report.stats.suites})"
        )
        reports.append(report)
    return reports


def _status_glyph(test: TargetTest) -> str:
    if test.state == "passed":
        return "✅"
    if test.state == "failed":
        return "❌"
    if test.pending:
        return "⏳"
    if test.skipped:
        return "⏭️"
    if test.state is None:
        return "⚠️ "
    return "❓"


def format_breakdown(report: TargetReport) -> list[str]:
    """Describe each suite's counts and test outcomes, one line per entry."""
    lines: list[str] = []
    for root in report.results:
        if root.file:
            lines.append(f"📁 File: {root.file}")

        for suite in root.suites:
            if not suite.title or not suite.tests:
                continue

            lines.append(f"  📋 {suite.title}:")
            lines.append(
                f"     Tests: {len(suite.tests)}, Passes: {len(suite.passes)}, "
                f"Failures: {len(suite.failures)}, Pending: {len(suite.pending)}, "
                f"Skipped: {len(suite.skipped)}"
            )
            for test in suite.tests:
                note = " (null state - needs fixing)" if test.state is None else ""
                lines.append(
                    f"       {_status_glyph(test)} {test.title} "
                    f"({test.duration}ms){note}"
                )
    return lines
