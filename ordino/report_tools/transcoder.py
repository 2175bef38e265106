"""Convert Playwright JSON results into a mochawesome report."""

import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from ordino.report_tools.code_extractor import CodeExtractor, HeuristicCodeExtractor
from ordino.report_tools.models.source_report import (
    SourceFileSuite,
    SourceGroupSuite,
    SourceReport,
    SourceResult,
    SourceStats,
)
from ordino.report_tools.models.target_report import (
    TargetError,
    TargetReport,
    TargetStats,
    TargetSuite,
    TargetTest,
    classify_speed,
    default_meta,
    format_timestamp,
    parse_timestamp,
    round_half_up,
)
from ordino.report_tools.report_io import read_source_report, write_report

logger = logging.getLogger(__name__)

DEFAULT_FILE_PREFIX = "ordino/e2e"
FAILED_STATUSES = {"failed", "unexpected", "timedOut"}


def transcode(
    source: SourceReport,
    extractor: CodeExtractor | None = None,
    *,
    file_prefix: str = DEFAULT_FILE_PREFIX,
    now: datetime | None = None,
) -> TargetReport:
    """Build a mochawesome report from a Playwright report.

    Args:
        source: Parsed Playwright JSON report
        extractor: Strategy used to fill each test's code excerpt
        file_prefix: Directory prepended to spec file paths on root suites
        now: Start time used when the source has none

    Returns:
        Mochawesome report with one root suite per spec file

    """
    extractor = extractor or HeuristicCodeExtractor()
    report = TargetReport(
        stats=_initial_stats(source.stats, now), meta=default_meta()
    )
    stats = report.stats

    for file_suite in source.suites:
        report.results.append(
            _build_root_suite(file_suite, extractor, stats, file_prefix)
        )
        stats.suites += 1

    if source.stats is not None:
        _apply_reported_totals(stats, source.stats)

    stats.refresh_derived()
    return report


def _initial_stats(
    source_stats: SourceStats | None, now: datetime | None
) -> TargetStats:
    """Seed run stats with start, end and duration."""
    start_time = source_stats.start_time if source_stats else None
    duration = source_stats.duration if source_stats else 0

    if start_time:
        start = parse_timestamp(start_time)
    else:
        start = now or datetime.now(timezone.utc)
    end = start + timedelta(milliseconds=duration)

    return TargetStats(
        start=format_timestamp(start),
        end=format_timestamp(end),
        duration=round_half_up(duration),
    )


def _build_root_suite(
    file_suite: SourceFileSuite,
    extractor: CodeExtractor,
    stats: TargetStats,
    file_prefix: str,
) -> TargetSuite:
    """Create the root suite for a spec file with one child per describe."""
    full_file = f"{file_prefix}/{file_suite.file}" if file_suite.file else ""
    root = TargetSuite(
        title="",
        full_file=full_file,
        file=full_file,
        root=True,
        root_empty=True,
    )

    for group in file_suite.suites:
        suite = _build_group_suite(group, extractor, stats)
        root.suites.append(suite)
        root.duration += suite.duration

    return root


def _build_group_suite(
    group: SourceGroupSuite, extractor: CodeExtractor, stats: TargetStats
) -> TargetSuite:
    """Create a flat suite for a describe block holding all of its tests."""
    suite = TargetSuite(title=group.title, full_file="", file="")

    for spec in group.specs:
        for run in spec.tests:
            result = run.results[0] if run.results else None
            duration = round_half_up(result.duration) if result else 0

            test = TargetTest(
                title=spec.title,
                full_title=f"{group.title} {spec.title}",
                duration=duration,
                code=extractor.extract(group.file, spec.line),
                parent_uuid=suite.uuid,
            )
            suite.tests.append(test)
            suite.duration += duration
            stats.tests += 1
            stats.tests_registered += 1

            _apply_status(test, result, suite, stats)

    return suite


def _apply_status(
    test: TargetTest,
    result: SourceResult | None,
    suite: TargetSuite,
    stats: TargetStats,
) -> None:
    """Set the outcome flags of a test from its first attempt."""
    status = result.status if result else None

    if status == "passed":
        test.passed = True
        test.state = "passed"
        test.speed = classify_speed(result.duration)
        suite.passes.append(test.uuid)
        stats.passes += 1
    elif status in FAILED_STATUSES:
        errors = result.errors if result else []
        if errors:
            error = TargetError(
                message=errors[0].message or "Test failed",
                stack=errors[0].stack or "",
            )
        else:
            error = TargetError()
        _mark_failed(test, error, suite, stats)
    elif status == "skipped":
        test.pending = True
        test.skipped = True
        test.state = "pending"
        suite.skipped.append(test.uuid)
        suite.pending.append(test.uuid)
        stats.pending += 1
        stats.skipped += 1
    else:
        logger.warning(f"Unknown test status: {status}, treating as failed")
        error = TargetError(message=f"Test status: {status}")
        _mark_failed(test, error, suite, stats)


def _mark_failed(
    test: TargetTest, error: TargetError, suite: TargetSuite, stats: TargetStats
) -> None:
    test.failed = True
    test.state = "failed"
    test.speed = None
    test.err = error.model_dump()
    suite.failures.append(test.uuid)
    stats.failures += 1


def _apply_reported_totals(stats: TargetStats, source_stats: SourceStats) -> None:
    """Replace the traversal tally with the runner's own totals.

    Suite passes/failures lists keep the per-test outcome; only the run
    counters are replaced, so the two can disagree for tests without results
    or with an unknown status.
    """
    tests = source_stats.expected + source_stats.unexpected
    if (
        stats.tests != tests
        or stats.passes != source_stats.expected
        or stats.failures != source_stats.unexpected
        or stats.skipped != source_stats.skipped
    ):
        logger.warning(
            "Converted test tally differs from reported totals: "
            f"tests {stats.tests}/{tests}, passes {stats.passes}/"
            f"{source_stats.expected}, failures {stats.failures}/"
            f"{source_stats.unexpected}, skipped {stats.skipped}/"
            f"{source_stats.skipped}"
        )

    stats.tests = tests
    stats.tests_registered = tests
    stats.passes = source_stats.expected
    stats.failures = source_stats.unexpected
    stats.pending = source_stats.skipped
    stats.skipped = source_stats.skipped


class Transcoder:
    """Reads a Playwright report, converts it and writes the result."""

    def __init__(
        self,
        extractor: CodeExtractor,
        output_path: Path,
        file_prefix: str = DEFAULT_FILE_PREFIX,
    ) -> None:
        """Initialize transcoder with its extractor and destination."""
        self.extractor = extractor
        self.output_path = output_path
        self.file_prefix = file_prefix

    def convert(self, input_path: Path) -> TargetReport:
        """Convert the report at input_path and persist it.

        Raises:
            FileNotFoundError: If the input report doesn't exist
            ValueError: If the input isn't a valid Playwright report

        """
        source = read_source_report(input_path)
        logger.info(f"Loaded Playwright results from {input_path}")

        report = transcode(source, self.extractor, file_prefix=self.file_prefix)
        write_report(report, self.output_path)
        logger.info(f"Mochawesome JSON created: {self.output_path}")
        return report
