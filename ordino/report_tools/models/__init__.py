"""Data models for source reports, target reports and extraction settings."""

from ordino.report_tools.models.extraction_config import ExtractionConfig
from ordino.report_tools.models.source_report import (
    SourceError,
    SourceFileSuite,
    SourceGroupSuite,
    SourceReport,
    SourceResult,
    SourceSpec,
    SourceStats,
    SourceTestRun,
)
from ordino.report_tools.models.target_report import (
    TargetError,
    TargetReport,
    TargetStats,
    TargetSuite,
    TargetTest,
)

__all__ = [
    "ExtractionConfig",
    "SourceError",
    "SourceFileSuite",
    "SourceGroupSuite",
    "SourceReport",
    "SourceResult",
    "SourceSpec",
    "SourceStats",
    "SourceTestRun",
    "TargetError",
    "TargetReport",
    "TargetStats",
    "TargetSuite",
    "TargetTest",
]
