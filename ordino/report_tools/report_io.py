"""Read and write report JSON documents."""

import json
from pathlib import Path

from pydantic import ValidationError

from ordino.report_tools.models.source_report import SourceReport
from ordino.report_tools.models.target_report import TargetReport

JSON_INDENT = 2


def _read_json(path: Path) -> object:
    if not path.exists():
        raise FileNotFoundError(f"Report file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e


def read_source_report(path: Path) -> SourceReport:
    """Load a Playwright JSON report.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't valid JSON or doesn't match the schema

    """
    data = _read_json(path)
    try:
        return SourceReport.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid Playwright report in {path}: {e}") from e


def read_target_report(path: Path) -> TargetReport:
    """Load a mochawesome JSON report.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't valid JSON or doesn't match the schema

    """
    data = _read_json(path)
    try:
        return TargetReport.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid mochawesome report in {path}: {e}") from e


def write_report(report: TargetReport, path: Path) -> None:
    """Write a mochawesome report as indented JSON, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(report.to_json_dict(), f, indent=JSON_INDENT, ensure_ascii=False)
