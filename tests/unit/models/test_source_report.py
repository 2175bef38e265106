"""Tests for Playwright report models."""

import pytest
from pydantic import ValidationError

from ordino.report_tools.models.source_report import SourceReport


def test_source_report_defaults() -> None:
    """An empty document is a valid report without stats."""
    report = SourceReport.model_validate({})
    assert report.stats is None
    assert report.suites == []


def test_source_report_nested_parse() -> None:
    """SourceReport parses the full suite hierarchy."""
    report = SourceReport.model_validate(
        {
            "config": {"workers": 4},
            "stats": {
                "startTime": "2024-01-01T10:00:00.000Z",
                "duration": 1234.5,
                "expected": 1,
                "unexpected": 0,
                "skipped": 0,
            },
            "suites": [
                {
                    "title": "login.spec.ts",
                    "file": "login.spec.ts",
                    "suites": [
                        {
                            "title": "Login Tests",
                            "file": "login.spec.ts",
                            "specs": [
                                {
                                    "title": "logs in",
                                    "line": 4,
                                    "column": 5,
                                    "tests": [
                                        {
                                            "results": [
                                                {
                                                    "status": "failed",
                                                    "duration": 10,
                                                    "errors": [{"message": "boom"}],
                                                }
                                            ]
                                        }
                                    ],
                                }
                            ],
                        }
                    ],
                }
            ],
        }
    )

    assert report.stats is not None
    assert report.stats.start_time == "2024-01-01T10:00:00.000Z"
    assert report.stats.duration == 1234.5
    spec = report.suites[0].suites[0].specs[0]
    assert spec.line == 4
    result = spec.tests[0].results[0]
    assert result.status == "failed"
    assert result.errors[0].message == "boom"
    assert result.errors[0].stack is None


def test_source_report_is_read_only() -> None:
    """Source models are frozen."""
    report = SourceReport.model_validate({"suites": []})
    with pytest.raises(ValidationError):
        report.suites = []  # type: ignore[misc]


def test_source_report_rejects_bad_types() -> None:
    """Non-numeric counters are rejected."""
    with pytest.raises(ValidationError) as exc_info:
        SourceReport.model_validate({"stats": {"expected": "many"}})
    assert "expected" in str(exc_info.value)
