"""Models for the mochawesome JSON report consumed by the HTML renderer."""

import math
from datetime import datetime, timezone
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

TestSpeed = Literal["fast", "medium", "slow"]

FAST_THRESHOLD_MS = 5000
MEDIUM_THRESHOLD_MS = 10000
SUITE_TIMEOUT_MS = 2000


class _TargetModel(BaseModel):
    """Base for target schema models; unknown keys survive a round trip."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def replace_null_with_default(
        cls, value: object, info: ValidationInfo
    ) -> object:
        """Treat an explicit null like a missing key."""
        if value is None and info.field_name is not None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value


class TargetError(BaseModel):
    """Error details recorded on a failed test."""

    message: str = Field(default="Test failed", description="Failure message")
    stack: str = Field(default="", description="Stack trace")
    diff: str = Field(default="", description="Assertion diff")


class TargetTest(_TargetModel):
    """A single test as rendered by mochawesome."""

    title: str = Field(default="")
    full_title: str = Field(default="", alias="fullTitle")
    timed_out: bool | None = Field(default=None, alias="timedOut")
    duration: int = Field(default=0, description="Duration in ms")
    state: str | None = Field(
        default=None, description="passed, failed or pending"
    )
    speed: str | None = Field(default=None, description="fast, medium or slow")
    passed: bool = Field(default=False, alias="pass")
    failed: bool = Field(default=False, alias="fail")
    pending: bool = Field(default=False)
    context: str | None = Field(default=None)
    code: str = Field(default="", description="Excerpt of the test body")
    err: dict[str, object] = Field(
        default_factory=dict, description="Empty unless the test failed"
    )
    uuid: str = Field(default_factory=lambda: str(uuid4()))
    parent_uuid: str | None = Field(default=None, alias="parentUUID")
    is_hook: bool = Field(default=False, alias="isHook")
    skipped: bool = Field(default=False)


class TargetSuite(_TargetModel):
    """A root suite (one per spec file) or a group suite (one per describe)."""

    uuid: str = Field(default_factory=lambda: str(uuid4()))
    title: str = Field(default="")
    full_file: str = Field(default="", alias="fullFile")
    file: str = Field(default="")
    before_hooks: list[dict[str, object]] = Field(
        default_factory=list, alias="beforeHooks"
    )
    after_hooks: list[dict[str, object]] = Field(
        default_factory=list, alias="afterHooks"
    )
    tests: list[TargetTest] = Field(default_factory=list)
    suites: list["TargetSuite"] = Field(default_factory=list)
    passes: list[str] = Field(default_factory=list, description="Test uuids")
    failures: list[str] = Field(default_factory=list, description="Test uuids")
    pending: list[str] = Field(default_factory=list, description="Test uuids")
    skipped: list[str] = Field(default_factory=list, description="Test uuids")
    duration: int = Field(default=0, description="Duration in ms")
    root: bool = Field(default=False)
    root_empty: bool = Field(default=False, alias="rootEmpty")
    timeout: int = Field(default=SUITE_TIMEOUT_MS, alias="_timeout")


class TargetStats(_TargetModel):
    """Run-wide counters and derived percentages."""

    suites: int = 0
    tests: int = 0
    passes: int = 0
    pending: int = 0
    failures: int = 0
    tests_registered: int = Field(default=0, alias="testsRegistered")
    pass_percent: int = Field(default=0, alias="passPercent")
    pending_percent: int = Field(default=0, alias="pendingPercent")
    other: int = 0
    has_other: bool = Field(default=False, alias="hasOther")
    skipped: int = 0
    has_skipped: bool = Field(default=False, alias="hasSkipped")
    start: str | None = Field(default=None, description="ISO-8601 start time")
    end: str | None = Field(default=None, description="ISO-8601 end time")
    duration: int = Field(default=0, description="Run duration in ms")

    def refresh_derived(self) -> None:
        """Recompute percentages and has* flags from the counters."""
        self.pass_percent = percentage(self.passes, self.tests)
        self.pending_percent = percentage(self.pending, self.tests)
        self.has_skipped = self.skipped > 0
        self.has_other = self.other > 0


class TargetReport(_TargetModel):
    """Complete mochawesome report."""

    stats: TargetStats = Field(default_factory=TargetStats)
    results: list[TargetSuite] = Field(default_factory=list)
    meta: dict[str, object] = Field(default_factory=dict)

    def to_json_dict(self) -> dict[str, object]:
        """Dump the report using the mochawesome key names."""
        return self.model_dump(mode="json", by_alias=True)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


def percentage(part: int, total: int) -> int:
    """Return part as a whole percentage of total, or 0 for an empty total."""
    if total <= 0:
        return 0
    return round_half_up(part / total * 100)


def classify_speed(duration_ms: float) -> TestSpeed:
    """Bucket a passing test duration into fast, medium or slow."""
    if duration_ms < FAST_THRESHOLD_MS:
        return "fast"
    if duration_ms < MEDIUM_THRESHOLD_MS:
        return "medium"
    return "slow"


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, treating naive values as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds and a Z suffix."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def default_meta(
    report_dir: str = "ordino-report/mochawesome-report",
) -> dict[str, object]:
    """Build the meta block describing the reporter versions and options."""
    return {
        "mocha": {"version": "1.56.0"},
        "mochawesome": {
            "options": {
                "quiet": False,
                "reportFilename": "mochawesome",
                "saveHtml": True,
                "saveJson": True,
                "consoleReporter": "spec",
                "useInlineDiffs": False,
                "code": True,
            },
            "version": "7.1.4",
        },
        "marge": {
            "options": {
                "reportDir": report_dir,
                "reportFilename": "mochawesome",
                "timestamp": "yyyy-mm-dd-HH-MM",
                "overwrite": True,
                "html": True,
                "json": True,
            },
            "version": "6.3.0",
        },
    }
