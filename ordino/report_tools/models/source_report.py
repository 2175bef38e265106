"""Models for the Playwright JSON reporter output consumed by the converter."""

from pydantic import BaseModel, ConfigDict, Field


class _SourceModel(BaseModel):
    """Read-only base for source schema models; unknown keys are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class SourceError(_SourceModel):
    """Error attached to a single test attempt."""

    message: str | None = Field(default=None, description="Error message")
    stack: str | None = Field(default=None, description="Stack trace")


class SourceResult(_SourceModel):
    """Outcome of one attempt of a test."""

    status: str | None = Field(
        default=None,
        description="passed, failed, unexpected, timedOut, skipped or other",
    )
    duration: float = Field(default=0, description="Attempt duration in ms")
    errors: list[SourceError] = Field(default_factory=list)


class SourceTestRun(_SourceModel):
    """A test executed for one project, with one result per attempt."""

    results: list[SourceResult] = Field(default_factory=list)


class SourceSpec(_SourceModel):
    """A single test declaration in a spec file."""

    title: str = Field(default="", description="Test title")
    line: int = Field(default=0, description="1-based line of the declaration")
    column: int = Field(default=0, description="Column of the declaration")
    tests: list[SourceTestRun] = Field(default_factory=list)


class SourceGroupSuite(_SourceModel):
    """A describe block inside a spec file."""

    title: str = Field(default="", description="Describe block name")
    file: str = Field(default="", description="Spec file relative to the test dir")
    specs: list[SourceSpec] = Field(default_factory=list)


class SourceFileSuite(_SourceModel):
    """Top-level suite, one per spec file."""

    title: str = Field(default="")
    file: str | None = Field(default=None, description="Spec file path")
    suites: list[SourceGroupSuite] = Field(default_factory=list)


class SourceStats(_SourceModel):
    """Aggregate counters reported by the test runner itself."""

    start_time: str | None = Field(default=None, alias="startTime")
    duration: float = Field(default=0, description="Run duration in ms")
    expected: int = Field(default=0, description="Tests with expected outcome")
    unexpected: int = Field(default=0, description="Tests with unexpected outcome")
    skipped: int = Field(default=0, description="Skipped tests")
    flaky: int = Field(default=0, description="Tests passing on retry")


class SourceReport(_SourceModel):
    """Complete Playwright JSON report."""

    stats: SourceStats | None = Field(default=None)
    suites: list[SourceFileSuite] = Field(default_factory=list)
