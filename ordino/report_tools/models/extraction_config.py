"""Configuration model for test code excerpt extraction."""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_INCLUDE_PATTERNS = [
    ".",
    "(",
    "expect",
    "assert",
    "should",
    "click",
    "fill",
    "type",
    "navigate",
    "wait",
    "get",
    "find",
    "select",
    "check",
    "verify",
    "validate",
]

DEFAULT_EXCLUDE_PATTERNS = [
    "import",
    "const",
    "let",
    "var",
    "//",
    "/*",
    "*/",
]


class ExtractionConfig(BaseModel):
    """Settings for rebuilding a test body excerpt from its spec file."""

    base_dir: Path = Field(
        default=Path("ordino/e2e"),
        description="Directory spec file paths are relative to",
    )
    declaration_marker: str = Field(
        default="test(", description="Text identifying a test declaration line"
    )
    include_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS),
        description="Substrings marking a line as a test step",
    )
    exclude_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS),
        description="Substrings marking a line as noise; checked first",
    )
