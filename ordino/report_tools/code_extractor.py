"""Rebuild a readable excerpt of a test body from its spec file."""

import logging
import re
from abc import ABC, abstractmethod

from ordino.report_tools.models.extraction_config import ExtractionConfig

logger = logging.getLogger(__name__)

_AWAIT_PREFIX = re.compile(r"^await\s+")
_IDENTIFIER = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*")
_OBJECT_ACCESS = re.compile(r"^([a-zA-Z_$][a-zA-Z0-9_$]*)\.")

CHAIN_INDENT = "    "


class CodeExtractor(ABC):
    """Strategy turning a spec file location into a code excerpt."""

    @abstractmethod
    def extract(self, file_path: str, line: int) -> str:
        """Return an excerpt for the test declared at the given location.

        Args:
            file_path: Spec file path relative to the extractor's base directory
            line: 1-based line number inside the test

        Returns:
            Code excerpt, or a comment string describing why none is available.
            Implementations never raise.

        """


class HeuristicCodeExtractor(CodeExtractor):
    """Line-based excerpt extractor using brace counting and keyword filters."""

    def __init__(self, config: ExtractionConfig | None = None) -> None:
        """Initialize extractor with its settings."""
        self.config = config or ExtractionConfig()

    def extract(self, file_path: str, line: int) -> str:
        """Return the test steps around line, or a placeholder comment."""
        full_path = self.config.base_dir / file_path

        if not full_path.exists():
            logger.warning(f"Test file not found: {full_path}")
            return f"// Test file not found: {file_path}"

        try:
            lines = full_path.read_text(encoding="utf-8").split("\n")
            steps = self._collect_steps(lines, line)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not extract test code from {file_path}: {e}")
            return f"// Error reading test file: {file_path}"

        if not steps:
            return f"// No test steps found in {file_path} at line {line}"

        return self._format_steps(steps)

    def _collect_steps(self, lines: list[str], line: int) -> list[str]:
        """Collect the cleaned step lines of the test enclosing line."""
        if line < 1 or line > len(lines):
            return []

        start = self._find_declaration(lines, line - 1)
        end = self._find_body_end(lines, start)

        marker = self.config.declaration_marker
        steps: list[str] = []
        inside_body = False
        i = start
        while i <= end:
            trimmed = lines[i].strip()

            if not trimmed or trimmed.startswith("//"):
                i += 1
                continue

            if marker in trimmed:
                if "{" in trimmed:
                    inside_body = True
                else:
                    # Opening brace on a following line
                    for j in range(i + 1, len(lines)):
                        if "{" in lines[j]:
                            inside_body = True
                            i = j
                            break
                i += 1
                continue

            if trimmed == "}" and i == end:
                break

            if inside_body:
                step = self._clean_line(trimmed)
                if step and self._is_step(step):
                    steps.append(step)
            i += 1

        return steps

    def _find_declaration(self, lines: list[str], index: int) -> int:
        """Walk back from index to the nearest test declaration, floor 0."""
        marker = self.config.declaration_marker
        while index > 0 and marker not in lines[index].strip():
            index -= 1
        return index

    def _find_body_end(self, lines: list[str], start: int) -> int:
        """Return the line where brace depth first returns to zero."""
        depth = 0
        opened = False
        for i in range(start, len(lines)):
            for char in lines[i]:
                if char == "{":
                    depth += 1
                    opened = True
                elif char == "}":
                    depth -= 1
            if opened and depth == 0:
                return i
        return start

    def _clean_line(self, trimmed: str) -> str:
        cleaned = _AWAIT_PREFIX.sub("", trimmed)
        if cleaned.endswith(";"):
            cleaned = cleaned[:-1]
        return cleaned

    def _is_step(self, step: str) -> bool:
        if any(pattern in step for pattern in self.config.exclude_patterns):
            return False
        if any(pattern in step for pattern in self.config.include_patterns):
            return True
        return _IDENTIFIER.match(step) is not None

    def _format_steps(self, steps: list[str]) -> str:
        """Render steps as a method chain when they share one object."""
        match = _OBJECT_ACCESS.match(steps[0])
        if match and len(steps) > 1:
            prefix = match.group(1) + "."
            if all(step.startswith(prefix) for step in steps):
                chained = [steps[0]]
                chained.extend(
                    CHAIN_INDENT + step[len(match.group(1)) :] for step in steps[1:]
                )
                return "\n".join(chained)

        return "\n".join(step if step.endswith(";") else f"{step};" for step in steps)
