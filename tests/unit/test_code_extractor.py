"""Tests for the heuristic test code extractor."""

from pathlib import Path

import pytest

from ordino.report_tools.code_extractor import HeuristicCodeExtractor
from ordino.report_tools.models.extraction_config import ExtractionConfig

LOGIN_SPEC = """import { test, expect } from '@playwright/test';

test.describe('Login Tests', () => {
  test('logs in', async ({ page }) => {
    // open the page
    await page.goto('/login');
    await page.fill('#user', 'admin');

    await page.click('#submit');
  });

  test('shows error', async ({ page }) => {
    const bad = 'nope';
    await page.fill('#user', bad);
    await expect(page.locator('.error')).toBeVisible();
  });
});
"""


@pytest.fixture
def spec_dir(tmp_path: Path) -> Path:
    """Create an e2e directory with a login spec."""
    (tmp_path / "login.spec.ts").write_text(LOGIN_SPEC)
    return tmp_path


@pytest.fixture
def extractor(spec_dir: Path) -> HeuristicCodeExtractor:
    """Create extractor rooted at the spec directory."""
    return HeuristicCodeExtractor(ExtractionConfig(base_dir=spec_dir))


def test_extract_formats_shared_object_as_chain(
    extractor: HeuristicCodeExtractor,
) -> None:
    """Steps on one object are rendered as an indented method chain."""
    code = extractor.extract("login.spec.ts", 4)
    assert code == (
        "page.goto('/login')\n"
        "    .fill('#user', 'admin')\n"
        "    .click('#submit')"
    )


def test_extract_from_line_inside_body(extractor: HeuristicCodeExtractor) -> None:
    """A line inside the body resolves to the enclosing declaration."""
    assert extractor.extract("login.spec.ts", 7) == extractor.extract(
        "login.spec.ts", 4
    )


def test_extract_mixed_objects_get_terminators(
    extractor: HeuristicCodeExtractor,
) -> None:
    """Mixed steps keep their own object and end with a semicolon."""
    code = extractor.extract("login.spec.ts", 12)
    assert code == (
        "page.fill('#user', bad);\nexpect(page.locator('.error')).toBeVisible();"
    )


def test_extract_skips_declarations(extractor: HeuristicCodeExtractor) -> None:
    """Variable declarations are excluded from the excerpt."""
    assert "const" not in extractor.extract("login.spec.ts", 12)


def test_extract_outside_any_test(extractor: HeuristicCodeExtractor) -> None:
    """A line outside every test yields a placeholder naming file and line."""
    code = extractor.extract("login.spec.ts", 1)
    assert code == "// No test steps found in login.spec.ts at line 1"


@pytest.mark.parametrize("line", [0, -3, 500])
def test_extract_line_out_of_range(
    extractor: HeuristicCodeExtractor, line: int
) -> None:
    """Lines outside the file yield the no-steps placeholder."""
    code = extractor.extract("login.spec.ts", line)
    assert code == f"// No test steps found in login.spec.ts at line {line}"


def test_extract_missing_file(extractor: HeuristicCodeExtractor) -> None:
    """A missing spec file yields a placeholder instead of raising."""
    assert extractor.extract("missing.spec.ts", 3) == (
        "// Test file not found: missing.spec.ts"
    )


def test_extract_unreadable_file(spec_dir: Path) -> None:
    """A file that can't be decoded yields the read-error placeholder."""
    (spec_dir / "binary.spec.ts").write_bytes(b"\xff\xfe\xfa test(")
    extractor = HeuristicCodeExtractor(ExtractionConfig(base_dir=spec_dir))
    assert extractor.extract("binary.spec.ts", 1) == (
        "// Error reading test file: binary.spec.ts"
    )


def test_extract_brace_on_following_line(tmp_path: Path) -> None:
    """The opening brace may sit on a line after the declaration."""
    (tmp_path / "multi.spec.ts").write_text(
        "test('multi line',\n"
        "  async () =>\n"
        "  {\n"
        "    await page.goto('/');\n"
        "    await page.reload();\n"
        "  });\n"
    )
    extractor = HeuristicCodeExtractor(ExtractionConfig(base_dir=tmp_path))
    assert extractor.extract("multi.spec.ts", 1) == "page.goto('/')\n    .reload()"


def test_extract_single_step_gets_terminator(tmp_path: Path) -> None:
    """A single step is not rendered as a chain."""
    (tmp_path / "one.spec.ts").write_text(
        "test('one', async ({ page }) => {\n  await page.goto('/');\n}\n"
    )
    extractor = HeuristicCodeExtractor(ExtractionConfig(base_dir=tmp_path))
    assert extractor.extract("one.spec.ts", 1) == "page.goto('/');"


def test_extract_identifier_catch_all(tmp_path: Path) -> None:
    """Lines starting with an identifier are kept even without a pattern."""
    (tmp_path / "calc.spec.ts").write_text(
        "test('counts', async () => {\n"
        "  total = 5;\n"
        "  42;\n"
        "  await expect(total).toBe(5);\n"
        "});\n"
    )
    config = ExtractionConfig(base_dir=tmp_path, include_patterns=["expect"])
    extractor = HeuristicCodeExtractor(config)
    assert extractor.extract("calc.spec.ts", 1) == (
        "total = 5;\nexpect(total).toBe(5);"
    )


def test_extract_custom_declaration_marker(tmp_path: Path) -> None:
    """The declaration marker is configurable."""
    (tmp_path / "cart.cy.js").write_text(
        "describe('cart', () => {\n"
        "  it('adds item', () => {\n"
        "    cy.get('#shop').click();\n"
        "    cy.contains('Added');\n"
        "  });\n"
        "});\n"
    )
    config = ExtractionConfig(base_dir=tmp_path, declaration_marker="it(")
    extractor = HeuristicCodeExtractor(config)
    assert extractor.extract("cart.cy.js", 3) == (
        "cy.get('#shop').click()\n    .contains('Added')"
    )


def test_extract_custom_exclude_patterns(tmp_path: Path) -> None:
    """Exclude patterns win over include patterns."""
    (tmp_path / "nav.spec.ts").write_text(
        "test('nav', async ({ page }) => {\n"
        "  await page.goto('/');\n"
        "  await page.screenshot();\n"
        "});\n"
    )
    config = ExtractionConfig(base_dir=tmp_path, exclude_patterns=["screenshot"])
    extractor = HeuristicCodeExtractor(config)
    assert extractor.extract("nav.spec.ts", 1) == "page.goto('/');"
