"""Invoke the external mochawesome HTML report generator."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_RENDER_COMMAND = ("npx", "mochawesome-report-generator")
DEFAULT_REPORT_FILENAME = "mochawesome"


def build_render_command(
    json_path: Path,
    report_dir: Path,
    report_filename: str = DEFAULT_REPORT_FILENAME,
    command: Sequence[str] = DEFAULT_RENDER_COMMAND,
) -> list[str]:
    """Build the generator command line for a report JSON file."""
    return [
        *command,
        str(json_path),
        "--reportDir",
        str(report_dir),
        "--reportFilename",
        report_filename,
    ]


def render_html(
    json_path: Path,
    report_dir: Path,
    report_filename: str = DEFAULT_REPORT_FILENAME,
    command: Sequence[str] = DEFAULT_RENDER_COMMAND,
) -> bool:
    """Render the HTML report for json_path into report_dir.

    The generator's output is passed through to the console. A failing or
    missing generator is logged and reported as False; it never raises.

    Args:
        json_path: Mochawesome JSON report to render
        report_dir: Directory the HTML report is written to
        report_filename: Base name of the HTML file
        command: Generator executable and leading arguments

    Returns:
        True if the generator exited successfully

    """
    args = build_render_command(json_path, report_dir, report_filename, command)
    logger.info(f"Running: {' '.join(args)}")

    try:
        subprocess.run(args, check=True)  # noqa: S603
    except subprocess.CalledProcessError as e:
        logger.error(f"Error generating HTML report: exit code {e.returncode}")
        return False
    except FileNotFoundError as e:
        logger.error(f"Error generating HTML report: {e}")
        return False

    html_path = report_dir / f"{report_filename}.html"
    logger.info(f"Mochawesome HTML report generated: {html_path}")
    return True
