"""CLI entry point for the Ordino report tools."""

import asyncio
import logging
import shutil
import sys
from pathlib import Path

import aiohttp
import typer

from ordino.report_tools.api_client import (
    DEFAULT_BASE_URL,
    ApiError,
    ItemsApiClient,
    run_items_smoke,
)
from ordino.report_tools.code_extractor import HeuristicCodeExtractor
from ordino.report_tools.config_loader import load_extraction_config
from ordino.report_tools.merger import (
    MERGED_FILENAME,
    find_report_files,
    format_breakdown,
    load_reports,
    merge,
)
from ordino.report_tools.models.extraction_config import ExtractionConfig
from ordino.report_tools.renderer import render_html
from ordino.report_tools.report_io import write_report
from ordino.report_tools.trace_cleanup import rename_trace_folders
from ordino.report_tools.transcoder import Transcoder

# Configure logging - force reconfiguration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

app = typer.Typer()


def _build_extraction_config(
    e2e_dir: Path, extraction_config: Path | None
) -> ExtractionConfig:
    """Load extraction settings, letting the e2e dir option win."""
    if extraction_config is None:
        return ExtractionConfig(base_dir=e2e_dir)

    config = load_extraction_config(extraction_config)
    if "base_dir" not in config.model_fields_set:
        config.base_dir = e2e_dir
    return config


@app.command()
def convert(
    input_file: Path = typer.Option(  # noqa: B008
        Path("ordino-report/test-results.json"),
        "--input",
        help="Playwright JSON results file",
    ),
    output_dir: Path = typer.Option(  # noqa: B008
        Path("ordino-report/mochawesome"), help="Directory for mochawesome JSON"
    ),
    report_dir: Path = typer.Option(  # noqa: B008
        Path("ordino-report/mochawesome-report"), help="Directory for HTML report"
    ),
    e2e_dir: Path = typer.Option(  # noqa: B008
        Path("ordino/e2e"),
        envvar="ORDINO_E2E_DIR",
        help="Directory spec file paths are relative to",
    ),
    extraction_config: Path | None = typer.Option(  # noqa: B008
        None, help="YAML file overriding code extraction patterns"
    ),
    render: bool = typer.Option(True, help="Generate the HTML report"),
) -> None:
    """Convert Playwright results to a mochawesome report."""
    logger.info("Converting Playwright results to Mochawesome format...")

    if not input_file.exists():
        logger.error(f"Playwright results file not found: {input_file}")
        typer.echo(
            f"Error: Playwright results file not found: {input_file}. "
            "Please run tests first to generate results.",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        config = _build_extraction_config(e2e_dir, extraction_config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load extraction config: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for directory in (output_dir, report_dir):
        directory.mkdir(parents=True, exist_ok=True)

    json_path = output_dir / "mochawesome.json"
    transcoder = Transcoder(
        HeuristicCodeExtractor(config), json_path, file_prefix=e2e_dir.as_posix()
    )

    try:
        report = transcoder.convert(input_file)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error reading Playwright results: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if render and not render_html(json_path, report_dir):
        typer.echo(
            "You can manually generate it using: "
            f"npx mochawesome-report-generator {json_path}",
            err=True,
        )

    stats = report.stats
    typer.echo("Test Summary:")
    typer.echo(f"  Total: {stats.tests}")
    typer.echo(f"  Passed: {stats.passes}")
    typer.echo(f"  Failed: {stats.failures}")
    typer.echo(f"  Pending: {stats.pending}")
    if render:
        typer.echo(f"Open the report: {report_dir / 'mochawesome.html'}")


@app.command("merge")
def merge_reports(
    report_dir: Path = typer.Option(  # noqa: B008
        Path("ordino-report/mochawesome"), help="Directory of mochawesome JSON files"
    ),
    output_name: str = typer.Option(MERGED_FILENAME, help="Merged report filename"),
) -> None:
    """Merge every mochawesome JSON report in a directory."""
    output_file = report_dir / output_name

    try:
        files = find_report_files(report_dir, output_name)
    except FileNotFoundError as e:
        logger.error(str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    logger.info(
        f"Found {len(files)} JSON files to merge: {[f.name for f in files]}"
    )
    if not files:
        typer.echo("Error: No JSON files found to merge", err=True)
        raise typer.Exit(code=1)

    if len(files) == 1:
        shutil.copyfile(files[0], output_file)
        typer.echo(f"Single report copied to: {output_file}")
        return

    reports = load_reports(files)
    if not reports:
        typer.echo("Error: No valid reports loaded", err=True)
        raise typer.Exit(code=1)

    merged = merge(reports)

    try:
        write_report(merged, output_file)
    except OSError as e:
        logger.error(f"Error writing merged report: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    stats = merged.stats
    typer.echo("=== Merged Results Summary ===")
    typer.echo(f"Total suites: {stats.suites}")
    typer.echo(f"Total tests: {stats.tests}")
    typer.echo(f"Total passes: {stats.passes}")
    typer.echo(f"Total failures: {stats.failures}")
    typer.echo(f"Total pending: {stats.pending}")
    typer.echo(f"Total skipped: {stats.skipped}")
    typer.echo(f"Pass percentage: {stats.pass_percent}%")
    typer.echo(f"Pending percentage: {stats.pending_percent}%")
    typer.echo(f"Duration: {stats.duration}ms")
    typer.echo(f"Start: {stats.start}")
    typer.echo(f"End: {stats.end}")
    typer.echo(f"Merged report written to: {output_file}")

    typer.echo("=== Test Suite Breakdown ===")
    for line in format_breakdown(merged):
        typer.echo(line)


@app.command()
def clean_traces(
    trace_dir: Path = typer.Option(  # noqa: B008
        Path("ordino-report/trace-report"), help="Directory of trace folders"
    ),
) -> None:
    """Rename trace folders to names without browser and hash suffixes."""
    renamed = rename_trace_folders(trace_dir)
    if renamed:
        typer.echo(f"Renamed {renamed} trace folder(s) to meaningful names")
    else:
        typer.echo("No trace folders to rename")


@app.command()
def api_smoke(
    base_url: str = typer.Option(DEFAULT_BASE_URL, help="Items API base URL"),
) -> None:
    """Run the Items API create/read/update/delete happy path."""
    client = ItemsApiClient(base_url)
    try:
        steps = asyncio.run(run_items_smoke(client))
    except (ApiError, aiohttp.ClientError) as e:
        logger.exception("Items API smoke test failed")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Completed steps: {', '.join(steps)}")


if __name__ == "__main__":  # pragma: no cover
    app()
