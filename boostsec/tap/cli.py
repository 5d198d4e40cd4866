"""CLI entry point for checking and emitting TAP output."""

import json
import logging
import sys
from pathlib import Path
from typing import TextIO

import typer
from pydantic import ValidationError

from boostsec.tap.models.check_config import CheckConfig
from boostsec.tap.models.report import Result
from boostsec.tap.models.summary import RunSummary
from boostsec.tap.reader import ReadOutcome, TapReader
from boostsec.tap.report_loader import load_run_report
from boostsec.tap.summary import summarize
from boostsec.tap.writer import TapWriter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

app = typer.Typer()


@app.command()
def check(
    path: Path | None = typer.Argument(  # noqa: B008
        None, help="TAP file to read, stdin when omitted or '-'"
    ),
    config: str = typer.Option("{}", help="JSON configuration for the check"),
) -> None:
    """Read TAP output and print a JSON summary of the run."""
    try:
        check_config = _parse_config(config)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if path is None or str(path) == "-":
        summary = _check_stream(sys.stdin, check_config)
    else:
        try:
            with path.open() as f:
                summary = _check_stream(f, check_config)
        except FileNotFoundError:
            typer.echo(f"Error: TAP file not found: {path}", err=True)
            raise typer.Exit(code=1)
        except OSError as e:
            logger.error(f"Failed to open TAP file: {e}")
            typer.echo(f"Error: Cannot read TAP file {path}: {e}", err=True)
            raise typer.Exit(code=1)

    typer.echo(json.dumps(summary.model_dump(), indent=2))

    if summary.status != "success":
        logger.error(f"TAP run {summary.status}: {summary.message or 'failing tests'}")
        raise typer.Exit(code=1)


@app.command()
def emit(
    path: Path = typer.Argument(..., help="YAML or JSON run report"),  # noqa: B008
) -> None:
    """Write a run report as TAP output."""
    try:
        run = load_run_report(path)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Failed to load run report: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    writer = TapWriter(sys.stdout)
    writer.write_run(run)
    writer.close()


def _check_stream(stream: TextIO, config: CheckConfig) -> RunSummary:
    """Read a TAP stream, logging each result as it arrives."""
    reader = TapReader(stream)
    while reader.advance() is ReadOutcome.RESULT:
        report = reader.last_report
        if report is None:  # pragma: no cover
            continue
        label = f"{report.num} {report.name}".rstrip()
        if report.result == Result.FAIL and not report.todo:
            logger.error(f"✗ {label}: {report.result.value}")
            for line in report.diagnostics:
                logger.error(f"  {line}")
        else:
            logger.info(f"✓ {label}: {report.result.value}")

    return summarize(reader.report(), reader.err(), config)


def _parse_config(config_json: str) -> CheckConfig:
    """Create check configuration from JSON."""
    try:
        config_dict = json.loads(config_json)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config: {e}")

    if not isinstance(config_dict, dict):
        raise ValueError("Config must be a JSON object")

    try:
        return CheckConfig(**config_dict)
    except ValidationError as e:
        raise ValueError(f"Invalid config: {e}")


if __name__ == "__main__":  # pragma: no cover
    app()
