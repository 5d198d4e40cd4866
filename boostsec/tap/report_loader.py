"""Load run reports from YAML or JSON files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from boostsec.tap.models.report import RunReport


def load_run_report(report_file: Path) -> RunReport:
    """Load a run report to be written as TAP.

    JSON is a subset of YAML, so both formats go through the YAML loader.

    Args:
        report_file: Path to a ``.yaml``, ``.yml`` or ``.json`` file

    Returns:
        Parsed run report

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty, invalid, or doesn't match the schema

    """
    if not report_file.exists():
        raise FileNotFoundError(f"Report file not found: {report_file}")

    try:
        with report_file.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {report_file}: {e}") from e

    if data is None:
        raise ValueError(f"Empty report file: {report_file}")

    try:
        return RunReport.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid run report schema in {report_file}: {e}") from e
