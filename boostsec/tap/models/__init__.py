"""Data models for TAP runs, check configuration and summaries."""

from boostsec.tap.models.check_config import CheckConfig
from boostsec.tap.models.report import Plan, Report, Result, RunReport
from boostsec.tap.models.summary import RunSummary

__all__ = [
    "CheckConfig",
    "Plan",
    "Report",
    "Result",
    "RunReport",
    "RunSummary",
]
