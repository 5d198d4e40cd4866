"""Models for the summary of a parsed TAP run."""

from typing import Literal

from pydantic import BaseModel, Field


class RunSummary(BaseModel):
    """Counts and overall status of a parsed TAP run."""

    status: Literal["success", "failure", "error"] = Field(
        ..., description="Overall run status"
    )
    planned: int | None = Field(
        default=None, description="Number of planned tests, if a plan was seen"
    )
    total: int = Field(..., description="Number of reported tests")
    passed: int = Field(..., description="Passing tests, excluding TODO tests")
    failed: int = Field(..., description="Failing tests, excluding TODO tests")
    skipped: int = Field(..., description="Skipped tests")
    todo: int = Field(..., description="TODO tests that failed as expected")
    bonus: int = Field(..., description="TODO tests that unexpectedly passed")
    message: str | None = Field(
        default=None, description="Error message or status details"
    )
