"""Models for TAP plans, per-test reports and whole-run reports."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Result(str, Enum):
    """Passing status of a single test."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class Plan(BaseModel):
    """Inclusive range of test numbers a test program declared it would run.

    In current versions of TAP ``min`` is always 1; it is kept for
    completeness. ``1..0`` declares that every test was skipped.
    """

    model_config = ConfigDict(frozen=True)

    min: int = Field(..., ge=0, description="Lowest expected test number")
    max: int = Field(..., ge=0, description="Highest expected test number")


class Report(BaseModel):
    """Outcome of one test."""

    model_config = ConfigDict(frozen=True)

    num: int = Field(
        default=0, ge=0, description="Test number, 0 lets the writer pick one"
    )
    result: Result = Field(..., description="Passing status for the test")
    name: str = Field(default="", description="Test description")
    todo: bool = Field(
        default=False,
        description="Failure is expected; a pass is a bonus worth reporting",
    )
    skip_reason: str | None = Field(
        default=None, description="Reason given for a skipped test"
    )
    todo_reason: str | None = Field(
        default=None, description="Reason given for a TODO test"
    )
    diagnostics: list[str] = Field(
        default_factory=list, description="Diagnostic lines emitted before the test"
    )


class RunReport(BaseModel):
    """Overall outcome of a test program.

    When a plan is present ``tests`` has one slot per planned number, with
    ``None`` for numbers that never reported. The report may be incomplete if
    the reader that produced it finished with an error.
    """

    plan: Plan | None = Field(default=None, description="Declared plan, if any")
    tests: list[Report | None] = Field(
        default_factory=list, description="Reports indexed by test number - 1"
    )
