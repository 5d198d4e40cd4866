"""Configuration for judging whether a parsed TAP run succeeded."""

from pydantic import BaseModel, Field


class CheckConfig(BaseModel):
    """Options for the ``check`` command."""

    require_plan: bool = Field(
        default=False, description="Treat a run without a plan line as failed"
    )
    fail_on_todo_pass: bool = Field(
        default=False,
        description="Treat a passing TODO test as a failure so it gets promoted",
    )
