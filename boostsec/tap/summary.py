"""Summarize a parsed TAP run."""

from boostsec.tap.models.check_config import CheckConfig
from boostsec.tap.models.report import Result, RunReport
from boostsec.tap.models.summary import RunSummary


def summarize(
    run: RunReport, error: Exception | None, config: CheckConfig | None = None
) -> RunSummary:
    """Count outcomes of a run and decide its overall status.

    Args:
        run: Report produced by the reader
        error: Error returned by the reader, if any
        config: Options deciding which outcomes fail the run

    Returns:
        Summary with status ``error`` if reading failed, ``failure`` if any
        test failed, otherwise ``success``

    """
    config = config or CheckConfig()
    reports = [r for r in run.tests if r is not None]

    passed = failed = skipped = todo = bonus = 0
    for report in reports:
        if report.result == Result.SKIP:
            skipped += 1
        elif report.todo:
            if report.result == Result.PASS:
                bonus += 1
            else:
                todo += 1
        elif report.result == Result.PASS:
            passed += 1
        else:
            failed += 1

    message: str | None = None
    if error is not None:
        status = "error"
        message = str(error)
    elif config.require_plan and run.plan is None:
        status = "failure"
        message = "no plan"
    elif failed or (config.fail_on_todo_pass and bonus):
        status = "failure"
    else:
        status = "success"

    return RunSummary(
        status=status,
        planned=run.plan.max - run.plan.min + 1 if run.plan is not None else None,
        total=len(reports),
        passed=passed,
        failed=failed,
        skipped=skipped,
        todo=todo,
        bonus=bonus,
        message=message,
    )
