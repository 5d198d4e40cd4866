"""Write TAP output to a text stream."""

from typing import TextIO

from boostsec.tap.models.report import Plan, Report, Result, RunReport


def format_plan_line(plan: Plan) -> str:
    """Render a plan as a ``min..max`` line."""
    return f"{plan.min}..{plan.max}"


def _escape_name(name: str) -> str:
    name = name.replace("#", "\\#")
    # A leading dash would be read back as the "- " separator.
    return f"- {name}" if name.startswith("-") else name


def format_report_line(report: Report, num: int) -> str:
    """Render the result line for a report under the given test number."""
    marker = "not ok" if report.result == Result.FAIL else "ok"
    line = f"{marker} {num}"
    if report.name:
        line += f" {_escape_name(report.name)}"

    if report.result == Result.SKIP:
        line += " # SKIP"
        if report.skip_reason:
            line += f": {report.skip_reason}"
    elif report.todo:
        line += " # TODO"
        if report.todo_reason:
            line += f": {report.todo_reason}"
    return line


class TapWriter:
    """Writes TAP lines to a sink in call order.

    Not safe for concurrent use; callers sharing a writer must synchronize.
    """

    def __init__(self, sink: TextIO) -> None:
        """Initialize writer over a text sink."""
        self.sink = sink
        self._next_num = 1

    def plan(self, plan: Plan) -> None:
        """Write a plan line."""
        self._write(format_plan_line(plan))

    def report(self, report: Report) -> None:
        """Write a report, preceded by its diagnostics.

        A report with ``num == 0`` takes the next automatic test number.
        """
        num = report.num if report.num else self._next_num
        # Explicit numbers move the counter too, so auto numbers never collide.
        self._next_num = max(self._next_num, num) + 1

        for text in report.diagnostics:
            self.diagnostic(text)
        self._write(format_report_line(report, num))

    def diagnostic(self, text: str) -> None:
        """Write diagnostic text, one ``#`` line per line of text."""
        for line in text.splitlines() or [""]:
            self._write(f"# {line}" if line else "#")

    def bail_out(self, reason: str) -> None:
        """Write a bail-out line; normally the last thing written."""
        self._write(f"Bail out! {reason}" if reason else "Bail out!")

    def write_run(self, run: RunReport) -> None:
        """Write a whole run report, plan first."""
        if run.plan is not None:
            self.plan(run.plan)
        for report in run.tests:
            if report is not None:
                self.report(report)

    def close(self) -> None:
        """Flush the sink."""
        self.sink.flush()

    def _write(self, line: str) -> None:
        self.sink.write(f"{line}\n")
