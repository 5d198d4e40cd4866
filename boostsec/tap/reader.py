"""Pull-based reader turning TAP output into a run report."""

import logging
from collections.abc import Iterable, Iterator
from enum import Enum

from boostsec.tap.errors import (
    AbortedError,
    MissingResultsError,
    NoTestsError,
    PlanTooLargeError,
    TapError,
    UnexpectedExtraResultError,
)
from boostsec.tap.grammar import (
    BailOutLine,
    DiagnosticLine,
    PlanLine,
    ResultLine,
    classify_line,
)
from boostsec.tap.models.report import Plan, Report, Result, RunReport
from boostsec.tap.ranges import format_ranges

logger = logging.getLogger(__name__)

MAX_PLANNED_TESTS = 1_000_000


class ReadOutcome(Enum):
    """What a call to ``TapReader.advance`` produced."""

    RESULT = "result"
    END = "end"
    FAILED = "failed"


def read_tap(source: Iterable[str]) -> RunReport:
    """Read a whole TAP stream.

    Convenience for callers that don't need streaming access to results.

    Args:
        source: Lines of TAP output, e.g. an open text file

    Returns:
        The reconciled run report

    Raises:
        TapError: If the run does not match its plan or bailed out; the
            partial report is available as ``error.report``
        OSError: If reading the source failed

    """
    reader = TapReader(source)
    report = reader.read_all()
    error = reader.err()
    if error is not None:
        raise error
    return report


class TapReader:
    """Consumes TAP output from a line source through a pull-based API."""

    def __init__(self, source: Iterable[str]) -> None:
        """Initialize reader over a source of lines."""
        self._lines: Iterator[str] = iter(source)

        self._plan: Plan | None = None
        self._next_num = 1
        self._diagnostics: list[str] = []
        self._results: dict[int, Report] = {}
        self._duplicates: list[int] = []

        self._last: Report | None = None
        self._bail_reason: str | None = None
        self._plan_error: TapError | None = None
        self._source_error: Exception | None = None

        self._finished = False
        self._final_report: RunReport | None = None
        self._error: Exception | None = None

    @property
    def last_report(self) -> Report | None:
        """Report produced by the most recent ``RESULT`` outcome."""
        return self._last

    def advance(self) -> ReadOutcome:
        """Consume lines until a new result is available or the run ends.

        Blocks exactly as long as the source blocks. Once the run has ended,
        further calls consume nothing and repeat the terminal outcome.
        """
        while not self._finished:
            try:
                line = next(self._lines)
            except StopIteration:
                self._finish()
                break
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Reading TAP source failed: {e}")
                self._source_error = e
                self._finish()
                break

            parsed = classify_line(line)
            if isinstance(parsed, ResultLine):
                self._last = self._record(parsed)
                return ReadOutcome.RESULT
            if isinstance(parsed, PlanLine):
                self._set_plan(parsed)
            elif isinstance(parsed, DiagnosticLine):
                self._diagnostics.append(parsed.text)
            elif isinstance(parsed, BailOutLine):
                logger.warning(f"Test program bailed out: {parsed.reason}")
                self._bail_reason = parsed.reason
                self._finish()

        return ReadOutcome.END if self._error is None else ReadOutcome.FAILED

    def read(self) -> bool:
        """Advance and report whether a new test report was found."""
        return self.advance() is ReadOutcome.RESULT

    def read_all(self) -> RunReport:
        """Consume every remaining result and return the run report.

        Call ``err`` afterwards to learn whether the run succeeded.
        """
        while self.read():
            pass
        return self.report()

    def report(self) -> RunReport:
        """Return the report for the run.

        Before the run has ended this is an incomplete snapshot of what has
        been read so far.
        """
        if self._final_report is not None:
            return self._final_report
        report, _ = self._reconcile()
        return report

    def err(self) -> Exception | None:
        """Return why reading stopped, or None if the run ended cleanly.

        Source errors are returned unchanged and take precedence over errors
        found while reconciling the run against its plan.
        """
        return self._error

    def _set_plan(self, line: PlanLine) -> None:
        if self._plan is not None:
            logger.debug(f"Ignoring extra plan {line.min}..{line.max}")
            return
        if line.max > MAX_PLANNED_TESTS:
            logger.error(f"Plan {line.min}..{line.max} is too large")
            self._plan_error = PlanTooLargeError(line.max, MAX_PLANNED_TESTS)
            self._finish()
            return
        self._plan = Plan(min=line.min, max=line.max)
        logger.debug(f"Plan is {line.min}..{line.max}")

    def _record(self, line: ResultLine) -> Report:
        num = line.num if line.num else self._next_num
        self._next_num = max(self._next_num, num) + 1

        directive = line.directive
        if directive is not None and directive.skip:
            result = Result.SKIP
        elif line.ok:
            result = Result.PASS
        else:
            result = Result.FAIL

        report = Report(
            num=num,
            result=result,
            name=line.name,
            todo=directive is not None and directive.todo,
            skip_reason=directive.reason if directive and directive.skip else None,
            todo_reason=directive.reason if directive and directive.todo else None,
            diagnostics=self._diagnostics,
        )
        self._diagnostics = []

        if num in self._results:
            logger.debug(f"Duplicate result for test {num}")
            self._duplicates.append(num)
        else:
            self._results[num] = report
        return report

    def _finish(self) -> None:
        self._finished = True
        # Diagnostics not followed by a result describe no test.
        self._diagnostics = []

        report, error = self._reconcile()
        if self._bail_reason is not None:
            error = AbortedError(self._bail_reason)
        elif self._plan_error is not None:
            error = self._plan_error
        if error is not None:
            error.report = report
            logger.info(f"TAP run failed: {error}")
        self._final_report = report
        self._error = self._source_error if self._source_error is not None else error

    def _reconcile(self) -> tuple[RunReport, TapError | None]:
        plan = self._plan
        if plan is None:
            if not self._results:
                return RunReport(), NoTestsError()
            tests = [self._results[num] for num in sorted(self._results)]
            report = RunReport(tests=tests)
            if self._duplicates:
                return report, UnexpectedExtraResultError(self._duplicates[0])
            return report, None

        slots: list[Report | None] = [None] * plan.max
        extra: int | None = None
        for num in sorted(self._results):
            if num > plan.max:
                extra = num
                break
            slots[num - 1] = self._results[num]
        report = RunReport(plan=plan, tests=slots)

        if extra is not None:
            return report, UnexpectedExtraResultError(extra)
        if self._duplicates:
            return report, UnexpectedExtraResultError(self._duplicates[0])

        missing = [
            num
            for num in range(max(plan.min, 1), plan.max + 1)
            if slots[num - 1] is None
        ]
        if missing:
            return report, MissingResultsError(format_ranges(missing))
        return report, None
