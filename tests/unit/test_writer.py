"""Tests for the TAP writer."""

import io
from collections.abc import Callable

import pytest

from boostsec.tap.models.report import Plan, Report, Result, RunReport
from boostsec.tap.reader import read_tap
from boostsec.tap.writer import TapWriter, format_plan_line, format_report_line


def _one_report_no_plan(w: TapWriter) -> None:
    w.report(Report(num=1, name="reticulates splines", result=Result.PASS))


def _two_reports_no_plan(w: TapWriter) -> None:
    w.report(Report(num=1, name="reticulates splines", result=Result.FAIL))
    w.report(Report(num=2, name="boops", result=Result.PASS))


def _prior_plan(w: TapWriter) -> None:
    w.plan(Plan(min=1, max=1))
    w.report(Report(num=1, name="reticulates splines", result=Result.PASS))


def _post_plan(w: TapWriter) -> None:
    w.report(Report(num=1, name="reticulates splines", result=Result.PASS))
    w.plan(Plan(min=1, max=1))


def _late_plan(w: TapWriter) -> None:
    w.report(Report(num=1, name="reticulates splines", result=Result.PASS))
    w.plan(Plan(min=1, max=1))
    w.report(Report(num=2, name="boop", result=Result.PASS))


def _auto_numbered(w: TapWriter) -> None:
    w.report(Report(name="reticulates splines", result=Result.PASS))
    w.report(Report(name="boops", result=Result.FAIL))


def _auto_after_explicit(w: TapWriter) -> None:
    w.report(Report(num=3, result=Result.PASS))
    w.report(Report(result=Result.PASS))


def _skip_no_reason(w: TapWriter) -> None:
    w.report(Report(num=1, name="reticulates splines", result=Result.SKIP))


def _skip_with_reason(w: TapWriter) -> None:
    w.report(
        Report(
            num=1,
            name="reticulates splines",
            result=Result.SKIP,
            skip_reason="no splines",
        )
    )


def _todo_no_reason(w: TapWriter) -> None:
    w.report(
        Report(num=1, name="reticulates splines", result=Result.FAIL, todo=True)
    )


def _todo_with_reason(w: TapWriter) -> None:
    w.report(
        Report(
            num=1,
            name="reticulates splines",
            result=Result.FAIL,
            todo=True,
            todo_reason="not yet implemented",
        )
    )


def _report_with_diagnostics(w: TapWriter) -> None:
    w.report(Report(num=1, result=Result.PASS, diagnostics=["a is 2", "  b is 3"]))


@pytest.mark.parametrize(
    ("steps", "expected"),
    [
        pytest.param(lambda w: None, "", id="no output"),
        pytest.param(
            _one_report_no_plan,
            "ok 1 reticulates splines\n",
            id="one report with no plan",
        ),
        pytest.param(
            _two_reports_no_plan,
            "not ok 1 reticulates splines\nok 2 boops\n",
            id="two reports with no plan",
        ),
        pytest.param(
            _prior_plan,
            "1..1\nok 1 reticulates splines\n",
            id="one report with prior plan",
        ),
        pytest.param(
            _post_plan,
            "ok 1 reticulates splines\n1..1\n",
            id="one report with post-plan",
        ),
        pytest.param(
            _late_plan,
            "ok 1 reticulates splines\n1..1\nok 2 boop\n",
            id="two reports with late plan",
        ),
        pytest.param(
            _auto_numbered,
            "ok 1 reticulates splines\nnot ok 2 boops\n",
            id="auto-numbered reports",
        ),
        pytest.param(
            _auto_after_explicit,
            "ok 3\nok 4\n",
            id="auto numbering continues past explicit numbers",
        ),
        pytest.param(
            _skip_no_reason,
            "ok 1 reticulates splines # SKIP\n",
            id="skipped test with no reason",
        ),
        pytest.param(
            _skip_with_reason,
            "ok 1 reticulates splines # SKIP: no splines\n",
            id="skipped test with reason",
        ),
        pytest.param(
            _todo_no_reason,
            "not ok 1 reticulates splines # TODO\n",
            id="todo test with no reason",
        ),
        pytest.param(
            _todo_with_reason,
            "not ok 1 reticulates splines # TODO: not yet implemented\n",
            id="todo test with reason",
        ),
        pytest.param(
            lambda w: w.bail_out("printer on fire"),
            "Bail out! printer on fire\n",
            id="bail out",
        ),
        pytest.param(lambda w: w.bail_out(""), "Bail out!\n", id="bail out no reason"),
        pytest.param(lambda w: w.diagnostic("a is 2"), "# a is 2\n", id="diagnostic"),
        pytest.param(
            lambda w: w.diagnostic("line one\nline two"),
            "# line one\n# line two\n",
            id="multi-line diagnostic",
        ),
        pytest.param(
            _report_with_diagnostics,
            "# a is 2\n#   b is 3\nok 1\n",
            id="report diagnostics precede the result",
        ),
    ],
)
def test_writer(steps: Callable[[TapWriter], None], expected: str) -> None:
    """TapWriter emits lines in call order."""
    buf = io.StringIO()
    w = TapWriter(buf)

    steps(w)
    w.close()

    assert buf.getvalue() == expected


def test_format_plan_line() -> None:
    """format_plan_line renders min..max."""
    assert format_plan_line(Plan(min=1, max=12)) == "1..12"


def test_format_report_line_skip_renders_ok() -> None:
    """A skipped test never renders as not ok."""
    report = Report(num=0, result=Result.SKIP, skip_reason="later")
    assert format_report_line(report, 7) == "ok 7 # SKIP: later"


def test_writers_are_independent() -> None:
    """Each writer keeps its own auto-number counter."""
    first, second = io.StringIO(), io.StringIO()
    w1, w2 = TapWriter(first), TapWriter(second)

    w1.report(Report(result=Result.PASS))
    w1.report(Report(result=Result.PASS))
    w2.report(Report(result=Result.PASS))

    assert first.getvalue() == "ok 1\nok 2\n"
    assert second.getvalue() == "ok 1\n"


def test_sink_errors_propagate() -> None:
    """Write failures from the sink are raised unchanged."""
    buf = io.StringIO()
    buf.close()
    w = TapWriter(buf)

    with pytest.raises(ValueError):
        w.plan(Plan(min=1, max=1))


def test_write_run_round_trip() -> None:
    """A written run report reads back unchanged."""
    run = RunReport(
        plan=Plan(min=1, max=4),
        tests=[
            Report(num=1, result=Result.PASS, name="reticulates splines"),
            Report(
                num=2,
                result=Result.FAIL,
                name="boops",
                diagnostics=["expected 2", "    got 3"],
            ),
            Report(num=3, result=Result.SKIP, name="prints", skip_reason="no printer"),
            Report(
                num=4,
                result=Result.FAIL,
                name="flies",
                todo=True,
                todo_reason="needs wings",
            ),
        ],
    )
    buf = io.StringIO()
    w = TapWriter(buf)

    w.write_run(run)
    w.close()
    buf.seek(0)

    assert read_tap(buf) == run


def test_explicit_number_moves_auto_counter() -> None:
    """An auto-numbered report follows the highest number written so far."""
    buf = io.StringIO()
    w = TapWriter(buf)

    w.report(Report(num=5, result=Result.PASS))
    w.report(Report(num=0, result=Result.PASS))

    assert buf.getvalue() == "ok 5\nok 6\n"


@pytest.mark.parametrize(
    ("name", "line"),
    [
        ("C# compiler", "ok 1 C\\# compiler"),
        ("- leading dash", "ok 1 - - leading dash"),
        ("-", "ok 1 - -"),
        ("a \\# b", "ok 1 a \\\\# b"),
    ],
)
def test_names_round_trip(name: str, line: str) -> None:
    """Names with hashes or leading dashes are escaped and read back intact."""
    run = RunReport(
        plan=Plan(min=1, max=1),
        tests=[Report(num=1, result=Result.SKIP, name=name, skip_reason="later")],
    )
    buf = io.StringIO()
    w = TapWriter(buf)

    w.write_run(run)
    w.close()

    assert buf.getvalue() == f"1..1\n{line} # SKIP: later\n"
    buf.seek(0)
    assert read_tap(buf) == run
