"""Errors reported when a TAP run does not match its plan."""

from boostsec.tap.models.report import RunReport


class TapError(Exception):
    """Base class for failures of a TAP run.

    ``report`` holds whatever was parsed before the failure, once the reader
    has reconciled it.
    """

    report: RunReport | None = None


class NoTestsError(TapError):
    """Neither a plan nor any result line was seen."""

    def __init__(self) -> None:
        """Initialize with the fixed message."""
        super().__init__("no tests")


class MissingResultsError(TapError):
    """The plan declared test numbers that never reported."""

    def __init__(self, ranges: str) -> None:
        """Initialize with the missing numbers rendered as ranges."""
        super().__init__(f"no result for {ranges}")
        self.ranges = ranges


class UnexpectedExtraResultError(TapError):
    """A result arrived beyond the planned maximum or repeated a number."""

    def __init__(self, num: int) -> None:
        """Initialize with the offending test number."""
        super().__init__(f"unexpected extra result for {num}")
        self.num = num


class AbortedError(TapError):
    """The test program bailed out."""

    def __init__(self, reason: str) -> None:
        """Initialize with the bail-out reason."""
        super().__init__(f"testing aborted: {reason}")
        self.reason = reason


class PlanTooLargeError(TapError):
    """The plan declared more tests than a run report can hold."""

    def __init__(self, max_num: int, limit: int) -> None:
        """Initialize with the planned maximum and the allowed limit."""
        super().__init__(f"plan of {max_num} tests exceeds limit of {limit}")
        self.max_num = max_num
        self.limit = limit
