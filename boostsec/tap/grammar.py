"""Classify single lines of TAP output."""

import re
from dataclasses import dataclass

_RE_BAILOUT = re.compile(r"Bail out!\s*(?P<reason>.*)")
_RE_PLAN = re.compile(r"(?P<min>\d+)\.\.(?P<max>\d+)\s*")
_RE_RESULT = re.compile(
    r"(?P<negated>not\s+)?ok\b\s*(?:(?P<num>\d+)\b)?\s*"
    r"(?P<name>(?:\\#|[^#])*?)\s*(?:#\s*(?P<directive>.*))?"
)
_RE_DIRECTIVE = re.compile(
    r"(?:(?P<skip>skip)[^\s:]*|(?P<todo>todo)\b)\s*:?\s*(?P<reason>.*)",
    re.IGNORECASE,
)


@dataclass(frozen=True, kw_only=True)
class PlanLine:
    """A ``min..max`` plan line."""

    min: int
    max: int


@dataclass(frozen=True, kw_only=True)
class Directive:
    """A ``# SKIP`` or ``# TODO`` suffix on a result line."""

    skip: bool = False
    todo: bool = False
    reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class ResultLine:
    """An ``ok`` or ``not ok`` line."""

    ok: bool
    num: int | None = None
    name: str = ""
    directive: Directive | None = None


@dataclass(frozen=True, kw_only=True)
class DiagnosticLine:
    """A free-standing ``#`` line."""

    text: str


@dataclass(frozen=True, kw_only=True)
class BailOutLine:
    """A ``Bail out!`` line."""

    reason: str


@dataclass(frozen=True, kw_only=True)
class UnrecognizedLine:
    """Anything else; ignored by the reader."""

    text: str


Line = PlanLine | ResultLine | DiagnosticLine | BailOutLine | UnrecognizedLine


def parse_directive(text: str) -> Directive | None:
    """Parse the text following ``#`` on a result line.

    The keyword (``SKIP`` also accepts longer words such as ``skipped``), an
    optional colon and the whitespace around it are stripped from the reason.

    Returns:
        The directive, or None if the comment is not a SKIP or TODO directive

    """
    m = _RE_DIRECTIVE.match(text)
    if not m:
        return None
    reason = m.group("reason").strip() or None
    if m.group("skip"):
        return Directive(skip=True, reason=reason)
    return Directive(todo=True, reason=reason)


def classify_line(line: str) -> Line:
    """Classify one line of TAP output.

    Args:
        line: A single line; a trailing line terminator is ignored

    Returns:
        The parsed variant for the line

    """
    line = line.rstrip("\r\n")

    m = _RE_BAILOUT.match(line)
    if m:
        return BailOutLine(reason=m.group("reason").rstrip())

    m = _RE_PLAN.fullmatch(line)
    if m:
        return PlanLine(min=int(m.group("min")), max=int(m.group("max")))

    if line.startswith("#"):
        text = line[1:]
        if text.startswith(" "):
            text = text[1:]
        return DiagnosticLine(text=text)

    m = _RE_RESULT.fullmatch(line)
    if m:
        name = m.group("name")
        if name.startswith("- "):
            name = name[2:].lstrip()
        elif name == "-":
            name = ""
        name = name.replace("\\#", "#")
        directive_text = m.group("directive")
        return ResultLine(
            ok=m.group("negated") is None,
            num=int(m.group("num")) if m.group("num") is not None else None,
            name=name,
            directive=(
                parse_directive(directive_text) if directive_text is not None else None
            ),
        )

    return UnrecognizedLine(text=line)
