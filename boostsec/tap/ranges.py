"""Render sets of test numbers as compact ranges like ``2, 4-5``."""

from collections.abc import Iterable


def format_ranges(numbers: Iterable[int]) -> str:
    """Render distinct integers as comma-separated runs.

    Args:
        numbers: Distinct integers, in any order

    Returns:
        Runs of consecutive numbers in ascending order, e.g. ``"2, 4-5"``

    """
    ordered = sorted(numbers)
    if not ordered:
        return ""

    runs: list[tuple[int, int]] = []
    first = last = ordered[0]
    for num in ordered[1:]:
        if num == last + 1:
            last = num
            continue
        runs.append((first, last))
        first = last = num
    runs.append((first, last))

    return ", ".join(
        str(start) if start == end else f"{start}-{end}" for start, end in runs
    )


def parse_ranges(text: str) -> list[int]:
    """Expand a string produced by ``format_ranges`` back into numbers.

    Raises:
        ValueError: If a run is not a number or a ``first-last`` pair

    """
    numbers: list[int] = []
    if not text.strip():
        return numbers

    for part in text.split(","):
        start_text, sep, end_text = part.strip().partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if sep else start
        except ValueError as e:
            raise ValueError(f"Invalid range {part.strip()!r} in {text!r}") from e
        if end < start:
            raise ValueError(f"Descending range {part.strip()!r} in {text!r}")
        numbers.extend(range(start, end + 1))

    return numbers
