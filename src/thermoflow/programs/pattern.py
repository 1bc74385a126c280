"""Value extraction primitives shared by every backend.

A numeric field is located with a compiled regex that has exactly one capturing
group. Absence of the field and a captured text that is not a number are treated
the same way: the field's default is returned. Field-level failures never raise,
so one missing optional section cannot abort the extraction of everything else.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from re import Pattern
from typing import Literal

from thermoflow.exceptions import InternalCodeError
from thermoflow.utils import logger


def _to_float(raw: str, pattern: Pattern[str]) -> float | None:
    try:
        # Fortran-style exponents (1.0D-03) appear in some program outputs
        return float(raw.replace("D", "E").replace("d", "e"))
    except ValueError:
        logger.debug(f"Could not parse '{raw}' as a number for pattern {pattern.pattern!r}")
        return None


def extract_value(text: str, pattern: Pattern[str], default: float = 0.0) -> float:
    """Return the number captured by the first match of `pattern`, or `default`."""
    match = pattern.search(text)
    if match is None:
        return default
    value = _to_float(match.group(1), pattern)
    return default if value is None else value


def extract_last_value(text: str, pattern: Pattern[str], default: float = 0.0) -> float:
    """Return the number captured by the last match of `pattern`, or `default`."""
    last = None
    for last in pattern.finditer(text):
        pass
    if last is None:
        return default
    value = _to_float(last.group(1), pattern)
    return default if value is None else value


def extract_optional(text: str, pattern: Pattern[str]) -> float | None:
    """Like `extract_value`, but absence (or a malformed number) is reported as None."""
    match = pattern.search(text)
    if match is None:
        return None
    return _to_float(match.group(1), pattern)


def extract_last_optional(text: str, pattern: Pattern[str]) -> float | None:
    """Like `extract_last_value`, but absence (or a malformed number) is reported as None."""
    last = None
    for last in pattern.finditer(text):
        pass
    if last is None:
        return None
    return _to_float(last.group(1), pattern)


def first_marker(text: str, patterns: Sequence[Pattern[str]]) -> str | None:
    """Return the text of the first pattern (in the given order) that matches anywhere in `text`."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return match.group(0)
    return None


@dataclass(frozen=True)
class FieldPattern:
    """Defines a numeric field and the pattern used to find it.

    Args:
        field_name: Name of the result field this pattern fills.
        pattern: Compiled regex with exactly one capturing group holding the number.
        default: Value used when the field is absent or malformed.
        occurrence: Whether the first or the last match in the text is used.
        description: Human-readable description of what this pattern extracts.
    """

    field_name: str
    pattern: Pattern[str]
    default: float = 0.0
    occurrence: Literal["first", "last"] = "first"
    description: str = ""

    def __post_init__(self) -> None:
        if self.pattern.groups != 1:
            raise InternalCodeError(
                f"Pattern for '{self.field_name}' must have exactly one capturing group, has {self.pattern.groups}"
            )
        if self.occurrence not in ("first", "last"):
            raise InternalCodeError(f"Unknown occurrence '{self.occurrence}' for '{self.field_name}'")

    def extract(self, text: str) -> float:
        if self.occurrence == "last":
            return extract_last_value(text, self.pattern, self.default)
        return extract_value(text, self.pattern, self.default)


def extract_fields(text: str, patterns: Sequence[FieldPattern]) -> dict[str, float]:
    """Apply every field pattern to `text`, keyed by field name."""
    values = {definition.field_name: definition.extract(text) for definition in patterns}
    logger.debug(f"Extracted fields: {values}")
    return values
