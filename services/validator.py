"""Field-level validation rules for submitted readings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Tuple

from models.readings import SUPPORTED_SENSORS, Reading

BLANK = "cannot be blank"
NOT_ALLOWED = "must be a valid value"


@dataclass(frozen=True)
class FieldViolation:
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationError(ValueError):
    """Raised when a reading breaks one or more field rules."""

    def __init__(self, violations: Iterable[FieldViolation]) -> None:
        self.violations: Tuple[FieldViolation, ...] = tuple(violations)
        super().__init__(format_violations(self.violations))


@dataclass(frozen=True)
class ValidationResult:
    violations: Tuple[FieldViolation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def message(self) -> str:
        return format_violations(self.violations)

    def raise_for_violations(self) -> None:
        if self.violations:
            raise ValidationError(self.violations)


def format_violations(violations: Iterable[FieldViolation]) -> str:
    """Render violations as ``field: message; field: message.``"""
    parts = [str(violation) for violation in violations]
    if not parts:
        return ""
    return "; ".join(parts) + "."


_Rule = Tuple[str, Callable[[Reading], bool], str]

_RULES: Tuple[_Rule, ...] = (
    ("timestamp", lambda reading: reading.timestamp != 0, BLANK),
    ("terminal", lambda reading: bool(reading.terminal), BLANK),
    ("sensor", lambda reading: reading.sensor in SUPPORTED_SENSORS, NOT_ALLOWED),
    ("value", lambda reading: reading.value != 0, BLANK),
)


def validate_reading(reading: Reading) -> ValidationResult:
    """Check every rule and collect all violations, sorted by field name."""
    violations = [
        FieldViolation(field=field, message=message)
        for field, predicate, message in _RULES
        if not predicate(reading)
    ]
    violations.sort(key=lambda violation: violation.field)
    return ValidationResult(violations=tuple(violations))
