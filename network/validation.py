"""Pure input validators.

Each validator takes the raw text typed by the user and returns a
``ValidationResult``. Nothing here prompts or prints, so the interactive
reader and the graph store share the same rules.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

FORBIDDEN_NAME_CHARS = (",", "\n", "\r")


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Either a sanitized value or an error message."""

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def validate_int(
    raw: str,
    min_value: int | None = None,
    max_value: int | None = None,
) -> ValidationResult[int]:
    """Parse an integer and enforce an inclusive range."""
    try:
        value = int(raw.strip())
    except ValueError:
        return ValidationResult(error="Invalid input. Please enter a valid number.")
    if (min_value is not None and value < min_value) or (
        max_value is not None and value > max_value
    ):
        return ValidationResult(error=_range_message(min_value, max_value))
    return ValidationResult(value=value)


def validate_amount(raw: str) -> ValidationResult[float]:
    """Parse a non-negative budget, rounded to cents."""
    try:
        value = float(raw.strip())
    except ValueError:
        return ValidationResult(error="Invalid input. Please enter a valid amount.")
    return check_amount(value)


def check_amount(value: float) -> ValidationResult[float]:
    """Validate an already numeric budget."""
    if not math.isfinite(value):
        return ValidationResult(error="Budget must be a finite number.")
    if value < 0:
        return ValidationResult(error="Budget cannot be negative.")
    return ValidationResult(value=round(value, 2))


def validate_name(raw: str) -> ValidationResult[str]:
    """Trim a city name and reject empty or delimiter-breaking input."""
    name = raw.strip()
    if not name:
        return ValidationResult(error="Input cannot be empty.")
    if "," in name:
        return ValidationResult(error="Input cannot contain commas.")
    if any(ch in name for ch in FORBIDDEN_NAME_CHARS):
        return ValidationResult(error="Input cannot contain line breaks.")
    return ValidationResult(value=name)


def _range_message(min_value: int | None, max_value: int | None) -> str:
    if min_value is not None and max_value is not None:
        return f"Please enter a number between {min_value} and {max_value}."
    if min_value is not None:
        return f"Please enter a number of at least {min_value}."
    return f"Please enter a number of at most {max_value}."
