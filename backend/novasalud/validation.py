from __future__ import annotations

from typing import Any

from .errors import ValidationError

# SQLite stores INTEGER as a signed 64-bit value
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def coerce_int(value: Any, message: str) -> int:
    """
    Strict integer coercion for JSON and query-string input.

    Accepts ints (not bools) and plain ASCII digit strings with an optional
    leading minus. Floats, decimals, scientific notation, underscores,
    non-ASCII digits and blanks are rejected with `message`.
    """
    if value is None:
        raise ValidationError(message)
    # bool is a subclass of int
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        digits = stripped[1:] if stripped.startswith("-") else stripped
        if not (digits.isascii() and digits.isdigit()):
            raise ValidationError(message)
        return int(stripped)
    raise ValidationError(message)


def coerce_positive_int(value: Any, message: str) -> int:
    number = coerce_int(value, message)
    if number <= 0:
        raise ValidationError(message)
    return number


def fits_int64(number: int) -> bool:
    """Whether `number` can be bound as a database INTEGER; larger ids match no row."""
    return INT64_MIN <= number <= INT64_MAX
