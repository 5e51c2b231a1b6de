"""
Payload and query-parameter checks shared by the resource services.

Each check raises `ValidationError` carrying the caller's field-level message.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from .errors import ValidationError

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_WHOLE_INT = re.compile(r"\s*([+-]?\d+)\s*")

# `id` columns are SERIAL (int4).
ROW_ID_MIN = -(2**31)
ROW_ID_MAX = 2**31 - 1


def parse_int_or_default(raw: Any, default: int) -> int:
    """
    Parse the leading integer of `raw` ("12abc" -> 12).

    Absent, non-numeric, zero and negative values all yield `default`.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(str(raw))
        if match is None:
            return default
        value = int(match.group(1))
    if value <= 0:
        return default
    return value


def parse_row_id(raw: str) -> int | None:
    """
    Path id as stored in the `id` column, or None when no row could have it
    (not an integer, or outside int4).
    """
    match = _WHOLE_INT.fullmatch(raw or "")
    if match is None:
        return None
    value = int(match.group(1))
    if not ROW_ID_MIN <= value <= ROW_ID_MAX:
        return None
    return value


def require_fields(payload: dict[str, Any], fields: Iterable[str], message: str, *, operation: str = "") -> None:
    missing = [f for f in fields if not payload.get(f)]
    if missing:
        raise ValidationError(message, operation=operation, params={"missing": missing})


def require_strings(payload: dict[str, Any], fields: Iterable[str], message: str, *, operation: str = "") -> None:
    wrong = [f for f in fields if not isinstance(payload.get(f), str)]
    if wrong:
        raise ValidationError(message, operation=operation, params={"not_strings": wrong})


def require_number(value: Any, message: str, *, operation: str = "") -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(message, operation=operation, params={"value": value})


def forbid_digits(value: str, message: str, *, operation: str = "") -> None:
    if any(ch.isdecimal() for ch in value):
        raise ValidationError(message, operation=operation, params={"value": value})
