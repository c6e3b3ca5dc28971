"""Interpretation rules for raw HubSpot deal and contact property values.

HubSpot returns every property as a string (or null), and the offer page was
built against JavaScript ``parseFloat``/``parseInt``, so numeric parsing takes
the longest numeric prefix of the string rather than requiring a clean number.
"""
from __future__ import annotations

import math
import re
from typing import Any

_DECIMAL_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INTEGER_PREFIX = re.compile(r"[+-]?\d+")


def parse_decimal(value: Any, default: float = 0.0) -> float:
    """Parse a decimal from the leading numeric part of ``value``.

    ``"2.5"`` -> 2.5, ``"1500.00 MXN"`` -> 1500.0, ``"abc"``/None/"" -> default.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int | float):
        try:
            result = float(value)
        except OverflowError:
            return default
    else:
        match = _DECIMAL_PREFIX.match(str(value).lstrip())
        if match is None:
            return default
        result = float(match.group())
    return result if math.isfinite(result) else default


def parse_integer(value: Any, default: int = 0) -> int:
    """Parse a base-10 integer from the leading digits of ``value``.

    ``"12"`` -> 12, ``"12.9"`` -> 12, ``12.9`` -> 12, ``"x"``/None -> default.
    """
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return math.trunc(value) if math.isfinite(value) else default
    match = _INTEGER_PREFIX.match(str(value).lstrip())
    if match is None:
        return default
    return int(match.group())


def parse_flag(value: Any) -> bool:
    """Decode a HubSpot boolean-like property.

    Only the boolean ``True`` and the exact string ``"true"`` count as set.
    """
    return value is True or value == "true"


def normalize_rate(value: Any, default: float) -> float:
    """Weekly interest rate as a fraction.

    Values above 1 are read as whole percentages (``2.5`` -> ``0.025``).
    Exactly ``1`` is ambiguous between 1% and 100% and is kept as ``1.0``.
    A numeric ``0`` stays ``0``; the deployed Cloud Function
    (``parseFloat(x) || 0.0288``) replaced it with the fallback instead.
    """
    rate = parse_decimal(value, default=default)
    if rate > 1:
        rate = rate / 100
    return rate


def contact_display_name(
    firstname: str | None, lastname: str | None, fallback: str
) -> str:
    name = f"{firstname or ''} {lastname or ''}".strip()
    return name or fallback
