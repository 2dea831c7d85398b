"""Typed parsing of raw query parameters.

Each function takes the raw string (or None when the parameter is absent) and
returns a validated value or raises a ReportError subclass.
"""

from __future__ import annotations

import math
from typing import Optional

from app.core.settings import settings
from app.verticals.sales.errors import MissingParameterError, ParameterValidationError


def _is_blank(raw: Optional[str]) -> bool:
    return raw is None or str(raw).strip() == ""


def _coerce_int(raw: str, *, name: str) -> int:
    s = str(raw).strip()
    try:
        n = float(s)
    except ValueError:
        raise ParameterValidationError(f"{name} must be a number, got {raw!r}", param=name)
    if not math.isfinite(n) or not n.is_integer():
        raise ParameterValidationError(f"{name} must be an integer, got {raw!r}", param=name)
    return int(n)


def parse_year(raw: Optional[str], *, name: str = "year") -> int:
    if _is_blank(raw):
        raise ParameterValidationError(f"{name} is required", param=name)
    year = _coerce_int(raw, name=name)
    if not settings.MIN_YEAR <= year <= settings.MAX_YEAR:
        raise ParameterValidationError(
            f"{name} must be between {settings.MIN_YEAR} and {settings.MAX_YEAR}, got {year}",
            param=name,
        )
    return year


def parse_optional_year(raw: Optional[str], *, name: str = "year") -> Optional[int]:
    if _is_blank(raw):
        return None
    return parse_year(raw, name=name)


def parse_month(raw: Optional[str], *, name: str = "month") -> int:
    if _is_blank(raw):
        raise ParameterValidationError(f"{name} is required", param=name)
    month = _coerce_int(raw, name=name)
    if not 1 <= month <= 12:
        raise ParameterValidationError(f"{name} must be between 1 and 12, got {month}", param=name)
    return month


def clamp_limit(value: int) -> int:
    return max(settings.MIN_LIMIT, min(settings.MAX_LIMIT, value))


def parse_limit(raw: Optional[str], *, name: str = "limit") -> int:
    """Out-of-range values are clamped, not rejected."""
    if _is_blank(raw):
        return settings.DEFAULT_LIMIT
    return clamp_limit(_coerce_int(raw, name=name))


def parse_optional_id(raw: Optional[str]) -> Optional[str]:
    if _is_blank(raw):
        return None
    return str(raw).strip()


def require_id(raw: Optional[str], *, name: str) -> str:
    value = parse_optional_id(raw)
    if value is None:
        raise MissingParameterError(f"Missing {name}", param=name)
    return value
