from __future__ import annotations

import csv
import math
from pathlib import Path
from typing import Any, Iterable, Optional


# =========================
# Parsing config (strict)
# =========================

CSV_DELIMITER = ","
TRUE_VALUES = {"true", "1", "yes", "oui", "y"}


class ParseError(ValueError):
    """Raised when a file cannot be parsed deterministically according to our strict rules."""


def _trim(v: Any) -> Any:
    if isinstance(v, str):
        return v.strip()
    return v


def _is_row_empty(values: Iterable[Any]) -> bool:
    for v in values:
        if v is None:
            continue
        if isinstance(v, str) and v.strip() == "":
            continue
        return False
    return True


def require_headers(headers: list[str], required: list[str], *, source: str) -> None:
    """
    Fail fast if required headers are missing.
    Comparison is case-insensitive + trims whitespace.
    """
    normalized = {h.strip().lower() for h in headers if h is not None}
    missing = [h for h in required if h.strip().lower() not in normalized]
    if missing:
        raise ParseError(f"{source}: missing required headers: {missing}")


def parse_csv(
    file_path: Path,
    *,
    required_headers: Optional[list[str]] = None,
    delimiter: str = CSV_DELIMITER,
) -> list[dict[str, Any]]:
    """
    Strict CSV parsing:
    - delimiter fixed (default ',')
    - quoted cells follow the csv module rules
    - trims whitespace on headers + cells
    - skips empty lines
    - headers required (first non-empty row)
    - returns List[dict]
    """
    if not file_path.exists():
        raise ParseError(f"CSV not found: {file_path}")

    rows: list[dict[str, Any]] = []

    with file_path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f, delimiter=delimiter)

        # first non-empty row is the header
        header_row: Optional[list[str]] = None
        for raw in reader:
            if _is_row_empty(raw):
                continue
            header_row = [str(_trim(c)) for c in raw]
            break

        if header_row is None:
            raise ParseError(f"CSV empty/no header: {file_path}")

        headers = [h.strip() for h in header_row]
        if any(h == "" for h in headers):
            raise ParseError(f"CSV has empty header names: {file_path}")

        if required_headers:
            require_headers(headers, required_headers, source=str(file_path))

        for line_no, raw in enumerate(reader, start=2):
            if _is_row_empty(raw):
                continue

            # strict: row length must match header length
            if len(raw) != len(headers):
                raise ParseError(
                    f"CSV row {line_no} has {len(raw)} cols but header has {len(headers)} cols: {file_path}"
                )

            rows.append({h: _trim(raw[i]) for i, h in enumerate(headers)})

    return rows


def normalize_header(h: str) -> str:
    return (h or "").strip().lower()


def get_cell(row: dict[str, Any], header_aliases: list[str]) -> Any:
    """
    Header lookup case-insensitive, supports aliases.
    Uses the original keys as provided by parse_csv.
    """
    norm_map = {normalize_header(k): k for k in row.keys()}
    for alias in header_aliases:
        k = norm_map.get(normalize_header(alias))
        if k is not None:
            return row.get(k)
    return None


def to_str(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def to_bool(v: Any, default: bool = True) -> bool:
    s = to_str(v).lower()
    if s == "":
        return default
    return s in TRUE_VALUES


def parse_number(value: Any, *, source: str) -> float:
    """Decimal parsing with '.' as separator; empty or non-numeric cells are errors."""
    s = to_str(value)
    if s == "":
        raise ParseError(f"{source}: empty number")
    try:
        n = float(s)
    except ValueError:
        raise ParseError(f"{source}: invalid number: {value!r}")
    if not math.isfinite(n):
        raise ParseError(f"{source}: invalid number: {value!r}")
    return n


def parse_int(value: Any, *, source: str) -> int:
    n = parse_number(value, source=source)
    if not n.is_integer():
        raise ParseError(f"{source}: expected an integer, got {value!r}")
    return int(n)
