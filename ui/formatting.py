"""Presence-checked value formatting for the report cards.

Every helper returns None for an absent value so callers can drop the row.
"""

from __future__ import annotations

import math
from typing import Any


def _is_absent(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def format_plain(value: Any) -> str | None:
    """Render a value as-is; whole floats drop their trailing '.0'."""
    if _is_absent(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_grouped(value: Any) -> str | None:
    """Thousands-separated number with at most three fraction digits."""
    if _is_absent(value):
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    if math.isinf(value):
        return "∞" if value > 0 else "-∞"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_currency(value: Any, grouped: bool = False) -> str | None:
    rendered = format_grouped(value) if grouped else format_plain(value)
    return None if rendered is None else f"${rendered}"


def format_percent(value: Any) -> str | None:
    """Fraction to percent with two decimals: 0.1234 -> '12.34%'."""
    if _is_absent(value) or isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return f"{value * 100:.2f}%"


def format_upper(value: str | None) -> str | None:
    return None if value is None else value.upper()


def join_address(*parts: str | None) -> str | None:
    """Join address1, city, 'state zip', country while skipping absent parts."""
    street, city, state, zip_code, country = parts
    region = " ".join(part for part in (state, zip_code) if part)
    pieces = [piece for piece in (street, city, region, country) if piece]
    return ", ".join(pieces) if pieces else None
