"""
Field normalization module for listing pages.

Converts raw locale-formatted tokens (sr-RS: "." groups thousands,
"," marks decimals) into numeric values. Every function returns None
instead of raising when the input carries no usable number.
"""

import math
import re

# Leading decimal literal, same prefix rule as a JS parseFloat
_LEADING_FLOAT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")

# First numeric token with grouping/decimal separators (e.g. "1.250,5")
_NUMERIC_TOKEN = re.compile(r"([\d.,]+)")


def _leading_float(text: str) -> float | None:
    """
    Parse the longest leading decimal literal of text.

    Examples:
        >>> _leading_float("120.5m2")
        120.5
        >>> _leading_float("1.2.3")
        1.2
        >>> _leading_float("abc")
        None
    """
    match = _LEADING_FLOAT.match(text.strip())
    if not match:
        return None
    return float(match.group(0))


def parse_price(raw: str | None) -> float | None:
    """
    Parse a total price string.

    All dots are grouping separators and are dropped; commas become
    decimal points.

    Args:
        raw: Price string (e.g., "125.000", "99.500,50")

    Returns:
        Price as float, or None if empty/unparseable

    Examples:
        >>> parse_price("125.000")
        125000.0
        >>> parse_price("99.500,50")
        99500.5
        >>> parse_price("")
        None
    """
    if not raw:
        return None

    cleaned = raw.replace(".", "").replace(",", ".").strip()
    return _leading_float(cleaned)


def parse_area_value(raw: str | None) -> float | None:
    """
    Parse a floor/plot area string.

    Only the first comma is treated as a decimal mark; dots are kept,
    so "1.200" is read as 1.2 (area strings on the source are not
    dot-grouped).

    Args:
        raw: Area string (e.g., "120 m2", "85,5 m2", "6 ari")

    Returns:
        Area as float, or None if no numeric token is found

    Examples:
        >>> parse_area_value("120 m2")
        120.0
        >>> parse_area_value("85,5 m2")
        85.5
        >>> parse_area_value("n/a")
        None
    """
    if not raw:
        return None

    match = _NUMERIC_TOKEN.search(re.sub(r"\s", "", raw))
    if not match:
        return None
    return _leading_float(match.group(1).replace(",", ".", 1))


def parse_price_per_unit(raw: str | None) -> float | None:
    """
    Parse a price-per-m² string.

    Unlike area strings, price-per-unit strings are dot-grouped, so all
    dots are stripped before the first comma becomes the decimal mark.

    Args:
        raw: Price-per-unit string (e.g., "1.250 €/m2")

    Returns:
        Price per m² as float, or None if no numeric token is found

    Examples:
        >>> parse_price_per_unit("1.250 €/m2")
        1250.0
        >>> parse_price_per_unit("980,5 €/m2")
        980.5
    """
    if not raw:
        return None

    match = _NUMERIC_TOKEN.search(re.sub(r"\s", "", raw))
    if not match:
        return None
    return _leading_float(match.group(1).replace(".", "").replace(",", ".", 1))


def parse_count(raw: str | None) -> int:
    """
    Parse a small integer counter (e.g., image count), 0 when unparseable.

    Examples:
        >>> parse_count(" 12 ")
        12
        >>> parse_count("")
        0
    """
    if not raw:
        return 0
    match = re.match(r"[+-]?\d+", raw.strip())
    return int(match.group(0)) if match else 0


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves rounding up.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(1234.49)
        1234
    """
    return math.floor(value + 0.5)


def is_usable(value: float | None) -> bool:
    """Whether a price-like value can take part in statistics (present and > 0)."""
    return value is not None and value > 0
