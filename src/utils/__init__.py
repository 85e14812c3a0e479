"""
Utility modules for the listing crawler.
"""

from src.utils.normalizers import (
    is_usable,
    parse_area_value,
    parse_count,
    parse_price,
    parse_price_per_unit,
    round_half_up,
)

__all__ = [
    "parse_price",
    "parse_area_value",
    "parse_price_per_unit",
    "parse_count",
    "round_half_up",
    "is_usable",
]
