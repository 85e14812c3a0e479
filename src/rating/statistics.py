"""
Price statistics for the rating engine.

Global and per-area percentiles of price per m² and total price,
recomputed from scratch on every rating pass.
"""

import math
from collections.abc import Sequence
from typing import NamedTuple

from src.modules.listings import Listing
from src.utils.normalizers import is_usable


class AreaStats(NamedTuple):
    """Price-per-m² distribution of one area."""

    median: float
    p25: float
    count: int


class MarketStats(NamedTuple):
    """
    Price distribution of a whole listing set.

    Attributes:
        median_pps: Median price per m² (None when no listing has one)
        median_price: Median total price (None when no listing has one)
        areas: Per-area price-per-m² stats keyed by area name
    """

    median_pps: float | None
    median_price: float | None
    areas: dict[str, AreaStats]


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Linear-interpolation percentile of an ascending sequence.

    Args:
        sorted_values: Values sorted ascending
        p: Percentile in [0, 100]

    Returns:
        Interpolated value, 0.0 for an empty sequence

    Examples:
        >>> percentile([1, 2, 3, 4], 50)
        2.5
        >>> percentile([10, 20, 30], 50)
        20
    """
    if not sorted_values:
        return 0.0

    idx = (p / 100) * (len(sorted_values) - 1)
    lower = math.floor(idx)
    upper = math.ceil(idx)
    if lower == upper:
        return sorted_values[lower]
    return sorted_values[lower] + (sorted_values[upper] - sorted_values[lower]) * (
        idx - lower
    )


def compute_area_stats(listings: Sequence[Listing]) -> dict[str, AreaStats]:
    """
    Compute per-area median/p25/count of positive price per m².

    Areas without any positive price per m² are absent from the result.
    """
    by_area: dict[str, list[float]] = {}
    for listing in listings:
        if is_usable(listing.price_per_sqm):
            by_area.setdefault(listing.neighborhood, []).append(listing.price_per_sqm)

    stats: dict[str, AreaStats] = {}
    for name, values in by_area.items():
        values.sort()
        stats[name] = AreaStats(
            median=percentile(values, 50),
            p25=percentile(values, 25),
            count=len(values),
        )
    return stats


def compute_market_stats(listings: Sequence[Listing]) -> MarketStats:
    """
    Compute global and per-area statistics of a listing set.

    Zero, negative and missing values are all excluded.

    Args:
        listings: Deduplicated listing set

    Returns:
        MarketStats
    """
    all_pps = sorted(
        item.price_per_sqm for item in listings if is_usable(item.price_per_sqm)
    )
    all_prices = sorted(item.price for item in listings if is_usable(item.price))

    return MarketStats(
        median_pps=percentile(all_pps, 50) if all_pps else None,
        median_price=percentile(all_prices, 50) if all_prices else None,
        areas=compute_area_stats(listings),
    )
