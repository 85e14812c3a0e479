"""
Rating module for comparative listing scores.

This module rates listings against price statistics of the current
harvest and ranks them best first.
"""

from src.rating.rater import (
    MUST_BUY_LABEL,
    rate_listing,
    rate_listings,
)
from src.rating.statistics import (
    AreaStats,
    MarketStats,
    compute_area_stats,
    compute_market_stats,
    percentile,
)

__all__ = [
    # Statistics
    "percentile",
    "AreaStats",
    "MarketStats",
    "compute_area_stats",
    "compute_market_stats",
    # Rating
    "MUST_BUY_LABEL",
    "rate_listing",
    "rate_listings",
]
