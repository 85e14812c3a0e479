"""Modules package - Domain models."""

from src.modules.listings import (
    CrawlResult,
    Listing,
    Progress,
    RatedListing,
)

__all__ = [
    # Listings
    "Listing",
    "RatedListing",
    "Progress",
    "CrawlResult",
]
