"""Listings module."""

from src.modules.listings.models import (
    CrawlResult,
    Listing,
    Progress,
    RatedListing,
)

__all__ = [
    "Listing",
    "RatedListing",
    "Progress",
    "CrawlResult",
]
