"""
Listing Models.

Pydantic models for harvested listings, their ratings and crawl progress.
Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing to camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Listing(CamelModel):
    """One harvested property."""

    # Deduplication key, empty for malformed entries
    id: str = ""

    title: str = ""
    link: str = ""
    location: str = ""
    neighborhood: str = Field(default="", description="Area display name")
    area_slug: str = ""

    # Numbers are None when the page gave nothing usable
    price: float | None = None
    price_per_sqm: float | None = None
    sqm: float | None = None
    land_sqm: float | None = None
    rooms: str | None = None

    image: str = ""
    img_count: int = 0


class RatedListing(Listing):
    """Listing with its comparative rating. Recomputed on every rating pass."""

    rating: int = Field(default=5, ge=1, le=10)
    label: str = ""
    rating_reason: str = ""
    rating_pros: list[str] = Field(default_factory=list)
    rating_cons: list[str] = Field(default_factory=list)
    # Dashboard reads medianPPS, not medianPps
    median_pps: int = Field(default=0, alias="medianPPS")

    @property
    def is_must_buy(self) -> bool:
        """Whether the listing carries the top-tier label."""
        return self.label == "MUST BUY"


class Progress(CamelModel):
    """Snapshot emitted after each crawled area."""

    areas_completed: int = 0
    total_areas: int = 0
    current_area_name: str = ""
    listings_so_far: list[RatedListing] = Field(default_factory=list)


class CrawlResult(CamelModel):
    """Final result of a crawl run."""

    listings: list[RatedListing] = Field(default_factory=list)
    new_identifiers: list[str] = Field(default_factory=list)
