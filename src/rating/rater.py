"""
Listing rating engine.

Rates each listing 1-10 by comparing its price per m² with the median of
the whole harvest, adjusted by how it compares within its own area and by
plot size. Listings rated 9 or 10 get the "MUST BUY" label.

The engine is a pure function of its input: rating the same listing set
twice gives identical output, so it can run on partial crawl snapshots.
"""

from collections.abc import Sequence
from functools import cmp_to_key

from loguru import logger

from src.modules.listings import Listing, RatedListing
from src.rating.statistics import MarketStats, compute_market_stats
from src.utils.normalizers import is_usable, round_half_up

rater_log = logger.bind(module="Rater")

MUST_BUY_LABEL = "MUST BUY"
MUST_BUY_MIN_RATING = 9

MIN_RATING = 1
MAX_RATING = 10
DEFAULT_RATING = 5

NO_PRICE_DATA_REASON = "Insufficient data: no listing has a price to compare against"
INSUFFICIENT_DATA_REASON = "Insufficient price data"
TOTAL_PRICE_REASON = "Rated by total price (no m² data)"

# (max ratio to global median price per m², score), checked in order
PPS_LADDER: tuple[tuple[float, int], ...] = (
    (0.4, 10),
    (0.55, 9),
    (0.7, 8),
    (0.85, 7),
    (1.0, 6),
    (1.15, 5),
    (1.3, 4),
    (1.5, 3),
    (1.8, 2),
)
PPS_LADDER_FLOOR = 1

# (max ratio to global median total price, score), weaker signal, lower ceiling
TOTAL_PRICE_LADDER: tuple[tuple[float, int], ...] = (
    (0.5, 8),
    (0.75, 7),
    (1.0, 6),
    (1.25, 5),
    (1.5, 4),
)
TOTAL_PRICE_LADDER_FLOOR = 3

# Ratio to own area median price per m²
AREA_BEST_RATIO = 0.6
AREA_BELOW_RATIO = 0.85
AREA_ABOVE_RATIO = 1.2

# Plot bonus
LAND_MIN_SQM = 500
LAND_MAX_PRICE_PER_SQM = 100
LAND_LARGE_SQM = 800

# Informational thresholds
LARGE_FLOOR_SQM = 150
SMALL_FLOOR_SQM = 50
LOW_TOTAL_PRICE = 30_000
HIGH_TOTAL_PRICE = 200_000


def _ladder_score(
    ratio: float,
    ladder: tuple[tuple[float, int], ...],
    floor: int,
) -> int:
    """Map a ratio to the score of the first threshold it does not exceed."""
    for threshold, score in ladder:
        if ratio <= threshold:
            return score
    return floor


def _deviation_reason(ratio: float) -> str:
    """Describe how far a price per m² sits from the median."""
    percent = round_half_up(abs(1 - ratio) * 100)
    if percent == 0:
        return "€/m² at median"
    direction = "below" if ratio < 1 else "above"
    return f"€/m² is {percent}% {direction} median"


def _clamp(score: int) -> int:
    return max(MIN_RATING, min(MAX_RATING, score))


def _listing_fields(listing: Listing) -> dict:
    """Source listing fields only, dropping any earlier rating."""
    return listing.model_dump(include=set(Listing.model_fields))


def rate_listing(listing: Listing, stats: MarketStats) -> RatedListing:
    """
    Rate one listing against precomputed statistics.

    Adjustments are additive and clamped once at the end, so a listing
    qualifying for both the area and the plot bonus gets both.

    Args:
        listing: Listing to rate
        stats: Statistics of the listing set it belongs to

    Returns:
        RatedListing
    """
    score = DEFAULT_RATING
    reason = INSUFFICIENT_DATA_REASON
    pros: list[str] = []
    cons: list[str] = []

    pps = listing.price_per_sqm
    price = listing.price

    if is_usable(pps) and stats.median_pps:
        ratio = pps / stats.median_pps
        score = _ladder_score(ratio, PPS_LADDER, PPS_LADDER_FLOOR)
        reason = _deviation_reason(ratio)

        # Compare with own area
        area = stats.areas.get(listing.neighborhood)
        if area and area.median:
            area_ratio = pps / area.median
            if area_ratio <= AREA_BEST_RATIO:
                score = min(MAX_RATING, score + 1)
                pros.append(f"Best price in {listing.neighborhood}")
            elif area_ratio <= AREA_BELOW_RATIO:
                pros.append(f"Below {listing.neighborhood} median")
            elif area_ratio > AREA_ABOVE_RATIO:
                cons.append(f"Above {listing.neighborhood} median")

    elif is_usable(price) and stats.median_price:
        ratio = price / stats.median_price
        score = _ladder_score(ratio, TOTAL_PRICE_LADDER, TOTAL_PRICE_LADDER_FLOOR)
        reason = TOTAL_PRICE_REASON

    # Plot bonus, independent of the price path taken
    land = listing.land_sqm
    if land is not None and land > LAND_MIN_SQM and is_usable(price):
        if price / land < LAND_MAX_PRICE_PER_SQM:
            score = min(MAX_RATING, score + 1)
            pros.append("Large plot at low land price")
        elif land > LAND_LARGE_SQM:
            pros.append(f"Very large plot ({round_half_up(land)} m²)")

    # Informational only
    sqm = listing.sqm
    if is_usable(sqm):
        if sqm > LARGE_FLOOR_SQM:
            pros.append(f"Spacious ({round_half_up(sqm)} m²)")
        elif sqm < SMALL_FLOOR_SQM:
            cons.append(f"Small floor area ({round_half_up(sqm)} m²)")

    if is_usable(price):
        if price < LOW_TOTAL_PRICE:
            pros.append("Low total price")
        elif price > HIGH_TOTAL_PRICE:
            cons.append("High total price")

    score = _clamp(score)

    return RatedListing(
        **_listing_fields(listing),
        rating=score,
        label=MUST_BUY_LABEL if score >= MUST_BUY_MIN_RATING else "",
        rating_reason=reason,
        rating_pros=pros,
        rating_cons=cons,
        median_pps=round_half_up(stats.median_pps or 0),
    )


def _compare(a: RatedListing, b: RatedListing) -> int:
    """Rating descending, then price per m² ascending, then price ascending."""
    if a.rating != b.rating:
        return b.rating - a.rating
    if is_usable(a.price_per_sqm) and is_usable(b.price_per_sqm):
        return _sign(a.price_per_sqm - b.price_per_sqm)
    if is_usable(a.price) and is_usable(b.price):
        return _sign(a.price - b.price)
    return 0


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def rate_listings(listings: Sequence[Listing]) -> list[RatedListing]:
    """
    Rate and rank a deduplicated listing set.

    Args:
        listings: Listings to rate

    Returns:
        RatedListings sorted best first; ties keep their input order
    """
    if not listings:
        return []

    if not any(is_usable(listing.price) for listing in listings):
        rater_log.debug(f"No priced listings among {len(listings)}, neutral ratings")
        return [
            RatedListing(
                **_listing_fields(listing),
                rating=DEFAULT_RATING,
                label="",
                rating_reason=NO_PRICE_DATA_REASON,
            )
            for listing in listings
        ]

    stats = compute_market_stats(listings)
    rated = [rate_listing(listing, stats) for listing in listings]

    # list.sort is stable, equal keys keep input order
    rated.sort(key=cmp_to_key(_compare))

    must_buy = sum(1 for item in rated if item.label == MUST_BUY_LABEL)
    rater_log.debug(
        f"Rated {len(rated)} listings (median €/m²={rated[0].median_pps}, "
        f"{must_buy} MUST BUY)"
    )
    return rated
