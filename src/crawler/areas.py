"""
Monitored areas.

Fixed, ordered list of areas crawled on every run.
"""

from typing import NamedTuple


class Area(NamedTuple):
    """A named geographic zone and its URL path segment."""

    name: str
    slug: str


AREAS: tuple[Area, ...] = (
    Area("Leštane", "beograd-grocka-lestane"),
    Area("Boleč", "beograd-grocka-bolec"),
    Area("Vinča", "beograd-grocka-vinca"),
    Area("Kaluđerica", "beograd-grocka-kaludjerica"),
    Area("Grocka", "beograd-grocka"),
    Area("Voždovac", "beograd-vozdovac"),
    Area("Barajevo", "beograd-barajevo"),
    Area("Zvezdara", "beograd-zvezdara"),
)


def get_area_names() -> list[str]:
    """Get display names of all monitored areas, in crawl order."""
    return [area.name for area in AREAS]
