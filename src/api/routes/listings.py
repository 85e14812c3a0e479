"""Listing routes."""

from fastapi import APIRouter
from loguru import logger

from src.jobs.harvester import get_harvester

listings_log = logger.bind(module="Listings")

router = APIRouter(prefix="/api", tags=["Listings"])


@router.get("/listings")
async def get_listings() -> dict:
    """Get the current rated listings with run status and stats."""
    return get_harvester().snapshot()


@router.get("/scrape")
async def trigger_scrape() -> dict:
    """Manually trigger a fresh crawl."""
    if not get_harvester().trigger():
        return {"status": "already_scraping"}
    listings_log.info("Manual crawl triggered")
    return {"status": "started"}
