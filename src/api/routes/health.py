"""Health check routes."""

from fastapi import APIRouter

from src.jobs.harvester import get_harvester

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health() -> dict:
    """Health check endpoint, with crawl activity."""
    harvester = get_harvester()
    return {
        "status": True,
        "scraping": harvester.is_running,
        "scrapeCount": harvester.state.scrape_count,
    }
