"""
Job Scheduler Module.

Re-crawls all areas on a fixed interval.
"""

from datetime import datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from config.settings import get_settings
from src.crawler import ConcurrentRunRejected
from src.jobs.harvester import get_harvester

scheduler_log = logger.bind(module="Scheduler")

# Scheduler instance
_scheduler = AsyncIOScheduler()


async def run_harvest_job() -> None:
    """Scheduled job to crawl all areas and refresh the rated listing set."""
    try:
        scheduler_log.info("Running scheduled harvest job...")
        result = await get_harvester().run()
        scheduler_log.info(
            f"Harvest job done: {len(result.listings)} listings, "
            f"{len(result.new_identifiers)} new"
        )
    except ConcurrentRunRejected:
        scheduler_log.info("Previous crawl still running, skipping this tick")
    except Exception as e:
        scheduler_log.error(f"Harvest job failed: {e}")


def setup_jobs() -> None:
    """
    Setup scheduler jobs.

    Interval job every CRAWLER_REFRESH_MINUTES, plus one immediate run
    at startup when CRAWLER_RUN_ON_STARTUP is set.
    """
    crawler = get_settings().crawler

    _scheduler.add_job(
        run_harvest_job,
        IntervalTrigger(minutes=crawler.refresh_minutes),
        id="harvest_job",
        name=f"Harvest (every {crawler.refresh_minutes} min)",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    scheduler_log.info(f"Harvest scheduled every {crawler.refresh_minutes} min")

    if crawler.run_on_startup:
        _scheduler.add_job(
            run_harvest_job,
            trigger="date",
            run_date=datetime.now(),
            id="harvest_job_startup",
            name="Startup harvest",
            replace_existing=True,
        )
        scheduler_log.info("Startup job scheduled to run immediately")


def start() -> None:
    """Start the scheduler."""
    setup_jobs()
    _scheduler.start()
    scheduler_log.info("Scheduler started")


def shutdown() -> None:
    """Shutdown the scheduler."""
    _scheduler.shutdown(wait=False)
    scheduler_log.info("Scheduler stopped")
