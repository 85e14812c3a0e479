"""
Harvester Module.

Owns the process-lifetime crawl state: the current rated listing set,
known identifiers, run counters and live progress. Runs the orchestrator
and publishes partial results while a crawl is still going.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone

from loguru import logger

from src.crawler import ConcurrentRunRejected, CrawlOrchestrator, CrawlRun
from src.jobs.broadcaster import Broadcaster, get_broadcaster
from src.modules.listings import CrawlResult, Progress, RatedListing
from src.rating import MUST_BUY_LABEL
from src.utils.normalizers import is_usable, round_half_up

harvest_log = logger.bind(module="Harvester")


@dataclass
class HarvestState:
    """
    Crawl state shared with readers.

    `listings` is only ever replaced, never mutated, so readers can take
    the reference without locking.

    Attributes:
        listings: Latest rated listing set (partial while a run is active)
        last_scrape_time: ISO-8601 UTC time of the last completed run
        scrape_count: Number of completed runs
        known_ids: Every identifier seen by a completed run
        new_ids: Identifiers first seen by the last completed run
        progress: Live progress of the active run
    """

    listings: list[RatedListing] = field(default_factory=list)
    last_scrape_time: str | None = None
    scrape_count: int = 0
    known_ids: set[str] = field(default_factory=set)
    new_ids: list[str] = field(default_factory=list)
    progress: Progress = field(default_factory=Progress)


def compute_stats(listings: list[RatedListing]) -> dict:
    """
    Summarize a rated listing set for the dashboard.

    Args:
        listings: Rated listings, best first

    Returns:
        Dict with totals, per-area counts and average €/m², and median €/m²
    """
    by_neighborhood: dict[str, dict] = {}
    area_pps: dict[str, list[float]] = {}

    for listing in listings:
        entry = by_neighborhood.setdefault(listing.neighborhood, {"count": 0, "avgPPS": 0})
        entry["count"] += 1
        if is_usable(listing.price_per_sqm):
            area_pps.setdefault(listing.neighborhood, []).append(listing.price_per_sqm)

    for name, values in area_pps.items():
        by_neighborhood[name]["avgPPS"] = round_half_up(sum(values) / len(values))

    return {
        "total": len(listings),
        "withPrice": sum(1 for item in listings if is_usable(item.price)),
        "withPPS": sum(1 for item in listings if is_usable(item.price_per_sqm)),
        "mustBuy": sum(1 for item in listings if item.label == MUST_BUY_LABEL),
        "byNeighborhood": by_neighborhood,
        "medianPPS": listings[0].median_pps if listings else 0,
    }


class Harvester:
    """
    Runs crawls and keeps the latest results.

    Workflow per run:
    1. Start the orchestrator (rejected if a run is active)
    2. Publish each Progress snapshot's rated listings as they arrive
    3. On completion store the final set, detect new identifiers,
       and alert on new MUST BUY listings
    """

    def __init__(
        self,
        orchestrator: CrawlOrchestrator | None = None,
        broadcaster: Broadcaster | None = None,
        enable_broadcast: bool = True,
    ):
        """
        Initialize Harvester.

        Args:
            orchestrator: Crawl orchestrator (will be created if not provided)
            broadcaster: Alert broadcaster (will be created if not provided)
            enable_broadcast: Whether to send alerts (default True)
        """
        self._orchestrator = orchestrator or CrawlOrchestrator()
        self._broadcaster = broadcaster
        self._enable_broadcast = enable_broadcast
        self._task: asyncio.Task | None = None
        self._running = False
        self.state = HarvestState()
        self._reset_progress()

    @property
    def is_running(self) -> bool:
        """Whether a run is in progress, including storing and alerting on its result."""
        return self._running or self._orchestrator.is_running

    async def close(self) -> None:
        """Close owned resources."""
        await self._orchestrator.close()

    def _reset_progress(self) -> None:
        """Set idle progress."""
        self.state.progress = Progress(
            areas_completed=0,
            total_areas=len(self._orchestrator.areas),
            current_area_name="",
        )

    def _start_run(self) -> CrawlRun:
        """Start the orchestrator and mark the harvester busy."""
        if self._running:
            raise ConcurrentRunRejected("A crawl run is already in progress")
        crawl_run = self._orchestrator.start(known_ids=self.state.known_ids)
        self._running = True
        return crawl_run

    async def run(self) -> CrawlResult:
        """
        Run one crawl to completion.

        Returns:
            Final CrawlResult

        Raises:
            ConcurrentRunRejected: If a run is already in progress
        """
        return await self._consume(self._start_run())

    def trigger(self) -> bool:
        """
        Start a crawl in the background.

        Returns:
            True if started, False if a run is already in progress
        """
        try:
            crawl_run = self._start_run()
        except ConcurrentRunRejected:
            harvest_log.info("Crawl already in progress, trigger ignored")
            return False

        self._task = asyncio.create_task(self._consume(crawl_run))
        self._task.add_done_callback(self._log_task_error)
        return True

    def _log_task_error(self, task: asyncio.Task) -> None:
        """Log a background run that ended with an exception."""
        if not task.cancelled() and task.exception() is not None:
            harvest_log.error(f"Background crawl failed: {task.exception()}")

    async def _consume(self, crawl_run: CrawlRun) -> CrawlResult:
        """Follow a run, store its result and alert on new listings."""
        try:
            result = await self._follow(crawl_run)
            self._apply_result(result)

            if self._enable_broadcast and result.new_identifiers:
                await self._broadcast(result)

            return result
        finally:
            self._running = False

    async def _follow(self, crawl_run: CrawlRun) -> CrawlResult:
        """Publish a run's progress until it completes."""
        areas = self._orchestrator.areas
        harvest_log.info(
            f"--- Scrape #{self.state.scrape_count + 1} started at "
            f"{datetime.now().strftime('%H:%M:%S')} ---"
        )
        self.state.progress = Progress(
            areas_completed=0,
            total_areas=len(areas),
            current_area_name=areas[0].name if areas else "",
        )

        try:
            async for progress in crawl_run.events():
                # Progress listings are excluded from the snapshot payload
                self.state.progress = progress.model_copy(update={"listings_so_far": []})
                self.state.listings = progress.listings_so_far

            return await crawl_run.wait()
        finally:
            self._reset_progress()

    def _apply_result(self, result: CrawlResult) -> None:
        """Store a completed run's result."""
        new_ids = [
            listing_id
            for listing_id in result.new_identifiers
            if listing_id not in self.state.known_ids
        ]
        self.state.known_ids.update(new_ids)
        self.state.new_ids = new_ids
        self.state.listings = result.listings
        self.state.last_scrape_time = datetime.now(timezone.utc).isoformat()
        self.state.scrape_count += 1

        if new_ids:
            harvest_log.info(f"  NEW LISTINGS FOUND: {len(new_ids)}")
        harvest_log.info(f"--- Scrape complete: {len(result.listings)} listings ---")

    async def _broadcast(self, result: CrawlResult) -> None:
        """Alert on new MUST BUY listings; failures are logged only."""
        if self._broadcaster is None:
            self._broadcaster = get_broadcaster()
        try:
            await self._broadcaster.broadcast_new_listings(
                result.listings, result.new_identifiers
            )
        except Exception as e:
            harvest_log.error(f"Failed to broadcast new listings: {e}")

    def snapshot(self) -> dict:
        """
        Build the dashboard payload.

        Returns:
            Dict with listings, run metadata, progress, new ids and stats
        """
        listings = self.state.listings
        progress = self.state.progress
        return {
            "listings": [item.model_dump(by_alias=True) for item in listings],
            "lastScrapeTime": self.state.last_scrape_time,
            "scraping": self.is_running,
            "scrapeCount": self.state.scrape_count,
            "scrapeProgress": {
                "current": progress.areas_completed,
                "total": progress.total_areas,
                "currentName": progress.current_area_name,
            },
            "newIds": list(self.state.new_ids),
            "stats": compute_stats(listings),
        }


# Singleton instance
_harvester: Harvester | None = None


def get_harvester() -> Harvester:
    """Get or create the Harvester singleton."""
    global _harvester
    if _harvester is None:
        _harvester = Harvester()
    return _harvester


async def close_harvester() -> None:
    """Close Harvester resources."""
    global _harvester
    if _harvester is not None:
        await _harvester.close()
        _harvester = None
