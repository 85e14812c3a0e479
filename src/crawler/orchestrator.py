"""
Crawl Orchestrator Module.

Crawls the fixed area list one area at a time, deduplicates the running
listing set after every area and streams a rated Progress snapshot per
completed area through an event queue.
"""

import asyncio
from collections.abc import AsyncIterator, Iterable, Sequence

from loguru import logger

from config.settings import get_settings
from src.crawler.area_crawler import AreaCrawler
from src.crawler.areas import AREAS, Area
from src.modules.listings import CrawlResult, Listing, Progress
from src.rating import rate_listings

orchestrator_log = logger.bind(module="Orchestrator")


class ConcurrentRunRejected(RuntimeError):
    """Raised when a crawl is started while another one is still running."""


def deduplicate(listings: Iterable[Listing]) -> list[Listing]:
    """
    Keep the first listing per id, in input order.

    Listings without an id are dropped.

    Args:
        listings: Listings in crawl order

    Returns:
        Deduplicated listings
    """
    seen: set[str] = set()
    unique: list[Listing] = []
    for listing in listings:
        if not listing.id or listing.id in seen:
            continue
        seen.add(listing.id)
        unique.append(listing)
    return unique


class CrawlRun:
    """
    Handle of one running crawl.

    The orchestrator writes one Progress per completed area into the
    queue, then None as the run-complete marker.
    """

    def __init__(
        self,
        queue: "asyncio.Queue[Progress | None]",
        task: "asyncio.Task[CrawlResult]",
    ):
        self._queue = queue
        self._task = task

    @property
    def done(self) -> bool:
        """Whether the crawl has finished."""
        return self._task.done()

    async def events(self) -> AsyncIterator[Progress]:
        """Yield Progress snapshots until the run completes."""
        while True:
            event = await self._queue.get()
            if event is None:
                return
            yield event

    async def wait(self) -> CrawlResult:
        """Wait for and return the final result."""
        return await self._task


class CrawlOrchestrator:
    """
    Sequential multi-area crawl driver.

    Areas are never crawled concurrently, and only one run may be active
    at a time: starting a second one raises ConcurrentRunRejected.
    """

    def __init__(
        self,
        crawler: AreaCrawler | None = None,
        areas: Sequence[Area] = AREAS,
        area_delay: float | None = None,
    ):
        """
        Initialize CrawlOrchestrator.

        Args:
            crawler: Per-area crawler (will be created if not provided)
            areas: Ordered areas to crawl
            area_delay: Seconds to wait between areas
        """
        settings = get_settings().crawler
        self._crawler = crawler or AreaCrawler()
        self._areas = tuple(areas)
        self._area_delay = (
            area_delay if area_delay is not None else settings.area_delay_seconds
        )
        self._running = False

    @property
    def areas(self) -> tuple[Area, ...]:
        """Get the ordered area list."""
        return self._areas

    @property
    def is_running(self) -> bool:
        """Whether a crawl run is in progress."""
        return self._running

    async def close(self) -> None:
        """Close the underlying fetcher."""
        await self._crawler.fetcher.close()

    def start(self, known_ids: Iterable[str] = ()) -> CrawlRun:
        """
        Start a crawl run in the background.

        Must be called from a running event loop.

        Args:
            known_ids: Identifiers seen before this run

        Returns:
            CrawlRun handle streaming Progress events

        Raises:
            ConcurrentRunRejected: If a run is already in progress
        """
        if self._running:
            raise ConcurrentRunRejected("A crawl run is already in progress")

        queue: asyncio.Queue[Progress | None] = asyncio.Queue()
        task = asyncio.create_task(self._run(frozenset(known_ids), queue))
        self._running = True
        return CrawlRun(queue, task)

    async def run(self, known_ids: Iterable[str] = ()) -> CrawlResult:
        """
        Run a crawl to completion, discarding progress events.

        Raises:
            ConcurrentRunRejected: If a run is already in progress
        """
        crawl_run = self.start(known_ids)
        async for _ in crawl_run.events():
            pass
        return await crawl_run.wait()

    async def _crawl_area(self, area: Area) -> list[Listing]:
        """Crawl one area; any failure counts as zero listings."""
        try:
            return await self._crawler.crawl(area)
        except Exception as e:
            orchestrator_log.error(f"Failed to crawl {area.name}: {e}")
            return []

    async def _run(
        self,
        known_ids: frozenset[str],
        queue: "asyncio.Queue[Progress | None]",
    ) -> CrawlResult:
        """Crawl every area in order, emitting Progress after each one."""
        total = len(self._areas)
        collected: list[Listing] = []

        try:
            for index, area in enumerate(self._areas):
                area_listings = await self._crawl_area(area)
                collected = deduplicate(collected + area_listings)

                rated = rate_listings(collected)
                queue.put_nowait(
                    Progress(
                        areas_completed=index + 1,
                        total_areas=total,
                        current_area_name=area.name,
                        listings_so_far=rated,
                    )
                )
                orchestrator_log.info(
                    f"Progress: {index + 1}/{total} ({area.name}) - "
                    f"{len(rated)} listings so far"
                )

                if index < total - 1:
                    await asyncio.sleep(self._area_delay)

            unique = deduplicate(collected)
            rated = rate_listings(unique)
            new_ids = [listing.id for listing in rated if listing.id not in known_ids]

            orchestrator_log.info(
                f"Crawl complete: {len(rated)} unique listings, {len(new_ids)} new"
            )
            return CrawlResult(listings=rated, new_identifiers=new_ids)

        finally:
            self._running = False
            queue.put_nowait(None)
