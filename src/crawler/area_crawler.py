"""
Area crawler.

Drives pagination for a single area: page 1 declares the page count,
pages 2..N are fetched sequentially with a fixed delay between requests.
"""

import asyncio

from loguru import logger

from config.settings import get_settings
from src.crawler.areas import Area
from src.crawler.fetcher import AreaFetcher
from src.crawler.page_parser import parse_page
from src.modules.listings import Listing

crawler_log = logger.bind(module="AreaCrawler")


class AreaCrawler:
    """
    Best-effort collector for one area.

    Workflow:
    1. Fetch and parse page 1; a failure here yields zero listings
    2. Read the declared total page count
    3. Fetch and parse pages 2..N; a failed page contributes nothing
       but pagination continues
    """

    def __init__(
        self,
        fetcher: AreaFetcher | None = None,
        page_delay: float | None = None,
    ):
        """
        Initialize AreaCrawler.

        Args:
            fetcher: Page fetcher (will be created if not provided)
            page_delay: Seconds to wait between page fetches
        """
        settings = get_settings().crawler
        self._fetcher = fetcher or AreaFetcher()
        self._page_delay = (
            page_delay if page_delay is not None else settings.page_delay_seconds
        )

    @property
    def fetcher(self) -> AreaFetcher:
        """Get the page fetcher."""
        return self._fetcher

    async def crawl(self, area: Area) -> list[Listing]:
        """
        Collect all listings of an area.

        Args:
            area: Area to crawl

        Returns:
            Listings in page/document order (not deduplicated)
        """
        url = self._fetcher.build_url(area)
        crawler_log.info(f"Crawling {area.name}: {url}")

        first_html = await self._fetcher.fetch_area_page(area, 1)
        if first_html is None:
            crawler_log.warning(f"First page failed for {area.name}, skipping area")
            return []

        listings, total_pages = parse_page(first_html, area, self._fetcher.base_url)

        for page in range(2, total_pages + 1):
            await asyncio.sleep(self._page_delay)

            crawler_log.debug(f"  Page {page}/{total_pages}: {area.name}")
            html = await self._fetcher.fetch_area_page(area, page)
            if html is None:
                continue

            page_listings, _ = parse_page(html, area, self._fetcher.base_url)
            listings.extend(page_listings)

        crawler_log.info(
            f"Found {len(listings)} listings in {area.name} ({total_pages} pages)"
        )
        return listings
