"""
Area page fetcher using requests.

Fetches one listing index page per call. Failures never raise: they are
logged and reported as None so the caller can treat the page as empty.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import requests
from loguru import logger

from config.settings import get_settings
from src.crawler.areas import Area

fetcher_log = logger.bind(module="Fetcher")


class AreaFetcher:
    """
    Listing index page fetcher.

    Blocking requests run in a single-worker executor, so at most one
    request is in flight at a time.
    """

    DEFAULT_HEADERS = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        ),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "sr-RS,sr;q=0.9,en;q=0.8",
    }

    def __init__(
        self,
        base_url: str | None = None,
        listing_path: str | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the area fetcher.

        Args:
            base_url: Site root (defaults to CRAWLER_BASE_URL)
            listing_path: Path prefix of area index pages
            timeout: Request timeout in seconds
        """
        settings = get_settings().crawler
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self._listing_path = (listing_path or settings.listing_path).strip("/")
        self._timeout = timeout if timeout is not None else settings.request_timeout
        self._session: requests.Session | None = None
        self._executor = ThreadPoolExecutor(max_workers=1)
        self._closed = False

    async def start(self) -> None:
        """Initialize session."""
        if self._closed:
            raise RuntimeError("AreaFetcher is closed")
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.DEFAULT_HEADERS)
            fetcher_log.info("AreaFetcher started")

    async def close(self) -> None:
        """Close session and stop the worker thread. The fetcher is not reusable."""
        self._closed = True
        if self._session:
            self._session.close()
            self._session = None
        self._executor.shutdown(wait=False)
        fetcher_log.info("AreaFetcher closed")

    def build_url(self, area: Area, page: int = 1) -> str:
        """
        Build the index page URL of an area.

        Args:
            area: Area to fetch
            page: Page number (page 1 has no query string)

        Returns:
            Absolute URL
        """
        url = f"{self.base_url}/{self._listing_path}/{area.slug}"
        if page > 1:
            url += f"?page={page}"
        return url

    def _fetch_sync(self, session: requests.Session, url: str) -> str | None:
        """Blocking GET, returns page text or None on any failure."""
        try:
            resp = session.get(url, timeout=self._timeout)
        except requests.RequestException as e:
            fetcher_log.warning(f"Failed to fetch {url}: {e}")
            return None

        if not 200 <= resp.status_code < 300:
            fetcher_log.warning(f"Failed to fetch {url}: HTTP {resp.status_code}")
            return None

        return resp.text

    async def fetch(self, url: str) -> str | None:
        """
        Fetch one page.

        Args:
            url: Page URL

        Returns:
            Page markup, or None on network error, timeout, non-2xx status
            or when the fetcher has been closed
        """
        if self._closed:
            fetcher_log.debug(f"Fetcher closed, skipping {url}")
            return None
        if self._session is None:
            await self.start()

        fetcher_log.debug(f"Fetching page: {url}")

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, self._fetch_sync, self._session, url
        )

    async def fetch_area_page(self, area: Area, page: int = 1) -> str | None:
        """
        Fetch one index page of an area.

        Args:
            area: Area to fetch
            page: Page number

        Returns:
            Page markup or None if failed
        """
        return await self.fetch(self.build_url(area, page))
