"""
Unit tests for src/crawler/fetcher.py
"""

import asyncio

import pytest
import requests

from src.crawler.areas import Area
from src.crawler.fetcher import AreaFetcher

VINCA = Area("Vinča", "beograd-grocka-vinca")


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """requests.Session stand-in returning one canned outcome."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.urls: list[str] = []
        self.timeouts: list = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        self.timeouts.append(timeout)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome

    def close(self):
        pass


@pytest.fixture
def fetcher():
    """Fetcher with explicit site settings."""
    return AreaFetcher(
        base_url="https://www.halooglasi.com/",
        listing_path="/nekretnine/prodaja-kuca/",
        timeout=1,
    )


class TestBuildUrl:
    """Tests for AreaFetcher.build_url method."""

    def test_first_page_has_no_query(self, fetcher):
        assert fetcher.build_url(VINCA) == (
            "https://www.halooglasi.com/nekretnine/prodaja-kuca/beograd-grocka-vinca"
        )

    def test_later_page(self, fetcher):
        assert fetcher.build_url(VINCA, 3).endswith("beograd-grocka-vinca?page=3")


class TestFetch:
    """Tests for AreaFetcher.fetch method."""

    def test_success(self, fetcher):
        fetcher._session = FakeSession(FakeResponse(200, "<html></html>"))

        html = asyncio.run(fetcher.fetch_area_page(VINCA, 2))

        assert html == "<html></html>"
        assert fetcher._session.urls == [fetcher.build_url(VINCA, 2)]

    @pytest.mark.parametrize("status", [301, 404, 500])
    def test_non_2xx_is_none(self, fetcher, status):
        fetcher._session = FakeSession(FakeResponse(status, "error page"))
        assert asyncio.run(fetcher.fetch("https://example.test")) is None

    def test_network_error_is_none(self, fetcher):
        fetcher._session = FakeSession(requests.ConnectionError("refused"))
        assert asyncio.run(fetcher.fetch("https://example.test")) is None

    def test_timeout_is_none(self, fetcher):
        fetcher._session = FakeSession(requests.Timeout("slow"))
        assert asyncio.run(fetcher.fetch("https://example.test")) is None

    def test_default_timeout(self):
        fetcher = AreaFetcher()
        fetcher._session = FakeSession(FakeResponse(200, "<html></html>"))

        asyncio.run(fetcher.fetch_area_page(VINCA))

        assert fetcher._session.timeouts == [15.0]


class TestSession:
    """Tests for AreaFetcher start/close lifecycle."""

    def test_start_installs_headers(self, fetcher):
        asyncio.run(fetcher.start())

        headers = fetcher._session.headers
        assert headers["User-Agent"].startswith("Mozilla/5.0")
        assert "Chrome/" in headers["User-Agent"]
        assert headers["Accept"].startswith("text/html")
        assert headers["Accept-Language"] == "sr-RS,sr;q=0.9,en;q=0.8"

        asyncio.run(fetcher.close())

    def test_fetch_after_close_is_none(self, fetcher):
        asyncio.run(fetcher.start())
        asyncio.run(fetcher.close())

        assert asyncio.run(fetcher.fetch_area_page(VINCA)) is None
        assert fetcher._session is None

    def test_close_stops_worker(self, fetcher):
        asyncio.run(fetcher.close())

        with pytest.raises(RuntimeError):
            fetcher._executor.submit(print)

    def test_start_after_close_raises(self, fetcher):
        asyncio.run(fetcher.close())

        with pytest.raises(RuntimeError):
            asyncio.run(fetcher.start())
