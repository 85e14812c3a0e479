"""Crawler modules."""

from src.crawler.area_crawler import AreaCrawler
from src.crawler.areas import AREAS, Area, get_area_names
from src.crawler.fetcher import AreaFetcher
from src.crawler.orchestrator import (
    ConcurrentRunRejected,
    CrawlOrchestrator,
    CrawlRun,
    deduplicate,
)
from src.crawler.page_parser import (
    extract_page_raw,
    get_total_pages,
    parse_page,
    transform_listing,
)
from src.crawler.types import ListingRawData, PageRawData

__all__ = [
    # Types
    "ListingRawData",
    "PageRawData",
    # Areas
    "Area",
    "AREAS",
    "get_area_names",
    # Fetching & parsing
    "AreaFetcher",
    "extract_page_raw",
    "get_total_pages",
    "parse_page",
    "transform_listing",
    # Crawling
    "AreaCrawler",
    "CrawlOrchestrator",
    "CrawlRun",
    "ConcurrentRunRejected",
    "deduplicate",
]
