"""
Listing index page parser.

Extracts raw listing cards from a page (Extract phase), then normalizes
them into Listing models (Transform phase).
"""

import re

from bs4 import BeautifulSoup, Tag
from loguru import logger

from src.crawler.areas import Area
from src.crawler.types import ListingRawData, PageRawData
from src.modules.listings import Listing
from src.utils.normalizers import (
    parse_area_value,
    parse_count,
    parse_price,
    parse_price_per_unit,
    round_half_up,
)

parser_log = logger.bind(module="PageParser")

ITEM_SELECTOR = ".product-item.product-list-item"

# Embedded JSON page count, e.g. "TotalPages":8
TOTAL_PAGES_PATTERN = re.compile(r'"TotalPages"\s*:\s*(\d+)')
PAGE_PARAM_PATTERN = re.compile(r"page=(\d+)")

# Feature legend keywords (lower-cased)
SQM_LEGENDS = ("kvadratura", "površina")
LAND_LEGENDS = ("zemljište", "plac")
ROOM_LEGENDS = ("soba", "sob")


def extract_page_raw(html: str, base_url: str = "") -> PageRawData:
    """
    Extract raw listing cards and the declared page count from one page.

    Args:
        html: Page markup
        base_url: Site root used to absolutize relative links

    Returns:
        PageRawData with items in document order
    """
    soup = BeautifulSoup(html, "html.parser")
    elems = soup.select(ITEM_SELECTOR)

    parser_log.debug(f"Found {len(elems)} items")

    items: list[ListingRawData] = []
    for elem in elems:
        try:
            items.append(_parse_item_raw(elem, base_url))
        except Exception as e:
            parser_log.warning(f"Failed to parse item: {e}")
            continue

    return {"items": items, "total_pages": _find_total_pages(html, soup)}


def _parse_item_raw(elem: Tag, base_url: str = "") -> ListingRawData:
    """
    Parse a single listing card and return raw data.

    No transformation is done - values are kept as-is from HTML.

    Args:
        elem: BeautifulSoup element for the card
        base_url: Site root used to absolutize relative links

    Returns:
        ListingRawData dictionary
    """
    result: ListingRawData = {
        "id": "",
        "title": "",
        "link": "",
        "price_raw": "",
        "price_per_sqm_raw": "",
        "sqm_raw": "",
        "land_sqm_raw": "",
        "rooms_raw": "",
        "image": "",
        "img_count_raw": "",
        "location": "",
    }

    # ID from data-id, falling back to the element id
    result["id"] = str(elem.get("data-id") or elem.get("id") or "")

    # Title & link
    title_elem = elem.select_one(".product-title a")
    if title_elem:
        result["title"] = title_elem.get_text().strip()
        href = title_elem.get("href") or ""
        if href:
            result["link"] = f"{base_url}{href}"

    # Price (raw number string from data-value)
    price_elem = elem.select_one(".central-feature span")
    if price_elem:
        result["price_raw"] = price_elem.get("data-value") or ""

    # Price per m² (raw text including unit)
    result["price_per_sqm_raw"] = "".join(
        span.get_text() for span in elem.select(".price-by-surface span")
    )

    # Image
    img_elem = elem.select_one(".pi-img-wrapper img")
    if img_elem:
        result["image"] = img_elem.get("src") or ""
    count_elem = elem.select_one(".pi-img-count-num")
    if count_elem:
        result["img_count_raw"] = count_elem.get_text()

    # Location parts, NBSP removed
    parts = []
    for li in elem.select(".subtitle-places li"):
        text = li.get_text().replace("\u00a0", "").strip()
        if text:
            parts.append(text)
    result["location"] = ", ".join(parts)

    # Features: classified by legend keyword, value is text minus legend
    for wrapper in elem.select(".product-features .value-wrapper"):
        text = wrapper.get_text().strip()
        legend_raw = "".join(lg.get_text() for lg in wrapper.select(".legend"))
        legend = legend_raw.strip().lower()
        value = text.replace(legend_raw, "", 1).strip() if legend_raw else text

        if any(word in legend for word in SQM_LEGENDS):
            result["sqm_raw"] = value
        elif any(word in legend for word in LAND_LEGENDS):
            result["land_sqm_raw"] = value
        elif any(word in legend for word in ROOM_LEGENDS):
            result["rooms_raw"] = value

    return result


def _find_total_pages(html: str, soup: BeautifulSoup) -> int:
    """
    Find the declared total page count.

    Prefers the embedded "TotalPages" value; otherwise uses the highest
    page number referenced by pagination links or controls.

    Returns:
        Page count, never below 1
    """
    json_match = TOTAL_PAGES_PATTERN.search(html)
    if json_match:
        return max(1, int(json_match.group(1)))

    max_page = 1
    for link in soup.select('a[href*="page="]'):
        match = PAGE_PARAM_PATTERN.search(link.get("href") or "")
        if match:
            max_page = max(max_page, int(match.group(1)))

    for control in soup.select(".page-number, .pagination a, .paging a"):
        max_page = max(max_page, parse_count(control.get_text()))

    return max_page


def get_total_pages(html: str) -> int:
    """
    Get the declared total page count of a page.

    Args:
        html: Page markup

    Returns:
        Page count, never below 1
    """
    return _find_total_pages(html, BeautifulSoup(html, "html.parser"))


def transform_listing(raw: ListingRawData, area: Area) -> Listing:
    """
    Transform one raw card into a Listing.

    Price per m² is derived from price / sqm when the page omits it.

    Args:
        raw: Raw card data
        area: Area the page belongs to

    Returns:
        Listing with normalized numeric fields
    """
    price = parse_price(raw["price_raw"])
    price_per_sqm = parse_price_per_unit(raw["price_per_sqm_raw"])
    sqm = parse_area_value(raw["sqm_raw"])

    if not price_per_sqm and price and sqm and sqm > 0:
        price_per_sqm = float(round_half_up(price / sqm))

    return Listing(
        id=raw["id"],
        title=raw["title"],
        link=raw["link"],
        location=raw["location"],
        neighborhood=area.name,
        area_slug=area.slug,
        price=price,
        price_per_sqm=price_per_sqm,
        sqm=sqm,
        land_sqm=parse_area_value(raw["land_sqm_raw"]),
        rooms=raw["rooms_raw"] or None,
        image=raw["image"],
        img_count=parse_count(raw["img_count_raw"]),
    )


def parse_page(html: str, area: Area, base_url: str = "") -> tuple[list[Listing], int]:
    """
    Parse one listing index page.

    Cards with neither a title nor a price are noise and dropped.

    Args:
        html: Page markup
        area: Area the page belongs to
        base_url: Site root used to absolutize relative links

    Returns:
        Tuple of (listings in document order, total page count)
    """
    page = extract_page_raw(html, base_url)

    listings: list[Listing] = []
    for raw in page["items"]:
        listing = transform_listing(raw, area)
        if listing.title or listing.price:
            listings.append(listing)

    return listings, page["total_pages"]
