#!/usr/bin/env python3
"""
Smoke script: crawl areas live and print the rated listings.

Usage:
    python scripts/crawl_area.py                 # all monitored areas
    python scripts/crawl_area.py Vinča Grocka    # selected areas by name
    python scripts/crawl_area.py --top 5 Boleč
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.crawler import AREAS, CrawlOrchestrator


async def main(area_names: list[str], top: int):
    """Run one crawl and print the best listings."""
    areas = [a for a in AREAS if not area_names or a.name in area_names]
    if not areas:
        print(f"No matching areas. Known: {', '.join(a.name for a in AREAS)}")
        return

    print(f"\n{'=' * 60}")
    print("Area Crawl Test")
    print(f"Areas: {', '.join(a.name for a in areas)}")
    print(f"{'=' * 60}\n")

    orchestrator = CrawlOrchestrator(areas=areas)

    try:
        crawl_run = orchestrator.start()
        async for progress in crawl_run.events():
            print(
                f"[{progress.areas_completed}/{progress.total_areas}] "
                f"{progress.current_area_name}: "
                f"{len(progress.listings_so_far)} listings so far"
            )
        result = await crawl_run.wait()
    finally:
        await orchestrator.close()

    print(f"\n{'=' * 60}")
    print(f"Total: {len(result.listings)} listings")
    print(f"{'=' * 60}\n")

    for listing in result.listings[:top]:
        print(
            json.dumps(
                listing.model_dump(
                    by_alias=True,
                    include={"title", "price", "price_per_sqm", "rating", "label", "rating_reason", "link"},
                ),
                ensure_ascii=False,
                indent=2,
            )
        )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Crawl areas and print rated listings")
    parser.add_argument("areas", nargs="*", help="Area names (default: all)")
    parser.add_argument("--top", type=int, default=10, help="Listings to print")
    args = parser.parse_args()

    asyncio.run(main(args.areas, args.top))
