"""
Alert Broadcaster Module.

Sends alerts for newly found MUST BUY listings to the configured chat.
"""

import asyncio
from collections.abc import Iterable

from loguru import logger

from config.settings import get_settings
from src.channels.telegram import AlertBot, get_alert_bot, get_telegram_formatter
from src.modules.listings import RatedListing

broadcast_log = logger.bind(module="Broadcast")

# Telegram allows ~30 msg/sec per bot, stay well below
MAX_CONCURRENT = 5


def select_alert_targets(
    listings: Iterable[RatedListing], new_ids: Iterable[str]
) -> list[RatedListing]:
    """
    Pick listings worth an alert: first seen in this run and MUST BUY.

    Args:
        listings: Final rated listing set, best first
        new_ids: Identifiers first seen in this run

    Returns:
        Targets in rating order
    """
    new_id_set = set(new_ids)
    return [item for item in listings if item.id in new_id_set and item.is_must_buy]


class Broadcaster:
    """Broadcasts listing alerts via Telegram."""

    def __init__(self, bot: AlertBot | None = None, chat_id: str | None = None):
        """
        Initialize Broadcaster.

        Args:
            bot: AlertBot instance (uses singleton if not provided)
            chat_id: Target chat (defaults to TELEGRAM_CHAT_ID)
        """
        self._bot = bot
        self._chat_id = chat_id if chat_id is not None else get_settings().telegram.chat_id
        self._formatter = get_telegram_formatter()

    @property
    def bot(self) -> AlertBot:
        """Get AlertBot instance."""
        if self._bot is None:
            self._bot = get_alert_bot()
        return self._bot

    @property
    def enabled(self) -> bool:
        """Whether alerts can be sent."""
        return bool(self._chat_id) and self.bot.is_configured

    async def send_listing_alert(self, listing: RatedListing) -> bool:
        """
        Send one listing alert.

        Listings with an image go out as a photo with a short caption;
        if that fails, or there is no image, the full text is sent.

        Args:
            listing: Listing to announce

        Returns:
            True if sent successfully
        """
        if listing.image:
            caption = self._formatter.format_caption(listing)
            if self._formatter.fits_caption(caption) and await self.bot.send_photo(
                self._chat_id, listing.image, caption
            ):
                return True

        return await self.bot.send_message(
            self._chat_id, self._formatter.format_listing(listing)
        )

    async def broadcast_new_listings(
        self,
        listings: Iterable[RatedListing],
        new_ids: Iterable[str],
    ) -> dict:
        """
        Alert on new MUST BUY listings (concurrent, rate limited).

        Args:
            listings: Final rated listing set
            new_ids: Identifiers first seen in this run

        Returns:
            Dict with broadcast results: total, success, failed
        """
        targets = select_alert_targets(listings, new_ids)
        if not targets or not self.enabled:
            if targets:
                broadcast_log.debug(
                    f"Alerts not configured, skipping {len(targets)} MUST BUY listings"
                )
            return {"total": 0, "success": 0, "failed": 0}

        semaphore = asyncio.Semaphore(MAX_CONCURRENT)

        async def limited_send(listing: RatedListing) -> bool:
            async with semaphore:
                return await self.send_listing_alert(listing)

        results = await asyncio.gather(
            *[limited_send(t) for t in targets], return_exceptions=True
        )

        success = 0
        for listing, result in zip(targets, results, strict=True):
            if isinstance(result, Exception):
                broadcast_log.error(f"Alert failed for listing {listing.id}: {result}")
            elif result:
                success += 1

        failed = len(targets) - success
        broadcast_log.info(
            f"Broadcast complete: {success}/{len(targets)} sent, {failed} failed"
        )
        return {"total": len(targets), "success": success, "failed": failed}


# Singleton instance
_broadcaster: Broadcaster | None = None


def get_broadcaster() -> Broadcaster:
    """Get Broadcaster singleton."""
    global _broadcaster
    if _broadcaster is None:
        _broadcaster = Broadcaster()
    return _broadcaster
