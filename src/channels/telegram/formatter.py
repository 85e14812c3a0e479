"""
Telegram Formatter Module.

Formats listing alerts for Telegram using HTML markup.
"""

from html import escape

from src.channels.base import BaseFormatter
from src.modules.listings import RatedListing


def _money(value: float | None) -> str:
    """Euro amount with thousands separators."""
    if not value:
        return "Price on request"
    return f"€{value:,.0f}"


def _text(value: str | None) -> str:
    """HTML-escaped text, quotes left as-is."""
    return escape(value or "", quote=False)


class TelegramFormatter(BaseFormatter):
    """Formats rated listings for Telegram."""

    def _headline(self, listing: RatedListing) -> list[str]:
        """Rating badge and title lines."""
        badge = f"🔥 <b>{_text(listing.label)}</b> " if listing.label else ""
        return [
            f"{badge}⭐ {listing.rating}/10",
            f"🏠 <b>{_text(listing.title) or 'Untitled'}</b>",
        ]

    def _price_lines(self, listing: RatedListing) -> list[str]:
        lines = [f"💰 <b>{_money(listing.price)}</b>"]
        if listing.price_per_sqm:
            lines.append(f"📊 {_money(listing.price_per_sqm)}/m²")
        return lines

    def _link_line(self, listing: RatedListing) -> str:
        return f'🔗 <a href="{escape(listing.link)}">View listing</a>'

    def format_listing(self, listing: RatedListing) -> str:
        """
        Format a rated listing for a Telegram alert.

        Args:
            listing: RatedListing to format

        Returns:
            HTML formatted listing message
        """
        lines = self._headline(listing)
        lines.append("")
        lines.extend(self._price_lines(listing))

        if listing.sqm:
            lines.append(f"📐 {listing.sqm:g} m²")
        if listing.land_sqm:
            lines.append(f"🌳 Plot {listing.land_sqm:g} m²")
        if listing.rooms:
            lines.append(f"🛏️ {_text(listing.rooms)} rooms")

        location = listing.location or listing.neighborhood
        if location:
            lines.append(f"📍 {_text(location)}")

        if listing.rating_reason:
            lines.append("")
            lines.append(f"<i>{_text(listing.rating_reason)}</i>")
        lines.extend(f"✅ {_text(pro)}" for pro in listing.rating_pros)
        lines.extend(f"⚠️ {_text(con)}" for con in listing.rating_cons)

        if listing.link:
            lines.append("")
            lines.append(self._link_line(listing))

        return "\n".join(lines)

    def format_caption(self, listing: RatedListing) -> str:
        """
        Format a short photo caption: rating, title, prices, reason, link.

        Args:
            listing: RatedListing to format

        Returns:
            HTML formatted caption
        """
        lines = self._headline(listing) + self._price_lines(listing)
        if listing.rating_reason:
            lines.append(f"<i>{_text(listing.rating_reason)}</i>")
        if listing.link:
            lines.append(self._link_line(listing))
        return "\n".join(lines)


# Singleton instance
_formatter: TelegramFormatter | None = None


def get_telegram_formatter() -> TelegramFormatter:
    """Get TelegramFormatter singleton."""
    global _formatter
    if _formatter is None:
        _formatter = TelegramFormatter()
    return _formatter
