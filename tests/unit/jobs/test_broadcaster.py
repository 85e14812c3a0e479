"""
Unit tests for src/jobs/broadcaster.py
"""

import asyncio

import pytest

from src.jobs.broadcaster import Broadcaster, select_alert_targets
from src.rating import rate_listings


class FakeBot:
    """AlertBot stand-in recording sent messages and photos."""

    def __init__(self, configured: bool = True, fail_for: str | None = None, photo_ok: bool = True):
        self.is_configured = configured
        self.fail_for = fail_for
        self.photo_ok = photo_ok
        self.sent: list[tuple[str, str]] = []
        self.photos: list[tuple[str, str, str]] = []

    async def send_message(self, chat_id, text, disable_web_page_preview=False):
        if self.fail_for and self.fail_for in text:
            return False
        self.sent.append((chat_id, text))
        return True

    async def send_photo(self, chat_id, photo_url, caption):
        if not self.photo_ok:
            return False
        self.photos.append((chat_id, photo_url, caption))
        return True


@pytest.fixture
def rated(listing_factory):
    """Two MUST BUY listings ('1', '2') and two ordinary ones."""
    return rate_listings(
        [
            listing_factory("1", price=30000, pps=300),
            listing_factory("2", price=35000, pps=350),
            listing_factory("3", price=100000, pps=1000),
            listing_factory("4", price=110000, pps=1100),
            listing_factory("5", price=100000, pps=1000),
        ]
    )


class TestBroadcastNewListings:
    """Tests for Broadcaster.broadcast_new_listings method."""

    def test_only_new_must_buy(self, rated):
        bot = FakeBot()
        broadcaster = Broadcaster(bot=bot, chat_id="42")

        result = asyncio.run(broadcaster.broadcast_new_listings(rated, ["2", "3"]))

        assert result == {"total": 1, "success": 1, "failed": 0}
        assert len(bot.sent) == 1
        chat_id, text = bot.sent[0]
        assert chat_id == "42"
        assert "MUST BUY" in text
        assert "Kuća 2" in text

    def test_no_targets(self, rated):
        bot = FakeBot()
        broadcaster = Broadcaster(bot=bot, chat_id="42")

        result = asyncio.run(broadcaster.broadcast_new_listings(rated, ["3", "4"]))

        assert result == {"total": 0, "success": 0, "failed": 0}
        assert bot.sent == []

    def test_disabled_without_chat(self, rated):
        bot = FakeBot()
        broadcaster = Broadcaster(bot=bot, chat_id="")

        result = asyncio.run(broadcaster.broadcast_new_listings(rated, ["1", "2"]))

        assert result["total"] == 0
        assert bot.sent == []

    def test_disabled_without_bot(self, rated):
        broadcaster = Broadcaster(bot=FakeBot(configured=False), chat_id="42")

        assert broadcaster.enabled is False
        result = asyncio.run(broadcaster.broadcast_new_listings(rated, ["1"]))
        assert result["total"] == 0

    def test_counts_failures(self, rated):
        bot = FakeBot(fail_for="Kuća 1")
        broadcaster = Broadcaster(bot=bot, chat_id="42")

        result = asyncio.run(broadcaster.broadcast_new_listings(rated, ["1", "2"]))

        assert result == {"total": 2, "success": 1, "failed": 1}

    def test_photo_alert_when_image(self, rated):
        bot = FakeBot()
        broadcaster = Broadcaster(bot=bot, chat_id="42")
        listing = rated[0].model_copy(update={"image": "https://img.example/1.jpg"})

        assert asyncio.run(broadcaster.send_listing_alert(listing)) is True
        assert bot.sent == []
        chat_id, photo_url, caption = bot.photos[0]
        assert photo_url == "https://img.example/1.jpg"
        assert "MUST BUY" in caption

    def test_photo_failure_falls_back_to_text(self, rated):
        bot = FakeBot(photo_ok=False)
        broadcaster = Broadcaster(bot=bot, chat_id="42")
        listing = rated[0].model_copy(update={"image": "https://img.example/1.jpg"})

        assert asyncio.run(broadcaster.send_listing_alert(listing)) is True
        assert len(bot.sent) == 1


class TestSelectAlertTargets:
    """Tests for select_alert_targets function."""

    def test_keeps_rating_order(self, rated):
        targets = select_alert_targets(rated, ["2", "1", "3"])
        assert [item.id for item in targets] == [item.id for item in rated if item.id in {"1", "2"}]
