"""
Telegram Bot Module.

Thin wrapper over python-telegram-bot for outgoing alerts. Sending never
raises: failures are logged and reported as False.
"""

from loguru import logger
from telegram import Bot, LinkPreviewOptions
from telegram.constants import ParseMode
from telegram.error import TelegramError

from config.settings import get_settings

tg_log = logger.bind(module="Telegram")


class AlertBot:
    """Sends HTML-formatted alerts to Telegram chats."""

    def __init__(self, token: str | None = None):
        """
        Initialize AlertBot.

        Args:
            token: Bot token (defaults to TELEGRAM_BOT_TOKEN)
        """
        token = token if token is not None else get_settings().telegram.bot_token
        self._bot: Bot | None = Bot(token=token) if token else None
        if self._bot is None:
            tg_log.warning("TELEGRAM_BOT_TOKEN not set, alerts disabled")

    @property
    def is_configured(self) -> bool:
        """Whether a token was provided."""
        return self._bot is not None

    async def send_message(
        self,
        chat_id: int | str,
        text: str,
        disable_web_page_preview: bool = False,
    ) -> bool:
        """
        Send an HTML text message.

        Returns:
            True if sent successfully
        """
        if self._bot is None:
            return False

        try:
            await self._bot.send_message(
                chat_id=chat_id,
                text=text,
                parse_mode=ParseMode.HTML,
                link_preview_options=LinkPreviewOptions(is_disabled=disable_web_page_preview),
            )
        except TelegramError as e:
            tg_log.error(f"Failed to send message to {chat_id}: {e}")
            return False
        return True

    async def send_photo(self, chat_id: int | str, photo_url: str, caption: str) -> bool:
        """
        Send a photo by URL with an HTML caption.

        Returns:
            True if sent successfully
        """
        if self._bot is None:
            return False

        try:
            await self._bot.send_photo(
                chat_id=chat_id,
                photo=photo_url,
                caption=caption,
                parse_mode=ParseMode.HTML,
            )
        except TelegramError as e:
            tg_log.warning(f"Failed to send photo to {chat_id}: {e}")
            return False
        return True


# Singleton instance
_alert_bot: AlertBot | None = None


def get_alert_bot() -> AlertBot:
    """Get or create the AlertBot singleton."""
    global _alert_bot
    if _alert_bot is None:
        _alert_bot = AlertBot()
    return _alert_bot
