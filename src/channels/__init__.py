"""
Alert Channels Module.

Handles alert channels (Telegram).
"""

from src.channels.base import BaseFormatter
from src.channels.telegram import (
    AlertBot,
    TelegramFormatter,
    get_alert_bot,
    get_telegram_formatter,
)

__all__ = [
    # Base classes
    "BaseFormatter",
    # Telegram
    "AlertBot",
    "TelegramFormatter",
    "get_alert_bot",
    "get_telegram_formatter",
]
