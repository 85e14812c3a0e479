"""
Telegram Channel Module.

Handles Telegram bot integration for listing alerts.
"""

from src.channels.telegram.bot import AlertBot, get_alert_bot
from src.channels.telegram.formatter import TelegramFormatter, get_telegram_formatter

__all__ = [
    "AlertBot",
    "get_alert_bot",
    "TelegramFormatter",
    "get_telegram_formatter",
]
