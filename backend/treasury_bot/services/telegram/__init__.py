"""Telegram transport: Bot API client, message rendering and command routing."""

from .client import TelegramAPIError, TelegramClient
from .dispatcher import CommandDispatcher, Reply, send_reply
from .formatter import ReportFormatter, format_currency, format_date

__all__ = [
    "CommandDispatcher",
    "Reply",
    "ReportFormatter",
    "TelegramAPIError",
    "TelegramClient",
    "format_currency",
    "format_date",
    "send_reply",
]
