"""Pydantic schemas for API validation."""

from treasury_bot.schemas.notifications import JobResultResponse
from treasury_bot.schemas.telegram import TelegramChat, TelegramMessage, TelegramUpdate

__all__ = [
    "JobResultResponse",
    "TelegramChat",
    "TelegramMessage",
    "TelegramUpdate",
]
