"""Inbound Telegram update schemas.

Only the fields the bot reads are declared; Telegram adds fields over
time and unknown ones are ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    type: str | None = None


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message_id: int
    chat: TelegramChat
    text: str | None = None


class TelegramUpdate(BaseModel):
    """One update delivered by webhook or getUpdates."""

    model_config = ConfigDict(extra="ignore")

    update_id: int
    message: TelegramMessage | None = Field(None, description="New incoming message")
