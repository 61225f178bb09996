"""Process-wide collaborators shared by the webhook, scheduler endpoints and poller."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from treasury_bot.config import Settings
from treasury_bot.services.access import (
    AccessGate,
    AuthorizationStore,
    InMemoryAuthorizationStore,
    InMemoryRecipientRegistry,
    RecipientRegistry,
    SqlAllowList,
)
from treasury_bot.services.notifications import Broadcaster
from treasury_bot.services.telegram import ReportFormatter, TelegramClient

logger = logging.getLogger(__name__)


@dataclass
class BotRuntime:
    """Long-lived state; everything per-request (DB sessions, reports) is built elsewhere."""

    store: AuthorizationStore
    recipients: RecipientRegistry
    gate: AccessGate
    formatter: ReportFormatter
    telegram: TelegramClient | None
    broadcaster: Broadcaster | None

    def close(self) -> None:
        if self.telegram is not None:
            self.telegram.close()


def log_configuration(settings: Settings) -> None:
    """Report which required settings are present, never their values."""
    token = settings.telegram_bot_token
    logger.info("Telegram token: %s", f"OK (length: {len(token)})" if token else "MISSING")
    logger.info("Database URL: %s", "OK" if settings.database_url else "MISSING")
    if not token:
        logger.error("TELEGRAM_BOT_TOKEN is not configured; replies and broadcasts are disabled")
    if not settings.scheduler_token:
        logger.warning("SCHEDULER_TOKEN is not configured; notification endpoints will reject calls")


def build_runtime(settings: Settings, session_factory: sessionmaker[Session]) -> BotRuntime:
    """Wire stores, gate, formatter and Telegram client from settings."""
    log_configuration(settings)

    store = InMemoryAuthorizationStore()
    recipients = InMemoryRecipientRegistry()
    gate = AccessGate(store, recipients, SqlAllowList(session_factory))

    telegram = None
    broadcaster = None
    if settings.telegram_bot_token:
        telegram = TelegramClient(settings.telegram_bot_token, api_url=settings.telegram_api_url)
        broadcaster = Broadcaster(telegram, recipients, store)

    return BotRuntime(
        store=store,
        recipients=recipients,
        gate=gate,
        formatter=ReportFormatter(settings.display_timezone),
        telegram=telegram,
        broadcaster=broadcaster,
    )
