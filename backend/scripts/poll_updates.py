"""Long-polling runner for local development (no public webhook needed).

Handles updates exactly like the webhook endpoint. Scheduled broadcasts
still come from the Airflow DAGs hitting the backend; the poller only
answers chats.
"""

import logging
import time

from sqlalchemy.orm import Session, sessionmaker

from treasury_bot.runtime import BotRuntime
from treasury_bot.schemas.telegram import TelegramUpdate
from treasury_bot.services.shared.http_client import HTTPClientError
from treasury_bot.services.telegram import CommandDispatcher, send_reply
from treasury_bot.services.treasury import SqlTreasuryDataSource, TreasuryReportService

logger = logging.getLogger(__name__)

ERROR_BACKOFF_SECONDS = 5


def handle_update(
    runtime: BotRuntime, session_factory: sessionmaker[Session], raw: dict
) -> None:
    """Dispatch one raw update and send the reply, if any."""
    update = TelegramUpdate.model_validate(raw)
    db = session_factory()
    try:
        reports = TreasuryReportService(SqlTreasuryDataSource(db))
        reply = CommandDispatcher(runtime.gate, reports, runtime.formatter).handle(update)
    finally:
        db.close()

    if reply is not None:
        send_reply(runtime.telegram, runtime.gate, reply)


def poll_once(
    runtime: BotRuntime,
    session_factory: sessionmaker[Session],
    offset: int | None,
    timeout: int = 30,
) -> int | None:
    """
    Fetch and handle one batch of updates.

    Returns:
        The offset to use for the next call (last update_id + 1)
    """
    updates = runtime.telegram.get_updates(offset=offset, timeout=timeout)
    for raw in updates:
        offset = raw["update_id"] + 1
        try:
            handle_update(runtime, session_factory, raw)
        except Exception:
            logger.exception("Error handling update %s", raw.get("update_id"))
    return offset


def run(runtime: BotRuntime, session_factory: sessionmaker[Session]) -> None:
    """Poll forever; webhook must be deleted first."""
    runtime.telegram.delete_webhook()
    logger.info("Polling for updates...")
    offset = None
    while True:
        try:
            offset = poll_once(runtime, session_factory, offset)
        except HTTPClientError as e:
            logger.warning("Polling error: %s", e)
            time.sleep(ERROR_BACKOFF_SECONDS)


if __name__ == "__main__":
    """Run as standalone script."""
    from treasury_bot.config import settings
    from treasury_bot.database import SessionLocal
    from treasury_bot.runtime import build_runtime

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    bot_runtime = build_runtime(settings, SessionLocal)
    if bot_runtime.telegram is None:
        raise SystemExit("TELEGRAM_BOT_TOKEN is not configured")
    try:
        run(bot_runtime, SessionLocal)
    except KeyboardInterrupt:
        logger.info("Stopped")
    finally:
        bot_runtime.close()
