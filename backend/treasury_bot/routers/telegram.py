"""Telegram webhook router."""

import hmac
import logging

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Request, status
from pydantic import ValidationError

from treasury_bot.config import settings
from treasury_bot.dependencies.runtime import get_report_service, get_runtime
from treasury_bot.rate_limiter import limiter
from treasury_bot.runtime import BotRuntime
from treasury_bot.schemas.telegram import TelegramUpdate
from treasury_bot.services.telegram import CommandDispatcher, send_reply
from treasury_bot.services.treasury import TreasuryReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/telegram", tags=["telegram"])


@router.post("/webhook")
@limiter.limit(settings.webhook_rate_limit)
def telegram_webhook(
    request: Request,
    payload: dict = Body(...),
    x_telegram_bot_api_secret_token: str | None = Header(None),
    runtime: BotRuntime = Depends(get_runtime),
    reports: TreasuryReportService = Depends(get_report_service),
) -> dict:
    """
    Receive one update from Telegram and answer it.

    Always acknowledges with 200 once the secret is valid, even when the
    update is malformed or the reply fails, so Telegram does not redeliver.
    """
    expected = settings.telegram_webhook_secret
    if expected and not hmac.compare_digest(x_telegram_bot_api_secret_token or "", expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid webhook secret",
        )

    try:
        update = TelegramUpdate.model_validate(payload)
    except ValidationError:
        logger.warning("Ignoring malformed Telegram update")
        return {"ok": True}

    reply = CommandDispatcher(runtime.gate, reports, runtime.formatter).handle(update)
    if reply is None:
        return {"ok": True}

    if runtime.telegram is None:
        logger.error("Cannot reply to chat %s: Telegram bot token not configured", reply.chat_id)
        return {"ok": True}

    send_reply(runtime.telegram, runtime.gate, reply)
    return {"ok": True}
