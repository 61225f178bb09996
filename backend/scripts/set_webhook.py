"""Register (or remove) the Telegram webhook for this deployment."""

import argparse
import logging

from treasury_bot.config import settings
from treasury_bot.services.telegram import TelegramClient

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/api/telegram/webhook"


def configure_webhook(client: TelegramClient, public_url: str | None) -> bool:
    """
    Point Telegram at `<public_url>/api/telegram/webhook`, or delete the webhook.

    Args:
        client: Telegram client for the bot
        public_url: Public base URL of the backend; None removes the webhook

    Returns:
        True if Telegram accepted the change
    """
    if public_url is None:
        logger.info("Deleting webhook")
        return client.delete_webhook()

    url = public_url.rstrip("/") + WEBHOOK_PATH
    logger.info("Setting webhook to %s", url)
    return client.set_webhook(url, secret_token=settings.telegram_webhook_secret or None)


if __name__ == "__main__":
    """Run as standalone script."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    parser = argparse.ArgumentParser(description=__doc__)
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--url", help="Public base URL, e.g. https://bot.example.com")
    group.add_argument("--delete", action="store_true", help="Remove the webhook")
    args = parser.parse_args()

    with TelegramClient(settings.telegram_bot_token, api_url=settings.telegram_api_url) as client:
        ok = configure_webhook(client, None if args.delete else args.url)
    logger.info("Done" if ok else "Telegram rejected the request")
