"""Telegram Bot API client.

Wraps the handful of Bot API methods the bot needs. Every call is a POST
to https://api.telegram.org/bot<token>/<method> returning
{"ok": bool, "result": ..., "description": ...}.
"""

import logging
from typing import Any

from treasury_bot.services.shared.http_client import HTTPClient, HTTPClientError

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org"

# Bot API answers 403 when the user blocked the bot or deleted the chat
FORBIDDEN = 403


class TelegramAPIError(HTTPClientError):
    """Exception raised for Telegram Bot API errors."""

    @property
    def is_recipient_unreachable(self) -> bool:
        return self.status_code == FORBIDDEN


class TelegramClient(HTTPClient):
    """Client for the Telegram Bot API.

    Usage:
        with TelegramClient(token="123:abc") as client:
            client.send_message(42, "*Hola*")
    """

    def __init__(self, token: str, api_url: str = TELEGRAM_API_URL, timeout: float = 30.0):
        if not token:
            raise ValueError("Telegram bot token is required")
        super().__init__(base_url=f"{api_url.rstrip('/')}/bot{token}", timeout=timeout)

    def _call(self, method: str, payload: dict | None = None, timeout: float | None = None) -> Any:
        """Invoke a Bot API method and return its `result`.

        Raises:
            TelegramAPIError: On HTTP failure or an `ok: false` response
        """
        try:
            body = self.post_json(f"/{method}", json=payload or {}, timeout=timeout)
        except HTTPClientError as e:
            raise TelegramAPIError(
                str(e), status_code=e.status_code, response_body=e.response_body
            ) from e

        if not body.get("ok"):
            description = body.get("description", "unknown error")
            logger.warning("Telegram %s failed: %s", method, description)
            raise TelegramAPIError(
                f"Telegram API error: {description}", status_code=body.get("error_code")
            )
        return body.get("result")

    def send_message(self, chat_id: int, text: str, parse_mode: str | None = "Markdown") -> dict:
        """Send a text message to a chat."""
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        return self._call("sendMessage", payload)

    def set_webhook(self, url: str, secret_token: str | None = None) -> bool:
        """Point Telegram at our webhook endpoint."""
        payload: dict[str, Any] = {"url": url, "allowed_updates": ["message"]}
        if secret_token:
            payload["secret_token"] = secret_token
        return bool(self._call("setWebhook", payload))

    def delete_webhook(self) -> bool:
        """Remove the webhook so long polling can be used."""
        return bool(self._call("deleteWebhook"))

    def get_updates(self, offset: int | None = None, timeout: int = 30) -> list[dict]:
        """Long-poll for new updates."""
        payload: dict[str, Any] = {"timeout": timeout, "allowed_updates": ["message"]}
        if offset is not None:
            payload["offset"] = offset
        # HTTP timeout must outlast the server-side long poll
        return self._call("getUpdates", payload, timeout=timeout + 10) or []
