"""Fan-out of one message to every subscribed chat."""

import logging
from dataclasses import dataclass, field

from treasury_bot.services.access.store import AuthorizationStore, RecipientRegistry
from treasury_bot.services.telegram.client import TelegramAPIError, TelegramClient

logger = logging.getLogger(__name__)


@dataclass
class BroadcastResult:
    delivered: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)
    removed: list[int] = field(default_factory=list)


class Broadcaster:
    """Sends a message to all recipients, isolating per-recipient failures.

    A recipient that blocked the bot is dropped from broadcasts and loses
    its authorization; any other failure is logged and the loop continues.
    """

    def __init__(
        self,
        client: TelegramClient,
        recipients: RecipientRegistry,
        store: AuthorizationStore,
    ) -> None:
        self._client = client
        self._recipients = recipients
        self._store = store

    def broadcast(self, text: str) -> BroadcastResult:
        result = BroadcastResult()
        for chat_id in self._recipients.snapshot():
            try:
                self._client.send_message(chat_id, text)
            except TelegramAPIError as e:
                logger.error("Error sending notification to %s: %s", chat_id, e)
                result.failed.append(chat_id)
                if e.is_recipient_unreachable:
                    self._recipients.discard(chat_id)
                    self._store.remove(chat_id)
                    result.removed.append(chat_id)
                    logger.info("Removed unreachable recipient %s", chat_id)
            except Exception:
                logger.exception("Unexpected error sending notification to %s", chat_id)
                result.failed.append(chat_id)
            else:
                result.delivered.append(chat_id)
        return result
