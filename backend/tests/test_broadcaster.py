"""Tests for broadcasting to subscribed chats."""

from unittest.mock import MagicMock

import pytest

from treasury_bot.services.access import (
    AuthorizedUser,
    InMemoryAuthorizationStore,
    InMemoryRecipientRegistry,
)
from treasury_bot.services.notifications import Broadcaster
from treasury_bot.services.telegram import TelegramAPIError


@pytest.fixture
def store():
    store = InMemoryAuthorizationStore()
    for chat_id in (1, 2, 3):
        store.add(chat_id, AuthorizedUser(f"user{chat_id}@grandestate.com", "viewer"))
    return store


@pytest.fixture
def recipients():
    recipients = InMemoryRecipientRegistry()
    for chat_id in (1, 2, 3):
        recipients.add(chat_id)
    return recipients


class TestBroadcaster:
    def test_sends_to_every_recipient(self, store, recipients):
        client = MagicMock()

        result = Broadcaster(client, recipients, store).broadcast("hola")

        assert result.delivered == [1, 2, 3]
        assert client.send_message.call_count == 3

    def test_blocked_recipient_is_removed(self, store, recipients):
        client = MagicMock()

        def send(chat_id, text):
            if chat_id == 2:
                raise TelegramAPIError("Forbidden: bot was blocked by the user", status_code=403)

        client.send_message.side_effect = send

        result = Broadcaster(client, recipients, store).broadcast("hola")

        assert result.delivered == [1, 3]
        assert result.failed == [2]
        assert result.removed == [2]
        assert recipients.snapshot() == [1, 3]
        assert 2 not in store

    def test_transient_failure_keeps_recipient(self, store, recipients):
        client = MagicMock()
        client.send_message.side_effect = [
            None,
            TelegramAPIError("Too Many Requests", status_code=429),
            RuntimeError("boom"),
        ]

        result = Broadcaster(client, recipients, store).broadcast("hola")

        assert result.delivered == [1]
        assert result.failed == [2, 3]
        assert result.removed == []
        assert recipients.snapshot() == [1, 2, 3]

    def test_no_recipients(self, store):
        client = MagicMock()

        result = Broadcaster(client, InMemoryRecipientRegistry(), store).broadcast("hola")

        assert result.delivered == []
        client.send_message.assert_not_called()
