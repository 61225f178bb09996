"""Tests for the webhook setup and long-polling scripts."""

from unittest.mock import MagicMock, patch

from factories import ALLOWED_EMAIL


def _raw_update(update_id: int, text: str, chat_id: int = 42) -> dict:
    return {
        "update_id": update_id,
        "message": {"message_id": update_id, "chat": {"id": chat_id}, "text": text},
    }


class TestConfigureWebhook:
    def test_sets_webhook_path(self):
        from scripts.set_webhook import configure_webhook

        client = MagicMock()
        client.set_webhook.return_value = True

        assert configure_webhook(client, "https://bot.example.com/") is True
        client.set_webhook.assert_called_once_with(
            "https://bot.example.com/api/telegram/webhook", secret_token=None
        )

    def test_none_deletes_webhook(self):
        from scripts.set_webhook import configure_webhook

        client = MagicMock()

        configure_webhook(client, None)

        client.delete_webhook.assert_called_once()
        client.set_webhook.assert_not_called()


class TestPollOnce:
    def test_handles_batch_and_advances_offset(self, runtime, session_factory):
        from scripts.poll_updates import poll_once

        runtime.telegram.get_updates.return_value = [
            _raw_update(7, "/start"),
            _raw_update(8, ALLOWED_EMAIL),
        ]

        offset = poll_once(runtime, session_factory, offset=None)

        assert offset == 9
        assert runtime.telegram.send_message.call_count == 2
        assert runtime.gate.is_authorized(42)

    def test_bad_update_does_not_stop_batch(self, runtime, session_factory):
        from scripts.poll_updates import poll_once

        runtime.telegram.get_updates.return_value = [
            {"update_id": 3, "message": {"chat": {}}},
            _raw_update(4, "/start"),
        ]

        offset = poll_once(runtime, session_factory, offset=3)

        assert offset == 5
        runtime.telegram.send_message.assert_called_once()

    def test_empty_batch_keeps_offset(self, runtime, session_factory):
        from scripts.poll_updates import poll_once

        runtime.telegram.get_updates.return_value = []

        assert poll_once(runtime, session_factory, offset=12) == 12

    def test_opens_one_session_per_update(self, runtime, session_factory):
        from scripts.poll_updates import handle_update

        factory = MagicMock(wraps=session_factory)
        with patch("scripts.poll_updates.send_reply") as mock_send:
            handle_update(runtime, factory, _raw_update(1, "hola"))

        factory.assert_called_once()
        mock_send.assert_not_called()
