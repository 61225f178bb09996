"""Access gate: binds a chat to an allow-listed corporate email."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from treasury_bot.services.access.store import (
    AuthorizationStore,
    AuthorizedUser,
    RecipientRegistry,
)

logger = logging.getLogger(__name__)


class RegistrationOutcome:
    """Result codes for a registration attempt."""

    ALREADY_REGISTERED = "already_registered"
    NOT_AN_EMAIL = "not_an_email"
    REJECTED = "rejected"
    REGISTERED = "registered"


@dataclass
class RegistrationResult:
    outcome: str
    email: str | None = None
    user: AuthorizedUser | None = None


# email -> AuthorizedUser, or None when the email is not allow-listed
AllowListLookup = Callable[[str], AuthorizedUser | None]


class AccessGate:
    """Authorization checks and registration for chat identities.

    Reports assume the caller already passed `is_authorized`; the gate is
    the only component that decides it.
    """

    def __init__(
        self,
        store: AuthorizationStore,
        recipients: RecipientRegistry,
        lookup: AllowListLookup,
    ) -> None:
        self._store = store
        self._recipients = recipients
        self._lookup = lookup

    def is_authorized(self, chat_id: int) -> bool:
        return chat_id in self._store

    def user_for(self, chat_id: int) -> AuthorizedUser | None:
        return self._store.get(chat_id)

    def touch(self, chat_id: int) -> None:
        """Subscribe an authorized chat to broadcasts when it talks to the bot."""
        if self.is_authorized(chat_id):
            self._recipients.add(chat_id)

    def register(self, chat_id: int, text: str) -> RegistrationResult:
        """Try to register `chat_id` with the email contained in `text`."""
        existing = self._store.get(chat_id)
        if existing is not None:
            return RegistrationResult(
                outcome=RegistrationOutcome.ALREADY_REGISTERED, email=existing.email, user=existing
            )

        if not text or "@" not in text:
            return RegistrationResult(outcome=RegistrationOutcome.NOT_AN_EMAIL)

        email = text.strip().lower()
        try:
            user = self._lookup(email)
        except Exception:
            logger.exception("Allow-list lookup failed for %s", email)
            user = None
        if user is None:
            logger.info("Rejected registration for chat %s: %s not allow-listed", chat_id, email)
            return RegistrationResult(outcome=RegistrationOutcome.REJECTED, email=email)

        self._store.add(chat_id, user)
        self._recipients.add(chat_id)
        logger.info("Registered chat %s as %s (%s)", chat_id, user.email, user.role)
        return RegistrationResult(outcome=RegistrationOutcome.REGISTERED, email=user.email, user=user)

    def revoke(self, chat_id: int) -> None:
        """Forget a chat entirely (authorization and broadcasts)."""
        self._store.remove(chat_id)
        self._recipients.discard(chat_id)
        logger.info("Revoked chat %s", chat_id)
