"""Stores for authorized chats and broadcast recipients.

Both are injected into the gate and the broadcaster so the in-memory
versions can be swapped for a persistent backend. The in-memory stores
are lost on restart; users simply register again.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class AuthorizedUser:
    """Allow-listed identity bound to a chat."""

    email: str
    role: str | None


class AuthorizationStore(ABC):
    """Chat id -> AuthorizedUser mapping."""

    @abstractmethod
    def get(self, chat_id: int) -> AuthorizedUser | None: ...

    @abstractmethod
    def add(self, chat_id: int, user: AuthorizedUser) -> None: ...

    @abstractmethod
    def remove(self, chat_id: int) -> None: ...

    def __contains__(self, chat_id: int) -> bool:
        return self.get(chat_id) is not None


class RecipientRegistry(ABC):
    """Chats that receive scheduled broadcasts."""

    @abstractmethod
    def add(self, chat_id: int) -> None: ...

    @abstractmethod
    def discard(self, chat_id: int) -> None: ...

    @abstractmethod
    def snapshot(self) -> list[int]:
        """Copy of current recipients, safe to iterate while others mutate."""


class InMemoryAuthorizationStore(AuthorizationStore):
    def __init__(self) -> None:
        self._users: dict[int, AuthorizedUser] = {}
        self._lock = threading.Lock()

    def get(self, chat_id: int) -> AuthorizedUser | None:
        with self._lock:
            return self._users.get(chat_id)

    def add(self, chat_id: int, user: AuthorizedUser) -> None:
        with self._lock:
            self._users[chat_id] = user

    def remove(self, chat_id: int) -> None:
        with self._lock:
            self._users.pop(chat_id, None)


class InMemoryRecipientRegistry(RecipientRegistry):
    def __init__(self) -> None:
        self._chat_ids: set[int] = set()
        self._lock = threading.Lock()

    def add(self, chat_id: int) -> None:
        with self._lock:
            self._chat_ids.add(chat_id)

    def discard(self, chat_id: int) -> None:
        with self._lock:
            self._chat_ids.discard(chat_id)

    def snapshot(self) -> list[int]:
        with self._lock:
            return sorted(self._chat_ids)

    def __contains__(self, chat_id: int) -> bool:
        with self._lock:
            return chat_id in self._chat_ids
