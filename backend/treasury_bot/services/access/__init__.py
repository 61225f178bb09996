"""Access control for chat identities."""

from .allow_list import SqlAllowList
from .gate import AccessGate, RegistrationOutcome, RegistrationResult
from .store import (
    AuthorizationStore,
    AuthorizedUser,
    InMemoryAuthorizationStore,
    InMemoryRecipientRegistry,
    RecipientRegistry,
)

__all__ = [
    "AccessGate",
    "AuthorizationStore",
    "AuthorizedUser",
    "InMemoryAuthorizationStore",
    "InMemoryRecipientRegistry",
    "RecipientRegistry",
    "RegistrationOutcome",
    "RegistrationResult",
    "SqlAllowList",
]
