"""Allow-list lookup backed by the `allowed_users` table."""

from sqlalchemy.orm import Session, sessionmaker

from treasury_bot.services.access.store import AuthorizedUser
from treasury_bot.services.repositories import AllowedUserRepository


class SqlAllowList:
    """Callable lookup that opens a short-lived session per query."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def __call__(self, email: str) -> AuthorizedUser | None:
        db = self._session_factory()
        try:
            row = AllowedUserRepository(db).find_by_email(email)
            if row is None:
                return None
            return AuthorizedUser(email=row.email, role=row.role)
        finally:
            db.close()
