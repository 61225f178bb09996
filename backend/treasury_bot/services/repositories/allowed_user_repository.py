"""Allow-list data access layer."""

from sqlalchemy.orm import Session

from treasury_bot.models import AllowedUser


class AllowedUserRepository:
    """Lookup of corporate emails permitted to use the bot."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_email(self, email: str) -> AllowedUser | None:
        """Find allow-list entry by exact email."""
        return self._db.query(AllowedUser).filter(AllowedUser.email == email).first()
