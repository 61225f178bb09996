"""Allowed user model - the bot's allow-list."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from treasury_bot.database import Base


class AllowedUser(Base):
    """Corporate email permitted to register with the bot."""

    __tablename__ = "allowed_users"

    email: Mapped[str] = mapped_column(String(255), primary_key=True)
    role: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<AllowedUser({self.email}, role={self.role})>"
