"""Check data access layer."""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from treasury_bot.models import ChequeValor

if TYPE_CHECKING:
    from collections.abc import Sequence


class ChequeRepository:
    """Read-only access to `cheques_valores`.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises exception if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_in_portfolio(self) -> "Sequence[ChequeValor]":
        """Find checks still held (no delivery date)."""
        return (
            self._db.query(ChequeValor)
            .filter(ChequeValor.delivery_date.is_(None))
            .order_by(ChequeValor.due_date, ChequeValor.id)
            .all()
        )

    def find_all(self) -> "Sequence[ChequeValor]":
        """Find every check, held or delivered."""
        return self._db.query(ChequeValor).order_by(ChequeValor.id).all()
