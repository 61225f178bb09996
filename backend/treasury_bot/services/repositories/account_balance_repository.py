"""Treasury balance data access layer."""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from treasury_bot.models import SaldoContable

if TYPE_CHECKING:
    from collections.abc import Sequence


class AccountBalanceRepository:
    """Read-only access to `saldos_contables_sync`."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_all(self) -> "Sequence[SaldoContable]":
        """Find all account balances ordered by account code."""
        return self._db.query(SaldoContable).order_by(SaldoContable.account_code).all()
