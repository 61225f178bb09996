"""Read interface over the treasury tables."""

import logging
from abc import ABC, abstractmethod

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from treasury_bot.services.repositories import (
    AccountBalanceRepository,
    ChequeRepository,
    DataFetchError,
)
from treasury_bot.services.treasury.records import AccountBalance, Check

logger = logging.getLogger(__name__)


class TreasuryDataSource(ABC):
    """Point-in-time snapshots of checks and balances.

    Every call fetches fresh data; implementations must not cache
    across calls.
    """

    @abstractmethod
    def fetch_in_portfolio_checks(self) -> list[Check]:
        """Checks without a delivery date."""

    @abstractmethod
    def fetch_all_checks(self) -> list[Check]:
        """Every check, held or delivered."""

    @abstractmethod
    def fetch_account_balances(self) -> list[AccountBalance] | None:
        """Account balances, or None when the source has no snapshot at all."""


class SqlTreasuryDataSource(TreasuryDataSource):
    """TreasuryDataSource backed by the synced PostgreSQL tables."""

    def __init__(self, db: Session) -> None:
        self._cheques = ChequeRepository(db)
        self._balances = AccountBalanceRepository(db)

    def fetch_in_portfolio_checks(self) -> list[Check]:
        try:
            rows = self._cheques.find_in_portfolio()
        except SQLAlchemyError as e:
            raise DataFetchError("cheques_valores", str(e)) from e
        return [Check.from_row(row) for row in rows]

    def fetch_all_checks(self) -> list[Check]:
        try:
            rows = self._cheques.find_all()
        except SQLAlchemyError as e:
            raise DataFetchError("cheques_valores", str(e)) from e
        return [Check.from_row(row) for row in rows]

    def fetch_account_balances(self) -> list[AccountBalance] | None:
        try:
            rows = self._balances.find_all()
        except SQLAlchemyError as e:
            raise DataFetchError("saldos_contables_sync", str(e)) from e
        logger.debug("Fetched %d account balances", len(rows))
        return [AccountBalance.from_row(row) for row in rows]
