"""Typed records for checks and treasury balances.

`Check.from_row` and `AccountBalance.from_row` are the only places where
raw rows are normalized: missing amounts become zero and timestamps are
reduced to their UTC calendar date. Nothing downstream re-checks for None.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

ZERO = Decimal("0")


def to_amount(value: Any) -> Decimal:
    """Coerce a stored monetary value to Decimal, treating None as zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def to_calendar_date(value: date | datetime | str | None) -> date | None:
    """Reduce a stored date or timestamp to its UTC calendar date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()
    if isinstance(value, date):
        return value
    # ISO strings as returned by REST exports ("2024-01-10" or "2024-01-10T00:00:00")
    return date.fromisoformat(value[:10])


@dataclass
class Check:
    """A check held or delivered by the treasury."""

    id: int | None
    issuer_tax_id: str | None
    counterparty_name: str | None
    amount_local: Decimal
    due_date: date | None
    delivery_date: date | None
    company: str | None

    @property
    def in_portfolio(self) -> bool:
        """A check is in portfolio until it has a delivery date."""
        return self.delivery_date is None

    @classmethod
    def from_row(cls, row: Any) -> "Check":
        """Build a normalized Check from a `ChequeValor` row (or any look-alike)."""
        return cls(
            id=row.id,
            issuer_tax_id=row.issuer_tax_id,
            counterparty_name=row.counterparty_name,
            amount_local=to_amount(row.amount_local),
            due_date=to_calendar_date(row.due_date),
            delivery_date=to_calendar_date(row.delivery_date),
            company=row.company,
        )


@dataclass
class AccountBalance:
    """Point-in-time balance of one treasury account."""

    account_code: str
    account_name: str
    total_balance: Decimal

    @property
    def is_negative(self) -> bool:
        return self.total_balance < 0

    @classmethod
    def from_row(cls, row: Any) -> "AccountBalance":
        """Build a normalized AccountBalance from a `SaldoContable` row."""
        return cls(
            account_code=str(row.account_code),
            account_name=row.account_name or "",
            total_balance=to_amount(row.total_balance),
        )
