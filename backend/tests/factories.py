"""Builders for domain records used across tests."""

from datetime import date
from decimal import Decimal

from treasury_bot.constants import Company
from treasury_bot.services.treasury import AccountBalance, Check

TODAY = date(2024, 1, 10)
ALLOWED_EMAIL = "tesoreria@grandestate.com"


def make_check(
    amount: str | None = "1000",
    due: date | None = TODAY,
    delivered: date | None = None,
    company: str | None = Company.GRAND_ESTATE,
    tax_id: str | None = "20123456789",
    counterparty: str | None = "Cliente SA",
    check_id: int | None = None,
) -> Check:
    """Build a normalized Check the way the data source would."""
    return Check(
        id=check_id,
        issuer_tax_id=tax_id,
        counterparty_name=counterparty,
        amount_local=Decimal(amount) if amount is not None else Decimal("0"),
        due_date=due,
        delivery_date=delivered,
        company=company,
    )


def make_balance(code: str, total: str, name: str | None = None) -> AccountBalance:
    return AccountBalance(
        account_code=code,
        account_name=name or f"Cuenta {code}",
        total_balance=Decimal(total),
    )
