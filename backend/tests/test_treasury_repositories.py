"""Tests for the treasury repositories and SQL data source."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from treasury_bot.models import AllowedUser, ChequeValor, SaldoContable
from treasury_bot.services.repositories import (
    AccountBalanceRepository,
    AllowedUserRepository,
    ChequeRepository,
    DataFetchError,
)
from treasury_bot.services.treasury import SqlTreasuryDataSource


@pytest.fixture
def seeded_db(db):
    """Two held checks, one delivered, and two account balances."""
    db.add_all(
        [
            ChequeValor(
                id=1,
                issuer_tax_id="20123456789",
                counterparty_name="Cliente SA",
                amount_local=Decimal("1000.00"),
                due_date=date(2024, 1, 12),
                delivery_date=None,
                company="GRAND_ESTATE",
            ),
            ChequeValor(
                id=2,
                issuer_tax_id="30999999991",
                counterparty_name=None,
                amount_local=None,
                due_date=date(2024, 1, 10),
                delivery_date=None,
                company="PICO_DE_ORO",
            ),
            ChequeValor(
                id=3,
                issuer_tax_id="20123456789",
                counterparty_name="Cliente SA",
                amount_local=Decimal("500.00"),
                due_date=date(2023, 12, 1),
                delivery_date=date(2023, 12, 5),
                company="GRAND_ESTATE",
            ),
            SaldoContable(account_code="2", account_name="Banco", total_balance=Decimal("-2000")),
            SaldoContable(account_code="1", account_name="Caja", total_balance=Decimal("5000")),
            AllowedUser(email="tesoreria@grandestate.com", role="admin"),
        ]
    )
    db.commit()
    return db


class TestChequeRepository:
    def test_find_in_portfolio_ordered_by_due_date(self, seeded_db):
        rows = ChequeRepository(seeded_db).find_in_portfolio()

        assert [row.id for row in rows] == [2, 1]

    def test_find_all_includes_delivered(self, seeded_db):
        rows = ChequeRepository(seeded_db).find_all()

        assert [row.id for row in rows] == [1, 2, 3]


class TestAccountBalanceRepository:
    def test_find_all_ordered_by_code(self, seeded_db):
        rows = AccountBalanceRepository(seeded_db).find_all()

        assert [row.account_code for row in rows] == ["1", "2"]

    def test_empty_table(self, db):
        assert AccountBalanceRepository(db).find_all() == []


class TestAllowedUserRepository:
    def test_find_by_email(self, seeded_db):
        repo = AllowedUserRepository(seeded_db)

        assert repo.find_by_email("tesoreria@grandestate.com").role == "admin"
        assert repo.find_by_email("otro@grandestate.com") is None


class TestSqlTreasuryDataSource:
    def test_rows_are_normalized(self, seeded_db):
        checks = SqlTreasuryDataSource(seeded_db).fetch_in_portfolio_checks()

        assert [c.id for c in checks] == [2, 1]
        assert checks[0].amount_local == Decimal("0")
        assert all(c.in_portfolio for c in checks)

    def test_all_checks(self, seeded_db):
        checks = SqlTreasuryDataSource(seeded_db).fetch_all_checks()

        assert len(checks) == 3
        assert not checks[2].in_portfolio

    def test_account_balances(self, seeded_db):
        balances = SqlTreasuryDataSource(seeded_db).fetch_account_balances()

        assert [b.account_name for b in balances] == ["Caja", "Banco"]
        assert balances[1].is_negative

    def test_database_error_becomes_fetch_error(self):
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

        with pytest.raises(DataFetchError) as exc_info:
            SqlTreasuryDataSource(db).fetch_in_portfolio_checks()

        assert exc_info.value.source == "cheques_valores"
