"""Tests for folding checks into counts and amounts."""

from datetime import timedelta
from decimal import Decimal

from factories import TODAY, make_balance, make_check

from treasury_bot.constants import Company
from treasury_bot.services.treasury import aggregator
from treasury_bot.services.treasury.report_types import BucketTotals


class TestTotals:
    def test_total_amount_of_empty_is_zero(self):
        assert aggregator.total_amount([]) == Decimal("0")

    def test_summarize(self):
        checks = [make_check(amount="1000.50"), make_check(amount="499.50")]

        assert aggregator.summarize(checks) == BucketTotals(count=2, amount=Decimal("1500.00"))


class TestSplitByCompany:
    def test_every_known_company_has_a_bucket(self):
        result = aggregator.split_by_company([])

        assert set(result) == set(Company.ALL)
        assert all(bucket.count == 0 for bucket in result.values())

    def test_unknown_company_is_left_out(self):
        checks = [
            make_check(amount="100", company=Company.GRAND_ESTATE),
            make_check(amount="200", company=Company.PICO_DE_ORO),
            make_check(amount="300", company="OTRA"),
            make_check(amount="400", company=None),
        ]

        result = aggregator.split_by_company(checks)

        assert result[Company.GRAND_ESTATE] == BucketTotals(1, Decimal("100"))
        assert result[Company.PICO_DE_ORO] == BucketTotals(1, Decimal("200"))
        split_total = sum(bucket.amount for bucket in result.values())
        assert split_total < aggregator.total_amount(checks)


class TestGroupByDueDate:
    def test_groups_by_iso_date(self):
        tomorrow = TODAY + timedelta(days=1)
        checks = [
            make_check(amount="100", due=TODAY),
            make_check(amount="50", due=TODAY),
            make_check(amount="25", due=tomorrow),
        ]

        result = aggregator.group_by_due_date(checks)

        assert result == {
            "2024-01-10": BucketTotals(2, Decimal("150")),
            "2024-01-11": BucketTotals(1, Decimal("25")),
        }

    def test_skips_checks_without_due_date(self):
        assert aggregator.group_by_due_date([make_check(due=None)]) == {}


class TestTotalBalance:
    def test_sums_signed_balances(self):
        balances = [make_balance("1", "5000"), make_balance("2", "-2000")]

        assert aggregator.total_balance(balances) == Decimal("3000")

    def test_no_data_is_zero(self):
        assert aggregator.total_balance(None) == Decimal("0")
        assert aggregator.total_balance([]) == Decimal("0")
