"""Tests for check classification by due date, validity and concentration."""

from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal

from factories import TODAY, make_check

from treasury_bot.services.treasury import aggregator, classifier


def _days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


class TestTodayUtc:
    """Reference date is the UTC calendar date."""

    def test_uses_utc_date_of_aware_datetime(self):
        """Late evening in Buenos Aires is already tomorrow in UTC."""
        buenos_aires = timezone(timedelta(hours=-3))
        now = datetime(2024, 1, 10, 22, 30, tzinfo=buenos_aires)

        assert classifier.today_utc(now) == date(2024, 1, 11)

    def test_naive_datetime_taken_as_is(self):
        assert classifier.today_utc(datetime(2024, 1, 10, 23, 59)) == date(2024, 1, 10)

    def test_defaults_to_current_instant(self):
        assert classifier.today_utc() == datetime.now(UTC).date()


class TestPortfolioMembership:
    def test_in_portfolio_excludes_delivered(self):
        held = make_check(check_id=1)
        gone = make_check(check_id=2, delivered=_days_ago(3))

        assert classifier.in_portfolio([held, gone]) == [held]
        assert classifier.delivered([held, gone]) == [gone]


class TestDueWindows:
    """Windows are half-open [start, end)."""

    def test_due_today_only_matches_today(self):
        checks = [
            make_check(check_id=1, due=_days_ago(1)),
            make_check(check_id=2, due=TODAY),
            make_check(check_id=3, due=TODAY + timedelta(days=1)),
        ]

        result = classifier.due_today(checks, TODAY)

        assert [c.id for c in result] == [2]

    def test_due_tomorrow_only_matches_tomorrow(self):
        checks = [
            make_check(check_id=1, due=TODAY),
            make_check(check_id=2, due=TODAY + timedelta(days=1)),
            make_check(check_id=3, due=TODAY + timedelta(days=2)),
        ]

        result = classifier.due_tomorrow(checks, TODAY)

        assert [c.id for c in result] == [2]

    def test_window_end_is_exclusive(self):
        """A check due exactly on day 7 is outside the 7-day window."""
        checks = [
            make_check(check_id=1, due=TODAY),
            make_check(check_id=2, due=TODAY + timedelta(days=6)),
            make_check(check_id=3, due=TODAY + timedelta(days=7)),
        ]

        result = classifier.due_within_days(checks, TODAY, 7)

        assert [c.id for c in result] == [1, 2]

    def test_buckets_partition_the_week(self):
        """Today, tomorrow and the rest of the week are disjoint and cover the 7-day window."""
        checks = [
            make_check(check_id=offset, amount=str(100 + offset), due=TODAY + timedelta(days=offset))
            for offset in range(-1, 9)
        ]

        today_ids = {c.id for c in classifier.due_today(checks, TODAY)}
        tomorrow_ids = {c.id for c in classifier.due_tomorrow(checks, TODAY)}
        week_ids = {c.id for c in classifier.due_within_days(checks, TODAY, 7)}
        rest_ids = week_ids - today_ids - tomorrow_ids

        assert today_ids == {0}
        assert tomorrow_ids == {1}
        assert rest_ids == {2, 3, 4, 5, 6}
        assert not today_ids & tomorrow_ids
        assert not (today_ids | tomorrow_ids) & rest_ids
        assert today_ids | tomorrow_ids | rest_ids == week_ids

    def test_amounts_consistent_with_filters(self):
        checks = [
            make_check(check_id=offset, amount=str(100 + offset), due=TODAY + timedelta(days=offset))
            for offset in range(-1, 9)
        ]

        due = classifier.due_today(checks, TODAY)
        not_due = [c for c in checks if c not in due]

        assert aggregator.total_amount(checks) == (
            aggregator.total_amount(due) + aggregator.total_amount(not_due)
        )
        assert aggregator.total_amount(checks) == Decimal("1035")

    def test_check_without_due_date_matches_no_window(self):
        undated = make_check(due=None)

        assert classifier.due_today([undated], TODAY) == []
        assert classifier.due_within_days([undated], TODAY, 15) == []
        assert classifier.overdue([undated], TODAY) == []

    def test_overdue_is_strictly_before_today(self):
        checks = [
            make_check(check_id=1, due=_days_ago(1)),
            make_check(check_id=2, due=TODAY),
        ]

        assert [c.id for c in classifier.overdue(checks, TODAY)] == [1]


class TestValidityCritical:
    """Validity-critical means 25 to 30 days past maturity, inclusive."""

    def test_boundaries(self):
        checks = [
            make_check(check_id=24, due=_days_ago(24)),
            make_check(check_id=25, due=_days_ago(25)),
            make_check(check_id=30, due=_days_ago(30)),
            make_check(check_id=31, due=_days_ago(31)),
        ]

        result = classifier.validity_critical(checks, TODAY)

        assert [c.id for c in result] == [25, 30]

    def test_days_to_expiry(self):
        assert classifier.days_to_expiry(make_check(due=_days_ago(25)), TODAY) == 5
        assert classifier.days_to_expiry(make_check(due=_days_ago(30)), TODAY) == 0

    def test_days_since_due_negative_for_future_check(self):
        check = make_check(due=TODAY + timedelta(days=3))

        assert classifier.days_since_due(check, TODAY) == -3


class TestConcentration:
    def test_sums_amounts_per_issuer(self):
        checks = [
            make_check(amount="100", tax_id="A"),
            make_check(amount="50", tax_id="A"),
            make_check(amount="25", tax_id="B"),
        ]

        assert classifier.concentration_by_issuer(checks) == {
            "A": Decimal("150"),
            "B": Decimal("25"),
        }

    def test_missing_tax_id_shares_placeholder_bucket(self):
        checks = [make_check(amount="10", tax_id=None), make_check(amount="5", tax_id="")]

        assert classifier.concentration_by_issuer(checks) == {"SIN_CUIT": Decimal("15")}

    def test_every_issuer_above_threshold_is_critical(self):
        checks = [
            make_check(amount="50", tax_id="A"),
            make_check(amount="30", tax_id="B"),
            make_check(amount="20", tax_id="C"),
        ]

        result = classifier.critical_issuers(checks)

        assert set(result) == {"A", "B", "C"}
        assert result["A"] == Decimal("50")

    def test_exactly_threshold_is_not_critical(self):
        checks = [
            make_check(amount="15", tax_id="A"),
            make_check(amount="85", tax_id="B"),
        ]

        assert set(classifier.critical_issuers(checks)) == {"B"}

    def test_small_issuers_are_not_critical(self):
        checks = [make_check(amount="64", tax_id="BIG")] + [
            make_check(amount="4", tax_id=f"SMALL{i}") for i in range(9)
        ]

        assert set(classifier.critical_issuers(checks)) == {"BIG"}

    def test_empty_portfolio_has_no_critical_issuers(self):
        assert classifier.critical_issuers([]) == {}

    def test_zero_total_has_no_critical_issuers(self):
        checks = [make_check(amount="0", tax_id="A"), make_check(amount=None, tax_id="B")]

        assert classifier.critical_issuers(checks) == {}


class TestTaxIdQuery:
    def test_strips_formatting(self):
        assert classifier.normalize_tax_id_query("20-12345678-9") == "20123456789"

    def test_eight_digits_is_enough(self):
        assert classifier.normalize_tax_id_query("12345678") == "12345678"

    def test_too_short_is_rejected(self):
        assert classifier.normalize_tax_id_query("1234-567") is None
        assert classifier.normalize_tax_id_query("abc") is None
        assert classifier.normalize_tax_id_query("") is None

    def test_matches_by_substring(self):
        checks = [
            make_check(check_id=1, tax_id="20123456789"),
            make_check(check_id=2, tax_id="30999999991"),
            make_check(check_id=3, tax_id=None),
        ]

        result = classifier.matching_issuer(checks, "12345678")

        assert [c.id for c in result] == [1]
