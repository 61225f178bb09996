"""Folding check collections into counts and amounts."""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from treasury_bot.constants import Company
from treasury_bot.services.treasury.records import ZERO, AccountBalance, Check
from treasury_bot.services.treasury.report_types import BucketTotals


def total_amount(checks: Iterable[Check]) -> Decimal:
    return sum((c.amount_local for c in checks), ZERO)


def count(checks: Sequence[Check]) -> int:
    return len(checks)


def summarize(checks: Sequence[Check]) -> BucketTotals:
    """Count and amount of a collection in one value."""
    return BucketTotals(count=count(checks), amount=total_amount(checks))


def split_by_company(checks: Iterable[Check]) -> dict[str, BucketTotals]:
    """Totals for each known company.

    Checks whose company is not one of `Company.ALL` are left out of every
    bucket, so the buckets can sum to less than the portfolio total.
    """
    grouped: dict[str, list[Check]] = {company: [] for company in Company.ALL}
    for check in checks:
        if check.company in grouped:
            grouped[check.company].append(check)
    return {company: summarize(members) for company, members in grouped.items()}


def group_by_due_date(checks: Iterable[Check]) -> dict[str, BucketTotals]:
    """Totals per ISO due date ("YYYY-MM-DD"); unordered."""
    groups: dict[str, BucketTotals] = {}
    for check in checks:
        if check.due_date is None:
            continue
        key = check.due_date.isoformat()
        bucket = groups.setdefault(key, BucketTotals(count=0, amount=ZERO))
        bucket.count += 1
        bucket.amount += check.amount_local
    return groups


def total_balance(balances: Iterable[AccountBalance] | None) -> Decimal:
    """Sum of all account balances; no data sums to zero."""
    if not balances:
        return ZERO
    return sum((b.total_balance for b in balances), ZERO)
