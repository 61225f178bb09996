"""Check classification by due date, validity window and issuer concentration.

All functions are pure. "Today" is the UTC calendar date of the current
instant and every window is half-open: a check due exactly on a window's
end date belongs to the next window, never to both.
"""

import re
from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from treasury_bot.constants import Placeholder, Thresholds
from treasury_bot.services.treasury.records import ZERO, Check

ONE_DAY = timedelta(days=1)

_NON_DIGITS = re.compile(r"[^0-9]")


def today_utc(now: datetime | None = None) -> date:
    """UTC midnight of the current instant, as a calendar date."""
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is not None:
        now = now.astimezone(UTC)
    return now.date()


def in_portfolio(checks: Iterable[Check]) -> list[Check]:
    """Checks not yet delivered."""
    return [c for c in checks if c.in_portfolio]


def delivered(checks: Iterable[Check]) -> list[Check]:
    """Checks with a delivery date."""
    return [c for c in checks if not c.in_portfolio]


def due_between(checks: Iterable[Check], start: date, end: date) -> list[Check]:
    """Checks with start <= due_date < end."""
    return [c for c in checks if c.due_date is not None and start <= c.due_date < end]


def due_today(checks: Iterable[Check], today: date) -> list[Check]:
    return due_between(checks, today, today + ONE_DAY)


def due_tomorrow(checks: Iterable[Check], today: date) -> list[Check]:
    return due_between(checks, today + ONE_DAY, today + 2 * ONE_DAY)


def due_within_days(checks: Iterable[Check], today: date, days: int) -> list[Check]:
    """Checks maturing in the next `days` days, today included."""
    return due_between(checks, today, today + days * ONE_DAY)


def overdue(checks: Iterable[Check], today: date) -> list[Check]:
    """Checks that matured strictly before today."""
    return [c for c in checks if c.due_date is not None and c.due_date < today]


def days_since_due(check: Check, today: date) -> int:
    """Whole days elapsed since maturity (negative when not yet due)."""
    return (today - check.due_date).days


def days_to_expiry(check: Check, today: date) -> int:
    """Days left before the check loses validity."""
    return Thresholds.VALIDITY_DAYS - days_since_due(check, today)


def validity_critical(checks: Iterable[Check], today: date) -> list[Check]:
    """Checks between 25 and 30 days past maturity, both ends inclusive."""
    low = Thresholds.VALIDITY_WARNING_FROM_DAYS
    high = Thresholds.VALIDITY_DAYS
    return [
        c
        for c in checks
        if c.due_date is not None and low <= days_since_due(c, today) <= high
    ]


def concentration_by_issuer(checks: Iterable[Check]) -> dict[str, Decimal]:
    """Sum of amounts per issuer tax id; missing ids share the SIN_CUIT bucket."""
    totals: dict[str, Decimal] = {}
    for check in checks:
        key = check.issuer_tax_id or Placeholder.NO_TAX_ID
        totals[key] = totals.get(key, ZERO) + check.amount_local
    return totals


def critical_issuers(
    checks: Iterable[Check],
    threshold_pct: Decimal = Thresholds.CONCENTRATION_PCT,
) -> dict[str, Decimal]:
    """Issuers whose share of the portfolio amount exceeds `threshold_pct`.

    Returns a mapping of issuer to share percentage. An empty or zero-sum
    portfolio has no critical issuers.
    """
    by_issuer = concentration_by_issuer(checks)
    portfolio_total = sum(by_issuer.values(), ZERO)
    if portfolio_total == 0:
        return {}

    shares = {issuer: amount / portfolio_total * 100 for issuer, amount in by_issuer.items()}
    return {issuer: share for issuer, share in shares.items() if share > threshold_pct}


def normalize_tax_id_query(raw: str) -> str | None:
    """Strip everything but digits; None when fewer than 8 digits remain."""
    digits = _NON_DIGITS.sub("", raw or "")
    if len(digits) < Thresholds.MIN_TAX_ID_DIGITS:
        return None
    return digits


def matching_issuer(checks: Iterable[Check], tax_id_digits: str) -> list[Check]:
    """Checks whose stored issuer tax id contains `tax_id_digits`."""
    return [c for c in checks if c.issuer_tax_id and tax_id_digits in c.issuer_tax_id]
