"""Assembles report payloads from classified and aggregated checks.

Builders are pure: they take a freshly fetched snapshot and a reference
date and return a value object from `report_types`. Date-bucketed views
and alerts only ever consider checks in portfolio; the issuer lookup
spans the full history.
"""

from collections.abc import Sequence
from datetime import date

from treasury_bot.constants import Placeholder, Thresholds
from treasury_bot.services.treasury import aggregator, classifier
from treasury_bot.services.treasury.records import AccountBalance, Check
from treasury_bot.services.treasury.report_types import (
    Alert,
    AlertsReport,
    BalanceLine,
    BalancesReport,
    ConcentrationAlert,
    CuitLookupReport,
    DailyDigest,
    DayBreakdown,
    DueReport,
    DueWindowReport,
    ExecutiveSummaryReport,
    LineItem,
    OverdueAlert,
    PortfolioReport,
    TomorrowDueAlert,
    ValidityAlert,
    ValidityCriticalAlert,
)

WEEK_DAYS = 7
FORTNIGHT_DAYS = 15


def build_portfolio(checks: Sequence[Check]) -> PortfolioReport:
    held = classifier.in_portfolio(checks)
    return PortfolioReport(
        totals=aggregator.summarize(held),
        by_company=aggregator.split_by_company(held),
    )


def _build_due_report(due: list[Check], today: date, day_offset: int) -> DueReport:
    limit = Thresholds.DETAIL_ITEM_LIMIT
    items = [
        LineItem(
            counterparty=c.counterparty_name or Placeholder.NO_COUNTERPARTY,
            amount=c.amount_local,
        )
        for c in due[:limit]
    ]
    return DueReport(
        due_date=today + day_offset * classifier.ONE_DAY,
        day_offset=day_offset,
        totals=aggregator.summarize(due),
        items=items,
        overflow=max(len(due) - limit, 0),
    )


def build_due_today(checks: Sequence[Check], today: date) -> DueReport:
    due = classifier.due_today(classifier.in_portfolio(checks), today)
    return _build_due_report(due, today, 0)


def build_due_tomorrow(checks: Sequence[Check], today: date) -> DueReport:
    due = classifier.due_tomorrow(classifier.in_portfolio(checks), today)
    return _build_due_report(due, today, 1)


def build_due_window(
    checks: Sequence[Check], today: date, days: int = WEEK_DAYS
) -> DueWindowReport:
    """Checks maturing in the next `days` days, with a per-day breakdown."""
    due = classifier.due_within_days(classifier.in_portfolio(checks), today, days)
    due.sort(key=lambda c: c.due_date)

    by_day = [
        DayBreakdown(due_date=date.fromisoformat(day), totals=totals)
        for day, totals in sorted(aggregator.group_by_due_date(due).items())
    ]
    return DueWindowReport(days=days, totals=aggregator.summarize(due), by_day=by_day)


def build_balances(balances: Sequence[AccountBalance] | None) -> BalancesReport:
    """Balances sorted by account code; None or empty yields the no-data variant."""
    ordered = sorted(balances or [], key=lambda b: b.account_code)
    lines = [
        BalanceLine(
            account_code=b.account_code,
            account_name=b.account_name,
            amount=b.total_balance,
            is_negative=b.is_negative,
        )
        for b in ordered
    ]
    return BalancesReport(lines=lines, total=aggregator.total_balance(ordered))


def build_alerts(checks: Sequence[Check], today: date) -> AlertsReport:
    """Overdue, validity and concentration alerts, in that order, when active."""
    held = classifier.in_portfolio(checks)
    alerts: list[Alert] = []

    late = classifier.overdue(held, today)
    if late:
        alerts.append(OverdueAlert(totals=aggregator.summarize(late)))

    expiring = classifier.validity_critical(held, today)
    if expiring:
        alerts.append(ValidityCriticalAlert(totals=aggregator.summarize(expiring)))

    concentrated = classifier.critical_issuers(held)
    if concentrated:
        alerts.append(
            ConcentrationAlert(
                issuer_count=len(concentrated),
                threshold_pct=Thresholds.CONCENTRATION_PCT,
            )
        )

    return AlertsReport(alerts=alerts)


def build_cuit_lookup(all_checks: Sequence[Check], tax_id_digits: str) -> CuitLookupReport:
    """Held and delivered totals for every check whose issuer id contains the query."""
    matches = classifier.matching_issuer(all_checks, tax_id_digits)
    client_name = None
    if matches:
        client_name = matches[0].counterparty_name or Placeholder.NO_CLIENT_NAME

    return CuitLookupReport(
        tax_id=tax_id_digits,
        client_name=client_name,
        in_portfolio=aggregator.summarize(classifier.in_portfolio(matches)),
        delivered=aggregator.summarize(classifier.delivered(matches)),
    )


def build_executive_summary(
    checks: Sequence[Check],
    balances: Sequence[AccountBalance] | None,
    today: date,
) -> ExecutiveSummaryReport:
    held = classifier.in_portfolio(checks)
    return ExecutiveSummaryReport(
        portfolio=aggregator.summarize(held),
        due_today=aggregator.summarize(classifier.due_today(held, today)),
        due_tomorrow=aggregator.summarize(classifier.due_tomorrow(held, today)),
        due_7_days=aggregator.summarize(classifier.due_within_days(held, today, WEEK_DAYS)),
        due_15_days=aggregator.summarize(
            classifier.due_within_days(held, today, FORTNIGHT_DAYS)
        ),
        treasury_total=aggregator.total_balance(balances),
        validity_critical_count=len(classifier.validity_critical(held, today)),
    )


def build_daily_digest(
    checks: Sequence[Check],
    balances: Sequence[AccountBalance] | None,
    today: date,
) -> DailyDigest:
    held = classifier.in_portfolio(checks)
    return DailyDigest(
        report_date=today,
        portfolio=aggregator.summarize(held),
        treasury_total=aggregator.total_balance(balances),
        due_today=aggregator.summarize(classifier.due_today(held, today)),
    )


def build_tomorrow_due_alert(checks: Sequence[Check], today: date) -> TomorrowDueAlert | None:
    """None when nothing matures tomorrow."""
    due = classifier.due_tomorrow(classifier.in_portfolio(checks), today)
    if not due:
        return None
    return TomorrowDueAlert(totals=aggregator.summarize(due))


def build_validity_alert(checks: Sequence[Check], today: date) -> ValidityAlert | None:
    """None when no check is inside the validity warning window."""
    expiring = classifier.validity_critical(classifier.in_portfolio(checks), today)
    if not expiring:
        return None
    return ValidityAlert(
        totals=aggregator.summarize(expiring),
        min_days_remaining=min(classifier.days_to_expiry(c, today) for c in expiring),
    )
