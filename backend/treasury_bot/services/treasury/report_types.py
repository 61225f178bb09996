"""Value objects returned by the report builder."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal


@dataclass
class BucketTotals:
    """Count and summed amount of a group of checks."""

    count: int
    amount: Decimal


@dataclass
class LineItem:
    """One example check shown in a due-date report."""

    counterparty: str
    amount: Decimal


@dataclass
class DayBreakdown:
    """Checks maturing on a single calendar day."""

    due_date: date
    totals: BucketTotals


@dataclass
class PortfolioReport:
    """Checks in portfolio, overall and per company."""

    totals: BucketTotals
    by_company: dict[str, BucketTotals]


@dataclass
class DueReport:
    """Checks maturing on one day (today or tomorrow)."""

    due_date: date
    day_offset: int  # 0 = today, 1 = tomorrow
    totals: BucketTotals
    items: list[LineItem]
    overflow: int

    @property
    def is_empty(self) -> bool:
        return self.totals.count == 0


@dataclass
class DueWindowReport:
    """Checks maturing within the next `days` days, broken down by day."""

    days: int
    totals: BucketTotals
    by_day: list[DayBreakdown]

    @property
    def is_empty(self) -> bool:
        return self.totals.count == 0


@dataclass
class BalanceLine:
    """One treasury account in the balances report."""

    account_code: str
    account_name: str
    amount: Decimal
    is_negative: bool


@dataclass
class BalancesReport:
    """Treasury balances ordered by account code, with grand total."""

    lines: list[BalanceLine]
    total: Decimal

    @property
    def has_data(self) -> bool:
        return bool(self.lines)


@dataclass
class OverdueAlert:
    totals: BucketTotals


@dataclass
class ValidityCriticalAlert:
    totals: BucketTotals


@dataclass
class ConcentrationAlert:
    issuer_count: int
    threshold_pct: Decimal


Alert = OverdueAlert | ValidityCriticalAlert | ConcentrationAlert


@dataclass
class AlertsReport:
    """Active risk alerts over the portfolio; empty means all clear."""

    alerts: list[Alert] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.alerts


@dataclass
class CuitLookupReport:
    """History of checks signed by one issuer, held and delivered."""

    tax_id: str
    client_name: str | None
    in_portfolio: BucketTotals
    delivered: BucketTotals

    @property
    def found(self) -> bool:
        return (self.in_portfolio.count + self.delivered.count) > 0

    @property
    def historical_total(self) -> Decimal:
        return self.in_portfolio.amount + self.delivered.amount


@dataclass
class ExecutiveSummaryReport:
    """Portfolio, maturities, treasury and validity figures in one view."""

    portfolio: BucketTotals
    due_today: BucketTotals
    due_tomorrow: BucketTotals
    due_7_days: BucketTotals
    due_15_days: BucketTotals
    treasury_total: Decimal
    validity_critical_count: int


@dataclass
class DailyDigest:
    """Morning broadcast."""

    report_date: date
    portfolio: BucketTotals
    treasury_total: Decimal
    due_today: BucketTotals


@dataclass
class TomorrowDueAlert:
    """Evening broadcast; only produced when something matures tomorrow."""

    totals: BucketTotals


@dataclass
class ValidityAlert:
    """Broadcast for checks about to lose validity."""

    totals: BucketTotals
    min_days_remaining: int


@dataclass
class ReportFailure:
    """A report could not be produced (data fetch or computation failed)."""

    report: str
    reason: str


@dataclass
class InvalidInput:
    """The request was rejected before any data was fetched."""

    report: str
    message: str
