"""Report boundary: fetch a snapshot, build the report, contain failures.

Every public method returns a payload, a `ReportFailure`, or (for the
issuer lookup) an `InvalidInput`. Nothing raises past this layer.
"""

import logging
from collections.abc import Callable
from datetime import date
from typing import TypeVar

from treasury_bot.constants import ReportKind
from treasury_bot.services.treasury import report_builder
from treasury_bot.services.treasury.classifier import normalize_tax_id_query, today_utc
from treasury_bot.services.treasury.data_source import TreasuryDataSource
from treasury_bot.services.treasury.records import AccountBalance
from treasury_bot.services.treasury.report_types import (
    AlertsReport,
    BalancesReport,
    CuitLookupReport,
    DailyDigest,
    DueReport,
    DueWindowReport,
    ExecutiveSummaryReport,
    InvalidInput,
    PortfolioReport,
    ReportFailure,
    TomorrowDueAlert,
    ValidityAlert,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TreasuryReportService:
    """Produces treasury reports from a data source.

    The same methods serve chat commands and scheduled broadcasts, so
    aggregation logic lives only in `report_builder`.
    """

    def __init__(
        self,
        data_source: TreasuryDataSource,
        clock: Callable[[], date] = today_utc,
    ) -> None:
        self._data_source = data_source
        self._clock = clock

    def _run(self, report: str, build: Callable[[], T]) -> T | ReportFailure:
        try:
            return build()
        except Exception as e:
            logger.exception("Error building %s report", report)
            return ReportFailure(report=report, reason=str(e) or type(e).__name__)

    def _balances_or_none(self) -> list[AccountBalance] | None:
        """Balances for combined views, where a balance outage must not sink the report."""
        try:
            return self._data_source.fetch_account_balances()
        except Exception:
            logger.warning("Account balances unavailable, treasury total set to zero", exc_info=True)
            return None

    def portfolio(self) -> PortfolioReport | ReportFailure:
        return self._run(
            ReportKind.PORTFOLIO,
            lambda: report_builder.build_portfolio(self._data_source.fetch_in_portfolio_checks()),
        )

    def due_today(self) -> DueReport | ReportFailure:
        return self._run(
            ReportKind.DUE_TODAY,
            lambda: report_builder.build_due_today(
                self._data_source.fetch_in_portfolio_checks(), self._clock()
            ),
        )

    def due_tomorrow(self) -> DueReport | ReportFailure:
        return self._run(
            ReportKind.DUE_TOMORROW,
            lambda: report_builder.build_due_tomorrow(
                self._data_source.fetch_in_portfolio_checks(), self._clock()
            ),
        )

    def due_this_week(self) -> DueWindowReport | ReportFailure:
        return self._run(
            ReportKind.DUE_WEEK,
            lambda: report_builder.build_due_window(
                self._data_source.fetch_in_portfolio_checks(), self._clock()
            ),
        )

    def balances(self) -> BalancesReport | ReportFailure:
        return self._run(
            ReportKind.BALANCES,
            lambda: report_builder.build_balances(self._data_source.fetch_account_balances()),
        )

    def alerts(self) -> AlertsReport | ReportFailure:
        return self._run(
            ReportKind.ALERTS,
            lambda: report_builder.build_alerts(
                self._data_source.fetch_in_portfolio_checks(), self._clock()
            ),
        )

    def cuit_lookup(self, query: str) -> CuitLookupReport | InvalidInput | ReportFailure:
        """Issuer history for a tax id fragment of at least 8 digits."""
        tax_id = normalize_tax_id_query(query)
        if tax_id is None:
            return InvalidInput(
                report=ReportKind.CUIT_LOOKUP,
                message="Ingresá un CUIT válido. Ejemplo: /cuit 20123456789",
            )
        return self._run(
            ReportKind.CUIT_LOOKUP,
            lambda: report_builder.build_cuit_lookup(self._data_source.fetch_all_checks(), tax_id),
        )

    def executive_summary(self) -> ExecutiveSummaryReport | ReportFailure:
        def build() -> ExecutiveSummaryReport:
            checks = self._data_source.fetch_in_portfolio_checks()
            return report_builder.build_executive_summary(
                checks, self._balances_or_none(), self._clock()
            )

        return self._run(ReportKind.EXECUTIVE_SUMMARY, build)

    # Scheduled triggers: payload, None for "nothing to send", or a failure.

    def daily_digest(self) -> DailyDigest | ReportFailure:
        def build() -> DailyDigest:
            checks = self._data_source.fetch_in_portfolio_checks()
            return report_builder.build_daily_digest(
                checks, self._balances_or_none(), self._clock()
            )

        return self._run(ReportKind.DAILY_DIGEST, build)

    def tomorrow_due_alert(self) -> TomorrowDueAlert | ReportFailure | None:
        return self._run(
            ReportKind.TOMORROW_DUE_ALERT,
            lambda: report_builder.build_tomorrow_due_alert(
                self._data_source.fetch_in_portfolio_checks(), self._clock()
            ),
        )

    def validity_alert(self) -> ValidityAlert | ReportFailure | None:
        return self._run(
            ReportKind.VALIDITY_ALERT,
            lambda: report_builder.build_validity_alert(
                self._data_source.fetch_in_portfolio_checks(), self._clock()
            ),
        )
