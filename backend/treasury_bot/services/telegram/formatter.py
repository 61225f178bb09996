"""Renders report payloads as es-AR Markdown messages for Telegram."""

from collections.abc import Callable
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal
from zoneinfo import ZoneInfo

from treasury_bot.constants import Company, ReportKind
from treasury_bot.services.treasury.records import ZERO
from treasury_bot.services.treasury.report_types import (
    AlertsReport,
    BalancesReport,
    ConcentrationAlert,
    CuitLookupReport,
    DailyDigest,
    DueReport,
    DueWindowReport,
    ExecutiveSummaryReport,
    InvalidInput,
    OverdueAlert,
    PortfolioReport,
    ReportFailure,
    TomorrowDueAlert,
    ValidityAlert,
    ValidityCriticalAlert,
)

CENTS = Decimal("0.01")
RULE = "━━━━━━━━━━━━━━━━━━"

FAILURE_MESSAGES = {
    ReportKind.PORTFOLIO: "❌ Error al obtener datos de cartera.",
    ReportKind.DUE_TODAY: "❌ Error al obtener vencimientos de hoy.",
    ReportKind.DUE_TOMORROW: "❌ Error al obtener vencimientos de mañana.",
    ReportKind.DUE_WEEK: "❌ Error al obtener vencimientos de la semana.",
    ReportKind.BALANCES: "❌ Error al obtener saldos de tesorería.",
    ReportKind.ALERTS: "❌ Error al obtener alertas.",
    ReportKind.CUIT_LOOKUP: "❌ Error al consultar CUIT.",
    ReportKind.EXECUTIVE_SUMMARY: "❌ Error al generar resumen.",
}
GENERIC_FAILURE = "❌ Error al generar el reporte."

_MARKDOWN_SPECIALS = ("\\", "_", "*", "`", "[")


def format_currency(value: Decimal | None) -> str:
    """Argentine peso format: `$ 1.234,56`, `-$ 1.234,56`."""
    amount = (value if value is not None else ZERO).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    integer, _, cents = f"{abs(amount):.2f}".partition(".")
    grouped = f"{int(integer):,}".replace(",", ".")
    return f"{sign}$ {grouped},{cents}"


def format_date(value: date | None) -> str:
    """Short es-AR date (d/m/yyyy)."""
    if value is None:
        return "N/A"
    return f"{value.day}/{value.month}/{value.year}"


def escape_markdown(text: str) -> str:
    """Escape user data for Telegram legacy Markdown."""
    for char in _MARKDOWN_SPECIALS:
        text = text.replace(char, f"\\{char}")
    return text


class ReportFormatter:
    """Turns report value objects into chat messages.

    The footer timestamp is the only wall-clock value rendered and uses
    the display timezone; everything else comes from the payload.
    """

    def __init__(
        self,
        timezone: str = "America/Argentina/Buenos_Aires",
        now: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._tz = ZoneInfo(timezone)
        self._now = now

    def _local_now(self) -> datetime:
        return self._now().astimezone(self._tz)

    def footer(self) -> str:
        stamp = self._local_now()
        return f"⏰ {format_date(stamp.date())}, {stamp:%H:%M:%S}"

    def render(self, payload: object) -> str:
        """Render any report payload, failure or invalid-input result."""
        renderers: dict[type, Callable] = {
            PortfolioReport: self.portfolio,
            DueReport: self.due,
            DueWindowReport: self.due_window,
            BalancesReport: self.balances,
            AlertsReport: self.alerts,
            CuitLookupReport: self.cuit_lookup,
            ExecutiveSummaryReport: self.executive_summary,
            DailyDigest: self.daily_digest,
            TomorrowDueAlert: self.tomorrow_due_alert,
            ValidityAlert: self.validity_alert,
            ReportFailure: self.failure,
            InvalidInput: self.invalid_input,
        }
        renderer = renderers.get(type(payload))
        if renderer is None:
            raise TypeError(f"No renderer for {type(payload).__name__}")
        return renderer(payload)

    def failure(self, failure: ReportFailure) -> str:
        return FAILURE_MESSAGES.get(failure.report, GENERIC_FAILURE)

    def invalid_input(self, result: InvalidInput) -> str:
        return f"⚠️ {result.message}"

    def portfolio(self, report: PortfolioReport) -> str:
        companies = "\n".join(
            f"• {Company.DISPLAY_NAMES[code]}: {format_currency(totals.amount)} ({totals.count})"
            for code, totals in report.by_company.items()
        )
        return (
            "💰 *CARTERA DE CHEQUES*\n\n"
            f"📊 *Total:* {format_currency(report.totals.amount)}\n"
            f"📋 *Cantidad:* {report.totals.count} cheques\n\n"
            "🏢 *Por Empresa:*\n"
            f"{companies}\n\n"
            f"{self.footer()}"
        )

    def due(self, report: DueReport) -> str:
        is_today = report.day_offset == 0
        title = "VENCIMIENTOS HOY" if is_today else "VENCIMIENTOS MAÑANA"
        when = "hoy" if is_today else "mañana"

        if report.is_empty:
            return (
                f"📅 *{title}*\n\n"
                f"✅ No hay cheques que venzan {when}.\n\n"
                f"{self.footer()}"
            )

        detail = "\n".join(
            f"• {escape_markdown(item.counterparty)}: {format_currency(item.amount)}"
            for item in report.items
        )
        if report.overflow:
            detail += f"\n... y {report.overflow} más"

        return (
            f"📅 *{title}*\n\n"
            f"⚠️ *Cantidad:* {report.totals.count} cheques\n"
            f"💰 *Total:* {format_currency(report.totals.amount)}\n\n"
            f"📋 *Detalle:*\n{detail}\n\n"
            f"{self.footer()}"
        )

    def due_window(self, report: DueWindowReport) -> str:
        title = f"PRÓXIMOS {report.days} DÍAS"
        if report.is_empty:
            return (
                f"📅 *{title}*\n\n"
                f"✅ No hay cheques que venzan en los próximos {report.days} días.\n\n"
                f"{self.footer()}"
            )

        detail = "\n".join(
            f"• {format_date(day.due_date)}: {day.totals.count} cheques - "
            f"{format_currency(day.totals.amount)}"
            for day in report.by_day
        )
        return (
            f"📅 *{title}*\n\n"
            f"📊 *Total:* {report.totals.count} cheques\n"
            f"💰 *Monto:* {format_currency(report.totals.amount)}\n\n"
            f"📋 *Por día:*\n{detail}\n\n"
            f"{self.footer()}"
        )

    def balances(self, report: BalancesReport) -> str:
        if not report.has_data:
            return (
                "🏦 *SALDOS DE TESORERÍA*\n\n"
                "⚠️ No hay datos de saldos disponibles.\n"
                "Ejecutá una sincronización desde el sistema.\n\n"
                f"{self.footer()}"
            )

        detail = "\n\n".join(
            f"{'🔴' if line.is_negative else '🟢'} {escape_markdown(line.account_name)}\n"
            f"   {format_currency(line.amount)}"
            for line in report.lines
        )
        return (
            "🏦 *SALDOS DE TESORERÍA*\n\n"
            f"{detail}\n\n"
            f"{RULE}\n"
            f"💰 *TOTAL:* {format_currency(report.total)}\n\n"
            f"{self.footer()}"
        )

    def alerts(self, report: AlertsReport) -> str:
        if report.is_empty:
            return (
                "⚠️ *ALERTAS CRÍTICAS*\n\n"
                "✅ No hay alertas activas.\n\n"
                "• Sin cheques vencidos\n"
                "• Sin validez crítica\n"
                "• Concentración normal\n\n"
                f"{self.footer()}"
            )

        blocks = []
        for alert in report.alerts:
            if isinstance(alert, OverdueAlert):
                blocks.append(
                    f"🔴 *VENCIDOS:* {alert.totals.count} cheques\n"
                    f"   {format_currency(alert.totals.amount)}"
                )
            elif isinstance(alert, ValidityCriticalAlert):
                blocks.append(
                    f"⚠️ *VALIDEZ CRÍTICA:* {alert.totals.count} cheques\n"
                    f"   {format_currency(alert.totals.amount)}\n"
                    "   ¡Próximos a perder validez!"
                )
            elif isinstance(alert, ConcentrationAlert):
                blocks.append(
                    f"🟡 *CONCENTRACIÓN:* {alert.issuer_count} CUITs\n"
                    f"   Superan {alert.threshold_pct}% de cartera"
                )

        body = "\n\n".join(blocks)
        return f"⚠️ *ALERTAS CRÍTICAS*\n\n{body}\n\n{self.footer()}"

    def cuit_lookup(self, report: CuitLookupReport) -> str:
        if not report.found:
            return (
                "🔍 *CONSULTA CUIT*\n\n"
                f"No se encontraron cheques para el CUIT: {report.tax_id}\n\n"
                f"{self.footer()}"
            )

        return (
            f"🔍 *CONSULTA CUIT: {report.tax_id}*\n\n"
            f"👤 *Cliente:* {escape_markdown(report.client_name or '')}\n\n"
            "📋 *En Cartera:*\n"
            f"   • Cantidad: {report.in_portfolio.count} cheques\n"
            f"   • Monto: {format_currency(report.in_portfolio.amount)}\n\n"
            "✅ *Entregados:*\n"
            f"   • Cantidad: {report.delivered.count} cheques\n"
            f"   • Monto: {format_currency(report.delivered.amount)}\n\n"
            f"💰 *Total histórico:* {format_currency(report.historical_total)}\n\n"
            f"{self.footer()}"
        )

    def executive_summary(self, report: ExecutiveSummaryReport) -> str:
        def bucket(label: str, totals) -> str:
            return f"   {label}: {totals.count} ({format_currency(totals.amount)})\n"

        return (
            "📊 *RESUMEN EJECUTIVO*\n"
            f"{RULE}━━━\n\n"
            "💰 *CARTERA*\n"
            f"   Total: {format_currency(report.portfolio.amount)}\n"
            f"   Cheques: {report.portfolio.count}\n\n"
            "📅 *VENCIMIENTOS*\n"
            + bucket("Hoy", report.due_today)
            + bucket("Mañana", report.due_tomorrow)
            + bucket("7 días", report.due_7_days)
            + bucket("15 días", report.due_15_days)
            + "\n🏦 *TESORERÍA*\n"
            f"   Saldo Total: {format_currency(report.treasury_total)}\n\n"
            "⚠️ *ALERTAS*\n"
            f"   Validez crítica: {report.validity_critical_count} cheques\n\n"
            f"{RULE}━━━\n"
            f"{self.footer()}"
        )

    def daily_digest(self, digest: DailyDigest) -> str:
        return (
            "☀️ *RESUMEN DIARIO*\n"
            f"{format_date(digest.report_date)}\n"
            f"{RULE}\n\n"
            f"💰 Cartera: {format_currency(digest.portfolio.amount)}\n"
            f"📋 Cheques: {digest.portfolio.count}\n"
            f"🏦 Tesorería: {format_currency(digest.treasury_total)}\n\n"
            f"📅 Vencen hoy: {digest.due_today.count} cheques\n"
            f"   {format_currency(digest.due_today.amount)}\n\n"
            "Usá /resumen para más detalles."
        )

    def tomorrow_due_alert(self, alert: TomorrowDueAlert) -> str:
        return (
            "🔔 *ALERTA: VENCIMIENTOS MAÑANA*\n"
            f"{RULE}━━━━━━━\n\n"
            f"⚠️ {alert.totals.count} cheques vencen mañana\n"
            f"💰 Total: {format_currency(alert.totals.amount)}\n\n"
            "Usá /manana para ver el detalle."
        )

    def validity_alert(self, alert: ValidityAlert) -> str:
        return (
            "🚨 *ALERTA CRÍTICA: VALIDEZ*\n"
            f"{RULE}━━━━━\n\n"
            f"⚠️ {alert.totals.count} cheques próximos a perder validez\n"
            f"💰 Total: {format_currency(alert.totals.amount)}\n"
            f"⏰ Mínimo {alert.min_days_remaining} días restantes\n\n"
            "¡Acción urgente requerida!\n"
            "Usá /alertas para más detalles."
        )


HELP_TEXT = (
    "📋 *Comandos Disponibles*\n\n"
    "💰 /cartera - Total en cartera\n"
    "📅 /hoy - Cheques que vencen hoy\n"
    "📅 /manana - Cheques que vencen mañana\n"
    "📅 /semana - Próximos 7 días\n"
    "🏦 /saldos - Saldos de tesorería\n"
    "⚠️ /alertas - Alertas críticas\n"
    "🔍 /cuit [número] - Consultar CUIT\n"
    "📊 /resumen - Resumen ejecutivo\n"
    "❓ /ayuda - Esta ayuda"
)
