"""Application constants to avoid magic strings."""

from decimal import Decimal


class Company:
    """Legal entities that own checks in the portfolio."""

    GRAND_ESTATE = "GRAND_ESTATE"
    PICO_DE_ORO = "PICO_DE_ORO"

    ALL = (GRAND_ESTATE, PICO_DE_ORO)

    DISPLAY_NAMES = {
        GRAND_ESTATE: "Grand Estate",
        PICO_DE_ORO: "Pico de Oro",
    }


class Placeholder:
    """Display fallbacks for missing values."""

    NO_TAX_ID = "SIN_CUIT"
    NO_COUNTERPARTY = "S/N"
    NO_CLIENT_NAME = "Sin nombre"


class Thresholds:
    """Business rule thresholds for alerts and lookups."""

    # Checks lose validity 30 days after maturity; warn from day 25
    VALIDITY_DAYS = 30
    VALIDITY_WARNING_FROM_DAYS = 25

    # An issuer above this share of the portfolio is a concentration risk
    CONCENTRATION_PCT = Decimal("15")

    DETAIL_ITEM_LIMIT = 5
    MIN_TAX_ID_DIGITS = 8


class JobStatus:
    """Outcome of a scheduled notification job."""

    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


class ReportKind:
    """Identifiers for each report, used in failure payloads and logs."""

    PORTFOLIO = "portfolio"
    DUE_TODAY = "due_today"
    DUE_TOMORROW = "due_tomorrow"
    DUE_WEEK = "due_week"
    BALANCES = "balances"
    ALERTS = "alerts"
    CUIT_LOOKUP = "cuit_lookup"
    EXECUTIVE_SUMMARY = "executive_summary"
    DAILY_DIGEST = "daily_digest"
    TOMORROW_DUE_ALERT = "tomorrow_due_alert"
    VALIDITY_ALERT = "validity_alert"
