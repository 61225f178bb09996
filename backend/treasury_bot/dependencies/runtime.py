"""Dependencies exposing the process runtime and per-request services."""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from treasury_bot.database import get_db
from treasury_bot.runtime import BotRuntime
from treasury_bot.services.notifications import NotificationJobs
from treasury_bot.services.treasury import SqlTreasuryDataSource, TreasuryReportService


def get_runtime(request: Request) -> BotRuntime:
    """The BotRuntime built at application startup."""
    return request.app.state.runtime


def get_report_service(db: Session = Depends(get_db)) -> TreasuryReportService:
    """Report service over a request-scoped database session."""
    return TreasuryReportService(SqlTreasuryDataSource(db))


def get_notification_jobs(
    runtime: BotRuntime = Depends(get_runtime),
    reports: TreasuryReportService = Depends(get_report_service),
) -> NotificationJobs:
    """Notification jobs, or 503 when no bot token is configured."""
    if runtime.broadcaster is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Telegram bot token not configured",
        )
    return NotificationJobs(reports, runtime.broadcaster, runtime.formatter)
