"""Scheduled notification jobs.

Each job asks the report service for its payload, renders it and
broadcasts it. Jobs never raise: the scheduler only sees a JobResult.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from treasury_bot.constants import JobStatus
from treasury_bot.services.notifications.broadcaster import Broadcaster
from treasury_bot.services.telegram.formatter import ReportFormatter
from treasury_bot.services.treasury import TreasuryReportService
from treasury_bot.services.treasury.report_types import ReportFailure

logger = logging.getLogger(__name__)


class JobName:
    DAILY_SUMMARY = "daily-summary"
    TOMORROW_DUE = "tomorrow-due"
    VALIDITY_CHECK = "validity-check"


@dataclass
class JobResult:
    job: str
    status: str
    delivered: int = 0
    failed: int = 0
    removed: int = 0
    detail: str | None = None


class NotificationJobs:
    """The three time-triggered broadcasts."""

    def __init__(
        self,
        reports: TreasuryReportService,
        broadcaster: Broadcaster,
        formatter: ReportFormatter,
    ) -> None:
        self._reports = reports
        self._broadcaster = broadcaster
        self._formatter = formatter

    def run(self, job: str) -> JobResult:
        """Run a job by name."""
        runners: dict[str, Callable[[], JobResult]] = {
            JobName.DAILY_SUMMARY: self.run_daily_summary,
            JobName.TOMORROW_DUE: self.run_tomorrow_due_alert,
            JobName.VALIDITY_CHECK: self.run_validity_check,
        }
        runner = runners.get(job)
        if runner is None:
            raise ValueError(f"Unknown notification job: {job}")
        return runner()

    def run_daily_summary(self) -> JobResult:
        logger.info("Sending daily summary...")
        return self._dispatch(JobName.DAILY_SUMMARY, self._reports.daily_digest)

    def run_tomorrow_due_alert(self) -> JobResult:
        logger.info("Sending tomorrow's due-date alert...")
        return self._dispatch(JobName.TOMORROW_DUE, self._reports.tomorrow_due_alert)

    def run_validity_check(self) -> JobResult:
        logger.info("Checking critical validity...")
        return self._dispatch(JobName.VALIDITY_CHECK, self._reports.validity_alert)

    def _dispatch(self, job: str, produce: Callable[[], object | None]) -> JobResult:
        try:
            payload = produce()
            if payload is None:
                logger.info("%s: nothing to send", job)
                return JobResult(job=job, status=JobStatus.SKIPPED, detail="nothing to send")
            if isinstance(payload, ReportFailure):
                logger.error("%s: report failed (%s)", job, payload.reason)
                return JobResult(job=job, status=JobStatus.FAILED, detail=payload.reason)

            sent = self._broadcaster.broadcast(self._formatter.render(payload))
        except Exception as e:
            logger.exception("Error in %s job", job)
            return JobResult(job=job, status=JobStatus.FAILED, detail=str(e))

        logger.info(
            "%s: delivered=%d failed=%d removed=%d",
            job,
            len(sent.delivered),
            len(sent.failed),
            len(sent.removed),
        )
        return JobResult(
            job=job,
            status=JobStatus.SENT,
            delivered=len(sent.delivered),
            failed=len(sent.failed),
            removed=len(sent.removed),
        )
