"""Scheduled notification trigger router.

Called by the Airflow notification DAGs; each call runs one broadcast job
and reports how it went.
"""

import logging
from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, Depends

from treasury_bot.dependencies.runtime import get_notification_jobs
from treasury_bot.dependencies.scheduler import verify_scheduler_token
from treasury_bot.schemas.notifications import JobResultResponse
from treasury_bot.services.notifications import NotificationJobs

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/notifications",
    tags=["notifications"],
    dependencies=[Depends(verify_scheduler_token)],
)


@router.post("/{job}", response_model=JobResultResponse)
def run_notification_job(
    job: Literal["daily-summary", "tomorrow-due", "validity-check"],
    jobs: NotificationJobs = Depends(get_notification_jobs),
) -> JobResultResponse:
    """
    Run one scheduled broadcast.

    Returns status "sent", "skipped" (nothing to report) or "failed".
    Failures are reported in the body, not as HTTP errors.
    """
    result = jobs.run(job)
    logger.info("Notification job %s finished: %s", job, result.status)
    return JobResultResponse(**asdict(result))
