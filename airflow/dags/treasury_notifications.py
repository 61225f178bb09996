"""Treasury Notification DAGs.

Triggers the bot's scheduled broadcasts through the backend API:
- daily_treasury_summary:   08:00 ART (11:00 UTC) every day
- tomorrow_due_alert:       18:00 ART (21:00 UTC) every day, skipped server-side when empty
- validity_critical_check:  every 6 hours, skipped server-side when empty

Authentication: X-Scheduler-Token shared secret (SCHEDULER_TOKEN in backend .env).
"""

import logging
from datetime import datetime, timedelta

import requests
from airflow.exceptions import AirflowException
from airflow.sdk import dag, task
from backend_client import get_backend_client

logger = logging.getLogger(__name__)

# Broadcasts are not idempotent; never retry
default_args = {
    "owner": "treasury_bot",
    "depends_on_past": False,
    "email_on_failure": False,
    "email_on_retry": False,
    "retries": 0,
}

NOTIFICATION_JOBS = {
    "daily_treasury_summary": {
        "job": "daily-summary",
        "schedule": "0 11 * * *",
        "description": "Morning portfolio, treasury and due-today digest",
    },
    "tomorrow_due_alert": {
        "job": "tomorrow-due",
        "schedule": "0 21 * * *",
        "description": "Evening alert for checks maturing tomorrow",
    },
    "validity_critical_check": {
        "job": "validity-check",
        "schedule": "0 */6 * * *",
        "description": "Alert for checks about to lose validity",
    },
}


def build_notification_dag(dag_id: str, job: str, schedule: str, description: str):
    """Create a single-task DAG that triggers one notification job."""

    @dag(
        dag_id=dag_id,
        default_args=default_args,
        description=description,
        schedule=schedule,
        start_date=datetime(2026, 1, 1),
        catchup=False,
        dagrun_timeout=timedelta(minutes=10),
        tags=["treasury", "notifications"],
    )
    def notification_dag():
        @task(task_id="trigger_notification")
        def trigger_notification() -> dict:
            """Ask the backend to run the job.

            Raises:
                AirflowException: When the backend is unreachable or the job failed
            """
            client = get_backend_client()
            try:
                result = client.run_notification_job(job)
            except requests.RequestException as e:
                raise AirflowException(f"Backend unreachable for {job}: {e}") from e

            logger.info(
                "%s: status=%s delivered=%s failed=%s removed=%s",
                job,
                result.get("status"),
                result.get("delivered"),
                result.get("failed"),
                result.get("removed"),
            )
            if result.get("status") == "failed":
                raise AirflowException(f"Notification job {job} failed: {result.get('detail')}")
            return result

        trigger_notification()

    return notification_dag()


for _dag_id, _config in NOTIFICATION_JOBS.items():
    globals()[_dag_id] = build_notification_dag(
        _dag_id, _config["job"], _config["schedule"], _config["description"]
    )
