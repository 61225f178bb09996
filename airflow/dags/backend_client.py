"""Backend API helper for the notification DAGs.

Authenticates with the shared scheduler token instead of a user login.
"""

import logging
import os

import requests
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv("/opt/airflow/backend/.env")

REQUEST_TIMEOUT_SECONDS = 120


class BackendClient:
    """Calls the backend's scheduler-only endpoints."""

    def __init__(self) -> None:
        self.backend_url = os.getenv("BACKEND_URL", "http://host.docker.internal:8000")
        self.scheduler_token = os.getenv("SCHEDULER_TOKEN", "")

    def get_auth_headers(self) -> dict[str, str]:
        if not self.scheduler_token:
            raise ValueError(
                "SCHEDULER_TOKEN not set. Please configure it in the backend .env file"
            )
        return {"X-Scheduler-Token": self.scheduler_token}

    def run_notification_job(self, job: str) -> dict:
        """POST /api/notifications/{job} and return the JobResult body."""
        response = requests.post(
            f"{self.backend_url}/api/notifications/{job}",
            headers=self.get_auth_headers(),
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        if response.status_code != 200:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            logger.error("Notification job %s rejected (%s): %s", job, response.status_code, detail)
            response.raise_for_status()
        return response.json()


# Singleton instance for reuse across tasks within the same worker
_backend_client: BackendClient | None = None


def get_backend_client() -> BackendClient:
    """Get or create the singleton backend client."""
    global _backend_client
    if _backend_client is None:
        _backend_client = BackendClient()
    return _backend_client
