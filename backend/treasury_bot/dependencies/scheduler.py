"""Shared-secret check for scheduler-triggered endpoints."""

import hmac

from fastapi import Header, HTTPException, status

from treasury_bot.config import settings


def verify_scheduler_token(x_scheduler_token: str | None = Header(None)) -> None:
    """
    Require the X-Scheduler-Token header to match SCHEDULER_TOKEN.

    Usage:
        router = APIRouter(dependencies=[Depends(verify_scheduler_token)])
    """
    expected = settings.scheduler_token
    if not expected or not x_scheduler_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing scheduler token",
        )
    if not hmac.compare_digest(x_scheduler_token, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid scheduler token",
        )
