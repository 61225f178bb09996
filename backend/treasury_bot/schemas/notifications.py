"""Notification job response schemas."""

from pydantic import BaseModel, Field


class JobResultResponse(BaseModel):
    """Outcome of a scheduled broadcast job."""

    job: str
    status: str = Field(..., description="sent, skipped or failed")
    delivered: int = 0
    failed: int = 0
    removed: int = Field(0, description="Recipients dropped as unreachable")
    detail: str | None = None
