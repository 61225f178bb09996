"""Scheduled broadcasts to subscribed chats."""

from .broadcaster import BroadcastResult, Broadcaster
from .jobs import JobName, JobResult, NotificationJobs

__all__ = [
    "BroadcastResult",
    "Broadcaster",
    "JobName",
    "JobResult",
    "NotificationJobs",
]
