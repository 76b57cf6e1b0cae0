"""Typed repositories built on DocumentCollection."""

from .http_monitor import HttpMonitorRepository
from .models import HttpMonitor, HttpMonitorCheckResult, HttpMonitorId

__all__ = [
    "HttpMonitor",
    "HttpMonitorCheckResult",
    "HttpMonitorId",
    "HttpMonitorRepository",
]
