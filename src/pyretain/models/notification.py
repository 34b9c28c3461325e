"""User-visible notifications emitted by the store."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from pyretain.models._base import RetainEnum

_logger = logging.getLogger(__name__)


class Severity(RetainEnum):
    LOW = "low"
    NORMAL = "normal"
    CRITICAL = "critical"


_LOG_LEVELS: dict[Severity, int] = {
    Severity.LOW: logging.DEBUG,
    Severity.NORMAL: logging.INFO,
    Severity.CRITICAL: logging.CRITICAL,
}


class Notification(BaseModel):
    """A message for the host to show to the user."""

    model_config = ConfigDict(frozen=True)

    title: str
    text: str
    severity: Severity = Severity.NORMAL


def log_notifier(notification: Notification) -> None:
    """Default notifier: route the notification through ``logging``."""
    _logger.log(
        _LOG_LEVELS.get(notification.severity, logging.INFO),
        "%s: %s",
        notification.title,
        notification.text,
    )
