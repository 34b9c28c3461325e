"""Data models for persisted and resolved tag state."""

from pyretain.models._base import RetainBaseModel, RetainEnum
from pyretain.models.notification import Notification, Severity, log_notifier
from pyretain.models.records import PersistedState, ScreenRecord, TagRecord
from pyretain.models.resolved import DEFAULT_TAG_NAMES, ResolvedScreen, TagDefaults

__all__ = [
    "DEFAULT_TAG_NAMES",
    "Notification",
    "PersistedState",
    "ResolvedScreen",
    "RetainBaseModel",
    "RetainEnum",
    "ScreenRecord",
    "Severity",
    "TagDefaults",
    "TagRecord",
    "log_notifier",
]
