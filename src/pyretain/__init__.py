"""pyretain - keep window manager tags and layouts across restarts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyretain")
except PackageNotFoundError:
    __version__ = "0+local"

from pyretain.config import RetainConfig, UnresolvedLayoutPolicy
from pyretain.exceptions import (
    RetainConfigError,
    RetainError,
    SaveFileError,
    SaveFileMalformedError,
    SaveFileMissingError,
    UnresolvedLayoutError,
)
from pyretain.host import (
    LayoutHandle,
    LayoutRegistry,
    Notifier,
    ScreenHandle,
    SequenceLayoutRegistry,
    TagHandle,
)
from pyretain.models import (
    Notification,
    PersistedState,
    ResolvedScreen,
    ScreenRecord,
    Severity,
    TagDefaults,
    TagRecord,
)
from pyretain.state.lifecycle import RetainListener
from pyretain.state.store import StateStore, StoreState

__all__ = [
    "__version__",
    "LayoutHandle",
    "LayoutRegistry",
    "Notification",
    "Notifier",
    "PersistedState",
    "ResolvedScreen",
    "RetainConfig",
    "RetainConfigError",
    "RetainError",
    "RetainListener",
    "SaveFileError",
    "SaveFileMalformedError",
    "SaveFileMissingError",
    "ScreenHandle",
    "ScreenRecord",
    "SequenceLayoutRegistry",
    "Severity",
    "StateStore",
    "StoreState",
    "TagDefaults",
    "TagHandle",
    "TagRecord",
    "UnresolvedLayoutError",
    "UnresolvedLayoutPolicy",
]
