"""Per-screen tag and layout store.

This is the only component that touches the save file. It keeps two maps:

* the persisted state, exactly what is (or will be) on disk
* the resolved state, the same data with layout names turned into live
  layout handles through the host's registry

Saves replace one screen's persisted entry, recompute its resolved entry
and rewrite the whole file. Loads read the file once per run and resolve
every screen. Lookups fall back to :class:`TagDefaults` whenever a screen
has nothing usable.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pyretain.config import RetainConfig, UnresolvedLayoutPolicy
from pyretain.exceptions import SaveFileError, SaveFileMissingError, UnresolvedLayoutError
from pyretain.host import LayoutRegistry, Notifier, ScreenHandle, is_screen
from pyretain.models._base import RetainEnum
from pyretain.models.notification import Notification, Severity, log_notifier
from pyretain.models.records import PersistedState, ScreenRecord, TagRecord
from pyretain.models.resolved import ResolvedScreen, TagDefaults
from pyretain.state.savefile import read_save_file, write_save_file

_logger = logging.getLogger(__name__)

MSG_NO_SAVE_FILE = "No save file found"
MSG_LOAD_ERROR = "Error loading saved data, using defaults"
MSG_WRITE_ERROR = "Error writing saved data"


class StoreState(RetainEnum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class StateStore:
    """Persist and serve per-screen tag names and layouts.

    Usage::

        store = StateStore(SequenceLayoutRegistry(layouts))
        store.load()
        names = store.get_names(screen)
        layouts = store.get_layouts(screen)
        ...
        store.save(screen)  # on screen removal

    Nothing here raises into host callbacks: missing or corrupt save data
    falls back to the defaults with a notification, bad screen handles are
    ignored.
    """

    def __init__(
        self,
        registry: LayoutRegistry,
        *,
        config: RetainConfig | None = None,
        defaults: TagDefaults | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        self._registry = registry
        self._config = config or RetainConfig()
        self._savefile = self._config.savefile
        self._notifier = notifier or log_notifier
        self.defaults = defaults or TagDefaults.from_registry(
            registry,
            names=self._config.default_names,
            layout_name=self._config.default_layout,
        )
        # None until populated this run, either by load() or by a save.
        self._persisted: PersistedState | None = None
        self._resolved: dict[int, ResolvedScreen] = {}
        self._state = StoreState.UNINITIALIZED
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> RetainConfig:
        return self._config

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def savefile(self) -> Path:
        return self._savefile

    @savefile.setter
    def savefile(self, path: Path | str) -> None:
        if self._state is StoreState.READY:
            _logger.warning("Changing save file to %s after load()", path)
        self._savefile = Path(path).expanduser()

    @property
    def persisted(self) -> PersistedState:
        """A copy of the persisted state."""
        with self._lock:
            if self._persisted is None:
                return PersistedState({})
            return self._persisted.model_copy(deep=True)

    def screen_ids(self) -> list[int]:
        """Ids of screens that currently have resolved state."""
        return sorted(self._resolved)

    # ------------------------------------------------------------------
    # Capture / save
    # ------------------------------------------------------------------

    def capture(self, screen: ScreenHandle) -> ScreenRecord:
        """Snapshot the screen's tags in their current order."""
        records = {
            position: TagRecord(name=tag.name, layout_name=tag.layout.name)
            for position, tag in enumerate(screen.tags, start=1)
        }
        return ScreenRecord(records)

    def save(self, screen: Any) -> bool:
        """Persist one screen's tags and rewrite the save file.

        Returns ``False`` without side effects for anything that is not a
        usable screen, and for saves attempted before :meth:`load` when
        ``require_load_before_save`` is set.
        """
        if not is_screen(screen):
            _logger.debug("Ignoring save for non-screen %r", screen)
            return False

        sid: int = screen.sid
        with self._lock:
            if self._state is StoreState.UNINITIALIZED and self._config.require_load_before_save:
                _logger.warning("Ignoring save of screen %d before load()", sid)
                return False

            try:
                record = self.capture(screen)
            except (AttributeError, TypeError, ValidationError) as exc:
                _logger.warning("Cannot capture tags of screen %d, keeping its saved state: %s", sid, exc)
                return False

            if self._persisted is None:
                self._persisted = PersistedState({})
            self._persisted.put(sid, record)
            self._convert(sid)
            _logger.debug("Captured %d tags for screen %d", len(record), sid)
            return self._flush()

    def save_all(self, screens: Iterable[Any]) -> bool:
        """Save every live screen. Returns ``True`` if all saves succeeded."""
        results = [self.save(screen) for screen in screens]
        return all(results)

    def _flush(self) -> bool:
        assert self._persisted is not None  # noqa: S101
        try:
            write_save_file(self._savefile, self._persisted, atomic=self._config.atomic_writes)
        except OSError as exc:
            _logger.error("Failed to write %s: %s", self._savefile, exc)
            self._notify(f"{MSG_WRITE_ERROR}: {exc}")
            return False
        _logger.info("Saved %d screens to %s", len(self._persisted), self._savefile)
        return True

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """Load the save file and resolve every persisted screen.

        The file is parsed at most once per run; when the persisted state
        is already populated (earlier load or save) it is reused. Returns
        ``False`` when the defaults are in effect.
        """
        with self._lock:
            path = self._savefile
            if self._persisted is None:
                try:
                    self._persisted = read_save_file(path)
                except SaveFileMissingError:
                    return self._use_defaults(MSG_NO_SAVE_FILE)
                except SaveFileError as exc:
                    _logger.warning("%s", exc)
                    return self._use_defaults(MSG_LOAD_ERROR)
            elif not path.exists():
                return self._use_defaults(MSG_NO_SAVE_FILE)

            self._resolved = {}
            for sid in self._persisted.screen_ids():
                self._convert(sid)
            self._state = StoreState.READY
            _logger.info("Loaded %d screens from %s", len(self._resolved), path)
            return True

    def _use_defaults(self, message: str) -> bool:
        self._resolved = {}
        self._state = StoreState.READY
        self._notify(message)
        return False

    def reset(self) -> None:
        """Forget all state and return to the uninitialized state."""
        with self._lock:
            self._persisted = None
            self._resolved = {}
            self._state = StoreState.UNINITIALIZED

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def _convert(self, sid: int) -> None:
        assert self._persisted is not None  # noqa: S101
        record = self._persisted.get(sid)
        resolved = ResolvedScreen()
        if record is not None:
            for position, tag in record.ordered():
                try:
                    layout = self._resolve_layout(sid, position, tag.layout_name)
                except UnresolvedLayoutError as exc:
                    _logger.warning("Dropping tag %r: %s", tag.name, exc)
                    continue
                resolved.append(tag.name, layout)
        self._resolved[sid] = resolved

    def _resolve_layout(self, sid: int, position: int, layout_name: str) -> Any | None:
        layout = self._registry.lookup(layout_name)
        if layout is not None:
            return layout

        policy = self._config.unresolved_layout
        if policy is UnresolvedLayoutPolicy.SKIP:
            raise UnresolvedLayoutError(
                f"layout {layout_name!r} of screen {sid} tag {position} is not registered",
                screen_id=sid,
                position=position,
                layout_name=layout_name,
            )

        _logger.warning("Layout %r of screen %d tag %d is not registered", layout_name, sid, position)
        if policy is UnresolvedLayoutPolicy.FALLBACK:
            return self._registry.lookup(self._config.default_layout)
        return None

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_names(self, screen: ScreenHandle | int) -> list[str]:
        """Tag names for *screen*, or the default names."""
        return self._lookup(screen, "names")

    def get_layouts(self, screen: ScreenHandle | int) -> list[Any]:
        """Tag layouts for *screen*, or the default layouts.

        Entries may be ``None`` for layouts that could not be resolved.
        """
        return self._lookup(screen, "layouts")

    def _lookup(self, screen: ScreenHandle | int, name: str) -> list[Any]:
        sid = _screen_id(screen)
        resolved = self._resolved.get(sid) if sid is not None else None
        if resolved is not None:
            values = resolved.sequence(name)
            if values:
                return list(values)
        return self.defaults.sequence(name)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _notify(self, text: str) -> None:
        notification = Notification(
            title=self._config.notification_title,
            text=text,
            severity=Severity.CRITICAL,
        )
        try:
            self._notifier(notification)
        except Exception:
            _logger.exception("Notifier failed for %r", text)


def _screen_id(screen: Any) -> int | None:
    if isinstance(screen, bool):
        return None
    if isinstance(screen, int):
        return screen
    sid = getattr(screen, "sid", None)
    if isinstance(sid, int) and not isinstance(sid, bool):
        return sid
    return None
