"""Host lifecycle hooks.

The store never registers itself with the window manager. The host
integration owns a :class:`RetainListener` and calls it from its own signal
handlers, e.g. for awesome-style hosts:

* startup (after layouts are registered) -> ``on_startup``
* screen "removed" -> ``on_screen_removed``
* screen "added" -> ``on_screen_added``
* process "exit" -> ``on_process_exit``
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from pyretain.state.store import StateStore

_logger = logging.getLogger(__name__)


class RetainListener:
    """Route host lifecycle events to a :class:`StateStore`."""

    def __init__(self, store: StateStore, screens: Callable[[], Iterable[Any]]) -> None:
        self._store = store
        self._screens = screens

    @property
    def store(self) -> StateStore:
        return self._store

    def on_startup(self) -> bool:
        return self._store.load()

    def on_screen_removed(self, screen: Any) -> bool:
        return self._store.save(screen)

    def on_screen_added(self, screen: Any) -> bool:
        if not self._store.config.resync_on_screen_added:
            return False
        return self._store.save(screen)

    def on_process_exit(self) -> bool:
        try:
            screens = list(self._screens())
        except Exception:
            _logger.exception("Could not enumerate screens on exit")
            return False
        _logger.debug("Saving %d screens on exit", len(screens))
        return self._store.save_all(screens)
