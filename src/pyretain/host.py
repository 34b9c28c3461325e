"""Capability protocols for the window manager hosting pyretain.

The host owns screens, tags and layouts. pyretain only needs a narrow
read-only view of them:

* a screen exposes a stable ``sid`` and its ordered ``tags``
* a tag exposes its ``name`` and current ``layout``
* a layout exposes its ``name``

Anything satisfying these protocols structurally can be passed in; no
inheritance is required.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Protocol, runtime_checkable

from pyretain.models.notification import Notification


@runtime_checkable
class LayoutHandle(Protocol):
    @property
    def name(self) -> str: ...


@runtime_checkable
class TagHandle(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def layout(self) -> LayoutHandle: ...


@runtime_checkable
class ScreenHandle(Protocol):
    """A live screen.

    ``sid`` is the id assigned when the screen was first observed. It must
    stay the same after the screen is removed from the live enumeration.
    """

    @property
    def sid(self) -> int: ...

    @property
    def tags(self) -> Sequence[TagHandle]: ...


class LayoutRegistry(Protocol):
    def lookup(self, name: str) -> LayoutHandle | None: ...


Notifier = Callable[[Notification], None]
"""User-visible notification sink supplied by the host."""


class SequenceLayoutRegistry:
    """Layout registry backed by the host's ordered list of layouts.

    Lookup is an exact name match; the first match wins.
    """

    def __init__(self, layouts: Iterable[LayoutHandle]) -> None:
        self._layouts: list[LayoutHandle] = list(layouts)

    def __len__(self) -> int:
        return len(self._layouts)

    def __iter__(self) -> Iterator[LayoutHandle]:
        return iter(self._layouts)

    def lookup(self, name: str) -> LayoutHandle | None:
        for layout in self._layouts:
            if layout.name == name:
                return layout
        return None


def is_screen(value: object) -> bool:
    """Return ``True`` when *value* looks like a usable screen handle."""
    if value is None or not isinstance(value, ScreenHandle):
        return False
    sid = getattr(value, "sid", None)
    if isinstance(sid, bool) or not isinstance(sid, int) or sid <= 0:
        return False
    tags = getattr(value, "tags", None)
    return isinstance(tags, Iterable) and not isinstance(tags, (str, bytes))
