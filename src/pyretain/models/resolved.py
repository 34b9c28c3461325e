"""In-memory tag lists handed back to the host."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

DEFAULT_TAG_NAMES: tuple[str, ...] = ("1", "2", "3", "4", "5", "6", "7", "8", "9")


@dataclass(slots=True)
class ResolvedScreen:
    """Names and live layouts for one screen, aligned by position.

    ``layouts`` may contain ``None`` where a persisted layout name no longer
    matches any registered layout.
    """

    names: list[str] = field(default_factory=list)
    layouts: list[Any | None] = field(default_factory=list)

    def append(self, name: str, layout: Any | None) -> None:
        self.names.append(name)
        self.layouts.append(layout)

    def sequence(self, name: str) -> list[Any]:
        if name == "names":
            return self.names
        if name == "layouts":
            return self.layouts
        raise KeyError(name)


@dataclass
class TagDefaults:
    """Fallback tag set for screens without saved state.

    Parameters
    ----------
    names : list of str
        Tag names, defaults to ``"1"`` through ``"9"``.
    layouts : list
        Layout handles, usually one per name.
    """

    names: list[str] = field(default_factory=lambda: list(DEFAULT_TAG_NAMES))
    layouts: list[Any] = field(default_factory=list)

    @classmethod
    def from_registry(
        cls,
        registry: Any,
        *,
        names: Sequence[str] = DEFAULT_TAG_NAMES,
        layout_name: str = "floating",
    ) -> TagDefaults:
        """Build defaults using one registered layout for every tag.

        When *layout_name* is not registered the layouts list is empty.
        """
        layout = registry.lookup(layout_name)
        layouts = [layout] * len(names) if layout is not None else []
        return cls(names=list(names), layouts=layouts)

    def sequence(self, name: str) -> list[Any]:
        if name == "names":
            return list(self.names)
        if name == "layouts":
            return list(self.layouts)
        raise KeyError(name)
