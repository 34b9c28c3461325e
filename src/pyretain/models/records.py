"""Persisted tag records.

These models describe the exact on-disk shape of the save file::

    {
      "<screen id>": {
        "<tag position>": {"name": "<tag name>", "layout": "<layout name>"},
        ...
      },
      ...
    }

Screen ids and tag positions are decimal strings on disk and positive
integers in memory.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import ConfigDict, Field, RootModel, field_validator

from pyretain.models._base import RetainBaseModel

PositiveKey = Annotated[int, Field(gt=0)]

_CANONICAL_KEY = re.compile(r"[1-9][0-9]*")


def _check_keys(value: Any) -> Any:
    """Reject string keys such as ``"01"`` that would collide once parsed."""
    if isinstance(value, dict):
        for key in value:
            if isinstance(key, str) and not _CANONICAL_KEY.fullmatch(key):
                raise ValueError(f"key {key!r} is not a positive decimal integer")
    return value


class TagRecord(RetainBaseModel):
    """One tag's persisted identity.

    Parameters
    ----------
    name : str
        Display label of the tag.
    layout_name : str
        Name of the layout the tag used, serialized as ``"layout"``.
    """

    name: str
    layout_name: str = Field(alias="layout")


class ScreenRecord(RootModel[dict[PositiveKey, TagRecord]]):
    """Tags of one screen keyed by 1-based position."""

    model_config = ConfigDict(frozen=True)

    @field_validator("root", mode="before")
    @classmethod
    def _canonical_positions(cls, value: Any) -> Any:
        return _check_keys(value)

    def __len__(self) -> int:
        return len(self.root)

    def ordered(self) -> list[tuple[int, TagRecord]]:
        """Return ``(position, record)`` pairs in ascending position order."""
        return sorted(self.root.items())

    def to_payload(self) -> dict[str, dict[str, str]]:
        return {str(position): tag.model_dump(by_alias=True) for position, tag in self.ordered()}


class PersistedState(RootModel[dict[PositiveKey, ScreenRecord]]):
    """Every persisted screen keyed by stable screen id."""

    @field_validator("root", mode="before")
    @classmethod
    def _canonical_screen_ids(cls, value: Any) -> Any:
        return _check_keys(value)

    def __len__(self) -> int:
        return len(self.root)

    def screen_ids(self) -> list[int]:
        return sorted(self.root)

    def __contains__(self, screen_id: object) -> bool:
        return screen_id in self.root

    def get(self, screen_id: int) -> ScreenRecord | None:
        return self.root.get(screen_id)

    def put(self, screen_id: int, record: ScreenRecord) -> None:
        """Replace the whole entry for *screen_id*."""
        self.root[screen_id] = record

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-ready dict with keys in ascending numeric order."""
        return {str(screen_id): self.root[screen_id].to_payload() for screen_id in sorted(self.root)}
