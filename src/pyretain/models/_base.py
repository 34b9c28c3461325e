"""Base model and enum shared by pyretain models.

Every persisted model inherits from :class:`RetainBaseModel`, which is
frozen and rejects unknown keys so a save file with unexpected fields is
reported as malformed rather than silently half-loaded.

String enums inherit from :class:`RetainEnum`, which parses values
case-insensitively.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class RetainEnum(StrEnum):
    """Base for pyretain string enums."""

    @classmethod
    def _missing_(cls, value: object) -> RetainEnum | None:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class RetainBaseModel(BaseModel):
    """Base for persisted pyretain models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )
