from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

from pyretain.config import RetainConfig
from pyretain.host import SequenceLayoutRegistry
from pyretain.models.notification import Notification
from pyretain.state.store import StateStore

LAYOUT_NAMES = ("floating", "tile", "max", "fairv")


@dataclass(frozen=True, eq=False)
class FakeLayout:
    name: str


@dataclass
class FakeTag:
    name: str
    layout: FakeLayout


@dataclass
class FakeScreen:
    sid: int
    tags: list[FakeTag] = field(default_factory=list)


@pytest.fixture()
def layouts() -> dict[str, FakeLayout]:
    return {name: FakeLayout(name) for name in LAYOUT_NAMES}


@pytest.fixture()
def registry(layouts: dict[str, FakeLayout]) -> SequenceLayoutRegistry:
    return SequenceLayoutRegistry(layouts.values())


@pytest.fixture()
def savefile(tmp_path: Path) -> Path:
    return tmp_path / "awesome" / ".retained"


@pytest.fixture()
def notifications() -> list[Notification]:
    return []


@pytest.fixture()
def make_store(
    registry: SequenceLayoutRegistry,
    savefile: Path,
    notifications: list[Notification],
) -> Callable[..., StateStore]:
    def _make(**config_overrides: Any) -> StateStore:
        config_overrides.setdefault("savefile", savefile)
        config = RetainConfig(**config_overrides)
        return StateStore(registry, config=config, notifier=notifications.append)

    return _make


@pytest.fixture()
def store(make_store: Callable[..., StateStore]) -> StateStore:
    return make_store()


def make_screen(sid: int, layouts: dict[str, FakeLayout], *tags: tuple[str, str]) -> FakeScreen:
    return FakeScreen(sid=sid, tags=[FakeTag(name, layouts[layout]) for name, layout in tags])


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
