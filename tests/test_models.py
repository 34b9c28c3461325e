"""Tests for the persisted and resolved state models."""

from __future__ import annotations

import logging

import pytest
from conftest import FakeLayout
from pydantic import ValidationError

from pyretain.config import UnresolvedLayoutPolicy
from pyretain.host import SequenceLayoutRegistry
from pyretain.models import (
    DEFAULT_TAG_NAMES,
    Notification,
    PersistedState,
    ResolvedScreen,
    ScreenRecord,
    Severity,
    TagDefaults,
    TagRecord,
    log_notifier,
)

# ------------------------------------------------------------------
# TagRecord / ScreenRecord / PersistedState
# ------------------------------------------------------------------


class TestTagRecord:
    def test_layout_alias(self) -> None:
        record = TagRecord.model_validate({"name": "web", "layout": "max"})
        assert record.layout_name == "max"
        assert record.model_dump(by_alias=True) == {"name": "web", "layout": "max"}

    def test_populate_by_field_name(self) -> None:
        assert TagRecord(name="a", layout_name="tile").layout_name == "tile"

    def test_extra_keys_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TagRecord.model_validate({"name": "a", "layout": "tile", "gap": 4})

    def test_frozen(self) -> None:
        record = TagRecord(name="a", layout_name="tile")
        with pytest.raises(ValidationError):
            record.name = "b"  # type: ignore[misc]


class TestScreenRecord:
    def test_string_positions_are_coerced(self) -> None:
        record = ScreenRecord.model_validate(
            {"2": {"name": "b", "layout": "max"}, "1": {"name": "a", "layout": "tile"}},
        )
        assert [pos for pos, _ in record.ordered()] == [1, 2]
        assert len(record) == 2

    def test_negative_position_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScreenRecord.model_validate({"-1": {"name": "a", "layout": "tile"}})

    @pytest.mark.parametrize("key", ["01", "+1", " 1", "1.0"])
    def test_non_canonical_position_rejected(self, key: str) -> None:
        with pytest.raises(ValidationError):
            ScreenRecord.model_validate({key: {"name": "a", "layout": "tile"}})

    def test_int_positions_accepted(self) -> None:
        assert len(ScreenRecord({1: TagRecord(name="a", layout_name="tile")})) == 1

    def test_payload_uses_string_keys(self) -> None:
        record = ScreenRecord({3: TagRecord(name="c", layout_name="max"), 1: TagRecord(name="a", layout_name="tile")})
        assert record.to_payload() == {
            "1": {"name": "a", "layout": "tile"},
            "3": {"name": "c", "layout": "max"},
        }


class TestPersistedState:
    def test_put_replaces_entry(self) -> None:
        state = PersistedState({1: ScreenRecord({1: TagRecord(name="a", layout_name="tile")})})
        state.put(1, ScreenRecord({}))

        record = state.get(1)
        assert record is not None
        assert len(record) == 0
        assert 1 in state
        assert 2 not in state

    def test_colliding_screen_ids_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PersistedState.model_validate({"2": {}, "02": {}})

    def test_screen_ids_sorted(self) -> None:
        state = PersistedState.model_validate({"10": {}, "2": {}, "1": {}})
        assert state.screen_ids() == [1, 2, 10]
        assert list(state.to_payload()) == ["1", "2", "10"]


# ------------------------------------------------------------------
# ResolvedScreen / TagDefaults
# ------------------------------------------------------------------


class TestResolvedScreen:
    def test_append_keeps_sequences_aligned(self) -> None:
        screen = ResolvedScreen()
        screen.append("a", None)
        screen.append("b", "layout")
        assert screen.sequence("names") == ["a", "b"]
        assert screen.sequence("layouts") == [None, "layout"]

    def test_unknown_sequence(self) -> None:
        with pytest.raises(KeyError):
            ResolvedScreen().sequence("colors")


class TestTagDefaults:
    def test_default_names(self) -> None:
        defaults = TagDefaults()
        assert defaults.names == list(DEFAULT_TAG_NAMES)
        assert defaults.layouts == []

    def test_from_registry(self) -> None:
        floating = FakeLayout("floating")
        registry = SequenceLayoutRegistry([FakeLayout("tile"), floating])

        defaults = TagDefaults.from_registry(registry, names=["a", "b"])

        assert defaults.names == ["a", "b"]
        assert defaults.layouts == [floating, floating]

    def test_from_registry_without_layout(self) -> None:
        defaults = TagDefaults.from_registry(SequenceLayoutRegistry([]), layout_name="tile")
        assert defaults.layouts == []

    def test_sequence_returns_copies(self) -> None:
        defaults = TagDefaults(names=["a"])
        defaults.sequence("names").append("b")
        assert defaults.names == ["a"]


# ------------------------------------------------------------------
# Enums / notifications
# ------------------------------------------------------------------


class TestRetainEnum:
    def test_case_insensitive(self) -> None:
        assert UnresolvedLayoutPolicy(" Fallback ") is UnresolvedLayoutPolicy.FALLBACK
        assert Severity("CRITICAL") is Severity.CRITICAL

    def test_unknown_value_raises(self) -> None:
        with pytest.raises(ValueError):
            UnresolvedLayoutPolicy("explode")


@pytest.mark.parametrize(
    ("severity", "level"),
    [
        (Severity.LOW, logging.DEBUG),
        (Severity.NORMAL, logging.INFO),
        (Severity.CRITICAL, logging.CRITICAL),
    ],
)
def test_log_notifier_levels(caplog: pytest.LogCaptureFixture, severity: Severity, level: int) -> None:
    with caplog.at_level(logging.DEBUG, logger="pyretain.models.notification"):
        log_notifier(Notification(title="retain", text="hello", severity=severity))

    assert caplog.records[-1].levelno == level
    assert caplog.records[-1].getMessage() == "retain: hello"
