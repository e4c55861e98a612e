"""Unit tests for stores.py against a temporary SQLite database."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from iotmon_functions.models import Device
from iotmon_functions.stores import DeviceStore, WaterBotStatusStore


def _device(device_id: str = "d1", **overrides) -> Device:
    values = {
        "id": device_id,
        "name": "Sensor1",
        "location": "Loc1",
        "temperature": 21.5,
        "last_updated": datetime(2024, 6, 10, 15, 30, tzinfo=timezone.utc),
    }
    values.update(overrides)
    return Device(**values)


@pytest.mark.unit
class TestDeviceStore:
    """Tests for DeviceStore."""

    def test_insert_and_get(self, session):
        store = DeviceStore(session)

        assert store.insert(_device()) == 1
        assert store.get("d1") == _device()

    def test_get_missing(self, session):
        assert DeviceStore(session).get("unknown-id") is None

    def test_list_all(self, session):
        store = DeviceStore(session)
        store.insert(_device("d1"))
        store.insert(_device("d2", name="Sensor2"))

        devices = store.list_all()

        assert sorted(device.id for device in devices) == ["d1", "d2"]

    def test_list_all_empty(self, session):
        assert DeviceStore(session).list_all() == []

    def test_update_existing(self, session):
        store = DeviceStore(session)
        store.insert(_device())

        affected = store.update(_device(name="Renamed", temperature=30.0))

        assert affected == 1
        stored = store.get("d1")
        assert stored.name == "Renamed"
        assert stored.temperature == 30.0

    def test_update_missing(self, session):
        assert DeviceStore(session).update(_device("unknown-id")) == 0

    def test_delete(self, session):
        store = DeviceStore(session)
        store.insert(_device())

        assert store.delete("d1") == 1
        assert store.get("d1") is None
        assert store.delete("d1") == 0

    def test_lookup_is_parameterized(self, session):
        store = DeviceStore(session)
        store.insert(_device())

        assert store.get("d1' OR '1'='1") is None
        assert store.delete("d1' OR '1'='1") == 0
        assert store.get("d1") is not None


@pytest.mark.unit
class TestWaterBotStatusStore:
    """Tests for WaterBotStatusStore."""

    def test_list_all(self, session, add_waterbot_state):
        add_waterbot_state("b1", "idle")
        add_waterbot_state("b2", "watering", lastupdated=None)

        states = {state.bot_id: state for state in WaterBotStatusStore(session).list_all()}

        assert states["b1"].status == "idle"
        assert states["b1"].location_coo_sys == "WGS84"
        assert states["b1"].last_updated == datetime(2024, 6, 10, 15, 30, tzinfo=timezone.utc)
        assert states["b2"].last_updated is None

    def test_list_all_empty(self, session):
        assert WaterBotStatusStore(session).list_all() == []
