from __future__ import annotations

from typing import List, Optional

from .database import DatabaseSession
from .models import Device, WaterBotState

DEVICE_COLUMNS = "id, name, location, temperature, last_updated"
WATERBOT_COLUMNS = "botid, botname, location, locationcoosys, status, lastupdated"


class DeviceStore:
    """SQL access to the devices table. One statement per call."""

    def __init__(self, session: DatabaseSession) -> None:
        self.session = session

    def list_all(self) -> List[Device]:
        # No user input reaches this query, so it is not parameterized
        rows = self.session.fetch_all(f"SELECT {DEVICE_COLUMNS} FROM devices")
        return [Device.from_row(row) for row in rows]

    def get(self, device_id: str) -> Optional[Device]:
        row = self.session.fetch_one(
            f"SELECT {DEVICE_COLUMNS} FROM devices WHERE id = ?",
            (device_id,),
        )
        return Device.from_row(row) if row else None

    def insert(self, device: Device) -> int:
        return self.session.execute(
            "INSERT INTO devices (id, name, location, temperature, last_updated) VALUES (?, ?, ?, ?, ?)",
            (device.id, device.name, device.location, device.temperature, device.last_updated),
        )

    def update(self, device: Device) -> int:
        return self.session.execute(
            "UPDATE devices SET name = ?, location = ?, temperature = ?, last_updated = ? WHERE id = ?",
            (device.name, device.location, device.temperature, device.last_updated, device.id),
        )

    def delete(self, device_id: str) -> int:
        return self.session.execute("DELETE FROM devices WHERE id = ?", (device_id,))


class WaterBotStatusStore:
    """Read-only access to the waterbot_status table."""

    def __init__(self, session: DatabaseSession) -> None:
        self.session = session

    def list_all(self) -> List[WaterBotState]:
        rows = self.session.fetch_all(f"SELECT {WATERBOT_COLUMNS} FROM waterbot_status")
        return [WaterBotState.from_row(row) for row in rows]
