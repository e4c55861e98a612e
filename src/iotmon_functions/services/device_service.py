"""Service for device state management."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from ..models import Device
from ..stores import DeviceStore

logger = logging.getLogger(__name__)


class DeviceService:
    """Applies the device write rules on top of a DeviceStore.

    The server clock always sets ``last_updated``; on create a missing or
    blank id is replaced by a random UUID, on update the id comes from the
    request path.
    """

    def __init__(self, store: DeviceStore) -> None:
        self.store = store

    def list_devices(self) -> List[Device]:
        return self.store.list_all()

    def get_device(self, device_id: str) -> Optional[Device]:
        return self.store.get(device_id)

    def create_device(self, device: Device) -> Device:
        """Inserts a device and returns it with its assigned id and timestamp.

        Raises:
            RuntimeError: The insert affected no rows
        """
        if device.id is None or not device.id.strip():
            device.id = str(uuid.uuid4())
        device.last_updated = datetime.now(timezone.utc)

        if self.store.insert(device) <= 0:
            raise RuntimeError("Failed to create device.")

        logger.info(f"Created device {device.id}")
        return device

    def update_device(self, device_id: str, device: Device) -> Optional[Device]:
        """Overwrites the device with the given id.

        Returns:
            The stored device, or None if no row has this id
        """
        device.id = device_id
        device.last_updated = datetime.now(timezone.utc)

        if self.store.update(device) <= 0:
            return None

        logger.info(f"Updated device {device.id}")
        return device

    def delete_device(self, device_id: str) -> bool:
        """Deletes by id in a single statement; False when nothing matched."""
        deleted = self.store.delete(device_id) > 0
        if deleted:
            logger.info(f"Deleted device {device_id}")
        return deleted
