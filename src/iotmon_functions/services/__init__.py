"""Services for the IoT monitoring functions."""

from .device_service import DeviceService
from .waterbot_service import WaterBotStatusService

__all__ = ["DeviceService", "WaterBotStatusService"]
