"""HTTP handlers for the IoT monitoring functions."""

from .base_handler import BaseHandler
from .capture import ResponseCapture
from .device_handler import DeviceHandler
from .router import RequestRouter
from .waterbot_handler import WaterBotHandler

__all__ = [
    "BaseHandler",
    "DeviceHandler",
    "RequestRouter",
    "ResponseCapture",
    "WaterBotHandler",
]
