"""Handler for device state endpoints."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional

from ..config import load_config
from ..database import connect
from ..errors import ErrorCode
from ..models import Device
from ..services import DeviceService
from ..stores import DeviceStore

if TYPE_CHECKING:
    from .base_handler import BaseHandler

logger = logging.getLogger(__name__)

UNSUPPORTED_MESSAGE = "Unsupported HTTP method or path."


@contextmanager
def _device_service() -> Iterator[DeviceService]:
    """Opens the request's connection; it is closed before the response is sent."""
    with connect(load_config()) as session:
        yield DeviceService(DeviceStore(session))


class DeviceHandler:
    """Handler for /api/devices and /api/devices/{id}.

    Handler methods are static and take the router as a parameter. The
    router may be a BaseHandler or a ResponseCapture.
    """

    @staticmethod
    def handle_request(
        router: "BaseHandler",
        method: str,
        device_id: Optional[str],
        body: bytes | str | None = None,
    ) -> None:
        """Dispatches on HTTP method and presence of a path id.

        Args:
            router: The router with request context
            method: HTTP method
            device_id: Identifier from the path, None for the collection
            body: Raw request body
        """
        logger.info("HTTP trigger processed a device request.")
        method = method.upper()
        if device_id is not None and not device_id.strip():
            device_id = None

        if method == "GET":
            if device_id is None:
                DeviceHandler.handle_list(router)
            else:
                DeviceHandler.handle_get(router, device_id)
        elif method == "POST" and device_id is None:
            DeviceHandler.handle_create(router, body)
        elif method == "PUT" and device_id is not None:
            DeviceHandler.handle_update(router, device_id, body)
        elif method == "DELETE" and device_id is not None:
            DeviceHandler.handle_delete(router, device_id)
        else:
            response = router.error_handler.create_error_response(
                ErrorCode.BAD_REQUEST,
                UNSUPPORTED_MESSAGE,
                ErrorCode.BAD_REQUEST,
            )
            router._send_error_response(ErrorCode.BAD_REQUEST, response)

    @staticmethod
    def handle_list(router: "BaseHandler") -> None:
        try:
            with _device_service() as service:
                devices = service.list_devices()
            router._send_json([device.to_dict() for device in devices], status_code=ErrorCode.OK)
        except Exception as e:
            DeviceHandler._handle_error(router, e, "Error loading devices")

    @staticmethod
    def handle_get(router: "BaseHandler", device_id: str) -> None:
        try:
            with _device_service() as service:
                device = service.get_device(device_id)
            if device is None:
                DeviceHandler._send_device_not_found(router, device_id)
                return
            router._send_json(device.to_dict(), status_code=ErrorCode.OK)
        except Exception as e:
            DeviceHandler._handle_error(router, e, "Error loading device")

    @staticmethod
    def handle_create(router: "BaseHandler", body: bytes | str | None) -> None:
        """Creates a device from the request body and answers 201.

        The body is parsed before a connection is opened, so an empty or
        malformed body never reaches the database.
        """
        try:
            device = Device.from_json(body)
            with _device_service() as service:
                created = service.create_device(device)
            router._send_json(created.to_dict(), status_code=ErrorCode.CREATED)
        except Exception as e:
            DeviceHandler._handle_error(router, e, "Error creating device")

    @staticmethod
    def handle_update(router: "BaseHandler", device_id: str, body: bytes | str | None) -> None:
        try:
            device = Device.from_json(body)
            with _device_service() as service:
                updated = service.update_device(device_id, device)
            if updated is None:
                DeviceHandler._send_device_not_found(router, device_id)
                return
            router._send_json(updated.to_dict(), status_code=ErrorCode.OK)
        except Exception as e:
            DeviceHandler._handle_error(router, e, "Error updating device")

    @staticmethod
    def handle_delete(router: "BaseHandler", device_id: str) -> None:
        try:
            with _device_service() as service:
                deleted = service.delete_device(device_id)
            if not deleted:
                DeviceHandler._send_device_not_found(router, device_id)
                return
            router._send_no_content()
        except Exception as e:
            DeviceHandler._handle_error(router, e, "Error deleting device")

    @staticmethod
    def _send_device_not_found(router: "BaseHandler", device_id: str) -> None:
        response = router.error_handler.create_error_response(
            ErrorCode.NOT_FOUND,
            f"Device not found with ID: {device_id}",
            ErrorCode.NOT_FOUND,
        )
        router._send_error_response(ErrorCode.NOT_FOUND, response)

    @staticmethod
    def _handle_error(router: "BaseHandler", exception: Exception, default_message: str) -> None:
        code, response = router.error_handler.handle_error(exception, default_message=default_message)
        router._send_error_response(code, response)
