"""Router for request routing to specialized handlers."""

from __future__ import annotations

from typing import Optional
from urllib.parse import unquote

from ..errors import ErrorCode
from ..models import InvalidRequestBodyError
from .base_handler import BaseHandler
from .device_handler import DeviceHandler, UNSUPPORTED_MESSAGE
from .waterbot_handler import WaterBotHandler

DEVICES_PATH = "/api/devices"
ROBOT_STATUS_PATH = "/robots/status"


def parse_device_path(path: str) -> tuple[bool, Optional[str]]:
    """Splits a devices path into (matched, device id).

    ``/api/devices`` and ``/api/devices/`` match without an id,
    ``/api/devices/<id>`` matches with the percent-decoded id. Deeper paths
    do not match.
    """
    path = path.rstrip("/")
    if path == DEVICES_PATH:
        return True, None
    prefix = DEVICES_PATH + "/"
    if not path.startswith(prefix):
        return False, None
    segment = path[len(prefix):]
    if "/" in segment:
        return False, None
    return True, unquote(segment)


class RequestRouter(BaseHandler):
    """Router that forwards requests to specialized handlers."""

    def do_GET(self):
        self._route_request()

    def do_POST(self):
        self._route_request()

    def do_PUT(self):
        self._route_request()

    def do_DELETE(self):
        self._route_request()

    def do_PATCH(self):
        self._route_request()

    def do_HEAD(self):
        self._route_request()

    def do_OPTIONS(self):
        self._route_request()

    def _route_request(self) -> None:
        """Forwards requests to the appropriate handler.

        Routing logic:
        - /api/devices, /api/devices/{id} -> DeviceHandler
        - /robots/status -> WaterBotHandler
        - /health -> health check

        Other methods or deeper paths under /api/devices are answered with 400.
        """
        path, _ = self._parse_path()

        if path == "/health":
            self._send_json({"status": "ok"}, status_code=ErrorCode.OK)
            return

        matched, device_id = parse_device_path(path)
        if matched:
            try:
                body = self._read_body()
            except InvalidRequestBodyError as e:
                code, response = self.error_handler.handle_error(e)
                self._send_error_response(code, response)
                return
            DeviceHandler.handle_request(self, self.command, device_id, body)
            return
        if path.startswith(DEVICES_PATH + "/"):
            self._send_unsupported()
            return

        if path.rstrip("/") == ROBOT_STATUS_PATH:
            if self.command == "GET":
                WaterBotHandler.handle_status(self)
            else:
                self._send_unsupported()
            return

        self._send_not_found()

    def _send_unsupported(self) -> None:
        response = self.error_handler.create_error_response(
            ErrorCode.BAD_REQUEST,
            UNSUPPORTED_MESSAGE,
            ErrorCode.BAD_REQUEST,
        )
        self._send_error_response(ErrorCode.BAD_REQUEST, response)

    def _send_not_found(self) -> None:
        response = self.error_handler.create_error_response(
            ErrorCode.NOT_FOUND,
            "Not Found",
            ErrorCode.NOT_FOUND,
        )
        self._send_error_response(ErrorCode.NOT_FOUND, response)
