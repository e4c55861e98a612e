"""Base handler with shared HTTP functionality."""

from __future__ import annotations

import json
import logging
from http.server import BaseHTTPRequestHandler
from typing import Any
from urllib.parse import parse_qs, urlparse

from ..errors import ErrorHandler
from ..models import InvalidRequestBodyError

logger = logging.getLogger(__name__)


class BaseHandler(BaseHTTPRequestHandler):
    """Base class for the local HTTP server.

    Used as the router; handler methods elsewhere are static and take the
    router (a BaseHandler instance) as a parameter.
    """

    enable_logging = True
    error_handler: ErrorHandler = ErrorHandler()

    def handle_one_request(self):
        """Overrides handle_one_request to catch BrokenPipeError."""
        try:
            super().handle_one_request()
        except (BrokenPipeError, ConnectionResetError):
            # Client closed connection - normal, don't log
            pass

    def log_request(self, code="-", size="-"):
        """Logs requests when logging is enabled."""
        if self.enable_logging:
            client_ip = self.client_address[0]
            logger.info(f"{client_ip} - {self.command} {self.path} - {code}")

    def _send_json(self, data: Any, status_code: int = 200) -> None:
        """Sends a JSON response.

        The body is serialized before the status line is written, so a
        serialization failure can still be answered with an error.
        """
        response_body = json.dumps(data, indent=2, allow_nan=False).encode("utf-8")
        self.send_response(int(status_code))
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(response_body)))
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(response_body)

    def _send_no_content(self) -> None:
        self.send_response(204)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()

    def _send_error_response(self, code: int, response: dict) -> None:
        """Sends an error response in the consistent format.

        Args:
            code: HTTP status code
            response: Error response dict
        """
        self._send_json(response, status_code=code)

    def _read_body(self) -> bytes:
        raw_length = self.headers.get("Content-Length") or 0
        try:
            content_length = int(raw_length)
        except ValueError:
            raise InvalidRequestBodyError(f"Invalid Content-Length header: {raw_length}") from None
        if content_length <= 0:
            return b""
        return self.rfile.read(content_length)

    def _parse_path(self) -> tuple[str, dict]:
        """Parses the request path and query parameters.

        Returns:
            Tuple of (path, query parameter dict)
        """
        parsed_path = urlparse(self.path)
        return parsed_path.path, parse_qs(parsed_path.query)

    def log_message(self, format, *args):
        """Suppresses standard logging messages (only log_request is used)."""
        pass
