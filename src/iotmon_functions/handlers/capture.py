"""Response capture for hosts that do not own a socket."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from ..errors import ErrorHandler


class ResponseCapture:
    """Stands in for the router when a host builds its own response object.

    Offers the same send methods as BaseHandler and records the outcome
    instead of writing it to a socket.
    """

    def __init__(self, error_handler: Optional[ErrorHandler] = None) -> None:
        self.error_handler = error_handler or ErrorHandler()
        self.status_code: Optional[int] = None
        self.body: Optional[str] = None
        self.headers: Dict[str, str] = {}

    def _send_json(self, data: Any, status_code: int = 200) -> None:
        self.body = json.dumps(data, indent=2, allow_nan=False)
        self.status_code = int(status_code)
        self.headers["Content-Type"] = "application/json"

    def _send_no_content(self) -> None:
        self.body = None
        self.status_code = 204

    def _send_error_response(self, code: int, response: dict) -> None:
        self._send_json(response, status_code=code)

    def json(self) -> Any:
        """Decodes the captured body; None for empty responses."""
        return json.loads(self.body) if self.body is not None else None
