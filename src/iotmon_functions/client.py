from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .config import ClientConfig

logger = logging.getLogger(__name__)

FUNCTION_KEY_HEADER = "x-functions-key"


class DeviceApiClient:
    """HTTP client for the device and WaterBot endpoints."""

    def __init__(self, config: ClientConfig, timeout: float = 30) -> None:
        self.config = config
        self.timeout = timeout
        self._session = requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.function_key:
            headers[FUNCTION_KEY_HEADER] = self.config.function_key
        return headers

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_payload: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False,
    ) -> Any:
        """Makes an API request and decodes the JSON response.

        Returns:
            Decoded JSON, or None for 204 responses and tolerated 404s

        Raises:
            requests.exceptions.ConnectionError: Function host unreachable
            RuntimeError: API request failed
        """
        url = f"{self.config.base_url}{path}"
        logger.debug(f"{method} {url}")
        response = self._session.request(
            method,
            url,
            headers=self._headers(),
            json=json_payload,
            timeout=self.timeout,
        )

        if allow_not_found and response.status_code == 404:
            return None

        if not response.ok:
            error_detail = response.text
            try:
                error_json = response.json()
                if isinstance(error_json, dict):
                    error_detail = error_json.get("error", error_detail)
            except ValueError:
                pass
            raise RuntimeError(f"API request failed ({response.status_code}): {error_detail}")

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def list_devices(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/devices")

    def get_device(self, device_id: str) -> Optional[Dict[str, Any]]:
        return self._request("GET", f"/api/devices/{quote(device_id, safe='')}", allow_not_found=True)

    def create_device(self, device: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/devices", json_payload=device)

    def update_device(self, device_id: str, device: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/devices/{quote(device_id, safe='')}", json_payload=device)

    def delete_device(self, device_id: str) -> None:
        self._request("DELETE", f"/api/devices/{quote(device_id, safe='')}")

    def get_robot_status(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/robots/status")
