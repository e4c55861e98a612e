"""Azure Functions adapters for the device and WaterBot handlers."""

from __future__ import annotations

import os

import azure.functions as func

from .errors import ErrorHandler
from .handlers import DeviceHandler, ResponseCapture, WaterBotHandler


def _error_handler() -> ErrorHandler:
    log_sensitive = os.getenv("LOG_SENSITIVE", "false").lower() == "true"
    return ErrorHandler(enable_logging=True, log_sensitive=log_sensitive)


def to_http_response(capture: ResponseCapture) -> func.HttpResponse:
    return func.HttpResponse(
        body=capture.body,
        status_code=capture.status_code or 500,
        headers=capture.headers,
        mimetype="application/json",
        charset="utf-8",
    )


def run_device_state(req: func.HttpRequest) -> func.HttpResponse:
    """Entry point for api/devices/{id?}."""
    capture = ResponseCapture(_error_handler())
    device_id = req.route_params.get("id")
    DeviceHandler.handle_request(capture, req.method, device_id, req.get_body())
    return to_http_response(capture)


def run_waterbot_status(req: func.HttpRequest) -> func.HttpResponse:
    """Entry point for robots/status."""
    capture = ResponseCapture(_error_handler())
    WaterBotHandler.handle_status(capture)
    return to_http_response(capture)
