"""Tests for the Azure Functions entry points."""

from __future__ import annotations

import json

import azure.functions as func
import pytest

from iotmon_functions.functions import run_device_state, run_waterbot_status


def _request(method: str, device_id: str | None = None, body: bytes = b"") -> func.HttpRequest:
    route_params = {"id": device_id} if device_id is not None else {}
    url = "http://localhost:7071/api/devices" + (f"/{device_id}" if device_id else "")
    return func.HttpRequest(method=method, url=url, route_params=route_params, body=body)


@pytest.mark.unit
class TestDeviceStateFunction:
    """Tests for run_device_state()."""

    def test_create_and_fetch(self, database_config):
        created = run_device_state(
            _request("POST", body=b'{"name":"Sensor1","location":"Loc1","temperature":21.5}')
        )

        assert created.status_code == 201
        assert created.mimetype == "application/json"
        device = json.loads(created.get_body())

        fetched = run_device_state(_request("GET", device["id"]))

        assert fetched.status_code == 200
        assert json.loads(fetched.get_body())["name"] == "Sensor1"

    def test_delete_unknown(self, database_config):
        response = run_device_state(_request("DELETE", "unknown-id"))

        assert response.status_code == 404
        assert json.loads(response.get_body())["error"] == "Device not found with ID: unknown-id"

    def test_delete_returns_empty_body(self, database_config):
        run_device_state(_request("POST", body=b'{"id":"d1","name":"Sensor1"}'))

        response = run_device_state(_request("DELETE", "d1"))

        assert response.status_code == 204
        assert response.get_body() == b""

    def test_post_with_id_is_bad_request(self, database_config):
        response = run_device_state(_request("POST", "d1", body=b'{"name":"Sensor1"}'))

        assert response.status_code == 400


@pytest.mark.unit
class TestWaterBotStatusFunction:
    """Tests for run_waterbot_status()."""

    def test_lists_states(self, database_config, add_waterbot_state):
        add_waterbot_state("b1", "idle")

        response = run_waterbot_status(
            func.HttpRequest(method="GET", url="http://localhost:7071/robots/status", body=b"")
        )

        assert response.status_code == 200
        states = json.loads(response.get_body())
        assert [(state["botId"], state["status"]) for state in states] == [("b1", "idle")]


@pytest.mark.unit
def test_function_app_registers_both_functions():
    from function_app import app

    names = {function.get_function_name() for function in app.get_functions()}

    assert names == {"CurrentStateApiFunction", "GetWaterBotLatestStatus"}
