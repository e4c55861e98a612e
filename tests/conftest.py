"""Pytest configuration and fixtures."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

import pytest

from iotmon_functions.config import DatabaseConfig, load_config
from iotmon_functions.database import DatabaseSession, connect, ensure_schema
from iotmon_functions.errors import ErrorHandler
from iotmon_functions.handlers import ResponseCapture

DATABASE_ENV_VARS = ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD", "DATABASE_URL", "JDBC_URL")


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Removes database settings that a developer .env may have exported."""
    for var in DATABASE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def temp_database(tmp_path: Path) -> Path:
    """Path of a temporary SQLite database."""
    return tmp_path / "iotmon.db"


@pytest.fixture
def database_config(clean_env: pytest.MonkeyPatch, temp_database: Path) -> DatabaseConfig:
    """Points the environment at a temporary SQLite database with both tables."""
    clean_env.setenv("DATABASE_URL", f"sqlite:///{temp_database}")
    config = load_config()
    with connect(config) as session:
        ensure_schema(session)
    return config


@pytest.fixture
def session(database_config: DatabaseConfig) -> Iterator[DatabaseSession]:
    with connect(database_config) as session:
        yield session


@pytest.fixture
def error_handler() -> ErrorHandler:
    return ErrorHandler(enable_logging=False)


@pytest.fixture
def capture(error_handler: ErrorHandler) -> ResponseCapture:
    return ResponseCapture(error_handler)


@pytest.fixture
def add_waterbot_state(database_config: DatabaseConfig):
    """Inserts a waterbot_status row the way the external producer would."""

    def _add(bot_id: str, status: str, **columns) -> None:
        row = {
            "botid": bot_id,
            "botname": columns.get("botname", f"Bot {bot_id}"),
            "location": columns.get("location", "37.5665,126.9780"),
            "locationcoosys": columns.get("locationcoosys", "WGS84"),
            "status": status,
            "lastupdated": columns.get("lastupdated", datetime(2024, 6, 10, 15, 30, tzinfo=timezone.utc)),
        }
        with connect(database_config) as session:
            session.execute(
                "INSERT INTO waterbot_status (botid, botname, location, locationcoosys, status, lastupdated) "
                "VALUES (?, ?, ?, ?, ?, ?)",
                tuple(row.values()),
            )

    return _add
