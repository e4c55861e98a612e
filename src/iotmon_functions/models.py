from __future__ import annotations

import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Normalizes a timestamp column value to an aware UTC datetime.

    PostgreSQL returns naive datetimes for TIMESTAMP columns and SQLite
    returns ISO text; both are interpreted as UTC.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class InvalidRequestBodyError(ValueError):
    """Raised when a request body cannot be turned into a record."""


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidRequestBodyError(f"Invalid request body: '{key}' must be a string")
    return value


def _identifier(payload: Dict[str, Any]) -> Optional[str]:
    """Reads ``id``, accepting numbers the way JSON object mappers coerce them."""
    value = payload.get("id")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return _optional_str(payload, "id")


def _temperature(payload: Dict[str, Any]) -> float:
    value = payload.get("temperature")
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise InvalidRequestBodyError("Invalid request body: 'temperature' must be a number")
    try:
        temperature = float(value)
    except (TypeError, ValueError):
        raise InvalidRequestBodyError("Invalid request body: 'temperature' must be a number") from None
    # NaN and infinities have no JSON representation
    if not math.isfinite(temperature):
        raise InvalidRequestBodyError("Invalid request body: 'temperature' must be a finite number")
    return temperature


@dataclass
class Device:
    id: Optional[str] = None
    name: Optional[str] = None
    location: Optional[str] = None
    temperature: float = 0.0
    last_updated: Optional[datetime] = None

    @classmethod
    def from_json(cls, body: str | bytes | None) -> "Device":
        """Parses a request body into a Device.

        ``id`` is optional and ``lastUpdated`` is never read from the client.
        Unknown fields are ignored.

        Raises:
            InvalidRequestBodyError: Empty body, malformed JSON or wrongly typed fields
        """
        if not body or not body.strip():
            raise InvalidRequestBodyError("Request body is empty.")

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise InvalidRequestBodyError(f"Invalid request body: {e}") from e
        if not isinstance(payload, dict):
            raise InvalidRequestBodyError("Invalid request body: expected a JSON object")

        return cls(
            id=_identifier(payload),
            name=_optional_str(payload, "name"),
            location=_optional_str(payload, "location"),
            temperature=_temperature(payload),
        )

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Device":
        temperature = row["temperature"]
        return cls(
            id=row["id"],
            name=row["name"],
            location=row["location"],
            temperature=float(temperature) if temperature is not None else 0.0,
            last_updated=parse_timestamp(row["last_updated"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "temperature": self.temperature,
            "lastUpdated": format_timestamp(self.last_updated),
        }


@dataclass
class WaterBotState:
    """Latest known state of one WaterBot, written by an external producer."""

    bot_id: str
    bot_name: Optional[str]
    location: Optional[str]
    location_coo_sys: Optional[str]
    status: Optional[str]
    last_updated: Optional[datetime]

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "WaterBotState":
        return cls(
            bot_id=row["botid"],
            bot_name=row["botname"],
            location=row["location"],
            location_coo_sys=row["locationcoosys"],
            status=row["status"],
            last_updated=parse_timestamp(row["lastupdated"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "botId": self.bot_id,
            "botName": self.bot_name,
            "location": self.location,
            "locationCooSys": self.location_coo_sys,
            "status": self.status,
            "lastUpdated": format_timestamp(self.last_updated),
        }
