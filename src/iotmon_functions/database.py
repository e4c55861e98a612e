"""Per-request database connections for PostgreSQL and SQLite."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Sequence

import psycopg2

from .config import DatabaseConfig

logger = logging.getLogger(__name__)

# DB-API drivers share no common base class
DATABASE_ERRORS = (sqlite3.Error, psycopg2.Error)

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS devices (
        id VARCHAR(255) PRIMARY KEY,
        name VARCHAR(255),
        location VARCHAR(255),
        temperature DOUBLE PRECISION,
        last_updated TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS waterbot_status (
        botid VARCHAR(255) PRIMARY KEY,
        botname VARCHAR(255),
        location VARCHAR(255),
        locationcoosys VARCHAR(255),
        status VARCHAR(255),
        lastupdated TIMESTAMP
    )
    """,
)


class DatabaseSession:
    """Runs statements on one open connection.

    SQL is written with qmark (``?``) placeholders; they are rewritten to
    ``%s`` for psycopg2.
    """

    def __init__(self, connection: Any, *, is_sqlite: bool) -> None:
        self.connection = connection
        self.is_sqlite = is_sqlite

    def _prepare(self, sql: str, params: Sequence[Any]) -> tuple[str, tuple]:
        if self.is_sqlite:
            # sqlite3's default datetime adapter is deprecated, store ISO text
            return sql, tuple(
                value.isoformat() if isinstance(value, datetime) else value
                for value in params
            )
        # TIMESTAMP columns carry no zone; bind aware values as naive UTC
        return sql.replace("?", "%s"), tuple(
            value.astimezone(timezone.utc).replace(tzinfo=None)
            if isinstance(value, datetime) and value.tzinfo is not None
            else value
            for value in params
        )

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Executes a write statement and returns the affected row count."""
        sql, params = self._prepare(sql, params)
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, params)
            return cursor.rowcount
        finally:
            cursor.close()

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Executes a query and returns rows keyed by column name."""
        sql, params = self._prepare(sql, params)
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, params)
            columns = [column[0].lower() for column in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None


def _open_connection(config: DatabaseConfig) -> Any:
    if config.is_sqlite:
        logger.debug(f"Opening SQLite database {config.sqlite_path}")
        return sqlite3.connect(config.sqlite_path)

    if config.url:
        logger.debug("Opening PostgreSQL connection from database URL")
        return psycopg2.connect(
            config.url,
            user=config.user or None,
            password=config.password or None,
        )

    logger.debug(f"Opening PostgreSQL connection to {config.host}:{config.port}/{config.name}")
    return psycopg2.connect(
        host=config.host,
        port=config.port,
        dbname=config.name,
        user=config.user or None,
        password=config.password or None,
    )


@contextmanager
def connect(config: DatabaseConfig) -> Iterator[DatabaseSession]:
    """Opens one connection for the duration of a request.

    Commits when the block completes, rolls back when it raises, and closes
    the connection on every exit path.
    """
    connection = _open_connection(config)
    try:
        yield DatabaseSession(connection, is_sqlite=config.is_sqlite)
        connection.commit()
    except BaseException:
        connection.rollback()
        raise
    finally:
        connection.close()


def ensure_schema(session: DatabaseSession) -> None:
    """Creates the devices and waterbot_status tables if they do not exist."""
    for statement in SCHEMA_STATEMENTS:
        session.execute(statement)
