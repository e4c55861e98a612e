from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DB_PORT = 5432
DEFAULT_API_BASE_URL = "http://localhost:7071"
SQLITE_URL_PREFIX = "sqlite:///"


class ConfigurationError(RuntimeError):
    """Raised when the database settings in the environment are incomplete."""


@dataclass(frozen=True)
class DatabaseConfig:
    host: str
    port: int
    name: str
    user: str
    password: str
    url: str

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith(SQLITE_URL_PREFIX)

    @property
    def sqlite_path(self) -> str:
        if not self.is_sqlite:
            raise RuntimeError(f"Not a SQLite database URL: {self.url}")
        return self.url[len(SQLITE_URL_PREFIX):]


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    function_key: str


def _database_url() -> str:
    url = os.getenv("DATABASE_URL") or os.getenv("JDBC_URL") or ""
    # Legacy JDBC_URL values carry a jdbc: scheme
    if url.startswith("jdbc:"):
        url = url[len("jdbc:"):]
    return url


def load_config() -> DatabaseConfig:
    """Resolves database settings from the environment.

    Called once per invocation; nothing is cached between requests.
    """
    url = _database_url()
    if not url:
        missing: list[str] = [var for var in ("DB_HOST", "DB_NAME") if not os.getenv(var)]
        if missing:
            missing_fmt = ", ".join(missing)
            raise ConfigurationError(f"Missing environment variables: {missing_fmt} (or DATABASE_URL)")

    port_raw = os.getenv("DB_PORT") or str(DEFAULT_DB_PORT)
    try:
        port = int(port_raw)
    except ValueError:
        raise ConfigurationError(f"Invalid DB_PORT: {port_raw}") from None

    return DatabaseConfig(
        host=os.getenv("DB_HOST", ""),
        port=port,
        name=os.getenv("DB_NAME", ""),
        user=os.getenv("DB_USER", ""),
        password=os.getenv("DB_PASSWORD", ""),
        url=url,
    )


def load_client_config() -> ClientConfig:
    base_url = os.getenv("IOTMON_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/")
    return ClientConfig(
        base_url=base_url,
        function_key=os.getenv("IOTMON_FUNCTION_KEY", ""),
    )
