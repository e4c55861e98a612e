#!/usr/bin/env python3
"""
Local HTTP server exposing the device and WaterBot endpoints.

Serves the same handlers as the Azure Functions app, for development
without the Functions host.

Start: python scripts/server.py
With a throwaway SQLite database:
    DATABASE_URL=sqlite:///iotmon.db python scripts/server.py --init-db
"""

from __future__ import annotations

import argparse
import logging
import os
from http.server import ThreadingHTTPServer
from pathlib import Path

from dotenv import load_dotenv

from iotmon_functions import __version__, get_version_type, is_release_version
from iotmon_functions.config import load_config
from iotmon_functions.database import connect, ensure_schema
from iotmon_functions.errors import ErrorHandler, setup_logging
from iotmon_functions.handlers import RequestRouter

logger = logging.getLogger(__name__)


def load_env_file() -> None:
    """Load .env file from the project root or the current working directory.

    Only sets environment variables that are not already set.
    """
    env_paths = [
        Path(__file__).parent.parent / ".env",
        Path.cwd() / ".env",
    ]

    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.debug(f"Loaded .env file from: {env_path}")
            break
    else:
        logger.debug("No .env file found in common locations")


def main() -> None:
    load_env_file()

    parser = argparse.ArgumentParser(description="Local server for the IoT monitoring functions")
    default_port = int(os.getenv("IOTMON_SERVER_PORT", "8080"))
    default_host = os.getenv("IOTMON_SERVER_HOST", "localhost")
    parser.add_argument("--port", type=int, default=default_port, help=f"Port for HTTP server (default: {default_port}, or set IOTMON_SERVER_PORT in .env)")
    parser.add_argument("--host", type=str, default=default_host, help=f"Host (default: {default_host}, or set IOTMON_SERVER_HOST in .env)")
    parser.add_argument(
        "--no-log",
        action="store_true",
        help="Disable request logging",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (default: INFO, or set LOG_LEVEL environment variable)",
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create the devices and waterbot_status tables if they do not exist",
    )
    args = parser.parse_args()

    log_level_str = args.log_level or os.getenv("LOG_LEVEL", "INFO").upper()
    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
    }
    setup_logging(log_level_map.get(log_level_str, logging.INFO))

    log_sensitive = os.getenv("LOG_SENSITIVE", "false").lower() == "true"
    error_handler = ErrorHandler(enable_logging=not args.no_log, log_sensitive=log_sensitive)

    if args.init_db:
        with connect(load_config()) as session:
            ensure_schema(session)
        logger.info("Database tables are in place")

    RequestRouter.enable_logging = not args.no_log
    RequestRouter.error_handler = error_handler

    # ThreadingHTTPServer so requests are processed concurrently
    server = ThreadingHTTPServer((args.host, args.port), RequestRouter)

    if is_release_version():
        print(f"IoT monitoring server v{__version__} starting...")
    else:
        print(f"IoT monitoring server v{__version__} ({get_version_type().upper()}) starting...")

    print(f"Running on http://{args.host}:{args.port}")
    print("   Endpoints:")
    print("   - GET    /api/devices       - List devices")
    print("   - GET    /api/devices/{id}  - Get one device")
    print("   - POST   /api/devices       - Create a device")
    print("   - PUT    /api/devices/{id}  - Update a device")
    print("   - DELETE /api/devices/{id}  - Delete a device")
    print("   - GET    /robots/status     - Latest WaterBot states")
    print("   - GET    /health            - Health check")
    print(f"   - Logging: {'enabled (level: ' + log_level_str + ')' if RequestRouter.enable_logging else 'disabled'}")
    print("\n   Press Ctrl+C to stop")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nStopping server...")
        server.shutdown()


if __name__ == "__main__":
    main()
