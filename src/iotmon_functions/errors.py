"""Error handling for the IoT monitoring functions."""

from __future__ import annotations

import logging
import os
import sys
import traceback
from enum import IntEnum
from typing import Any, Dict, Optional

from .config import ConfigurationError
from .database import DATABASE_ERRORS
from .models import InvalidRequestBodyError

# Logger for error handling
logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with colors for WARNING (orange) and ERROR (red).

    Colors are only used when:
    - The terminal supports colors (isatty())
    - The NO_COLOR environment variable is not set
    """

    RESET = '\033[0m'
    ORANGE = '\033[38;5;208m'
    RED = '\033[31m'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._use_colors = self._should_use_colors()

    def _should_use_colors(self) -> bool:
        if os.getenv("NO_COLOR") is not None:
            return False
        if not sys.stdout.isatty():
            return False
        if os.getenv("TERM", "") == "dumb":
            return False
        return True

    def format(self, record: logging.LogRecord) -> str:
        log_message = super().format(record)

        if self._use_colors:
            if record.levelno == logging.WARNING:
                log_message = f"{self.ORANGE}{log_message}{self.RESET}"
            elif record.levelno >= logging.ERROR:
                log_message = f"{self.RED}{log_message}{self.RESET}"

        return log_message


def setup_logging(level: int = logging.INFO) -> None:
    """Installs a colored stdout handler on the root logger.

    Only used by the local server and scripts; the Functions host owns the
    root logger when running in Azure.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers (if basicConfig was already called)
    if root_logger.handlers:
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(ColoredFormatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(console_handler)


class ErrorCode(IntEnum):
    """HTTP status codes and internal error codes."""

    # HTTP Status Codes
    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500

    # Internal error codes (for logging)
    CONFIG_ERROR = 1000
    DATABASE_ERROR = 1001
    VALIDATION_ERROR = 1003


class ErrorHandler:
    """Central error handling class."""

    def __init__(self, enable_logging: bool = True, log_sensitive: bool = False) -> None:
        """Initializes the ErrorHandler.

        Args:
            enable_logging: Whether errors are logged
            log_sensitive: Whether tracebacks are logged and added to responses
        """
        self.enable_logging = enable_logging
        self.log_sensitive = log_sensitive

    def format_error_response(
        self,
        code: int,
        message: str,
        error_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Formats an error response in a consistent format.

        Args:
            code: HTTP status code
            message: Error message for the client
            error_code: Optional internal error code
            details: Optional additional details

        Returns:
            Dict with error response
        """
        response: Dict[str, Any] = {
            "error": message,
            "code": int(code),
        }

        if error_code:
            response["error_code"] = int(error_code)

        if details:
            response["details"] = details

        return response

    def handle_error(
        self,
        exception: Exception,
        default_code: int = ErrorCode.INTERNAL_SERVER_ERROR,
        default_message: str = "An unexpected error occurred",
    ) -> tuple[int, Dict[str, Any]]:
        """Handles an exception and returns HTTP status code and response.

        Args:
            exception: The exception that occurred
            default_code: HTTP status code for unclassified exceptions
            default_message: Message prefix for unclassified exceptions

        Returns:
            Tuple of (HTTP status code, error response dict)
        """
        code, message, error_code = self._classify_error(exception, default_code, default_message)

        if self.enable_logging:
            self._log_error(exception, code, message, error_code)

        response = self.format_error_response(code, message, error_code)

        if self.log_sensitive:
            response["traceback"] = "".join(
                traceback.format_exception(type(exception), exception, exception.__traceback__)
            )

        return code, response

    def _classify_error(
        self,
        exception: Exception,
        default_code: int,
        default_message: str,
    ) -> tuple[int, str, Optional[int]]:
        """Classifies an exception and returns code, message and error code.

        The exception text is always part of the message; error responses
        are diagnostic, not a stable schema.
        """
        exception_message = str(exception)

        if isinstance(exception, InvalidRequestBodyError):
            return (
                ErrorCode.BAD_REQUEST,
                exception_message,
                ErrorCode.VALIDATION_ERROR,
            )

        if isinstance(exception, DATABASE_ERRORS):
            return (
                ErrorCode.INTERNAL_SERVER_ERROR,
                f"Database error: {exception_message}",
                ErrorCode.DATABASE_ERROR,
            )

        if isinstance(exception, ConfigurationError):
            return (
                ErrorCode.INTERNAL_SERVER_ERROR,
                f"Configuration error: {exception_message}",
                ErrorCode.CONFIG_ERROR,
            )

        return (
            default_code,
            f"{default_message}: {exception_message}",
            ErrorCode.INTERNAL_SERVER_ERROR,
        )

    def _log_error(
        self,
        exception: Exception,
        code: int,
        message: str,
        error_code: Optional[int],
    ) -> None:
        exception_type = type(exception).__name__

        if code >= 500:
            log_level = logging.ERROR
        elif code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            f"Error {int(code)} ({int(error_code) if error_code else None}): {message} | Exception: {exception_type}",
            exc_info=self.log_sensitive,
        )

    def create_error_response(
        self,
        code: int,
        message: str,
        error_code: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Creates an error response (for manual errors such as 404)."""
        if self.enable_logging:
            logger.warning(f"Error {int(code)} ({int(error_code) if error_code else None}): {message}")

        return self.format_error_response(code, message, error_code)
