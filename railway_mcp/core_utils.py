"""Core utilities for Railway MCP - logging and responses."""

import logging
from typing import Any

from .errors import RailwayMCPError

logger = logging.getLogger(__name__)


# =============================================================================
# LOGGING UTILITIES
# =============================================================================


class LoggingUtility:
    """Simple logging utility."""

    @staticmethod
    def log_info(operation: str, message: str) -> None:
        """Log an info message."""
        logger.info(f"{operation}: {message}")

    @staticmethod
    def log_error(operation: str, error: Exception) -> None:
        """Log an error message."""
        logger.error(f"{operation}: {str(error)}")

    @staticmethod
    def log_warning(operation: str, message: str) -> None:
        """Log a warning message."""
        logger.warning(f"{operation}: {message}")

    @staticmethod
    def log_debug(operation: str, message: str) -> None:
        """Log a debug message."""
        logger.debug(f"{operation}: {message}")


def handle_error(
    logger: LoggingUtility, operation: str, error: Exception
) -> dict[str, Any]:
    """Handle errors with consistent logging and response formatting.

    Known Railway MCP errors keep their class name and context so the caller
    can see which step failed and which resources already exist.
    """
    logger.log_error(operation, error)
    if isinstance(error, RailwayMCPError):
        return error_response(
            f"Failed to {operation}: {str(error)}",
            error_type=type(error).__name__,
            **error.context(),
        )
    return error_response(f"Failed to {operation}: {str(error)}")


# =============================================================================
# RESPONSE UTILITIES
# =============================================================================


def success_response(**kwargs) -> dict[str, Any]:
    """Create a success response."""
    response = {"status": "success"}
    response.update(kwargs)
    return response


def error_response(message: str, **kwargs) -> dict[str, Any]:
    """Create an error response."""
    response = {"status": "error", "message": message}
    response.update(kwargs)
    return response
