"""
Error types shared by the recommendation core, the stores and the API.
"""

from typing import Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class JuntosError(Exception):
    """Base exception for domain errors that map onto an HTTP status."""

    def __init__(
        self, message: str, error_code: str = "juntos_error", status_code: int = 400
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(self.message)


class VolunteerNotFoundError(JuntosError):
    """Raised when a volunteer id does not resolve in the profile store."""

    def __init__(self, volunteer_id: str):
        self.volunteer_id = volunteer_id
        super().__init__(
            f"Volunteer {volunteer_id} not found", "volunteer_not_found", 404
        )


class InvalidSearchError(JuntosError):
    """Raised for search parameters that parse but cannot be applied."""

    def __init__(self, message: str, error_code: str = "invalid_search"):
        super().__init__(message, error_code, 400)


def create_error_response(
    error: Exception,
    default_message: str = "An error occurred",
) -> Dict[str, Any]:
    """
    Create standardized error response.

    Args:
        error: Exception that occurred
        default_message: Message used for unexpected errors

    Returns:
        Standardized error response dictionary
    """
    if isinstance(error, JuntosError):
        return {
            "success": False,
            "error": {
                "code": error.error_code,
                "message": error.message,
                "type": type(error).__name__,
            },
        }
    elif isinstance(error, HTTPException):
        return {
            "success": False,
            "error": {
                "code": "http_error",
                "message": error.detail,
                "type": "HTTPException",
            },
        }
    else:
        logger.error(f"Unexpected error: {error}")
        return {
            "success": False,
            "error": {
                "code": "internal_error",
                "message": default_message,
                "type": "InternalError",
            },
        }
