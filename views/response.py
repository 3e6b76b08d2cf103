# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Structured API response helpers.

Provides consistent JSON response formatting for every web API view.
Every response follows the same top-level structure:

  Success:
    {
      "status": "ok",
      "view": "<view_name>",
      "data": { ... }
    }

  Error:
    {
      "status": "error",
      "view": "<view_name>",
      "error_code": "<ERROR_CODE>",
      "message": "Human-readable error description"
    }

  Cancelled (a newer request superseded this one):
    {
      "status": "cancelled",
      "view": "<view_name>",
      "message": "superseded in player-card"
    }

Conventions enforced by this module:
- Payloads are plain dicts ready for ``flask.jsonify``
- Unavailable values are present as null, not omitted
- Error responses always include error_code and message
"""

from typing import Any

from data.cancellation import Cancelled, Failed
from data.mlb_api import MLBApiNotFoundError

# Error codes
INVALID_PARAMETER = "INVALID_PARAMETER"
NOT_FOUND = "NOT_FOUND"
UPSTREAM_ERROR = "UPSTREAM_ERROR"


def success_response(view: str, data: Any) -> dict[str, Any]:
    """Build a structured success response.

    Args:
        view: The name of the view producing this response.
        data: The view-specific data payload.

    Returns:
        Dict with consistent top-level structure.
    """
    return {
        "status": "ok",
        "view": view,
        "data": data,
    }


def error_response(view: str, error_code: str, message: str) -> dict[str, Any]:
    """Build a structured error response.

    Args:
        view: The name of the view producing this response.
        error_code: Machine-readable error code (e.g., INVALID_PARAMETER).
        message: Human-readable error description.

    Returns:
        Dict with consistent error structure.
    """
    return {
        "status": "error",
        "view": view,
        "error_code": error_code,
        "message": message,
    }


def cancelled_response(view: str, outcome: Cancelled) -> dict[str, Any]:
    """Build the response for a load that was cancelled or superseded."""
    return {
        "status": "cancelled",
        "view": view,
        "message": outcome.reason,
    }


def failed_response(view: str, outcome: Failed) -> tuple[dict[str, Any], int]:
    """Map an upstream failure to an error payload and HTTP status code.

    A missing upstream resource is reported as 404; anything else is a
    502 with a user-visible message.
    """
    if isinstance(outcome.error, MLBApiNotFoundError):
        return error_response(view, NOT_FOUND, outcome.message), 404
    return error_response(
        view, UPSTREAM_ERROR, f"Could not load data from MLB Stats API: {outcome.message}",
    ), 502
