"""Request execution and JSON response checks shared by auth and controller."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from gdrivenav.errors import (
    HttpErrorInfo,
    NetworkError,
    ProtocolError,
    map_http_error,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC: float = 60.0


def send(
    session: requests.Session,
    method: str,
    url: str,
    **kwargs: Any,
) -> requests.Response:
    """Execute one request. Transport failures become NetworkError."""
    kwargs.setdefault("timeout", DEFAULT_TIMEOUT_SEC)
    try:
        return session.request(method, url, **kwargs)
    except requests.RequestException as exc:
        logger.error("Transport error on %s %s: %s", method, url, exc)
        raise NetworkError(
            "Network error",
            details={"method": method, "url": url, "transport_error": str(exc)},
            cause=exc,
        ) from exc


def read_json(response: requests.Response) -> dict[str, Any]:
    """
    Parse a JSON object response and reject error responses.

    An empty body parses as {} (Drive answers DELETE with no content).

    Raises:
        ProtocolError: body is not a JSON object, or carries an OAuth-style
            error object.
        GDriveNavError subclass: Drive-style error object or non-2xx status
            (see map_http_error).
    """
    status_code = response.status_code
    payload: Any = {}
    if response.content:
        try:
            payload = json.loads(response.content)
        except ValueError as exc:
            if not response.ok:
                raise map_http_error(
                    HttpErrorInfo(status_code=status_code, reason=response.reason),
                    cause=exc,
                ) from exc
            raise ProtocolError(
                "Response is not valid JSON",
                details={"status_code": status_code},
                cause=exc,
            ) from exc

    if not isinstance(payload, dict):
        raise ProtocolError(
            "Response is not a JSON object",
            details={"status_code": status_code},
        )

    check_error_object(payload, status_code=status_code)

    if not response.ok:
        raise map_http_error(
            HttpErrorInfo(status_code=status_code, reason=response.reason)
        )
    return payload


def check_error_object(
    payload: dict[str, Any],
    *,
    status_code: Optional[int] = None,
) -> None:
    """
    Raise if payload has a top-level "error" field.

    Google answers in two shapes:
        - OAuth endpoints: {"error": "invalid_grant", "error_description": "..."}
        - Drive endpoints: {"error": {"code": 404, "message": "...",
                                      "errors": [{"reason": "notFound"}]}}
    """
    if "error" not in payload:
        return

    error = payload["error"]
    if isinstance(error, dict):
        message = error.get("message")
        code = error.get("code")
        reason = None
        errors = error.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            reason = errors[0].get("reason")

        logger.error("Google Drive error: %s: %s.", code or status_code, message)
        effective_code = code if isinstance(code, int) else status_code or 0
        raise map_http_error(
            HttpErrorInfo(
                status_code=effective_code,
                reason=reason if isinstance(reason, str) else None,
                message=message if isinstance(message, str) else None,
            )
        )

    description = payload.get("error_description")
    logger.error("Google Drive error: %s: %s.", error, description)
    message = f"{error}: {description}" if description else str(error)
    raise ProtocolError(
        message,
        details={
            "error": error,
            "error_description": description,
            "status_code": status_code,
        },
    )


def require_field(
    payload: dict[str, Any],
    key: str,
    expected: type | tuple[type, ...],
    *,
    what: str,
) -> Any:
    """Return payload[key] or raise ProtocolError if missing or mistyped."""
    value = payload.get(key)
    # bool is an int subclass; a boolean never stands in for a number here.
    if value is None or isinstance(value, bool) or not isinstance(value, expected):
        logger.error("Malformed %s: missing or invalid '%s'.", what, key)
        raise ProtocolError(
            f"Malformed {what}: missing or invalid '{key}'",
            details={"field": key},
        )
    return value
