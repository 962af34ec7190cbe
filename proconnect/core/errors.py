"""
Translate Supabase (PostgREST / Storage / Auth) failures into HTTP errors.

The ``detail`` of the resulting error is what the front end shows as a toast, so
the external service's own message is passed through whenever there is one.
"""

import logging
from typing import Any, Optional

from fastapi import HTTPException, status
from postgrest.exceptions import APIError

logger = logging.getLogger(__name__)

# PostgREST / Postgres error codes
_POSTGREST_STATUS = {
    "PGRST116": status.HTTP_404_NOT_FOUND,  # .single() matched no rows
    "23505": status.HTTP_409_CONFLICT,  # unique_violation
    "23503": status.HTTP_409_CONFLICT,  # foreign_key_violation
    "42501": status.HTTP_403_FORBIDDEN,  # insufficient_privilege (RLS)
}


def _storage_payload(exc: Exception) -> Optional[dict]:
    # storage3 raises StorageException(dict) with statusCode/error/message keys
    if exc.args and isinstance(exc.args[0], dict):
        return exc.args[0]
    return None


def error_message(exc: Exception, fallback: str) -> str:
    message = getattr(exc, "message", None)
    if not message:
        payload = _storage_payload(exc)
        if payload:
            message = payload.get("message") or payload.get("error")
    if not message:
        message = str(exc)
    return message or fallback


def error_status(exc: Exception, default: int = status.HTTP_500_INTERNAL_SERVER_ERROR) -> int:
    if isinstance(exc, APIError):
        return _POSTGREST_STATUS.get(str(exc.code), default)
    payload = _storage_payload(exc)
    code: Any = (payload or {}).get("statusCode") or getattr(exc, "status", None)
    try:
        code = int(code)
    except (TypeError, ValueError):
        return default
    return code if 400 <= code < 600 else default


def service_error(
    exc: Exception,
    fallback: str,
    default_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    use_fallback_message: bool = False,
) -> HTTPException:
    """Build the HTTPException to raise for an external-service failure."""
    if isinstance(exc, HTTPException):
        return exc
    detail = fallback if use_fallback_message else error_message(exc, fallback)
    status_code = error_status(exc, default_status)
    logger.warning("%s: %s", fallback, error_message(exc, fallback))
    return HTTPException(status_code=status_code, detail=detail)
