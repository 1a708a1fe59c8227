"""Translate adapter and port errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from entityforms.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    first_string,
)
from entityforms.domain.errors import FieldCoercionError, RemoteCallError
from entityforms.domain.ports import UseCaseError

FALLBACK_ERROR_MESSAGE = "Unknown error"


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    The server's own message is preferred whenever the failure carried one.
    The returned message is never empty.

    Args:
        exc: Exception raised by a port or by payload coercion.
        default_code: Code used for failures without a more specific mapping.
        default_message: Text used when no message can be extracted.
    """
    fallback = default_message or FALLBACK_ERROR_MESSAGE
    if isinstance(exc, UseCaseError):
        if exc.message:
            return exc
        return UseCaseError(exc.code, fallback, meta=exc.meta)
    if isinstance(exc, FieldCoercionError):
        return UseCaseError("INVALID_FIELD", exc.message, meta={"field": exc.field_name})
    if isinstance(exc, RemoteCallError):
        return UseCaseError(default_code, _clean(exc.message) or fallback)
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if not isinstance(exc, ApiError):
        message = default_message or _clean(str(exc)) or FALLBACK_ERROR_MESSAGE
        return UseCaseError(default_code, message)

    detail = _server_detail(exc)
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        code = exc.code or ("AUTH_FAILED" if status in (401, 403) else "REQUEST_FAILED")
        if detail:
            return UseCaseError(code, detail)
        if status in (401, 403):
            return UseCaseError(code, "Auth failed / access token invalid.")
        label = f"Request failed (HTTP {status})." if status else "Request failed."
        return UseCaseError(code, label)
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", detail or "Server error, try again.")
    return UseCaseError("API_ERROR", detail or _clean(str(exc)) or fallback)


def _server_detail(exc: ApiError) -> Optional[str]:
    return _clean(exc.detail) or first_string(exc.payload)


def _clean(text: Optional[str]) -> Optional[str]:
    cleaned = (text or "").strip()
    return cleaned or None


__all__ = ["FALLBACK_ERROR_MESSAGE", "map_api_error"]
