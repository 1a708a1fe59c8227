"""Domain-level error types for use-case and adapter mapping.

These errors cross layer boundaries without leaking transport-specific
exception details.
"""

from __future__ import annotations

from typing import Optional


class FieldCoercionError(ValueError):
    """A draft value could not be converted for the outgoing payload."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.message = message


class RemoteCallError(RuntimeError):
    """A remote port rejected a call, optionally with a server message."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or "")
        self.message = message


__all__ = ["FieldCoercionError", "RemoteCallError"]
