from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

Record = Dict[str, Any]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta


# ---- Ports (Hexagonal boundaries) ----
class EntityServicePort(Protocol):
    """List/create operations for one record type on the remote service."""

    def list_records(self) -> List[Record]: ...
    def create_record(self, payload: Record) -> Optional[Record]: ...  # created record, if echoed


class GreetingPort(Protocol):
    """Request/response greeting endpoint."""

    def echo(self, name: str) -> str: ...


class SettingsStoragePort(Protocol):
    """Persistence for connection settings."""

    def save_user_settings(self, payload: Dict[str, Any]) -> None: ...
    def load_user_settings(self) -> Dict[str, Any]: ...
