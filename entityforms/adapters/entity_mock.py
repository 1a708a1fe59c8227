from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from entityforms.domain.entities import EntitySchema
from entityforms.domain.errors import RemoteCallError
from entityforms.domain.ports import EntityServicePort, GreetingPort, Record

_ID_PREFIXES: Dict[str, str] = {"contact": "003", "expense": "a00"}


@dataclass
class EntityServiceMock(EntityServicePort):
    """Offline substitute for ``ApexRestEntityAdapter`` with deterministic ids.

    Calls arrive from worker threads, so the record store is guarded by a lock.
    """

    schema: EntitySchema
    records: List[Record] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = len(self.records)
        self._fail_next = False
        self._fail_message: Optional[str] = None
        self.created_payloads: List[Record] = []
        self.list_calls = 0

    def fail_next_create(self, message: Optional[str] = None) -> None:
        """Reject the next create with ``message`` (``None`` for no message)."""
        with self._lock:
            self._fail_next = True
            self._fail_message = message

    # ---------- EntityServicePort ----------

    def list_records(self) -> List[Record]:
        with self._lock:
            self.list_calls += 1
            return [dict(record) for record in self.records]

    def create_record(self, payload: Record) -> Optional[Record]:
        with self._lock:
            self.created_payloads.append(dict(payload))
            if self._fail_next:
                self._fail_next = False
                raise RemoteCallError(self._fail_message)

            missing = [
                spec.label
                for spec in self.schema.fields
                if spec.required and payload.get(spec.name) in (None, "")
            ]
            if missing:
                raise RemoteCallError(f"Required fields are missing: [{', '.join(missing)}]")

            self._counter += 1
            prefix = _ID_PREFIXES.get(self.schema.key, "a01")
            record: Dict[str, Any] = {"Id": f"{prefix}{self._counter:015d}"}
            record.update(payload)
            self.records.append(record)
            return dict(record)


class GreetingMock(GreetingPort):
    """In-memory greeting endpoint."""

    def echo(self, name: str) -> str:
        return f"Hello, {name}!"


__all__ = ["EntityServiceMock", "GreetingMock"]
