"""Use case for creating one record from a form draft."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from entityforms.domain.entities import EntitySchema, Record
from entityforms.domain.ports import EntityServicePort
from entityforms.usecases.error_mapping import map_api_error

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateResult:
    """Tagged outcome of a create call: success, or failure with a message."""

    ok: bool
    record: Optional[Record] = None
    code: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, record: Optional[Record] = None) -> "CreateResult":
        return cls(ok=True, record=record)

    @classmethod
    def failure(cls, code: str, message: str) -> "CreateResult":
        return cls(ok=False, code=code, message=message)


@dataclass
class CreateEntity:
    """Coerce a draft into a payload and send it to the record port.

    Never raises: every failure, including payload coercion, is returned as
    ``CreateResult.failure``. Blocking; callers on the event loop run it in a
    worker thread.
    """

    schema: EntitySchema
    port: EntityServicePort

    def __call__(self, draft: Mapping[str, str]) -> CreateResult:
        try:
            payload = self.schema.build_payload(draft)
            record = self.port.create_record(payload)
        except Exception as exc:
            mapped = map_api_error(exc, default_code="CREATE_FAILED")
            _log.debug("create %s failed: %r", self.schema.key, exc)
            return CreateResult.failure(mapped.code, mapped.message)
        return CreateResult.success(record)


__all__ = ["CreateEntity", "CreateResult"]
