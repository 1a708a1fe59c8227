from __future__ import annotations

from dataclasses import dataclass
from typing import List

from entityforms.domain.entities import Record
from entityforms.domain.ports import EntityServicePort
from entityforms.usecases.error_mapping import map_api_error


@dataclass
class ListEntities:
    """Use-case callable that fetches the record list for one entity."""

    port: EntityServicePort

    def __call__(self) -> List[Record]:
        try:
            records = self.port.list_records()
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="LIST_FAILED",
                default_message="Failed to load records.",
            ) from exc
        return [dict(record) for record in records or []]


__all__ = ["ListEntities"]
