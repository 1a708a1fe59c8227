from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ..domain.entities import Draft, EntitySchema
from .status_format import StatusMessage


@dataclass
class FormVM:
    """Draft and status-line state of one list-and-create form, no I/O here.

    - `draft`: raw strings keyed by field name, as typed by the user
    - `status`: outcome of the last submit, overwritten on each outcome
    """

    schema: EntitySchema
    draft: Draft = field(default_factory=dict)
    status: StatusMessage = field(default_factory=StatusMessage)

    def __post_init__(self) -> None:
        initial = self.schema.empty_draft()
        for name, value in self.draft.items():
            self.schema.spec_for(name)
            initial[name] = value
        self.draft = initial

    # ---------- Live form API ----------
    def update_field(self, field_name: str, raw_value: str) -> None:
        if field_name not in self.draft:
            raise KeyError(f"{self.schema.key} has no field {field_name!r}")
        self.draft[field_name] = raw_value

    def can_submit(self) -> bool:
        return not self.schema.missing_required(self.draft)

    def snapshot(self) -> Draft:
        return dict(self.draft)

    def reset_draft(self) -> None:
        self.draft = self.schema.empty_draft()

    def set_status(self, status: StatusMessage) -> None:
        self.status = status

    # ---------- View helpers ----------
    def options_for(self, field_name: str) -> List[Dict[str, str]]:
        return self.schema.options_for(field_name)
