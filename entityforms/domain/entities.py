"""Field schemas for the record types edited by the list-and-create forms.

A schema lists the fields a form drafts, which of them gate submission, and
how each raw string is coerced when the outgoing payload is built. Coercion
happens only in :meth:`EntitySchema.build_payload`; drafts always hold the raw
strings typed by the user.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple

from .errors import FieldCoercionError

Record = Dict[str, Any]
Draft = Dict[str, str]


class FieldKind(str, Enum):
    TEXT = "text"
    DECIMAL = "decimal"
    DATE = "date"
    CHOICE = "choice"


@dataclass(frozen=True)
class FieldSpec:
    """One drafted field.

    Attributes:
        name: Payload key, also used as the draft key.
        label: Operator-facing label used in coercion messages.
        required: Whether an empty value blocks submission.
        kind: Coercion applied when the payload is built.
        choices: Allowed values for ``CHOICE`` fields.
    """

    name: str
    label: str
    required: bool = False
    kind: FieldKind = FieldKind.TEXT
    choices: Tuple[str, ...] = ()

    def coerce(self, raw: str) -> Any:
        """Convert a raw draft string into its payload value."""
        text = (raw or "").strip()
        if self.kind is FieldKind.TEXT:
            return raw or ""
        if not text:
            return None
        if self.kind is FieldKind.DECIMAL:
            try:
                number = float(text)
            except ValueError:
                number = math.nan
            if not math.isfinite(number):
                raise FieldCoercionError(self.name, f"{self.label} must be a number.")
            return number
        if self.kind is FieldKind.DATE:
            try:
                parsed = datetime.strptime(text, "%Y-%m-%d").date()
            except ValueError:
                parsed = None
            # strptime also takes unpadded parts such as "2024-1-5".
            if parsed is None or parsed.isoformat() != text:
                raise FieldCoercionError(self.name, f"{self.label} must be a date (YYYY-MM-DD).")
            return text
        if text not in self.choices:
            allowed = ", ".join(self.choices)
            raise FieldCoercionError(self.name, f"{self.label} must be one of: {allowed}.")
        return text


@dataclass(frozen=True)
class EntitySchema:
    """Field layout and display names of one record type."""

    key: str
    display_name: str
    fields: Tuple[FieldSpec, ...] = field(default_factory=tuple)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def required_fields(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields if spec.required)

    def spec_for(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"{self.key} has no field {name!r}")

    def empty_draft(self) -> Draft:
        return {name: "" for name in self.field_names}

    def missing_required(self, draft: Mapping[str, str]) -> List[str]:
        """Return required field names whose draft value is blank."""
        return [
            name for name in self.required_fields if not (draft.get(name) or "").strip()
        ]

    def build_payload(self, draft: Mapping[str, str]) -> Record:
        """Build the outgoing create payload from a draft.

        Raises:
            FieldCoercionError: If a typed field cannot be converted.
        """
        return {spec.name: spec.coerce(draft.get(spec.name, "")) for spec in self.fields}

    def options_for(self, name: str) -> List[Dict[str, str]]:
        return [{"label": choice, "value": choice} for choice in self.spec_for(name).choices]


EXPENSE_CATEGORIES: Tuple[str, ...] = ("Travel", "Food", "Supplies", "Other")

CONTACT = EntitySchema(
    key="contact",
    display_name="Contact",
    fields=(
        FieldSpec("name", "Name", required=True),
        FieldSpec("email", "Email"),
        FieldSpec("phone", "Phone"),
    ),
)

EXPENSE = EntitySchema(
    key="expense",
    display_name="Expense",
    fields=(
        FieldSpec("name", "Name", required=True),
        FieldSpec("amount", "Amount", required=True, kind=FieldKind.DECIMAL),
        FieldSpec("expenseDate", "Date", required=True, kind=FieldKind.DATE),
        FieldSpec(
            "category",
            "Category",
            required=True,
            kind=FieldKind.CHOICE,
            choices=EXPENSE_CATEGORIES,
        ),
    ),
)
