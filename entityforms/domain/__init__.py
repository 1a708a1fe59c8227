"""Domain package exports for record schemas, ports and errors."""

from .entities import (
    CONTACT,
    EXPENSE,
    EXPENSE_CATEGORIES,
    Draft,
    EntitySchema,
    FieldKind,
    FieldSpec,
    Record,
)
from .errors import FieldCoercionError, RemoteCallError
from .ports import EntityServicePort, GreetingPort, UseCaseError

__all__ = [
    "CONTACT",
    "EXPENSE",
    "EXPENSE_CATEGORIES",
    "Draft",
    "EntitySchema",
    "EntityServicePort",
    "FieldCoercionError",
    "FieldKind",
    "FieldSpec",
    "GreetingPort",
    "Record",
    "RemoteCallError",
    "UseCaseError",
]
