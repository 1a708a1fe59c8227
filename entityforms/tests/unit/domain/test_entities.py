from __future__ import annotations

import pytest

from entityforms.domain.entities import CONTACT, EXPENSE, FieldKind
from entityforms.domain.errors import FieldCoercionError


def _expense_draft(**overrides: str) -> dict:
    draft = {
        "name": "Lunch",
        "amount": "12.50",
        "expenseDate": "2024-01-01",
        "category": "Food",
    }
    draft.update(overrides)
    return draft


def test_required_fields_per_schema() -> None:
    assert CONTACT.required_fields == ("name",)
    assert EXPENSE.required_fields == ("name", "amount", "expenseDate", "category")


def test_empty_draft_has_every_field_blank() -> None:
    assert CONTACT.empty_draft() == {"name": "", "email": "", "phone": ""}
    assert EXPENSE.empty_draft() == {"name": "", "amount": "", "expenseDate": "", "category": ""}


def test_missing_required_treats_whitespace_as_empty() -> None:
    assert CONTACT.missing_required({"name": "   ", "email": "j@x.com"}) == ["name"]
    assert EXPENSE.missing_required(_expense_draft(amount="")) == ["amount"]
    assert EXPENSE.missing_required(_expense_draft()) == []


def test_build_payload_coerces_amount_and_keeps_text_fields() -> None:
    payload = EXPENSE.build_payload(_expense_draft())

    assert payload == {
        "name": "Lunch",
        "amount": 12.5,
        "expenseDate": "2024-01-01",
        "category": "Food",
    }
    assert isinstance(payload["amount"], float)


def test_build_payload_contact_sends_empty_optional_fields() -> None:
    payload = CONTACT.build_payload({"name": "Jane", "email": "j@x.com", "phone": ""})
    assert payload == {"name": "Jane", "email": "j@x.com", "phone": ""}
    assert "Id" not in payload


@pytest.mark.parametrize(
    ("overrides", "field_name"),
    [
        ({"amount": "twelve"}, "amount"),
        ({"expenseDate": "01/01/2024"}, "expenseDate"),
        ({"amount": "nan"}, "amount"),
        ({"amount": "-inf"}, "amount"),
        ({"amount": "1e400"}, "amount"),
        ({"expenseDate": "20240101"}, "expenseDate"),
        ({"expenseDate": "2024-W01-1"}, "expenseDate"),
        ({"expenseDate": "2024-1-5"}, "expenseDate"),
        ({"expenseDate": "2024-02-30"}, "expenseDate"),
        ({"category": "Lodging"}, "category"),
    ],
)
def test_build_payload_rejects_unparseable_values(overrides: dict, field_name: str) -> None:
    with pytest.raises(FieldCoercionError) as excinfo:
        EXPENSE.build_payload(_expense_draft(**overrides))
    assert excinfo.value.field_name == field_name
    assert excinfo.value.message


def test_category_options_follow_fixed_order() -> None:
    assert EXPENSE.spec_for("category").kind is FieldKind.CHOICE
    assert EXPENSE.options_for("category") == [
        {"label": "Travel", "value": "Travel"},
        {"label": "Food", "value": "Food"},
        {"label": "Supplies", "value": "Supplies"},
        {"label": "Other", "value": "Other"},
    ]


def test_unknown_field_lookup_raises() -> None:
    with pytest.raises(KeyError):
        CONTACT.spec_for("amount")
