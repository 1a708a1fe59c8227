from __future__ import annotations

import pytest

from entityforms.domain.entities import CONTACT, EXPENSE
from entityforms.viewmodels.form_vm import FormVM
from entityforms.viewmodels.status_format import Severity, StatusMessage


@pytest.mark.parametrize("schema", [CONTACT, EXPENSE])
def test_update_field_stores_raw_value(schema) -> None:
    vm = FormVM(schema)
    for name in schema.field_names:
        vm.update_field(name, f" raw {name} 1.50 ")
        assert vm.draft[name] == f" raw {name} 1.50 "


def test_update_field_rejects_unknown_field() -> None:
    vm = FormVM(CONTACT)
    with pytest.raises(KeyError):
        vm.update_field("amount", "1")


def test_can_submit_contact_only_needs_name() -> None:
    vm = FormVM(CONTACT)
    assert vm.can_submit() is False
    vm.update_field("email", "j@x.com")
    assert vm.can_submit() is False
    vm.update_field("name", "Jane")
    assert vm.can_submit() is True
    vm.update_field("name", "")
    assert vm.can_submit() is False


def test_can_submit_expense_blocked_by_empty_amount() -> None:
    vm = FormVM(EXPENSE)
    vm.update_field("name", "Lunch")
    vm.update_field("expenseDate", "2024-01-01")
    vm.update_field("category", "Food")
    assert vm.can_submit() is False
    vm.update_field("amount", "12.50")
    assert vm.can_submit() is True


def test_reset_draft_and_status() -> None:
    vm = FormVM(CONTACT, draft={"name": "Jane"})
    assert vm.draft == {"name": "Jane", "email": "", "phone": ""}

    vm.set_status(StatusMessage.error("Error adding contact: x"))
    vm.reset_draft()

    assert vm.draft == CONTACT.empty_draft()
    assert vm.status.severity is Severity.ERROR


def test_snapshot_is_a_copy() -> None:
    vm = FormVM(CONTACT)
    vm.update_field("name", "Jane")
    snap = vm.snapshot()
    vm.update_field("name", "Joan")
    assert snap["name"] == "Jane"


def test_options_for_category() -> None:
    values = [opt["value"] for opt in FormVM(EXPENSE).options_for("category")]
    assert values == ["Travel", "Food", "Supplies", "Other"]
