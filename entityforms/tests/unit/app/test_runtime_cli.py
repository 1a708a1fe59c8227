from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from entityforms.adapters.apex_rest import ApexRestEntityAdapter, ApexRestGreetingAdapter
from entityforms.adapters.entity_mock import EntityServiceMock
from entityforms.app.main import EXIT_BLOCKED, EXIT_FAILED, EXIT_OK, main
from entityforms.app.runtime import build_ports, build_runtime
from entityforms.viewmodels.settings_vm import SettingsVM


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for suffix in ("INSTANCE_URL", "ACCESS_TOKEN", "REQUEST_TIMEOUT_S", "RETRIES", "MOCK"):
        monkeypatch.delenv(f"ENTITYFORMS_{suffix}", raising=False)


def test_build_ports_uses_apex_rest_for_configured_org() -> None:
    settings = SettingsVM()
    settings.apply_dict(
        {
            "instance_url": "https://org.example.com",
            "access_token": "tok",
            "expense_resource": "spend",
        }
    )

    ports, greeting = build_ports(settings)

    assert isinstance(ports["contact"], ApexRestEntityAdapter)
    assert ports["expense"].resource == "spend"
    assert ports["expense"].session.access_token == "tok"
    assert isinstance(greeting, ApexRestGreetingAdapter)


def test_build_ports_rejects_incomplete_settings() -> None:
    with pytest.raises(ValueError):
        build_ports(SettingsVM())


def test_runtime_loads_lists_on_construction() -> None:
    settings = SettingsVM()
    settings.apply_dict({"use_mock": True})

    async def scenario():
        runtime = build_runtime(settings)
        await runtime.wait_idle()
        return runtime

    runtime = asyncio.run(scenario())

    assert runtime.form_for("contact") is runtime.contacts
    assert isinstance(runtime.contacts.create.port, EntityServiceMock)
    assert runtime.contacts.create.port.list_calls == 1
    assert runtime.expenses.create.port.list_calls == 1
    with pytest.raises(KeyError):
        runtime.form_for("invoice")


def test_cli_add_contact_prints_status_and_refreshed_list(tmp_path: Path, capsys) -> None:
    code = main(
        [
            "--mock",
            "--settings-dir",
            str(tmp_path),
            "contacts",
            "add",
            "--name",
            "Jane",
            "--email",
            "j@x.com",
        ]
    )

    out_lines = capsys.readouterr().out.strip().splitlines()
    assert code == EXIT_OK
    assert out_lines[0] == "Contact added successfully!"
    record = json.loads(out_lines[1])
    assert record["name"] == "Jane"
    assert record["email"] == "j@x.com"
    assert record["Id"].startswith("003")


def test_cli_add_expense_blocked_when_required_fields_missing(tmp_path: Path, capsys) -> None:
    code = main(["--mock", "--settings-dir", str(tmp_path), "expenses", "add", "--name", "Lunch"])

    assert code == EXIT_BLOCKED
    assert "missing amount, expenseDate, category" in capsys.readouterr().err


def test_cli_add_expense_reports_invalid_category(tmp_path: Path, capsys) -> None:
    code = main(
        [
            "--mock",
            "--settings-dir",
            str(tmp_path),
            "expenses",
            "add",
            "--name",
            "Lunch",
            "--amount",
            "12.50",
            "--date",
            "2024-01-01",
            "--category",
            "Lodging",
        ]
    )

    assert code == EXIT_FAILED
    assert capsys.readouterr().out.startswith("Error adding expense: Category must be one of")


def test_cli_hello(tmp_path: Path, capsys) -> None:
    code = main(["--mock", "--settings-dir", str(tmp_path), "hello", "John Doe"])

    assert code == EXIT_OK
    assert capsys.readouterr().out.strip() == "Hello, John Doe!"


def test_cli_requires_instance_url(tmp_path: Path, capsys) -> None:
    code = main(["--settings-dir", str(tmp_path), "contacts", "list"])

    assert code == EXIT_FAILED
    assert "instance-url" in capsys.readouterr().err


def test_cli_save_settings(tmp_path: Path) -> None:
    code = main(
        [
            "--mock",
            "--save-settings",
            "--instance-url",
            "https://org.example.com/",
            "--settings-dir",
            str(tmp_path),
            "contacts",
            "list",
        ]
    )

    assert code == EXIT_OK
    saved = json.loads((tmp_path / "user_settings.json").read_text(encoding="utf-8"))
    assert saved["instance_url"] == "https://org.example.com"
    assert saved["use_mock"] is True
