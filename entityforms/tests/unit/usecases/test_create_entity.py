from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from entityforms.domain.entities import CONTACT, EXPENSE
from entityforms.domain.errors import RemoteCallError
from entityforms.usecases.create_entity import CreateEntity


class _RecordingPort:
    def __init__(self, *, error: Optional[Exception] = None) -> None:
        self.error = error
        self.payloads: List[Dict[str, Any]] = []

    def list_records(self) -> List[Dict[str, Any]]:
        return []

    def create_record(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return {"Id": "a00000000000000001", **payload}


def test_create_entity_sends_coerced_payload() -> None:
    port = _RecordingPort()
    uc = CreateEntity(EXPENSE, port)

    result = uc({"name": "Lunch", "amount": "12.50", "expenseDate": "2024-01-01", "category": "Food"})

    assert result.ok is True
    assert result.record is not None and result.record["Id"] == "a00000000000000001"
    assert port.payloads == [
        {"name": "Lunch", "amount": 12.5, "expenseDate": "2024-01-01", "category": "Food"}
    ]


def test_create_entity_maps_remote_failure() -> None:
    uc = CreateEntity(CONTACT, _RecordingPort(error=RemoteCallError("Duplicate email")))

    result = uc({"name": "Jane", "email": "j@x.com", "phone": ""})

    assert result.ok is False
    assert result.code == "CREATE_FAILED"
    assert result.message == "Duplicate email"


def test_create_entity_reports_coercion_failure_without_calling_port() -> None:
    port = _RecordingPort()
    uc = CreateEntity(EXPENSE, port)

    result = uc({"name": "Lunch", "amount": "abc", "expenseDate": "2024-01-01", "category": "Food"})

    assert result.ok is False
    assert result.code == "INVALID_FIELD"
    assert result.message == "Amount must be a number."
    assert port.payloads == []


def test_create_entity_reports_transport_errors_outside_the_api_hierarchy() -> None:
    error = requests.exceptions.ChunkedEncodingError("Connection broken: IncompleteRead")
    result = CreateEntity(CONTACT, _RecordingPort(error=error))({"name": "Jane"})

    assert result.ok is False
    assert result.code == "CREATE_FAILED"
    assert result.message == "Connection broken: IncompleteRead"
