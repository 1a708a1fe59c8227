"""Use case for the request/response greeting call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from entityforms.domain.ports import GreetingPort
from entityforms.usecases.error_mapping import map_api_error


@dataclass(frozen=True)
class EchoResult:
    ok: bool
    text: str = ""
    message: Optional[str] = None


@dataclass
class EchoGreeting:
    port: GreetingPort

    def __call__(self, name: str) -> EchoResult:
        try:
            text = self.port.echo(name)
        except Exception as exc:
            mapped = map_api_error(exc, default_code="ECHO_FAILED")
            return EchoResult(ok=False, message=mapped.message)
        return EchoResult(ok=True, text="" if text is None else str(text))


__all__ = ["EchoGreeting", "EchoResult"]
