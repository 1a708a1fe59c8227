from __future__ import annotations

import asyncio
import logging

from ..usecases.echo_greeting import EchoGreeting, EchoResult
from ..usecases.error_mapping import FALLBACK_ERROR_MESSAGE
from ..viewmodels.greeting_vm import GreetingVM
from .form_controller import SubmitOutcome


class GreetingController:
    """Request/response variant of the form: one name in, one greeting out."""

    def __init__(self, *, vm: GreetingVM, echo: EchoGreeting) -> None:
        self.vm = vm
        self.echo = echo
        self._submitting = False
        self._log = logging.getLogger(__name__)

    @property
    def greeting(self) -> str:
        return self.vm.greeting

    def update_name(self, value: str) -> None:
        self.vm.update_name(value)

    async def submit(self) -> SubmitOutcome:
        if self._submitting:
            return SubmitOutcome.BUSY
        self._submitting = True
        self.vm.clear()
        try:
            result = await asyncio.to_thread(self.echo, self.vm.name)
        except Exception:
            self._log.exception("Unexpected error while requesting greeting")
            result = EchoResult(ok=False)
        finally:
            self._submitting = False

        if result.ok:
            self.vm.show(result.text)
            return SubmitOutcome.SUCCEEDED
        message = (result.message or "").strip() or FALLBACK_ERROR_MESSAGE
        self._log.warning("Greeting failed: %s", message)
        self.vm.show(f"Error: {message}")
        return SubmitOutcome.FAILED


__all__ = ["GreetingController"]
