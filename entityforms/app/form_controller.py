"""Controller that submits one list-and-create form.

It owns a :class:`FormVM` (draft + status line), the create use case, and the
list cache it refreshes after every successful create. Remote calls are
blocking and run in a worker thread; the controller itself runs on the event
loop, so the only suspension point is the create call.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..domain.entities import Draft, EntitySchema, Record
from ..usecases.create_entity import CreateEntity, CreateResult
from ..usecases.error_mapping import FALLBACK_ERROR_MESSAGE
from ..viewmodels.form_vm import FormVM
from ..viewmodels.status_format import StatusMessage, error_text, success_text
from .list_cache import ListCache, ListState


class SubmitOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    BLOCKED = "blocked"
    BUSY = "busy"


class FormController:
    """Validation-gated submit with refresh-after-create for one entity."""

    def __init__(
        self,
        *,
        vm: FormVM,
        create: CreateEntity,
        list_cache: ListCache,
    ) -> None:
        if create.schema is not vm.schema:
            raise ValueError("FormController: viewmodel and use case use different schemas")
        self.vm = vm
        self.create = create
        self.list_cache = list_cache
        self._submitting = False
        self._log = logging.getLogger(__name__)

    @property
    def schema(self) -> EntitySchema:
        return self.vm.schema

    @property
    def draft(self) -> Draft:
        return self.vm.draft

    @property
    def status(self) -> StatusMessage:
        return self.vm.status

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def records(self) -> Tuple[Record, ...]:
        return self.list_cache.records

    @property
    def list_state(self) -> ListState:
        return self.list_cache.state

    # ---------- UI intents ----------
    def update_field(self, field_name: str, raw_value: str) -> None:
        self.vm.update_field(field_name, raw_value)

    def can_submit(self) -> bool:
        return not self._submitting and self.vm.can_submit()

    def options_for(self, field_name: str) -> List[Dict[str, str]]:
        return self.vm.options_for(field_name)

    async def submit(self) -> SubmitOutcome:
        """Create a record from the current draft.

        Success resets the draft, sets the success status, and starts exactly
        one list refresh without waiting for it. Failure sets the error status
        and leaves the draft as typed. Never raises for remote failures.
        """
        if self._submitting:
            self._log.debug("Ignoring %s submit: another submit is in flight", self.schema.key)
            return SubmitOutcome.BUSY
        if not self.vm.can_submit():
            missing = self.schema.missing_required(self.vm.draft)
            self._log.debug("Blocked %s submit, missing: %s", self.schema.key, missing)
            return SubmitOutcome.BLOCKED

        self._submitting = True
        try:
            self._log.debug("Submitting %s", self.schema.key)
            result = await asyncio.to_thread(self.create, self.vm.snapshot())
        except Exception:
            self._log.exception("Unexpected error while submitting %s", self.schema.key)
            result = CreateResult.failure("CREATE_FAILED", "")
        finally:
            self._submitting = False
        return self._apply_result(result)

    # ---------- Outcome handling ----------
    def _apply_result(self, result: CreateResult) -> SubmitOutcome:
        if result.ok:
            self.vm.set_status(StatusMessage.success(success_text(self.schema.display_name)))
            self.vm.reset_draft()
            self._log.info("%s created%s", self.schema.display_name, self._id_suffix(result.record))
            self.list_cache.refresh()
            return SubmitOutcome.SUCCEEDED

        message = (result.message or "").strip() or FALLBACK_ERROR_MESSAGE
        self._log.warning("Create %s failed (%s): %s", self.schema.key, result.code, message)
        self.vm.set_status(StatusMessage.error(error_text(self.schema.key, message)))
        return SubmitOutcome.FAILED

    @staticmethod
    def _id_suffix(record: Optional[Record]) -> str:
        if record and record.get("Id"):
            return f" ({record['Id']})"
        return ""


__all__ = ["FormController", "SubmitOutcome"]
