"""Composition root: wire ports, use cases, viewmodels and controllers.

Must be called from inside a running event loop because each list cache
issues its first query on construction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from ..adapters.apex_rest import ApexRestEntityAdapter, ApexRestGreetingAdapter
from ..adapters.entity_mock import EntityServiceMock, GreetingMock
from ..domain.entities import CONTACT, EXPENSE, EntitySchema
from ..domain.ports import EntityServicePort, GreetingPort
from ..usecases.create_entity import CreateEntity
from ..usecases.echo_greeting import EchoGreeting
from ..usecases.list_entities import ListEntities
from ..viewmodels.form_vm import FormVM
from ..viewmodels.greeting_vm import GreetingVM
from ..viewmodels.settings_vm import SettingsVM
from .form_controller import FormController
from .greeting_controller import GreetingController
from .list_cache import ListCache

LOGGER = logging.getLogger(__name__)


@dataclass
class FormsRuntime:
    contacts: FormController
    expenses: FormController
    greeting: GreetingController

    def form_for(self, entity_key: str) -> FormController:
        forms = {"contact": self.contacts, "expense": self.expenses}
        try:
            return forms[entity_key]
        except KeyError:
            raise KeyError(f"Unknown entity: {entity_key!r}") from None

    async def wait_idle(self) -> None:
        await self.contacts.list_cache.wait_idle()
        await self.expenses.list_cache.wait_idle()


def build_ports(
    settings: SettingsVM,
) -> Tuple[Dict[str, EntityServicePort], GreetingPort]:
    """Create the record ports for the configured backend."""
    if settings.use_mock:
        LOGGER.info("Using in-memory record service")
        return (
            {
                CONTACT.key: EntityServiceMock(CONTACT),
                EXPENSE.key: EntityServiceMock(EXPENSE),
            },
            GreetingMock(),
        )

    if not settings.is_valid():
        raise ValueError("Settings are incomplete: an http(s) instance URL is required.")
    cfg = settings.config
    common = {
        "access_token": cfg.access_token or None,
        "request_timeout_s": cfg.request_timeout_s,
        "retries": cfg.retries,
    }
    LOGGER.info("Using Apex REST at %s", cfg.instance_url)
    return (
        {
            CONTACT.key: ApexRestEntityAdapter(cfg.instance_url, cfg.contact_resource, **common),
            EXPENSE.key: ApexRestEntityAdapter(cfg.instance_url, cfg.expense_resource, **common),
        },
        ApexRestGreetingAdapter(cfg.instance_url, cfg.greeting_resource, **common),
    )


def build_form(schema: EntitySchema, port: EntityServicePort) -> FormController:
    return FormController(
        vm=FormVM(schema),
        create=CreateEntity(schema, port),
        list_cache=ListCache(ListEntities(port), name=schema.key),
    )


def build_runtime(settings: SettingsVM) -> FormsRuntime:
    ports, greeting_port = build_ports(settings)
    return FormsRuntime(
        contacts=build_form(CONTACT, ports[CONTACT.key]),
        expenses=build_form(EXPENSE, ports[EXPENSE.key]),
        greeting=GreetingController(vm=GreetingVM(), echo=EchoGreeting(greeting_port)),
    )


__all__ = ["FormsRuntime", "build_form", "build_ports", "build_runtime"]
