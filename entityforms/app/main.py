"""Command-line front end for the record forms.

Each ``add`` command drives the same controller a form view would: options
become field-change events, the submit is refused while required fields are
empty, and the refreshed list is printed once the post-create refresh lands.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Iterable, List, Optional, Sequence

from ..adapters.storage_local import StorageLocal
from ..domain.entities import Record
from ..viewmodels.settings_vm import SettingsVM
from ..viewmodels.status_format import Severity
from ..utils import logging as logging_utils
from .form_controller import FormController, SubmitOutcome
from .list_cache import ListState
from .runtime import FormsRuntime, build_runtime

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BLOCKED = 2

_ENTITY_COMMANDS = {"contacts": "contact", "expenses": "expense"}


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI args for the record forms."""
    parser = argparse.ArgumentParser(prog="entityforms", description="List and create records.")
    parser.add_argument("--settings-dir", default=os.getcwd(), help="Directory holding user_settings.json.")
    parser.add_argument("--instance-url", help="Org instance URL (overrides settings).")
    parser.add_argument("--token", help="Access token (overrides settings).")
    parser.add_argument("--mock", action="store_true", help="Use the in-memory record service.")
    parser.add_argument("--save-settings", action="store_true", help="Persist the effective settings.")
    commands = parser.add_subparsers(dest="command", required=True)

    contacts = commands.add_parser("contacts", help="Contact records.")
    contact_actions = contacts.add_subparsers(dest="action", required=True)
    contact_actions.add_parser("list")
    add_contact = contact_actions.add_parser("add")
    add_contact.add_argument("--name", default="")
    add_contact.add_argument("--email", default="")
    add_contact.add_argument("--phone", default="")

    expenses = commands.add_parser("expenses", help="Expense records.")
    expense_actions = expenses.add_subparsers(dest="action", required=True)
    expense_actions.add_parser("list")
    add_expense = expense_actions.add_parser("add")
    add_expense.add_argument("--name", default="")
    add_expense.add_argument("--amount", default="")
    add_expense.add_argument("--date", dest="expenseDate", default="")
    add_expense.add_argument("--category", default="")

    hello = commands.add_parser("hello", help="Request a greeting.")
    hello.add_argument("name")
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace, storage: StorageLocal) -> SettingsVM:
    settings = SettingsVM()
    settings.apply_dict(storage.load_user_settings())
    settings.apply_env(os.environ)
    overrides = {}
    if args.instance_url:
        overrides["instance_url"] = args.instance_url
    if args.token:
        overrides["access_token"] = args.token
    if args.mock:
        overrides["use_mock"] = True
    if overrides:
        settings.apply_dict(overrides)
    return settings


def format_records(records: Iterable[Record]) -> List[str]:
    return [json.dumps(record, ensure_ascii=False, sort_keys=True) for record in records]


def _print_list(form: FormController) -> int:
    snapshot = form.list_cache.current()
    if snapshot.state is ListState.ERRORED:
        print(f"Error loading {form.schema.key} list: {snapshot.error}", file=sys.stderr)
        return EXIT_FAILED
    for line in format_records(snapshot.records):
        print(line)
    return EXIT_OK


async def _run_add(form: FormController, args: argparse.Namespace) -> int:
    for field_name in form.schema.field_names:
        form.update_field(field_name, getattr(args, field_name, "") or "")
    if not form.can_submit():
        missing = ", ".join(form.schema.missing_required(form.draft))
        print(f"Cannot add {form.schema.key}: missing {missing}", file=sys.stderr)
        return EXIT_BLOCKED

    # Let the initial list load settle before the create.
    await form.list_cache.wait_idle()
    outcome = await form.submit()
    print(form.status.text)
    if outcome is not SubmitOutcome.SUCCEEDED or form.status.severity is Severity.ERROR:
        return EXIT_FAILED
    await form.list_cache.wait_idle()
    return _print_list(form)


async def _run(args: argparse.Namespace, settings: SettingsVM) -> int:
    runtime: FormsRuntime = build_runtime(settings)
    try:
        if args.command == "hello":
            runtime.greeting.update_name(args.name)
            outcome = await runtime.greeting.submit()
            print(runtime.greeting.greeting)
            return EXIT_OK if outcome is SubmitOutcome.SUCCEEDED else EXIT_FAILED

        form = runtime.form_for(_ENTITY_COMMANDS[args.command])
        if args.action == "add":
            return await _run_add(form, args)
        await form.list_cache.wait_idle()
        return _print_list(form)
    finally:
        await runtime.wait_idle()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entrypoint for the record forms."""
    logging_utils.configure_root()
    args = _parse_args(argv)
    storage = StorageLocal(root_dir=args.settings_dir)
    try:
        settings = load_settings(args, storage)
    except ValueError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        return EXIT_FAILED
    if args.save_settings:
        storage.save_user_settings(settings.to_dict())
        LOGGER.info("Saved settings to %s", storage.settings_path)
    if not settings.is_valid():
        print("Settings are incomplete: set --instance-url or use --mock.", file=sys.stderr)
        return EXIT_FAILED
    return asyncio.run(_run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
