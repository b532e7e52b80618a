"""
splitledger/cli/context.py

Per-invocation state shared by every command, plus the single place
where ledger errors are turned into messages and exit codes.

Exit codes:
    0  Success
    1  Any error (invalid input, unreadable ledger, unbalanced ledger)
"""

import functools
from pathlib import Path

import click

from splitledger.audit import AuditLogger
from splitledger.orchestrator import EntryLedgerFlow, SharedExpenseFlow
from splitledger.services.storage import (
    CorruptRecordError,
    CsvEntryStorage,
    CsvExpenseStorage,
    StorageError,
)
from splitledger.settlement import SettlementError
from splitledger.validation import EntryValidationError


class LedgerContext:
    """
    Resolved paths and shared services for one CLI invocation.

    Paths are resolved once at startup and handed to the stores here;
    nothing below the CLI reads configuration.
    """

    def __init__(self, entries_path: Path, shared_entries_path: Path):
        self.entries_path = entries_path
        self.shared_entries_path = shared_entries_path
        self.audit_logger = AuditLogger()

    def entry_flow(self) -> EntryLedgerFlow:
        return EntryLedgerFlow(
            CsvEntryStorage(self.entries_path),
            audit_logger=self.audit_logger,
        )

    def shared_flow(self) -> SharedExpenseFlow:
        return SharedExpenseFlow(
            CsvExpenseStorage(self.shared_entries_path),
            audit_logger=self.audit_logger,
        )


pass_ledger = click.make_pass_decorator(LedgerContext)


def echo_skipped(skipped: list[CorruptRecordError]) -> None:
    """Warn on stderr about every corrupt record that was skipped."""
    for error in skipped:
        click.echo(
            f"warning: skipped corrupt record at line {error.line_number}: {error.reason}",
            err=True,
        )


def handle_errors(command):
    """Map ledger errors to a message on stderr and a non-zero exit."""

    @functools.wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except EntryValidationError as e:
            for issue in e.issues:
                click.echo(f"error: {issue.field}: {issue.message}", err=True)
                if issue.suggested_fix:
                    click.echo(f"       {issue.suggested_fix}", err=True)
            raise click.ClickException("Nothing was recorded.")
        except StorageError as e:
            raise click.ClickException(str(e))
        except SettlementError as e:
            raise click.ClickException(f"{e}. The ledger needs checking.")

    return wrapper
