"""
splitledger/cli/entries.py

Simple ledger commands: one amount and one description per entry.

Usage:
    splitledger add 12.50 "coffee beans"
    splitledger list
    splitledger sum
"""

import click

from splitledger.cli.context import LedgerContext, echo_skipped, handle_errors, pass_ledger
from splitledger.models.money import format_minor_units


@click.command(name="add")
@click.argument("amount")
@click.argument("description")
@pass_ledger
@handle_errors
def add_command(ledger: LedgerContext, amount: str, description: str) -> None:
    """Add an entry."""
    entry = ledger.entry_flow().add_entry(amount, description)
    click.echo(f"Added {entry.amount_display}\t{entry.description}")


@click.command(name="list")
@pass_ledger
@handle_errors
def list_command(ledger: LedgerContext) -> None:
    """List all entries."""
    flow = ledger.entry_flow()
    entries = flow.list_entries()
    echo_skipped(flow.skipped)

    for entry in entries:
        click.echo(f"{entry.amount_display}\t{entry.description}")


@click.command(name="sum")
@pass_ledger
@handle_errors
def sum_command(ledger: LedgerContext) -> None:
    """Print the total of all entries."""
    flow = ledger.entry_flow()
    total = flow.total()
    echo_skipped(flow.skipped)

    click.echo(format_minor_units(total))
