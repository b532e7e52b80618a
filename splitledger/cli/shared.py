"""
splitledger/cli/shared.py

Shared expense commands: who paid, for what, how much, for whom.

Usage:
    splitledger share                      Prompt for everything (Tab completes)
    splitledger share --payer alice --description dinner --amount 60 --payees "alice bob"
    splitledger shares                     Every expense with each payee's share
    splitledger balances                   Net position per participant
    splitledger settle                     Transfers that settle everyone up
    splitledger settle --record            ...and record them as paid
"""

from typing import Optional

import click

from splitledger.cli.completion import PrefixCompletion, completion_enabled
from splitledger.cli.context import LedgerContext, echo_skipped, handle_errors, pass_ledger
from splitledger.models.money import format_minor_units
from splitledger.settlement import split_shares


def _prompt(text: str, completion: PrefixCompletion, whole_line: bool = False) -> str:
    with completion_enabled(completion, whole_line=whole_line):
        return click.prompt(text, type=str)


def _signed(amount: int) -> str:
    return f"+{format_minor_units(amount)}" if amount > 0 else format_minor_units(amount)


@click.command(name="share")
@click.option("--payer", default=None, help="Who paid.")
@click.option("--description", default=None, help="What it was for.")
@click.option("--amount", default=None, help="How much, e.g. 12.50.")
@click.option("--payees", default=None, help='Who it was for, space-separated, e.g. "alice bob".')
@pass_ledger
@handle_errors
def share_command(
    ledger: LedgerContext,
    payer: Optional[str],
    description: Optional[str],
    amount: Optional[str],
    payees: Optional[str],
) -> None:
    """Record a shared expense, prompting for anything not given."""
    flow = ledger.shared_flow()

    if None in (payer, description, payees):
        history = flow.list_expenses()
        echo_skipped(flow.skipped)
        people = PrefixCompletion(flow.known_participants(history))
        descriptions = PrefixCompletion(flow.known_descriptions(history))
    else:
        people = descriptions = PrefixCompletion([])

    if payer is None:
        payer = _prompt("Who paid?", people)
    if description is None:
        description = _prompt("For what?", descriptions, whole_line=True)
    if amount is None:
        amount = click.prompt("How much?", type=str)
    if payees is None:
        payees = _prompt("For whom?", people)

    event, result = flow.add_expense(payer, description, amount, payees)
    for issue in result.warnings:
        click.echo(f"warning: {issue.message}", err=True)

    click.echo(f"Added {event.description}: {event.payer} paid {event.amount_display}")


@click.command(name="shares")
@pass_ledger
@handle_errors
def shares_command(ledger: LedgerContext) -> None:
    """List shared expenses with each payee's share."""
    flow = ledger.shared_flow()
    events = flow.list_expenses()
    echo_skipped(flow.skipped)

    for event in events:
        shares = split_shares(event.amount, event.payees)
        click.echo(event.description)
        click.echo(f"<- {event.payer}\t{event.amount_display}")
        for payee in event.payees:
            click.echo(f"-> {payee}\t{format_minor_units(shares[payee])}")


@click.command(name="balances")
@pass_ledger
@handle_errors
def balances_command(ledger: LedgerContext) -> None:
    """Show what each participant is owed (+) or owes (-)."""
    flow = ledger.shared_flow()
    balances = flow.balances()
    echo_skipped(flow.skipped)

    for name, balance in balances.items():
        click.echo(f"{name}\t{_signed(balance)}")


@click.command(name="settle")
@click.option(
    "--record",
    is_flag=True,
    default=False,
    help="Append the transfers to the ledger as paid, closing all balances.",
)
@pass_ledger
@handle_errors
def settle_command(ledger: LedgerContext, record: bool) -> None:
    """Show the transfers that settle every balance."""
    flow = ledger.shared_flow()
    report = flow.settle(record=record)
    echo_skipped(flow.skipped)

    if report.is_settled:
        click.echo("All settled up.")
        return

    for transfer in report.transfers:
        click.echo(f"{transfer.sender} -> {transfer.recipient}\t{transfer.amount_display}")
    if report.recorded:
        click.echo(f"Recorded {len(report.transfers)} closing records.")
