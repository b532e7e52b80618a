"""
splitledger/cli/__init__.py

splitledger CLI: root Click command group.

This file is the sole entry point for the `splitledger` terminal command.
It is registered in pyproject.toml as:

    [project.scripts]
    splitledger = "splitledger.cli:cli"

Adding a new command:
    1. Create splitledger/cli/your_command.py with a @click.command()
    2. Import it here
    3. cli.add_command(your_command)
"""

from pathlib import Path
from typing import Optional

import click

from splitledger.audit import configure_logging
from splitledger.cli.context import LedgerContext
from splitledger.cli.entries import add_command, list_command, sum_command
from splitledger.cli.shared import (
    balances_command,
    settle_command,
    share_command,
    shares_command,
)
from splitledger.config import get_settings, validate_all_settings


@click.group()
@click.version_option(package_name="splitledger")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the ledger files (default: $SPLITLEDGER_DATA_DIR or ~/.config).",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    default=False,
    help="Log every audited step to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[Path], verbose: bool) -> None:
    """
    splitledger: personal expense ledger with shared-cost settlement.

    \b
    Simple entries:
      add       Add an entry
      list      List all entries
      sum       Print the total of all entries

    \b
    Shared expenses:
      share     Record who paid, for what, how much, for whom
      shares    List shared expenses with each payee's share
      balances  Show each participant's net position
      settle    Show (and optionally record) the settling transfers
    """
    checks = validate_all_settings()
    errors = [checks[f"{name}_error"] for name in ("storage", "app") if not checks[name]]
    if errors:
        raise click.ClickException("Invalid configuration: " + "; ".join(errors))

    settings = get_settings()
    app_settings = settings.app
    configure_logging(
        level="INFO" if verbose else app_settings.log_level,
        json_output=app_settings.log_json,
    )

    storage = settings.storage
    if data_dir is not None:
        storage = storage.model_copy(update={"data_dir": data_dir.expanduser()})

    ctx.obj = LedgerContext(
        entries_path=storage.entries_path,
        shared_entries_path=storage.shared_entries_path,
    )


cli.add_command(add_command)
cli.add_command(list_command)
cli.add_command(sum_command)
cli.add_command(share_command)
cli.add_command(shares_command)
cli.add_command(balances_command)
cli.add_command(settle_command)
