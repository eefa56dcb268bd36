"""Main CLI entry point."""

import logging

import click
from pocketledger.domain.ledger import LedgerService
from pocketledger.storage.factories import create_sqlite_store

# Import and register all commands at module level
from pocketledger.cli.commands import (
    bank,
    expense,
    movement,
    investment,
    tax,
    summary,
    maintenance,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETLEDGER_DB_PATH environment variable)",
    envvar="POCKETLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="POCKETLEDGER_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Pocketledger - Personal finance ledger.

    Track bank balances, expenses, movements, investments and taxes, and
    get daily and weekly spending suggestions for the rest of the month.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.call_on_close(store.disconnect)
        ctx.obj["store"] = store
        ctx.obj["ledger"] = LedgerService(store)


# Register all commands
bank.register_commands(cli)
expense.register_commands(cli)
movement.register_commands(cli)
investment.register_commands(cli)
tax.register_commands(cli)
summary.register_commands(cli)
maintenance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
