"""Main CLI entry point."""

import click
from bankfeed.database.factories import create_sqlite_database
from bankfeed.logging_setup import configure_logging

# Import and register all commands at module level
from bankfeed.cli.commands import (
    account,
    import_cmd,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BANKFEED_DB_PATH environment variable)",
    envvar="BANKFEED_DB_PATH",
)
@click.option(
    "--log-level",
    help="Log level such as DEBUG or INFO (default: WARNING)",
    envvar="BANKFEED_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Bankfeed - bank statement importer.

    Import QIF, OFX, QFX and CAMT.053 statements into a local ledger.
    Re-importing the same file never creates duplicates, and entries you
    typed in by hand are matched to their bank counterparts.
    """
    ctx.ensure_object(dict)

    try:
        configure_logging(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level")

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
import_cmd.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
