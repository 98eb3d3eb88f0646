"""Statement import command."""

import click
from bankfeed.cli.account_resolution import resolve_account_or_exit
from bankfeed.cli.error_handling import handle_domain_error
from bankfeed.domain.account import AccountService
from bankfeed.domain.entities import ImportOptions, ReconcileConfig
from bankfeed.domain.errors import DomainError
from bankfeed.domain.file_import import FileImportService


@click.command("import")
@click.argument("statement_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--date-format",
    help="Date pattern for QIF files, e.g. MM/dd/yyyy or dd.MM.yy",
)
@click.option(
    "--import-notes/--no-import-notes",
    default=True,
    help="Keep memo text as transaction notes (default: on)",
)
@click.option(
    "--date-tolerance",
    type=int,
    default=0,
    envvar="BANKFEED_DATE_TOLERANCE",
    show_default=True,
    help="Days a bank date may differ from a hand-entered one",
)
@click.option(
    "--payee-threshold",
    type=float,
    default=80.0,
    envvar="BANKFEED_PAYEE_THRESHOLD",
    show_default=True,
    help="Minimum payee similarity (0-100) for matching hand-entered rows",
)
@click.pass_context
def import_statement(
    ctx,
    statement_file: str,
    account: str,
    date_format: str | None,
    import_notes: bool,
    date_tolerance: int,
    payee_threshold: float,
):
    """Import transactions from a QIF, OFX, QFX or CAMT.053 file.

    Examples:
        bankfeed import statement.ofx --account "Checking"
        bankfeed import export.qif --account 1 --date-format MM/dd/yyyy
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        config = ReconcileConfig(
            date_tolerance_days=date_tolerance, payee_threshold=payee_threshold
        )
        service = FileImportService(db, config)
        result = service.import_file(
            statement_file,
            account_id,
            ImportOptions(date_format=date_format, import_notes=import_notes),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if result.fatal:
        for error in result.errors:
            click.echo(f"Error: {error.message}", err=True)
        ctx.exit(1)

    click.echo("\nImport complete:")
    click.echo(f"  Added: {len(result.added)} transactions")
    click.echo(f"  Updated: {len(result.updated)} transactions")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error.message}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statement)
