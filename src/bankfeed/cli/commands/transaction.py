"""Transaction management commands."""

import click
from bankfeed.cli.account_resolution import resolve_account_or_exit
from bankfeed.cli.error_handling import handle_domain_error
from bankfeed.domain.account import AccountService
from bankfeed.domain.errors import DomainError
from bankfeed.domain.transaction import TransactionService
from bankfeed.utils.amount_parser import amount_to_integer, format_amount, parse_amount
from bankfeed.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--amount", required=True, help="Transaction amount (e.g., 123.45 or -123.45)"
)
@click.option("--payee", help="Payee")
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    date: str,
    amount: str,
    payee: str | None,
    notes: str | None,
):
    """Add a transaction by hand.

    A later import of the matching bank entry updates this row instead of
    adding a second one.

    Examples:
        bankfeed transaction add --account 1 --date 2024-01-15 --amount -50.00 --payee "Grocery store"
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = amount_to_integer(parse_amount(amount))
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        transaction_id = transaction_service.create_transaction(
            account_id=account_id,
            date=txn_date,
            amount=txn_amount,
            payee=payee,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.option("--start", "start_date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end", "end_date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        start = parse_date(start_date) if start_date else None
        end = parse_date(end_date) if end_date else None
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    transactions = transaction_service.list_transactions(
        account_id=account_id, start_date=start, end_date=end
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':>5}  {'Date':10}  {'Amount':>12}  Payee")
    click.echo("-" * 60)
    for txn in transactions:
        marker = "*" if txn.user_edited else " "
        click.echo(
            f"{txn.id:5d}  {txn.date.isoformat()}  {format_amount(txn.amount):>12} {marker}{txn.payee or ''}"
        )


@transaction_group.command("edit")
@click.argument("transaction_id", type=int)
@click.option("--payee", help="New payee, or empty string to clear")
@click.option("--notes", help="New notes, or empty string to clear")
@click.option("--category", help="New category, or empty string to clear")
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: int,
    payee: str | None,
    notes: str | None,
    category: str | None,
):
    """Edit a transaction.

    Edited transactions keep their payee and notes on later imports.

    Examples:
        bankfeed transaction edit 12 --payee "Corner Shop"
        bankfeed transaction edit 12 --notes ""  # Clear notes
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    try:
        changed = transaction_service.edit_transaction(
            transaction_id, payee=payee, notes=notes, category=category
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if changed:
        click.echo(f"Updated transaction {transaction_id}")
    else:
        click.echo(f"Transaction {transaction_id} unchanged")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.pass_context
def delete_transaction(ctx, transaction_id: int):
    """Delete a transaction."""
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    try:
        transaction_service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
