"""Transaction commands."""

import click
from famfin.cli.account_resolution import resolve_account_or_exit
from famfin.cli.commands.category import KIND_CHOICE
from famfin.cli.error_handling import handle_domain_error
from famfin.domain.account import AccountService
from famfin.domain.category import CategoryService
from famfin.domain.entities import TransactionKind
from famfin.domain.errors import DomainError
from famfin.domain.transaction import TransactionService
from famfin.utils.date_parser import parse_user_date


@click.group()
def transaction_group():
    """Add and list transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--name", required=True, help="Transaction name")
@click.option("--amount", required=True, help="Positive amount (comma or dot decimals)")
@click.option("--type", "kind", type=KIND_CHOICE, required=True, help="Transaction type")
@click.option("--category", required=True, help="Category name or ID")
@click.option("--date", "date_str", default="today", help="Date (default: today)")
@click.option("--description", help="Optional description")
@click.pass_context
def add_transaction(ctx, account, name, amount, kind, category, date_str, description):
    """Add a single transaction and update the account balance.

    Examples:
        famfin transaction add --account "Conta Corrente" --name Mercado \\
            --amount 52,30 --type expense --category Alimentação
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        txn_date = parse_user_date(date_str)
    except ValueError as e:
        handle_domain_error(ctx, e)

    service = TransactionService(db)
    try:
        txn_id = service.add_transaction(
            workspace_id=ctx.obj["workspace_id"],
            user_id=ctx.obj["user_id"],
            account_id=account_id,
            name=name,
            amount=amount,
            kind=TransactionKind(kind.lower()),
            category=category,
            date=txn_date,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = service.get_transaction(txn_id)
    click.echo(f"Created transaction {txn_id}: {txn.name} {txn.amount:+.2f}")


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_transactions(ctx, account: str | None):
    """List transactions, newest first."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account) if account else None

    transactions = TransactionService(db).list_transactions(
        ctx.obj["workspace_id"], account_id=account_id
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    account_names = {acc.id: acc.name for acc in account_service.list_accounts(ctx.obj["workspace_id"])}
    category_names = {
        cat.id: cat.name for cat in CategoryService(db).list_categories(ctx.obj["workspace_id"])
    }

    click.echo(f"\n{'ID':>4}  {'Date':10}  {'Amount':>12}  {'Account':18}  {'Category':18}  Name")
    click.echo("-" * 90)
    for txn in transactions:
        click.echo(
            f"{txn.id:4d}  {txn.date.isoformat():10}  {txn.amount:12.2f}  "
            f"{account_names.get(txn.account_id, '?')[:18]:18}  "
            f"{category_names.get(txn.category_id, '-')[:18]:18}  {txn.name}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
