"""Account management commands."""

from decimal import Decimal, InvalidOperation

import click
from famfin.cli.error_handling import handle_domain_error
from famfin.domain.account import AccountService
from famfin.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--balance", default="0", help="Opening balance (default: 0)")
@click.pass_context
def create_account(ctx, name: str, balance: str):
    """Create a new account.

    Examples:
        famfin account create "Conta Corrente"
        famfin account create "Poupança" --balance 1500.00
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        opening = Decimal(balance.replace(",", ".", 1))
        if not opening.is_finite():
            raise InvalidOperation(balance)
    except InvalidOperation:
        click.echo(f"Error: Invalid balance '{balance}'", err=True)
        ctx.exit(1)

    try:
        account_id = service.create_account(
            workspace_id=ctx.obj["workspace_id"], name=name, balance=opening
        )
        click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts of the workspace."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(ctx.obj["workspace_id"])
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:25s} | Balance: {acc.balance:>12.2f}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
