"""CSV import commands.

Importing is two steps: ``import stage`` parses a file and keeps the result
in the staging area; ``import status``, ``import map``, ``import confirm`` and
``import cancel`` all work from that staged batch.
"""

from pathlib import Path

import click
from famfin.cli.account_resolution import resolve_account_or_exit
from famfin.cli.commands.category import KIND_CHOICE
from famfin.cli.error_handling import handle_domain_error
from famfin.domain.account import AccountService
from famfin.domain.csv_import import CSVImportService
from famfin.domain.csv_template import TEMPLATE_FILENAME, template_content
from famfin.domain.entities import ImportBatch, TransactionKind
from famfin.domain.errors import DomainError, NoImportInProgressError


def _service(ctx) -> CSVImportService:
    return CSVImportService(ctx.obj["db"], ctx.obj["staging"])


def _echo_errors(batch: ImportBatch) -> None:
    if not batch.errors:
        return
    click.echo(f"\nErrors ({len(batch.errors)}):")
    for index, error in enumerate(batch.errors, start=1):
        click.echo(f"  {index}. {error.message}")


def _echo_missing(batch: ImportBatch, category_names: dict[int, str]) -> None:
    if not batch.missing_categories:
        return
    click.echo(f"\nMissing categories ({len(batch.missing_categories)}):")
    for missing in batch.missing_categories:
        if missing.mapped_to_id is None:
            target = "(not mapped)"
        else:
            target = f"-> {category_names.get(missing.mapped_to_id, missing.mapped_to_id)}"
        click.echo(f"  {missing.name} [{missing.kind.value}] {target}")


def _echo_summary(batch: ImportBatch) -> None:
    click.echo(f"  Account: {batch.selected_account_display_name}")
    click.echo(f"  Transactions: {len(batch.transactions)}")
    click.echo(f"  Errors: {len(batch.errors)}")
    click.echo(f"  Missing categories: {len(batch.missing_categories)}")
    projected = batch.account_balance_deltas.get(batch.selected_account_id)
    if projected is not None:
        click.echo(f"  Projected balance: {projected:.2f}")


@click.group()
def import_group():
    """Import transactions from CSV files."""
    pass


@import_group.command("template")
@click.argument("output", required=False, type=click.Path(dir_okay=False))
def write_template(output: str | None):
    """Write an example CSV file to OUTPUT (default: template_transacoes.csv)."""
    path = Path(output or TEMPLATE_FILENAME)
    path.write_text(template_content(), encoding="utf-8")
    click.echo(f"Template written to {path}")


@import_group.command("stage")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--account", required=True, help="Account name or ID to import into")
@click.pass_context
def stage_import(ctx, csv_file: str, account: str):
    """Parse a CSV file and stage it for review.

    Any previously staged import is replaced.
    """
    account_id = resolve_account_or_exit(ctx, AccountService(ctx.obj["db"]), account)
    service = _service(ctx)

    try:
        batch = service.stage_file(ctx.obj["workspace_id"], account_id, csv_file)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport staged:")
    _echo_summary(batch)
    _echo_errors(batch)
    _echo_missing(batch, {})

    if not batch.transactions:
        click.echo("\nNothing to import.")
    elif not batch.is_commit_ready():
        click.echo("\nMap the missing categories with 'famfin import map' before confirming.")
    else:
        click.echo("\nRun 'famfin import confirm' to save these transactions.")


@import_group.command("status")
@click.pass_context
def import_status(ctx):
    """Show the staged import."""
    service = _service(ctx)
    try:
        batch = service.pending()
    except NoImportInProgressError as e:
        handle_domain_error(ctx, e)

    categories = service.category_service.list_categories(ctx.obj["workspace_id"])
    category_names = {cat.id: cat.name for cat in categories}

    click.echo(f"\nStaged import{f' from {batch.source_name}' if batch.source_name else ''}:")
    _echo_summary(batch)
    _echo_errors(batch)
    _echo_missing(batch, category_names)

    if batch.transactions:
        click.echo(f"\n{'Row':>4}  {'Date':10}  {'Amount':>12}  {'Type':7}  {'Category':20}  Name")
        click.echo("-" * 80)
        effective = service.effective_categories(batch)
        for txn, category in zip(batch.transactions, effective):
            label = category or f"? {txn.original_category_name}"
            click.echo(
                f"{txn.row_number:4d}  {txn.date.isoformat():10}  {txn.amount:12.2f}  "
                f"{txn.kind.value:7}  {label[:20]:20}  {txn.name}"
            )


@import_group.command("map")
@click.argument("category_name")
@click.option("--type", "kind", type=KIND_CHOICE, required=True, help="Type of the rows using CATEGORY_NAME")
@click.option("--to", "target", required=True, help="Existing category name or ID")
@click.pass_context
def map_category(ctx, category_name: str, kind: str, target: str):
    """Map a missing CATEGORY_NAME of the staged import to an existing category."""
    service = _service(ctx)
    try:
        changed = service.map_category(
            ctx.obj["workspace_id"], category_name, TransactionKind(kind.lower()), target
        )
        batch = service.pending()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not changed:
        click.echo(f"No missing category '{category_name}' ({kind.lower()}) in the staged import.")
        return

    click.echo(f"Mapped '{category_name}' ({kind.lower()}) to '{target}'")
    remaining = [m for m in batch.missing_categories if m.mapped_to_id is None]
    if remaining:
        click.echo(f"{len(remaining)} missing categor{'y' if len(remaining) == 1 else 'ies'} left to map.")
    else:
        click.echo("All categories mapped. Run 'famfin import confirm' to save.")


@import_group.command("confirm")
@click.pass_context
def confirm_import(ctx):
    """Save the staged transactions and update the account balance."""
    service = _service(ctx)
    try:
        result = service.confirm(ctx.obj["workspace_id"], ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nImportação concluída! {result.imported} transações adicionadas.")
    for account_id, delta in result.balance_deltas.items():
        account = service.account_service.get_account(account_id)
        click.echo(f"  {account.name}: {delta:+.2f} (balance {account.balance:.2f})")
    skipped = result.warnings + result.dropped
    if skipped:
        click.echo(f"\nRows not imported ({len(skipped)}):", err=True)
        for warning in skipped:
            click.echo(f"  {warning}", err=True)


@import_group.command("cancel")
@click.pass_context
def cancel_import(ctx):
    """Discard the staged import without saving anything."""
    _service(ctx).cancel()
    click.echo("Staged import discarded.")


def register_commands(cli):
    """Register import commands with main CLI."""
    cli.add_command(import_group, name="import")
