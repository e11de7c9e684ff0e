"""Category management commands."""

import click
from famfin.cli.error_handling import handle_domain_error
from famfin.domain.category import CategoryService
from famfin.domain.entities import TransactionKind
from famfin.domain.errors import DomainError

KIND_CHOICE = click.Choice([kind.value for kind in TransactionKind], case_sensitive=False)


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--type", "kind", type=KIND_CHOICE, help="Only list income or expense categories")
@click.pass_context
def list_categories(ctx, kind: str | None):
    """List categories of the workspace."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(
        ctx.obj["workspace_id"], kind=TransactionKind(kind.lower()) if kind else None
    )
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"ID: {cat.id:3d} | {cat.kind.value:7s} | {cat.name}")


@category_group.command("create")
@click.argument("name")
@click.option("--type", "kind", type=KIND_CHOICE, required=True, help="Category type")
@click.pass_context
def create_category(ctx, name: str, kind: str):
    """Create a new income or expense category."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(
            workspace_id=ctx.obj["workspace_id"], name=name, kind=TransactionKind(kind.lower())
        )
        click.echo(f"Created {kind.lower()} category '{name.strip()}' (ID: {category_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
