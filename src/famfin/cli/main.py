"""Main CLI entry point."""

import logging

import click
from famfin.database.factories import create_sqlite_database, create_staging_store
from famfin.cli.error_handling import handle_domain_error
from famfin.domain.errors import DomainError
from famfin.domain.workspace import WorkspaceService

# Import and register all commands at module level
from famfin.cli.commands import (
    account,
    category,
    import_cmd,
    transaction,
    workspace,
)

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FAMFIN_DB_PATH environment variable)",
    envvar="FAMFIN_DB_PATH",
)
@click.option(
    "--staging-dir",
    type=click.Path(file_okay=False),
    help="Directory for staged imports (overrides FAMFIN_STAGING_DIR environment variable)",
    envvar="FAMFIN_STAGING_DIR",
)
@click.option(
    "--workspace",
    "workspace_name",
    default="default",
    show_default=True,
    help="Workspace to operate on, created on first use",
    envvar="FAMFIN_WORKSPACE",
)
@click.option(
    "--user",
    "user_id",
    default="local",
    show_default=True,
    help="User recorded on new transactions",
    envvar="FAMFIN_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    staging_dir: str | None,
    workspace_name: str,
    user_id: str,
    verbose: bool,
):
    """Famfin - Personal and family finance tracker.

    Track accounts, categories and transactions, and bulk-import
    transactions from CSV files with a review step before anything is saved.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)

        try:
            workspace = WorkspaceService(db).get_or_create(workspace_name)
        except DomainError as e:
            handle_domain_error(ctx, e)

        ctx.obj["db"] = db
        ctx.obj["workspace_id"] = workspace.id
        ctx.obj["user_id"] = user_id
        ctx.obj["staging"] = create_staging_store(
            namespace=f"{workspace.id}-{user_id}", staging_dir=staging_dir
        )


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
import_cmd.register_commands(cli)
transaction.register_commands(cli)
workspace.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
