"""Workspace commands."""

import click
from famfin.domain.workspace import WorkspaceService


@click.group()
def workspace_group():
    """Inspect workspaces."""
    pass


@workspace_group.command("list")
@click.pass_context
def list_workspaces(ctx):
    """List workspaces, marking the current one."""
    service = WorkspaceService(ctx.obj["db"])
    for ws in service.list_workspaces():
        marker = "*" if ws.id == ctx.obj["workspace_id"] else " "
        click.echo(f"{marker} ID: {ws.id:3d} | {ws.name}")


def register_commands(cli):
    """Register workspace commands with main CLI."""
    cli.add_command(workspace_group, name="workspace")
