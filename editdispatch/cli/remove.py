"""Remove-editor command for editdispatch CLI."""

from __future__ import annotations

import click

from ..services.editors import remove_editor as remove_editor_workflow
from ..storage import StorageError
from ._common import EditDispatchCliError, get_app


@click.command(name="remove-editor")
@click.argument("name")
@click.pass_context
def remove_editor(ctx: click.Context, name: str) -> None:
    """Remove the editor NAME. Unknown names are ignored."""

    app = get_app(ctx)
    try:
        removed = remove_editor_workflow(app, name)
    except StorageError as exc:
        raise EditDispatchCliError(str(exc)) from exc

    if removed is None:
        click.echo(f"Editor '{name}' is not registered; nothing removed.")
        return

    click.echo(f"Removed editor '{removed.name}'")
    if app.registry.default_name:
        click.echo(f"Default editor: {app.registry.default_name}")
    else:
        click.echo("No editors left; no default editor configured.")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(remove_editor)
