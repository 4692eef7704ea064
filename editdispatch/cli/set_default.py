"""Set-default command for editdispatch CLI."""

from __future__ import annotations

import click

from ..services.editors import set_default_editor
from ..store import RegistryError
from ..storage import StorageError
from ._common import EditDispatchCliError, get_app


@click.command(name="set-default")
@click.argument("name")
@click.pass_context
def set_default(ctx: click.Context, name: str) -> None:
    """Make the editor NAME the default."""

    app = get_app(ctx)
    try:
        record = set_default_editor(app, name)
    except (RegistryError, StorageError) as exc:
        raise EditDispatchCliError(str(exc)) from exc

    click.echo(f"Default editor set to '{record.name}'")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(set_default)
