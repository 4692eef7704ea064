"""Add-editor command for editdispatch CLI."""

from __future__ import annotations

import click

from ..services.editors import add_editor as add_editor_workflow
from ..store import RegistryError
from ..storage import StorageError
from ._common import EditDispatchCliError, echo_records, get_app


@click.command(name="add-editor")
@click.option("-n", "--name", required=True, help="Unique editor name")
@click.option("-p", "--path", required=True, help="Executable path or command")
@click.option("-d", "--description", default="", help="Free-text description")
@click.option(
    "--default",
    "make_default",
    is_flag=True,
    help="Make this editor the default",
)
@click.option(
    "-o",
    "--option",
    "--options",
    "options",
    multiple=True,
    help="Argument always passed before the file (repeatable)",
)
@click.pass_context
def add_editor(
    ctx: click.Context,
    name: str,
    path: str,
    description: str,
    make_default: bool,
    options: tuple[str, ...],
) -> None:
    """Register a new editor."""

    app = get_app(ctx)
    try:
        record = add_editor_workflow(
            app,
            name,
            path,
            description=description,
            options=options,
            make_default=make_default,
        )
    except (ValueError, RegistryError, StorageError) as exc:
        raise EditDispatchCliError(str(exc)) from exc

    click.echo(f"Added editor '{record.name}'")
    echo_records([record])


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(add_editor)
