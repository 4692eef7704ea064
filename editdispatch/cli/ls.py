"""List-editors command for editdispatch CLI."""

from __future__ import annotations

import click

from ..services.editors import list_editors as list_editors_workflow
from ..store import RegistryError
from ._common import OUTPUT_FORMATS, EditDispatchCliError, echo_records, get_app


@click.command(name="list-editors")
@click.option("-n", "--name", default=None, help="Show only this editor")
@click.option(
    "--default",
    "default_only",
    is_flag=True,
    help="Show only the default editor (mutually exclusive with --name)",
)
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="text",
    show_default=True,
    help="Output format",
)
@click.pass_context
def list_editors(
    ctx: click.Context, name: str | None, default_only: bool, output_format: str
) -> None:
    """List registered editors; the default is marked with '*'."""

    if name is not None and default_only:
        raise EditDispatchCliError("Use only one of --name or --default.")

    app = get_app(ctx)
    try:
        records = list_editors_workflow(app, name, default=default_only)
    except RegistryError as exc:
        raise EditDispatchCliError(str(exc)) from exc

    if not records and output_format == "text":
        click.echo("No editors registered.")
        return
    echo_records(records, output_format)


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(list_editors)
