"""Open command for editdispatch CLI."""

from __future__ import annotations

import click

from ..services.editors import open_files
from ..store import RegistryError
from ._common import EditDispatchCliError, get_app


@click.command(name="open")
@click.argument("files", nargs=-1, required=True)
@click.option(
    "-e",
    "--editor",
    "editor_name",
    default=None,
    help="Editor to use instead of the default",
)
@click.option(
    "-w",
    "--wait",
    is_flag=True,
    help="Run the editor in the foreground, one file after another",
)
@click.pass_context
def open_(
    ctx: click.Context, files: tuple[str, ...], editor_name: str | None, wait: bool
) -> None:
    """Open FILES with an editor.

    Failures for individual files are reported; the command fails only when
    no file could be opened.
    """

    app = get_app(ctx)
    try:
        result = open_files(app, files, editor_name, wait=wait)
    except RegistryError as exc:
        raise EditDispatchCliError(str(exc)) from exc

    for file_path in result.launched:
        click.echo(f"Opened {file_path} with {result.editor.name}")
    for file_path, error in result.failures:
        click.echo(f"Failed to open {file_path}: {error}", err=True)

    if result.all_failed:
        label = "file" if len(result.failures) == 1 else "files"
        raise EditDispatchCliError(
            f"Could not open {len(result.failures)} {label} with "
            f"'{result.editor.name}'."
        )


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(open_)
