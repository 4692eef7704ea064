"""Info command for editdispatch CLI."""

from __future__ import annotations

import click

from ..config import EditDispatchConfig
from ._common import get_app


@click.command(name="info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Display registry information and current configuration."""

    app = get_app(ctx)
    config: EditDispatchConfig = app.config

    settings_display = str(config.source_path) if config.source_path else "(none)"
    if config.source_path is not None and not config.source_path.exists():
        settings_display += " (not created)"

    click.echo("editdispatch registry info:\n")
    click.echo(f"  Settings file : {settings_display}")
    click.echo(f"  Registry file : {config.registry_path}")
    click.echo(f"  Editors       : {len(app.registry)}")
    click.echo(f"  Default       : {app.registry.default_name or '(none)'}")
    click.echo(f"  Log level     : {config.log_level or 'WARNING'}")


def register(cli: click.Group) -> None:
    """Register the command with the root CLI group."""

    cli.add_command(info)
