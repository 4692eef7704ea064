"""editdispatch CLI package."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import click

from ..config import ConfigError, load_config
from ..logging_config import level_for, setup_logging
from . import add, config_cmd, info, ls, open_cmd, remove, set_default
from ._common import CONTEXT_SETTINGS, EditDispatchCliError

__all__ = ["cli", "main", "EditDispatchCliError"]


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-c",
    "--config",
    "config_path_opt",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to settings TOML file.",
)
@click.option(
    "-r",
    "--registry",
    "registry_path_opt",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to the editor registry file.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase log output (repeatable).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path_opt: Path | None,
    registry_path_opt: Path | None,
    verbose: int,
) -> None:
    """Manage a registry of editors and open files with them."""

    ctx.ensure_object(dict)
    invoked = ctx.invoked_subcommand

    if invoked is None:
        click.echo(ctx.command.get_help(ctx))
        ctx.exit(0)

    configured_level = None
    # The config command must still work when the settings file is broken.
    if invoked != "config":
        try:
            configured_level = load_config(config_path_opt).log_level
        except ConfigError as exc:
            raise EditDispatchCliError(str(exc)) from exc
    setup_logging(level_for(verbose, configured_level))

    ctx.obj["config_path"] = config_path_opt
    ctx.obj["registry_path"] = registry_path_opt


for register_command in (
    add.register,
    ls.register,
    remove.register,
    set_default.register,
    open_cmd.register,
    info.register,
    config_cmd.register,
):
    register_command(cli)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(argv) if argv is not None else None
    try:
        result = cli.main(args=args, prog_name="edd", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except SystemExit as exc:
        return int(exc.code or 0)
    return result if isinstance(result, int) else 0
