"""Shared helpers for editdispatch CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

import click
import yaml

from ..app import AppContext, bootstrap
from ..config import ConfigError
from ..models import EditorRecord
from ..plugins import PluginRegistrationError
from ..store import RegistryError
from ..storage import StorageError

CONTEXT_SETTINGS: dict[str, Any] = {"help_option_names": ["-h", "--help"]}
OUTPUT_FORMATS = ("text", "json", "yaml")


class EditDispatchCliError(click.ClickException):
    """Shared Click exception wrapper for CLI failures."""


def get_app(ctx: click.Context) -> AppContext:
    """Return a cached AppContext for the current CLI invocation."""

    app: AppContext | None = ctx.obj.get("app")
    if app is not None:
        return app

    config_path_opt: Path | None = ctx.obj.get("config_path")
    registry_path_opt: Path | None = ctx.obj.get("registry_path")

    try:
        app = bootstrap(config_path_opt, registry_path=registry_path_opt)
    except (ConfigError, StorageError, RegistryError, PluginRegistrationError) as exc:
        raise EditDispatchCliError(str(exc)) from exc

    ctx.obj["app"] = app
    return app


def format_record(record: EditorRecord) -> str:
    marker = "*" if record.is_default else " "
    line = f"{marker} {record.name:<12}  {record.path}"
    if record.default_options:
        line += f"  [options: {' '.join(record.default_options)}]"
    if record.description:
        line += f"\n    {record.description}"
    return line


def echo_records(records: Iterable[EditorRecord], output_format: str = "text") -> None:
    """Print records in one of :data:`OUTPUT_FORMATS`."""

    records = list(records)
    if output_format == "json":
        click.echo(json.dumps([r.to_dict() for r in records], indent=2))
    elif output_format == "yaml":
        click.echo(
            yaml.safe_dump(
                [r.to_dict() for r in records], sort_keys=False, allow_unicode=True
            ),
            nl=False,
        )
    else:
        for record in records:
            click.echo(format_record(record))
