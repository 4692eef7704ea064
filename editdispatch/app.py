"""Application bootstrap and context container for editdispatch."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from .config import EditDispatchConfig, load_config
from .launcher import ProcessLauncher
from .models import Registry
from .plugins import SeedContext, build_settings_getter, load_seed_editors
from .store import ConfigStore, Seeder
from .storage import RegistryStorage


@dataclass(slots=True)
class AppContext:
    """Aggregates the loaded registry and the services operating on it."""

    config: EditDispatchConfig
    store: ConfigStore
    registry: Registry
    launcher: ProcessLauncher


def plugin_seeder(config: EditDispatchConfig) -> Seeder:
    """Return a seeder collecting first-run editors from the plugin hooks."""

    def seed():
        context = SeedContext(
            platform=sys.platform,
            path_exists=os.path.exists,
            get_settings=build_settings_getter(config),
        )
        return load_seed_editors(context)

    return seed


def bootstrap(
    config_path: Path | None = None,
    *,
    registry_path: Path | None = None,
    launcher: ProcessLauncher | None = None,
) -> AppContext:
    """Load settings, then load (or create) the registry they point at."""

    # Defer error mapping to the CLI, which knows how to present messages.
    config = load_config(config_path, registry_path=registry_path)

    store = ConfigStore(RegistryStorage(config.registry_path), plugin_seeder(config))
    registry = store.load()

    return AppContext(
        config=config,
        store=store,
        registry=registry,
        launcher=launcher if launcher is not None else ProcessLauncher(),
    )
