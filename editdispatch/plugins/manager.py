"""Plugin manager for first-run seed providers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from functools import lru_cache

import pluggy

from ..models import normalize_name
from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE
from .spec import EditDispatchHookSpec
from .types import SeedContext, SeedEditor

logger = logging.getLogger(__name__)


class PluginRegistrationError(RuntimeError):
    """Raised when a plugin fails validation or contributes bad seeds."""


def iter_plugin_modules() -> tuple[object, ...]:
    """Return plugin modules bundled with editdispatch."""

    from .builtin import BUILTIN_PLUGINS

    return BUILTIN_PLUGINS


@lru_cache(maxsize=1)
def _build_plugin_manager() -> pluggy.PluginManager:
    manager = pluggy.PluginManager(PLUGIN_NAMESPACE)
    manager.add_hookspecs(EditDispatchHookSpec)

    for module in iter_plugin_modules():
        try:
            manager.register(module)
        except pluggy.PluginValidationError as exc:
            raise PluginRegistrationError(str(exc)) from exc

    loaded = manager.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
    if loaded:
        logger.debug("Loaded %d third-party seed plugin(s)", loaded)
    return manager


def get_plugin_manager() -> pluggy.PluginManager:
    """Return the cached plugin manager instance."""

    return _build_plugin_manager()


def reset_plugin_manager_cache() -> None:
    """Forget the cached manager so the next call re-registers plugins."""

    _build_plugin_manager.cache_clear()


def load_seed_editors(context: SeedContext) -> list[SeedEditor]:
    """Collect seed editors from every plugin, rejecting duplicate names."""

    seeds: dict[str, SeedEditor] = {}
    for seed in _iter_seeds(get_plugin_manager(), context):
        key = normalize_name(seed.name)
        if key in seeds:
            raise PluginRegistrationError(
                f"Seed editor '{seed.name}' is contributed by more than one plugin."
            )
        seeds[key] = seed
    return list(seeds.values())


def _iter_seeds(
    manager: pluggy.PluginManager, context: SeedContext
) -> Iterator[SeedEditor]:
    # Hooks may return a single SeedEditor or any iterable of them.
    for returned in manager.hook.seed_editors(context=context):
        if not returned:
            continue
        if isinstance(returned, SeedEditor):
            yield returned
            continue
        if not isinstance(returned, Iterable) or isinstance(returned, (str, bytes)):
            raise PluginRegistrationError(
                "seed_editors must return a SeedEditor or an iterable of them."
            )
        for item in returned:
            if not isinstance(item, SeedEditor):
                raise PluginRegistrationError(
                    f"seed_editors returned {type(item).__name__}, not SeedEditor."
                )
            yield item


__all__ = [
    "PluginRegistrationError",
    "get_plugin_manager",
    "iter_plugin_modules",
    "load_seed_editors",
    "reset_plugin_manager_cache",
]
