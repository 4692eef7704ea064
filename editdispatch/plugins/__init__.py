"""editdispatch plugin infrastructure based on pluggy."""

from __future__ import annotations

from ._markers import ENTRY_POINT_GROUP, PLUGIN_NAMESPACE, hookimpl, hookspec
from .config import build_settings_getter
from .manager import (
    PluginRegistrationError,
    get_plugin_manager,
    load_seed_editors,
    reset_plugin_manager_cache,
)
from .types import PluginSettingsGetter, SeedContext, SeedEditor

__all__ = [
    "ENTRY_POINT_GROUP",
    "PLUGIN_NAMESPACE",
    "PluginRegistrationError",
    "PluginSettingsGetter",
    "SeedContext",
    "SeedEditor",
    "build_settings_getter",
    "get_plugin_manager",
    "hookimpl",
    "hookspec",
    "load_seed_editors",
    "reset_plugin_manager_cache",
]
