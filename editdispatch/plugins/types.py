"""Type definitions for editdispatch plugin contracts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol


class PluginSettingsGetter(Protocol):
    """Callable returning the ``[plugins.<id>]`` table of the settings file."""

    def __call__(
        self,
        plugin_id: str,
        *,
        default: Mapping[str, Any] | None = None,
    ) -> Mapping[str, Any]:  # pragma: no cover - Protocol
        ...


@dataclass(slots=True, frozen=True)
class SeedEditor:
    """Editor definition contributed by a plugin for first-run seeding."""

    name: str
    path: str
    description: str = ""
    default_options: tuple[str, ...] = ()
    make_default: bool = False


@dataclass(slots=True, frozen=True)
class SeedContext:
    """Information handed to ``seed_editors`` hook implementations."""

    platform: str
    path_exists: Callable[[str], bool]
    get_settings: PluginSettingsGetter
