"""Hook specifications for editdispatch plugins."""

from __future__ import annotations

from collections.abc import Iterable

from ._markers import hookspec
from .types import SeedContext, SeedEditor


class EditDispatchHookSpec:
    """Collection of pluggy hook specifications."""

    @hookspec
    def seed_editors(self, context: SeedContext) -> Iterable[SeedEditor]:
        """Return editors to register when the registry is created on first run."""
