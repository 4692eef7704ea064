"""Registry operations: load, persist and the mutators that keep it consistent."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable

from .models import EditorRecord, Registry, normalize_name
from .plugins.types import SeedEditor
from .storage import RegistryStorage

logger = logging.getLogger(__name__)

Seeder = Callable[[], Iterable[SeedEditor]]


class RegistryError(RuntimeError):
    """Base error for registry lookups and mutations."""


class DuplicateNameError(RegistryError):
    """Raised when adding an editor whose name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Editor '{name}' already exists.")
        self.name = name


class UnknownEditorError(RegistryError):
    """Raised when an editor name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Editor '{name}' is not registered.")
        self.name = name


class NoDefaultConfiguredError(RegistryError):
    """Raised when the default editor is requested from an empty registry."""

    def __init__(self) -> None:
        super().__init__("No default editor configured; add an editor first.")


class ConfigStore:
    """Owns loading and saving of the registry and enforces its invariants.

    Every mutator works on a copy of the registry it is given, writes the copy
    through :class:`RegistryStorage` and only then updates the caller's
    registry. A failed precondition or a failed write leaves it untouched.
    """

    def __init__(self, storage: RegistryStorage, seeder: Seeder | None = None) -> None:
        self.storage = storage
        self._seeder = seeder

    def load(self) -> Registry:
        """Read the stored registry, creating and seeding it on first run."""

        if self.storage.exists():
            registry = self.storage.read()
            logger.debug(
                "Loaded %d editor(s) from %s", len(registry), self.storage.path
            )
            return registry

        registry = Registry()
        seeds = list(self._seeder()) if self._seeder is not None else []
        for seed in seeds:
            record = EditorRecord(
                name=seed.name,
                path=seed.path,
                description=seed.description,
                default_options=tuple(seed.default_options),
            )
            self._insert(registry, record, make_default=seed.make_default)

        self.persist(registry)
        logger.info(
            "Created registry at %s with %d seeded editor(s)",
            self.storage.path,
            len(registry),
        )
        return registry

    def persist(self, registry: Registry) -> None:
        self.storage.write(registry)

    def add(
        self, registry: Registry, record: EditorRecord, make_default: bool = False
    ) -> EditorRecord:
        """Insert ``record`` and persist; returns the stored record."""

        staged = registry.copy()
        stored = self._insert(staged, record, make_default=make_default)
        self._commit(registry, staged)
        logger.info("Added editor '%s' (%s)", stored.name, stored.path)
        return stored

    def remove(self, registry: Registry, name: str) -> EditorRecord | None:
        """Delete ``name`` if present and persist.

        Removing the default promotes the first remaining editor (by
        normalized name); removing the last editor clears the default.
        Returns the removed record, or ``None`` when nothing matched.
        """

        key = normalize_name(name)
        if key not in registry.editors:
            logger.debug("Editor '%s' not registered; nothing to remove", name)
            return None

        staged = registry.copy()
        removed = staged.editors.pop(key)
        if removed.is_default:
            remaining = staged.records()
            if remaining:
                self._mark_default(staged, remaining[0])
                logger.info(
                    "Default editor '%s' removed; '%s' is now the default",
                    removed.name,
                    remaining[0].name,
                )
            else:
                staged.default_name = ""

        self._commit(registry, staged)
        logger.info("Removed editor '%s'", removed.name)
        return removed

    def set_default(self, registry: Registry, name: str) -> EditorRecord:
        if registry.find(name) is None:
            raise UnknownEditorError(name)

        staged = registry.copy()
        record = staged.find(name)
        self._mark_default(staged, record)
        self._commit(registry, staged)
        logger.info("Default editor set to '%s'", record.name)
        return record

    def get(
        self, registry: Registry, name: str | None = None
    ) -> EditorRecord | list[EditorRecord]:
        """Return the named record, or every record sorted by name."""

        if name is None:
            return registry.records()
        record = registry.find(name)
        if record is None:
            raise UnknownEditorError(name)
        return record

    def get_default(self, registry: Registry) -> EditorRecord:
        record = registry.find(registry.default_name) if registry.default_name else None
        if record is None:
            raise NoDefaultConfiguredError()
        return record

    def _insert(
        self, registry: Registry, record: EditorRecord, *, make_default: bool
    ) -> EditorRecord:
        key = normalize_name(record.name)
        if key in registry.editors:
            raise DuplicateNameError(record.name)

        was_empty = not registry.editors
        stored = replace(
            record, default_options=tuple(record.default_options), is_default=False
        )
        registry.editors[key] = stored
        if make_default or was_empty:
            self._mark_default(registry, stored)
        return stored

    @staticmethod
    def _mark_default(registry: Registry, record: EditorRecord) -> None:
        for other in registry.editors.values():
            other.is_default = other is record
        registry.default_name = record.name

    def _commit(self, registry: Registry, staged: Registry) -> None:
        # The caller's registry only changes once the write has succeeded.
        self.persist(staged)
        registry.default_name = staged.default_name
        registry.editors = staged.editors
