"""Peewee-backed persistence layer for the editor registry."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from peewee import (
    BooleanField,
    DatabaseError,
    Model,
    SqliteDatabase,
    TextField,
)

from .models import EditorRecord, Registry, normalize_name

SCHEMA_VERSION = 1
TABLE_EDITORS = "editors"
TABLE_META = "registry_meta"

META_SCHEMA_VERSION = "schema_version"
META_DEFAULT_NAME = "default_name"

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when reading or writing the registry file fails."""


class CorruptConfigError(StorageError):
    """Raised when the registry file exists but cannot be deserialized."""


class PersistError(StorageError):
    """Raised when the registry cannot be written to disk."""


class StorageDatabase(SqliteDatabase):
    """SqliteDatabase configured for per-call connection lifetimes."""

    def __init__(self, path: Path) -> None:
        super().__init__(str(path), check_same_thread=False)


class StorageModel(Model):
    """Base model bound to the storage database."""

    class Meta:
        database = SqliteDatabase(None)


class MetaEntry(StorageModel):
    """Key/value pairs describing the registry as a whole."""

    key = TextField(primary_key=True)
    value = TextField(null=False)

    class Meta:
        table_name = TABLE_META


class EditorRow(StorageModel):
    """Peewee model representing one stored editor record."""

    name_key = TextField(primary_key=True)
    name = TextField(null=False)
    path = TextField(null=False)
    description = TextField(default="", null=False)
    # JSON array of strings
    default_options = TextField(default="[]", null=False)
    is_default = BooleanField(default=False, null=False)

    class Meta:
        table_name = TABLE_EDITORS


MODELS = (MetaEntry, EditorRow)


class RegistryStorage:
    """Serialize a :class:`Registry` to a single SQLite file and back."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._database = StorageDatabase(self.path)

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Registry:
        """Load the registry stored at :attr:`path`.

        Raises
        ------
        CorruptConfigError
            If the file is not a registry database or its content breaks the
            registry invariants.
        """

        logger.debug("Reading registry from %s", self.path)
        try:
            with self._binding():
                missing = [
                    model._meta.table_name
                    for model in MODELS
                    if not model.table_exists()
                ]
                if missing:
                    raise CorruptConfigError(
                        f"Registry file {self.path} is missing tables: "
                        f"{', '.join(missing)}"
                    )
                meta = {entry.key: entry.value for entry in MetaEntry.select()}
                rows = list(EditorRow.select())
        except DatabaseError as exc:
            raise CorruptConfigError(
                f"Registry file {self.path} is unreadable: {exc}"
            ) from exc

        self._check_schema_version(meta.get(META_SCHEMA_VERSION))

        registry = Registry(default_name=meta.get(META_DEFAULT_NAME, ""))
        for row in rows:
            record = EditorRecord(
                name=row.name,
                path=row.path,
                description=row.description,
                default_options=self._decode_options(row),
                is_default=bool(row.is_default),
            )
            if row.name_key in registry.editors:  # pragma: no cover - primary key
                raise CorruptConfigError(f"Duplicate editor '{row.name}' in registry.")
            registry.editors[row.name_key] = record

        problems = registry.invariant_violations()
        if problems:
            raise CorruptConfigError(
                f"Registry file {self.path} is inconsistent: {'; '.join(problems)}"
            )
        return registry

    def write(self, registry: Registry) -> None:
        """Replace the stored registry with ``registry`` in one transaction."""

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistError(f"Failed to create registry directory: {exc}") from exc

        rows = [
            {
                "name_key": normalize_name(record.name),
                "name": record.name,
                "path": record.path,
                "description": record.description,
                "default_options": json.dumps(list(record.default_options)),
                "is_default": record.is_default,
            }
            for record in registry.editors.values()
        ]
        meta = [
            {"key": META_SCHEMA_VERSION, "value": str(SCHEMA_VERSION)},
            {"key": META_DEFAULT_NAME, "value": registry.default_name},
        ]

        logger.debug("Writing %d editor(s) to %s", len(rows), self.path)
        try:
            with self._binding():
                with self._database.atomic():
                    self._database.create_tables(MODELS, safe=True)
                    EditorRow.delete().execute()
                    if rows:
                        EditorRow.insert_many(rows).execute()
                    MetaEntry.replace_many(meta).execute()
        except (DatabaseError, OSError) as exc:
            raise PersistError(
                f"Failed to write registry to {self.path}: {exc}"
            ) from exc

    def _check_schema_version(self, raw: str | None) -> None:
        if raw is None:
            raise CorruptConfigError(
                f"Registry file {self.path} has no schema version."
            )
        try:
            version = int(raw)
        except ValueError:
            raise CorruptConfigError(
                f"Registry file {self.path} has an invalid schema version: {raw!r}"
            ) from None
        if version != SCHEMA_VERSION:
            raise CorruptConfigError(
                f"Registry file {self.path} uses schema version {version}; "
                f"this release reads version {SCHEMA_VERSION}."
            )

    def _decode_options(self, row: EditorRow) -> tuple[str, ...]:
        try:
            options = json.loads(row.default_options)
        except json.JSONDecodeError:
            raise CorruptConfigError(
                f"Editor '{row.name}' has malformed default options."
            ) from None
        if not isinstance(options, list) or not all(
            isinstance(item, str) for item in options
        ):
            raise CorruptConfigError(
                f"Editor '{row.name}' default options must be a list of strings."
            )
        return tuple(options)

    @contextmanager
    def _binding(self) -> Iterator[None]:
        with self._database.connection_context():
            with self._database.bind_ctx(MODELS):
                yield
