"""High-level editor workflows used by the CLI."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from ..app import AppContext
from ..launcher import LaunchFailedError
from ..models import EditorRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OpenResult:
    """Outcome of dispatching files to an editor."""

    editor: EditorRecord
    launched: list[str] = field(default_factory=list)
    failures: list[tuple[str, LaunchFailedError]] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        return bool(self.failures) and not self.launched


def resolve_editor(ctx: AppContext, editor_name: str | None = None) -> EditorRecord:
    """Return the named editor, or the default when no name is given."""

    if editor_name is not None:
        return ctx.store.get(ctx.registry, editor_name)  # type: ignore[return-value]
    return ctx.store.get_default(ctx.registry)


def open_files(
    ctx: AppContext,
    files: Sequence[str | Path],
    editor_name: str | None = None,
    *,
    wait: bool = False,
) -> OpenResult:
    """Launch the resolved editor once per file.

    A launch failure is recorded against its file and the remaining files are
    still processed.
    """

    editor = resolve_editor(ctx, editor_name)
    result = OpenResult(editor=editor)

    for file in files:
        file_path = str(file)
        args = [*editor.default_options, file_path]
        try:
            ctx.launcher.launch(editor.path, args, wait=wait)
        except LaunchFailedError as exc:
            logger.warning(
                "Could not open %s with '%s': %s", file_path, editor.name, exc
            )
            result.failures.append((file_path, exc))
            continue
        result.launched.append(file_path)

    return result


def add_editor(
    ctx: AppContext,
    name: str,
    path: str,
    description: str = "",
    options: Iterable[str] = (),
    make_default: bool = False,
) -> EditorRecord:
    """Validate the input and register a new editor."""

    name = name.strip()
    path = path.strip()
    if not name:
        raise ValueError("An editor name is required.")
    if not path:
        raise ValueError("An editor path is required.")

    record = EditorRecord(
        name=name,
        path=path,
        description=description.strip(),
        default_options=tuple(options),
    )
    return ctx.store.add(ctx.registry, record, make_default=make_default)


def list_editors(
    ctx: AppContext, name: str | None = None, *, default: bool = False
) -> list[EditorRecord]:
    """Return the named editor, the default editor, or every editor."""

    if name is not None and default:
        raise ValueError("Use only one of a name or the default filter.")
    if default:
        return [ctx.store.get_default(ctx.registry)]
    if name is not None:
        return [ctx.store.get(ctx.registry, name)]  # type: ignore[list-item]
    return ctx.store.get(ctx.registry)  # type: ignore[return-value]


def remove_editor(ctx: AppContext, name: str) -> EditorRecord | None:
    """Remove ``name``; returns the removed record or ``None`` if unknown."""

    return ctx.store.remove(ctx.registry, name)


def set_default_editor(ctx: AppContext, name: str) -> EditorRecord:
    return ctx.store.set_default(ctx.registry, name)
