"""Built-in plugin seeding Notepad as the default editor."""

from __future__ import annotations

from .. import SeedContext, SeedEditor, hookimpl


@hookimpl
def seed_editors(context: SeedContext) -> tuple[SeedEditor, ...]:
    """Register Notepad and make it the default editor."""

    path = "notepad.exe" if context.platform == "win32" else "notepad"
    return (
        SeedEditor(
            name="notepad",
            path=path,
            description="Windows Notepad",
            make_default=True,
        ),
    )
