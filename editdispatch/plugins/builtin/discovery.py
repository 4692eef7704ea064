"""Built-in plugin registering editors found at well-known install locations."""

from __future__ import annotations

import os
from typing import NamedTuple

from .. import SeedContext, SeedEditor, hookimpl

PLUGIN_ID = "discovery"


class Candidate(NamedTuple):
    name: str
    description: str
    paths: tuple[str, ...]
    options: tuple[str, ...] = ()


WINDOWS_CANDIDATES: tuple[Candidate, ...] = (
    Candidate(
        "notepad++",
        "Notepad++",
        (
            r"%ProgramFiles%\Notepad++\notepad++.exe",
            r"%ProgramFiles(x86)%\Notepad++\notepad++.exe",
        ),
    ),
    Candidate(
        "vscode",
        "Visual Studio Code",
        (
            r"%LOCALAPPDATA%\Programs\Microsoft VS Code\Code.exe",
            r"%ProgramFiles%\Microsoft VS Code\Code.exe",
        ),
    ),
    Candidate(
        "sublime",
        "Sublime Text",
        (r"%ProgramFiles%\Sublime Text\sublime_text.exe",),
    ),
)

MACOS_CANDIDATES: tuple[Candidate, ...] = (
    Candidate(
        "vscode",
        "Visual Studio Code",
        ("/Applications/Visual Studio Code.app/Contents/Resources/app/bin/code",),
    ),
    Candidate(
        "sublime",
        "Sublime Text",
        ("/Applications/Sublime Text.app/Contents/SharedSupport/bin/subl",),
    ),
    Candidate("textedit", "TextEdit", ("/usr/bin/open",), ("-e",)),
)

POSIX_CANDIDATES: tuple[Candidate, ...] = (
    Candidate("vscode", "Visual Studio Code", ("/usr/bin/code", "/snap/bin/code")),
    Candidate(
        "sublime",
        "Sublime Text",
        ("/usr/bin/subl", "/opt/sublime_text/sublime_text"),
    ),
    Candidate("gedit", "GNOME Text Editor", ("/usr/bin/gedit",)),
    Candidate("kate", "KDE Advanced Text Editor", ("/usr/bin/kate",)),
)


def candidates_for(platform: str) -> tuple[Candidate, ...]:
    if platform == "win32":
        return WINDOWS_CANDIDATES
    if platform == "darwin":
        return MACOS_CANDIDATES
    return POSIX_CANDIDATES


@hookimpl
def seed_editors(context: SeedContext) -> tuple[SeedEditor, ...]:
    """Register the first existing install location of each known editor."""

    settings = context.get_settings(PLUGIN_ID)
    if not settings.get("enabled", True):
        return ()

    found: list[SeedEditor] = []
    for candidate in candidates_for(context.platform):
        for raw_path in candidate.paths:
            path = os.path.expandvars(raw_path)
            if context.path_exists(path):
                found.append(
                    SeedEditor(
                        name=candidate.name,
                        path=path,
                        description=candidate.description,
                        default_options=candidate.options,
                    )
                )
                break
    return tuple(found)
