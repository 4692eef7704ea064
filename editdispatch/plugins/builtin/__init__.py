"""Built-in editdispatch plugins."""

from __future__ import annotations

from . import discovery, notepad

BUILTIN_PLUGINS = (notepad, discovery)

__all__ = ["BUILTIN_PLUGINS"]
