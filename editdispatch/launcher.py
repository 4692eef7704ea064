"""Start editor processes for the files being opened."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Sequence

logger = logging.getLogger(__name__)


class LaunchFailedError(RuntimeError):
    """Raised when an editor process cannot be started."""


class ProcessLauncher:
    """Thin wrapper around ``subprocess`` for starting editors."""

    def launch(self, path: str, args: Sequence[str], *, wait: bool = False) -> None:
        """Start ``path`` with ``args``.

        By default the process is detached and not waited on. With ``wait``
        the editor runs in the foreground, attached to the terminal, and a
        non-zero exit status counts as a failure.
        """

        command = [os.path.expanduser(path), *args]
        logger.debug("Launching %s", command)

        if wait:
            try:
                process = subprocess.run(command, check=False)
            except OSError as exc:
                raise LaunchFailedError(f"Failed to start '{path}': {exc}") from exc
            if process.returncode != 0:
                raise LaunchFailedError(
                    f"'{path}' exited with status {process.returncode}."
                )
            return

        try:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise LaunchFailedError(f"Failed to start '{path}': {exc}") from exc
