"""Logging setup for the editdispatch command line."""

from __future__ import annotations

import logging

import click

LOGGER_NAME = "editdispatch"
DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class ClickEchoHandler(logging.Handler):
    """Emit records through ``click.echo`` on stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:  # pragma: no cover - mirrors logging.StreamHandler
            self.handleError(record)


def level_for(verbosity: int, configured: str | None = None) -> int:
    """Combine the configured level with ``-v`` flags.

    Each ``-v`` lowers the configured threshold by one step, down to DEBUG.
    """

    base = DEFAULT_LOG_LEVEL
    if configured:
        named = logging.getLevelName(configured.upper())
        if isinstance(named, int):
            base = named
    if verbosity <= 0:
        return base
    return max(logging.DEBUG, base - 10 * verbosity)


def setup_logging(level: int = DEFAULT_LOG_LEVEL) -> None:
    """Route ``editdispatch`` loggers to a single stderr handler."""

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    root_logger.addHandler(handler)
