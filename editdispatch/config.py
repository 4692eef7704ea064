"""Configuration management for editdispatch."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_DIR = Path("~/.config/editdispatch").expanduser()
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"
DEFAULT_REGISTRY_FILENAME = "editors.sqlite3"

CONFIG_ENV_VAR = "EDITDISPATCH_CONFIG"
REGISTRY_ENV_VAR = "EDITDISPATCH_REGISTRY"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(RuntimeError):
    """Base error for configuration related issues."""


class InvalidConfigError(ConfigError):
    """Raised when the configuration file holds malformed values."""


@dataclass(slots=True)
class EditDispatchConfig:
    """In-memory representation of the editdispatch settings file."""

    registry_path: Path
    log_level: str | None = None
    plugins: dict[str, dict[str, Any]] = field(default_factory=dict)
    source_path: Path | None = None


def resolve_config_path(path: Path | None = None) -> Path:
    """Return the settings file location.

    An explicit ``path`` wins over ``$EDITDISPATCH_CONFIG``, which wins over
    ``~/.config/editdispatch/config.toml``.
    """

    if path is not None:
        return path.expanduser()
    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(
    path: Path | None = None, *, registry_path: Path | None = None
) -> EditDispatchConfig:
    """Load configuration from ``path`` or the default location.

    Parameters
    ----------
    path:
        Optional location of the settings file. When ``None`` the environment
        override or the default path is used. A missing file is not an error;
        every setting then takes its default value.
    registry_path:
        Optional override of the registry storage file. It beats both
        ``$EDITDISPATCH_REGISTRY`` and the ``registry_path`` setting.

    Raises
    ------
    InvalidConfigError
        If the file cannot be parsed or settings are malformed.
    """

    config_path = resolve_config_path(path)
    config_dir = config_path.parent

    raw: dict[str, Any] = {}
    if config_path.exists():
        try:
            with config_path.open("rb") as fh:
                raw = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise InvalidConfigError(
                f"Configuration file {config_path} is not valid TOML: {exc}"
            ) from exc

    section = raw.get("editdispatch", {})
    if not isinstance(section, dict):
        raise InvalidConfigError("'editdispatch' section must be a table")

    registry_raw = section.get("registry_path")
    if registry_raw is not None and not isinstance(registry_raw, str):
        raise InvalidConfigError("'registry_path' must be a string when provided")

    env_registry = os.environ.get(REGISTRY_ENV_VAR, "").strip()
    if registry_path is not None:
        resolved_registry = registry_path.expanduser().resolve()
    elif env_registry:
        resolved_registry = Path(env_registry).expanduser().resolve()
    elif registry_raw and registry_raw.strip():
        # Relative paths are resolved against the configuration directory.
        rp = Path(registry_raw.strip()).expanduser()
        resolved_registry = (rp if rp.is_absolute() else (config_dir / rp)).resolve()
    else:
        resolved_registry = (config_dir / DEFAULT_REGISTRY_FILENAME).resolve()

    log_level = section.get("log_level")
    if log_level is not None:
        if not isinstance(log_level, str) or log_level.upper() not in _LOG_LEVELS:
            raise InvalidConfigError(
                f"'log_level' must be one of {', '.join(_LOG_LEVELS)}"
            )
        log_level = log_level.upper()

    plugins_section = raw.get("plugins")
    plugins: dict[str, dict[str, Any]] = {}
    if isinstance(plugins_section, dict):
        for key, value in plugins_section.items():
            plugins[key] = dict(value) if isinstance(value, dict) else {}

    return EditDispatchConfig(
        registry_path=resolved_registry,
        log_level=log_level,
        plugins=plugins,
        source_path=config_path,
    )


def bootstrap_config_file(path: Path) -> bool:
    """Create a default config file if missing.

    Returns True when the file was created, False if it already existed.
    """

    if path.exists():
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    default_content = (
        "[editdispatch]\n"
        f'# registry_path = "{DEFAULT_REGISTRY_FILENAME}"\n'
        '# log_level = "WARNING"\n'
        "\n"
        "[plugins.discovery]\n"
        "enabled = true\n"
    )
    path.write_text(default_content, encoding="utf-8")
    return True
