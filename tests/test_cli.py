"""Tests for the Click-based editdispatch CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

import yaml
from click.testing import CliRunner
from editdispatch import cli
from editdispatch.config import CONFIG_ENV_VAR, REGISTRY_ENV_VAR
from editdispatch.launcher import LaunchFailedError, ProcessLauncher
from editdispatch.storage import RegistryStorage


def _setup(tmp_path: Path, monkeypatch) -> Path:
    config_path = tmp_path / "config.toml"
    config_path.write_text("[plugins.discovery]\nenabled = false\n", encoding="utf-8")
    registry_path = tmp_path / "editors.sqlite3"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_path))
    monkeypatch.setenv(REGISTRY_ENV_VAR, str(registry_path))
    return registry_path


def _fake_launcher(
    monkeypatch, failing: Sequence[str] = ()
) -> list[tuple[str, list[str]]]:
    calls: list[tuple[str, list[str]]] = []

    def launch(self, path: str, args: Sequence[str], *, wait: bool = False) -> None:
        calls.append((path, list(args)))
        if args[-1] in failing:
            raise LaunchFailedError(f"Failed to start '{path}': boom")

    monkeypatch.setattr(ProcessLauncher, "launch", launch)
    return calls


def _invoke(*args: str):
    return CliRunner().invoke(cli.cli, list(args))


def test_first_run_seeds_notepad_default(tmp_path: Path, monkeypatch) -> None:
    registry_path = _setup(tmp_path, monkeypatch)

    result = _invoke("list-editors")

    assert result.exit_code == 0, result.output
    assert "* notepad" in result.output
    assert RegistryStorage(registry_path).read().default_name == "notepad"


def test_add_editor_then_list_by_name(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    result = _invoke(
        "add-editor",
        "--name",
        "Code",
        "--path",
        "/usr/bin/code",
        "--description",
        "Visual Studio Code",
        "--option=--new-window",
        "--options=--wait",
    )
    assert result.exit_code == 0, result.output
    assert "Added editor 'Code'" in result.output

    result = _invoke("list-editors", "--name", "code", "--format", "json")
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload == [
        {
            "name": "Code",
            "path": "/usr/bin/code",
            "description": "Visual Studio Code",
            "default_options": ["--new-window", "--wait"],
            "is_default": False,
        }
    ]


def test_add_editor_duplicate_fails(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    result = _invoke("add-editor", "--name", "NOTEPAD", "--path", "x")

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_add_editor_blank_path_fails(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    result = _invoke("add-editor", "--name", "vim", "--path", "  ")

    assert result.exit_code == 1
    assert "path is required" in result.output


def test_add_editor_with_default_flag(tmp_path: Path, monkeypatch) -> None:
    registry_path = _setup(tmp_path, monkeypatch)

    result = _invoke("add-editor", "-n", "vim", "-p", "vim", "--default")
    assert result.exit_code == 0, result.output

    result = _invoke("list-editors", "--default", "--format", "yaml")
    assert result.exit_code == 0, result.output
    payload = yaml.safe_load(result.output)
    assert [entry["name"] for entry in payload] == ["vim"]
    assert RegistryStorage(registry_path).read().find("notepad").is_default is False


def test_list_unknown_editor_fails(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    result = _invoke("list-editors", "--name", "ghost")

    assert result.exit_code == 1
    assert "not registered" in result.output


def test_list_name_and_default_are_exclusive(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    result = _invoke("list-editors", "--name", "notepad", "--default")

    assert result.exit_code == 1


def test_set_default_and_unknown(tmp_path: Path, monkeypatch) -> None:
    registry_path = _setup(tmp_path, monkeypatch)
    _invoke("add-editor", "-n", "vim", "-p", "vim")

    result = _invoke("set-default", "VIM")
    assert result.exit_code == 0, result.output
    assert RegistryStorage(registry_path).read().default_name == "vim"

    result = _invoke("set-default", "unknown")
    assert result.exit_code == 1
    assert RegistryStorage(registry_path).read().default_name == "vim"


def test_remove_editor_is_idempotent(tmp_path: Path, monkeypatch) -> None:
    registry_path = _setup(tmp_path, monkeypatch)
    _invoke("add-editor", "-n", "vim", "-p", "vim")

    result = _invoke("remove-editor", "notepad")
    assert result.exit_code == 0, result.output
    assert "Default editor: vim" in result.output

    result = _invoke("remove-editor", "notepad")
    assert result.exit_code == 0, result.output
    assert "nothing removed" in result.output

    registry = RegistryStorage(registry_path).read()
    assert sorted(registry.editors) == ["vim"]
    assert registry.default_name == "vim"


def test_remove_editor_reports_stored_name(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    _invoke("add-editor", "-n", "Beta", "-p", "beta")

    result = _invoke("remove-editor", "BETA")

    assert result.exit_code == 0, result.output
    assert "Removed editor 'Beta'" in result.output
    assert "BETA" not in result.output


def test_open_uses_default_editor(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    calls = _fake_launcher(monkeypatch)
    _invoke("add-editor", "-n", "E", "-p", "/bin/e", "--option=-n", "--default")

    result = _invoke("open", "f1.txt", "f2.txt")

    assert result.exit_code == 0, result.output
    assert calls == [("/bin/e", ["-n", "f1.txt"]), ("/bin/e", ["-n", "f2.txt"])]


def test_open_reports_partial_failure(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    calls = _fake_launcher(monkeypatch, failing=["f2.txt"])

    result = _invoke("open", "f1.txt", "f2.txt")

    assert result.exit_code == 0, result.output
    assert "Opened f1.txt with notepad" in result.output
    assert "Failed to open f2.txt" in result.output
    assert [args[-1] for _, args in calls] == ["f1.txt", "f2.txt"]


def test_open_fails_when_every_file_fails(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    _fake_launcher(monkeypatch, failing=["f1.txt"])

    result = _invoke("open", "f1.txt")

    assert result.exit_code == 1
    assert "Could not open 1 file" in result.output


def test_open_with_unknown_editor_fails(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    calls = _fake_launcher(monkeypatch)

    result = _invoke("open", "f1.txt", "--editor", "ghost")

    assert result.exit_code == 1
    assert calls == []


def test_open_without_default_fails(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    calls = _fake_launcher(monkeypatch)
    _invoke("remove-editor", "notepad")

    result = _invoke("open", "f1.txt")

    assert result.exit_code == 1
    assert "No default editor" in result.output
    assert calls == []


def test_corrupt_registry_is_reported(tmp_path: Path, monkeypatch) -> None:
    registry_path = _setup(tmp_path, monkeypatch)
    registry_path.write_text("not a database " * 40, encoding="utf-8")

    result = _invoke("list-editors")

    assert result.exit_code == 1
    assert "unreadable" in result.output


def test_registry_option_overrides_env(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)
    override = tmp_path / "other.sqlite3"

    result = _invoke("--registry", str(override), "info")

    assert result.exit_code == 0, result.output
    assert str(override.resolve()) in result.output
    assert "Default       : notepad" in result.output
    assert override.exists()


def test_main_returns_exit_codes(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    assert cli.main(["list-editors"]) == 0
    assert cli.main(["set-default", "ghost"]) == 1


def test_verbose_flag_enables_info_logging(tmp_path: Path, monkeypatch) -> None:
    _setup(tmp_path, monkeypatch)

    result = _invoke("-v", "list-editors")

    assert result.exit_code == 0, result.output
    assert "INFO editdispatch.store: Created registry" in result.output


def test_config_command_creates_and_opens_file(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "fresh" / "config.toml"
    opened: list[str] = []

    def fake_edit(*args, filename: str | None = None, **kwargs) -> None:
        opened.append(filename)
        return None

    monkeypatch.setattr("click.edit", fake_edit)

    result = _invoke("--config", str(config_path), "config")

    assert result.exit_code == 0, result.output
    assert opened == [str(config_path)]
    assert config_path.exists()
    assert f"Created configuration at {config_path}" in result.output
