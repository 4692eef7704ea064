"""Tests covering first-run seed plugins."""

from __future__ import annotations

import types

import pytest
from editdispatch.config import EditDispatchConfig
from editdispatch.plugins import (
    PluginRegistrationError,
    SeedContext,
    SeedEditor,
    build_settings_getter,
    hookimpl,
    load_seed_editors,
)
from editdispatch.plugins import manager as plugin_manager
from editdispatch.plugins.builtin import discovery


@pytest.fixture(autouse=True)
def reset_plugin_cache() -> None:
    """Ensure plugin discovery cache is cleared between tests."""

    plugin_manager.reset_plugin_manager_cache()
    yield
    plugin_manager.reset_plugin_manager_cache()


def _context(
    platform: str = "linux",
    existing: tuple[str, ...] = (),
    config: EditDispatchConfig | None = None,
) -> SeedContext:
    return SeedContext(
        platform=platform,
        path_exists=lambda path: path in existing,
        get_settings=build_settings_getter(config),
    )


def _add_plugin(monkeypatch, module: object) -> None:
    original_iter = plugin_manager.iter_plugin_modules

    def _combined() -> tuple[object, ...]:
        return original_iter() + (module,)

    monkeypatch.setattr(plugin_manager, "iter_plugin_modules", _combined)
    plugin_manager.reset_plugin_manager_cache()


def test_builtin_seeds_notepad_as_default() -> None:
    seeds = {seed.name: seed for seed in load_seed_editors(_context())}

    assert set(seeds) == {"notepad"}
    assert seeds["notepad"].make_default is True
    assert seeds["notepad"].path == "notepad"


def test_windows_notepad_uses_exe() -> None:
    seeds = {seed.name: seed for seed in load_seed_editors(_context("win32"))}

    assert seeds["notepad"].path == "notepad.exe"


def test_discovery_adds_only_existing_editors() -> None:
    context = _context(existing=("/snap/bin/code", "/usr/bin/gedit"))

    seeds = {seed.name: seed for seed in load_seed_editors(context)}

    assert set(seeds) == {"notepad", "vscode", "gedit"}
    assert seeds["vscode"].path == "/snap/bin/code"
    assert seeds["vscode"].make_default is False


def test_discovery_prefers_first_existing_candidate() -> None:
    context = _context(existing=("/usr/bin/code", "/snap/bin/code"))

    seeds = {seed.name: seed for seed in load_seed_editors(context)}

    assert seeds["vscode"].path == "/usr/bin/code"


def test_discovery_can_be_disabled_from_settings(tmp_path) -> None:
    config = EditDispatchConfig(
        registry_path=tmp_path / "editors.sqlite3",
        plugins={"discovery": {"enabled": False}},
    )
    context = _context(existing=("/usr/bin/gedit",), config=config)

    seeds = [seed.name for seed in load_seed_editors(context)]

    assert seeds == ["notepad"]


def test_macos_candidates_carry_options() -> None:
    context = _context("darwin", existing=("/usr/bin/open",))

    seeds = {seed.name: seed for seed in load_seed_editors(context)}

    assert seeds["textedit"].default_options == ("-e",)


def test_candidates_for_unknown_platform_fall_back_to_posix() -> None:
    assert discovery.candidates_for("freebsd") == discovery.POSIX_CANDIDATES


def test_custom_plugin_contributes_seed(monkeypatch) -> None:
    module = types.ModuleType("editdispatch_test_plugin")

    @hookimpl
    def seed_editors(context: SeedContext) -> SeedEditor:
        return SeedEditor(name="micro", path=f"/opt/{context.platform}/micro")

    module.seed_editors = seed_editors
    _add_plugin(monkeypatch, module)

    seeds = {seed.name: seed for seed in load_seed_editors(_context())}

    assert seeds["micro"].path == "/opt/linux/micro"
    assert "notepad" in seeds


def test_duplicate_seed_names_are_rejected(monkeypatch) -> None:
    module = types.ModuleType("editdispatch_dup_plugin")

    @hookimpl
    def seed_editors(context: SeedContext) -> tuple[SeedEditor, ...]:
        return (SeedEditor(name="Notepad", path="/elsewhere/notepad"),)

    module.seed_editors = seed_editors
    _add_plugin(monkeypatch, module)

    with pytest.raises(PluginRegistrationError):
        load_seed_editors(_context())


def test_invalid_hook_result_is_rejected(monkeypatch) -> None:
    module = types.ModuleType("editdispatch_bad_plugin")

    @hookimpl
    def seed_editors(context: SeedContext) -> list[str]:
        return ["not-a-seed"]

    module.seed_editors = seed_editors
    _add_plugin(monkeypatch, module)

    with pytest.raises(PluginRegistrationError):
        load_seed_editors(_context())


def test_plugin_manager_is_cached_until_reset() -> None:
    first = plugin_manager.get_plugin_manager()

    assert plugin_manager.get_plugin_manager() is first
    assert first.is_registered(discovery)

    plugin_manager.reset_plugin_manager_cache()
    assert plugin_manager.get_plugin_manager() is not first
