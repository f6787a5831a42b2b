from pathlib import Path

import pytest

from agents import (
    AgentKind,
    BundleLocator,
    FlatLocator,
    default_locator,
    is_installed_in_agent_tree,
    list_available_agents,
    resolve_agent_context,
)
from errors import InvalidStateError


def test_flat_executable_in_claude_root(claude_locator, project) -> None:
    context = resolve_agent_context(claude_locator)

    assert context.kind is AgentKind.CLAUDE
    assert context.base_dir == (project / ".claude").resolve()
    assert context.project_root == project.resolve()
    assert is_installed_in_agent_tree(claude_locator)


def test_flat_executable_in_codex_root(codex_locator, project) -> None:
    context = resolve_agent_context(codex_locator)

    assert context.kind is AgentKind.CODEX
    assert context.project_root == project.resolve()


def test_bundle_resolves_to_directory_holding_the_app(bundle_locator, claude_root) -> None:
    assert bundle_locator.locate_own_package().name == "Skill Manager.app"
    assert bundle_locator.locate_package_parent(3) == claude_root.resolve()

    context = resolve_agent_context(bundle_locator)
    assert context.kind is AgentKind.CLAUDE
    assert context.base_dir == claude_root.resolve()


@pytest.mark.parametrize("dirname", ["claude", ".claude-old", ".CODEX", "codex", "bin"])
def test_other_basenames_are_not_agents(tmp_path, dirname) -> None:
    exe = tmp_path / dirname / "skill-manager"
    exe.parent.mkdir()
    exe.write_text("")

    context = resolve_agent_context(FlatLocator(exe))

    assert context.kind is AgentKind.NONE
    assert context.project_root is None
    assert not context.installed


def test_bundle_outside_agent_root(tmp_path) -> None:
    exe = tmp_path / "Applications" / "Skill Manager.app" / "Contents" / "MacOS" / "skill-manager"
    exe.parent.mkdir(parents=True)
    exe.write_text("")

    assert resolve_agent_context(BundleLocator(exe)).kind is AgentKind.NONE


def test_available_agents_lists_existing_siblings(claude_locator, project) -> None:
    assert list_available_agents(claude_locator) == {AgentKind.CLAUDE}

    (project / ".codex").mkdir()
    assert list_available_agents(claude_locator) == {AgentKind.CLAUDE, AgentKind.CODEX}


def test_available_agents_outside_project_is_empty(outside_locator) -> None:
    assert list_available_agents(outside_locator) == set()


def test_agent_kind_helpers() -> None:
    assert AgentKind.CLAUDE.other is AgentKind.CODEX
    assert AgentKind.CODEX.other is AgentKind.CLAUDE
    assert AgentKind.NONE.other is AgentKind.NONE
    assert AgentKind.from_root_name(".codex") is AgentKind.CODEX
    assert AgentKind.NONE.root_name is None


def test_directory_name_requires_a_real_agent() -> None:
    assert AgentKind.CLAUDE.directory_name == ".claude"
    assert AgentKind.CODEX.directory_name == ".codex"
    with pytest.raises(InvalidStateError):
        AgentKind.NONE.directory_name


def test_default_locator_picks_bundle_only_inside_app(tmp_path) -> None:
    app_exe = tmp_path / "X.app" / "Contents" / "MacOS" / "x"
    assert isinstance(default_locator("darwin", app_exe), BundleLocator)
    assert isinstance(default_locator("darwin", tmp_path / "x"), FlatLocator)
    assert isinstance(default_locator("linux", app_exe), FlatLocator)
    assert default_locator("win32", Path("C:/tools/x.exe")).locate_own_package().name == "x.exe"
