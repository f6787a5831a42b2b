import pytest

from agents import AgentKind, check_conflict, copy_skill_to_other_agent
from conftest import write_skill
from errors import ConflictError, InvalidStateError, NotFoundError
from skills import SkillState


@pytest.fixture
def codex_root(project):
    root = project / ".codex"
    root.mkdir()
    return root


@pytest.mark.asyncio
async def test_copy_lands_enabled_in_other_agent(claude_locator, claude_root, codex_root) -> None:
    write_skill(
        claude_root / "disabled-skills",
        "review",
        "description: Review code",
        assets={"scripts/check.sh": "echo ok\n", "notes.md": "n"},
    )

    destination = await copy_skill_to_other_agent("review", False, claude_locator)

    assert destination == (codex_root / "skills" / "review").resolve()
    assert (codex_root / "skills" / "review" / "SKILL.md").read_text().strip() == "description: Review code"
    assert (codex_root / "skills" / "review" / "scripts" / "check.sh").read_text() == "echo ok\n"
    assert not (codex_root / "disabled-skills" / "review").exists()
    # Source is untouched
    assert (claude_root / "disabled-skills" / "review" / "SKILL.md").is_file()


@pytest.mark.asyncio
async def test_copy_from_codex_to_claude(codex_locator, project) -> None:
    codex_root = project / ".codex"
    write_skill(codex_root / "skills", "fmt", "description: Format")

    await copy_skill_to_other_agent("fmt", True, codex_locator)

    assert (project / ".claude" / "skills" / "fmt" / "SKILL.md").is_file()


@pytest.mark.asyncio
async def test_conflict_in_enabled_root(claude_locator, claude_root, codex_root) -> None:
    write_skill(claude_root / "skills", "lint", "description: new")
    write_skill(codex_root / "skills", "lint", "description: old")

    with pytest.raises(ConflictError, match=r"\(enabled\)") as excinfo:
        await copy_skill_to_other_agent("lint", True, claude_locator)

    assert excinfo.value.location is SkillState.ENABLED
    assert (codex_root / "skills" / "lint" / "SKILL.md").read_text().strip() == "description: old"


@pytest.mark.asyncio
async def test_conflict_in_disabled_root(claude_locator, claude_root, codex_root) -> None:
    write_skill(claude_root / "skills", "lint", "description: new")
    write_skill(codex_root / "disabled-skills", "lint", "description: old")

    with pytest.raises(ConflictError, match=r"\(disabled\)") as excinfo:
        await copy_skill_to_other_agent("lint", True, claude_locator)

    assert excinfo.value.location is SkillState.DISABLED
    assert not (codex_root / "skills" / "lint").exists()


@pytest.mark.asyncio
async def test_missing_other_agent_root_is_not_created(claude_locator, claude_root, project) -> None:
    write_skill(claude_root / "skills", "lint", "description: x")

    with pytest.raises(NotFoundError):
        await copy_skill_to_other_agent("lint", True, claude_locator)

    assert not (project / ".codex").exists()


@pytest.mark.asyncio
async def test_missing_source_skill(claude_locator, codex_root) -> None:
    with pytest.raises(NotFoundError, match="ghost"):
        await copy_skill_to_other_agent("ghost", True, claude_locator)


@pytest.mark.asyncio
async def test_outside_agent_tree_is_invalid(outside_locator) -> None:
    with pytest.raises(InvalidStateError):
        await copy_skill_to_other_agent("x", True, outside_locator)


@pytest.mark.asyncio
async def test_check_conflict_reports_location(claude_locator, claude_root, codex_root) -> None:
    write_skill(claude_root / "skills", "lint", "description: x")

    clear = await check_conflict("lint", True, claude_locator)
    assert clear.exists is False
    assert clear.target_agent is AgentKind.CODEX
    assert clear.source_modified is not None

    write_skill(codex_root / "disabled-skills", "lint", "description: y")
    conflict = await check_conflict("lint", True, claude_locator)
    assert conflict.exists is True
    assert conflict.is_disabled is True
    assert conflict.target_modified is not None
    assert conflict.to_dict()["targetAgent"] == "codex"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "..", "a/b"])
async def test_copy_and_conflict_reject_path_like_names(claude_locator, codex_root, name) -> None:
    with pytest.raises(InvalidStateError):
        await copy_skill_to_other_agent(name, True, claude_locator)
    with pytest.raises(InvalidStateError):
        await check_conflict(name, True, claude_locator)
    assert list(codex_root.iterdir()) == []
