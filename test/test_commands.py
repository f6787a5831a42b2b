import pytest

from config import Config
from errors import InvalidStateError


@pytest.mark.asyncio
async def test_commands_listing_and_toggle(service, claude_root) -> None:
    commands_dir = claude_root / "commands"
    commands_dir.mkdir()
    (commands_dir / "review.md").write_text("---\ndescription: Review the diff\n---\nDo it.\n")
    (commands_dir / "notes.txt").write_text("not a command")
    (commands_dir / f"{Config.SHORTCUT_NAME}.md").write_text("launcher")
    disabled_dir = claude_root / "disabled-commands"
    disabled_dir.mkdir()
    (disabled_dir / "deploy.md").write_text("# Deploy\n\nShip it to prod.\n")

    commands = await service.list_commands()

    assert [(c.name, c.enabled, c.description) for c in commands] == [
        ("deploy", False, "Ship it to prod."),
        ("review", True, "Review the diff"),
    ]

    assert await service.set_command_enabled("deploy", True) is True
    assert (commands_dir / "deploy.md").is_file()
    assert await service.set_command_enabled("deploy", True) is False


@pytest.mark.asyncio
async def test_no_commands_directory(service) -> None:
    assert await service.list_commands() == []


@pytest.mark.asyncio
async def test_command_toggle_rejects_path_names(service, claude_root) -> None:
    with pytest.raises(InvalidStateError):
        await service.set_command_enabled("../skills/x", True)
    assert not (claude_root / "commands").exists()
