from pathlib import PurePosixPath

import pytest

from agents import can_offer_command_shortcut, install_command_shortcut
from agents.shortcut import render_shortcut
from config import Config
from errors import InvalidStateError


@pytest.mark.asyncio
async def test_shortcut_offered_once_for_claude(claude_locator, claude_root, flat_executable) -> None:
    assert can_offer_command_shortcut(claude_locator) is True

    path = await install_command_shortcut(claude_locator, platform="linux")

    assert path == claude_root.resolve() / "commands" / f"{Config.SHORTCUT_NAME}.md"
    text = path.read_text(encoding="utf-8")
    assert text.startswith("---\ndescription:")
    assert str(flat_executable.resolve()) in text
    assert can_offer_command_shortcut(claude_locator) is False

    # Second install rewrites the file
    path.write_text("edited")
    await install_command_shortcut(claude_locator, platform="linux")
    assert path.read_text(encoding="utf-8") != "edited"


def test_shortcut_not_offered_for_codex_or_outside(codex_locator, outside_locator) -> None:
    assert can_offer_command_shortcut(codex_locator) is False
    assert can_offer_command_shortcut(outside_locator) is False


@pytest.mark.asyncio
async def test_install_shortcut_outside_claude_is_invalid(codex_locator) -> None:
    with pytest.raises(InvalidStateError):
        await install_command_shortcut(codex_locator)


@pytest.mark.parametrize(
    "platform, expected",
    [
        ("darwin", 'open -n "/x/Skill Manager.app"'),
        ("win32", 'cmd.exe /c start "" "/x/Skill Manager.app"'),
        ("linux", 'nohup "/x/Skill Manager.app"'),
        ("freebsd", 'nohup "/x/Skill Manager.app"'),
    ],
)
def test_render_shortcut_per_platform(platform, expected) -> None:
    assert expected in render_shortcut(PurePosixPath("/x/Skill Manager.app"), platform)
