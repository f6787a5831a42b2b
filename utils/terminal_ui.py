"""Terminal UI utilities using Rich library for formatted output."""

from typing import Any, Dict, Iterable, Optional

from rich import box
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import Config
from utils.theme import Theme, set_theme

# Initialize theme from config
set_theme(Config.TUI_THEME)

# Global console instance with theme support
console = Console(theme=Theme.get_rich_theme())


def _get_colors():
    """Get current theme colors."""
    return Theme.get_colors()


def print_error(message: str, title: str = "Error") -> None:
    """Print an error message.

    Args:
        message: Error message
        title: Error title (default: "Error")
    """
    colors = _get_colors()
    console.print(
        Panel(
            f"[{colors.error}]{escape(message)}[/{colors.error}]",
            title=f"[bold {colors.error}]{title}[/bold {colors.error}]",
            border_style=colors.error,
            box=box.ROUNDED,
        )
    )


def print_warning(message: str) -> None:
    colors = _get_colors()
    console.print(f"[{colors.warning}]{escape(message)}[/{colors.warning}]")


def print_success(message: str) -> None:
    colors = _get_colors()
    console.print(f"[{colors.success}]✓ {escape(message)}[/{colors.success}]")


def print_info(message: str) -> None:
    colors = _get_colors()
    console.print(f"[{colors.primary}]ℹ {escape(message)}[/{colors.primary}]")


def print_log_location(log_file: str) -> None:
    colors = _get_colors()
    console.print()
    console.print(f"[{colors.text_muted}]Detailed logs: {log_file}[/{colors.text_muted}]")


def print_config(config: Dict[str, Any]) -> None:
    """Print key/value pairs in a borderless table."""
    colors = _get_colors()
    table = Table(show_header=False, box=box.SIMPLE, border_style=colors.text_muted, padding=(0, 2))
    table.add_column("Key", style=f"{colors.primary} bold")
    table.add_column("Value", style=colors.success)

    for key, value in config.items():
        table.add_row(key, escape(str(value)))

    console.print(table)


def _state_marker(enabled: bool) -> str:
    return "[skill.enabled]● on[/skill.enabled]" if enabled else "[skill.disabled]○ off[/skill.disabled]"


def print_skills(skills: Iterable[Any], categories: Optional[Dict[str, str]] = None) -> None:
    """Print skills as a table.

    Args:
        skills: SkillEntry objects
        categories: Optional mapping of skill name to category name
    """
    colors = _get_colors()
    table = Table(box=box.ROUNDED, border_style=colors.text_muted, header_style=f"bold {colors.primary}")
    table.add_column("State", no_wrap=True)
    table.add_column("Name", style="bold")
    if categories is not None:
        table.add_column("Category", style=colors.secondary)
    table.add_column("Description", style=colors.text_secondary)

    rows = 0
    for skill in skills:
        row = [_state_marker(skill.enabled), escape(skill.name)]
        if categories is not None:
            row.append(escape(categories.get(skill.name, "")))
        row.append(escape(skill.description))
        table.add_row(*row)
        rows += 1

    if not rows:
        print_info("No skills found.")
        return
    console.print(table)


def print_skill_detail(skill: Any) -> None:
    """Print a skill's manifest and its asset files."""
    colors = _get_colors()
    title = f"[bold {colors.primary}]{escape(skill.name)}[/bold {colors.primary}]  {_state_marker(skill.enabled)}"
    console.print(Panel(Markdown(skill.content or "_empty manifest_"), title=title, box=box.ROUNDED))
    console.print(f"[{colors.text_muted}]{escape(str(skill.manifest_path))}[/{colors.text_muted}]")
    for asset in skill.files:
        suffix = "/" if asset.is_directory else ""
        console.print(f"  [{colors.text_secondary}]{escape(asset.name)}{suffix}[/{colors.text_secondary}]")


def print_categories(order: Iterable[str], categories: Dict[str, Any]) -> None:
    colors = _get_colors()
    for position, name in enumerate(order, start=1):
        skills = categories.get(name, [])
        console.print(
            f"[{colors.text_muted}]{position}.[/{colors.text_muted}] "
            f"[bold {colors.secondary}]{escape(name)}[/bold {colors.secondary}] "
            f"[{colors.text_muted}]({len(skills)})[/{colors.text_muted}]"
        )
        for skill in skills:
            console.print(f"     {escape(skill)}")


def print_commands(commands: Iterable[Any]) -> None:
    colors = _get_colors()
    table = Table(box=box.ROUNDED, border_style=colors.text_muted, header_style=f"bold {colors.primary}")
    table.add_column("State", no_wrap=True)
    table.add_column("Command", style="bold")
    table.add_column("Description", style=colors.text_secondary)
    rows = 0
    for command in commands:
        table.add_row(_state_marker(command.enabled), escape(f"/{command.name}"), escape(command.description))
        rows += 1
    if not rows:
        print_info("No slash commands found.")
        return
    console.print(table)
