"""Colour themes for terminal output (dark and light)."""

from dataclasses import dataclass
from typing import Dict

from rich.style import Style
from rich.theme import Theme as RichTheme


@dataclass
class ThemeColors:
    """Color palette for a terminal theme."""

    primary: str  # Headings, agent names
    secondary: str  # Category names
    success: str
    warning: str
    error: str

    text_primary: str
    text_secondary: str  # Descriptions, paths
    text_muted: str  # Borders, hints

    enabled: str  # Enabled skill marker
    disabled: str  # Disabled skill marker


DARK_THEME = ThemeColors(
    primary="#00D9FF",  # Bright cyan
    secondary="#A78BFA",  # Soft purple
    success="#10B981",  # Emerald green
    warning="#F59E0B",  # Amber
    error="#EF4444",  # Red
    text_primary="#F0F6FC",
    text_secondary="#8B949E",
    text_muted="#484F58",
    enabled="#10B981",
    disabled="#8B949E",
)

LIGHT_THEME = ThemeColors(
    primary="#0969DA",  # Blue
    secondary="#8250DF",  # Purple
    success="#1A7F37",  # Green
    warning="#9A6700",  # Amber
    error="#CF222E",  # Red
    text_primary="#1F2328",
    text_secondary="#57606A",
    text_muted="#8C959F",
    enabled="#1A7F37",
    disabled="#8C959F",
)


class Theme:
    """Theme manager."""

    _current_theme: str = "dark"
    _themes: Dict[str, ThemeColors] = {
        "dark": DARK_THEME,
        "light": LIGHT_THEME,
    }

    @classmethod
    def get_colors(cls) -> ThemeColors:
        return cls._themes[cls._current_theme]

    @classmethod
    def set_theme(cls, name: str) -> None:
        """Set the current theme.

        Raises:
            ValueError: If theme name is invalid
        """
        if name not in cls._themes:
            raise ValueError(f"Unknown theme: {name}. Available: {list(cls._themes.keys())}")
        cls._current_theme = name

    @classmethod
    def get_rich_theme(cls) -> RichTheme:
        colors = cls.get_colors()
        return RichTheme(
            {
                "primary": Style(color=colors.primary),
                "secondary": Style(color=colors.secondary),
                "success": Style(color=colors.success),
                "warning": Style(color=colors.warning),
                "error": Style(color=colors.error),
                "text.secondary": Style(color=colors.text_secondary),
                "text.muted": Style(color=colors.text_muted),
                "skill.enabled": Style(color=colors.enabled, bold=True),
                "skill.disabled": Style(color=colors.disabled),
            }
        )


def set_theme(name: str) -> None:
    """Set the current theme, falling back to dark for unknown names."""
    try:
        Theme.set_theme(name)
    except ValueError:
        Theme.set_theme("dark")
