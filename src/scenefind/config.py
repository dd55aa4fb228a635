"""Configuration constants for scenefind.

Theme system using Textual's Theme class with custom variables for the
Rich markup colors of scene nodes and search matches.
"""

from pathlib import Path
from typing import Dict, Optional

from textual.theme import Theme


# =============================================================================
# SEARCH
# =============================================================================

# Interval between cooperative search steps in the UI (seconds).
# One root subtree is searched per tick.
SEARCH_TICK_INTERVAL = 0.01

# Default destination for "export results"
DEFAULT_EXPORT_FILENAME = "ComponentSearchResults.txt"

# Log file written by the application
LOG_FILENAME = "scenefind.log"


# =============================================================================
# THEME DEFINITIONS
# =============================================================================

GRUVBOX_DARK = Theme(
    name="gruvbox-dark",
    primary="#fabd2f",
    secondary="#b8bb26",
    accent="#fabd2f",
    foreground="#ebdbb2",
    background="#282828",
    success="#b8bb26",
    warning="#fe8019",
    error="#fb4934",
    surface="#282828",
    panel="#3c3836",
    boost="#504945",
    dark=True,
    variables={
        "node-active": "#ebdbb2",     # Light beige, same as foreground
        "node-inactive": "#928374",   # Gray
        "component": "#83a598",       # Aqua
        "match": "#fabd2f",           # Bright yellow
        "scene": "#d3869b",           # Purple
        "muted": "#928374",
    },
)

GRUVBOX_LIGHT = Theme(
    name="gruvbox-light",
    primary="#b57614",
    secondary="#79740e",
    accent="#b57614",
    foreground="#3c3836",
    background="#fbf1c7",
    success="#79740e",
    warning="#af3a03",
    error="#9d0006",
    surface="#fbf1c7",
    panel="#ebdbb2",
    boost="#d5c4a1",
    dark=False,
    variables={
        "node-active": "#3c3836",
        "node-inactive": "#7c6f64",
        "component": "#076678",
        "match": "#b57614",
        "scene": "#8f3f71",
        "muted": "#7c6f64",
    },
)

THEMES: Dict[str, Theme] = {theme.name: theme for theme in (GRUVBOX_DARK, GRUVBOX_LIGHT)}


# =============================================================================
# COLORS
# =============================================================================

def _hex_to_rgb(hex_color: str) -> str:
    """Convert hex color to rgb() format for Rich markup."""
    hex_color = hex_color.lstrip('#')
    r, g, b = int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)
    return f"rgb({r},{g},{b})"


class Colors:
    """Theme-aware color accessor for Rich markup.

    Usage:
        f"[{Colors.match()}]text[/]"
    """

    _current_theme: str = GRUVBOX_DARK.name

    @classmethod
    def set_theme(cls, name: str) -> None:
        if name not in THEMES:
            raise ValueError(f"Unknown theme: {name}")
        cls._current_theme = name

    @classmethod
    def get_theme(cls, name: Optional[str] = None) -> Theme:
        return THEMES.get(name or cls._current_theme, GRUVBOX_DARK)

    @classmethod
    def next_theme(cls) -> str:
        """Name of the theme after the current one."""
        names = list(THEMES)
        return names[(names.index(cls._current_theme) + 1) % len(names)]

    @classmethod
    def get(cls, key: str) -> str:
        """Get a theme variable (or a standard theme color) as rgb()."""
        theme = cls.get_theme()
        hex_color = theme.variables.get(key) or getattr(theme, key, None) or theme.foreground
        return _hex_to_rgb(hex_color)

    @classmethod
    def active(cls) -> str:
        return cls.get("node-active")

    @classmethod
    def inactive(cls) -> str:
        return cls.get("node-inactive")

    @classmethod
    def component(cls) -> str:
        return cls.get("component")

    @classmethod
    def match(cls) -> str:
        return cls.get("match")

    @classmethod
    def scene(cls) -> str:
        return cls.get("scene")

    @classmethod
    def muted(cls) -> str:
        return cls.get("muted")

    @classmethod
    def error(cls) -> str:
        return cls.get("error")


# =============================================================================
# NODE ICONS
# =============================================================================

ICON_ACTIVE = "●"
ICON_INACTIVE = "○"
ICON_MATCH = "◆"


# =============================================================================
# PATHS
# =============================================================================

CSS_PATH = Path(__file__).parent / "app.tcss"
