"""Rendering primitives: frame buffer, themes, and SQL highlighting."""

from .frame import Frame
from .highlight import highlight_sql_line
from .theme import DEFAULT_THEME, PLAIN_THEME, UITheme, available_theme_names, resolve_theme

__all__ = [
    "DEFAULT_THEME",
    "Frame",
    "PLAIN_THEME",
    "UITheme",
    "available_theme_names",
    "highlight_sql_line",
    "resolve_theme",
]
