"""ANSI palettes for the lazydb screen and lookup by name.

Themes are ANSI palettes for pane chrome, lists, tables, and SQL tokens.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by components."""

    name: str
    reset: str
    reverse: str
    border: str
    border_focused: str
    title: str
    list_item: str
    list_selected: str
    table_header: str
    table_cell: str
    table_selected_row: str
    table_selected_cell: str
    search_input: str
    search_placeholder: str
    message_info: str
    message_error: str
    popup_border: str
    banner: str
    sql_keyword: str
    sql_name: str
    sql_string: str
    sql_number: str
    sql_comment: str
    sql_operator: str
    sql_text: str
    line_number: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[34m",
    border_focused="\033[1;36m",
    title="\033[1;36m",
    list_item="\033[36m",
    list_selected="\033[7;36m",
    table_header="\033[1;38;5;252m",
    table_cell="\033[34m",
    table_selected_row="\033[1;48;5;236m",
    table_selected_cell="\033[7;33m",
    search_input="\033[1;38;5;81m",
    search_placeholder="\033[2;38;5;250m",
    message_info="\033[36m",
    message_error="\033[1;31m",
    popup_border="\033[38;5;45m",
    banner="\033[1;38;5;45m",
    sql_keyword="\033[1;38;5;81m",
    sql_name="\033[38;5;252m",
    sql_string="\033[38;5;114m",
    sql_number="\033[38;5;179m",
    sql_comment="\033[2;38;5;245m",
    sql_operator="\033[38;5;229m",
    sql_text="\033[38;5;252m",
    line_number="\033[38;5;110;48;5;238m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    border="\033[2;38;5;31m",
    border_focused="\033[1;38;5;45m",
    title="\033[1;38;5;45m",
    list_item="\033[38;5;117m",
    list_selected="\033[7;38;5;45m",
    table_header="\033[1;38;5;153m",
    table_cell="\033[38;5;117m",
    table_selected_row="\033[1;48;5;24m",
    table_selected_cell="\033[7;38;5;215m",
    search_input="\033[1;38;5;45m",
    search_placeholder="\033[2;38;5;110m",
    message_info="\033[38;5;45m",
    message_error="\033[1;38;5;203m",
    popup_border="\033[38;5;39m",
    banner="\033[1;38;5;39m",
    sql_keyword="\033[1;38;5;45m",
    sql_name="\033[38;5;153m",
    sql_string="\033[38;5;84m",
    sql_number="\033[38;5;215m",
    sql_comment="\033[2;38;5;110m",
    sql_operator="\033[38;5;153m",
    sql_text="\033[38;5;252m",
    line_number="\033[38;5;153;48;5;24m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    border="",
    border_focused="",
    title="",
    list_item="",
    list_selected="",
    table_header="",
    table_cell="",
    table_selected_row="",
    table_selected_cell="",
    search_input="",
    search_placeholder="",
    message_info="",
    message_error="",
    popup_border="",
    banner="",
    sql_keyword="",
    sql_name="",
    sql_string="",
    sql_number="",
    sql_comment="",
    sql_operator="",
    sql_text="",
    line_number="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Names accepted by ``--theme``."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Lower-case ``name`` and map unknown names to ``"default"``."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Pick the palette for ``--theme``; ``--no-color`` wins over any name."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "UITheme",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
