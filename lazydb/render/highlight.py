"""SQL syntax highlighting for the query editor.

Lexes one editor line with Pygments' SQL lexer and maps token types onto the
active UI theme, producing ``(text, style)`` runs for ``Frame.write_segments``.
"""

from __future__ import annotations

from functools import lru_cache

from pygments import lex
from pygments.lexers.sql import SqlLexer
from pygments.token import Comment, Keyword, Name, Number, Operator, Punctuation, String

from .theme import UITheme

_LEXER = SqlLexer(stripnl=False, ensurenl=False)


def _style_for_token(token_type, theme: UITheme) -> str:
    if token_type in Keyword:
        return theme.sql_keyword
    if token_type in String:
        return theme.sql_string
    if token_type in Number:
        return theme.sql_number
    if token_type in Comment:
        return theme.sql_comment
    if token_type in Operator or token_type in Punctuation:
        return theme.sql_operator
    if token_type in Name:
        return theme.sql_name
    return theme.sql_text


@lru_cache(maxsize=512)
def _lex_line(line: str) -> tuple[tuple[object, str], ...]:
    return tuple(lex(line, _LEXER))


def highlight_sql_line(line: str, theme: UITheme) -> list[tuple[str, str]]:
    """Return styled runs for one line of SQL."""
    if not line:
        return []
    runs: list[tuple[str, str]] = []
    for token_type, value in _lex_line(line):
        if not value or value == "\n":
            continue
        style = _style_for_token(token_type, theme)
        if runs and runs[-1][1] == style:
            runs[-1] = (runs[-1][0] + value, style)
        else:
            runs.append((value, style))
    return runs


__all__ = ["highlight_sql_line"]
