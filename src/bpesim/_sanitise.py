"""
Utilities for rendering symbols as displayable strings.
"""

import unicodedata

from .types import Symbol, SymbolPair


def _escape_char(c: str) -> str:
    """Escape control and separator characters, leave the rest as-is."""
    # categories C* (control, format, unassigned) and Z* (spaces, line breaks)
    # would hide where one symbol ends in a log line
    if unicodedata.category(c)[0] in "CZ":
        return f"\\u{ord(c):04x}"
    return c


def render_symbol(sym: Symbol) -> str:
    """Render a symbol for logs; the empty symbol shows as ``''``."""
    if not sym:
        return "''"
    return "".join(_escape_char(c) for c in sym)


def render_pair(pair: SymbolPair) -> str:
    """Render a symbol pair as ``[left][right]``."""
    return f"[{render_symbol(pair[0])}][{render_symbol(pair[1])}]"
