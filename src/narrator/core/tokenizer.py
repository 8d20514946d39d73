"""Argument splitting for console commands."""
from __future__ import annotations

from typing import List


def tokenize(text: str, *, escape: str = "\\", separator: str = " ", joiner: str = '"') -> List[str]:
    """Split ``text`` on ``separator``, keeping ``joiner``-quoted runs together.

    A joiner only opens a group when an unescaped matching joiner follows it;
    otherwise it is kept as a literal character. Quoted groups may be empty.
    """
    result: List[str] = []
    current = ""
    joining = False
    escaped = False

    for index, char in enumerate(text):
        if char == escape:
            if escaped:
                current += char
            escaped = not escaped
        elif char == joiner:
            if escaped:
                escaped = False
                current += char
            elif not joining:
                if _has_closing_joiner(text, index, escape, joiner):
                    joining = True
                    if current:
                        result.append(current)
                        current = ""
                else:
                    current += char
            else:
                result.append(current)
                current = ""
                joining = False
        elif char == separator:
            if joining:
                current += char
            elif current:
                result.append(current)
                current = ""
        else:
            current += char

    if current:
        result.append(current)
    return result


def _has_closing_joiner(text: str, start: int, escape: str, joiner: str) -> bool:
    position = text.find(joiner, start + 1)
    while position != -1:
        if text[position - 1] != escape:
            return True
        position = text.find(joiner, position + 1)
    return False


__all__ = ["tokenize"]
