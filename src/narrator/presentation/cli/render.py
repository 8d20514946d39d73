"""Plain-text rendering helpers for the console UI."""
from __future__ import annotations

from typing import Any, List, Sequence

from narrator.domain.ui import SelectOption


def format_options(options: Sequence[SelectOption[Any]], preselected: Any = None) -> List[str]:
    """Return numbered menu lines; disabled options are marked and preselected ones starred."""
    lines: List[str] = []
    for index, option in enumerate(options, start=1):
        marker = "*" if preselected is not None and option.value == preselected else " "
        suffix = "" if option.enabled else " (unavailable)"
        lines.append(f"{marker}{index}. {option.text}{suffix}")
    return lines


def parse_choice(raw: str, options: Sequence[SelectOption[Any]]) -> SelectOption[Any] | None:
    """Return the enabled option matching a 1-based index, or None when invalid."""
    try:
        index = int(raw.strip())
    except ValueError:
        return None
    if not 1 <= index <= len(options):
        return None
    option = options[index - 1]
    return option if option.enabled else None
