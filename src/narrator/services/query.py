"""Dotted-path read access to game variables for the debug console."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Mapping, Tuple

from narrator.core.types import QueryNamespace
from narrator.services.errors import QuerySyntaxError

CURRENT_STORY = "currentStory"
_RECORD_NAMESPACES = ("global", "local")

_MISSING = object()


@dataclass(frozen=True, slots=True)
class Query:
    """Parsed query path."""

    namespace: QueryNamespace
    keys: Tuple[str, ...] = ()


def parse_query(path: str) -> Query:
    """Split ``path`` into namespace and keys.

    ``currentStory`` takes no keys; ``global.<key>`` and ``local.<key>`` take
    one or more dotted keys. Anything else is a QuerySyntaxError.
    """
    text = path.strip()
    if text == CURRENT_STORY:
        return Query(namespace=CURRENT_STORY)
    namespace, _, rest = text.partition(".")
    if namespace not in _RECORD_NAMESPACES:
        raise QuerySyntaxError(
            f"Unknown query '{path}'. Use {CURRENT_STORY}, global.<key> or local.<key>"
        )
    keys = tuple(rest.split(".")) if rest else ()
    if not keys or any(not key for key in keys):
        raise QuerySyntaxError(f"Query '{path}' needs a key after '{namespace}.'")
    return Query(namespace=namespace, keys=keys)  # type: ignore[arg-type]


def lookup(record: Mapping[str, Any] | None, keys: Tuple[str, ...]) -> str | None:
    """Return the JSON-encoded value at ``keys`` or None when it is not present."""
    value: Any = record if record is not None else _MISSING
    for key in keys:
        if isinstance(value, Mapping):
            value = value.get(key, _MISSING)
        elif isinstance(value, list) and key.isdigit() and int(key) < len(value):
            value = value[int(key)]
        else:
            value = _MISSING
        if value is _MISSING:
            return None
    return json.dumps(value, sort_keys=True, default=str)


def list_keys(record: Mapping[str, Any] | None) -> List[str]:
    if not record:
        return []
    return sorted(str(key) for key in record.keys())


__all__ = ["CURRENT_STORY", "Query", "list_keys", "lookup", "parse_query"]
