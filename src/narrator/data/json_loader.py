"""JSON file access for savegames and other persisted records."""
from __future__ import annotations

import json
from pathlib import Path

from .errors import DataLoadError


def load_json(path: Path) -> object:
    """Parse the JSON document at ``path``.

    Missing, unreadable, non UTF-8 or malformed files all surface as DataLoadError.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"No such file: {path}") from exc
    except UnicodeDecodeError as exc:
        raise DataLoadError(f"{path} is not UTF-8 encoded text ({exc.reason})") from exc
    except OSError as exc:
        raise DataLoadError(f"Cannot read {path}: {exc.strerror or exc}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"{path} is not valid JSON: {exc}") from exc


def dump_json(path: Path, payload: object, *, indent: int | None = None) -> None:
    """Write ``payload`` as JSON, creating the parent directory if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=indent, sort_keys=True), encoding="utf-8")
