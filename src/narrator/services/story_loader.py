"""Discovery of story files on disk."""
from __future__ import annotations

import importlib.util
import re
import sys
from pathlib import Path
from typing import Iterable, Iterator

from narrator.domain.errors import StoryLoadError
from narrator.domain.story import StoryDef, coerce_story_def

STORY_EXT = ".story.py"
STORY_ATTRIBUTE = "story"

_MODULE_PREFIX = "narrator_stories"


def iter_story_files(folders: Iterable[Path | str]) -> Iterator[Path]:
    """Yield story files under ``folders`` recursively, in a stable order."""
    for folder in folders:
        yield from _walk(Path(folder))


def _walk(folder: Path) -> Iterator[Path]:
    for entry in sorted(folder.iterdir(), key=lambda path: path.name):
        if entry.is_dir():
            yield from _walk(entry)
        elif entry.name.endswith(STORY_EXT):
            yield entry


def source_for(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` with posix separators."""
    resolved = path.resolve()
    try:
        return resolved.relative_to(root.resolve()).as_posix()
    except ValueError:
        return resolved.as_posix()


def load_story_definition(path: Path, source: str | None = None) -> StoryDef:
    """Import a story file and return the definition it exports as ``story``.

    The module is only left in ``sys.modules`` when it yields a valid definition.
    """
    module_name = _module_name(source or path.as_posix())
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise StoryLoadError(f"Unable to import story file {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        return _definition_from(module, spec, path)
    except StoryLoadError:
        sys.modules.pop(module_name, None)
        raise


def _definition_from(module, spec, path: Path) -> StoryDef:
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise StoryLoadError(f"Error importing {path}: {exc}") from exc

    raw = getattr(module, STORY_ATTRIBUTE, None)
    if raw is None:
        raise StoryLoadError(f"{path} does not define a '{STORY_ATTRIBUTE}' attribute")
    try:
        return coerce_story_def(raw)
    except StoryLoadError as exc:
        raise StoryLoadError([f"Invalid story in {path}:", *exc.errors]) from exc


def _module_name(source: str) -> str:
    slug = re.sub(r"[^0-9a-zA-Z_]+", "_", source).strip("_")
    return f"{_MODULE_PREFIX}_{slug}"


__all__ = [
    "STORY_EXT",
    "iter_story_files",
    "load_story_definition",
    "source_for",
]
