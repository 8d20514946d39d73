"""Default locations of the story and savegame folders."""
from __future__ import annotations

import sys
from pathlib import Path


def get_repo_root() -> Path:
    """Return the folder holding ``data/``: the checkout root, or the bundle dir when frozen."""
    bundle_dir = getattr(sys, "_MEIPASS", None)
    if getattr(sys, "frozen", False) and bundle_dir:
        return Path(bundle_dir)
    # src/narrator/data/paths.py -> checkout root
    return Path(__file__).resolve().parents[3]


def get_stories_path(base_path: Path | str | None = None) -> Path:
    """Return ``base_path`` or the bundled ``data/stories`` folder."""
    return Path(base_path) if base_path is not None else get_repo_root() / "data" / "stories"


def get_savegames_path(base_path: Path | str | None = None) -> Path:
    """Return ``base_path`` or the default ``data/save`` folder."""
    return Path(base_path) if base_path is not None else get_repo_root() / "data" / "save"
