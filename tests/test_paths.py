import sys
from pathlib import Path

from narrator.data import paths


def test_get_stories_path_base_path(tmp_path: Path) -> None:
    assert paths.get_stories_path(tmp_path) == tmp_path
    assert paths.get_savegames_path(tmp_path) == tmp_path


def test_get_stories_path_source_repo_exists() -> None:
    stories_path = paths.get_stories_path()
    assert stories_path.name == "stories"
    assert stories_path.exists()
    assert paths.get_savegames_path().name == "save"


def test_get_stories_path_pyinstaller_meipass(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "_MEIPASS", str(tmp_path), raising=False)
    assert paths.get_stories_path() == tmp_path / "data" / "stories"
    assert paths.get_savegames_path() == tmp_path / "data" / "save"
