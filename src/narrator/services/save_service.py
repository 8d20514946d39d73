"""Serialization helpers and file storage for savegames."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping

from narrator.core.rng import RNG
from narrator.core.types import JsonDict
from narrator.data.errors import DataLoadError
from narrator.data.json_loader import dump_json, load_json
from narrator.services.errors import SaveLoadError

SavePayload = Dict[str, Any]


@dataclass(slots=True)
class SaveData:
    """Validated contents of a savegame."""

    current_story_source: str | None
    local: Dict[str, JsonDict] = field(default_factory=dict)
    global_state: JsonDict = field(default_factory=dict)


class SaveService:
    """Converts game records to/from the savegame payload."""

    def serialize(
        self,
        *,
        current_story_source: str | None,
        local: Mapping[str, JsonDict],
        global_state: JsonDict,
        rng: RNG | None = None,
    ) -> SavePayload:
        """Return a JSON-serializable payload for disk persistence."""
        payload: SavePayload = {
            "currentStory": current_story_source or "",
            "local": {source: dict(record) for source, record in local.items()},
            "global": dict(global_state),
            "metadata": self._build_metadata(local, rng),
        }
        return payload

    def deserialize(self, payload: object) -> SaveData:
        """Validate a parsed payload; raises SaveLoadError on malformed data."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        if "global" not in payload or "local" not in payload:
            raise SaveLoadError("Save data is missing required sections.")

        global_state = payload["global"]
        if not isinstance(global_state, dict):
            raise SaveLoadError("global must be an object.")

        raw_local = payload["local"]
        if not isinstance(raw_local, dict):
            raise SaveLoadError("local must be an object.")
        local: Dict[str, JsonDict] = {}
        for source, record in raw_local.items():
            if not isinstance(record, dict):
                raise SaveLoadError(f"local['{source}'] must be an object.")
            local[source] = record

        current = payload.get("currentStory")
        if current is not None and not isinstance(current, str):
            raise SaveLoadError("currentStory must be a string if provided.")

        return SaveData(
            current_story_source=current or None,
            local=local,
            global_state=global_state,
        )

    @staticmethod
    def _build_metadata(local: Mapping[str, JsonDict], rng: RNG | None) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {
            "savedAt": datetime.now(timezone.utc).isoformat(),
            "storyCount": len(local),
        }
        if rng is not None:
            metadata["rng"] = rng.export_state()
        return metadata


class SaveGameStore:
    """Reads and writes savegame files inside a single directory."""

    def __init__(self, base_dir: Path | str) -> None:
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, file: str) -> Path:
        if not file or Path(file).name != file:
            raise SaveLoadError(f"Invalid savegame name: {file!r}")
        return self._base_dir / file

    def exists(self, file: str) -> bool:
        return self.path_for(file).exists()

    def read(self, file: str) -> object:
        """Load and parse the payload stored in ``file``."""
        try:
            return load_json(self.path_for(file))
        except DataLoadError as exc:
            raise SaveLoadError(str(exc)) from exc

    def write(self, file: str, payload: SavePayload, *, indent: int | None = None) -> Path:
        """Persist the payload, creating the save directory when absent."""
        path = self.path_for(file)
        try:
            dump_json(path, payload, indent=indent)
        except (OSError, TypeError, ValueError) as exc:
            raise SaveLoadError(f"Unable to write savegame {path}: {exc}") from exc
        return path

    def list_files(self) -> List[str]:
        """Return the savegame file names, sorted."""
        if not self._base_dir.is_dir():
            return []
        return sorted(entry.name for entry in self._base_dir.iterdir() if entry.is_file())
