"""Headless UI that plays by itself using the shared RNG."""
from __future__ import annotations

import asyncio
import json
from typing import Any, List, Sequence, Tuple

from narrator.core.rng import RNG
from narrator.domain.ui import SelectConfig, SelectOption, default_option, prepare_options
from narrator.utils.logger import get_logger


class AutoPlayUi:
    """Picks options through the game's RNG so sessions replay exactly.

    Timed selections resolve to the preselected option once the time limit
    elapses; ``time_scale`` shrinks the wait (0 skips it).
    """

    def __init__(self, *, rng: RNG, debug: bool = False, time_scale: float = 0.0) -> None:
        self._rng = rng
        self._debug = debug
        self._time_scale = time_scale
        self._logger = get_logger("narrator.ui")
        self.transcript: List[str] = []
        self.selections: List[Tuple[str | None, Any]] = []

    async def start(self) -> None:
        self._logger.verbose("Auto-play started")

    async def end(self) -> None:
        self._logger.verbose("Auto-play finished")

    async def text(self, message: str) -> None:
        self.transcript.append(message)

    async def user_select(
        self,
        options: Sequence[SelectOption[Any]],
        config: SelectConfig[Any] | None = None,
    ) -> Any:
        ordered = prepare_options(options, config, self._rng)
        if config is not None and config.time_limit_ms is not None:
            await asyncio.sleep(config.time_limit_ms / 1000 * self._time_scale)
            chosen = default_option(ordered, config)
        else:
            enabled = [option for option in ordered if option.enabled] or ordered
            chosen = self._rng.pick(enabled)
        prompt = config.prompt if config is not None else None
        self.selections.append((prompt, chosen.value))
        self._logger.verbose(f"user selects: {json.dumps(chosen.value, default=str)}")
        return chosen.value
