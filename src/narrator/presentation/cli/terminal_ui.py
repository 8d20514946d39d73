"""Console-driven implementation of the game UI."""
from __future__ import annotations

import asyncio
import json
import threading
from typing import Any, Callable, Sequence

from narrator.core.rng import RNG
from narrator.domain.ui import SelectConfig, SelectOption, default_option, prepare_options
from narrator.presentation.cli.console import DebugConsole
from narrator.presentation.cli.render import format_options, parse_choice
from narrator.utils.logger import get_logger

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class ConsoleUi:
    """Prints story text and reads numbered choices from stdin.

    Lines starting with ``/`` are routed to the debug console once one is
    attached. A blank line picks the preselected (or first enabled) option.
    """

    def __init__(
        self,
        *,
        rng: RNG,
        debug: bool = False,
        input_fn: InputFn = input,
        output_fn: OutputFn = print,
    ) -> None:
        self._rng = rng
        self._debug = debug
        self._input = input_fn
        self._output = output_fn
        self._console: DebugConsole | None = None
        self._logger = get_logger("narrator.ui")
        self._pending: asyncio.Future | None = None

    def attach_console(self, console: DebugConsole) -> None:
        self._console = console

    async def start(self) -> None:
        self._output("=== Narrator ===")
        if self._debug:
            self._output("Debug mode enabled. Type /help for console commands.")

    async def end(self) -> None:
        self._output("The end. Goodbye!")

    async def text(self, message: str) -> None:
        self._output(message)

    async def user_select(
        self,
        options: Sequence[SelectOption[Any]],
        config: SelectConfig[Any] | None = None,
    ) -> Any:
        ordered = prepare_options(options, config, self._rng)
        fallback = default_option(ordered, config)
        if config is not None and config.prompt:
            self._output(config.prompt)
        for line in format_options(ordered, fallback.value):
            self._output(line)

        loop = asyncio.get_running_loop()
        deadline = None
        if config is not None and config.time_limit_ms is not None:
            deadline = loop.time() + config.time_limit_ms / 1000
            self._output(f"(auto-selects in {config.time_limit_ms / 1000:g}s)")

        while True:
            timeout = None if deadline is None else max(deadline - loop.time(), 0)
            raw = await self._read_line(timeout)
            if raw is None:
                chosen = fallback
                break
            if self._console is not None and DebugConsole.is_command(raw):
                self._console.process(raw)
                continue
            if not raw.strip():
                chosen = fallback
                break
            selected = parse_choice(raw, ordered)
            if selected is None:
                self._output(f"Invalid selection. Please enter a number between 1 and {len(ordered)}.")
                continue
            chosen = selected
            break

        self._logger.verbose(f"user selects: {json.dumps(chosen.value, default=str)}")
        return chosen.value

    async def _read_line(self, timeout: float | None) -> str | None:
        """Read one line; None when the time limit expires first.

        A read that outlives its time limit stays pending and serves the next
        call, so a line typed after a timeout is never lost.
        """
        loop = asyncio.get_running_loop()
        if self._pending is None or self._pending.get_loop() is not loop:
            self._pending = loop.create_future()
            reader = threading.Thread(
                target=self._read_into,
                args=(loop, self._pending),
                name="narrator-input",
                daemon=True,
            )
            reader.start()
        try:
            line = await asyncio.wait_for(asyncio.shield(self._pending), timeout)
        except asyncio.TimeoutError:
            return None
        except BaseException:
            if self._pending.done():
                self._pending = None
            raise
        self._pending = None
        return line

    def _read_into(self, loop: asyncio.AbstractEventLoop, future: asyncio.Future) -> None:
        try:
            line = self._input("> ")
        except BaseException as exc:
            outcome = (_fail, future, exc)
        else:
            outcome = (_resolve, future, line)
        try:
            loop.call_soon_threadsafe(*outcome)
        except RuntimeError:
            # event loop already closed
            return


def _resolve(future: asyncio.Future, line: str) -> None:
    if not future.done():
        future.set_result(line)


def _fail(future: asyncio.Future, exc: BaseException) -> None:
    if not future.done():
        future.set_exception(exc)
