"""Debug console commands available while playing."""
from __future__ import annotations

import re
from typing import Callable, Dict, List

from narrator.core.tokenizer import tokenize
from narrator.services.errors import QuerySyntaxError, SaveLoadError
from narrator.services.game import Game

AddMessage = Callable[[str], None]
CommandCall = Callable[["DebugConsole", List[str]], None]

_COMMAND_RE = re.compile(r"^\s*/([a-z_0-9]+)\s*(.*)$", re.IGNORECASE | re.DOTALL)
_QUERY_ROOTS = ("currentStory", "global.", "local.")


class DebugConsole:
    """Parses ``/command args`` lines and runs them against the game."""

    def __init__(self, game: Game, add_message: AddMessage = print) -> None:
        self._game = game
        self._add_message = add_message

    @staticmethod
    def is_command(text: str) -> bool:
        return text.lstrip().startswith("/")

    @property
    def available_commands(self) -> List[str]:
        return [f"/{name}" for name in _COMMANDS]

    def process(self, text: str) -> None:
        match = _COMMAND_RE.match(text)
        if match is None:
            self._add_message("Syntax error. Try with /help")
            return
        name = match.group(1).lower()
        command = _COMMANDS.get(name)
        if command is None:
            self._add_message(f"Unknown command {name}")
            return
        command(self, tokenize(match.group(2)))

    def autocomplete(self, text: str) -> List[str]:
        """Return completions for a ``/get`` path."""
        namespace, dot, rest = text.partition(".")
        if not dot:
            return [root for root in _QUERY_ROOTS if root.startswith(text)]
        if namespace not in ("global", "local"):
            return []
        return [f"{namespace}.{key}" for key in self._game.get_value_list(namespace) if key.startswith(rest)]

    def _help(self, args: List[str]) -> None:
        self._add_message(f"Available commands: {', '.join(self.available_commands)}")
        self._add_message("  /get currentStory | global.<key> | local.<key>")
        self._add_message("  /save <file>, /load <file>")

    def _echo(self, args: List[str]) -> None:
        self._add_message(" ".join(args))

    def _get(self, args: List[str]) -> None:
        if not args:
            self._add_message("Usage: /get <path>")
            return
        key = args[0]
        try:
            value = self._game.get_value(key)
        except QuerySyntaxError as exc:
            self._add_message(f"Error: {exc}")
            return
        if value is None:
            self._add_message(f"{key} not found or not defined")
        else:
            self._add_message(value)

    def _save(self, args: List[str]) -> None:
        if not args:
            self._add_message("Usage: /save <file>")
            return
        try:
            self._game.save_game(args[0])
        except SaveLoadError as exc:
            self._add_message(f"Error: {exc}")
            return
        self._add_message(f"Game saved into {args[0]}")

    def _load(self, args: List[str]) -> None:
        if not args:
            saves = self._game.get_save_game_list()
            self._add_message(f"Usage: /load <file> (available: {', '.join(saves) or 'none'})")
            return
        try:
            self._game.load_game(args[0])
        except SaveLoadError as exc:
            self._add_message(f"Error: {exc}")
            return
        self._add_message(f"Game loaded from {args[0]}")

    def _exit(self, args: List[str]) -> None:
        self._game.quit()


_COMMANDS: Dict[str, CommandCall] = {
    "help": DebugConsole._help,
    "echo": DebugConsole._echo,
    "get": DebugConsole._get,
    "save": DebugConsole._save,
    "load": DebugConsole._load,
    "exit": DebugConsole._exit,
}
