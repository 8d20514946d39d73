"""UI capability consumed by the game and by running stories."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Protocol, Sequence, TypeVar

from narrator.core.rng import RNG

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class SelectOption(Generic[T]):
    """Option offered to the player."""

    text: str
    value: T
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class SelectConfig(Generic[T]):
    """Optional presentation settings for ``user_select``."""

    prompt: str | None = None
    random_sort: bool = False
    preselected: T | None = None
    time_limit_ms: int | None = None


class GameUi(Protocol):
    """Interaction surface a story can suspend on."""

    async def start(self) -> None:
        ...

    async def end(self) -> None:
        ...

    async def text(self, message: str) -> None:
        ...

    async def user_select(
        self,
        options: Sequence[SelectOption[Any]],
        config: SelectConfig[Any] | None = None,
    ) -> Any:
        ...


UiFactory = Callable[..., GameUi]


def prepare_options(
    options: Sequence[SelectOption[T]],
    config: SelectConfig[T] | None,
    rng: RNG,
) -> List[SelectOption[T]]:
    """Validate the options and apply random sorting through the shared RNG."""
    if not options:
        raise ValueError("user_select requires at least one option.")
    if config is not None and config.random_sort:
        return rng.shuffle(options)
    return list(options)


def default_option(options: Sequence[SelectOption[T]], config: SelectConfig[T] | None) -> SelectOption[T]:
    """Return the preselected option, else the first enabled one, else the first."""
    if config is not None and config.preselected is not None:
        for option in options:
            if option.value == config.preselected:
                return option
    for option in options:
        if option.enabled:
            return option
    return options[0]


__all__ = [
    "GameUi",
    "SelectConfig",
    "SelectOption",
    "UiFactory",
    "default_option",
    "prepare_options",
]
