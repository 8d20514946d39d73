"""Deterministic RNG wrapper built on top of random.Random."""
from __future__ import annotations

import time
from dataclasses import dataclass
from random import Random
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, TypeVar, Union

T_co = TypeVar("T_co")

_WORD_BITS = 64
_WORD_SPAN = 1 << _WORD_BITS
_SIGNED_OFFSET = 1 << (_WORD_BITS - 1)

INTEGER_MIN = -_SIGNED_OFFSET
INTEGER_MAX = _SIGNED_OFFSET - 1


@dataclass(frozen=True, slots=True)
class RNGStatus:
    """Seed plus number of draws consumed so far."""

    seed: int
    used_count: int


@dataclass(frozen=True, slots=True)
class WeightedEntry:
    """Value paired with its relative weight for weighted picks."""

    value: Any
    weight: int


WeightedInput = Union[WeightedEntry, Tuple[Any, int]]


class RNG:
    """Seeded engine where every primitive draw consumes exactly one 64-bit word.

    Keeping the entropy cost of each draw fixed is what makes ``discard`` exact:
    an engine built with ``RNG(seed, discard=n)`` behaves like one that already
    served ``n`` draws of any kind.
    """

    def __init__(self, seed: int | None = None, discard: int = 0) -> None:
        if discard < 0:
            raise ValueError("discard must be a non-negative integer.")
        self._seed = seed if seed is not None else time.time_ns() // 1_000_000
        self._random = Random(self._seed)
        self._used_count = 0
        for _ in range(discard):
            self._next_word()

    @classmethod
    def from_state(cls, payload: Mapping[str, object]) -> "RNG":
        """Rebuild an engine positioned where an exported one was."""
        seed = payload.get("seed")
        used_count = payload.get("usedCount", 0)
        if not isinstance(seed, int) or isinstance(seed, bool):
            raise ValueError("RNG state requires an integer seed.")
        if not isinstance(used_count, int) or isinstance(used_count, bool) or used_count < 0:
            raise ValueError("RNG state requires a non-negative usedCount.")
        return cls(seed, discard=used_count)

    def get_status(self) -> RNGStatus:
        """Return the seed and the number of draws consumed."""
        return RNGStatus(seed=self._seed, used_count=self._used_count)

    def export_state(self) -> dict[str, int]:
        """Return a JSON-friendly snapshot of the status."""
        return {"seed": self._seed, "usedCount": self._used_count}

    def integer(self, a: int | None = None, b: int | None = None) -> int:
        """Return a random integer.

        ``integer()`` spans the full signed 64-bit range, ``integer(max)`` returns
        a value in ``[0, max]`` and ``integer(min, max)`` one in ``[min, max]``.
        """
        if a is None:
            return self._next_word() - _SIGNED_OFFSET
        low, high = (0, a) if b is None else (a, b)
        if low > high:
            raise ValueError(f"Invalid integer range [{low}, {high}].")
        span = high - low + 1
        return low + (self._next_word() * span >> _WORD_BITS)

    def bool(self, chances: float = 50, total: float = 100) -> bool:
        """Return True with probability ``chances / total``."""
        if total <= 0:
            raise ValueError("total must be positive.")
        probability = chances / total
        return self.integer(0, 99) < probability * 100

    def pick(self, seq: Sequence[T_co]) -> T_co:
        """Return a uniformly selected element from the non-empty sequence."""
        if not seq:
            raise ValueError("Cannot pick from an empty sequence.")
        return seq[self.integer(0, len(seq) - 1)]

    def weighted_pick(self, entries: Sequence[WeightedInput]) -> Any:
        """Return the value of one entry, chosen proportionally to its weight.

        A single draw in ``[1, total]`` walks the entries in order; the first
        entry whose cumulative weight reaches the draw wins. When every weight
        is zero the last entry is returned.
        """
        if not entries:
            raise ValueError("Cannot pick from an empty sequence.")
        normalized = [_as_weighted(entry) for entry in entries]
        total = sum(entry.weight for entry in normalized)
        drawn = self.integer(1, max(total, 1))
        cumulative = 0
        for entry in normalized:
            cumulative += entry.weight
            if entry.weight > 0 and cumulative >= drawn:
                return entry.value
        return normalized[-1].value

    def shuffle(self, seq: Iterable[T_co]) -> List[T_co]:
        """Return a new list with the elements in random order (Fisher-Yates)."""
        result = list(seq)
        if not result:
            raise ValueError("Cannot shuffle an empty sequence.")
        for index in range(len(result) - 1, 0, -1):
            swap = self.integer(0, index)
            result[index], result[swap] = result[swap], result[index]
        return result

    def _next_word(self) -> int:
        self._used_count += 1
        return self._random.getrandbits(_WORD_BITS)


def _as_weighted(entry: WeightedInput) -> WeightedEntry:
    if isinstance(entry, WeightedEntry):
        weighted = entry
    else:
        value, weight = entry
        weighted = WeightedEntry(value=value, weight=weight)
    if weighted.weight < 0:
        raise ValueError("Weights must be non-negative.")
    return weighted


__all__ = ["INTEGER_MAX", "INTEGER_MIN", "RNG", "RNGStatus", "WeightedEntry"]
