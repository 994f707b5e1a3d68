"""Symbol sources used to draw the four slots of a round."""

from __future__ import annotations

import random
from typing import Any, Iterable, Optional, Protocol, Sequence, Tuple, runtime_checkable

from .errors import EmptyAlphabetError, SymbolSourceExhausted

DEFAULT_ALPHABET: Tuple[str, ...] = ("A", "B", "C", "D", "E")
SLOTS_PER_ROUND = 4


@runtime_checkable
class SymbolSource(Protocol):
    """Anything that can pick one symbol from an alphabet."""

    def draw(self, alphabet: Sequence[Any]) -> Any:
        """Return one element of ``alphabet``."""


def _require_alphabet(alphabet: Sequence[Any]) -> None:
    if not alphabet:
        raise EmptyAlphabetError("cannot draw a symbol from an empty alphabet")


class RandomSymbolSource:
    """Uniform draws with replacement, backed by a private ``random.Random``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def draw(self, alphabet: Sequence[Any]) -> Any:
        _require_alphabet(alphabet)
        return self._rng.choice(alphabet)


class ScriptedSymbolSource:
    """Replays a fixed symbol sequence, ignoring the alphabet's odds.

    Symbols outside the alphabet are allowed so tests can script any pattern.
    """

    def __init__(self, symbols: Iterable[Any]) -> None:
        self._symbols = list(symbols)
        self._pos = 0

    @classmethod
    def from_rounds(cls, *rounds: Iterable[Any]) -> "ScriptedSymbolSource":
        flat = []
        for slots in rounds:
            flat.extend(slots)
        return cls(flat)

    @property
    def remaining(self) -> int:
        return len(self._symbols) - self._pos

    def draw(self, alphabet: Sequence[Any]) -> Any:
        _require_alphabet(alphabet)
        if self._pos >= len(self._symbols):
            raise SymbolSourceExhausted(f"scripted source exhausted after {self._pos} draws")
        symbol = self._symbols[self._pos]
        self._pos += 1
        return symbol


def draw_four(source: SymbolSource, alphabet: Sequence[Any] = DEFAULT_ALPHABET) -> Tuple[Any, ...]:
    """Draw the slots of one round, each independently."""

    _require_alphabet(alphabet)
    return tuple(source.draw(alphabet) for _ in range(SLOTS_PER_ROUND))
