"""Round evaluation: classify four slots into a payout tier."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Sequence

from .money import ZERO
from .symbols import SLOTS_PER_ROUND

if TYPE_CHECKING:  # pragma: no cover
    from .ledger import Ledger


class Tier(str, Enum):
    JACKPOT = "jackpot"
    ALL_DIFFERENT = "all_different"
    DOUBLE = "double"
    NOTHING = "nothing"


def _check(slots: Sequence[Any]) -> None:
    if len(slots) != SLOTS_PER_ROUND:
        raise ValueError(f"expected {SLOTS_PER_ROUND} slots, got {len(slots)}")


def is_jackpot(slots: Sequence[Any]) -> bool:
    return all(slot == slots[0] for slot in slots)


def is_all_different(slots: Sequence[Any]) -> bool:
    return len(set(slots)) == len(slots)


def is_double(slots: Sequence[Any]) -> bool:
    # Adjacent pairs only: (0,1), (1,2), (2,3).
    return any(slots[i] == slots[i + 1] for i in range(len(slots) - 1))


def classify(slots: Sequence[Any]) -> Tier:
    """
    Return the single tier for ``slots``. First match wins:
      Jackpot → AllDifferent → Double → Nothing
    """
    _check(slots)
    if is_jackpot(slots):
        return Tier.JACKPOT
    if is_all_different(slots):
        return Tier.ALL_DIFFERENT
    if is_double(slots):
        return Tier.DOUBLE
    return Tier.NOTHING


def payout_for(tier: Tier, ledger: "Ledger") -> Decimal:
    if tier is Tier.JACKPOT:
        return ledger.jackpot
    if tier is Tier.ALL_DIFFERENT:
        return ledger.all_different
    if tier is Tier.DOUBLE:
        return ledger.double
    return ZERO


def evaluate(slots: Sequence[Any], ledger: "Ledger") -> Tier:
    """Classify ``slots`` and apply the tier's payout to ``ledger``."""

    tier = classify(slots)
    ledger.give_winnings(payout_for(tier, ledger))
    return tier
