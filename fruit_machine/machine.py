"""Round orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Optional, Sequence, Tuple

from .evaluator import Tier, evaluate
from .ledger import Ledger
from .symbols import DEFAULT_ALPHABET, RandomSymbolSource, SymbolSource, draw_four

if TYPE_CHECKING:  # pragma: no cover
    from .config import MachineConfig

logger = logging.getLogger("fruit_machine.machine")


@dataclass(frozen=True)
class RoundResult:
    slots: Tuple[Any, ...]
    tier: Tier
    paid_with_free_play: bool
    winnings: Decimal
    free_plays_awarded: int


def play_round(
    ledger: Ledger,
    source: SymbolSource,
    alphabet: Sequence[Any] = DEFAULT_ALPHABET,
) -> RoundResult:
    """
    Play one round against ``ledger``:
      1) draw four symbols
      2) take payment (cash or one free play)
      3) classify and pay out
    Payment is always taken before the outcome is known.
    """
    slots = draw_four(source, alphabet)
    free = ledger.take_payment()
    tier = evaluate(slots, ledger)
    result = RoundResult(
        slots=slots,
        tier=tier,
        paid_with_free_play=free,
        winnings=ledger.current_game.winnings,
        free_plays_awarded=ledger.current_game.free_plays_awarded,
    )
    logger.debug(
        "round slots=%s tier=%s free=%s winnings=%s awarded=%d cash=%s pot=%s",
        "".join(str(s) for s in slots),
        tier.value,
        free,
        result.winnings,
        result.free_plays_awarded,
        ledger.player_cash,
        ledger.prize_pot,
    )
    return result


class Machine:
    """A ledger, a symbol source and an alphabet wired together."""

    def __init__(
        self,
        ledger: Ledger,
        source: Optional[SymbolSource] = None,
        alphabet: Sequence[Any] = DEFAULT_ALPHABET,
    ) -> None:
        self.ledger = ledger
        self.source = source if source is not None else RandomSymbolSource()
        self.alphabet = tuple(alphabet)

    @classmethod
    def from_config(
        cls,
        config: "MachineConfig",
        player_cash: Any = 0,
        source: Optional[SymbolSource] = None,
    ) -> "Machine":
        ledger = Ledger(
            player_cash=player_cash,
            prize_pot=config.prize_pot,
            cost_of_play=config.cost_of_play,
        )
        if source is None:
            source = RandomSymbolSource(config.seed)
        return cls(ledger, source, config.alphabet)

    def play_round(self) -> RoundResult:
        return play_round(self.ledger, self.source, self.alphabet)
