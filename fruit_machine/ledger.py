"""The ledger: single authority for prize pot, player cash and free plays."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

from . import money
from .errors import ConfigError, InvalidAmountError

logger = logging.getLogger("fruit_machine.ledger")

DEFAULT_COST_OF_PLAY = Decimal("0.20")
DEFAULT_PRIZE_POT = Decimal("20.00")
JACKPOT = Decimal("20.00")
ALL_DIFFERENT = Decimal("10.00")
DOUBLE_MULTIPLE = 5


@dataclass
class CurrentGame:
    """Outcome of the most recent round; overwritten every round."""

    winnings: Decimal = money.ZERO
    free_plays_awarded: int = 0

    def clear(self) -> None:
        self.winnings = money.ZERO
        self.free_plays_awarded = 0


@dataclass
class Ledger:
    """
    Money and credit state for one player session.

    Cash path: take_payment() moves cost_of_play from player to pot and
    give_winnings() moves the payout back, so player_cash + prize_pot is
    unchanged across the pair. When the pot can't cover a payout the player
    gets free plays instead and no money moves.

    player_cash is allowed to go negative; take_payment() never refuses.
    """

    player_cash: Decimal = money.ZERO
    prize_pot: Decimal = DEFAULT_PRIZE_POT
    cost_of_play: Decimal = DEFAULT_COST_OF_PLAY
    free_plays: int = 0
    jackpot: Decimal = JACKPOT
    all_different: Decimal = ALL_DIFFERENT
    double: Optional[Decimal] = None
    current_game: CurrentGame = field(default_factory=CurrentGame)

    def __post_init__(self) -> None:
        try:
            self.player_cash = money.to_money(self.player_cash)
            self.prize_pot = money.to_money(self.prize_pot)
            self.cost_of_play = money.to_money(self.cost_of_play)
            self.jackpot = money.to_money(self.jackpot)
            self.all_different = money.to_money(self.all_different)
            if self.double is None:
                self.double = money.to_money(self.cost_of_play * DOUBLE_MULTIPLE)
            else:
                self.double = money.to_money(self.double)
        except (TypeError, ValueError) as exc:
            raise ConfigError(str(exc)) from exc
        if self.cost_of_play <= 0:
            raise ConfigError("cost_of_play must be > 0")
        if self.prize_pot < 0:
            raise ConfigError("prize_pot must be >= 0")
        if isinstance(self.free_plays, bool) or not isinstance(self.free_plays, int) or self.free_plays < 0:
            raise ConfigError("free_plays must be an integer >= 0")
        for name in ("jackpot", "all_different", "double"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} payout must be >= 0")

    # ----- Queries -----------------------------------------------------------

    def is_payable(self, amount: Decimal) -> bool:
        return self.prize_pot >= amount

    def is_free_play(self) -> bool:
        return self.free_plays > 0

    def free_plays_for(self, amount: Decimal) -> int:
        # Literal scaling rule: multiplied by cost_of_play, truncated.
        return money.floor_int(amount * self.cost_of_play)

    # ----- Mutations ---------------------------------------------------------

    def take_payment(self) -> bool:
        """Charge one round. Returns True when a free play was spent."""

        if self.is_free_play():
            self.free_plays -= 1
            logger.debug("free play used, %d left", self.free_plays)
            return True

        self.player_cash = money.sub(self.player_cash, self.cost_of_play)
        self.prize_pot = money.add(self.prize_pot, self.cost_of_play)
        if self.player_cash < 0:
            logger.warning("player cash is negative: %s", self.player_cash)
        return False

    def give_winnings(self, amount: Any) -> None:
        """Pay ``amount`` from the pot, or grant free plays if the pot is short."""

        amount = money.to_money(amount)
        if amount < 0:
            raise InvalidAmountError(f"payout must be >= 0, got {amount}")

        if amount == 0:
            self.current_game.clear()
            return

        if self.is_payable(amount):
            self.prize_pot = money.sub(self.prize_pot, amount)
            self.player_cash = money.add(self.player_cash, amount)
            self.current_game.winnings = amount
            self.current_game.free_plays_awarded = 0
            return

        granted = self.free_plays_for(amount)
        logger.info(
            "prize pot %s can't cover %s; granting %d free plays",
            self.prize_pot,
            amount,
            granted,
        )
        self.free_plays += granted
        self.current_game.winnings = money.ZERO
        self.current_game.free_plays_awarded = granted

    def snapshot(self) -> Dict[str, Any]:
        return {
            "prize_pot": self.prize_pot,
            "player_cash": self.player_cash,
            "free_plays": self.free_plays,
            "winnings": self.current_game.winnings,
            "free_plays_awarded": self.current_game.free_plays_awarded,
        }
