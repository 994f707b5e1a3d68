"""Per-session statistics."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from . import money
from .evaluator import Tier
from .ledger import Ledger
from .machine import RoundResult


class SessionTracker:
    """Lightweight runtime tracker fed once per round."""

    def __init__(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.rounds = 0
        self.free_rounds = 0
        self.total_staked = money.ZERO
        self.total_won = money.ZERO
        self.free_plays_awarded = 0
        self.tier_counts: Dict[str, int] = {t.value: 0 for t in Tier}
        self.starting_cash = money.ZERO
        self.cash_peak = money.ZERO
        self.cash_low = money.ZERO
        self.max_drawdown = money.ZERO

    def on_session_start(self, ledger: Ledger) -> None:
        self._reset()
        self.starting_cash = ledger.player_cash
        self.cash_peak = ledger.player_cash
        self.cash_low = ledger.player_cash

    def on_round(self, result: RoundResult, ledger: Ledger) -> None:
        self.rounds += 1
        if result.paid_with_free_play:
            self.free_rounds += 1
        else:
            self.total_staked = money.add(self.total_staked, ledger.cost_of_play)
        self.total_won = money.add(self.total_won, result.winnings)
        self.free_plays_awarded += result.free_plays_awarded
        self.tier_counts[result.tier.value] += 1

        cash = ledger.player_cash
        self.cash_peak = max(self.cash_peak, cash)
        self.cash_low = min(self.cash_low, cash)
        self.max_drawdown = max(self.max_drawdown, money.sub(self.cash_peak, cash))

    def return_to_player(self) -> Decimal:
        """Won over staked, as a percentage."""
        if self.total_staked == 0:
            return money.ZERO
        return money.to_money(self.total_won / self.total_staked * 100)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "rounds": self.rounds,
            "free_rounds": self.free_rounds,
            "total_staked": self.total_staked,
            "total_won": self.total_won,
            "free_plays_awarded": self.free_plays_awarded,
            "tiers": dict(self.tier_counts),
            "starting_cash": self.starting_cash,
            "cash_peak": self.cash_peak,
            "cash_low": self.cash_low,
            "max_drawdown": self.max_drawdown,
            "rtp_pct": self.return_to_player(),
        }
