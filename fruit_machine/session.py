"""Interactive session loop.

The loop talks to the player only through the ``ask`` and ``emit`` callables
so it can be driven by a scripted prompt in tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from . import money
from .config import MachineConfig, parse_cash, parse_yes_no
from .machine import Machine, RoundResult
from .symbols import SymbolSource
from .tracker import SessionTracker

logger = logging.getLogger("fruit_machine.session")

Ask = Callable[[str], str]
Emit = Callable[[str], None]

CASH_QUESTION = "How much money would you like to start with? "
PLAY_AGAIN_QUESTION = "Would you like to play again? y/n "

END_BANKRUPT = "bankrupt"
END_DECLINED = "declined"
END_INPUT_CLOSED = "input_closed"


@dataclass
class SessionSummary:
    ended_by: str
    stats: Dict[str, Any]
    final: Dict[str, Any]


def ask_starting_cash(ask: Ask, emit: Emit, *, truncate: bool) -> Decimal:
    """Keep asking until the answer starts with a non-negative number."""

    while True:
        amount = parse_cash(ask(CASH_QUESTION), truncate=truncate)
        if amount is not None:
            return amount
        emit("Please enter an amount of money, e.g. 10.")


def render_round(result: RoundResult, machine: Machine, pot_before: Decimal, currency: str) -> List[str]:
    ledger = machine.ledger
    return [
        f"The prize pot is {money.fmt(pot_before, currency)}.",
        "| " + " | ".join(str(s) for s in result.slots) + " |",
        f"You won {money.fmt(result.winnings, currency)}.",
        f"You have {result.free_plays_awarded} free plays.",
        f"You have {money.fmt(ledger.player_cash, currency)} in the bank.",
        f"Free plays: {ledger.free_plays}",
    ]


def render_summary(summary: SessionSummary, currency: str) -> List[str]:
    stats = summary.stats
    return [
        f"Rounds played: {stats['rounds']} ({stats['free_rounds']} free)",
        f"Staked {money.fmt(stats['total_staked'], currency)}, "
        f"won {money.fmt(stats['total_won'], currency)}.",
        f"Leaving with {money.fmt(summary.final['player_cash'], currency)}.",
    ]


def run_session(
    config: MachineConfig,
    *,
    ask: Optional[Ask] = None,
    emit: Optional[Emit] = None,
    clear: Optional[Callable[[], None]] = None,
    source: Optional[SymbolSource] = None,
    starting_cash: Any = None,
) -> SessionSummary:
    """
    Play rounds until the player is out of cash or declines to continue.
    The first round is played without asking.
    """
    ask = ask or input
    emit = emit or print
    if clear is not None:
        clear()
    if starting_cash is None:
        starting_cash = ask_starting_cash(ask, emit, truncate=config.truncate_starting_cash)

    machine = Machine.from_config(config, starting_cash, source)
    ledger = machine.ledger
    tracker = SessionTracker()
    tracker.on_session_start(ledger)
    logger.info("session start cash=%s pot=%s", ledger.player_cash, ledger.prize_pot)

    while True:
        if clear is not None:
            clear()
        pot_before = ledger.prize_pot
        result = machine.play_round()
        tracker.on_round(result, ledger)
        for line in render_round(result, machine, pot_before, config.currency):
            emit(line)

        if ledger.player_cash <= 0:
            emit("You have run out of money.")
            ended_by = END_BANKRUPT
            break
        try:
            answer = ask(PLAY_AGAIN_QUESTION)
        except (EOFError, KeyboardInterrupt):
            ended_by = END_INPUT_CLOSED
            break
        if not parse_yes_no(answer):
            ended_by = END_DECLINED
            break

    summary = SessionSummary(ended_by=ended_by, stats=tracker.snapshot(), final=ledger.snapshot())
    logger.info("session end (%s) after %d rounds", ended_by, summary.stats["rounds"])
    return summary
