"""Non-interactive batch play."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .config import MachineConfig
from .errors import ConfigError
from .machine import Machine
from .symbols import SymbolSource
from .tracker import SessionTracker

logger = logging.getLogger("fruit_machine.simulate")


def simulate(
    config: MachineConfig,
    starting_cash: Any,
    rounds: int,
    *,
    stop_on_bankrupt: bool = True,
    source: Optional[SymbolSource] = None,
) -> Dict[str, Any]:
    """Play up to ``rounds`` rounds and return stats plus the final ledger.

    Stops early once the player has no cash left, unless ``stop_on_bankrupt``
    is False, in which case the player keeps playing into debt.
    """

    if rounds < 0:
        raise ConfigError(f"rounds must be >= 0, got {rounds}")
    machine = Machine.from_config(config, starting_cash, source)
    ledger = machine.ledger
    tracker = SessionTracker()
    tracker.on_session_start(ledger)

    stopped_early = False
    for _ in range(rounds):
        if stop_on_bankrupt and ledger.player_cash <= 0:
            stopped_early = True
            break
        tracker.on_round(machine.play_round(), ledger)

    logger.info(
        "simulated %d/%d rounds, cash %s -> %s",
        tracker.rounds,
        rounds,
        tracker.starting_cash,
        ledger.player_cash,
    )
    return {
        "seed": config.seed,
        "requested_rounds": rounds,
        "stopped_early": stopped_early,
        "stats": tracker.snapshot(),
        "final": ledger.snapshot(),
    }
