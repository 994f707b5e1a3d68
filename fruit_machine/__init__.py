# fruit_machine/__init__.py
"""
Fruit Machine: a four-reel slot machine with a shared prize pot, free plays
and a text prompt session loop.
"""

__version__ = "1.0.0"

from .errors import (
    FruitMachineError,
    ConfigError,
    EmptyAlphabetError,
    InvalidAmountError,
    SymbolSourceExhausted,
)
from .symbols import (
    DEFAULT_ALPHABET,
    SymbolSource,
    RandomSymbolSource,
    ScriptedSymbolSource,
    draw_four,
)
from .evaluator import Tier, classify, evaluate, payout_for
from .ledger import CurrentGame, Ledger
from .machine import Machine, RoundResult, play_round
from .config import MachineConfig, load_config_file
from .session import SessionSummary, run_session
from .simulate import simulate

__all__ = [
    # Errors
    "FruitMachineError",
    "ConfigError",
    "EmptyAlphabetError",
    "InvalidAmountError",
    "SymbolSourceExhausted",
    # Symbols
    "DEFAULT_ALPHABET",
    "SymbolSource",
    "RandomSymbolSource",
    "ScriptedSymbolSource",
    "draw_four",
    # Evaluation
    "Tier",
    "classify",
    "evaluate",
    "payout_for",
    # Ledger & rounds
    "CurrentGame",
    "Ledger",
    "Machine",
    "RoundResult",
    "play_round",
    # Config & session
    "MachineConfig",
    "load_config_file",
    "SessionSummary",
    "run_session",
    "simulate",
    # Package version
    "__version__",
]
