"""Machine configuration defaults, file loading and input coercion helpers."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, fields, replace
from decimal import ROUND_DOWN, Decimal
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from . import money
from .errors import ConfigError, EmptyAlphabetError
from .ledger import DEFAULT_COST_OF_PLAY, DEFAULT_PRIZE_POT
from .symbols import DEFAULT_ALPHABET

CURRENCY_DEFAULT = "£"
TRUNCATE_STARTING_CASH_DEFAULT = True

_YES_STRINGS = {"y", "yes"}
_LEADING_NUMBER = re.compile(r"^\s*([+-]?\d+(?:\.\d*)?)")


@dataclass(frozen=True)
class MachineConfig:
    """
    Session-level settings. The pay table is fixed and not part of this.
    """
    cost_of_play: Decimal = DEFAULT_COST_OF_PLAY
    prize_pot: Decimal = DEFAULT_PRIZE_POT
    alphabet: Tuple[str, ...] = DEFAULT_ALPHABET
    currency: str = CURRENCY_DEFAULT
    truncate_starting_cash: bool = TRUNCATE_STARTING_CASH_DEFAULT
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        errs = _check_values(
            {
                "cost_of_play": self.cost_of_play,
                "prize_pot": self.prize_pot,
                "alphabet": self.alphabet,
                "currency": self.currency,
                "truncate_starting_cash": self.truncate_starting_cash,
                "seed": self.seed,
            }
        )
        if errs:
            if not self.alphabet:
                raise EmptyAlphabetError("; ".join(errs))
            raise ConfigError("; ".join(errs))
        object.__setattr__(self, "cost_of_play", money.to_money(self.cost_of_play))
        object.__setattr__(self, "prize_pot", money.to_money(self.prize_pot))
        object.__setattr__(self, "alphabet", tuple(str(s) for s in self.alphabet))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MachineConfig":
        errs = validate_config(data)
        if errs:
            raise ConfigError("; ".join(errs))
        return cls(**{k: v for k, v in data.items() if v is not None})

    def with_overrides(self, **overrides: Any) -> "MachineConfig":
        """Return a copy with every non-None override applied."""

        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def _field_names() -> List[str]:
    return [f.name for f in fields(MachineConfig)]


def _check_values(data: Mapping[str, Any]) -> List[str]:
    errs: List[str] = []

    if "cost_of_play" in data:
        try:
            if money.to_money(data["cost_of_play"]) <= 0:
                errs.append("cost_of_play must be > 0")
        except (TypeError, ValueError):
            errs.append(f"cost_of_play is not a number: {data['cost_of_play']!r}")

    if "prize_pot" in data:
        try:
            if money.to_money(data["prize_pot"]) < 0:
                errs.append("prize_pot must be >= 0")
        except (TypeError, ValueError):
            errs.append(f"prize_pot is not a number: {data['prize_pot']!r}")

    if "alphabet" in data:
        alphabet = data["alphabet"]
        if isinstance(alphabet, str) or not isinstance(alphabet, (list, tuple)):
            errs.append("alphabet must be a list of symbols")
        elif not alphabet:
            errs.append("alphabet must not be empty")
        elif len(alphabet) < 2:
            errs.append("alphabet needs at least 2 symbols")
        elif len({str(s) for s in alphabet}) != len(alphabet):
            errs.append("alphabet symbols must be unique")

    if "currency" in data and not isinstance(data["currency"], str):
        errs.append("currency must be a string")

    if "truncate_starting_cash" in data and not isinstance(data["truncate_starting_cash"], bool):
        errs.append("truncate_starting_cash must be true or false")

    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        errs.append("seed must be an integer")

    return errs


def validate_config(data: Any) -> List[str]:
    """Return a list of problems with a raw config mapping (empty when valid)."""

    if not isinstance(data, Mapping):
        return ["config root must be a mapping"]
    known = set(_field_names())
    errs = [f"unknown key: {k}" for k in sorted(str(k) for k in data) if k not in known]
    errs.extend(_check_values(data))
    return errs


def read_config_data(path: str | Path) -> Dict[str, Any]:
    """Read a JSON or YAML config file into a dict without validating it."""

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config {p}: {exc}") from exc

    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text) or {}
        else:
            data = json.loads(text or "{}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"invalid config {p}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("config root must be a JSON/YAML object (mapping)")
    return data


def load_config_file(path: str | Path) -> MachineConfig:
    return MachineConfig.from_mapping(read_config_data(path))


# ----- Player input ----------------------------------------------------------


def parse_cash(text: Optional[str], *, truncate: bool = TRUNCATE_STARTING_CASH_DEFAULT) -> Optional[Decimal]:
    """Parse the leading number of a free-form answer as a starting balance.

    ``"12abc"`` gives 12. With ``truncate`` the fraction is dropped
    (``"7.99"`` gives 7). A leading digit is required, so ``".5"`` is
    rejected. Returns None for empty, non-numeric, negative or out-of-range
    answers.
    """

    if text is None:
        return None
    m = _LEADING_NUMBER.match(text)
    if not m:
        return None
    amount = Decimal(m.group(1))
    if amount < 0:
        return None
    if truncate:
        amount = amount.to_integral_value(rounding=ROUND_DOWN)
    try:
        return money.to_money(amount)
    except ValueError:
        return None


def parse_yes_no(text: Optional[str]) -> bool:
    """Only an explicit yes counts; anything else, including blank, is no."""

    if text is None:
        return False
    return text.strip().lower() in _YES_STRINGS
