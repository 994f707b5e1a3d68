import json
from decimal import Decimal

import pytest

from fruit_machine.config import (
    MachineConfig,
    load_config_file,
    parse_cash,
    parse_yes_no,
    validate_config,
)
from fruit_machine.errors import ConfigError, EmptyAlphabetError


def test_defaults():
    cfg = MachineConfig()
    assert cfg.cost_of_play == Decimal("0.20")
    assert cfg.prize_pot == 20
    assert cfg.alphabet == ("A", "B", "C", "D", "E")
    assert cfg.currency == "£"
    assert cfg.truncate_starting_cash is True
    assert cfg.seed is None


def test_load_json(tmp_path):
    p = tmp_path / "machine.json"
    p.write_text(json.dumps({"prize_pot": 50, "cost_of_play": "0.5", "seed": 9}), encoding="utf-8")
    cfg = load_config_file(p)
    assert cfg.prize_pot == 50
    assert cfg.cost_of_play == Decimal("0.50")
    assert cfg.seed == 9


def test_load_yaml(tmp_path):
    p = tmp_path / "machine.yaml"
    p.write_text(
        "alphabet: [cherry, lemon, bell]\n"
        "currency: $\n"
        "truncate_starting_cash: false\n",
        encoding="utf-8",
    )
    cfg = load_config_file(p)
    assert cfg.alphabet == ("cherry", "lemon", "bell")
    assert cfg.currency == "$"
    assert cfg.truncate_starting_cash is False


def test_empty_yaml_gives_defaults(tmp_path):
    p = tmp_path / "empty.yml"
    p.write_text("", encoding="utf-8")
    assert load_config_file(p) == MachineConfig()


@pytest.mark.parametrize(
    "text",
    [
        "[1, 2]",
        '{"jackpot": 100}',
        '{"cost_of_play": 0}',
        '{"alphabet": ["A"]}',
        '{"alphabet": "ABCDE"}',
        '{"seed": "abc"}',
        "{not json",
    ],
)
def test_load_rejects_bad_files(tmp_path, text):
    p = tmp_path / "bad.json"
    p.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config_file(p)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config_file(tmp_path / "nope.json")


def test_validate_config_lists_every_problem():
    errs = validate_config({"jackpot": 1, "prize_pot": -3, "alphabet": ["A", "A"]})
    assert "unknown key: jackpot" in errs
    assert "prize_pot must be >= 0" in errs
    assert "alphabet symbols must be unique" in errs
    assert validate_config({}) == []


def test_empty_alphabet_is_its_own_error():
    with pytest.raises(EmptyAlphabetError):
        MachineConfig(alphabet=())


def test_with_overrides_skips_none():
    cfg = MachineConfig(seed=1)
    assert cfg.with_overrides(seed=None) is cfg
    assert cfg.with_overrides(seed=5).seed == 5


@pytest.mark.parametrize(
    "text,truncate,expected",
    [
        ("10", True, Decimal("10")),
        ("7.99", True, Decimal("7")),
        ("7.99", False, Decimal("7.99")),
        ("12abc", True, Decimal("12")),
        ("  3", True, Decimal("3")),
        ("0.5", False, Decimal("0.50")),
        ("0", True, Decimal("0")),
    ],
)
def test_parse_cash(text, truncate, expected):
    assert parse_cash(text, truncate=truncate) == expected


@pytest.mark.parametrize("text", ["", "abc", "-5", None, "£10", ".5", "1" * 30])
def test_parse_cash_rejects(text):
    assert parse_cash(text) is None


@pytest.mark.parametrize("text", ["y", "Y", "yes", " YES "])
def test_parse_yes(text):
    assert parse_yes_no(text) is True


@pytest.mark.parametrize("text", ["n", "", "no", "yep", "maybe", None])
def test_parse_no(text):
    assert parse_yes_no(text) is False


def test_example_config_loads():
    from pathlib import Path

    path = Path(__file__).resolve().parent.parent / "examples" / "machine.yaml"
    assert load_config_file(path) == MachineConfig()


def test_alphabet_uniqueness_checked_as_strings():
    assert "alphabet symbols must be unique" in validate_config({"alphabet": [1, "1"]})
    with pytest.raises(ConfigError):
        MachineConfig(alphabet=(1, "1"))


def test_malformed_yaml(tmp_path):
    p = tmp_path / "machine.yaml"
    p.write_text("alphabet: [A, B\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid config"):
        load_config_file(p)
