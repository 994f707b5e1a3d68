from decimal import Decimal

import pytest

from fruit_machine.errors import ConfigError, InvalidAmountError
from fruit_machine.ledger import Ledger


def test_defaults():
    ledger = Ledger()
    assert ledger.cost_of_play == Decimal("0.20")
    assert ledger.prize_pot == 20
    assert ledger.double == Decimal("1.00")
    assert ledger.free_plays == 0


def test_double_follows_cost_of_play():
    assert Ledger(cost_of_play="0.5").double == Decimal("2.50")


def test_is_payable():
    ledger = Ledger(prize_pot=1)
    assert ledger.is_payable(Decimal("1")) is True
    assert ledger.is_payable(Decimal("2")) is False


def test_is_free_play():
    assert Ledger(free_plays=1).is_free_play() is True
    assert Ledger(free_plays=0).is_free_play() is False


def test_take_payment_uses_free_play_first():
    ledger = Ledger(player_cash=10, free_plays=1)
    assert ledger.take_payment() is True
    assert ledger.free_plays == 0
    assert ledger.player_cash == 10
    assert ledger.prize_pot == 20


def test_take_payment_moves_cost_to_pot():
    ledger = Ledger(player_cash=1, prize_pot=20)
    assert ledger.take_payment() is False
    assert ledger.player_cash == Decimal("0.8")
    assert ledger.prize_pot == Decimal("20.2")
    assert ledger.free_plays == 0


def test_take_payment_allows_debt(caplog):
    ledger = Ledger(player_cash=0)
    with caplog.at_level("WARNING", logger="fruit_machine.ledger"):
        ledger.take_payment()
    assert ledger.player_cash == Decimal("-0.20")
    assert "negative" in caplog.text


def test_repeated_payments_do_not_drift():
    ledger = Ledger(player_cash=1, prize_pot=0)
    for _ in range(5):
        ledger.take_payment()
    assert ledger.player_cash == 0
    assert ledger.prize_pot == 1


def test_give_winnings_pays_from_pot():
    ledger = Ledger(player_cash=1, prize_pot=2)
    ledger.give_winnings(1)
    assert ledger.prize_pot == 1
    assert ledger.player_cash == 2
    assert ledger.current_game.winnings == 1
    assert ledger.current_game.free_plays_awarded == 0


def test_give_winnings_grants_free_plays_on_shortfall():
    ledger = Ledger(player_cash=5, prize_pot=1)
    ledger.give_winnings(20)
    assert ledger.prize_pot == 1
    assert ledger.player_cash == 5
    assert ledger.free_plays == 4
    assert ledger.current_game.winnings == 0
    assert ledger.current_game.free_plays_awarded == 4


def test_shortfall_free_plays_accumulate():
    ledger = Ledger(prize_pot=0, free_plays=2)
    ledger.give_winnings(10)
    assert ledger.free_plays == 4
    assert ledger.current_game.free_plays_awarded == 2


def test_small_shortfall_grants_nothing():
    ledger = Ledger(prize_pot=Decimal("0.5"))
    ledger.give_winnings(1)
    assert ledger.free_plays == 0
    assert ledger.current_game.free_plays_awarded == 0
    assert ledger.current_game.winnings == 0
    assert ledger.prize_pot == Decimal("0.5")


def test_zero_winnings_only_clears_current_game():
    ledger = Ledger(player_cash=3, prize_pot=0, free_plays=1)
    ledger.give_winnings(20)
    ledger.give_winnings(0)
    assert ledger.current_game.winnings == 0
    assert ledger.current_game.free_plays_awarded == 0
    assert ledger.free_plays == 5
    assert ledger.player_cash == 3
    assert ledger.prize_pot == 0


def test_negative_winnings_rejected():
    ledger = Ledger()
    with pytest.raises(InvalidAmountError):
        ledger.give_winnings(-1)
    assert ledger.prize_pot == 20


def test_cash_path_conserves_money():
    ledger = Ledger(player_cash=10, prize_pot=20)
    total = ledger.player_cash + ledger.prize_pot
    ledger.take_payment()
    ledger.give_winnings(10)
    assert ledger.player_cash + ledger.prize_pot == total


@pytest.mark.parametrize(
    "kwargs",
    [
        {"cost_of_play": 0},
        {"prize_pot": -1},
        {"free_plays": -1},
        {"player_cash": "lots"},
    ],
)
def test_invalid_construction(kwargs):
    with pytest.raises(ConfigError):
        Ledger(**kwargs)


def test_snapshot():
    ledger = Ledger(player_cash=10)
    ledger.take_payment()
    snap = ledger.snapshot()
    assert snap == {
        "prize_pot": Decimal("20.20"),
        "player_cash": Decimal("9.80"),
        "free_plays": 0,
        "winnings": Decimal("0"),
        "free_plays_awarded": 0,
    }
