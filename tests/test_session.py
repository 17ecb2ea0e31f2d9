import random

import pytest

from games.roulette import (
    ColorTarget,
    Column,
    Dozen,
    GameOver,
    InsufficientFunds,
    OUTSIDE_TARGETS,
    SingleNumber,
    SpinInProgress,
    SpinRejected,
    spin_rotation,
)
from games.session import GameSession, SessionState
from services.rng import SeededRandom


def test_new_session_starts_idle_with_default_balance():
    session = GameSession()
    assert session.get_balance() == 10000
    assert session.state is SessionState.IDLE
    assert session.get_history() == ()
    assert session.total_staked() == 0
    assert session.last_result is None


def test_negative_starting_balance_is_rejected():
    with pytest.raises(ValueError):
        GameSession(starting_balance=-1)


def test_placing_bets_does_not_touch_balance(scripted_session):
    session = scripted_session([], balance=100)
    assert session.place_bet(SingleNumber(5), 40).ok
    assert session.place_bet(SingleNumber(5), 40).ok
    assert session.get_balance() == 100
    assert session.total_staked() == 80
    assert session.bets[SingleNumber(5)].stake == 80
    result = session.place_bet(ColorTarget("red"), 21)
    assert isinstance(result.error, InsufficientFunds)
    assert session.total_staked() == 80


def test_trigger_spin_settles_round(scripted_session):
    session = scripted_session([17], balance=100)
    session.place_bet(SingleNumber(17), 10)
    session.place_bet(ColorTarget("red"), 5)
    result = session.trigger_spin().unwrap()
    assert result.new_balance == 100 - 15 + 360
    assert session.get_balance() == 445
    assert session.total_staked() == 0
    assert session.get_history() == (17,)
    assert session.last_result is result
    assert session.state is SessionState.IDLE


def test_spin_without_bets_is_rejected(scripted_session):
    session = scripted_session([1])
    result = session.trigger_spin()
    assert isinstance(result.error, SpinRejected)
    assert session.get_history() == ()


def test_bets_are_frozen_while_resolving(scripted_session):
    session = scripted_session([32])
    session.place_bet(Dozen("third"), 100)
    plan = session.begin_spin().unwrap()
    assert plan.drawn == 32
    assert plan.frames[-1] == 32
    assert len(plan.frames) == session.spin_frames
    assert plan.rotation == pytest.approx(spin_rotation(0, 32))
    assert session.state is SessionState.RESOLVING

    assert isinstance(session.place_bet(SingleNumber(1), 1).error, SpinInProgress)
    assert isinstance(session.clear_bets().error, SpinInProgress)
    assert isinstance(session.begin_spin().error, SpinInProgress)
    assert isinstance(session.trigger_spin().error, SpinInProgress)
    assert session.total_staked() == 100

    result = session.complete_spin().unwrap()
    assert result.total_winnings == 300
    assert session.get_balance() == 10200
    assert session.state is SessionState.IDLE


def test_complete_without_begin_is_rejected(scripted_session):
    session = scripted_session([])
    assert isinstance(session.complete_spin().error, SpinRejected)


def test_wheel_rotation_carries_over_between_spins(scripted_session):
    session = scripted_session([0, 26])
    session.place_bet(SingleNumber(0), 1)
    first = session.begin_spin().unwrap()
    session.complete_spin()
    session.place_bet(SingleNumber(0), 1)
    second = session.begin_spin().unwrap()
    assert second.rotation == pytest.approx(spin_rotation(first.rotation % 360, 26))
    assert session.rotation == pytest.approx(second.rotation % 360)


def test_clear_bets_discards_round(scripted_session):
    session = scripted_session([])
    session.place_bet(Column(3), 10)
    assert session.clear_bets().ok
    assert session.total_staked() == 0
    assert session.get_balance() == 10000


def test_losing_everything_ends_the_game(scripted_session):
    session = scripted_session([0], balance=100)
    session.place_bet(ColorTarget("black"), 100)
    result = session.trigger_spin().unwrap()
    assert result.new_balance == 0
    assert session.is_game_over
    assert session.state is SessionState.GAME_OVER
    for stake in (1, 0, -3, 10**9):
        assert isinstance(session.place_bet(SingleNumber(0), stake).error, GameOver)
    assert isinstance(session.trigger_spin().error, GameOver)
    assert session.clear_bets().ok


def test_empty_wallet_from_the_start_is_game_over(scripted_session):
    session = scripted_session([], balance=0)
    assert session.is_game_over
    assert isinstance(session.place_bet(SingleNumber(5), 1).error, GameOver)


def test_reset_restores_a_fresh_session(scripted_session):
    session = scripted_session([0], balance=50)
    session.place_bet(ColorTarget("red"), 50)
    session.trigger_spin()
    assert session.is_game_over
    session.reset()
    assert session.get_balance() == 50
    assert session.get_history() == ()
    assert session.state is SessionState.IDLE
    assert session.rotation == 0
    assert session.last_result is None
    assert session.place_bet(ColorTarget("red"), 50).ok


def test_history_bound_after_fifteen_rounds(scripted_session):
    session = scripted_session([n % 37 for n in range(20, 35)])
    for _ in range(15):
        session.place_bet(SingleNumber(0), 1)
        session.trigger_spin().unwrap()
    assert session.get_history() == tuple(range(34, 24, -1))


def test_balance_is_conserved_over_random_play():
    session = GameSession(starting_balance=2000, rng=SeededRandom(5))
    chooser = random.Random(11)
    targets = list(OUTSIDE_TARGETS) + [SingleNumber(n) for n in range(37)]
    for _ in range(300):
        if session.is_game_over:
            break
        placed = 0
        for _ in range(chooser.randint(1, 5)):
            stake = chooser.randint(1, 200)
            if session.place_bet(chooser.choice(targets), stake).ok:
                placed += stake
            assert session.total_staked() <= session.get_balance()
        if not placed:
            continue
        balance = session.get_balance()
        result = session.trigger_spin().unwrap()
        assert result.total_staked == placed
        assert result.new_balance == balance - result.total_staked + result.total_winnings
        assert session.get_balance() == result.new_balance >= 0


def test_reset_is_refused_while_the_wheel_spins(scripted_session):
    session = scripted_session([17], balance=100)
    session.place_bet(SingleNumber(17), 10)
    session.begin_spin().unwrap()
    reset = session.reset()
    assert isinstance(reset.error, SpinInProgress)
    assert session.state is SessionState.RESOLVING
    assert session.total_staked() == 10

    result = session.complete_spin().unwrap()
    assert result.drawn == 17
    assert session.get_balance() == 100 - 10 + 360
    assert session.reset().ok
    assert session.get_balance() == 100
