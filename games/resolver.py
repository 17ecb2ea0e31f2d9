import logging
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from games.ledger import BetLedger
from games.roulette import Bet, BetTarget, Color, payout_multiplier, pocket_color
from services.rng import SecureRandom

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_SIZE = 10


@dataclass(frozen=True)
class Evaluation:
    per_bet_winnings: Mapping[BetTarget, int]
    total_winnings: int
    total_staked: int
    net_result: int


@dataclass(frozen=True)
class RoundResult:
    drawn: int
    color: Color
    bets: Mapping[BetTarget, Bet]
    per_bet_winnings: Mapping[BetTarget, int]
    total_staked: int
    total_winnings: int
    net_result: int
    previous_balance: int
    new_balance: int

    @property
    def winning_bets(self) -> Dict[BetTarget, int]:
        return {target: amount for target, amount in self.per_bet_winnings.items() if amount > 0}


def win_amount(bet: Bet, drawn: int) -> int:
    """Payout for one bet, original stake included; zero when the bet loses."""
    multiplier = payout_multiplier(bet.target)
    if bet.target.matches(drawn):
        return bet.stake * (multiplier + 1)
    return 0


class OutcomeResolver:
    def __init__(self, rng=None, history_size: int = DEFAULT_HISTORY_SIZE):
        self.rng = rng if rng is not None else SecureRandom()
        self._history = deque(maxlen=history_size)

    @property
    def history(self) -> Tuple[int, ...]:
        """Drawn numbers, most recent first."""
        return tuple(self._history)

    def clear_history(self) -> None:
        self._history.clear()

    def draw_number(self) -> int:
        return self.rng.randint(0, 36)

    @staticmethod
    def evaluate(bets: Mapping[BetTarget, Bet], drawn: int) -> Evaluation:
        pocket_color(drawn)  # rejects numbers off the wheel
        per_bet = {target: win_amount(bet, drawn) for target, bet in bets.items()}
        total_winnings = sum(per_bet.values())
        total_staked = sum(bet.stake for bet in bets.values())
        return Evaluation(
            per_bet_winnings=MappingProxyType(per_bet),
            total_winnings=total_winnings,
            total_staked=total_staked,
            net_result=total_winnings - total_staked,
        )

    def settle(self, ledger: BetLedger, balance: int, drawn: int) -> RoundResult:
        """Apply a drawn number to the ledger's bets, then start a fresh round."""
        bets = dict(ledger.bets)
        evaluation = self.evaluate(bets, drawn)
        new_balance = max(0, balance - evaluation.total_staked + evaluation.total_winnings)
        ledger.clear()
        self._history.appendleft(drawn)
        logger.info(
            "Drawn %d: staked %d, won %d, balance %d -> %d",
            drawn, evaluation.total_staked, evaluation.total_winnings, balance, new_balance,
        )
        return RoundResult(
            drawn=drawn,
            color=pocket_color(drawn),
            bets=MappingProxyType(bets),
            per_bet_winnings=evaluation.per_bet_winnings,
            total_staked=evaluation.total_staked,
            total_winnings=evaluation.total_winnings,
            net_result=evaluation.net_result,
            previous_balance=balance,
            new_balance=new_balance,
        )

    def resolve_round(self, ledger: BetLedger, balance: int) -> RoundResult:
        return self.settle(ledger, balance, self.draw_number())
