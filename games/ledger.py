import logging
from types import MappingProxyType
from typing import Dict, Iterator, Mapping

from games.roulette import (
    Bet,
    BetTarget,
    InsufficientFunds,
    InvalidStake,
    Result,
)

logger = logging.getLogger(__name__)


class BetLedger:
    """Bets placed in the active round, one entry per table spot."""

    def __init__(self):
        self._bets: Dict[BetTarget, Bet] = {}

    @property
    def bets(self) -> Mapping[BetTarget, Bet]:
        return MappingProxyType(self._bets)

    def total_staked(self) -> int:
        return sum(bet.stake for bet in self._bets.values())

    def place_bet(self, target: BetTarget, stake: int, balance: int) -> Result[Bet]:
        """Add `stake` on `target` if the balance covers it together with the round's other stakes.

        A repeated target accumulates onto the existing bet. On failure the
        ledger is left exactly as it was.
        """
        if isinstance(stake, bool) or not isinstance(stake, int) or stake <= 0:
            logger.debug("Rejected stake %r on %s", stake, target.key)
            return Result.failure(InvalidStake(f"Stake must be a positive whole number, got {stake!r}"))
        if stake > balance:
            logger.debug("Stake %d on %s exceeds balance %d", stake, target.key, balance)
            return Result.failure(InsufficientFunds("Insufficient balance!"))
        committed = self.total_staked()
        if committed + stake > balance:
            logger.debug("Stake %d on %s plus committed %d exceeds balance %d",
                         stake, target.key, committed, balance)
            return Result.failure(InsufficientFunds("Not enough balance for this bet!"))

        existing = self._bets.get(target)
        bet = existing.add(stake) if existing else Bet(target, stake)
        self._bets[target] = bet
        logger.debug("Bet %d on %s (spot total %d)", stake, target.key, bet.stake)
        return Result.success(bet)

    def clear(self) -> None:
        self._bets.clear()

    def __len__(self) -> int:
        return len(self._bets)

    def __iter__(self) -> Iterator[BetTarget]:
        return iter(self._bets)

    def __contains__(self, target) -> bool:
        return target in self._bets
