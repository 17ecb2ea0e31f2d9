"""One player's game: balance, the active round and the spin state machine."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Mapping, Optional, Tuple

from games.ledger import BetLedger
from games.resolver import DEFAULT_HISTORY_SIZE, OutcomeResolver, RoundResult
from games.roulette import (
    Bet,
    BetTarget,
    GameOver,
    Result,
    SpinInProgress,
    SpinRejected,
    spin_rotation,
    wheel_path,
)

logger = logging.getLogger(__name__)

DEFAULT_STARTING_BALANCE = 10000
DEFAULT_SPIN_FRAMES = 10


class SessionState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class SpinPlan:
    """What the wheel will do; handed to the presentation while bets are frozen."""
    drawn: int
    rotation: float
    frames: List[int]


class GameSession:
    def __init__(
        self,
        starting_balance: int = DEFAULT_STARTING_BALANCE,
        rng=None,
        history_size: int = DEFAULT_HISTORY_SIZE,
        spin_frames: int = DEFAULT_SPIN_FRAMES,
    ):
        if starting_balance < 0:
            raise ValueError("Starting balance cannot be negative")
        self.starting_balance = starting_balance
        self.spin_frames = spin_frames
        self.ledger = BetLedger()
        self.resolver = OutcomeResolver(rng, history_size=history_size)
        self._balance = starting_balance
        self._pending: Optional[int] = None
        self._rotation = 0.0
        self.last_result: Optional[RoundResult] = None

    # ---------------- Read side ----------------

    @property
    def state(self) -> SessionState:
        if self._pending is not None:
            return SessionState.RESOLVING
        if self._balance == 0 and not self.ledger:
            return SessionState.GAME_OVER
        return SessionState.IDLE

    @property
    def is_game_over(self) -> bool:
        return self.state is SessionState.GAME_OVER

    @property
    def bets(self) -> Mapping[BetTarget, Bet]:
        return self.ledger.bets

    @property
    def rotation(self) -> float:
        return self._rotation

    def get_balance(self) -> int:
        return self._balance

    def get_history(self) -> Tuple[int, ...]:
        return self.resolver.history

    def total_staked(self) -> int:
        return self.ledger.total_staked()

    # ---------------- Betting ----------------

    def place_bet(self, target: BetTarget, stake: int) -> Result[Bet]:
        state = self.state
        if state is SessionState.GAME_OVER:
            return Result.failure(GameOver("Game Over! You are out of money."))
        if state is SessionState.RESOLVING:
            return Result.failure(SpinInProgress("The wheel is spinning; bets are closed."))
        return self.ledger.place_bet(target, stake, self._balance)

    def clear_bets(self) -> Result[None]:
        if self.state is SessionState.RESOLVING:
            return Result.failure(SpinInProgress("The wheel is spinning; bets are closed."))
        self.ledger.clear()
        return Result.success()

    # ---------------- Spinning ----------------

    def begin_spin(self) -> Result[SpinPlan]:
        """Draw the number and freeze the table until `complete_spin`."""
        state = self.state
        if state is SessionState.GAME_OVER:
            return Result.failure(GameOver("Game Over! You are out of money."))
        if state is SessionState.RESOLVING:
            return Result.failure(SpinInProgress("The wheel is already spinning."))
        if self.ledger.total_staked() <= 0:
            return Result.failure(SpinRejected("Place a bet before spinning."))

        drawn = self.resolver.draw_number()
        self._pending = drawn
        rotation = spin_rotation(self._rotation, drawn)
        self._rotation = rotation % 360
        logger.info("Spin started with %d staked on %d spots", self.total_staked(), len(self.ledger))
        return Result.success(SpinPlan(drawn=drawn, rotation=rotation,
                                       frames=wheel_path(drawn, self.spin_frames)))

    def complete_spin(self) -> Result[RoundResult]:
        if self._pending is None:
            return Result.failure(SpinRejected("No spin in progress."))
        drawn, self._pending = self._pending, None
        result = self.resolver.settle(self.ledger, self._balance, drawn)
        self._balance = result.new_balance
        self.last_result = result
        if self.is_game_over:
            logger.info("Game over: balance exhausted")
        return Result.success(result)

    def trigger_spin(self) -> Result[RoundResult]:
        plan = self.begin_spin()
        if not plan.ok:
            return Result.failure(plan.error)
        return self.complete_spin()

    def reset(self) -> Result[None]:
        """Start over with the starting balance and no history. Refused mid-spin."""
        if self._pending is not None:
            return Result.failure(SpinInProgress("The wheel is spinning; wait for the result."))
        self.ledger.clear()
        self.resolver.clear_history()
        self._balance = self.starting_balance
        self._rotation = 0.0
        self.last_result = None
        logger.info("Session reset to %d", self._balance)
        return Result.success()
