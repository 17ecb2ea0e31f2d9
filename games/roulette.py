"""European roulette table: pockets, wheel order, bet targets and payouts."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Generic, List, Optional, Tuple, Type, TypeVar

T = TypeVar("T")

# European roulette (single zero)
RED_NUMBERS = frozenset({
    1, 3, 5, 7, 9, 12, 14, 16, 18,
    19, 21, 23, 25, 27, 30, 32, 34, 36,
})

WHEEL_ORDER: Tuple[int, ...] = (
    0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36, 11, 30, 8, 23, 10,
    5, 24, 16, 33, 1, 20, 14, 31, 9, 22, 18, 29, 7, 28, 12, 35, 3, 26,
)
DEGREES_PER_POCKET = 360 / len(WHEEL_ORDER)
FULL_TURNS_DEGREES = 1800  # five full rotations per spin


# ---------------- Errors ----------------

class RouletteError(Exception):
    """Base class for every failure the table reports."""


class InvalidTarget(RouletteError, ValueError):
    pass


class InvalidStake(RouletteError, ValueError):
    pass


class InsufficientFunds(RouletteError):
    pass


class GameOver(RouletteError):
    pass


class SpinRejected(RouletteError):
    pass


class SpinInProgress(SpinRejected):
    pass


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a table operation: either a value or the error that stopped it."""
    value: Optional[T] = None
    error: Optional[RouletteError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: RouletteError) -> "Result[T]":
        return cls(error=error)


# ---------------- Pockets ----------------

class Color(str, Enum):
    RED = "red"
    BLACK = "black"
    GREEN = "green"


def _check_number(number) -> int:
    # bool is an int subclass; True must not sneak in as 1
    if isinstance(number, bool) or not isinstance(number, int) or not 0 <= number <= 36:
        raise InvalidTarget(f"Roulette number must be an integer 0-36, got {number!r}")
    return number


def pocket_color(number: int) -> Color:
    number = _check_number(number)
    if number == 0:
        return Color.GREEN
    return Color.RED if number in RED_NUMBERS else Color.BLACK


# ---------------- Wheel geometry ----------------

def wheel_angle(number: int) -> float:
    """Angle in degrees of a pocket measured from the zero pocket."""
    return WHEEL_ORDER.index(_check_number(number)) * DEGREES_PER_POCKET


def spin_rotation(current: float, number: int) -> float:
    """Absolute wheel rotation that lands `number` under the marker after five turns."""
    return current + FULL_TURNS_DEGREES + (360 - wheel_angle(number) % 360)


def wheel_path(number: int, steps: int) -> List[int]:
    """The last `steps` pockets passing the marker, ending on `number`."""
    end = WHEEL_ORDER.index(_check_number(number))
    return [WHEEL_ORDER[(end - offset) % len(WHEEL_ORDER)] for offset in range(steps - 1, -1, -1)]


# ---------------- Bet targets ----------------

class BetTarget:
    """A spot on the table. Subclasses are immutable and usable as mapping keys."""

    def matches(self, drawn: int) -> bool:
        raise NotImplementedError

    @property
    def key(self) -> str:
        raise NotImplementedError

    @property
    def label(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class SingleNumber(BetTarget):
    number: int

    def __post_init__(self):
        _check_number(self.number)

    def matches(self, drawn: int) -> bool:
        return drawn == self.number

    @property
    def key(self) -> str:
        return str(self.number)

    @property
    def label(self) -> str:
        return f"Number {self.number}"


@dataclass(frozen=True)
class ColorTarget(BetTarget):
    color: Color

    def __post_init__(self):
        try:
            color = Color(self.color)
        except ValueError:
            raise InvalidTarget(f"Unknown colour {self.color!r}") from None
        if color is Color.GREEN:
            raise InvalidTarget("Zero is the only green pocket; bet on it as a number")
        object.__setattr__(self, "color", color)

    def matches(self, drawn: int) -> bool:
        return drawn != 0 and pocket_color(drawn) is self.color

    @property
    def key(self) -> str:
        return self.color.value

    @property
    def label(self) -> str:
        return self.color.value.title()


def _check_kind(kind, allowed: Tuple[str, ...], what: str) -> None:
    if kind not in allowed:
        raise InvalidTarget(f"{what} must be one of {', '.join(allowed)}; got {kind!r}")


@dataclass(frozen=True)
class Parity(BetTarget):
    kind: str

    def __post_init__(self):
        _check_kind(self.kind, ("even", "odd"), "Parity")

    def matches(self, drawn: int) -> bool:
        if drawn == 0:
            return False
        return (drawn % 2 == 0) == (self.kind == "even")

    @property
    def key(self) -> str:
        return self.kind

    @property
    def label(self) -> str:
        return self.kind.title()


RANGE_BOUNDS = {"low": (1, 18), "high": (19, 36)}


@dataclass(frozen=True)
class Range(BetTarget):
    kind: str

    def __post_init__(self):
        _check_kind(self.kind, tuple(RANGE_BOUNDS), "Range")

    def matches(self, drawn: int) -> bool:
        low, high = RANGE_BOUNDS[self.kind]
        return low <= drawn <= high

    @property
    def key(self) -> str:
        low, high = RANGE_BOUNDS[self.kind]
        return f"{low}-{high}"

    @property
    def label(self) -> str:
        return self.key


DOZENS = {
    "first": ("1st12", 1, 12),
    "second": ("2nd12", 13, 24),
    "third": ("3rd12", 25, 36),
}


@dataclass(frozen=True)
class Dozen(BetTarget):
    kind: str

    def __post_init__(self):
        _check_kind(self.kind, tuple(DOZENS), "Dozen")

    def matches(self, drawn: int) -> bool:
        _, low, high = DOZENS[self.kind]
        return low <= drawn <= high

    @property
    def key(self) -> str:
        return DOZENS[self.kind][0]

    @property
    def label(self) -> str:
        return f"{self.key[:3]} Dozen"


@dataclass(frozen=True)
class Column(BetTarget):
    index: int

    def __post_init__(self):
        if isinstance(self.index, bool) or not isinstance(self.index, int) or self.index not in (1, 2, 3):
            raise InvalidTarget(f"Column must be 1, 2 or 3; got {self.index!r}")

    def matches(self, drawn: int) -> bool:
        return drawn != 0 and (drawn - 1) % 3 == self.index - 1

    @property
    def key(self) -> str:
        return f"col{self.index}"

    @property
    def label(self) -> str:
        return f"Column {self.index}"


# Profit multiple on a winning stake; the stake itself comes back on top.
PAYOUTS: Dict[Type[BetTarget], int] = {
    SingleNumber: 35,
    ColorTarget: 1,
    Parity: 1,
    Range: 1,
    Dozen: 2,
    Column: 2,
}


def payout_multiplier(target: BetTarget) -> int:
    try:
        return PAYOUTS[type(target)]
    except KeyError:
        raise TypeError(f"No payout defined for bet target {target!r}") from None


OUTSIDE_TARGETS: Tuple[BetTarget, ...] = (
    ColorTarget(Color.RED), ColorTarget(Color.BLACK),
    Parity("even"), Parity("odd"),
    Range("low"), Range("high"),
    Dozen("first"), Dozen("second"), Dozen("third"),
    Column(1), Column(2), Column(3),
)
_TARGETS_BY_KEY = {target.key: target for target in OUTSIDE_TARGETS}


def target_from_key(key: str) -> BetTarget:
    """Parse a table key such as "17", "red", "1-18", "2nd12" or "col3"."""
    if key in _TARGETS_BY_KEY:
        return _TARGETS_BY_KEY[key]
    if key.isascii() and key.isdigit():
        return SingleNumber(int(key))
    raise InvalidTarget(f"Unknown bet spot {key!r}")


@dataclass(frozen=True)
class Bet:
    target: BetTarget
    stake: int

    def add(self, stake: int) -> "Bet":
        return Bet(self.target, self.stake + stake)
