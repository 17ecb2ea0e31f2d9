import random
import secrets
from typing import Iterable, Iterator, Optional


class SecureRandom:
    """Draws from the operating system's CSPRNG."""

    def randint(self, a: int, b: int) -> int:
        # Inclusive range
        return secrets.randbelow(b - a + 1) + a


class SeededRandom:
    """Reproducible draws from a seeded Mersenne Twister."""

    def __init__(self, seed: int):
        self.seed = seed
        self._random = random.Random(seed)

    def randint(self, a: int, b: int) -> int:
        return self._random.randint(a, b)


class SequenceRandom:
    """Replays a fixed sequence of values; each must lie in the requested range."""

    def __init__(self, values: Iterable[int]):
        self._values: Iterator[int] = iter(values)

    def randint(self, a: int, b: int) -> int:
        try:
            value = next(self._values)
        except StopIteration:
            raise RuntimeError("SequenceRandom ran out of values") from None
        if not a <= value <= b:
            raise ValueError(f"Scripted value {value} is outside {a}..{b}")
        return value


def make_rng(seed: Optional[int] = None):
    if seed is None:
        return SecureRandom()
    return SeededRandom(seed)
