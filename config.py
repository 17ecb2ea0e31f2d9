import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CHIPS = (5, 10, 25, 50, 100, 250, 500)


@dataclass(frozen=True)
class Settings:
    bot_token: str
    starting_balance: int
    history_size: int
    default_chip: int
    chips: Tuple[int, ...]
    rng_seed: Optional[int]
    spin_frames: int
    spin_frame_delay: float
    log_level: str

    def require_token(self) -> str:
        if not self.bot_token:
            raise ValueError(
                "TELEGRAM_BOT_TOKEN (or BOT_TOKEN) is not set. Create a .env file based on .env.example."
            )
        return self.bot_token


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _get_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _get_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _get_chips(name: str, default: Tuple[int, ...]) -> Tuple[int, ...]:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        chips = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        return default
    chips = tuple(c for c in chips if c > 0)
    return chips or default


def get_settings() -> Settings:
    token = os.getenv("TELEGRAM_BOT_TOKEN") or os.getenv("BOT_TOKEN") or ""
    chips = _get_chips("ROULETTE_CHIPS", DEFAULT_CHIPS)
    default_chip = _get_int("DEFAULT_CHIP", 10)
    if default_chip not in chips:
        default_chip = chips[0]

    return Settings(
        bot_token=token,
        starting_balance=max(0, _get_int("STARTING_BALANCE", 10000)),
        history_size=max(1, _get_int("HISTORY_SIZE", 10)),
        default_chip=default_chip,
        chips=chips,
        rng_seed=_get_optional_int("ROULETTE_SEED"),
        spin_frames=max(1, _get_int("SPIN_FRAMES", 10)),
        spin_frame_delay=max(0.0, _get_float("SPIN_FRAME_DELAY", 0.22)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
