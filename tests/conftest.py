"""Pytest configuration for the roulette table."""
import sys
from pathlib import Path

import pytest


def _ensure_repo_on_path() -> None:
    """Make the repository importable without an editable install."""
    repo_root = Path(__file__).resolve().parent.parent
    path_str = str(repo_root)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)


_ensure_repo_on_path()

from games.session import GameSession  # noqa: E402
from services.rng import SequenceRandom  # noqa: E402


@pytest.fixture
def scripted_session():
    """Factory for a session whose draws come from a fixed list."""
    def _make(draws, balance=10000, **kwargs):
        return GameSession(starting_balance=balance, rng=SequenceRandom(draws), **kwargs)
    return _make
