import pytest

from config import DEFAULT_CHIPS, get_settings

ENV_VARS = (
    "TELEGRAM_BOT_TOKEN", "BOT_TOKEN", "STARTING_BALANCE", "HISTORY_SIZE",
    "DEFAULT_CHIP", "ROULETTE_CHIPS", "ROULETTE_SEED", "SPIN_FRAMES",
    "SPIN_FRAME_DELAY", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = get_settings()
    assert settings.bot_token == ""
    assert settings.starting_balance == 10000
    assert settings.history_size == 10
    assert settings.chips == DEFAULT_CHIPS
    assert settings.default_chip == 10
    assert settings.rng_seed is None
    assert settings.spin_frames == 10
    assert settings.spin_frame_delay == pytest.approx(0.22)
    assert settings.log_level == "INFO"


def test_missing_token_only_matters_when_required():
    settings = get_settings()
    with pytest.raises(ValueError):
        settings.require_token()


def test_overrides(monkeypatch):
    monkeypatch.setenv("BOT_TOKEN", "123:abc")
    monkeypatch.setenv("STARTING_BALANCE", "500")
    monkeypatch.setenv("ROULETTE_CHIPS", "1, 2, 5")
    monkeypatch.setenv("DEFAULT_CHIP", "2")
    monkeypatch.setenv("ROULETTE_SEED", "42")
    monkeypatch.setenv("SPIN_FRAME_DELAY", "0")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.require_token() == "123:abc"
    assert settings.starting_balance == 500
    assert settings.chips == (1, 2, 5)
    assert settings.default_chip == 2
    assert settings.rng_seed == 42
    assert settings.spin_frame_delay == 0
    assert settings.log_level == "DEBUG"


def test_garbage_falls_back_to_defaults(monkeypatch):
    monkeypatch.setenv("STARTING_BALANCE", "lots")
    monkeypatch.setenv("ROULETTE_CHIPS", "a,b")
    monkeypatch.setenv("DEFAULT_CHIP", "7")
    monkeypatch.setenv("ROULETTE_SEED", "seed")
    monkeypatch.setenv("HISTORY_SIZE", "0")
    settings = get_settings()
    assert settings.starting_balance == 10000
    assert settings.chips == DEFAULT_CHIPS
    assert settings.default_chip == DEFAULT_CHIPS[0]
    assert settings.rng_seed is None
    assert settings.history_size == 1
