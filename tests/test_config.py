"""
Tests for configuration loading and the narration log.
"""

import pytest
from pydantic import ValidationError

from shawapoli.config import GameConfig, GameSettings, get_game_settings
from shawapoli.events import EventLog, EventType


@pytest.fixture(autouse=True)
def clean_settings_cache():
    get_game_settings.cache_clear()
    yield
    get_game_settings.cache_clear()


def test_defaults():
    config = GameConfig()

    assert config.starting_money == 1500
    assert config.go_salary == 200
    assert config.use_free_parking_pot is True
    assert config.jail_fine == 50
    assert config.upgrade_cost_factor == 0.5
    assert config.max_upgrade_level == 4
    assert (config.min_players, config.max_players) == (2, 6)
    assert config.log_history_limit == 80
    assert config.time_limit_turns is None


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("SHAWAPOLI_STARTING_MONEY", "2000")
    monkeypatch.setenv("SHAWAPOLI_USE_FREE_PARKING_POT", "false")
    monkeypatch.setenv("SHAWAPOLI_SEED", "11")

    config = get_game_settings().to_config()

    assert isinstance(config, GameConfig)
    assert config.starting_money == 2000
    assert config.use_free_parking_pot is False
    assert config.seed == 11
    assert config.go_salary == 200


def test_settings_are_cached(monkeypatch):
    first = get_game_settings()
    monkeypatch.setenv("SHAWAPOLI_JAIL_FINE", "75")

    assert get_game_settings() is first
    get_game_settings.cache_clear()
    assert get_game_settings().jail_fine == 75


def test_settings_validate_ranges():
    with pytest.raises(ValidationError):
        GameSettings(starting_money=-1)
    with pytest.raises(ValidationError):
        GameSettings(min_players=5, max_players=3)


def test_event_log_keeps_most_recent_entries():
    log = EventLog(max_events=3)
    for turn in range(5):
        log.log(EventType.TURN_START, f"Player 1's turn {turn}.", player_id=1, turn=turn)

    assert log.messages() == ["Player 1's turn 2.", "Player 1's turn 3.", "Player 1's turn 4."]
    assert log.get_recent_events(1)[0].details == {"turn": 4}
    assert log.get_recent_events(0) == []


def test_event_log_mirrors_to_logger(caplog):
    log = EventLog()

    with caplog.at_level("INFO", logger="shawapoli.events"):
        log.log(EventType.PURCHASE, "Player 1 bought Baltic Avenue for $60.", player_id=1)

    assert "Player 1 bought Baltic Avenue for $60." in caplog.text
