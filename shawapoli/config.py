"""
Game configuration settings.

`GameConfig` is the plain settings object the engine reads. `GameSettings`
loads the same fields from the environment (prefix ``SHAWAPOLI_``) or a
``.env`` file and validates them.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass
class GameConfig:
    """Configuration for a Shawapoli game."""

    starting_money: int = 1500
    go_salary: int = 200
    use_free_parking_pot: bool = True
    jail_fine: int = 50

    upgrade_cost_factor: float = 0.5
    max_upgrade_level: int = 4

    min_players: int = 2
    max_players: int = 6

    seed: Optional[int] = None

    # Seconds each single-tile step is given to settle on screen.
    step_delay: float = 0.0
    log_history_limit: int = 80

    time_limit_turns: Optional[int] = None


class GameSettings(BaseSettings):
    """
    Environment-backed game configuration.

    Environment variables (prefix: SHAWAPOLI_):
        SHAWAPOLI_STARTING_MONEY       - Money each player starts with (default: 1500)
        SHAWAPOLI_GO_SALARY            - Salary for passing GO (default: 200)
        SHAWAPOLI_USE_FREE_PARKING_POT - Collect taxes into the Free Parking pot (default: true)
        SHAWAPOLI_JAIL_FINE            - Fine to leave jail (default: 50)
        SHAWAPOLI_UPGRADE_COST_FACTOR  - Upgrade cost as a fraction of price per level (default: 0.5)
        SHAWAPOLI_MAX_UPGRADE_LEVEL    - Highest upgrade level (default: 4)
        SHAWAPOLI_MIN_PLAYERS / SHAWAPOLI_MAX_PLAYERS - Allowed player count (default: 2-6)
        SHAWAPOLI_SEED                 - RNG seed for dice and shuffles
        SHAWAPOLI_STEP_DELAY           - Seconds per movement step (default: 0)
        SHAWAPOLI_LOG_HISTORY_LIMIT    - Narration entries kept (default: 80)
        SHAWAPOLI_TIME_LIMIT_TURNS     - End the game after this many turns
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="SHAWAPOLI_",
    )

    starting_money: int = Field(default=1500, ge=0, description="Starting money per player.")
    go_salary: int = Field(default=200, ge=0, description="Salary for passing or landing on GO.")
    use_free_parking_pot: bool = Field(default=True, description="Pay taxes into the Free Parking pot.")
    jail_fine: int = Field(default=50, ge=0, description="Fine to leave jail.")
    upgrade_cost_factor: float = Field(default=0.5, gt=0, description="Upgrade cost factor.")
    max_upgrade_level: int = Field(default=4, ge=0, description="Highest upgrade level.")
    min_players: int = Field(default=2, ge=1)
    max_players: int = Field(default=6, ge=1)
    seed: Optional[int] = Field(default=None, description="Seed for dice and deck shuffles.")
    step_delay: float = Field(default=0.0, ge=0, description="Seconds per movement step.")
    log_history_limit: int = Field(default=80, gt=0, description="Narration entries kept.")
    time_limit_turns: Optional[int] = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_player_range(self) -> "GameSettings":
        if self.min_players > self.max_players:
            raise ValueError("min_players must not exceed max_players")
        return self

    def to_config(self) -> GameConfig:
        """Build the engine configuration from these settings."""
        return GameConfig(**self.model_dump())


@lru_cache
def get_game_settings() -> GameSettings:
    """Return cached game settings instance."""
    return GameSettings()
