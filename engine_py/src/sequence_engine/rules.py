"""
Game rule configuration and validation.
"""

from typing import Dict, Literal

from pydantic import BaseModel, Field, field_validator

from .constants import (
    HAND_SIZES, HAND_VISIBILITY_ALL, LONG_RUN_LENGTH, MAX_PLAYERS, MAX_TEAM_SIZE, MIN_HAND_SIZE,
    MIN_PLAYERS, WIN_THRESHOLDS, DEFAULT_WIN_THRESHOLD
)


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    min_players: int = Field(
        default=MIN_PLAYERS,
        ge=2,
        le=12,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=MAX_PLAYERS,
        ge=2,
        le=12,
        description="Maximum number of players allowed in a room"
    )
    max_team_size: int = Field(
        default=MAX_TEAM_SIZE,
        ge=1,
        le=6,
        description="Maximum number of players sharing one team color"
    )
    require_ready: bool = Field(
        default=True,
        description="Every player must be ready before the host can start"
    )
    host_always_ready: bool = Field(
        default=False,
        description="Treat the host as ready without toggling"
    )
    double_credit_long_runs: bool = Field(
        default=True,
        description="A run of nine or more chips counts as two sequences"
    )
    hand_visibility: Literal["all", "owner"] = Field(
        default=HAND_VISIBILITY_ALL,
        description="Whose hands are included in snapshots sent to a viewer"
    )
    allow_dead_card_exchange: bool = Field(
        default=True,
        description="Allow swapping a card whose both cells are taken, once per turn"
    )
    win_thresholds: Dict[int, int] = Field(
        default_factory=lambda: dict(WIN_THRESHOLDS),
        description="Sequence points needed to win, keyed by player count"
    )
    default_win_threshold: int = Field(
        default=DEFAULT_WIN_THRESHOLD,
        ge=1,
        description="Sequence points needed when the player count is not listed"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't go below minimum."""
        min_players = info.data.get('min_players', MIN_PLAYERS)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def get_hand_size(self, player_count: int) -> int:
        """Cards dealt to each player at the start of a game."""
        return HAND_SIZES.get(player_count, MIN_HAND_SIZE)

    def get_win_threshold(self, player_count: int) -> int:
        """Sequence points a color needs to win for this player count."""
        return self.win_thresholds.get(player_count, self.default_win_threshold)

    def points_for_run(self, length: int) -> int:
        """Sequence points credited for a recorded run of the given length."""
        if self.double_credit_long_runs and length >= LONG_RUN_LENGTH:
            return 2
        return 1


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
