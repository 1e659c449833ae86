"""Lightweight configuration for the riskystrats engine."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from riskystrats.domain.rules_config import MapRules, RulesConfig, SetupRules


class Settings(BaseSettings):
    """Tunable game settings, read from the environment or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="RISKYSTRATS_", env_file=".env", env_file_encoding="utf-8"
    )

    map_min_distance: int = Field(default=8, gt=0, description="Minimum edge length")
    map_max_distance: int = Field(default=12, gt=0, description="Maximum edge length")
    map_max_adjacency: int = Field(default=5, gt=0, description="Maximum node degree")
    nodes_per_player: int = Field(default=32, gt=0, description="Map nodes generated per player")
    min_players: int = Field(default=2, ge=1)
    max_players: int = Field(default=6, ge=1, le=6)
    start_troops: int = Field(default=30, ge=0, description="Troops on each starting node")
    rng_seed: str | None = Field(
        default=None,
        description="Seed for map generation and combat; unseeded when empty",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> Settings:
        if self.map_max_distance < self.map_min_distance:
            raise ValueError("map_max_distance must not be below map_min_distance")
        if self.max_players < self.min_players:
            raise ValueError("max_players must not be below min_players")
        return self

    def to_rules(self) -> RulesConfig:
        """Build the rule set these settings describe."""

        return RulesConfig(
            map=MapRules(
                min_distance=self.map_min_distance,
                max_distance=self.map_max_distance,
                max_adjacency=self.map_max_adjacency,
            ),
            setup=SetupRules(
                min_players=self.min_players,
                max_players=self.max_players,
                nodes_per_player=self.nodes_per_player,
                start_troops=self.start_troops,
            ),
        )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
