"""Simulation rules for riskystrats.

This package holds the whole engine and operates purely in-memory:

* Dataclasses describing nodes, armies, the map and a game (see :mod:`models`).
* Enumerations for teams and buildings.
* Rule configuration objects (see :mod:`rules_config`).
* Pure rule functions: map generation, routing, combat, movement,
  production, commands and the tick itself.
"""

from . import (
    battle,
    commands,
    enums,
    mapgen,
    models,
    movement,
    pathfinding,
    production,
    rules_config,
    setup,
    tick,
)

__all__ = [
    "battle",
    "commands",
    "enums",
    "mapgen",
    "models",
    "movement",
    "pathfinding",
    "production",
    "rules_config",
    "setup",
    "tick",
]
