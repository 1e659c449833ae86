"""Creation of new games."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from .enums import Team
from .mapgen import generate_map
from .models import GameID, GameState
from .rules_config import DEFAULT_RULES, RulesConfig

logger = logging.getLogger(__name__)


def new_game(
    n_players: int,
    *,
    game_id: GameID = GameID(0),
    rules: RulesConfig = DEFAULT_RULES,
    rng: random.Random,
) -> GameState:
    """Generate a map sized for ``n_players`` and place each player's start node.

    Raises:
        ValueError: If the player count is outside the configured bounds or the
            map came out too small to seat every player
    """

    setup = rules.setup
    if not setup.min_players <= n_players <= setup.max_players:
        raise ValueError(
            f"n_players must be between {setup.min_players} and {setup.max_players}, "
            f"got {n_players}"
        )

    map_rules = replace(rules.map, node_count=setup.nodes_per_player * n_players)
    game_map = generate_map(map_rules, rng)
    if len(game_map.nodes) < n_players:
        raise ValueError(
            f"generated map has {len(game_map.nodes)} nodes, fewer than {n_players} players"
        )

    starts = rng.sample(game_map.nodes, n_players)
    for slot, node in enumerate(starts, start=1):
        node.team = Team(slot)
        node.troops = setup.start_troops

    logger.info(
        "created game %d for %d players on %d nodes", game_id, n_players, len(game_map.nodes)
    )
    return GameState(id=game_id, map=game_map)
