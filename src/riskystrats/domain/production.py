"""Troop production rules."""

from __future__ import annotations

from .enums import Building, Team
from .models import GameMap, Node
from .rules_config import DEFAULT_RULES, ProductionRules


def power_multiplier(game_map: GameMap, node: Node) -> int:
    """1 plus the number of adjacent same-team power plants."""

    return 1 + sum(
        1
        for other in game_map.neighbors(node.id)
        if other.team == node.team and other.building == Building.POWER_PLANT
    )


def produce(
    game_map: GameMap,
    node: Node,
    tick_number: int,
    *,
    rules: ProductionRules = DEFAULT_RULES.production,
) -> int:
    """Grow a node's garrison for this tick and return the troops added.

    Nothing grows on off-cadence ticks or on a node that was attacked during
    the tick; the attacked flag is cleared either way.
    """

    attacked = node.was_attacked
    node.was_attacked = False
    if tick_number % rules.production_interval != 0 or attacked:
        return 0

    if node.building == Building.FACTORY:
        added = rules.factory_rate * power_multiplier(game_map, node)
    elif (
        node.team == Team.NEUTRAL
        and rules.neutral_pause_interval > 0
        and tick_number % rules.neutral_pause_interval == 0
    ):
        added = 0
    else:
        added = rules.base_rate

    node.troops += added
    return added
