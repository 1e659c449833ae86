"""Tick orchestration for riskystrats games."""

from __future__ import annotations

import random

from . import commands
from .models import GameState, Node
from .movement import advance_armies
from .pathfinding import is_reachable
from .production import produce
from .rules_config import DEFAULT_RULES, ProductionRules, RulesConfig


def run_tick(
    state: GameState,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    rng: random.Random,
) -> None:
    """Advance the game by one tick.

    Armies move and fight first, then every node produces and reviews its
    standing order, and finally armies that arrived short of their final
    destination are sent onwards.
    """

    state.tick_number += 1

    step = advance_armies(state.map, state.armies, rules=rules.combat, rng=rng)
    state.armies = step.armies

    for node in state.map.nodes:
        produce(state.map, node, state.tick_number, rules=rules.production)
        if node.assign is not None:
            _review_standing_order(state, node, rules.production)

    for dispatch in step.dispatches:
        origin = state.map.node(dispatch.from_id)
        target = state.map.node(dispatch.to_id)
        commands.send_army(state, origin.team, origin, target, dispatch.troops)


def _review_standing_order(state: GameState, node: Node, rules: ProductionRules) -> None:
    """Fire the order on its cadence; drop it once it can no longer be carried out."""

    target = state.map.node(node.assign)
    tick_number = state.tick_number

    if tick_number % rules.standing_order_interval == 0:
        keep = commands.send_army(state, node.team, node, target, node.troops)
    elif tick_number % rules.production_interval == 0:
        keep = is_reachable(state.map, node.id, target.id, node.team)
    else:
        keep = True

    if not keep:
        node.assign = None
