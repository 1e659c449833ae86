"""Player commands applied to a game state.

Every command is total: it returns ``False`` for a request that cannot be
honoured and, in that case, leaves the state exactly as it found it.
"""

from __future__ import annotations

import logging

from .enums import Building, Team
from .models import Army, GameState, Node
from .pathfinding import find_next_hop
from .rules_config import DEFAULT_RULES, BuildingRules

logger = logging.getLogger(__name__)


def get_node(state: GameState, node_id: int) -> Node | None:
    """Look up a node by id; ``None`` when the id is out of range."""

    return state.map.get(node_id)


def build(
    state: GameState,
    team: Team,
    node: Node,
    building: Building,
    *,
    rules: BuildingRules = DEFAULT_RULES.buildings,
) -> bool:
    """Construct ``building`` on ``node``, paying its cost in troops."""

    cost = rules.cost_of(building)
    if team == Team.NEUTRAL or cost is None:
        return False
    if node.team != team or node.building == building or node.troops < cost:
        logger.debug("team %s cannot build %s on node %d", team.name, building, node.id)
        return False

    node.building = building
    node.troops -= cost
    return True


def _is_under_assault(state: GameState, team: Team, from_node: Node, to_node: Node) -> bool:
    """True when an enemy army coming from ``to_node`` is sitting on ``from_node``."""

    length = state.map.edge_length(from_node.id, to_node.id)
    return any(
        army.origin_id == to_node.id
        and army.next_hop_id == from_node.id
        and army.team != team
        and army.progress == length
        for army in state.armies
    )


def send_army(
    state: GameState,
    team: Team,
    from_node: Node,
    to_node: Node,
    troops: int,
) -> bool:
    """Dispatch up to ``troops`` from ``from_node`` towards ``to_node``."""

    if team == Team.NEUTRAL or from_node.team != team:
        return False

    if _is_under_assault(state, team, from_node, to_node):
        logger.debug("node %d is under assault from node %d", from_node.id, to_node.id)
        return False

    troops = max(0, min(troops, from_node.troops))
    if troops == 0:
        return True

    next_hop = find_next_hop(state.map, from_node.id, to_node.id, team)
    if next_hop is None:
        logger.debug("no route for team %s from %d to %d", team.name, from_node.id, to_node.id)
        return False

    from_node.troops -= troops
    state.armies.append(
        Army(
            id=state.next_army_id(),
            team=team,
            origin_id=from_node.id,
            next_hop_id=next_hop,
            final_dest_id=to_node.id,
            troops=troops,
        )
    )
    return True


def assign(state: GameState, team: Team, from_node: Node, to_node: Node) -> bool:
    """Set a standing order from ``from_node`` to ``to_node``.

    An unreachable target leaves the node with no standing order; the
    command itself still succeeds because the node's order has changed.
    """

    if team == Team.NEUTRAL or from_node.team != team:
        return False

    reachable = find_next_hop(state.map, from_node.id, to_node.id, team) is not None
    from_node.assign = to_node.id if reachable else None
    return True


def unassign(state: GameState, team: Team, from_node: Node) -> bool:
    """Clear the standing order on ``from_node``."""

    if team == Team.NEUTRAL or from_node.team != team:
        return False

    from_node.assign = None
    return True


def forfeit(state: GameState, team: Team) -> bool:
    """Remove a team from the game: its nodes go neutral and its armies vanish."""

    if team == Team.NEUTRAL:
        return False

    lost = 0
    for node in state.map.nodes:
        if node.team == team:
            node.reset()
            lost += 1

    state.armies = [army for army in state.armies if army.team != team]
    logger.info("team %s forfeited %d nodes in game %d", team.name, lost, state.id)
    return True
