"""Constrained shortest-path routing for army dispatch.

Armies may only travel through territory owned by their team; the single
exception is the destination itself, which may belong to anyone.  Edge
weights are the Euclidean lengths of the edges.
"""

from __future__ import annotations

from heapq import heappop, heappush

from riskystrats.utils.geometry import distance

from .enums import Team
from .models import GameMap, NodeID


def find_path(
    game_map: GameMap,
    from_id: NodeID,
    to_id: NodeID,
    team: Team,
) -> list[NodeID] | None:
    """Find the shortest passable path between two nodes using Dijkstra's algorithm.

    Args:
        game_map: Map to search
        from_id: Starting node ID
        to_id: Destination node ID
        team: Team whose territory may be crossed

    Returns:
        Node IDs from the first hop to the destination inclusive, or None when the
        destination cannot be reached (including when ``from_id == to_id``)
    """
    if from_id == to_id:
        return None
    if game_map.get(from_id) is None or game_map.get(to_id) is None:
        return None

    # Priority queue: (total_distance, node_id)
    pq: list[tuple[float, NodeID]] = [(0.0, from_id)]
    visited: set[NodeID] = set()
    best: dict[NodeID, float] = {from_id: 0.0}
    previous: dict[NodeID, NodeID] = {}

    while pq:
        current_dist, current_id = heappop(pq)

        if current_id in visited:
            continue
        visited.add(current_id)

        if current_id == to_id:
            break

        current = game_map.node(current_id)
        for neighbor_id in current.adj:
            if neighbor_id in visited:
                continue
            neighbor = game_map.node(neighbor_id)
            if neighbor_id != to_id and neighbor.team != team:
                continue

            new_dist = current_dist + distance(current, neighbor)
            if neighbor_id not in best or new_dist < best[neighbor_id]:
                best[neighbor_id] = new_dist
                previous[neighbor_id] = current_id
                heappush(pq, (new_dist, neighbor_id))

    if to_id not in previous:
        return None

    path: list[NodeID] = []
    current_id = to_id
    while current_id != from_id:
        path.append(current_id)
        current_id = previous[current_id]

    path.reverse()
    return path


def find_next_hop(
    game_map: GameMap,
    from_id: NodeID,
    to_id: NodeID,
    team: Team,
) -> NodeID | None:
    """Return the first step from ``from_id`` towards ``to_id``, or None if unreachable."""

    path = find_path(game_map, from_id, to_id, team)
    if not path:
        return None
    return path[0]


def is_reachable(game_map: GameMap, from_id: NodeID, to_id: NodeID, team: Team) -> bool:
    return find_next_hop(game_map, from_id, to_id, team) is not None
