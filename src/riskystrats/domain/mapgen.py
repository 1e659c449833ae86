"""Procedural map generation.

The map grows breadth-first from a single node at the origin.  Each node
taken off the growth queue proposes a ring of candidate positions around
itself; candidates are drawn at random, wired to every nearby node they can
reach without breaking the distance, degree or no-crossing constraints, and
then become nodes that are queued in turn.
"""

from __future__ import annotations

import logging
import math
import random
from collections import deque

from riskystrats.utils.geometry import Point, distance, segments_intersect

from .models import GameMap, Node, NodeID
from .rules_config import MapRules

logger = logging.getLogger(__name__)


class _Generator:
    def __init__(self, rules: MapRules, rng: random.Random) -> None:
        self.rules = rules
        self.rng = rng
        self.map = GameMap()

    def _nearby(self, p: Point | Node, q: Point | Node) -> bool:
        return distance(p, q) <= self.rules.max_distance * 2

    def _invasive(self, p: Point | Node, q: Point | Node) -> bool:
        return distance(p, q) < self.rules.min_distance

    def _nearby_nodes(self, node: Node) -> list[Node]:
        return [other for other in self.map.nodes if self._nearby(node, other)]

    def _nearby_edges(self, node: Node) -> list[tuple[Node, Node]]:
        # A new edge reaches up to 2 * max from node; an edge crossing it has an
        # endpoint within another max
        reach = self.rules.max_distance * 3
        edges: list[tuple[Node, Node]] = []
        for a_id, b_id in self.map.edges:
            a, b = self.map.nodes[a_id], self.map.nodes[b_id]
            if distance(node, a) <= reach or distance(node, b) <= reach:
                edges.append((a, b))
        return edges

    def _candidates(self, node: Node, nearby: list[Node]) -> list[Point]:
        rules = self.rules
        angles = rules.max_adjacency * rules.resolution
        candidates: list[Point] = []
        for i in range(angles):
            angle = 2 * math.pi * i / angles
            for radius in range(rules.min_distance, rules.max_distance):
                candidate = Point(
                    node.x + math.cos(angle) * radius,
                    node.y + math.sin(angle) * radius,
                )
                if not any(self._invasive(candidate, other) for other in nearby):
                    candidates.append(candidate)
        return candidates

    def _can_connect(
        self, new: Node, other: Node, nearby_edges: list[tuple[Node, Node]]
    ) -> bool:
        length = distance(new, other)
        if length < self.rules.min_distance or length > self.rules.max_distance:
            return False
        for a, b in nearby_edges:
            if a is new or a is other or b is new or b is other:
                continue
            if segments_intersect(new, other, a, b):
                return False
        return True

    def _place(
        self,
        candidate: Point,
        nearby: list[Node],
        nearby_edges: list[tuple[Node, Node]],
    ) -> Node | None:
        """Wire a candidate into the graph; ``None`` if it could reach nothing."""

        max_adj = self.rules.max_adjacency
        new = Node(
            id=NodeID(len(self.map.nodes)),
            x=candidate.x,
            y=candidate.y,
            troops=self.rules.default_troops,
        )
        links: list[Node] = []
        for other in nearby:
            if len(other.adj) >= max_adj:
                continue
            if len(links) >= max_adj:
                break
            # Edges committed earlier in this loop must be visible to later checks
            if self._can_connect(new, other, nearby_edges):
                links.append(other)
                nearby_edges.append((new, other))

        if not links:
            return None

        for other in links:
            new.adj.append(other.id)
            other.adj.append(new.id)
            self.map.edges.append((new.id, other.id))
        self.map.nodes.append(new)
        return new

    def run(self) -> GameMap:
        rules = self.rules
        origin = Node(id=NodeID(0), x=0.0, y=0.0, troops=rules.default_troops)
        self.map.nodes.append(origin)
        queue: deque[Node] = deque([origin])

        while queue and len(self.map.nodes) < rules.node_count:
            node = queue.popleft()
            if len(node.adj) >= rules.max_adjacency:
                continue

            nearby = self._nearby_nodes(node)
            nearby_edges = self._nearby_edges(node)
            choices = self._candidates(node, nearby)

            while (
                len(node.adj) < rules.max_adjacency
                and len(self.map.nodes) < rules.node_count
                and choices
            ):
                candidate = choices[self.rng.randrange(len(choices))]
                new = self._place(candidate, nearby, nearby_edges)
                if new is None:
                    choices.remove(candidate)
                    continue

                choices = [other for other in choices if not self._invasive(new, other)]
                nearby.append(new)
                queue.append(new)

        return self.map


def generate_map(rules: MapRules, rng: random.Random) -> GameMap:
    """Generate a connected, non-crossing map of up to ``rules.node_count`` nodes."""

    if rules.min_distance <= 0 or rules.max_distance < rules.min_distance:
        raise ValueError(
            f"invalid distance bounds: min={rules.min_distance}, max={rules.max_distance}"
        )
    if rules.max_adjacency < 1:
        raise ValueError(f"max_adjacency must be positive, got {rules.max_adjacency}")

    game_map = _Generator(rules, rng).run()
    logger.info(
        "generated map with %d nodes and %d edges", len(game_map.nodes), len(game_map.edges)
    )
    return game_map
