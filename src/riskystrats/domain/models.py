"""Dataclasses describing the riskystrats game entities.

Nodes and armies live in flat arenas and refer to each other by integer
id, never by direct reference.  A node's id is its index in
``GameMap.nodes`` and is stable for the life of a game; an army refers to
its origin, next hop and final destination by node id.  A standing order
on a node is likewise just the id of its target.

The rules modules (:mod:`mapgen`, :mod:`movement`, :mod:`battle`,
:mod:`production`, :mod:`commands`, :mod:`tick`) operate on these types
only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NewType

from riskystrats.utils.geometry import int_distance

from .enums import Building, Team

# --- Strongly typed identifiers -------------------------------------------------

NodeID = NewType("NodeID", int)
ArmyID = NewType("ArmyID", int)
GameID = NewType("GameID", int)


# --- Core dataclasses -----------------------------------------------------------


@dataclass(slots=True)
class Node:
    """A vertex of the map."""

    id: NodeID
    x: float
    y: float
    team: Team = Team.NEUTRAL
    troops: int = 10
    building: Building = Building.NONE
    adj: list[NodeID] = field(default_factory=list)
    assign: NodeID | None = None
    was_attacked: bool = False

    def reset(self) -> None:
        """Return the node to neutral with no troops, building or order."""

        self.team = Team.NEUTRAL
        self.troops = 0
        self.building = Building.NONE
        self.assign = None


Edge = tuple[NodeID, NodeID]


@dataclass(slots=True)
class GameMap:
    """Node arena plus the list of undirected edges."""

    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)

    def get(self, node_id: int) -> Node | None:
        if node_id < 0 or node_id >= len(self.nodes):
            return None
        return self.nodes[node_id]

    def node(self, node_id: NodeID) -> Node:
        return self.nodes[node_id]

    def edge_length(self, a: NodeID, b: NodeID) -> int:
        """Rounded length of the edge a-b, in ticks of army travel."""

        return int_distance(self.nodes[a], self.nodes[b])

    def neighbors(self, node_id: NodeID) -> list[Node]:
        return [self.nodes[other] for other in self.nodes[node_id].adj]


@dataclass(slots=True)
class Army:
    """Troops travelling along an edge."""

    id: ArmyID
    team: Team
    origin_id: NodeID
    next_hop_id: NodeID
    final_dest_id: NodeID
    troops: int
    progress: int = 0

    def same_direction(self, other: Army) -> bool:
        return self.origin_id == other.origin_id and self.next_hop_id == other.next_hop_id

    def opposite_direction(self, other: Army) -> bool:
        return self.origin_id == other.next_hop_id and self.next_hop_id == other.origin_id


@dataclass(slots=True)
class Dispatch:
    """A follow-on send produced when an army arrives short of its final destination."""

    from_id: NodeID
    to_id: NodeID
    troops: int


@dataclass(slots=True)
class GameState:
    """Everything one game instance owns."""

    id: GameID
    map: GameMap
    armies: list[Army] = field(default_factory=list)
    tick_number: int = 0
    army_counter: int = 0

    def next_army_id(self) -> ArmyID:
        army_id = ArmyID(self.army_counter)
        self.army_counter += 1
        return army_id
