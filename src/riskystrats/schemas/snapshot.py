"""Non-recursive snapshots of a game for broadcast and re-hydration."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from riskystrats.domain.enums import Building, Team
from riskystrats.domain.models import (
    Army,
    ArmyID,
    GameID,
    GameMap,
    GameState,
    Node,
    NodeID,
)
from riskystrats.utils.geometry import int_distance


class NodeSnapshot(BaseModel):
    id: int = Field(..., ge=0, description="Node id, equal to its index in the node list")
    x: float = Field(..., description="X position")
    y: float = Field(..., description="Y position")
    team: Team = Field(default=Team.NEUTRAL, description="Owning team")
    troops: int = Field(default=0, ge=0, description="Stationed troops")
    building: Building = Field(default=Building.NONE, description="Building on the node")
    assign: int | None = Field(None, ge=0, description="Standing-order target node id")
    adj: list[int] = Field(default_factory=list, description="Neighbour node ids")


class MapSnapshot(BaseModel):
    nodes: list[NodeSnapshot] = Field(default_factory=list)
    edges: list[tuple[int, int]] = Field(default_factory=list, description="Edges as id pairs")

    @model_validator(mode="after")
    def _check_topology(self) -> MapSnapshot:
        count = len(self.nodes)
        for index, node in enumerate(self.nodes):
            if node.id != index:
                raise ValueError(f"node at index {index} has id {node.id}")
            if node.assign is not None and node.assign >= count:
                raise ValueError(f"node {node.id} assigned to unknown node {node.assign}")
            for other in node.adj:
                if not 0 <= other < count:
                    raise ValueError(f"node {node.id} adjacent to unknown node {other}")

        expected: set[frozenset[int]] = set()
        for a, b in self.edges:
            if not (0 <= a < count and 0 <= b < count) or a == b:
                raise ValueError(f"invalid edge ({a}, {b})")
            expected.add(frozenset((a, b)))

        actual = {frozenset((node.id, other)) for node in self.nodes for other in node.adj}
        if actual != expected:
            raise ValueError("adjacency lists do not match the edge list")
        for node in self.nodes:
            for other in node.adj:
                if node.id not in self.nodes[other].adj:
                    raise ValueError(f"adjacency between {node.id} and {other} is not symmetric")
        return self


class ArmySnapshot(BaseModel):
    id: int = Field(..., ge=0, description="Army id")
    from_id: int = Field(..., ge=0, description="Origin node id")
    to_id: int = Field(..., ge=0, description="Next-hop node id")
    final_dest_id: int = Field(..., ge=0, description="Final destination node id")
    troops: int = Field(..., ge=0, description="Troops in the army")
    progress: int = Field(default=0, ge=0, description="Ticks travelled along the current edge")
    team: Team = Field(..., description="Owning team")


class GameSnapshot(BaseModel):
    game_id: int = Field(default=0, ge=0)
    tick: int = Field(default=0, ge=0, description="Ticks elapsed since the game started")
    army_counter: int = Field(default=0, ge=0, description="Next army id to hand out")
    map: MapSnapshot
    armies: list[ArmySnapshot] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_armies(self) -> GameSnapshot:
        count = len(self.map.nodes)
        for army in self.armies:
            for node_id in (army.from_id, army.to_id, army.final_dest_id):
                if node_id >= count:
                    raise ValueError(f"army {army.id} references unknown node {node_id}")
            if army.to_id not in self.map.nodes[army.from_id].adj:
                raise ValueError(f"army {army.id} is not on an edge")
            length = int_distance(self.map.nodes[army.from_id], self.map.nodes[army.to_id])
            if army.progress > length:
                raise ValueError(
                    f"army {army.id} progress {army.progress} exceeds edge length {length}"
                )
        return self


def snapshot_game(state: GameState) -> GameSnapshot:
    """Flatten a game state into id-referencing snapshot models."""

    nodes = [
        NodeSnapshot(
            id=node.id,
            x=node.x,
            y=node.y,
            team=node.team,
            troops=max(node.troops, 0),
            building=node.building,
            assign=node.assign,
            adj=list(node.adj),
        )
        for node in state.map.nodes
    ]
    armies = [
        ArmySnapshot(
            id=army.id,
            from_id=army.origin_id,
            to_id=army.next_hop_id,
            final_dest_id=army.final_dest_id,
            troops=max(army.troops, 0),
            progress=army.progress,
            team=army.team,
        )
        for army in state.armies
    ]
    return GameSnapshot(
        game_id=state.id,
        tick=state.tick_number,
        army_counter=state.army_counter,
        map=MapSnapshot(nodes=nodes, edges=[tuple(edge) for edge in state.map.edges]),
        armies=armies,
    )


def restore_game(snapshot: GameSnapshot) -> GameState:
    """Re-hydrate a game state from a snapshot."""

    nodes = [
        Node(
            id=NodeID(node.id),
            x=node.x,
            y=node.y,
            team=node.team,
            troops=node.troops,
            building=node.building,
            adj=[NodeID(other) for other in node.adj],
            assign=NodeID(node.assign) if node.assign is not None else None,
        )
        for node in snapshot.map.nodes
    ]
    edges = [(NodeID(a), NodeID(b)) for a, b in snapshot.map.edges]
    armies = [
        Army(
            id=ArmyID(army.id),
            team=army.team,
            origin_id=NodeID(army.from_id),
            next_hop_id=NodeID(army.to_id),
            final_dest_id=NodeID(army.final_dest_id),
            troops=army.troops,
            progress=army.progress,
        )
        for army in snapshot.armies
    ]
    army_counter = max([snapshot.army_counter, *(army.id + 1 for army in armies)])
    return GameState(
        id=GameID(snapshot.game_id),
        map=GameMap(nodes=nodes, edges=edges),
        armies=armies,
        tick_number=snapshot.tick,
        army_counter=army_counter,
    )
