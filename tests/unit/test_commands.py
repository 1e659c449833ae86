"""Unit tests for player commands."""

from __future__ import annotations

import copy

import pytest

from riskystrats.domain import commands
from riskystrats.domain import models as dm
from riskystrats.domain.enums import Building, Team


def _state() -> dm.GameState:
    """Line map 0 - 1 - 2 - 3: RED holds 0 and 1, BLUE holds 2, 3 is neutral."""

    teams = [Team.RED, Team.RED, Team.BLUE, Team.NEUTRAL]
    nodes = [
        dm.Node(id=dm.NodeID(i), x=10.0 * i, y=0.0, team=team, troops=50)
        for i, team in enumerate(teams)
    ]
    edges = [(dm.NodeID(i), dm.NodeID(i + 1)) for i in range(3)]
    for a, b in edges:
        nodes[a].adj.append(b)
        nodes[b].adj.append(a)
    return dm.GameState(id=dm.GameID(1), map=dm.GameMap(nodes=nodes, edges=edges))


def _node(state: dm.GameState, node_id: int) -> dm.Node:
    node = commands.get_node(state, node_id)
    assert node is not None
    return node


class TestGetNode:
    def test_valid_id(self):
        state = _state()
        assert commands.get_node(state, 2) is state.map.nodes[2]

    @pytest.mark.parametrize("node_id", [-1, 4, 100])
    def test_out_of_range(self, node_id):
        assert commands.get_node(_state(), node_id) is None


class TestBuild:
    def test_build_pays_cost(self):
        state = _state()
        node = _node(state, 0)
        node.troops = 250
        assert commands.build(state, Team.RED, node, Building.FACTORY)
        assert node.building == Building.FACTORY
        assert node.troops == 50

    def test_wrong_team_changes_nothing(self):
        state = _state()
        node = _node(state, 0)
        node.troops = 250
        before = copy.deepcopy(state)
        assert not commands.build(state, Team.BLUE, node, Building.FACTORY)
        assert state == before

    def test_insufficient_troops(self):
        state = _state()
        node = _node(state, 0)
        assert not commands.build(state, Team.RED, node, Building.FORT)
        assert node.building == Building.NONE
        assert node.troops == 50

    def test_same_building_twice(self):
        state = _state()
        node = _node(state, 0)
        node.troops = 1000
        assert commands.build(state, Team.RED, node, Building.FACTORY)
        assert not commands.build(state, Team.RED, node, Building.FACTORY)
        assert node.troops == 800

    def test_replacing_a_building(self):
        state = _state()
        node = _node(state, 0)
        node.troops = 700
        assert commands.build(state, Team.RED, node, Building.FACTORY)
        assert commands.build(state, Team.RED, node, Building.FORT)
        assert node.building == Building.FORT
        assert node.troops == 0

    def test_none_is_not_buildable(self):
        state = _state()
        assert not commands.build(state, Team.RED, _node(state, 0), Building.NONE)

    def test_neutral_team_cannot_build(self):
        state = _state()
        assert not commands.build(state, Team.NEUTRAL, _node(state, 3), Building.FACTORY)


class TestSendArmy:
    def test_send_creates_army(self):
        state = _state()
        assert commands.send_army(state, Team.RED, _node(state, 0), _node(state, 2), 20)
        assert _node(state, 0).troops == 30
        (army,) = state.armies
        assert army.team == Team.RED
        assert (army.origin_id, army.next_hop_id, army.final_dest_id) == (0, 1, 2)
        assert army.troops == 20
        assert army.progress == 0
        assert state.army_counter == 1

    def test_troops_are_clamped(self):
        state = _state()
        assert commands.send_army(state, Team.RED, _node(state, 0), _node(state, 1), 1000)
        assert state.armies[0].troops == 50
        assert _node(state, 0).troops == 0

    @pytest.mark.parametrize("troops", [0, -5])
    def test_nothing_to_send_succeeds_without_army(self, troops):
        state = _state()
        assert commands.send_army(state, Team.RED, _node(state, 0), _node(state, 1), troops)
        assert state.armies == []
        assert _node(state, 0).troops == 50

    def test_unreachable_changes_nothing(self):
        state = _state()
        before = copy.deepcopy(state)
        assert not commands.send_army(state, Team.RED, _node(state, 0), _node(state, 3), 10)
        assert state == before

    def test_not_owner(self):
        state = _state()
        assert not commands.send_army(state, Team.BLUE, _node(state, 0), _node(state, 1), 10)
        assert state.armies == []

    def test_blocked_while_under_assault(self):
        state = _state()
        state.armies.append(
            dm.Army(
                id=dm.ArmyID(0),
                team=Team.BLUE,
                origin_id=dm.NodeID(2),
                next_hop_id=dm.NodeID(1),
                final_dest_id=dm.NodeID(1),
                troops=40,
                progress=10,
            )
        )
        assert not commands.send_army(state, Team.RED, _node(state, 1), _node(state, 2), 10)
        assert len(state.armies) == 1
        # Retreating the other way is still allowed
        assert commands.send_army(state, Team.RED, _node(state, 1), _node(state, 0), 10)

    def test_army_still_travelling_does_not_block(self):
        state = _state()
        state.armies.append(
            dm.Army(
                id=dm.ArmyID(0),
                team=Team.BLUE,
                origin_id=dm.NodeID(2),
                next_hop_id=dm.NodeID(1),
                final_dest_id=dm.NodeID(1),
                troops=40,
                progress=4,
            )
        )
        assert commands.send_army(state, Team.RED, _node(state, 1), _node(state, 2), 10)


class TestStandingOrders:
    def test_assign_reachable(self):
        state = _state()
        assert commands.assign(state, Team.RED, _node(state, 0), _node(state, 2))
        assert _node(state, 0).assign == 2

    def test_assign_unreachable_clears_order(self):
        state = _state()
        node = _node(state, 0)
        node.assign = dm.NodeID(1)
        assert commands.assign(state, Team.RED, node, _node(state, 3))
        assert node.assign is None

    def test_assign_not_owner(self):
        state = _state()
        assert not commands.assign(state, Team.BLUE, _node(state, 0), _node(state, 1))
        assert _node(state, 0).assign is None

    def test_unassign_is_idempotent(self):
        state = _state()
        node = _node(state, 0)
        node.assign = dm.NodeID(1)
        assert commands.unassign(state, Team.RED, node)
        assert commands.unassign(state, Team.RED, node)
        assert node.assign is None

    def test_unassign_not_owner(self):
        state = _state()
        node = _node(state, 0)
        node.assign = dm.NodeID(1)
        assert not commands.unassign(state, Team.BLUE, node)
        assert node.assign == 1


class TestForfeit:
    def test_forfeit_clears_team(self):
        state = _state()
        _node(state, 3).team = Team.RED
        _node(state, 0).building = Building.FACTORY
        _node(state, 1).assign = dm.NodeID(0)
        assert commands.send_army(state, Team.RED, _node(state, 0), _node(state, 1), 10)
        assert commands.send_army(state, Team.RED, _node(state, 1), _node(state, 0), 20)
        assert commands.send_army(state, Team.BLUE, _node(state, 2), _node(state, 1), 10)

        assert commands.forfeit(state, Team.RED)

        for node_id in (0, 1, 3):
            node = _node(state, node_id)
            assert node.team == Team.NEUTRAL
            assert node.troops == 0
            assert node.building == Building.NONE
            assert node.assign is None
        assert [army.team for army in state.armies] == [Team.BLUE]
        assert _node(state, 2).team == Team.BLUE

    def test_neutral_cannot_forfeit(self):
        assert not commands.forfeit(_state(), Team.NEUTRAL)
