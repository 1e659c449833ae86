"""Integration tests for the thread-safe game session."""

from __future__ import annotations

import threading

import pytest

from riskystrats.config import Settings
from riskystrats.domain.enums import Building, Team
from riskystrats.runtime import GameSession
from riskystrats.schemas import GameSnapshot
from riskystrats.utils.rng import make_rng


@pytest.fixture
def session():
    """A seeded two-player game."""
    return GameSession.create(2, game_id=7, rng=make_rng("session"))


def _start(session: GameSession, team: Team):
    return next(node for node in session.state.map.nodes if node.team == team)


def test_create_seats_players(session):
    assert session.state.id == 7
    assert session.tick_number == 0
    assert _start(session, Team.RED).troops == 30
    assert _start(session, Team.BLUE).troops == 30


def test_commands_by_id(session):
    red = _start(session, Team.RED)
    target = red.adj[0]

    assert session.send_army(Team.RED, red.id, target, 10)
    assert red.troops == 20
    assert len(session.state.armies) == 1

    assert session.assign(1, red.id, target)
    assert red.assign == target
    assert session.unassign(1, red.id)
    assert red.assign is None


def test_build_accepts_building_names(session):
    red = _start(session, Team.RED)
    red.troops = 250
    assert session.build(Team.RED, red.id, "factory")
    assert red.building == Building.FACTORY
    assert red.troops == 50


@pytest.mark.parametrize(
    "call",
    [
        lambda s, red: s.send_army(Team.RED, 999, red.id, 5),
        lambda s, red: s.send_army(Team.RED, red.id, -1, 5),
        lambda s, red: s.send_army(42, red.id, red.adj[0], 5),
        lambda s, red: s.build(Team.RED, red.id, "castle"),
        lambda s, red: s.build(Team.RED, 999, Building.FORT),
        lambda s, red: s.assign(Team.RED, red.id, 999),
        lambda s, red: s.unassign(Team.RED, 999),
        lambda s, red: s.forfeit(99),
        lambda s, red: s.send_army(Team.RED, red.id, red.adj[0], None),
        lambda s, red: s.send_army(Team.RED, red.id, red.adj[0], "lots"),
        lambda s, red: s.send_army(Team.RED, red.id, red.adj[0], float("inf")),
        lambda s, red: s.send_army(Team.RED, str(red.id), red.adj[0], 5),
        lambda s, red: s.send_army(Team.RED, red.id, float(red.adj[0]), 5),
        lambda s, red: s.build(Team.RED, None, "factory"),
        lambda s, red: s.assign(Team.RED, [red.id], red.adj[0]),
        lambda s, red: s.unassign(Team.RED, True),
    ],
)
def test_bad_identifiers_are_rejected(session, call):
    red = _start(session, Team.RED)
    before = session.snapshot()
    assert call(session, red) is False
    assert session.snapshot() == before


@pytest.mark.parametrize("node_id", ["3", None, 3.0, -1, 10_000])
def test_get_node_rejects_malformed_ids(session, node_id):
    assert session.get_node(node_id) is None


def test_get_node_by_id(session):
    assert session.get_node(3) is session.state.map.nodes[3]


def test_forfeit(session):
    red = _start(session, Team.RED)
    assert session.send_army(Team.RED, red.id, red.adj[0], 10)
    assert session.forfeit(Team.RED)
    assert all(node.team != Team.RED for node in session.state.map.nodes)
    assert session.state.armies == []
    assert _start(session, Team.BLUE).troops == 30


def test_ticks_advance_and_snapshot_round_trips(session):
    red = _start(session, Team.RED)
    session.send_army(Team.RED, red.id, red.adj[0], 15)
    for _ in range(25):
        session.tick()
    assert session.tick_number == 25

    snapshot = session.snapshot()
    restored = GameSession.from_snapshot(
        GameSnapshot.model_validate_json(snapshot.model_dump_json()), rng=make_rng(1)
    )
    assert restored.state == session.state
    assert restored.snapshot() == snapshot


def test_from_settings_uses_seed():
    settings = Settings(_env_file=None, rng_seed="settings", nodes_per_player=12)
    first = GameSession.from_settings(3, settings)
    second = GameSession.from_settings(3, settings)
    assert first.snapshot() == second.snapshot()
    assert len(first.state.map.nodes) <= 36


def test_concurrent_ticks_and_commands(session):
    red = _start(session, Team.RED)
    blue = _start(session, Team.BLUE)
    errors: list[BaseException] = []

    def ticker():
        try:
            for _ in range(200):
                session.tick()
        except BaseException as exc:  # pragma: no cover - surfaced below
            errors.append(exc)

    def commander(team: Team, node_id: int):
        try:
            for i in range(200):
                node = session.get_node(node_id)
                session.send_army(team, node_id, node.adj[i % len(node.adj)], 2)
        except BaseException as exc:  # pragma: no cover - surfaced below
            errors.append(exc)

    threads = [
        threading.Thread(target=ticker),
        threading.Thread(target=commander, args=(Team.RED, red.id)),
        threading.Thread(target=commander, args=(Team.BLUE, blue.id)),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert session.tick_number == 200
    snapshot = session.snapshot()
    assert all(node.troops >= 0 for node in snapshot.map.nodes)
    assert all(army.troops > 0 for army in snapshot.armies)


def test_state_reads_wait_for_a_running_tick(session):
    holding = threading.Event()
    release = threading.Event()
    seen: list[int] = []

    def long_writer():
        with session._lock:
            holding.set()
            release.wait(timeout=5)
            session.tick()

    writer = threading.Thread(target=long_writer)
    writer.start()
    assert holding.wait(timeout=5)
    reader = threading.Thread(target=lambda: seen.append(session.tick_number))
    reader.start()
    reader.join(timeout=0.2)
    assert seen == []

    release.set()
    writer.join()
    reader.join()
    assert seen == [1]
