"""Single-writer handle around one running game.

The session layer (sockets, rooms, broadcast timers) lives outside this
package.  It talks to a game through :class:`GameSession`, which accepts
raw ids as they arrive off the wire, resolves them against the node arena,
and serializes every command, tick and snapshot behind one lock so a
timer thread and request handlers can share an instance safely.
"""

from __future__ import annotations

import logging
import operator
import random
import threading

from riskystrats.config import Settings, get_settings
from riskystrats.domain import commands
from riskystrats.domain.enums import Building, Team
from riskystrats.domain.models import GameID, GameState, Node
from riskystrats.domain.rules_config import DEFAULT_RULES, RulesConfig
from riskystrats.domain.setup import new_game
from riskystrats.domain.tick import run_tick
from riskystrats.schemas import GameSnapshot, restore_game, snapshot_game
from riskystrats.utils.rng import make_rng

logger = logging.getLogger(__name__)


def _as_team(value: Team | int) -> Team | None:
    try:
        return Team(value)
    except ValueError:
        return None


def _as_building(value: Building | str) -> Building | None:
    try:
        return Building(value)
    except ValueError:
        return None


def _as_index(value: object) -> int | None:
    """Accept only true integers as node ids; strings and floats are rejected."""

    if isinstance(value, bool):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


def _as_count(value: object) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


class GameSession:
    """Thread-safe command and tick entry points for one game."""

    def __init__(
        self,
        state: GameState,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        rng: random.Random | None = None,
    ) -> None:
        self._state = state
        self._rules = rules
        self._rng = rng or make_rng()
        self._lock = threading.RLock()

    @classmethod
    def create(
        cls,
        n_players: int,
        *,
        game_id: int = 0,
        rules: RulesConfig = DEFAULT_RULES,
        rng: random.Random | None = None,
    ) -> GameSession:
        """Generate a fresh game for ``n_players``."""

        rng = rng or make_rng()
        state = new_game(n_players, game_id=GameID(game_id), rules=rules, rng=rng)
        return cls(state, rules=rules, rng=rng)

    @classmethod
    def from_settings(
        cls,
        n_players: int,
        settings: Settings | None = None,
        *,
        game_id: int = 0,
    ) -> GameSession:
        """Generate a game using rules and seed taken from ``Settings``."""

        settings = settings or get_settings()
        return cls.create(
            n_players,
            game_id=game_id,
            rules=settings.to_rules(),
            rng=make_rng(settings.rng_seed),
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: GameSnapshot,
        *,
        rules: RulesConfig = DEFAULT_RULES,
        rng: random.Random | None = None,
    ) -> GameSession:
        return cls(restore_game(snapshot), rules=rules, rng=rng)

    @property
    def state(self) -> GameState:
        """The live game state.

        Reading it is serialized with ticks and commands, but the returned object
        keeps changing afterwards; other threads should use :meth:`snapshot`.
        """

        with self._lock:
            return self._state

    @property
    def tick_number(self) -> int:
        with self._lock:
            return self._state.tick_number

    def _node(self, node_id: object) -> Node | None:
        index = _as_index(node_id)
        if index is None:
            return None
        return commands.get_node(self._state, index)

    def tick(self) -> None:
        with self._lock:
            run_tick(self._state, rules=self._rules, rng=self._rng)

    def get_node(self, node_id: int) -> Node | None:
        with self._lock:
            return self._node(node_id)

    def build(self, team: Team | int, node_id: int, building: Building | str) -> bool:
        with self._lock:
            player = _as_team(team)
            node = self._node(node_id)
            kind = _as_building(building)
            if player is None or node is None or kind is None:
                return False
            return commands.build(
                self._state, player, node, kind, rules=self._rules.buildings
            )

    def send_army(self, team: Team | int, from_id: int, to_id: int, troops: int) -> bool:
        with self._lock:
            player = _as_team(team)
            from_node = self._node(from_id)
            to_node = self._node(to_id)
            amount = _as_count(troops)
            if player is None or from_node is None or to_node is None or amount is None:
                return False
            return commands.send_army(self._state, player, from_node, to_node, amount)

    def assign(self, team: Team | int, from_id: int, to_id: int) -> bool:
        with self._lock:
            player = _as_team(team)
            from_node = self._node(from_id)
            to_node = self._node(to_id)
            if player is None or from_node is None or to_node is None:
                return False
            return commands.assign(self._state, player, from_node, to_node)

    def unassign(self, team: Team | int, from_id: int) -> bool:
        with self._lock:
            player = _as_team(team)
            from_node = self._node(from_id)
            if player is None or from_node is None:
                return False
            return commands.unassign(self._state, player, from_node)

    def forfeit(self, team: Team | int) -> bool:
        with self._lock:
            player = _as_team(team)
            if player is None:
                logger.debug("ignoring forfeit for unknown team %r", team)
                return False
            return commands.forfeit(self._state, player)

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return snapshot_game(self._state)
