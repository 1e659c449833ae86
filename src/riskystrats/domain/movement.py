"""Per-tick army movement, collision and arrival rules."""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from .battle import battle_edge, battle_node
from .models import Army, Dispatch, GameMap
from .rules_config import DEFAULT_RULES, CombatRules


@dataclass(slots=True)
class ArmyStepResult:
    """Armies still alive after a step, plus follow-on sends to submit."""

    armies: list[Army]
    dispatches: list[Dispatch] = field(default_factory=list)


def is_colliding_tail(army: Army, other: Army) -> bool:
    """True when ``army`` would advance into the position ``other`` holds."""

    return army.same_direction(other) and army.progress == other.progress - 1


def is_colliding_head(game_map: GameMap, army: Army, other: Army) -> bool:
    """True when two armies on the same edge meet head-on this tick."""

    if not army.opposite_direction(other):
        return False
    length = game_map.edge_length(army.origin_id, army.next_hop_id)
    return army.progress + other.progress == length - 1


def advance_armies(
    game_map: GameMap,
    armies: Iterable[Army],
    *,
    rules: CombatRules = DEFAULT_RULES.combat,
    rng: random.Random,
) -> ArmyStepResult:
    """Advance every army by one tick.

    Armies closest to the end of their edge move first so that two armies
    travelling together, one strictly ahead of the other, never register a
    false collision.
    """

    ordered = sorted(armies, key=lambda army: army.progress, reverse=True)
    dispatches: list[Dispatch] = []

    for army in ordered:
        if army.troops <= 0:
            continue

        length = game_map.edge_length(army.origin_id, army.next_hop_id)
        if army.progress >= length:
            _arrive(game_map, army, dispatches, rules=rules, rng=rng)
            continue

        collided = False
        for other in ordered:
            if other is army or other.troops <= 0:
                continue
            if is_colliding_tail(army, other):
                if army.team == other.team and army.final_dest_id == other.final_dest_id:
                    other.troops += army.troops
                    army.troops = 0
                else:
                    battle_edge(game_map, army, other, rules=rules, rng=rng)
                collided = True
                break
            if army.team != other.team and is_colliding_head(game_map, army, other):
                battle_edge(game_map, army, other, rules=rules, rng=rng)
                collided = True
                break

        if not collided:
            army.progress += 1

    survivors = [army for army in ordered if army.troops > 0]
    return ArmyStepResult(armies=survivors, dispatches=dispatches)


def _arrive(
    game_map: GameMap,
    army: Army,
    dispatches: list[Dispatch],
    *,
    rules: CombatRules,
    rng: random.Random,
) -> None:
    node = game_map.node(army.next_hop_id)

    if node.team != army.team:
        battle_node(game_map, node, army, rules=rules, rng=rng)
        return

    node.troops += army.troops
    if army.final_dest_id != node.id:
        dispatches.append(Dispatch(from_id=node.id, to_id=army.final_dest_id, troops=army.troops))
    army.troops = 0
