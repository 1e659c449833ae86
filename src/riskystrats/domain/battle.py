"""Combat resolution rules.

All combat uses one stochastic proportional-loss formula.  The larger
force suffers a baseline loss proportional to its own size; the smaller
force suffers that baseline scaled up by the ratio larger/smaller, so
the weaker side bleeds faster while still wearing the stronger one
down.  Losses are multiplied by the applicable modifiers and rounded up
before being subtracted.  Troop counts may dip below zero here; the
movement step discards or resets anything left non-positive before the
tick completes.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from riskystrats.utils.rng import loss_multiplier

from .enums import Building, Team
from .models import Army, GameMap, Node
from .rules_config import DEFAULT_RULES, CombatRules


@dataclass(slots=True)
class BattleOutcome:
    """Troop counts of both sides after one round of combat."""

    troops_a: int
    troops_b: int
    losses_a: int
    losses_b: int


def _baseline_loss(troops: int, rules: CombatRules, rng: random.Random) -> float:
    return troops * rules.loss_mean_ratio * loss_multiplier(rng, rules.loss_radius)


def resolve_losses(
    troops_a: int,
    troops_b: int,
    mult_a: float,
    mult_b: float,
    *,
    rules: CombatRules = DEFAULT_RULES.combat,
    rng: random.Random,
) -> BattleOutcome:
    """Apply one round of the proportional-loss formula to two troop pools."""

    if troops_a <= 0 or troops_b <= 0:
        return BattleOutcome(max(troops_a, 0), max(troops_b, 0), 0, 0)

    if troops_a < troops_b:
        raw_b = _baseline_loss(troops_b, rules, rng)
        raw_a = raw_b * (troops_b / troops_a)
    elif troops_a > troops_b:
        raw_a = _baseline_loss(troops_a, rules, rng)
        raw_b = raw_a * (troops_a / troops_b)
    else:
        raw_a = _baseline_loss(troops_a, rules, rng)
        raw_b = _baseline_loss(troops_b, rules, rng)

    losses_a = math.ceil(raw_a * mult_a)
    losses_b = math.ceil(raw_b * mult_b)
    return BattleOutcome(troops_a - losses_a, troops_b - losses_b, losses_a, losses_b)


def _has_friendly_artillery(game_map: GameMap, army: Army) -> bool:
    origin = game_map.node(army.origin_id)
    return origin.team == army.team and origin.building == Building.ARTILLERY


def battle_node(
    game_map: GameMap,
    node: Node,
    army: Army,
    *,
    rules: CombatRules = DEFAULT_RULES.combat,
    rng: random.Random,
) -> BattleOutcome:
    """Resolve one round of an army assaulting a node it does not own.

    If the garrison breaks, the army is spent: its survivors become the new
    garrison, or the node falls neutral when nobody is left standing.  If the
    garrison holds, the army keeps its remaining troops and stays at the
    node to fight again next tick.
    """

    node_mult = 1.0
    if node.building == Building.FORT:
        node_mult *= rules.fort_defense_multiplier
    if _has_friendly_artillery(game_map, army):
        node_mult *= rules.artillery_multiplier
    army_mult = rules.artillery_multiplier if node.building == Building.ARTILLERY else 1.0

    outcome = resolve_losses(
        node.troops, army.troops, node_mult, army_mult, rules=rules, rng=rng
    )

    if outcome.troops_a <= 0:
        node.building = Building.NONE
        node.assign = None
        army.troops = 0
        if outcome.troops_b > 0:
            node.team = army.team
            node.troops = outcome.troops_b
        else:
            node.team = Team.NEUTRAL
            node.troops = 0
    else:
        node.troops = outcome.troops_a
        army.troops = outcome.troops_b

    node.was_attacked = True
    return outcome


def battle_edge(
    game_map: GameMap,
    army_a: Army,
    army_b: Army,
    *,
    rules: CombatRules = DEFAULT_RULES.combat,
    rng: random.Random,
) -> BattleOutcome:
    """Resolve two armies meeting on an edge."""

    mult_a = rules.artillery_multiplier if _has_friendly_artillery(game_map, army_b) else 1.0
    mult_b = rules.artillery_multiplier if _has_friendly_artillery(game_map, army_a) else 1.0

    outcome = resolve_losses(
        army_a.troops, army_b.troops, mult_a, mult_b, rules=rules, rng=rng
    )
    army_a.troops = outcome.troops_a
    army_b.troops = outcome.troops_b
    return outcome
