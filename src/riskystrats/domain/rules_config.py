"""Declarative rule configuration for the simulation engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from .enums import Building


@dataclass(frozen=True, slots=True)
class MapRules:
    """Map generation constraints."""

    node_count: int = 64
    min_distance: int = 8
    max_distance: int = 12
    max_adjacency: int = 5
    resolution: int = 4  # candidate angles per adjacency slot
    default_troops: int = 10


@dataclass(frozen=True, slots=True)
class CombatRules:
    """Proportional loss formula and combat modifiers."""

    loss_mean_ratio: float = 1 / 80
    loss_radius: float = 0.1
    fort_defense_multiplier: float = 0.5
    artillery_multiplier: float = 2.0


@dataclass(frozen=True, slots=True)
class ProductionRules:
    """Troop growth cadence and standing-order timing."""

    production_interval: int = 2
    factory_rate: int = 2
    base_rate: int = 1
    standing_order_interval: int = 8
    neutral_pause_interval: int = 0  # 0 disables the slower neutral cadence


def _default_building_costs() -> dict[Building, int]:
    return {
        Building.FACTORY: 200,
        Building.POWER_PLANT: 1000,
        Building.FORT: 500,
        Building.ARTILLERY: 2000,
    }


@dataclass(frozen=True, slots=True)
class BuildingRules:
    """Troop costs for each building type."""

    costs: dict[Building, int] = field(default_factory=_default_building_costs)

    def cost_of(self, building: Building) -> int | None:
        return self.costs.get(building)


@dataclass(frozen=True, slots=True)
class SetupRules:
    """Parameters for creating a new game."""

    min_players: int = 2
    max_players: int = 6
    nodes_per_player: int = 32
    start_troops: int = 30


@dataclass(frozen=True, slots=True)
class RulesConfig:
    """Top-level configuration container for all subsystems."""

    map: MapRules = MapRules()
    combat: CombatRules = CombatRules()
    production: ProductionRules = ProductionRules()
    buildings: BuildingRules = field(default_factory=BuildingRules)
    setup: SetupRules = SetupRules()


DEFAULT_RULES = RulesConfig()
