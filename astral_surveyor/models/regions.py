"""Cosmic regions: macro-scale areas that bias what spawns where."""

from __future__ import annotations

import enum
import functools
import math
from dataclasses import dataclass, field

from ..constants import (
    REGION_INFLUENCE_FALLOFF,
    REGION_MACRO_AREA,
    REGION_MIN_DISTANCE,
    REGION_SCALE,
    REGIONS_PER_MACRO_AREA,
)
from .celestial import ObjectKind
from .rng import SeededRandom, weighted_pick
from .universe import GenerationContext, Stream


class RegionType(enum.Enum):
    VOID = "void"
    STAR_FORGE = "star_forge"
    GALACTIC_CORE = "galactic_core"
    ASTEROID_GRAVEYARD = "asteroid_graveyard"
    ANCIENT_EXPANSE = "ancient_expanse"
    STELLAR_NURSERY = "stellar_nursery"


@dataclass(frozen=True)
class RegionDefinition:
    name: str
    description: str
    spawn_modifiers: dict[str, float]
    star_density: float
    special_objects: dict[ObjectKind, float] = field(default_factory=dict)


def _mods(star_systems: float, nebulae: float, asteroid_gardens: float,
          wormholes: float, black_holes: float, comets: float) -> dict[str, float]:
    return {
        "star_systems": star_systems,
        "nebulae": nebulae,
        "asteroid_gardens": asteroid_gardens,
        "wormholes": wormholes,
        "black_holes": black_holes,
        "comets": comets,
    }


REGIONS: dict[RegionType, RegionDefinition] = {
    RegionType.VOID: RegionDefinition(
        "The Void",
        "Vast empty space with sparse star systems but more exotic phenomena.",
        _mods(0.3, 0.4, 0.1, 3.0, 2.0, 0.5),
        star_density=0.4,
        special_objects={ObjectKind.ROGUE_PLANET: 0.05, ObjectKind.DARK_NEBULA: 0.03},
    ),
    RegionType.STAR_FORGE: RegionDefinition(
        "Star-Forge Cluster",
        "Dense stellar formation region with abundant nebulae and young hot stars.",
        _mods(1.8, 4.0, 0.7, 0.5, 0.1, 1.5),
        star_density=2.0,
        special_objects={ObjectKind.PROTOSTAR: 0.04},
    ),
    RegionType.GALACTIC_CORE: RegionDefinition(
        "Galactic Core",
        "Dense region of older stars and exotic massive objects.",
        _mods(2.2, 1.5, 0.8, 1.5, 8.0, 0.8),
        star_density=3.0,
        special_objects={ObjectKind.DARK_NEBULA: 0.02},
    ),
    RegionType.ASTEROID_GRAVEYARD: RegionDefinition(
        "Asteroid Graveyard",
        "Sparse stellar region dominated by vast asteroid fields and debris.",
        _mods(0.4, 0.3, 6.0, 0.7, 0.5, 0.2),
        star_density=0.6,
        special_objects={ObjectKind.CRYSTAL_GARDEN: 0.05, ObjectKind.ROGUE_PLANET: 0.01},
    ),
    RegionType.ANCIENT_EXPANSE: RegionDefinition(
        "Ancient Expanse",
        "Old stellar region with a balanced mix of objects and old mysteries.",
        _mods(1.0, 0.8, 1.2, 1.8, 1.5, 0.6),
        star_density=1.1,
        special_objects={ObjectKind.ROGUE_PLANET: 0.02, ObjectKind.CRYSTAL_GARDEN: 0.01},
    ),
    RegionType.STELLAR_NURSERY: RegionDefinition(
        "Stellar Nursery",
        "Active star formation with brilliant nebulae and proto-stellar objects.",
        _mods(1.4, 5.0, 1.8, 0.3, 0.2, 2.0),
        star_density=1.8,
        special_objects={ObjectKind.PROTOSTAR: 0.06, ObjectKind.DARK_NEBULA: 0.03},
    ),
}


@dataclass(frozen=True)
class RegionCenter:
    x: float
    y: float
    region_type: RegionType


@dataclass(frozen=True)
class RegionInfo:
    region_type: RegionType
    distance: float
    influence: float  # 0..1

    @property
    def definition(self) -> RegionDefinition:
        return REGIONS[self.region_type]

    def modifier(self, category: str) -> float:
        """Spawn multiplier blended toward neutral by influence."""
        base = self.definition.spawn_modifiers.get(category, 1.0)
        return 1.0 + (base - 1.0) * self.influence

    def special_chance(self, kind: ObjectKind) -> float:
        return self.definition.special_objects.get(kind, 0.0) * self.influence

    @property
    def star_density(self) -> float:
        return 1.0 + (self.definition.star_density - 1.0) * self.influence


NEUTRAL_REGION = RegionInfo(RegionType.ANCIENT_EXPANSE, math.inf, 1.0)


def _pick_region_type(rng: SeededRandom, existing: list[RegionCenter]) -> RegionType:
    """Favour types not yet present in the macro area."""
    counts: dict[RegionType, int] = {}
    for center in existing:
        counts[center.region_type] = counts.get(center.region_type, 0) + 1
    weights = [(rt, max(0.1, 1.0 - counts.get(rt, 0) * 0.3)) for rt in RegionType]
    return weighted_pick(rng, weights)


@functools.lru_cache(maxsize=512)
def region_centers(seed: int, macro_x: int, macro_y: int) -> tuple[RegionCenter, ...]:
    """Deterministic region centres for one macro area."""
    rng = GenerationContext(seed).rng(Stream.REGION, macro_x, macro_y)
    left = macro_x * REGION_MACRO_AREA
    top = macro_y * REGION_MACRO_AREA
    centers: list[RegionCenter] = []
    for _ in range(REGIONS_PER_MACRO_AREA):
        x = left + rng.next_float(0, REGION_MACRO_AREA)
        y = top + rng.next_float(0, REGION_MACRO_AREA)
        if any(math.hypot(x - c.x, y - c.y) < REGION_MIN_DISTANCE for c in centers):
            continue
        centers.append(RegionCenter(x, y, _pick_region_type(rng, centers)))
    return tuple(centers)


def region_at(context: GenerationContext, x: float, y: float) -> RegionInfo:
    """The region owning a world point: nearest centre within reach."""
    reach = REGION_SCALE * 2
    best: RegionCenter | None = None
    best_dist = math.inf
    for mx in range(math.floor((x - reach) / REGION_MACRO_AREA), math.floor((x + reach) / REGION_MACRO_AREA) + 1):
        for my in range(math.floor((y - reach) / REGION_MACRO_AREA), math.floor((y + reach) / REGION_MACRO_AREA) + 1):
            for center in region_centers(context.seed, mx, my):
                dist = math.hypot(center.x - x, center.y - y)
                if dist < best_dist:
                    best = center
                    best_dist = dist
    if best is None:
        return NEUTRAL_REGION
    influence = max(0.0, min(1.0, 1.0 - best_dist / REGION_SCALE))
    return RegionInfo(best.region_type, best_dist, influence ** REGION_INFLUENCE_FALLOFF)
