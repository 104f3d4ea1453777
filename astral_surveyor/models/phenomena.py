"""Free-standing phenomena: nebulae, asteroid gardens, black holes and
the region-specific objects (protostars, rogue planets, dark nebulae,
crystal gardens).

``build_*`` functions turn a stream and a position into a record and
are shared with the debug spawner; ``generate_*`` functions own the
per-chunk placement.
"""

from __future__ import annotations

import logging
import math

from ..constants import (
    CHUNK_SIZE,
    GARDEN_MARGIN,
    GARDEN_STAR_CLEARANCE,
    NEBULA_MARGIN,
    REGION_OBJECT_MARGIN,
)
from .bodies import (
    AsteroidGarden,
    BlackHole,
    CrystalGarden,
    DarkNebula,
    Nebula,
    Protostar,
    RoguePlanet,
)
from .celestial import (
    BLACK_HOLE_TYPES,
    CRYSTAL_GARDEN_VARIANTS,
    DARK_NEBULA_VARIANTS,
    GARDEN_TYPES,
    NEBULA_TYPES,
    PROTOSTAR_VARIANTS,
    ROGUE_PLANET_VARIANTS,
    BlackHoleType,
    GardenType,
    NebulaType,
    ObjectIdentity,
    ObjectKind,
    rarity_table,
)
from .rng import SeededRandom, weighted_pick
from .universe import GenerationContext, Stream

log = logging.getLogger(__name__)

REGION_OBJECT_STREAMS: dict[ObjectKind, Stream] = {
    ObjectKind.PROTOSTAR: Stream.PROTOSTAR,
    ObjectKind.ROGUE_PLANET: Stream.ROGUE_PLANET,
    ObjectKind.DARK_NEBULA: Stream.DARK_NEBULA,
    ObjectKind.CRYSTAL_GARDEN: Stream.CRYSTAL_GARDEN,
}


def _position(rng: SeededRandom, cx: int, cy: int, margin: float) -> tuple[float, float]:
    return (
        cx * CHUNK_SIZE + rng.next_float(margin, CHUNK_SIZE - margin),
        cy * CHUNK_SIZE + rng.next_float(margin, CHUNK_SIZE - margin),
    )


def _pick_variant(rng: SeededRandom, table: dict, variant: str | None) -> str:
    if variant is None:
        return weighted_pick(rng, rarity_table(table))
    if variant not in table:
        raise ValueError(f"unknown variant {variant!r}; expected one of {sorted(table)}")
    return variant


# ---------------------------------------------------------------------------
# Nebulae
# ---------------------------------------------------------------------------

def build_nebula(rng: SeededRandom, x: float, y: float, nebula_type: NebulaType | None = None) -> Nebula:
    if nebula_type is None:
        nebula_type = weighted_pick(rng, rarity_table(NEBULA_TYPES))
    data = NEBULA_TYPES[nebula_type]
    radius = rng.next_float(*data.size_range)
    density = rng.next_float(*data.density_range)
    particles = rng.next_int(*data.particle_range)
    return Nebula(
        identity=ObjectIdentity.at(ObjectKind.NEBULA, x, y),
        x=x,
        y=y,
        nebula_type=nebula_type,
        radius=radius,
        density=density,
        particle_count=particles,
        colors=data.colors,
        discovery_distance=max(radius * 1.5, 75.0),
    )


def generate_nebula(context: GenerationContext, cx: int, cy: int, index: int) -> Nebula:
    rng = context.rng(Stream.NEBULA, cx, cy, index)
    x, y = _position(rng, cx, cy, NEBULA_MARGIN)
    return build_nebula(rng, x, y)


# ---------------------------------------------------------------------------
# Asteroid gardens
# ---------------------------------------------------------------------------

def build_garden(rng: SeededRandom, x: float, y: float, garden_type: GardenType | None = None) -> AsteroidGarden:
    if garden_type is None:
        garden_type = weighted_pick(rng, rarity_table(GARDEN_TYPES))
    data = GARDEN_TYPES[garden_type]
    radius = rng.next_float(*data.size_range)
    density = rng.next_float(*data.density_range)
    rocks = rng.next_int(*data.rock_range)
    return AsteroidGarden(
        identity=ObjectIdentity.at(ObjectKind.ASTEROID_GARDEN, x, y),
        x=x,
        y=y,
        garden_type=garden_type,
        radius=radius,
        density=density,
        rock_count=rocks,
        glitter_chance=data.glitter_chance,
        colors=data.colors,
        discovery_distance=max(radius * 1.2, 80.0),
    )


def generate_garden(
    context: GenerationContext,
    cx: int,
    cy: int,
    index: int,
    avoid: tuple[float, float] | None = None,
) -> AsteroidGarden:
    """Place a garden, retrying once if it lands too close to ``avoid``."""
    rng = context.rng(Stream.GARDEN, cx, cy, index)
    x, y = _position(rng, cx, cy, GARDEN_MARGIN)
    if avoid is not None and math.hypot(x - avoid[0], y - avoid[1]) < GARDEN_STAR_CLEARANCE:
        x, y = _position(rng, cx, cy, GARDEN_MARGIN)
    return build_garden(rng, x, y)


# ---------------------------------------------------------------------------
# Black holes
# ---------------------------------------------------------------------------

def build_black_hole(
    rng: SeededRandom, x: float, y: float, black_hole_type: BlackHoleType | None = None,
) -> BlackHole:
    if black_hole_type is None:
        black_hole_type = weighted_pick(rng, rarity_table(BLACK_HOLE_TYPES))
    data = BLACK_HOLE_TYPES[black_hole_type]
    scale = rng.next_float(0.9, 1.1)
    accretion = data.accretion_disk_radius * scale
    return BlackHole(
        identity=ObjectIdentity.at(ObjectKind.BLACK_HOLE, x, y),
        x=x,
        y=y,
        black_hole_type=black_hole_type,
        event_horizon_radius=data.event_horizon_radius * scale,
        accretion_disk_radius=accretion,
        singularity_radius=data.singularity_radius,
        influence_radius=data.influence_radius * scale,
        gravity_strength=data.gravity_strength,
        discovery_distance=accretion * 1.5,
    )


def generate_black_hole(context: GenerationContext, cx: int, cy: int) -> BlackHole:
    rng = context.rng(Stream.BLACK_HOLE, cx, cy)
    center = CHUNK_SIZE / 2
    black_hole = build_black_hole(rng, cx * CHUNK_SIZE + center, cy * CHUNK_SIZE + center)
    log.info("Black hole (%s) generated in chunk (%d, %d)", black_hole.black_hole_type.value, cx, cy)
    return black_hole


# ---------------------------------------------------------------------------
# Region-specific objects
# ---------------------------------------------------------------------------

def build_protostar(rng: SeededRandom, x: float, y: float, variant: str | None = None) -> Protostar:
    variant = _pick_variant(rng, PROTOSTAR_VARIANTS, variant)
    data = PROTOSTAR_VARIANTS[variant]
    radius = data.radius * rng.next_float(0.8, 1.2)
    return Protostar(
        identity=ObjectIdentity.at(ObjectKind.PROTOSTAR, x, y),
        x=x,
        y=y,
        variant=variant,
        classification=str(data.traits["classification"]),
        radius=radius,
        color=data.color,
        core_temperature=float(data.traits["core_temperature"]) * rng.next_float(0.9, 1.1),
        jet_intensity=float(data.traits["jet_intensity"]),
        accretion_disk_size=radius * rng.next_float(2.0, 3.0),
        instability=rng.next(),
        discovery_distance=radius + data.discovery_distance,
    )


def build_rogue_planet(rng: SeededRandom, x: float, y: float, variant: str | None = None) -> RoguePlanet:
    variant = _pick_variant(rng, ROGUE_PLANET_VARIANTS, variant)
    data = ROGUE_PLANET_VARIANTS[variant]
    radius = data.radius * rng.next_float(0.9, 1.1)
    return RoguePlanet(
        identity=ObjectIdentity.at(ObjectKind.ROGUE_PLANET, x, y),
        x=x,
        y=y,
        variant=variant,
        radius=radius,
        color=data.color,
        discovery_distance=data.discovery_distance,
    )


def build_dark_nebula(rng: SeededRandom, x: float, y: float, variant: str | None = None) -> DarkNebula:
    variant = _pick_variant(rng, DARK_NEBULA_VARIANTS, variant)
    data = DARK_NEBULA_VARIANTS[variant]
    radius = data.radius * rng.next_float(0.8, 1.2)
    shape = str(data.traits["shape"])
    vertices: list[tuple[float, float]] = []
    if shape == "irregular":
        count = rng.next_int(8, 13)
        for i in range(count):
            angle = math.tau * i / count + rng.next_float(-0.2, 0.2)
            vertices.append((angle, radius * rng.next_float(0.7, 1.1)))
    return DarkNebula(
        identity=ObjectIdentity.at(ObjectKind.DARK_NEBULA, x, y),
        x=x,
        y=y,
        variant=variant,
        radius=radius,
        color=data.color,
        occlusion=float(data.traits["occlusion"]),
        shape=shape,
        dust_density=float(data.traits["dust_density"]),
        discovery_distance=radius + data.discovery_distance,
        shape_vertices=vertices,
    )


def build_crystal_garden(rng: SeededRandom, x: float, y: float, variant: str | None = None) -> CrystalGarden:
    variant = _pick_variant(rng, CRYSTAL_GARDEN_VARIANTS, variant)
    data = CRYSTAL_GARDEN_VARIANTS[variant]
    radius = data.radius * rng.next_float(0.8, 1.2)
    return CrystalGarden(
        identity=ObjectIdentity.at(ObjectKind.CRYSTAL_GARDEN, x, y),
        x=x,
        y=y,
        variant=variant,
        radius=radius,
        color=data.color,
        crystal_count=rng.next_int(8, 21),
        mineral=str(data.traits["mineral"]),
        refraction=float(data.traits["refraction"]),
        discovery_distance=radius + data.discovery_distance,
    )


REGION_OBJECT_BUILDERS = {
    ObjectKind.PROTOSTAR: build_protostar,
    ObjectKind.ROGUE_PLANET: build_rogue_planet,
    ObjectKind.DARK_NEBULA: build_dark_nebula,
    ObjectKind.CRYSTAL_GARDEN: build_crystal_garden,
}


def generate_region_object(context: GenerationContext, kind: ObjectKind, cx: int, cy: int):
    """One region-specific object of ``kind`` inside chunk (cx, cy)."""
    rng = context.rng(REGION_OBJECT_STREAMS[kind], cx, cy)
    x, y = _position(rng, cx, cy, REGION_OBJECT_MARGIN)
    return REGION_OBJECT_BUILDERS[kind](rng, x, y)
