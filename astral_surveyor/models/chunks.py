"""Chunk records and the pure chunk generator."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass, field, fields

from ..constants import (
    BACKGROUND_STAR_COLORS,
    BACKGROUND_STARS_MAX,
    BACKGROUND_STARS_MIN,
    BLACK_HOLE_SPAWN_CHANCE,
    CHUNK_SIZE,
    COMET_MAX_TAIL,
    GARDEN_MULTIPLE_CHANCE,
    GARDEN_SPAWN_CHANCE,
    NEBULA_MULTIPLE_CHANCE,
    NEBULA_SPAWN_CHANCE,
    STAR_SYSTEM_SPAWN_CHANCE,
)
from ..errors import GenerationError, UniverseError
from .bodies import (
    AsteroidGarden,
    BackgroundStar,
    BlackHole,
    CelestialObject,
    Comet,
    CrystalGarden,
    DarkNebula,
    Moon,
    Nebula,
    Planet,
    Protostar,
    RoguePlanet,
    Star,
    Wormhole,
)
from .celestial import ObjectKind
from .phenomena import generate_black_hole, generate_garden, generate_nebula, generate_region_object
from .regions import RegionInfo, region_at
from .stars import generate_star_system
from .universe import GenerationContext, Stream
from .wormholes import wormholes_for_chunk

log = logging.getLogger(__name__)

# Category attribute on Chunk for each discoverable kind
CATEGORY_BY_KIND: dict[ObjectKind, str] = {
    ObjectKind.STAR: "celestial_stars",
    ObjectKind.PLANET: "planets",
    ObjectKind.MOON: "moons",
    ObjectKind.NEBULA: "nebulae",
    ObjectKind.ASTEROID_GARDEN: "asteroid_gardens",
    ObjectKind.WORMHOLE: "wormholes",
    ObjectKind.BLACK_HOLE: "black_holes",
    ObjectKind.COMET: "comets",
    ObjectKind.PROTOSTAR: "protostars",
    ObjectKind.ROGUE_PLANET: "rogue_planets",
    ObjectKind.DARK_NEBULA: "dark_nebulae",
    ObjectKind.CRYSTAL_GARDEN: "crystal_gardens",
}

# Rolled after the standard categories, in this order
SPECIAL_KINDS = (
    ObjectKind.PROTOSTAR,
    ObjectKind.ROGUE_PLANET,
    ObjectKind.DARK_NEBULA,
    ObjectKind.CRYSTAL_GARDEN,
)


def chunk_coords(x: float, y: float) -> tuple[int, int]:
    return math.floor(x / CHUNK_SIZE), math.floor(y / CHUNK_SIZE)


def chunk_key(cx: int, cy: int) -> str:
    return f"{cx},{cy}"


@dataclass
class Chunk:
    x: int
    y: int
    region: RegionInfo | None = None
    stars: list[BackgroundStar] = field(default_factory=list)
    celestial_stars: list[Star] = field(default_factory=list)
    planets: list[Planet] = field(default_factory=list)
    moons: list[Moon] = field(default_factory=list)
    nebulae: list[Nebula] = field(default_factory=list)
    asteroid_gardens: list[AsteroidGarden] = field(default_factory=list)
    wormholes: list[Wormhole] = field(default_factory=list)
    black_holes: list[BlackHole] = field(default_factory=list)
    comets: list[Comet] = field(default_factory=list)
    protostars: list[Protostar] = field(default_factory=list)
    rogue_planets: list[RoguePlanet] = field(default_factory=list)
    dark_nebulae: list[DarkNebula] = field(default_factory=list)
    crystal_gardens: list[CrystalGarden] = field(default_factory=list)

    @property
    def key(self) -> str:
        return chunk_key(self.x, self.y)

    def objects(self) -> Iterator[CelestialObject]:
        """Every discoverable object, category by category."""
        for category in CATEGORY_BY_KIND.values():
            yield from getattr(self, category)

    def find(self, key: str) -> CelestialObject | None:
        for obj in self.objects():
            if obj.identity.key == key:
                return obj
        return None

    def add(self, obj: CelestialObject) -> None:
        getattr(self, CATEGORY_BY_KIND[obj.identity.kind]).append(obj)

    def counts(self) -> dict[str, int]:
        return {f.name: len(getattr(self, f.name)) for f in fields(self) if isinstance(getattr(self, f.name), list)}

    def advance(self, dt: float) -> None:
        """Move orbiting bodies; moons follow their planet's new position."""
        planets = {planet.identity.key: planet for planet in self.planets}
        for planet in self.planets:
            planet.advance(dt)
        for moon in self.moons:
            parent = planets.get(moon.parent_key)
            if parent is not None:
                moon.advance(dt, parent.x, parent.y)
        for comet in self.comets:
            comet.advance(dt, COMET_MAX_TAIL)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def _background_stars(context: GenerationContext, cx: int, cy: int, density: float) -> list[BackgroundStar]:
    rng = context.rng(Stream.BACKGROUND, cx, cy)
    count = round(rng.next_int(BACKGROUND_STARS_MIN, BACKGROUND_STARS_MAX) * density)
    stars = []
    for _ in range(count):
        stars.append(BackgroundStar(
            x=cx * CHUNK_SIZE + rng.next_float(0, CHUNK_SIZE),
            y=cy * CHUNK_SIZE + rng.next_float(0, CHUNK_SIZE),
            brightness=rng.next_float(0.2, 1.0),
            size=1 if rng.next() < 0.7 else 2,
            color=rng.choice(BACKGROUND_STAR_COLORS),
        ))
    return stars


def _build_chunk(context: GenerationContext, cx: int, cy: int) -> Chunk:
    region = region_at(context, (cx + 0.5) * CHUNK_SIZE, (cy + 0.5) * CHUNK_SIZE)
    chunk = Chunk(cx, cy, region=region)
    chunk.stars = _background_stars(context, cx, cy, region.star_density)

    # Presence rolls, always drawn in this order
    rng = context.rng(Stream.CHUNK, cx, cy)
    has_black_hole = rng.chance(BLACK_HOLE_SPAWN_CHANCE * region.modifier("black_holes"))
    has_system = rng.chance(STAR_SYSTEM_SPAWN_CHANCE * region.modifier("star_systems"))
    nebula_mod = region.modifier("nebulae")
    nebula_rolls = (rng.chance(NEBULA_SPAWN_CHANCE * nebula_mod), rng.chance(NEBULA_MULTIPLE_CHANCE * nebula_mod))
    garden_mod = region.modifier("asteroid_gardens")
    garden_rolls = (rng.chance(GARDEN_SPAWN_CHANCE * garden_mod), rng.chance(GARDEN_MULTIPLE_CHANCE * garden_mod))
    special_rolls = [rng.chance(region.special_chance(kind)) for kind in SPECIAL_KINDS]

    star_position: tuple[float, float] | None = None
    if has_black_hole:
        chunk.black_holes.append(generate_black_hole(context, cx, cy))
    elif has_system:
        system = generate_star_system(context, cx, cy, region)
        chunk.celestial_stars.extend(system.stars)
        chunk.planets.extend(system.planets)
        chunk.moons.extend(system.moons)
        chunk.comets.extend(system.comets)
        star_position = (system.primary.x, system.primary.y)

    if nebula_rolls[0]:
        chunk.nebulae.append(generate_nebula(context, cx, cy, 0))
        if nebula_rolls[1]:
            chunk.nebulae.append(generate_nebula(context, cx, cy, 1))

    if garden_rolls[0]:
        chunk.asteroid_gardens.append(generate_garden(context, cx, cy, 0, star_position))
        if garden_rolls[1]:
            chunk.asteroid_gardens.append(generate_garden(context, cx, cy, 1, star_position))

    chunk.wormholes.extend(wormholes_for_chunk(context, cx, cy))

    for kind, rolled in zip(SPECIAL_KINDS, special_rolls):
        if rolled:
            chunk.add(generate_region_object(context, kind, cx, cy))

    return chunk


def generate_chunk(context: GenerationContext, cx: int, cy: int) -> Chunk:
    """Build chunk (cx, cy); a pure function of the context and coordinate.

    Unexpected failures surface as ``GenerationError`` rather than an
    empty chunk.
    """
    try:
        chunk = _build_chunk(context, cx, cy)
    except UniverseError:
        raise
    except Exception as exc:
        raise GenerationError(cx, cy, exc) from exc
    log.debug("Generated chunk %s in %s: %s", chunk.key, chunk.region.region_type.value, {
        name: count for name, count in chunk.counts().items() if count and name != "stars"
    })
    return chunk
