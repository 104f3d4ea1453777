"""Star system generation: stars, companions, planets, moons and comets.

Draw order is part of the save format. A star draws its variant, then
size, colour and effect flags from the system stream; the same stream
then decides the companion, the planet count and each planet's orbit
slot. Each planet, moon and comet draws its own variant, size, colour
and effects from a sub-stream salted with its index, so siblings do not
shift one another.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from ..constants import (
    BINARY_CHANCE,
    BINARY_DISTANCE,
    CHUNK_SIZE,
    COMET_ECCENTRICITY,
    COMET_MAX_PER_STAR,
    COMET_PERIOD,
    COMET_SEMI_MAJOR_AXIS,
    COMET_SPAWN_CHANCE,
    COMET_VISIBILITY_FACTOR,
    MOON_BASE_SPEED,
    MOON_DISCOVERY_PADDING,
    MOON_GAS_GIANT_CHANCE,
    MOON_GAS_GIANT_MAX,
    MOON_LARGE_PLANET_CHANCE,
    MOON_LARGE_PLANET_MAX,
    MOON_LARGE_PLANET_RADIUS,
    MOON_MIN_RADIUS,
    MOON_ORBIT_GAP,
    MOON_OTHER_CHANCE,
    MOON_OTHER_MAX,
    MOON_PARENT_COLOR_CHANCE,
    MOON_SIZE_RATIO,
    PLANET_BASE_SPEED,
    PLANET_COUNT_BANDS,
    PLANET_DISCOVERY_PADDING,
    PLANET_ORBIT_MARGIN,
    PLANET_ORBIT_MAX,
    PLANET_RADIUS,
    PLANET_REFERENCE_DISTANCE,
    PLANET_ZONE_SPAN,
    STAR_BRAKING_PADDING,
    STAR_DISCOVERY_PADDING,
    STAR_RADIUS,
    STAR_SYSTEM_MARGIN,
)
from .bodies import Comet, CometOrbit, Moon, Planet, Star
from .celestial import (
    COMET_TYPES,
    PLANET_TYPES,
    STAR_TYPES,
    ObjectIdentity,
    ObjectKind,
    PlanetType,
    StarType,
    companion_table,
    planet_type_weights,
    rarity_table,
)
from .regions import NEUTRAL_REGION, RegionInfo
from .rng import SeededRandom, weighted_pick
from .universe import GenerationContext, Stream

log = logging.getLogger(__name__)

_MOON_COLORS = ("#C0C0C0", "#A9A9A9", "#D3D3D3", "#BEBEBE", "#8B8682")
_COMET_CLEARANCE = 50.0
_COMET_DISCOVERY_DISTANCE = 80.0


@dataclass
class StarSystem:
    """Everything one star system contributes to its chunk."""

    stars: list[Star] = field(default_factory=list)
    planets: list[Planet] = field(default_factory=list)
    moons: list[Moon] = field(default_factory=list)
    comets: list[Comet] = field(default_factory=list)

    @property
    def primary(self) -> Star:
        return self.stars[0]


# ---------------------------------------------------------------------------
# Stars
# ---------------------------------------------------------------------------

def _sunspot_count(rng: SeededRandom, max_sunspots: int) -> int:
    roll = rng.next()
    if roll < 0.4:
        return 0
    if roll < 0.8:
        return rng.next_int(1, 3)
    if roll < 0.95:
        return rng.next_int(3, 5)
    return rng.next_int(1, max_sunspots + 1)


def generate_star(rng: SeededRandom, x: float, y: float, star_type: StarType | None = None) -> Star:
    """Variant, size, colour, effects; in that order."""
    if star_type is None:
        star_type = weighted_pick(rng, rarity_table(STAR_TYPES))
    data = STAR_TYPES[star_type]
    radius = rng.next_float(*STAR_RADIUS) * data.size_multiplier
    color = rng.choice(data.colors)
    sunspots = _sunspot_count(rng, data.max_sunspots) if data.max_sunspots else 0
    return Star(
        identity=ObjectIdentity.at(ObjectKind.STAR, x, y),
        x=x,
        y=y,
        star_type=star_type,
        radius=radius,
        color=color,
        discovery_distance=radius + STAR_DISCOVERY_PADDING,
        braking_distance=radius + STAR_BRAKING_PADDING,
        sunspots=sunspots,
    )


def _generate_companion(context: GenerationContext, cx: int, cy: int, primary: Star) -> Star:
    rng = context.rng(Stream.COMPANION, cx, cy)
    star_type = weighted_pick(rng, companion_table(primary.star_type))
    # Position is an orbital parameter, so it is drawn after the star itself
    companion = generate_star(rng, primary.x, primary.y, star_type)
    distance = rng.next_float(*BINARY_DISTANCE)
    distance = max(distance, primary.radius + companion.radius + PLANET_ORBIT_MARGIN)
    angle = rng.next_float(0, math.tau)
    companion.x = primary.x + math.cos(angle) * distance
    companion.y = primary.y + math.sin(angle) * distance
    companion.identity = ObjectIdentity.at(ObjectKind.STAR, companion.x, companion.y)
    companion.companion_of = primary.identity.key
    return companion


# ---------------------------------------------------------------------------
# Planets
# ---------------------------------------------------------------------------

def _planet_count(rng: SeededRandom) -> int:
    band = weighted_pick(rng, [(b, b[1]) for b in PLANET_COUNT_BANDS])
    _, _, low, high = band
    if low == high:
        return low
    return rng.next_int(low, high + 1)


def _orbit_slot(rng: SeededRandom, star: Star, index: int) -> float:
    """Base orbital distance for the index-th planet."""
    min_distance = star.radius + PLANET_ORBIT_MARGIN
    if index == 0:
        return min_distance + rng.next_float(10, 40)
    if index == 1:
        return min_distance + rng.next_float(60, 120)
    if index == 2:
        return min_distance + rng.next_float(150, 250)
    return min(min_distance + 250 + (index - 2) * rng.next_float(150, 300), PLANET_ORBIT_MAX)


def _generate_planet(
    context: GenerationContext,
    cx: int,
    cy: int,
    star: Star,
    index: int,
    distance: float,
    angle: float,
    speed_factor: float,
) -> Planet:
    rng = context.rng(Stream.PLANET, cx, cy, index)
    relative = (distance - (star.radius + PLANET_ORBIT_MARGIN)) / PLANET_ZONE_SPAN
    planet_type: PlanetType = weighted_pick(rng, planet_type_weights(star.star_type, relative))
    data = PLANET_TYPES[planet_type]

    radius = rng.next_float(*PLANET_RADIUS) * data.size_multiplier
    color = rng.choice(data.colors)
    has_rings = rng.chance(data.ring_chance)
    ring_inner = radius * data.ring_span[0] if has_rings else 0.0
    ring_outer = radius * data.ring_span[1] if has_rings else 0.0

    distance = max(distance, star.radius + radius + PLANET_ORBIT_MARGIN)
    speed = PLANET_BASE_SPEED * (PLANET_REFERENCE_DISTANCE / distance) ** 2 * speed_factor

    return Planet(
        identity=ObjectIdentity(ObjectKind.PLANET, star.identity.x, star.identity.y, (index,)),
        parent_key=star.identity.key,
        x=star.x + math.cos(angle) * distance,
        y=star.y + math.sin(angle) * distance,
        planet_type=planet_type,
        radius=radius,
        color=color,
        orbit_index=index,
        center_x=star.x,
        center_y=star.y,
        orbital_distance=distance,
        orbital_angle=angle,
        orbital_speed=speed,
        discovery_distance=radius + PLANET_DISCOVERY_PADDING,
        has_rings=has_rings,
        ring_inner=ring_inner,
        ring_outer=ring_outer,
        has_atmosphere=data.has_atmosphere,
    )


# ---------------------------------------------------------------------------
# Moons
# ---------------------------------------------------------------------------

def _moon_count(rng: SeededRandom, planet: Planet) -> int:
    if planet.planet_type == PlanetType.GAS_GIANT:
        chance, most = MOON_GAS_GIANT_CHANCE, MOON_GAS_GIANT_MAX
    elif planet.planet_type in (PlanetType.ROCKY, PlanetType.OCEAN) and planet.radius > MOON_LARGE_PLANET_RADIUS:
        chance, most = MOON_LARGE_PLANET_CHANCE, MOON_LARGE_PLANET_MAX
    else:
        chance, most = MOON_OTHER_CHANCE, MOON_OTHER_MAX
    if not rng.chance(chance):
        return 0
    return rng.next_int(1, most + 1)


def _generate_moons(context: GenerationContext, cx: int, cy: int, planet: Planet) -> list[Moon]:
    planet_rng = context.rng(Stream.PLANET, cx, cy, planet.orbit_index, 1)
    count = _moon_count(planet_rng, planet)
    moons: list[Moon] = []
    for index in range(count):
        gap = planet_rng.next_float(*MOON_ORBIT_GAP) + index * MOON_ORBIT_GAP[0]
        angle = planet_rng.next_float(0, math.tau)
        speed_factor = planet_rng.next_float(0.7, 1.3)

        rng = context.rng(Stream.MOON, cx, cy, planet.orbit_index, index)
        radius = max(MOON_MIN_RADIUS, planet.radius * rng.next_float(*MOON_SIZE_RATIO))
        if rng.chance(MOON_PARENT_COLOR_CHANCE):
            color = planet.color
        else:
            color = rng.choice(_MOON_COLORS)

        distance = max(planet.radius + gap, planet.radius + radius + MOON_ORBIT_GAP[0])
        if moons:
            distance = max(distance, moons[-1].orbital_distance + MOON_ORBIT_GAP[0])
        moons.append(
            Moon(
                identity=ObjectIdentity(
                    ObjectKind.MOON, planet.identity.x, planet.identity.y, (planet.orbit_index, index),
                ),
                parent_key=planet.identity.key,
                x=planet.x + math.cos(angle) * distance,
                y=planet.y + math.sin(angle) * distance,
                radius=radius,
                color=color,
                orbit_index=index,
                orbital_distance=distance,
                orbital_angle=angle,
                orbital_speed=MOON_BASE_SPEED * speed_factor,
                discovery_distance=radius + MOON_DISCOVERY_PADDING,
            )
        )
    planet.moon_count = len(moons)
    return moons


# ---------------------------------------------------------------------------
# Comets
# ---------------------------------------------------------------------------

def _generate_comet(context: GenerationContext, cx: int, cy: int, star: Star, index: int) -> Comet:
    rng = context.rng(Stream.COMET, cx, cy, index)
    comet_type = weighted_pick(rng, rarity_table(COMET_TYPES))
    nucleus = rng.next_float(3, 6)

    semi_major = rng.next_float(*COMET_SEMI_MAJOR_AXIS)
    eccentricity = rng.next_float(*COMET_ECCENTRICITY)
    # Periapsis must clear the star's surface
    semi_major = max(semi_major, star.radius + _COMET_CLEARANCE)
    eccentricity = min(eccentricity, 1 - (star.radius + _COMET_CLEARANCE) / semi_major)
    orbit = CometOrbit(
        semi_major_axis=semi_major,
        eccentricity=max(eccentricity, 0.0),
        period=rng.next_float(*COMET_PERIOD),
        periapsis_argument=rng.next_float(0, math.tau),
        mean_anomaly=rng.next_float(0, math.tau),
    )
    comet = Comet(
        identity=ObjectIdentity(ObjectKind.COMET, star.identity.x, star.identity.y, (index,)),
        parent_key=star.identity.key,
        x=star.x,
        y=star.y,
        comet_type=comet_type,
        star_x=star.x,
        star_y=star.y,
        orbit=orbit,
        nucleus_radius=nucleus,
        visibility_distance=semi_major * COMET_VISIBILITY_FACTOR,
        discovery_distance=_COMET_DISCOVERY_DISTANCE,
    )
    comet.x, comet.y = comet.position_at(0.0)
    return comet


# ---------------------------------------------------------------------------
# Systems
# ---------------------------------------------------------------------------

def generate_star_system(
    context: GenerationContext,
    cx: int,
    cy: int,
    region: RegionInfo = NEUTRAL_REGION,
) -> StarSystem:
    """Build the star system owned by chunk (cx, cy)."""
    rng = context.rng(Stream.SYSTEM, cx, cy)
    x = cx * CHUNK_SIZE + rng.next_float(STAR_SYSTEM_MARGIN, CHUNK_SIZE - STAR_SYSTEM_MARGIN)
    y = cy * CHUNK_SIZE + rng.next_float(STAR_SYSTEM_MARGIN, CHUNK_SIZE - STAR_SYSTEM_MARGIN)
    primary = generate_star(rng, x, y)
    system = StarSystem(stars=[primary])

    if rng.chance(BINARY_CHANCE):
        system.stars.append(_generate_companion(context, cx, cy, primary))

    count = _planet_count(rng)
    for index in range(count):
        distance = _orbit_slot(rng, primary, index)
        angle = rng.next_float(0, math.tau)
        speed_factor = rng.next_float(0.7, 1.3)
        planet = _generate_planet(context, cx, cy, primary, index, distance, angle, speed_factor)
        system.planets.append(planet)
        system.moons.extend(_generate_moons(context, cx, cy, planet))
    primary.planet_count = count

    if rng.chance(COMET_SPAWN_CHANCE * region.modifier("comets")):
        for index in range(rng.next_int(1, COMET_MAX_PER_STAR + 1)):
            system.comets.append(_generate_comet(context, cx, cy, primary, index))

    log.debug(
        "System %s at chunk (%d, %d): %d star(s), %d planets, %d moons, %d comets",
        primary.star_type.value, cx, cy, len(system.stars), len(system.planets),
        len(system.moons), len(system.comets),
    )
    return system
