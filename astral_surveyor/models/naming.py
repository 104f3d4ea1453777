"""Catalogue-style names for discovered objects.

Every name is a pure function of the object's identity and type, so the
same object gets the same name in every session.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from .bodies import (
    AsteroidGarden,
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
from .celestial import COMET_TYPES, PLANET_TYPES, STAR_TYPES, ObjectIdentity, PlanetType
from .rng import SeededRandom, derive_seed

PLANET_LETTERS = "bcdefghijklmnopqrstuvwxyz"

RARE_PLANET_DESIGNATIONS: dict[PlanetType, str] = {
    PlanetType.EXOTIC: "EX",
    PlanetType.VOLCANIC: "VL",
    PlanetType.FROZEN: "FR",
}

FAMOUS_NEBULAE = (
    "Eagle", "Orion", "Horsehead", "Crab", "Ring", "Cat's Eye", "Helix",
    "Rosette", "Veil", "Lagoon", "Trifid", "Butterfly", "Owl", "Tarantula",
    "Carina", "Pelican", "Heart", "Soul", "Bubble", "Pillars",
)

_GARDEN_PREFIXES = ("Vesta", "Ceres", "Pallas", "Hygiea", "Juno", "Astraea", "Hebe", "Iris")
_GARDEN_SUFFIXES = ("Belt", "Field", "Drift", "Cluster", "Garden", "Expanse")
_COMET_PREFIXES = ("Halley", "Hale", "Encke", "Tempel", "Swift", "Borrelly", "Wild", "Tuttle")
_ROGUE_PREFIXES = ("Wanderer", "Nomad", "Drifter", "Outcast", "Pilgrim", "Exile")
_CRYSTAL_SUFFIXES = ("Spires", "Shards", "Lattice", "Prism", "Facets")

_ROMAN = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"), (100, "C"), (90, "XC"),
    (50, "L"), (40, "XL"), (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


def roman_numeral(n: int) -> str:
    if n <= 0:
        raise ValueError(f"no Roman numeral for {n}")
    parts = []
    for value, symbol in _ROMAN:
        while n >= value:
            parts.append(symbol)
            n -= value
    return "".join(parts)


def coordinate_hash(x: float, y: float) -> int:
    """32-bit mix of floored world coordinates."""
    h = (math.floor(x) * 0x85EBCA6B) ^ (math.floor(y) * 0xC2B2AE35)
    h &= 0xFFFFFFFF
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & 0xFFFFFFFF
    h ^= h >> 13
    return h


def coordinate_designation(x: float, y: float) -> str:
    """``ASV J1234+0567-`` style designation from a world position."""
    fx, fy = math.floor(x), math.floor(y)
    return (
        f"ASV J{abs(fx) % 10000:04d}{'+' if fx >= 0 else '-'}"
        f"{abs(fy) % 10000:04d}{'+' if fy >= 0 else '-'}"
    )


def _rng_for(identity: ObjectIdentity) -> SeededRandom:
    return SeededRandom(derive_seed("name", identity.key))


def _catalogue_number(identity: ObjectIdentity) -> int:
    return derive_seed("catalogue", identity.key) % 10000


# ---------------------------------------------------------------------------
# Per-kind names
# ---------------------------------------------------------------------------

def star_name(star: Star) -> str:
    return f"ASV-{_catalogue_number(star.identity):04d} {STAR_TYPES[star.star_type].classification}"


def parent_star_fallback(planet_or_comet: Planet | Comet) -> str:
    """Catalogue stem for an orbiting body whose star is not at hand."""
    parent = planet_or_comet.identity.parent
    return f"ASV-{_catalogue_number(parent):04d}"


def planet_name(planet: Planet, host_name: str | None = None) -> str:
    host = host_name or parent_star_fallback(planet)
    index = planet.orbit_index
    letter = PLANET_LETTERS[index] if index < len(PLANET_LETTERS) else str(index + 1)
    designation = RARE_PLANET_DESIGNATIONS.get(planet.planet_type)
    if designation:
        return f"{host} {letter} ({designation})"
    return f"{host} {letter}"


def moon_name(moon: Moon, planet_name_: str) -> str:
    return f"{planet_name_} {roman_numeral(moon.orbit_index + 1)}"


def nebula_name(nebula: Nebula) -> str:
    rng = _rng_for(nebula.identity)
    if rng.chance(0.3):
        return f"{rng.choice(FAMOUS_NEBULAE)} Nebula"
    number = rng.next_int(1, 10000)
    return f"IC {number}" if number > 7000 else f"NGC {number}"


def black_hole_name(black_hole: BlackHole) -> str:
    return f"BH-{_catalogue_number(black_hole.identity):04d}"


def comet_name(comet: Comet) -> str:
    rng = _rng_for(comet.identity)
    return f"Comet {rng.choice(_COMET_PREFIXES)}-{rng.next_int(1, 400)} ({COMET_TYPES[comet.comet_type].name})"


def garden_name(garden: AsteroidGarden) -> str:
    rng = _rng_for(garden.identity)
    return f"{rng.choice(_GARDEN_PREFIXES)} {rng.choice(_GARDEN_SUFFIXES)}"


def procedural_name(obj: CelestialObject) -> str:
    """Names for the region-specific objects."""
    rng = SeededRandom(coordinate_hash(obj.x, obj.y) or 1)
    if isinstance(obj, RoguePlanet):
        return f"{rng.choice(_ROGUE_PREFIXES)} {coordinate_designation(obj.x, obj.y)[5:]}"
    if isinstance(obj, CrystalGarden):
        return f"{obj.mineral.title()} {rng.choice(_CRYSTAL_SUFFIXES)}"
    if isinstance(obj, Protostar):
        return f"{coordinate_designation(obj.x, obj.y)} ({obj.classification})"
    if isinstance(obj, DarkNebula):
        return f"Barnard {rng.next_int(1, 400)}"
    return coordinate_designation(obj.x, obj.y)


def name_for(obj: CelestialObject, resolve: Callable[[str], CelestialObject | None] | None = None) -> str:
    """Display name for any discoverable object.

    ``resolve`` maps a parent identity key to the loaded parent so that
    planets and moons carry their host's name.
    """
    if isinstance(obj, Star):
        return star_name(obj)
    if isinstance(obj, Planet):
        host = resolve(obj.parent_key) if resolve else None
        return planet_name(obj, star_name(host) if isinstance(host, Star) else None)
    if isinstance(obj, Moon):
        parent = resolve(obj.parent_key) if resolve else None
        if isinstance(parent, Planet):
            return moon_name(obj, name_for(parent, resolve))
        stem = f"ASV-{_catalogue_number(obj.identity.parent.parent):04d}"
        return moon_name(obj, f"{stem} {PLANET_LETTERS[obj.identity.path[0] % len(PLANET_LETTERS)]}")
    if isinstance(obj, Nebula):
        return nebula_name(obj)
    if isinstance(obj, Wormhole):
        return obj.pair_id
    if isinstance(obj, BlackHole):
        return black_hole_name(obj)
    if isinstance(obj, Comet):
        return comet_name(obj)
    if isinstance(obj, AsteroidGarden):
        return garden_name(obj)
    return procedural_name(obj)


def planet_type_label(planet: Planet) -> str:
    return PLANET_TYPES[planet.planet_type].name
