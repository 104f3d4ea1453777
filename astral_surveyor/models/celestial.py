"""Celestial object kinds, stable identities and rarity tables."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from ..errors import IdentityError


class ObjectKind(enum.Enum):
    """Discoverable object categories (values double as identity prefixes)."""

    STAR = "star"
    PLANET = "planet"
    MOON = "moon"
    NEBULA = "nebula"
    ASTEROID_GARDEN = "asteroids"
    WORMHOLE = "wormhole"
    BLACK_HOLE = "blackhole"
    COMET = "comet"
    PROTOSTAR = "protostar"
    ROGUE_PLANET = "rogue-planet"
    DARK_NEBULA = "dark-nebula"
    CRYSTAL_GARDEN = "crystal-garden"


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ObjectIdentity:
    """Stable key joining a generated object to its discovery record.

    Built only from generation inputs: floored coordinates (the parent
    star's for planets, moons and comets), orbit indices and, for
    wormholes, the alpha/beta designation.
    """

    kind: ObjectKind
    x: int
    y: int
    path: tuple[int, ...] = ()
    designation: str = ""

    @classmethod
    def at(cls, kind: ObjectKind, x: float, y: float, path: tuple[int, ...] = (), designation: str = "") -> ObjectIdentity:
        return cls(kind, math.floor(x), math.floor(y), path, designation)

    @property
    def key(self) -> str:
        base = f"{self.kind.value}_{self.x}_{self.y}"
        if self.kind == ObjectKind.PLANET:
            return f"{base}_planet_{self.path[0]}"
        if self.kind == ObjectKind.MOON:
            return f"{base}_planet_{self.path[0]}_moon_{self.path[1]}"
        if self.kind == ObjectKind.COMET:
            return f"{base}_{self.path[0]}"
        if self.kind == ObjectKind.WORMHOLE:
            return f"{base}_{self.designation}"
        return base

    @property
    def parent(self) -> ObjectIdentity | None:
        """Identity of the owning star or planet, if any."""
        if self.kind in (ObjectKind.PLANET, ObjectKind.COMET):
            return ObjectIdentity(ObjectKind.STAR, self.x, self.y)
        if self.kind == ObjectKind.MOON:
            return ObjectIdentity(ObjectKind.PLANET, self.x, self.y, self.path[:1])
        return None

    @classmethod
    def parse(cls, key: str) -> ObjectIdentity:
        parts = key.split("_")
        if len(parts) < 3:
            raise IdentityError(f"malformed identity key {key!r}")
        try:
            kind = ObjectKind(parts[0])
            x = int(parts[1])
            y = int(parts[2])
            rest = parts[3:]
            if kind == ObjectKind.PLANET and len(rest) == 2 and rest[0] == "planet":
                return cls(kind, x, y, (int(rest[1]),))
            if kind == ObjectKind.MOON and len(rest) == 4 and rest[0] == "planet" and rest[2] == "moon":
                return cls(kind, x, y, (int(rest[1]), int(rest[3])))
            if kind == ObjectKind.COMET and len(rest) == 1:
                return cls(kind, x, y, (int(rest[0]),))
            if kind == ObjectKind.WORMHOLE and len(rest) == 1 and rest[0]:
                return cls(kind, x, y, designation=rest[0])
            if not rest and kind not in (ObjectKind.PLANET, ObjectKind.MOON, ObjectKind.COMET, ObjectKind.WORMHOLE):
                return cls(kind, x, y)
        except ValueError as exc:
            raise IdentityError(f"malformed identity key {key!r}") from exc
        raise IdentityError(f"malformed identity key {key!r}")

    def __str__(self) -> str:
        return self.key


# ---------------------------------------------------------------------------
# Stars
# ---------------------------------------------------------------------------

class StarType(enum.Enum):
    """Stellar classes, listed in cumulative-draw order."""

    G_TYPE = "G_TYPE"
    K_TYPE = "K_TYPE"
    M_TYPE = "M_TYPE"
    RED_GIANT = "RED_GIANT"
    BLUE_GIANT = "BLUE_GIANT"
    WHITE_DWARF = "WHITE_DWARF"
    NEUTRON_STAR = "NEUTRON_STAR"


@dataclass(frozen=True)
class StarTypeData:
    name: str
    classification: str
    rarity: float
    size_multiplier: float
    colors: tuple[str, ...]
    corona_size: float
    discovery_value: int
    pulse_speed: float = 0.0  # 0 = not a variable star
    radiation_intensity: float = 0.0
    swirl_speed: float = 0.0
    shimmer: bool = False
    max_sunspots: int = 0


STAR_TYPES: dict[StarType, StarTypeData] = {
    StarType.G_TYPE: StarTypeData(
        "G-Type Star", "G", 0.30, 1.0, ("#ffdd88", "#ffaa44", "#ffcc66"), 1.2, 1,
        swirl_speed=0.3, max_sunspots=6,
    ),
    StarType.K_TYPE: StarTypeData(
        "K-Type Star", "K", 0.25, 0.9, ("#ffaa44", "#ff8844", "#ff9955"), 1.1, 1, swirl_speed=0.25,
    ),
    StarType.M_TYPE: StarTypeData(
        "M-Type Star", "M", 0.25, 0.7, ("#ff6644", "#ff4422", "#cc3311"), 1.05, 1, swirl_speed=0.2,
    ),
    StarType.RED_GIANT: StarTypeData(
        "Red Giant", "RG", 0.10, 1.6, ("#ff4422", "#ff6644", "#ff5533"), 1.5, 3,
        pulse_speed=0.5, swirl_speed=0.15,
    ),
    StarType.BLUE_GIANT: StarTypeData(
        "Blue Giant", "BG", 0.05, 1.8, ("#88ddff", "#66ccff", "#aaeeff"), 1.8, 4,
        radiation_intensity=0.3, swirl_speed=0.5,
    ),
    StarType.WHITE_DWARF: StarTypeData(
        "White Dwarf", "WD", 0.04, 0.4, ("#ffffff", "#eeeeff", "#ddddff"), 0.8, 3, shimmer=True,
    ),
    StarType.NEUTRON_STAR: StarTypeData(
        "Neutron Star", "NS", 0.01, 0.2, ("#ddddff", "#bbbbff", "#9999ff"), 0.5, 5,
        pulse_speed=1.2, radiation_intensity=0.8,
    ),
}

_GIANTS = (StarType.RED_GIANT, StarType.BLUE_GIANT)

# Companion weights keyed by the primary's class
COMPANION_WEIGHTS: dict[str, list[tuple[StarType, float]]] = {
    "giant": [
        (StarType.M_TYPE, 0.4), (StarType.K_TYPE, 0.3),
        (StarType.G_TYPE, 0.2), (StarType.WHITE_DWARF, 0.1),
    ],
    "sunlike": [(StarType.M_TYPE, 0.5), (StarType.K_TYPE, 0.3), (StarType.G_TYPE, 0.2)],
    "dwarf": [(StarType.M_TYPE, 0.7), (StarType.WHITE_DWARF, 0.3)],
    "remnant": [(StarType.M_TYPE, 0.4), (StarType.K_TYPE, 0.3), (StarType.WHITE_DWARF, 0.3)],
}


def companion_table(primary: StarType) -> list[tuple[StarType, float]]:
    if primary in _GIANTS:
        return COMPANION_WEIGHTS["giant"]
    if primary in (StarType.G_TYPE, StarType.K_TYPE):
        return COMPANION_WEIGHTS["sunlike"]
    if primary == StarType.M_TYPE:
        return COMPANION_WEIGHTS["dwarf"]
    return COMPANION_WEIGHTS["remnant"]


# ---------------------------------------------------------------------------
# Planets
# ---------------------------------------------------------------------------

class PlanetType(enum.Enum):
    ROCKY = "ROCKY"
    OCEAN = "OCEAN"
    GAS_GIANT = "GAS_GIANT"
    DESERT = "DESERT"
    FROZEN = "FROZEN"
    VOLCANIC = "VOLCANIC"
    EXOTIC = "EXOTIC"


@dataclass(frozen=True)
class PlanetTypeData:
    name: str
    rarity: float
    size_multiplier: float
    colors: tuple[str, ...]
    discovery_value: int
    ring_chance: float = 0.0
    ring_span: tuple[float, float] = (1.4, 2.0)  # inner/outer, multiples of radius
    has_atmosphere: bool = False
    has_craters: bool = False
    has_stripes: bool = False
    has_swirls: bool = False
    has_glow: bool = False


PLANET_TYPES: dict[PlanetType, PlanetTypeData] = {
    PlanetType.ROCKY: PlanetTypeData(
        "Rocky Planet", 0.35, 0.8, ("#8B4513", "#708090", "#A0522D"), 1, has_craters=True,
    ),
    PlanetType.OCEAN: PlanetTypeData(
        "Ocean World", 0.20, 1.0, ("#4169E1", "#1E90FF", "#0047AB"), 2,
        has_atmosphere=True, has_stripes=True,
    ),
    PlanetType.GAS_GIANT: PlanetTypeData(
        "Gas Giant", 0.15, 1.8, ("#DAA520", "#CD853F", "#F4A460"), 3,
        ring_chance=0.4, ring_span=(1.4, 2.2), has_atmosphere=True, has_stripes=True, has_swirls=True,
    ),
    PlanetType.DESERT: PlanetTypeData(
        "Desert World", 0.15, 0.9, ("#FFE4B5", "#FF6347", "#DEB887"), 1, has_craters=True,
    ),
    PlanetType.FROZEN: PlanetTypeData(
        "Frozen World", 0.08, 0.85, ("#87CEEB", "#ADD8E6", "#E0FFFF"), 2,
        ring_chance=0.3, ring_span=(1.3, 1.8), has_craters=True, has_glow=True,
    ),
    PlanetType.VOLCANIC: PlanetTypeData(
        "Volcanic World", 0.05, 0.9, ("#DC143C", "#FF4500", "#8B0000"), 2, has_glow=True,
    ),
    PlanetType.EXOTIC: PlanetTypeData(
        "Exotic World", 0.02, 1.1, ("#DA70D6", "#9370DB", "#8A2BE2"), 4,
        ring_chance=0.5, ring_span=(1.5, 2.4), has_atmosphere=True, has_glow=True,
    ),
}

# Zone tables by relative orbital distance; missing entries weigh 0.01
PLANET_ZONES: dict[str, dict[PlanetType, float]] = {
    "inner": {
        PlanetType.ROCKY: 0.5, PlanetType.VOLCANIC: 0.25, PlanetType.DESERT: 0.2,
        PlanetType.OCEAN: 0.03, PlanetType.FROZEN: 0.01, PlanetType.GAS_GIANT: 0.01,
        PlanetType.EXOTIC: 0.001,
    },
    "habitable": {
        PlanetType.ROCKY: 0.35, PlanetType.OCEAN: 0.25, PlanetType.DESERT: 0.2,
        PlanetType.VOLCANIC: 0.1, PlanetType.GAS_GIANT: 0.05, PlanetType.FROZEN: 0.03,
        PlanetType.EXOTIC: 0.02,
    },
    "outer": {
        PlanetType.GAS_GIANT: 0.3, PlanetType.ROCKY: 0.25, PlanetType.OCEAN: 0.15,
        PlanetType.FROZEN: 0.15, PlanetType.DESERT: 0.1, PlanetType.VOLCANIC: 0.03,
        PlanetType.EXOTIC: 0.02,
    },
    "far": {
        PlanetType.FROZEN: 0.4, PlanetType.GAS_GIANT: 0.25, PlanetType.ROCKY: 0.2,
        PlanetType.OCEAN: 0.1, PlanetType.DESERT: 0.02, PlanetType.VOLCANIC: 0.01,
        PlanetType.EXOTIC: 0.02,
    },
}

# Host-star adjustments to the zone tables
STAR_PLANET_MODIFIERS: dict[StarType, dict[PlanetType, float]] = {
    StarType.BLUE_GIANT: {
        PlanetType.VOLCANIC: 2.0, PlanetType.DESERT: 1.5, PlanetType.OCEAN: 0.3,
        PlanetType.FROZEN: 0.1, PlanetType.EXOTIC: 1.8,
    },
    StarType.RED_GIANT: {
        PlanetType.ROCKY: 0.8, PlanetType.VOLCANIC: 1.3, PlanetType.DESERT: 1.4,
        PlanetType.OCEAN: 0.6, PlanetType.EXOTIC: 1.5,
    },
    StarType.M_TYPE: {
        PlanetType.OCEAN: 1.4, PlanetType.FROZEN: 1.3, PlanetType.VOLCANIC: 0.7,
        PlanetType.DESERT: 0.8,
    },
    StarType.WHITE_DWARF: {
        PlanetType.ROCKY: 1.5, PlanetType.EXOTIC: 3.0, PlanetType.OCEAN: 0.2,
        PlanetType.GAS_GIANT: 0.1, PlanetType.VOLCANIC: 0.5,
    },
    StarType.NEUTRON_STAR: {
        PlanetType.EXOTIC: 5.0, PlanetType.ROCKY: 2.0, PlanetType.OCEAN: 0.05,
        PlanetType.GAS_GIANT: 0.02, PlanetType.FROZEN: 0.1, PlanetType.VOLCANIC: 0.3,
        PlanetType.DESERT: 0.3,
    },
    StarType.K_TYPE: {
        PlanetType.OCEAN: 1.2, PlanetType.FROZEN: 1.1, PlanetType.VOLCANIC: 0.9,
    },
    StarType.G_TYPE: {},
}


def planet_zone(relative_distance: float) -> str:
    if relative_distance < 0.2:
        return "inner"
    if relative_distance < 0.4:
        return "habitable"
    if relative_distance < 0.7:
        return "outer"
    return "far"


def planet_type_weights(star_type: StarType, relative_distance: float) -> list[tuple[PlanetType, float]]:
    """Zone table x host-star modifiers x global rarity, normalised."""
    zone = PLANET_ZONES[planet_zone(relative_distance)]
    modifiers = STAR_PLANET_MODIFIERS.get(star_type, {})
    weights: list[tuple[PlanetType, float]] = []
    for planet_type, data in PLANET_TYPES.items():
        weight = zone.get(planet_type, 0.01) * modifiers.get(planet_type, 1.0)
        if star_type == StarType.M_TYPE and planet_type == PlanetType.FROZEN and relative_distance > 0.3:
            weight *= 1.8
        weights.append((planet_type, weight * data.rarity))
    total = sum(w for _, w in weights)
    return [(planet_type, w / total) for planet_type, w in weights]


# ---------------------------------------------------------------------------
# Nebulae and asteroid gardens
# ---------------------------------------------------------------------------

class NebulaType(enum.Enum):
    EMISSION = "emission"
    REFLECTION = "reflection"
    PLANETARY = "planetary"
    DARK = "dark"


@dataclass(frozen=True)
class NebulaTypeData:
    name: str
    rarity: float
    colors: tuple[str, ...]
    size_range: tuple[float, float]
    density_range: tuple[float, float]
    particle_range: tuple[int, int]  # max exclusive
    discovery_value: int


NEBULA_TYPES: dict[NebulaType, NebulaTypeData] = {
    NebulaType.EMISSION: NebulaTypeData(
        "Emission Nebula", 0.4, ("#ff6b6b", "#ff8e53", "#ff6b9d"), (200, 400), (0.6, 0.9), (80, 151), 25,
    ),
    NebulaType.REFLECTION: NebulaTypeData(
        "Reflection Nebula", 0.3, ("#4ecdc4", "#45b7d1", "#96ceb4"), (150, 350), (0.5, 0.8), (60, 121), 35,
    ),
    NebulaType.PLANETARY: NebulaTypeData(
        "Planetary Nebula", 0.2, ("#a8e6cf", "#7fcdcd", "#81ecec"), (120, 250), (0.8, 1.0), (50, 101), 60,
    ),
    NebulaType.DARK: NebulaTypeData(
        "Dark Nebula", 0.1, ("#2c3e50", "#34495e", "#4a6741"), (250, 500), (0.3, 0.6), (40, 81), 80,
    ),
}


class GardenType(enum.Enum):
    METALLIC = "metallic"
    CRYSTALLINE = "crystalline"
    CARBONACEOUS = "carbonaceous"
    ICY = "icy"
    RARE_MINERALS = "rare_minerals"


@dataclass(frozen=True)
class GardenTypeData:
    name: str
    rarity: float
    colors: tuple[str, ...]
    size_range: tuple[float, float]
    density_range: tuple[float, float]
    rock_range: tuple[int, int]  # max exclusive
    glitter_chance: float
    discovery_value: int


GARDEN_TYPES: dict[GardenType, GardenTypeData] = {
    GardenType.METALLIC: GardenTypeData(
        "Metallic Asteroid Garden", 0.35, ("#8c8c8c", "#a0a0a0", "#7a7a7a"),
        (150, 300), (0.3, 0.7), (25, 61), 0.8, 20,
    ),
    GardenType.CRYSTALLINE: GardenTypeData(
        "Crystalline Asteroid Garden", 0.20, ("#e6f3ff", "#ccddff", "#b3c7ff"),
        (120, 250), (0.2, 0.5), (15, 41), 0.9, 45,
    ),
    GardenType.CARBONACEOUS: GardenTypeData(
        "Carbonaceous Asteroid Garden", 0.25, ("#2d2d2d", "#404040", "#1a1a1a"),
        (200, 400), (0.4, 0.8), (30, 81), 0.4, 25,
    ),
    GardenType.ICY: GardenTypeData(
        "Icy Asteroid Garden", 0.15, ("#f0f8ff", "#e0f0ff", "#d0e8ff"),
        (180, 350), (0.3, 0.6), (20, 51), 0.85, 35,
    ),
    GardenType.RARE_MINERALS: GardenTypeData(
        "Rare Mineral Garden", 0.05, ("#ff6b6b", "#66ff66", "#6666ff"),
        (100, 200), (0.6, 1.0), (10, 26), 0.95, 80,
    ),
}


# ---------------------------------------------------------------------------
# Black holes and comets
# ---------------------------------------------------------------------------

class BlackHoleType(enum.Enum):
    STELLAR_MASS = "STELLAR_MASS"
    SUPERMASSIVE = "SUPERMASSIVE"


@dataclass(frozen=True)
class BlackHoleTypeData:
    name: str
    rarity: float
    event_horizon_radius: float
    accretion_disk_radius: float
    singularity_radius: float
    influence_radius: float
    gravity_strength: float


BLACK_HOLE_TYPES: dict[BlackHoleType, BlackHoleTypeData] = {
    BlackHoleType.STELLAR_MASS: BlackHoleTypeData("Stellar Mass Black Hole", 0.95, 250, 600, 3, 900, 120),
    BlackHoleType.SUPERMASSIVE: BlackHoleTypeData("Supermassive Black Hole", 0.05, 400, 1000, 5, 1200, 200),
}


class CometType(enum.Enum):
    ICE = "ICE"
    DUST = "DUST"
    ROCKY = "ROCKY"
    ORGANIC = "ORGANIC"


@dataclass(frozen=True)
class CometTypeData:
    name: str
    rarity: float
    nucleus_color: str
    tail_colors: tuple[str, ...]
    tail_particles: int
    glitter_chance: float
    discovery_value: int


COMET_TYPES: dict[CometType, CometTypeData] = {
    CometType.ICE: CometTypeData("Ice Comet", 0.4, "#E0FFFF", ("#87CEEB", "#B0E0E6", "#E0FFFF"), 25, 0.7, 20),
    CometType.DUST: CometTypeData("Dust Comet", 0.3, "#F4A460", ("#DAA520", "#DEB887", "#F4A460"), 30, 0.4, 22),
    CometType.ROCKY: CometTypeData("Rocky Comet", 0.2, "#C0C0C0", ("#A9A9A9", "#C0C0C0", "#DCDCDC"), 20, 0.5, 25),
    CometType.ORGANIC: CometTypeData("Organic Comet", 0.1, "#ADFF2F", ("#9ACD32", "#ADFF2F", "#FFFF00"), 35, 0.8, 30),
}


# ---------------------------------------------------------------------------
# Region-specific objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VariantData:
    """Fixed-shape variant of a region-specific object."""

    name: str
    rarity: float
    radius: float
    color: str
    discovery_distance: float
    traits: dict[str, float | str] = field(default_factory=dict)


ROGUE_PLANET_VARIANTS: dict[str, VariantData] = {
    "ice": VariantData("Ice Rogue Planet", 0.4, 12, "#B0E0E6", 65),
    "rock": VariantData("Rock Rogue Planet", 0.4, 14, "#696969", 60),
    "volcanic": VariantData("Volcanic Rogue Planet", 0.2, 13, "#8B0000", 70),
}

DARK_NEBULA_VARIANTS: dict[str, VariantData] = {
    "dense-core": VariantData(
        "Dense-Core Dark Nebula", 0.3, 180, "#2F1B14", 80,
        {"occlusion": 1.0, "shape": "irregular", "dust_density": 0.9},
    ),
    "wispy": VariantData(
        "Wispy Dark Nebula", 0.5, 220, "#3D2B1F", 80,
        {"occlusion": 0.6, "shape": "irregular", "dust_density": 0.4},
    ),
    "globular": VariantData(
        "Globular Dark Nebula", 0.2, 160, "#4A3420", 80,
        {"occlusion": 0.8, "shape": "circular", "dust_density": 0.7},
    ),
}

CRYSTAL_GARDEN_VARIANTS: dict[str, VariantData] = {
    "pure": VariantData(
        "Pure Crystal Garden", 0.5, 140, "#e8e8ff", 40,
        {"mineral": "quartz", "refraction": 0.6},
    ),
    "mixed": VariantData(
        "Mixed Crystal Garden", 0.35, 180, "#d0d0ff", 40,
        {"mineral": "beryl", "refraction": 0.75},
    ),
    "rare-earth": VariantData(
        "Rare-Earth Crystal Garden", 0.15, 120, "#c0c0ff", 40,
        {"mineral": "monazite", "refraction": 0.95},
    ),
}

PROTOSTAR_VARIANTS: dict[str, VariantData] = {
    "class-0": VariantData(
        "Class 0 Protostar", 0.25, 40, "#ff7744", 60,
        {"classification": "Class 0", "core_temperature": 1500.0, "jet_intensity": 0.9},
    ),
    "class-1": VariantData(
        "Class I Protostar", 0.45, 50, "#ffaa55", 60,
        {"classification": "Class I", "core_temperature": 3000.0, "jet_intensity": 0.6},
    ),
    "class-2": VariantData(
        "Class II Protostar", 0.30, 60, "#ffdd88", 60,
        {"classification": "Class II", "core_temperature": 4500.0, "jet_intensity": 0.3},
    ),
}

REGION_VARIANTS: dict[ObjectKind, dict[str, VariantData]] = {
    ObjectKind.ROGUE_PLANET: ROGUE_PLANET_VARIANTS,
    ObjectKind.DARK_NEBULA: DARK_NEBULA_VARIANTS,
    ObjectKind.CRYSTAL_GARDEN: CRYSTAL_GARDEN_VARIANTS,
    ObjectKind.PROTOSTAR: PROTOSTAR_VARIANTS,
}


def rarity_table(table: dict) -> list[tuple[object, float]]:
    """(key, rarity) pairs in declaration order for ``weighted_pick``."""
    return [(key, data.rarity) for key, data in table.items()]
