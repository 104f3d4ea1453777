"""Celestial object records and their simple kinematics.

Every discoverable record carries its ``identity`` plus the shared
``x``, ``y``, ``discovery_distance``, ``discovered`` and
``display_name`` fields. Orbiting bodies refer to their parent through
``parent_key`` (an identity key) and never hold the parent itself.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

from .celestial import (
    BlackHoleType,
    CometType,
    GardenType,
    NebulaType,
    ObjectIdentity,
    ObjectKind,
    PlanetType,
    StarType,
)


@dataclass
class BackgroundStar:
    """Decorative point of light; never discoverable."""

    x: float
    y: float
    brightness: float
    size: int
    color: str


@dataclass
class Star:
    identity: ObjectIdentity
    x: float
    y: float
    star_type: StarType
    radius: float
    color: str
    discovery_distance: float
    braking_distance: float
    sunspots: int = 0
    companion_of: str | None = None  # primary's identity key for binaries
    planet_count: int = 0
    discovered: bool = False
    display_name: str = ""


@dataclass
class Planet:
    identity: ObjectIdentity
    parent_key: str
    x: float
    y: float
    planet_type: PlanetType
    radius: float
    color: str
    orbit_index: int
    center_x: float  # parent star position at generation
    center_y: float
    orbital_distance: float
    orbital_angle: float
    orbital_speed: float
    discovery_distance: float
    has_rings: bool = False
    ring_inner: float = 0.0
    ring_outer: float = 0.0
    has_atmosphere: bool = False
    moon_count: int = 0
    discovered: bool = False
    display_name: str = ""

    def advance(self, dt: float) -> None:
        self.orbital_angle = (self.orbital_angle + self.orbital_speed * dt) % math.tau
        self.x = self.center_x + math.cos(self.orbital_angle) * self.orbital_distance
        self.y = self.center_y + math.sin(self.orbital_angle) * self.orbital_distance


@dataclass
class Moon:
    identity: ObjectIdentity
    parent_key: str
    x: float
    y: float
    radius: float
    color: str
    orbit_index: int
    orbital_distance: float
    orbital_angle: float
    orbital_speed: float
    discovery_distance: float
    discovered: bool = False
    display_name: str = ""

    def advance(self, dt: float, center_x: float, center_y: float) -> None:
        """Move along the orbit around the parent's current position."""
        self.orbital_angle = (self.orbital_angle + self.orbital_speed * dt) % math.tau
        self.x = center_x + math.cos(self.orbital_angle) * self.orbital_distance
        self.y = center_y + math.sin(self.orbital_angle) * self.orbital_distance


@dataclass
class Nebula:
    identity: ObjectIdentity
    x: float
    y: float
    nebula_type: NebulaType
    radius: float
    density: float
    particle_count: int
    colors: tuple[str, ...]
    discovery_distance: float
    discovered: bool = False
    display_name: str = ""


@dataclass
class AsteroidGarden:
    identity: ObjectIdentity
    x: float
    y: float
    garden_type: GardenType
    radius: float
    density: float
    rock_count: int
    glitter_chance: float
    colors: tuple[str, ...]
    discovery_distance: float
    discovered: bool = False
    display_name: str = ""


@dataclass
class Wormhole:
    identity: ObjectIdentity
    x: float
    y: float
    designation: str  # "alpha" or "beta"
    wormhole_id: str  # "WH-0042"
    twin_x: float
    twin_y: float
    radius: float
    discovery_distance: float
    discovered: bool = False
    display_name: str = ""

    @property
    def pair_id(self) -> str:
        return f"{self.wormhole_id}-{'α' if self.designation == 'alpha' else 'β'}"

    @property
    def twin_designation(self) -> str:
        return "beta" if self.designation == "alpha" else "alpha"

    @property
    def twin_key(self) -> str:
        return ObjectIdentity.at(ObjectKind.WORMHOLE, self.twin_x, self.twin_y, designation=self.twin_designation).key


@dataclass
class BlackHole:
    identity: ObjectIdentity
    x: float
    y: float
    black_hole_type: BlackHoleType
    event_horizon_radius: float
    accretion_disk_radius: float
    singularity_radius: float
    influence_radius: float
    gravity_strength: float
    discovery_distance: float
    discovered: bool = False
    display_name: str = ""

    def gravity_pull(self, px: float, py: float) -> tuple[float, float]:
        """Acceleration toward the singularity, zero outside influence."""
        dx = self.x - px
        dy = self.y - py
        dist = math.hypot(dx, dy)
        if dist >= self.influence_radius or dist == 0:
            return 0.0, 0.0
        strength = self.gravity_strength * (1 - dist / self.influence_radius) ** 2
        return dx / dist * strength, dy / dist * strength

    def warning_level(self, px: float, py: float) -> int:
        """0 (safe) to 3 (inside the event horizon)."""
        dist = math.hypot(self.x - px, self.y - py)
        if dist <= self.event_horizon_radius:
            return 3
        if dist <= self.event_horizon_radius * 2:
            return 2
        if dist <= self.event_horizon_radius * 4:
            return 1
        return 0

    def touches_singularity(self, px: float, py: float) -> bool:
        return math.hypot(self.x - px, self.y - py) <= self.singularity_radius


@dataclass
class CometOrbit:
    semi_major_axis: float
    eccentricity: float
    period: float
    periapsis_argument: float
    mean_anomaly: float  # at t = 0

    @property
    def periapsis(self) -> float:
        return self.semi_major_axis * (1 - self.eccentricity)

    @property
    def apoapsis(self) -> float:
        return self.semi_major_axis * (1 + self.eccentricity)


def solve_kepler(mean_anomaly: float, eccentricity: float) -> float:
    """Eccentric anomaly E for M = E - e sin E (Newton-Raphson)."""
    e_anom = mean_anomaly if eccentricity < 0.8 else math.pi
    for _ in range(30):
        f = e_anom - eccentricity * math.sin(e_anom) - mean_anomaly
        df = 1 - eccentricity * math.cos(e_anom)
        delta = f / df
        e_anom -= delta
        if abs(delta) < 1e-12:
            break
    return e_anom


@dataclass
class Comet:
    identity: ObjectIdentity
    parent_key: str
    x: float
    y: float
    comet_type: CometType
    star_x: float
    star_y: float
    orbit: CometOrbit
    nucleus_radius: float
    visibility_distance: float
    discovery_distance: float
    tail_length: float = 0.0
    elapsed: float = 0.0
    discovered: bool = False
    display_name: str = ""

    def position_at(self, t: float) -> tuple[float, float]:
        orbit = self.orbit
        mean = (orbit.mean_anomaly + math.tau * t / orbit.period) % math.tau
        ecc_anom = solve_kepler(mean, orbit.eccentricity)
        # Position in the orbital plane, star at the focus
        px = orbit.semi_major_axis * (math.cos(ecc_anom) - orbit.eccentricity)
        py = orbit.semi_major_axis * math.sqrt(1 - orbit.eccentricity ** 2) * math.sin(ecc_anom)
        cos_w = math.cos(orbit.periapsis_argument)
        sin_w = math.sin(orbit.periapsis_argument)
        return (
            self.star_x + px * cos_w - py * sin_w,
            self.star_y + px * sin_w + py * cos_w,
        )

    @property
    def is_visible(self) -> bool:
        return math.hypot(self.x - self.star_x, self.y - self.star_y) <= self.visibility_distance

    def advance(self, dt: float, max_tail: float) -> None:
        self.elapsed += dt
        self.x, self.y = self.position_at(self.elapsed)
        dist = math.hypot(self.x - self.star_x, self.y - self.star_y)
        if dist > self.visibility_distance:
            self.tail_length = 0.0
            return
        # Tail grows toward periapsis
        span = max(self.visibility_distance - self.orbit.periapsis, 1.0)
        closeness = max(0.0, min(1.0, (self.visibility_distance - dist) / span))
        self.tail_length = max_tail * closeness


@dataclass
class Protostar:
    identity: ObjectIdentity
    x: float
    y: float
    variant: str
    classification: str
    radius: float
    color: str
    core_temperature: float
    jet_intensity: float
    accretion_disk_size: float
    instability: float
    discovery_distance: float
    discovered: bool = False
    display_name: str = ""


@dataclass
class RoguePlanet:
    identity: ObjectIdentity
    x: float
    y: float
    variant: str
    radius: float
    color: str
    discovery_distance: float
    discovered: bool = False
    display_name: str = ""


@dataclass
class DarkNebula:
    identity: ObjectIdentity
    x: float
    y: float
    variant: str
    radius: float
    color: str
    occlusion: float
    shape: str
    dust_density: float
    discovery_distance: float
    shape_vertices: list[tuple[float, float]] = field(default_factory=list)  # (angle, radius)
    discovered: bool = False
    display_name: str = ""


@dataclass
class CrystalGarden:
    identity: ObjectIdentity
    x: float
    y: float
    variant: str
    radius: float
    color: str
    crystal_count: int
    mineral: str
    refraction: float
    discovery_distance: float
    discovered: bool = False
    display_name: str = ""


CelestialObject = Union[
    Star, Planet, Moon, Nebula, AsteroidGarden, Wormhole, BlackHole,
    Comet, Protostar, RoguePlanet, DarkNebula, CrystalGarden,
]


def kind_of(obj: CelestialObject) -> ObjectKind:
    return obj.identity.kind


def subtype_of(obj: CelestialObject) -> str:
    """Human-readable variant label used in discovery records."""
    for attr in ("star_type", "planet_type", "nebula_type", "garden_type", "black_hole_type", "comet_type"):
        value = getattr(obj, attr, None)
        if value is not None:
            return value.value
    variant = getattr(obj, "variant", None)
    if variant is not None:
        return variant
    if isinstance(obj, Wormhole):
        return obj.designation
    return kind_of(obj).value
