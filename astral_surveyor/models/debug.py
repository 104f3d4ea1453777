"""Debug tooling: object spawner and seed inspector.

The spawner mutates the live chunk manager through ``inject_object``.
The inspector never does: it builds a private context and calls the
pure chunk generator directly.
"""

from __future__ import annotations

import logging
import math
import time
from collections import Counter
from dataclasses import dataclass, field

from ..constants import CHUNK_SIZE, WORMHOLE_RADIUS
from .bodies import CelestialObject
from .celestial import (
    BLACK_HOLE_TYPES,
    PLANET_TYPES,
    STAR_TYPES,
    BlackHoleType,
    GardenType,
    NebulaType,
    ObjectKind,
    PlanetType,
    StarType,
)
from .chunks import Chunk, generate_chunk
from .phenomena import REGION_OBJECT_BUILDERS, build_black_hole, build_garden, build_nebula
from .stars import generate_star
from .universe import GenerationContext, Stream, parse_seed
from .wormholes import build_pair
from .world import ChunkManager

log = logging.getLogger(__name__)

_TYPED_KINDS: dict[ObjectKind, type] = {
    ObjectKind.STAR: StarType,
    ObjectKind.NEBULA: NebulaType,
    ObjectKind.ASTEROID_GARDEN: GardenType,
    ObjectKind.BLACK_HOLE: BlackHoleType,
}

SPAWNABLE_KINDS = tuple(_TYPED_KINDS) + tuple(REGION_OBJECT_BUILDERS) + (ObjectKind.WORMHOLE,)

DEBUG_WORMHOLE_ALPHA_DISTANCE = 300.0
DEBUG_WORMHOLE_BETA_DISTANCE = (800.0, 1200.0)
# Clear of the strongest pull, still inside the neighbouring chunk
DEBUG_BLACK_HOLE_OFFSET = CHUNK_SIZE * 0.75


@dataclass
class SpawnResult:
    ok: bool
    message: str
    objects: list[CelestialObject] = field(default_factory=list)


def _parse_enum(enum_type: type, text: str):
    wanted = text.strip().lower().replace("-", "_")
    for member in enum_type:
        if wanted in (member.name.lower(), str(member.value).lower()):
            return member
    return None


class DebugSpawner:
    """Force specific objects into the live universe."""

    def __init__(self, manager: ChunkManager) -> None:
        self.manager = manager

    def _rng(self, x: float, y: float):
        return self.manager.context.rng(Stream.DEBUG, math.floor(x), math.floor(y))

    def spawn(self, kind: str, variant: str | None, x: float, y: float) -> SpawnResult:
        """Spawn one object of ``kind`` at (x, y).

        Unknown kinds or variants are rejected without touching the
        manager.
        """
        try:
            object_kind = ObjectKind(kind.strip().lower())
        except ValueError:
            names = ", ".join(k.value for k in SPAWNABLE_KINDS)
            return SpawnResult(False, f"Unknown object kind {kind!r}; expected one of: {names}")
        if object_kind not in SPAWNABLE_KINDS:
            names = ", ".join(k.value for k in SPAWNABLE_KINDS)
            return SpawnResult(False, f"Cannot spawn {object_kind.value} directly; expected one of: {names}")
        if not (math.isfinite(x) and math.isfinite(y)):
            return SpawnResult(False, f"Invalid spawn position ({x}, {y})")

        if object_kind == ObjectKind.WORMHOLE:
            return self.spawn_wormhole_pair(x, y)

        rng = self._rng(x, y)
        if object_kind in _TYPED_KINDS:
            enum_type = _TYPED_KINDS[object_kind]
            chosen = None
            if variant:
                chosen = _parse_enum(enum_type, variant)
                if chosen is None:
                    names = ", ".join(m.value for m in enum_type)
                    return SpawnResult(False, f"Unknown {object_kind.value} variant {variant!r}; expected one of: {names}")
            if object_kind == ObjectKind.STAR:
                obj = generate_star(rng, x, y, chosen)
            elif object_kind == ObjectKind.NEBULA:
                obj = build_nebula(rng, x, y, chosen)
            elif object_kind == ObjectKind.ASTEROID_GARDEN:
                obj = build_garden(rng, x, y, chosen)
            else:
                obj = build_black_hole(rng, x, y, chosen)
        else:
            try:
                obj = REGION_OBJECT_BUILDERS[object_kind](rng, x, y, variant or None)
            except ValueError as exc:
                return SpawnResult(False, str(exc))

        placed = self.manager.inject_object(obj).find(obj.identity.key)
        if placed is not obj:
            return SpawnResult(False, f"{obj.identity.key} already exists at ({x:.0f}, {y:.0f})", [placed])
        log.info("Spawned %s %s at (%.0f, %.0f)", object_kind.value, obj.identity.key, x, y)
        return SpawnResult(True, f"Spawned {object_kind.value} at ({x:.0f}, {y:.0f})", [obj])

    def spawn_wormhole_pair(self, x: float, y: float) -> SpawnResult:
        """Alpha endpoint near (x, y), beta further out on the opposite side."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return SpawnResult(False, f"Invalid spawn position ({x}, {y})")
        rng = self._rng(x, y)
        angle = rng.next_float(0, math.tau)
        alpha = (
            x + math.cos(angle) * DEBUG_WORMHOLE_ALPHA_DISTANCE,
            y + math.sin(angle) * DEBUG_WORMHOLE_ALPHA_DISTANCE,
        )
        beta_distance = rng.next_float(*DEBUG_WORMHOLE_BETA_DISTANCE)
        beta = (
            x - math.cos(angle) * beta_distance,
            y - math.sin(angle) * beta_distance,
        )
        wormhole_id = f"DEBUG-{rng.next_int(0, 10000):04d}"
        pair = build_pair(wormhole_id, alpha, beta, rng.next_float(*WORMHOLE_RADIUS), rng.next_float(*WORMHOLE_RADIUS))
        for endpoint in pair:
            self.manager.inject_object(endpoint)
        log.info("Spawned wormhole pair %s near (%.0f, %.0f)", wormhole_id, x, y)
        return SpawnResult(True, f"Spawned wormhole pair {wormhole_id}", list(pair))


# ---------------------------------------------------------------------------
# Seed inspection
# ---------------------------------------------------------------------------

COUNTED_CATEGORIES = (
    "celestial_stars", "planets", "moons", "nebulae", "asteroid_gardens",
    "wormholes", "black_holes", "comets", "protostars", "rogue_planets",
    "dark_nebulae", "crystal_gardens",
)

# Finds at or below this rarity make the "rarest" list
RARE_THRESHOLD = 0.05


@dataclass
class ChunkAnalysis:
    cx: int
    cy: int
    region: str
    counts: dict[str, int]


@dataclass
class RegionAnalysis:
    seed: int
    center: tuple[int, int]
    chunk_radius: int
    chunks: list[ChunkAnalysis]
    totals: dict[str, int]
    averages: dict[str, float]
    star_types: dict[str, int]
    planet_types: dict[str, int]
    rarest_finds: list[str]
    analysis_time_ms: float

    def summary(self) -> list[str]:
        lines = [
            f"Seed {self.seed} around chunk {self.center} (radius {self.chunk_radius}, {len(self.chunks)} chunks)",
            f"Analysed in {self.analysis_time_ms:.1f} ms",
        ]
        for category, total in self.totals.items():
            if total:
                lines.append(f"  {category}: {total} ({self.averages[category]:.2f}/chunk)")
        if self.rarest_finds:
            lines.append("Rare finds: " + ", ".join(self.rarest_finds[:8]))
        return lines


def _analyse_chunk(chunk: Chunk) -> ChunkAnalysis:
    counts = {category: len(getattr(chunk, category)) for category in COUNTED_CATEGORIES}
    counts["star_systems"] = sum(1 for star in chunk.celestial_stars if star.companion_of is None)
    counts["binary_systems"] = sum(1 for star in chunk.celestial_stars if star.companion_of is not None)
    return ChunkAnalysis(chunk.x, chunk.y, chunk.region.region_type.value, counts)


class SeedInspector:
    """Preview what a seed generates without touching the live universe."""

    def analyze_region(
        self,
        seed: int | str,
        center_cx: int = 0,
        center_cy: int = 0,
        chunk_radius: int = 2,
    ) -> RegionAnalysis:
        if chunk_radius < 0:
            raise ValueError(f"chunk_radius must be non-negative, got {chunk_radius}")
        context = GenerationContext(parse_seed(seed))
        started = time.perf_counter()

        chunks: list[ChunkAnalysis] = []
        star_types: Counter[str] = Counter()
        planet_types: Counter[str] = Counter()
        rare: list[tuple[float, str]] = []
        for cx in range(center_cx - chunk_radius, center_cx + chunk_radius + 1):
            for cy in range(center_cy - chunk_radius, center_cy + chunk_radius + 1):
                chunk = generate_chunk(context, cx, cy)
                chunks.append(_analyse_chunk(chunk))
                for star in chunk.celestial_stars:
                    star_types[star.star_type.value] += 1
                    rarity = STAR_TYPES[star.star_type].rarity
                    if rarity <= RARE_THRESHOLD:
                        rare.append((rarity, f"{STAR_TYPES[star.star_type].name} in ({cx}, {cy})"))
                for planet in chunk.planets:
                    planet_types[planet.planet_type.value] += 1
                    if planet.planet_type == PlanetType.EXOTIC:
                        rare.append((PLANET_TYPES[PlanetType.EXOTIC].rarity, f"Exotic World in ({cx}, {cy})"))
                for black_hole in chunk.black_holes:
                    data = BLACK_HOLE_TYPES[black_hole.black_hole_type]
                    rare.append((0.0, f"{data.name} in ({cx}, {cy})"))
                for wormhole in chunk.wormholes:
                    rare.append((0.001, f"Wormhole {wormhole.pair_id} in ({cx}, {cy})"))

        totals = {category: 0 for category in chunks[0].counts}
        for analysis in chunks:
            for category, count in analysis.counts.items():
                totals[category] += count
        averages = {category: total / len(chunks) for category, total in totals.items()}
        elapsed = (time.perf_counter() - started) * 1000

        result = RegionAnalysis(
            seed=context.seed,
            center=(center_cx, center_cy),
            chunk_radius=chunk_radius,
            chunks=chunks,
            totals=totals,
            averages=averages,
            star_types=dict(star_types),
            planet_types=dict(planet_types),
            rarest_finds=[label for _, label in sorted(rare, key=lambda item: item[0])],
            analysis_time_ms=elapsed,
        )
        log.debug("Analysed seed %d: %d chunks in %.1f ms", context.seed, len(chunks), elapsed)
        return result

    def compare_seeds(
        self,
        seeds: list[int | str],
        center_cx: int = 0,
        center_cy: int = 0,
        chunk_radius: int = 1,
    ) -> dict[int, RegionAnalysis]:
        results = {}
        for seed in seeds:
            analysis = self.analyze_region(seed, center_cx, center_cy, chunk_radius)
            results[analysis.seed] = analysis
        return results
