import math
import unittest
from collections import Counter
from unittest import mock

from astral_surveyor.constants import CHUNK_SIZE, PLANET_ORBIT_MARGIN
from astral_surveyor.errors import GenerationError
from astral_surveyor.models.celestial import STAR_TYPES, StarType
from astral_surveyor.models.chunks import generate_chunk
from astral_surveyor.models.stars import _generate_comet, generate_star, generate_star_system
from astral_surveyor.models.universe import GenerationContext, Stream

COORDS = [(0, 0), (1, -1), (-3, 7), (12, 5), (-20, -20), (100, 3)]


def keys(chunk):
    return [obj.identity.key for obj in chunk.objects()]


class TestChunkDeterminism(unittest.TestCase):
    def test_same_seed_same_chunk(self):
        ctx = GenerationContext(42)
        for cx, cy in COORDS:
            self.assertEqual(generate_chunk(ctx, cx, cy), generate_chunk(ctx, cx, cy))

    def test_generation_order_does_not_matter(self):
        ctx = GenerationContext(7)
        forward = [generate_chunk(ctx, cx, cy) for cx, cy in COORDS]
        backward = [generate_chunk(ctx, cx, cy) for cx, cy in reversed(COORDS)]
        self.assertEqual(forward, list(reversed(backward)))

    def test_different_seeds_differ(self):
        a = GenerationContext(1)
        b = GenerationContext(2)
        coords = [(cx, cy) for cx in range(8) for cy in range(5)]
        different = sum(
            1 for cx, cy in coords if generate_chunk(a, cx, cy) != generate_chunk(b, cx, cy)
        )
        self.assertGreaterEqual(different / len(coords), 0.95)

    def test_reset_count_is_not_part_of_generation(self):
        # Only the seed drives generation; reborn contexts change the seed itself
        self.assertEqual(
            keys(generate_chunk(GenerationContext(5, 0), 2, 2)),
            keys(generate_chunk(GenerationContext(5, 3), 2, 2)),
        )

    def test_objects_stay_inside_their_chunk(self):
        ctx = GenerationContext(42)
        for cx in range(-5, 5):
            chunk = generate_chunk(ctx, cx, 0)
            for obj in list(chunk.celestial_stars[:1]) + chunk.nebulae + chunk.asteroid_gardens + chunk.black_holes:
                self.assertEqual((math.floor(obj.x / CHUNK_SIZE), math.floor(obj.y / CHUNK_SIZE)), (cx, 0))

    def test_failure_raises_generation_error(self):
        with mock.patch(
            "astral_surveyor.models.chunks._background_stars", side_effect=RuntimeError("boom"),
        ):
            with self.assertRaises(GenerationError) as caught:
                generate_chunk(GenerationContext(42), 3, -4)
        self.assertEqual((caught.exception.cx, caught.exception.cy), (3, -4))
        self.assertIsInstance(caught.exception.cause, RuntimeError)

    def test_black_hole_suppresses_star_system(self):
        with mock.patch("astral_surveyor.models.chunks.BLACK_HOLE_SPAWN_CHANCE", 1e7), \
                mock.patch("astral_surveyor.models.chunks.STAR_SYSTEM_SPAWN_CHANCE", 1e7):
            chunk = generate_chunk(GenerationContext(42), 2, 3)
        self.assertEqual(len(chunk.black_holes), 1)
        self.assertEqual(chunk.celestial_stars, [])
        self.assertEqual(chunk.planets, [])
        black_hole = chunk.black_holes[0]
        self.assertEqual((black_hole.x, black_hole.y), (2.5 * CHUNK_SIZE, 3.5 * CHUNK_SIZE))


class TestStarSystems(unittest.TestCase):
    def setUp(self):
        self.context = GenerationContext(42)
        self.systems = [generate_star_system(self.context, cx, cy) for cx in range(10) for cy in range(6)]

    def test_primary_inside_chunk(self):
        for cx in range(3):
            system = generate_star_system(self.context, cx, 1)
            self.assertEqual(math.floor(system.primary.x / CHUNK_SIZE), cx)
            self.assertEqual(math.floor(system.primary.y / CHUNK_SIZE), 1)

    def test_planets_reference_their_star(self):
        for system in self.systems:
            star = system.primary
            self.assertEqual(star.planet_count, len(system.planets))
            for index, planet in enumerate(system.planets):
                self.assertEqual(planet.parent_key, star.identity.key)
                self.assertEqual(planet.orbit_index, index)
                self.assertEqual((planet.identity.x, planet.identity.y), (star.identity.x, star.identity.y))
                self.assertGreaterEqual(
                    planet.orbital_distance, star.radius + planet.radius + PLANET_ORBIT_MARGIN - 1e-9,
                )

    def test_moons_reference_their_planet(self):
        for system in self.systems:
            planets = {planet.identity.key: planet for planet in system.planets}
            self.assertEqual(sum(p.moon_count for p in system.planets), len(system.moons))
            for moon in system.moons:
                planet = planets[moon.parent_key]
                self.assertGreater(moon.orbital_distance, planet.radius)
                self.assertAlmostEqual(
                    math.hypot(moon.x - planet.x, moon.y - planet.y), moon.orbital_distance,
                )

    def test_moon_orbits_increase_outward(self):
        checked = 0
        for cx in range(30):
            for cy in range(10):
                by_planet = {}
                for moon in generate_star_system(self.context, cx, cy).moons:
                    by_planet.setdefault(moon.parent_key, []).append(moon)
                for moons in by_planet.values():
                    distances = [moon.orbital_distance for moon in sorted(moons, key=lambda m: m.orbit_index)]
                    for inner, outer in zip(distances, distances[1:]):
                        self.assertGreaterEqual(outer - inner, 15.0 - 1e-9)
                    checked += len(moons) > 1
        self.assertGreater(checked, 0)

    def test_identity_keys_are_unique(self):
        for system in self.systems:
            everything = system.stars + system.planets + system.moons + system.comets
            found = [obj.identity.key for obj in everything]
            self.assertEqual(len(found), len(set(found)))

    def test_companions_point_at_primary(self):
        for system in self.systems:
            for companion in system.stars[1:]:
                self.assertEqual(companion.companion_of, system.primary.identity.key)

    def test_comet_orbits_clear_the_star(self):
        for system in self.systems:
            star = system.primary
            for comet in system.comets:
                self.assertEqual(comet.parent_key, star.identity.key)
                self.assertGreaterEqual(comet.orbit.eccentricity, 0.0)
                self.assertLess(comet.orbit.eccentricity, 1.0)
                self.assertGreaterEqual(comet.orbit.periapsis, star.radius + 50 - 1e-6)

    def test_comet_clears_star_larger_than_its_orbit(self):
        star = generate_star(self.context.rng(Stream.DEBUG, 0, 0), 10.0, 10.0, StarType.BLUE_GIANT)
        star.radius = 252.0
        with mock.patch("astral_surveyor.models.stars.COMET_SEMI_MAJOR_AXIS", (300.0, 300.0)):
            comet = _generate_comet(self.context, 0, 0, star, 0)
        self.assertGreaterEqual(comet.orbit.periapsis, 302.0 - 1e-6)
        self.assertGreaterEqual(comet.orbit.eccentricity, 0.0)

    def test_star_type_frequencies_follow_rarity(self):
        counts = Counter(
            generate_star(self.context.rng(Stream.SYSTEM, i, 0), 0.0, 0.0).star_type for i in range(10000)
        )
        for star_type in StarType:
            self.assertAlmostEqual(counts[star_type] / 10000, STAR_TYPES[star_type].rarity, delta=0.02)

    def test_forced_star_type(self):
        star = generate_star(self.context.rng(Stream.DEBUG, 0, 0), 10.0, 10.0, StarType.BLUE_GIANT)
        self.assertEqual(star.star_type, StarType.BLUE_GIANT)
        self.assertEqual(star.identity.key, "star_10_10")


class TestChunkMotion(unittest.TestCase):
    def test_moons_follow_planets(self):
        ctx = GenerationContext(42)
        chunk = generate_chunk(ctx, 0, 0)
        system = generate_star_system(ctx, 0, 0)
        chunk.planets = system.planets
        chunk.moons = system.moons
        chunk.advance(10.0)
        planets = {planet.identity.key: planet for planet in chunk.planets}
        for moon in chunk.moons:
            planet = planets[moon.parent_key]
            self.assertAlmostEqual(math.hypot(moon.x - planet.x, moon.y - planet.y), moon.orbital_distance)
