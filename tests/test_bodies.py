import math
import unittest

from astral_surveyor.models.bodies import Comet, CometOrbit, Planet, solve_kepler
from astral_surveyor.models.celestial import BlackHoleType, CometType, ObjectIdentity, ObjectKind, PlanetType
from astral_surveyor.models.phenomena import build_black_hole
from astral_surveyor.models.rng import SeededRandom


def make_comet(eccentricity=0.8, semi_major=1000.0, visibility=1000.0):
    comet = Comet(
        identity=ObjectIdentity(ObjectKind.COMET, 0, 0, (0,)),
        parent_key="star_0_0",
        x=0.0,
        y=0.0,
        comet_type=CometType.ICE,
        star_x=0.0,
        star_y=0.0,
        orbit=CometOrbit(semi_major, eccentricity, period=1000.0, periapsis_argument=0.0, mean_anomaly=0.0),
        nucleus_radius=4.0,
        visibility_distance=visibility,
        discovery_distance=80.0,
    )
    comet.x, comet.y = comet.position_at(0.0)
    return comet


class TestKepler(unittest.TestCase):
    def test_solution_satisfies_equation(self):
        for eccentricity in (0.0, 0.3, 0.6, 0.9, 0.95):
            for mean in (0.05, 0.5, 1.5, math.pi, 4.0, 6.0):
                e_anom = solve_kepler(mean, eccentricity)
                self.assertAlmostEqual(e_anom - eccentricity * math.sin(e_anom), mean, places=9)


class TestComet(unittest.TestCase):
    def test_starts_at_periapsis(self):
        comet = make_comet()
        self.assertAlmostEqual(comet.x, comet.orbit.periapsis)
        self.assertAlmostEqual(comet.y, 0.0)

    def test_apoapsis_after_half_period(self):
        comet = make_comet()
        x, y = comet.position_at(comet.orbit.period / 2)
        self.assertAlmostEqual(math.hypot(x, y), comet.orbit.apoapsis, places=6)

    def test_tail_only_when_visible(self):
        comet = make_comet()
        comet.advance(0.0, 200.0)
        self.assertTrue(comet.is_visible)
        self.assertGreater(comet.tail_length, 0)

        comet.advance(comet.orbit.period / 2, 200.0)
        self.assertFalse(comet.is_visible)
        self.assertEqual(comet.tail_length, 0.0)


class TestBlackHole(unittest.TestCase):
    def setUp(self):
        self.black_hole = build_black_hole(SeededRandom(1), 0.0, 0.0, BlackHoleType.STELLAR_MASS)

    def test_warning_levels(self):
        horizon = self.black_hole.event_horizon_radius
        self.assertEqual(self.black_hole.warning_level(horizon * 0.5, 0), 3)
        self.assertEqual(self.black_hole.warning_level(horizon * 1.5, 0), 2)
        self.assertEqual(self.black_hole.warning_level(horizon * 3.0, 0), 1)
        self.assertEqual(self.black_hole.warning_level(horizon * 5.0, 0), 0)

    def test_gravity_pull(self):
        reach = self.black_hole.influence_radius
        self.assertEqual(self.black_hole.gravity_pull(reach * 1.1, 0), (0.0, 0.0))
        ax, ay = self.black_hole.gravity_pull(-reach / 2, 0)
        self.assertGreater(ax, 0)
        self.assertAlmostEqual(ay, 0.0)

    def test_singularity(self):
        self.assertTrue(self.black_hole.touches_singularity(1.0, 0.0))
        self.assertFalse(self.black_hole.touches_singularity(50.0, 0.0))


class TestPlanetOrbit(unittest.TestCase):
    def test_advance_keeps_distance(self):
        planet = Planet(
            identity=ObjectIdentity(ObjectKind.PLANET, 0, 0, (0,)),
            parent_key="star_0_0",
            x=200.0,
            y=0.0,
            planet_type=PlanetType.ROCKY,
            radius=10.0,
            color="#8B4513",
            orbit_index=0,
            center_x=0.0,
            center_y=0.0,
            orbital_distance=200.0,
            orbital_angle=0.0,
            orbital_speed=0.5,
            discovery_distance=60.0,
        )
        planet.advance(3.0)
        self.assertAlmostEqual(math.hypot(planet.x, planet.y), 200.0)
        self.assertAlmostEqual(planet.orbital_angle, 1.5)
