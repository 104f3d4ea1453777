import unittest

from astral_surveyor.errors import IdentityError
from astral_surveyor.models.celestial import (
    PLANET_TYPES,
    STAR_TYPES,
    ObjectIdentity,
    ObjectKind,
    PlanetType,
    StarType,
    companion_table,
    planet_type_weights,
    planet_zone,
    rarity_table,
)


class TestObjectIdentity(unittest.TestCase):
    def test_key_formats(self):
        self.assertEqual(ObjectIdentity(ObjectKind.STAR, 10, -4).key, "star_10_-4")
        self.assertEqual(ObjectIdentity(ObjectKind.PLANET, 10, -4, (2,)).key, "planet_10_-4_planet_2")
        self.assertEqual(ObjectIdentity(ObjectKind.MOON, 10, -4, (2, 1)).key, "moon_10_-4_planet_2_moon_1")
        self.assertEqual(ObjectIdentity(ObjectKind.COMET, 10, -4, (0,)).key, "comet_10_-4_0")
        self.assertEqual(
            ObjectIdentity(ObjectKind.WORMHOLE, 3, 4, designation="alpha").key, "wormhole_3_4_alpha",
        )
        self.assertEqual(ObjectIdentity(ObjectKind.ASTEROID_GARDEN, 0, 0).key, "asteroids_0_0")

    def test_at_floors_coordinates(self):
        identity = ObjectIdentity.at(ObjectKind.NEBULA, -0.5, 1.9)
        self.assertEqual((identity.x, identity.y), (-1, 1))

    def test_parse_round_trip(self):
        identities = [
            ObjectIdentity(ObjectKind.STAR, 1, 2),
            ObjectIdentity(ObjectKind.PLANET, -100, 5, (3,)),
            ObjectIdentity(ObjectKind.MOON, 7, -7, (0, 4)),
            ObjectIdentity(ObjectKind.COMET, 0, 0, (2,)),
            ObjectIdentity(ObjectKind.WORMHOLE, 12, 34, designation="beta"),
            ObjectIdentity(ObjectKind.BLACK_HOLE, 1000, 1000),
            ObjectIdentity(ObjectKind.DARK_NEBULA, -5, -6),
            ObjectIdentity(ObjectKind.ROGUE_PLANET, 8, 9),
        ]
        for identity in identities:
            self.assertEqual(ObjectIdentity.parse(identity.key), identity)

    def test_parse_rejects_malformed_keys(self):
        for key in ["", "star", "star_1", "galaxy_1_2", "star_a_2", "planet_1_2", "planet_1_2_moon_3",
                    "star_1_2_extra", "moon_1_2_planet_x_moon_1"]:
            with self.assertRaises(IdentityError):
                ObjectIdentity.parse(key)

    def test_identity_error_is_value_error(self):
        with self.assertRaises(ValueError):
            ObjectIdentity.parse("nonsense")

    def test_parent_chain(self):
        moon = ObjectIdentity(ObjectKind.MOON, 5, 6, (1, 0))
        self.assertEqual(moon.parent, ObjectIdentity(ObjectKind.PLANET, 5, 6, (1,)))
        self.assertEqual(moon.parent.parent, ObjectIdentity(ObjectKind.STAR, 5, 6))
        self.assertEqual(ObjectIdentity(ObjectKind.COMET, 5, 6, (0,)).parent.key, "star_5_6")
        self.assertIsNone(ObjectIdentity(ObjectKind.STAR, 5, 6).parent)


class TestRarityTables(unittest.TestCase):
    def test_star_rarities_sum_to_one(self):
        self.assertAlmostEqual(sum(data.rarity for data in STAR_TYPES.values()), 1.0)
        self.assertEqual([k for k, _ in rarity_table(STAR_TYPES)], list(StarType))

    def test_planet_weights_are_normalised(self):
        for star_type in StarType:
            for relative in (0.1, 0.3, 0.5, 0.9):
                weights = planet_type_weights(star_type, relative)
                self.assertAlmostEqual(sum(w for _, w in weights), 1.0)
                self.assertEqual([p for p, _ in weights], list(PLANET_TYPES))

    def test_zones(self):
        self.assertEqual(planet_zone(0.0), "inner")
        self.assertEqual(planet_zone(0.3), "habitable")
        self.assertEqual(planet_zone(0.5), "outer")
        self.assertEqual(planet_zone(1.5), "far")

    def test_neutron_stars_favour_exotic_worlds(self):
        neutron = dict(planet_type_weights(StarType.NEUTRON_STAR, 0.5))
        sunlike = dict(planet_type_weights(StarType.G_TYPE, 0.5))
        self.assertGreater(neutron[PlanetType.EXOTIC], sunlike[PlanetType.EXOTIC])

    def test_companion_tables(self):
        self.assertIn(StarType.WHITE_DWARF, dict(companion_table(StarType.RED_GIANT)))
        self.assertEqual(set(dict(companion_table(StarType.M_TYPE))), {StarType.M_TYPE, StarType.WHITE_DWARF})
