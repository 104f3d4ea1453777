import re
import unittest

from astral_surveyor.models.bodies import Moon, Planet
from astral_surveyor.models.celestial import NebulaType, ObjectIdentity, ObjectKind, PlanetType, StarType
from astral_surveyor.models.naming import (
    coordinate_designation,
    moon_name,
    name_for,
    nebula_name,
    planet_name,
    roman_numeral,
    star_name,
)
from astral_surveyor.models.phenomena import build_black_hole, build_nebula, build_rogue_planet
from astral_surveyor.models.rng import SeededRandom
from astral_surveyor.models.stars import generate_star


def make_planet(index=0, planet_type=PlanetType.ROCKY, star_x=10, star_y=20):
    return Planet(
        identity=ObjectIdentity(ObjectKind.PLANET, star_x, star_y, (index,)),
        parent_key=f"star_{star_x}_{star_y}",
        x=star_x + 200.0,
        y=float(star_y),
        planet_type=planet_type,
        radius=12.0,
        color="#8B4513",
        orbit_index=index,
        center_x=float(star_x),
        center_y=float(star_y),
        orbital_distance=200.0,
        orbital_angle=0.0,
        orbital_speed=0.1,
        discovery_distance=62.0,
    )


def make_moon(planet_index=1, index=0):
    return Moon(
        identity=ObjectIdentity(ObjectKind.MOON, 10, 20, (planet_index, index)),
        parent_key=f"planet_10_20_planet_{planet_index}",
        x=0.0,
        y=0.0,
        radius=3.0,
        color="#C0C0C0",
        orbit_index=index,
        orbital_distance=30.0,
        orbital_angle=0.0,
        orbital_speed=0.5,
        discovery_distance=23.0,
    )


class TestNaming(unittest.TestCase):
    def test_roman_numerals(self):
        self.assertEqual([roman_numeral(n) for n in (1, 4, 9, 14, 40, 1994)], ["I", "IV", "IX", "XIV", "XL", "MCMXCIV"])
        with self.assertRaises(ValueError):
            roman_numeral(0)

    def test_coordinate_designation(self):
        self.assertEqual(coordinate_designation(1234.5, -567.2), "ASV J1234+0568-")
        self.assertEqual(coordinate_designation(-3.0, 12345.0), "ASV J0003-2345+")

    def test_star_name_is_stable(self):
        star = generate_star(SeededRandom(9), 100.0, 200.0, StarType.WHITE_DWARF)
        again = generate_star(SeededRandom(10), 100.2, 200.7, StarType.WHITE_DWARF)
        self.assertRegex(star_name(star), r"^ASV-\d{4} WD$")
        self.assertEqual(star_name(star), star_name(again))

    def test_planet_names(self):
        self.assertEqual(planet_name(make_planet(0), "Sol"), "Sol b")
        self.assertEqual(planet_name(make_planet(2, PlanetType.EXOTIC), "Sol"), "Sol d (EX)")
        self.assertRegex(planet_name(make_planet(1)), r"^ASV-\d{4} c$")

    def test_planet_name_uses_resolved_host(self):
        star = generate_star(SeededRandom(1), 10.5, 20.5, StarType.G_TYPE)
        planet = make_planet(0)
        resolve = {star.identity.key: star}.get
        self.assertEqual(name_for(planet, resolve), f"{star_name(star)} b")

    def test_moon_names(self):
        self.assertEqual(moon_name(make_moon(index=2), "Sol c"), "Sol c III")
        self.assertRegex(name_for(make_moon()), r"^ASV-\d{4} c I$")

    def test_moon_name_follows_resolved_planet(self):
        star = generate_star(SeededRandom(1), 10.5, 20.5, StarType.G_TYPE)
        planet = make_planet(1)
        lookup = {star.identity.key: star, planet.identity.key: planet}
        self.assertEqual(name_for(make_moon(), lookup.get), f"{star_name(star)} c I")

    def test_nebula_names(self):
        for i in range(40):
            nebula = build_nebula(SeededRandom(i + 1), i * 1000.0, 0.0, NebulaType.EMISSION)
            name = nebula_name(nebula)
            self.assertEqual(name, nebula_name(nebula))
            match = re.fullmatch(r"(NGC|IC) (\d+)", name)
            if match:
                number = int(match.group(2))
                self.assertEqual(match.group(1), "IC" if number > 7000 else "NGC")
            else:
                self.assertTrue(name.endswith(" Nebula"))

    def test_other_kinds(self):
        self.assertRegex(name_for(build_black_hole(SeededRandom(1), 0.0, 0.0)), r"^BH-\d{4}$")
        rogue = build_rogue_planet(SeededRandom(1), 1234.0, 5678.0, "ice")
        self.assertTrue(name_for(rogue).endswith("1234+5678+"))
