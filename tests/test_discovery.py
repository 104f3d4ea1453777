import unittest

from astral_surveyor.models.bodies import Comet, CometOrbit
from astral_surveyor.models.celestial import CometType, ObjectIdentity, ObjectKind
from astral_surveyor.models.discovery import DiscoveryRecord, DiscoveryStore, find_discoverable
from astral_surveyor.models.phenomena import build_nebula
from astral_surveyor.models.rng import SeededRandom
from astral_surveyor.models.stars import generate_star_system
from astral_surveyor.models.universe import GenerationContext
from astral_surveyor.models.wormholes import build_pair


def record(key, kind="nebula", name="Thing"):
    return DiscoveryRecord(identity=key, kind=kind, x=1.0, y=2.0, display_name=name, timestamp=100.0)


class TestDiscoveryRecord(unittest.TestCase):
    def test_round_trip(self):
        original = DiscoveryRecord(
            identity="planet_1_2_planet_0", kind="planet", x=1.5, y=2.5, display_name="ASV-0001 b",
            timestamp=1234.5, subtype="OCEAN", details={"parent": "star_1_2"},
        )
        self.assertEqual(DiscoveryRecord.from_dict(original.to_dict()), original)

    def test_for_planet_records_parent(self):
        system = generate_star_system(GenerationContext(42), 0, 0)
        for cx in range(1, 50):
            if system.planets:
                break
            system = generate_star_system(GenerationContext(42), cx, 0)
        planet = system.planets[0]
        rec = DiscoveryRecord.for_object(planet, "Name", timestamp=5.0)
        self.assertEqual(rec.identity, planet.identity.key)
        self.assertEqual(rec.kind, "planet")
        self.assertEqual(rec.subtype, planet.planet_type.value)
        self.assertEqual(rec.details["parent"], planet.parent_key)
        self.assertEqual(rec.timestamp, 5.0)

    def test_for_wormhole_records_twin(self):
        alpha, _ = build_pair("WH-0007", (0.0, 0.0), (900.0, 0.0), 40.0, 40.0)
        rec = DiscoveryRecord.for_object(alpha, "WH-0007-α")
        self.assertEqual(rec.details, {"wormhole_id": "WH-0007", "twin": [900.0, 0.0]})
        self.assertEqual(rec.subtype, "alpha")


class TestDiscoveryStore(unittest.TestCase):
    def test_unknown_identity(self):
        store = DiscoveryStore()
        self.assertFalse(store.has("star_0_0"))
        self.assertIsNone(store.get("star_0_0"))
        self.assertNotIn("star_0_0", store)

    def test_first_record_wins(self):
        store = DiscoveryStore()
        store.put(record("nebula_0_0", name="First"))
        store.put(record("nebula_0_0", name="Second"))
        self.assertEqual(len(store), 1)
        self.assertEqual(store.get("nebula_0_0").display_name, "First")

    def test_records_in_discovery_order(self):
        store = DiscoveryStore()
        for key in ("b_1_1", "a_1_1", "c_1_1"):
            store.put(record(key))
        self.assertEqual([r.identity for r in store.all_records()], ["b_1_1", "a_1_1", "c_1_1"])

    def test_records_of_kind(self):
        store = DiscoveryStore()
        store.put(record("nebula_0_0"))
        store.put(record("star_0_0", kind="star"))
        self.assertEqual([r.identity for r in store.records_of(ObjectKind.STAR)], ["star_0_0"])

    def test_archive_and_clear(self):
        store = DiscoveryStore()
        store.put(record("nebula_0_0"))
        moved = store.archive()
        self.assertEqual([r.identity for r in moved], ["nebula_0_0"])
        self.assertEqual(len(store), 0)
        self.assertEqual(len(store.history), 1)
        store.put(record("nebula_0_0", name="Again"))
        self.assertEqual(store.get("nebula_0_0").display_name, "Again")
        store.clear()
        self.assertEqual(len(store), 0)
        self.assertEqual(store.history, [])

    def test_dict_round_trip_skips_malformed(self):
        store = DiscoveryStore()
        store.put(record("nebula_0_0"))
        store.archive()
        store.put(record("star_5_5", kind="star"))
        data = store.to_dict()
        data["records"].append({"kind": "star"})  # no identity
        restored = DiscoveryStore.from_dict(data)
        self.assertEqual([r.identity for r in restored.all_records()], ["star_5_5"])
        self.assertEqual([r.identity for r in restored.history], ["nebula_0_0"])


class TestFindDiscoverable(unittest.TestCase):
    def test_distance_and_discovered_flag(self):
        nebula = build_nebula(SeededRandom(1), 0.0, 0.0)
        self.assertEqual(find_discoverable([nebula], 10.0, 10.0), [nebula])
        self.assertEqual(find_discoverable([nebula], nebula.discovery_distance * 2, 0.0), [])
        nebula.discovered = True
        self.assertEqual(find_discoverable([nebula], 10.0, 10.0), [])

    def test_invisible_comet_is_skipped(self):
        comet = Comet(
            identity=ObjectIdentity(ObjectKind.COMET, 0, 0, (0,)),
            parent_key="star_0_0",
            x=1500.0,
            y=0.0,
            comet_type=CometType.DUST,
            star_x=0.0,
            star_y=0.0,
            orbit=CometOrbit(1000.0, 0.5, 1000.0, 0.0, 0.0),
            nucleus_radius=4.0,
            visibility_distance=1000.0,
            discovery_distance=80.0,
        )
        self.assertEqual(find_discoverable([comet], 1500.0, 0.0), [])
        comet.x = 600.0
        self.assertEqual(find_discoverable([comet], 600.0, 0.0), [comet])
