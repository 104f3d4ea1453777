import unittest
from unittest import mock

from astral_surveyor.constants import CHUNK_SIZE
from astral_surveyor.errors import GenerationError
from astral_surveyor.models.celestial import NebulaType, ObjectKind
from astral_surveyor.models.chunks import generate_chunk
from astral_surveyor.models.discovery import DiscoveryStore
from astral_surveyor.models.phenomena import build_nebula
from astral_surveyor.models.rng import SeededRandom
from astral_surveyor.models.universe import GenerationContext
from astral_surveyor.models.world import ChunkManager


def centre_of(cx, cy):
    return (cx + 0.5) * CHUNK_SIZE, (cy + 0.5) * CHUNK_SIZE


def first_chunk_with_objects(context):
    for cx in range(200):
        chunk = generate_chunk(context, cx, 0)
        if any(True for _ in chunk.objects()):
            return chunk
    raise AssertionError("no populated chunk found")


class TestActiveSet(unittest.TestCase):
    def setUp(self):
        self.context = GenerationContext(42)
        self.manager = ChunkManager(self.context)

    def test_three_by_three_around_origin(self):
        self.manager.update_active_chunks(0, 0)
        expected = {f"{cx},{cy}" for cx in (-1, 0, 1) for cy in (-1, 0, 1)}
        self.assertEqual(set(self.manager.active_chunks), expected)

        stars = self.manager.get_all_active_objects()["celestial_stars"]
        generated = sum(
            len(generate_chunk(self.context, cx, cy).celestial_stars)
            for cx in (-1, 0, 1) for cy in (-1, 0, 1)
        )
        self.assertEqual(len(stars), generated)

    def test_chunk_coords(self):
        self.assertEqual(ChunkManager.get_chunk_coords(0, 0), (0, 0))
        self.assertEqual(ChunkManager.get_chunk_coords(-1, 1999.9), (-1, 0))
        self.assertEqual(ChunkManager.get_chunk_coords(2000, -2000), (1, -1))

    def test_eviction(self):
        self.manager.update_active_chunks(0, 0)
        before = {obj.identity.key for obj in self.manager.active_objects()}
        self.manager.update_active_chunks(100_000, 0)
        self.assertNotIn("0,0", self.manager.active_chunks)
        self.assertEqual(len(self.manager.active_chunks), 9)
        after = {obj.identity.key for obj in self.manager.active_objects()}
        self.assertFalse(before & after)

        self.manager.update_active_chunks(0, 0)
        self.assertEqual({obj.identity.key for obj in self.manager.active_objects()}, before)

    def test_small_move_keeps_loaded_chunks(self):
        self.manager.update_active_chunks(*centre_of(0, 0))
        chunk = self.manager.get_chunk(0, 0)
        self.manager.update_active_chunks(*centre_of(1, 0))
        self.assertIs(self.manager.get_chunk(0, 0), chunk)
        self.assertIsNone(self.manager.get_chunk(-1, 0))

    def test_generation_error_propagates(self):
        with mock.patch(
            "astral_surveyor.models.chunks._build_chunk", side_effect=RuntimeError("boom"),
        ):
            with self.assertRaises(GenerationError):
                self.manager.update_active_chunks(0, 0)
        self.assertEqual(self.manager.active_chunks, {})

    def test_generate_chunk_does_not_load(self):
        chunk = self.manager.generate_chunk(4, 4)
        self.assertEqual(chunk.key, "4,4")
        self.assertEqual(self.manager.active_chunks, {})


class TestDiscovery(unittest.TestCase):
    def setUp(self):
        self.context = GenerationContext(42)
        self.manager = ChunkManager(self.context, DiscoveryStore(), load_radius=0)
        self.chunk = first_chunk_with_objects(self.context)

    def test_discovery_survives_eviction(self):
        self.manager.update_active_chunks(*centre_of(self.chunk.x, self.chunk.y))
        obj = next(self.manager.get_chunk(self.chunk.x, self.chunk.y).objects())
        self.manager.mark_object_discovered(obj, "Test Name")

        self.manager.update_active_chunks(*centre_of(self.chunk.x + 100, 0))
        self.manager.update_active_chunks(*centre_of(self.chunk.x, self.chunk.y))

        fresh = self.manager.resolve(obj.identity.key)
        self.assertIsNot(fresh, obj)
        self.assertTrue(fresh.discovered)
        self.assertEqual(fresh.display_name, "Test Name")

    def test_rediscovery_keeps_first_record(self):
        self.manager.update_active_chunks(*centre_of(self.chunk.x, self.chunk.y))
        obj = next(self.manager.active_objects())
        first = self.manager.mark_object_discovered(obj, "First")
        second = self.manager.mark_object_discovered(obj, "Second")
        self.assertIs(first, second)
        self.assertEqual(obj.display_name, "First")
        self.assertEqual(len(self.manager.store), 1)

    def test_discovered_queries_outlive_chunks(self):
        nebula = build_nebula(SeededRandom(3), 500.0, 500.0, NebulaType.PLANETARY)
        self.manager.inject_object(nebula)
        self.manager.mark_object_discovered(nebula, "Ring")
        self.manager.clear_all_chunks()
        self.assertEqual([r.identity for r in self.manager.get_discovered_nebulae()], [nebula.identity.key])
        self.assertEqual(self.manager.get_discovered(ObjectKind.STAR), [])

    def test_inject_restores_discovery(self):
        nebula = build_nebula(SeededRandom(3), 500.0, 500.0)
        self.manager.mark_object_discovered(nebula, "Known")
        copy = build_nebula(SeededRandom(3), 500.0, 500.0)
        chunk = self.manager.inject_object(copy)
        self.assertEqual(chunk.key, "0,0")
        self.assertIs(chunk.find(copy.identity.key), copy)
        self.assertTrue(copy.discovered)
        self.assertEqual(copy.display_name, "Known")

    def test_inject_is_idempotent(self):
        nebula = build_nebula(SeededRandom(3), 500.0, 500.0)
        self.manager.inject_object(nebula)
        self.manager.inject_object(nebula)
        chunk = self.manager.get_chunk(0, 0)
        self.assertEqual([n.identity.key for n in chunk.nebulae].count(nebula.identity.key), 1)

    def test_parent_resolution(self):
        for cx in range(200):
            chunk = generate_chunk(self.context, cx, 0)
            if chunk.planets:
                break
        else:
            self.fail("no planets found")
        self.manager.update_active_chunks(*centre_of(cx, 0))
        planet = self.manager.get_chunk(cx, 0).planets[0]
        star = self.manager.resolve(planet.parent_key)
        self.assertEqual(star.identity.key, planet.parent_key)


class TestReset(unittest.TestCase):
    def setUp(self):
        self.manager = ChunkManager(GenerationContext(42), DiscoveryStore(), load_radius=0)
        self.nebula = build_nebula(SeededRandom(3), 500.0, 500.0)
        self.manager.inject_object(self.nebula)
        self.manager.mark_object_discovered(self.nebula, "Old")

    def test_reset_preserves_history(self):
        reborn = self.manager.context.reborn()
        snapshot = self.manager.reset_universe(reborn)
        self.assertEqual([r.identity for r in snapshot], [self.nebula.identity.key])
        self.assertIs(self.manager.context, reborn)
        self.assertEqual(self.manager.active_chunks, {})
        self.assertEqual(len(self.manager.store), 0)
        self.assertEqual(len(self.manager.store.history), 1)
        self.assertFalse(self.manager.store.has(self.nebula.identity.key))

    def test_reset_without_history(self):
        snapshot = self.manager.reset_universe(GenerationContext(43), preserve_history=False)
        self.assertEqual(len(snapshot), 1)
        self.assertEqual(len(self.manager.store), 0)
        self.assertEqual(self.manager.store.history, [])

    def test_new_universe_starts_undiscovered(self):
        self.manager.reset_universe(GenerationContext(42).reborn())
        copy = build_nebula(SeededRandom(3), 500.0, 500.0)
        self.manager.inject_object(copy)
        self.assertFalse(copy.discovered)

    def test_clear_all_chunks_keeps_store(self):
        self.manager.clear_all_chunks()
        self.assertEqual(self.manager.active_chunks, {})
        self.assertTrue(self.manager.store.has(self.nebula.identity.key))
