"""Chunk manager: the active chunk set around the viewpoint.

Owns the loaded chunks exclusively. Discovery state lives in the
``DiscoveryStore`` and is re-applied to every freshly loaded chunk, so
eviction never loses anything.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..constants import LOAD_RADIUS
from . import chunks
from .bodies import CelestialObject
from .celestial import ObjectKind
from .chunks import CATEGORY_BY_KIND, Chunk, chunk_coords, chunk_key
from .discovery import DiscoveryRecord, DiscoveryStore
from .universe import GenerationContext

log = logging.getLogger(__name__)

ACTIVE_CATEGORIES = ("stars",) + tuple(CATEGORY_BY_KIND.values())


class ChunkManager:
    def __init__(
        self,
        context: GenerationContext,
        store: DiscoveryStore | None = None,
        load_radius: int = LOAD_RADIUS,
    ) -> None:
        self.context = context
        self.store = store if store is not None else DiscoveryStore()
        self.load_radius = load_radius
        self.active_chunks: dict[str, Chunk] = {}

    # ------------------------------------------------------------------
    # Chunk access
    # ------------------------------------------------------------------

    @staticmethod
    def get_chunk_coords(x: float, y: float) -> tuple[int, int]:
        return chunk_coords(x, y)

    def generate_chunk(self, cx: int, cy: int) -> Chunk:
        """Generate without touching the active set."""
        return chunks.generate_chunk(self.context, cx, cy)

    def get_chunk(self, cx: int, cy: int) -> Chunk | None:
        return self.active_chunks.get(chunk_key(cx, cy))

    def _load(self, cx: int, cy: int) -> Chunk:
        chunk = self.generate_chunk(cx, cy)
        self.restore_discovery_state(chunk.objects())
        self.active_chunks[chunk.key] = chunk
        log.info("Loaded chunk %s (%d objects)", chunk.key, sum(1 for _ in chunk.objects()))
        return chunk

    def ensure_chunk_exists(self, cx: int, cy: int) -> Chunk:
        """Load (cx, cy) regardless of the viewpoint."""
        chunk = self.get_chunk(cx, cy)
        if chunk is None:
            chunk = self._load(cx, cy)
        return chunk

    def update_active_chunks(self, x: float, y: float) -> None:
        """Load the neighbourhood of (x, y) and evict everything else.

        A ``GenerationError`` propagates and leaves that coordinate
        unloaded.
        """
        ccx, ccy = chunk_coords(x, y)
        r = self.load_radius
        required = {
            chunk_key(cx, cy): (cx, cy)
            for cx in range(ccx - r, ccx + r + 1)
            for cy in range(ccy - r, ccy + r + 1)
        }
        for key in [k for k in self.active_chunks if k not in required]:
            del self.active_chunks[key]
            log.info("Evicted chunk %s", key)
        for key, (cx, cy) in required.items():
            if key not in self.active_chunks:
                self._load(cx, cy)

    def get_all_active_objects(self) -> dict[str, list]:
        """Flat per-category lists over the current active set."""
        result: dict[str, list] = {category: [] for category in ACTIVE_CATEGORIES}
        for chunk in self.active_chunks.values():
            for category in ACTIVE_CATEGORIES:
                result[category].extend(getattr(chunk, category))
        return result

    def active_objects(self) -> Iterable[CelestialObject]:
        for chunk in self.active_chunks.values():
            yield from chunk.objects()

    def inject_object(self, obj: CelestialObject) -> Chunk:
        """Place a hand-made object into its owning chunk."""
        chunk = self.ensure_chunk_exists(*chunk_coords(obj.x, obj.y))
        if chunk.find(obj.identity.key) is None:
            self.restore_discovery_state([obj])
            chunk.add(obj)
            log.debug("Injected %s into chunk %s", obj.identity.key, chunk.key)
        return chunk

    def resolve(self, key: str) -> CelestialObject | None:
        """Look up a loaded object by identity key (e.g. a ``parent_key``)."""
        for chunk in self.active_chunks.values():
            obj = chunk.find(key)
            if obj is not None:
                return obj
        return None

    def advance(self, dt: float) -> None:
        for chunk in self.active_chunks.values():
            chunk.advance(dt)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    @staticmethod
    def get_object_id(obj: CelestialObject) -> str:
        return obj.identity.key

    def mark_object_discovered(self, obj: CelestialObject, display_name: str) -> DiscoveryRecord:
        """Record a discovery. Rediscovering returns the original record."""
        key = self.get_object_id(obj)
        record = self.store.get(key)
        if record is None:
            record = DiscoveryRecord.for_object(obj, display_name)
            self.store.put(record)
            log.info("Discovered %s %r (%s)", record.kind, display_name, key)
        obj.discovered = True
        obj.display_name = record.display_name
        return record

    def restore_discovery_state(self, objects: Iterable[CelestialObject]) -> int:
        """Re-apply stored discoveries; returns how many matched."""
        restored = 0
        for obj in objects:
            record = self.store.get(self.get_object_id(obj))
            if record is not None:
                obj.discovered = True
                obj.display_name = record.display_name
                restored += 1
        return restored

    def get_discovered(self, kind: ObjectKind) -> list[DiscoveryRecord]:
        return self.store.records_of(kind)

    def get_discovered_stars(self) -> list[DiscoveryRecord]:
        return self.get_discovered(ObjectKind.STAR)

    def get_discovered_planets(self) -> list[DiscoveryRecord]:
        return self.get_discovered(ObjectKind.PLANET)

    def get_discovered_moons(self) -> list[DiscoveryRecord]:
        return self.get_discovered(ObjectKind.MOON)

    def get_discovered_nebulae(self) -> list[DiscoveryRecord]:
        return self.get_discovered(ObjectKind.NEBULA)

    def get_discovered_wormholes(self) -> list[DiscoveryRecord]:
        return self.get_discovered(ObjectKind.WORMHOLE)

    def get_discovered_asteroid_gardens(self) -> list[DiscoveryRecord]:
        return self.get_discovered(ObjectKind.ASTEROID_GARDEN)

    def get_discovered_black_holes(self) -> list[DiscoveryRecord]:
        return self.get_discovered(ObjectKind.BLACK_HOLE)

    def get_discovered_comets(self) -> list[DiscoveryRecord]:
        return self.get_discovered(ObjectKind.COMET)

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def clear_all_chunks(self) -> None:
        """Drop every loaded chunk; the discovery store is untouched."""
        count = len(self.active_chunks)
        self.active_chunks.clear()
        log.info("Cleared %d active chunks", count)

    def reset_universe(self, context: GenerationContext, preserve_history: bool = True) -> list[DiscoveryRecord]:
        """Switch to a new universe.

        With ``preserve_history`` the current records move to the store's
        history and are returned for the UI to replay; otherwise the store
        is wiped.
        """
        if preserve_history:
            snapshot = self.store.archive()
        else:
            snapshot = self.store.all_records()
            self.store.clear()
        old_seed = self.context.seed
        self.context = context
        self.clear_all_chunks()
        log.info(
            "Universe reset: seed %d -> %d (reset #%d, %d discoveries carried)",
            old_seed, context.seed, context.reset_count, len(snapshot),
        )
        return snapshot
