"""Discovery records and the store that outlives every chunk.

The store is the only source of truth for "was this ever discovered".
It is keyed by identity key, tolerates lookups for unknown identities,
and persists fire-and-forget: a failed write is logged, never raised.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import save
from .bodies import CelestialObject, Comet, kind_of, subtype_of
from .celestial import ObjectKind

log = logging.getLogger(__name__)


@dataclass
class DiscoveryRecord:
    identity: str
    kind: str
    x: float
    y: float
    display_name: str
    timestamp: float
    subtype: str = ""
    discovered: bool = True
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_object(cls, obj: CelestialObject, display_name: str, timestamp: float | None = None) -> DiscoveryRecord:
        details: dict[str, Any] = {}
        parent_key = getattr(obj, "parent_key", None)
        if parent_key:
            details["parent"] = parent_key
        if hasattr(obj, "twin_x"):
            details["wormhole_id"] = obj.wormhole_id
            details["twin"] = [obj.twin_x, obj.twin_y]
        return cls(
            identity=obj.identity.key,
            kind=kind_of(obj).value,
            x=obj.x,
            y=obj.y,
            display_name=display_name,
            timestamp=time.time() if timestamp is None else timestamp,
            subtype=subtype_of(obj),
            details=details,
        )

    def to_dict(self) -> dict:
        return {
            "identity": self.identity,
            "kind": self.kind,
            "x": self.x,
            "y": self.y,
            "display_name": self.display_name,
            "timestamp": self.timestamp,
            "subtype": self.subtype,
            "discovered": self.discovered,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, d: dict) -> DiscoveryRecord:
        return cls(
            identity=str(d["identity"]),
            kind=str(d["kind"]),
            x=float(d.get("x", 0.0)),
            y=float(d.get("y", 0.0)),
            display_name=str(d.get("display_name", "")),
            timestamp=float(d.get("timestamp", 0.0)),
            subtype=str(d.get("subtype", "")),
            discovered=bool(d.get("discovered", True)),
            details=dict(d.get("details") or {}),
        )


def _parse_records(raw: list[dict]) -> list[DiscoveryRecord]:
    records = []
    for d in raw:
        try:
            records.append(DiscoveryRecord.from_dict(d))
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Skipping malformed discovery record %r: %s", d, exc)
    return records


class DiscoveryStore:
    """Identity-keyed discovery records for the current universe.

    ``history`` holds records archived from earlier universes; it is
    written alongside the live records but never answers ``has``.
    """

    def __init__(self, save_dir: Path | None = None, autosave: bool = False) -> None:
        self.save_dir = save_dir
        self.autosave = autosave
        self._records: dict[str, DiscoveryRecord] = {}
        self.history: list[DiscoveryRecord] = []

    @classmethod
    def load(cls, save_dir: Path | None = None, autosave: bool = True) -> DiscoveryStore:
        """Store primed from disk; an absent or broken save yields an empty one."""
        store = cls(save_dir=save_dir, autosave=autosave)
        raw_records, raw_history = save.load_discoveries(save_dir)
        for record in _parse_records(raw_records):
            store._records[record.identity] = record
        store.history = _parse_records(raw_history)
        log.info("Loaded %d discoveries (%d archived)", len(store._records), len(store.history))
        return store

    # -- Queries -----------------------------------------------------------

    def has(self, identity: str) -> bool:
        return identity in self._records

    def get(self, identity: str) -> DiscoveryRecord | None:
        return self._records.get(identity)

    def all_records(self) -> list[DiscoveryRecord]:
        """Records in discovery order."""
        return list(self._records.values())

    def records_of(self, kind: ObjectKind) -> list[DiscoveryRecord]:
        return [r for r in self._records.values() if r.kind == kind.value]

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identity: object) -> bool:
        return identity in self._records

    # -- Mutation ----------------------------------------------------------

    def put(self, record: DiscoveryRecord) -> None:
        """Add a record; an identity already present keeps its first record."""
        if record.identity in self._records:
            return
        self._records[record.identity] = record
        if self.autosave:
            self.flush()

    def clear(self) -> None:
        """Forget everything, archived history included."""
        self._records.clear()
        self.history.clear()
        if self.autosave:
            self.flush()

    def archive(self) -> list[DiscoveryRecord]:
        """Move live records into ``history``; return what was moved."""
        snapshot = list(self._records.values())
        self.history.extend(snapshot)
        self._records.clear()
        if self.autosave:
            self.flush()
        log.info("Archived %d discoveries (%d in history)", len(snapshot), len(self.history))
        return snapshot

    def flush(self) -> bool:
        """Write to durable storage; failures are logged and reported."""
        return save.save_discoveries(
            [r.to_dict() for r in self._records.values()],
            [r.to_dict() for r in self.history],
            self.save_dir,
        )

    def to_dict(self) -> dict:
        return {
            "records": [r.to_dict() for r in self._records.values()],
            "history": [r.to_dict() for r in self.history],
        }

    @classmethod
    def from_dict(cls, d: dict, save_dir: Path | None = None, autosave: bool = False) -> DiscoveryStore:
        store = cls(save_dir=save_dir, autosave=autosave)
        for record in _parse_records(d.get("records") or []):
            store._records[record.identity] = record
        store.history = _parse_records(d.get("history") or [])
        return store


def find_discoverable(objects: Iterable[CelestialObject], x: float, y: float) -> list[CelestialObject]:
    """Undiscovered objects whose discovery distance covers (x, y).

    Comets only count while their tail is visible.
    """
    found = []
    for obj in objects:
        if obj.discovered:
            continue
        if isinstance(obj, Comet) and not obj.is_visible:
            continue
        if math.hypot(obj.x - x, obj.y - y) <= obj.discovery_distance:
            found.append(obj)
    return found
