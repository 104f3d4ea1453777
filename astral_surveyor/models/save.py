"""Save / load universe state to JSON.

Uses platformdirs for cross-platform save location:
  Linux:   ~/.local/share/astral_surveyor/
  macOS:   ~/Library/Application Support/astral_surveyor/
  Windows: C:/Users/.../AppData/Local/astral_surveyor/

Each value lives under its own namespaced key (one JSON file per key):
the universe seed, the lifetime discovery records and the reset counter.
The universe itself is regenerated from the seed; only discoveries are
persisted. A missing or malformed file reads as the default.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

log = logging.getLogger(__name__)

SAVE_DIR = Path(user_data_dir("astral_surveyor"))
KEY_PREFIX = "astral_surveyor_"

SEED_KEY = "seed"
DISCOVERIES_KEY = "discoveries"
RESET_COUNT_KEY = "reset_count"
ALL_KEYS = (SEED_KEY, DISCOVERIES_KEY, RESET_COUNT_KEY)

SAVE_VERSION = 1

_READ_ERRORS = (json.JSONDecodeError, OSError, ValueError, KeyError, TypeError)


def _path(key: str, save_dir: Path | None) -> Path:
    return (save_dir or SAVE_DIR) / f"{KEY_PREFIX}{key}.json"


# ── Key-value primitives ──────────────────────────────────────────────

def read_value(key: str, default: Any = None, save_dir: Path | None = None) -> Any:
    """Stored value for ``key``, or ``default`` if absent or unreadable."""
    path = _path(key, save_dir)
    if not path.exists():
        return default
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return data["value"]
    except _READ_ERRORS as exc:
        log.warning("Ignoring unreadable save key %r at %s: %s", key, path, exc)
        return default


def write_value(key: str, value: Any, save_dir: Path | None = None) -> bool:
    """Persist ``value`` under ``key``. Returns False if the write failed."""
    path = _path(key, save_dir)
    data = {"version": SAVE_VERSION, "value": value}
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(path)
    except OSError as exc:
        log.warning("Could not write save key %r to %s: %s", key, path, exc)
        return False
    return True


def delete_value(key: str, save_dir: Path | None = None) -> None:
    path = _path(key, save_dir)
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        log.warning("Could not delete save key %r at %s: %s", key, path, exc)


# ── Typed accessors ───────────────────────────────────────────────────

def save_seed(seed: int, save_dir: Path | None = None) -> bool:
    return write_value(SEED_KEY, int(seed), save_dir)


def load_seed(save_dir: Path | None = None) -> int | None:
    value = read_value(SEED_KEY, None, save_dir)
    if isinstance(value, bool) or not isinstance(value, int):
        if value is not None:
            log.warning("Ignoring non-integer saved seed %r", value)
        return None
    return value


def save_reset_count(count: int, save_dir: Path | None = None) -> bool:
    return write_value(RESET_COUNT_KEY, int(count), save_dir)


def load_reset_count(save_dir: Path | None = None) -> int:
    value = read_value(RESET_COUNT_KEY, 0, save_dir)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        log.warning("Ignoring invalid reset counter %r", value)
        return 0
    return value


def save_discoveries(
    records: list[dict],
    history: list[dict] | None = None,
    save_dir: Path | None = None,
) -> bool:
    """Write the live discovery records plus archived history."""
    return write_value(DISCOVERIES_KEY, {"records": records, "history": history or []}, save_dir)


def load_discoveries(save_dir: Path | None = None) -> tuple[list[dict], list[dict]]:
    """(records, history) as raw dicts; empty lists on a first run."""
    value = read_value(DISCOVERIES_KEY, None, save_dir)
    if value is None:
        return [], []
    if isinstance(value, list):
        # Bare list: records without history
        return [d for d in value if isinstance(d, dict)], []
    if not isinstance(value, dict):
        log.warning("Ignoring malformed discovery save of type %s", type(value).__name__)
        return [], []
    return _record_list(value, "records"), _record_list(value, "history")


def _record_list(value: dict, field: str) -> list[dict]:
    entries = value.get(field)
    if entries is None:
        return []
    if not isinstance(entries, list):
        log.warning("Ignoring malformed discovery %s of type %s", field, type(entries).__name__)
        return []
    return [d for d in entries if isinstance(d, dict)]


# ── Top-level API ─────────────────────────────────────────────────────

def has_save(save_dir: Path | None = None) -> bool:
    """Check if a saved universe exists."""
    return _path(SEED_KEY, save_dir).exists()


def delete_save(save_dir: Path | None = None) -> None:
    """Remove every saved key."""
    for key in ALL_KEYS:
        delete_value(key, save_dir)
