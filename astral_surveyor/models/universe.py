"""Universe seed context and shareable universe links."""

from __future__ import annotations

import enum
import logging
import math
import random
from dataclasses import dataclass
from urllib.parse import parse_qs, urlencode, urlsplit

from ..constants import REBIRTH_SPAWN_RADIUS, SHARE_LINK_BASE
from .rng import MODULUS, SeededRandom, derive_seed, string_seed

log = logging.getLogger(__name__)


class Stream(enum.Enum):
    """Named random streams; each salts its own sub-seed."""

    BACKGROUND = "background"
    CHUNK = "chunk"
    SYSTEM = "system"
    COMPANION = "companion"
    PLANET = "planet"
    MOON = "moon"
    COMET = "comet"
    NEBULA = "nebula"
    GARDEN = "garden"
    BLACK_HOLE = "blackhole"
    WORMHOLE_AXIS = "wormhole-axis"
    WORMHOLE = "wormhole"
    PROTOSTAR = "protostar"
    ROGUE_PLANET = "rogue-planet"
    DARK_NEBULA = "dark-nebula"
    CRYSTAL_GARDEN = "crystal-garden"
    REGION = "region"
    REBIRTH = "rebirth"
    DEBUG = "debug"


@dataclass(frozen=True)
class GenerationContext:
    """Everything generation depends on besides the coordinate.

    Replacing the universe means building a new context; nothing holds a
    global seed.
    """

    seed: int
    reset_count: int = 0

    def sub_seed(self, stream: Stream, *parts: int) -> int:
        return derive_seed(self.seed, stream.value, *parts)

    def rng(self, stream: Stream, *parts: int) -> SeededRandom:
        return SeededRandom(self.sub_seed(stream, *parts))

    def reborn(self) -> GenerationContext:
        """Context for the universe that follows a singularity collision."""
        count = self.reset_count + 1
        return GenerationContext(seed=derive_seed(self.seed, Stream.REBIRTH.value, count), reset_count=count)


# ---------------------------------------------------------------------------
# Seeds
# ---------------------------------------------------------------------------

def random_seed() -> int:
    return random.randrange(1, MODULUS)


def parse_seed(value: str | int) -> int:
    """Integers pass through; any other text is hashed to a seed."""
    if isinstance(value, int):
        return value
    text = value.strip()
    try:
        return int(text, 10)
    except ValueError:
        return string_seed(text)


def initialize_context(
    seed: str | int | None = None,
    saved_seed: int | None = None,
    reset_count: int = 0,
) -> GenerationContext:
    """Pick the startup seed: explicit, then persisted, then random."""
    if seed is not None and str(seed).strip():
        chosen = parse_seed(seed)
        log.info("Universe loaded from seed %d (explicit)", chosen)
    elif saved_seed is not None:
        chosen = saved_seed
        log.info("Universe restored from saved seed %d", chosen)
    else:
        chosen = random_seed()
        reset_count = 0
        log.info("Universe generated with seed %d", chosen)
    return GenerationContext(seed=chosen, reset_count=reset_count)


# ---------------------------------------------------------------------------
# Share links
# ---------------------------------------------------------------------------

def share_link(context: GenerationContext, x: float | None = None, y: float | None = None) -> str:
    params: dict[str, int] = {"seed": context.seed}
    if x is not None and y is not None:
        params["x"] = round(x)
        params["y"] = round(y)
    return f"{SHARE_LINK_BASE}?{urlencode(params)}"


def parse_share_link(text: str) -> tuple[int | None, tuple[float, float] | None]:
    """Read ``seed``, ``x`` and ``y`` from a link or a bare query string.

    A missing seed yields None; a malformed coordinate pair is dropped.
    """
    query = urlsplit(text).query if "?" in text else text.lstrip("?")
    params = parse_qs(query)

    seed: int | None = None
    seed_values = params.get("seed")
    if seed_values and seed_values[0].strip():
        seed = parse_seed(seed_values[0])

    position: tuple[float, float] | None = None
    if "x" in params and "y" in params:
        try:
            x = float(params["x"][0])
            y = float(params["y"][0])
        except ValueError:
            log.warning("Ignoring malformed coordinates in share link %r", text)
        else:
            if math.isfinite(x) and math.isfinite(y):
                position = (x, y)
    return seed, position


def safe_spawn_position(context: GenerationContext) -> tuple[float, float]:
    """Deterministic spawn point away from the origin for a reborn universe."""
    rng = context.rng(Stream.REBIRTH, context.reset_count)
    angle = rng.next_float(0, math.tau)
    distance = rng.next_float(*REBIRTH_SPAWN_RADIUS)
    return math.cos(angle) * distance, math.sin(angle) * distance
