"""Linked wormhole pairs.

Chunks group into square wormhole regions. Regions pair up inside
super-blocks: a region's partner lies ``WORMHOLE_PAIR_SPAN`` regions away
along an axis chosen per super-block, wrapping inside the block, so the
pairing is its own inverse. Only the alpha region of a pair rolls; its
stream also places both endpoints, which lets the beta chunk rebuild the
same plan without any shared state.
"""

from __future__ import annotations

import functools
import logging
import math
from dataclasses import dataclass

from ..constants import (
    CHUNK_SIZE,
    WORMHOLE_DISCOVERY_PADDING,
    WORMHOLE_MARGIN,
    WORMHOLE_PAIR_CHANCE,
    WORMHOLE_PAIR_SPAN,
    WORMHOLE_RADIUS,
    WORMHOLE_REGION_CHUNKS,
)
from .bodies import Wormhole
from .celestial import ObjectIdentity, ObjectKind
from .regions import region_at
from .universe import GenerationContext, Stream

log = logging.getLogger(__name__)

_BLOCK = WORMHOLE_PAIR_SPAN * 2


@dataclass(frozen=True)
class WormholePlan:
    wormhole_id: str
    alpha_chunk: tuple[int, int]
    beta_chunk: tuple[int, int]
    alpha_position: tuple[float, float]
    beta_position: tuple[float, float]
    alpha_radius: float
    beta_radius: float


def region_of_chunk(cx: int, cy: int) -> tuple[int, int]:
    return cx // WORMHOLE_REGION_CHUNKS, cy // WORMHOLE_REGION_CHUNKS


def _axis(context: GenerationContext, bx: int, by: int) -> str:
    return "x" if context.rng(Stream.WORMHOLE_AXIS, bx, by).chance(0.5) else "y"


def partner_region(context: GenerationContext, rx: int, ry: int) -> tuple[tuple[int, int], bool]:
    """The paired region and whether (rx, ry) is the alpha side."""
    bx, by = rx // _BLOCK, ry // _BLOCK
    lx, ly = rx - bx * _BLOCK, ry - by * _BLOCK
    if _axis(context, bx, by) == "x":
        partner = (bx * _BLOCK + (lx + WORMHOLE_PAIR_SPAN) % _BLOCK, ry)
        is_alpha = lx < WORMHOLE_PAIR_SPAN
    else:
        partner = (rx, by * _BLOCK + (ly + WORMHOLE_PAIR_SPAN) % _BLOCK)
        is_alpha = ly < WORMHOLE_PAIR_SPAN
    return partner, is_alpha


def _place(rng, rx: int, ry: int) -> tuple[tuple[int, int], tuple[float, float]]:
    cx = rx * WORMHOLE_REGION_CHUNKS + rng.next_int(0, WORMHOLE_REGION_CHUNKS)
    cy = ry * WORMHOLE_REGION_CHUNKS + rng.next_int(0, WORMHOLE_REGION_CHUNKS)
    x = cx * CHUNK_SIZE + rng.next_float(WORMHOLE_MARGIN, CHUNK_SIZE - WORMHOLE_MARGIN)
    y = cy * CHUNK_SIZE + rng.next_float(WORMHOLE_MARGIN, CHUNK_SIZE - WORMHOLE_MARGIN)
    return (cx, cy), (x, y)


@functools.lru_cache(maxsize=1024)
def pair_plan(context: GenerationContext, rx: int, ry: int) -> WormholePlan | None:
    """The pair touching wormhole region (rx, ry), if its alpha rolled one."""
    partner, is_alpha = partner_region(context, rx, ry)
    alpha_region, beta_region = ((rx, ry), partner) if is_alpha else (partner, (rx, ry))

    rng = context.rng(Stream.WORMHOLE, *alpha_region)
    span = WORMHOLE_REGION_CHUNKS * CHUNK_SIZE
    region = region_at(
        context,
        alpha_region[0] * span + span / 2,
        alpha_region[1] * span + span / 2,
    )
    if not rng.chance(WORMHOLE_PAIR_CHANCE * region.modifier("wormholes")):
        return None

    wormhole_id = f"WH-{rng.next_int(0, 10000):04d}"
    alpha_chunk, alpha_position = _place(rng, *alpha_region)
    beta_chunk, beta_position = _place(rng, *beta_region)
    return WormholePlan(
        wormhole_id=wormhole_id,
        alpha_chunk=alpha_chunk,
        beta_chunk=beta_chunk,
        alpha_position=alpha_position,
        beta_position=beta_position,
        alpha_radius=rng.next_float(*WORMHOLE_RADIUS),
        beta_radius=rng.next_float(*WORMHOLE_RADIUS),
    )


def build_endpoint(
    wormhole_id: str,
    designation: str,
    position: tuple[float, float],
    twin_position: tuple[float, float],
    radius: float,
) -> Wormhole:
    x, y = position
    return Wormhole(
        identity=ObjectIdentity.at(ObjectKind.WORMHOLE, x, y, designation=designation),
        x=x,
        y=y,
        designation=designation,
        wormhole_id=wormhole_id,
        twin_x=twin_position[0],
        twin_y=twin_position[1],
        radius=radius,
        discovery_distance=radius + WORMHOLE_DISCOVERY_PADDING,
    )


def build_pair(
    wormhole_id: str,
    alpha_position: tuple[float, float],
    beta_position: tuple[float, float],
    alpha_radius: float,
    beta_radius: float,
) -> tuple[Wormhole, Wormhole]:
    return (
        build_endpoint(wormhole_id, "alpha", alpha_position, beta_position, alpha_radius),
        build_endpoint(wormhole_id, "beta", beta_position, alpha_position, beta_radius),
    )


def wormholes_for_chunk(context: GenerationContext, cx: int, cy: int) -> list[Wormhole]:
    """Endpoints owned by chunk (cx, cy); empty for almost every chunk."""
    plan = pair_plan(context, *region_of_chunk(cx, cy))
    if plan is None:
        return []
    found: list[Wormhole] = []
    if plan.alpha_chunk == (cx, cy):
        found.append(build_endpoint(
            plan.wormhole_id, "alpha", plan.alpha_position, plan.beta_position, plan.alpha_radius,
        ))
    if plan.beta_chunk == (cx, cy):
        found.append(build_endpoint(
            plan.wormhole_id, "beta", plan.beta_position, plan.alpha_position, plan.beta_radius,
        ))
    if found:
        log.debug(
            "Wormhole %s endpoint(s) %s in chunk (%d, %d), %.0f units apart",
            plan.wormhole_id, [w.designation for w in found], cx, cy,
            math.dist(plan.alpha_position, plan.beta_position),
        )
    return found
