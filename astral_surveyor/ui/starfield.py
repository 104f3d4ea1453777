"""Twinkling star field background — parallax layer behind the universe."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

import pygame

from ..constants import (
    NUM_PARALLAX_STARS,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    STAR_DIM,
    STAR_WHITE,
    WHITE,
)
from ..models.bodies import BackgroundStar

PARALLAX = 0.05


def _dimmed(color, factor: float) -> tuple[int, int, int]:
    c = pygame.Color(color)
    return int(c.r * factor), int(c.g * factor), int(c.b * factor)


@dataclass
class _Twinkle:
    x: float
    y: float
    size: int
    color: tuple[int, int, int]
    rate: float
    phase: float

    def brightness(self, t: float) -> float:
        return 0.5 + 0.5 * math.sin(t * self.rate + self.phase)


class StarField:
    """Animated twinkling star background.

    Purely cosmetic and screen-space, so it uses the global ``random``
    module rather than a universe stream.
    """

    def __init__(self, count: int = NUM_PARALLAX_STARS) -> None:
        self.timer = 0.0
        palette = (STAR_WHITE, STAR_DIM, WHITE)
        self.stars = [
            _Twinkle(
                x=random.uniform(0, SCREEN_WIDTH),
                y=random.uniform(0, SCREEN_HEIGHT),
                size=2 if random.random() < 0.25 else 1,
                color=random.choice(palette),
                rate=random.uniform(0.5, 2.0),
                phase=random.uniform(0, math.tau),
            )
            for _ in range(count)
        ]

    def update(self, dt: float) -> None:
        self.timer += dt

    def draw(self, surface: pygame.Surface, cam_x: float = 0.0, cam_y: float = 0.0) -> None:
        # Wrap so the layer tiles endlessly as the camera drifts
        ox, oy = cam_x * PARALLAX, cam_y * PARALLAX
        for star in self.stars:
            pos = (int((star.x - ox) % SCREEN_WIDTH), int((star.y - oy) % SCREEN_HEIGHT))
            pygame.draw.circle(surface, _dimmed(star.color, star.brightness(self.timer)), pos, star.size)


def draw_background_stars(surface: pygame.Surface, stars: list[BackgroundStar], to_screen) -> None:
    """Chunk background stars at their world positions."""
    for star in stars:
        sx, sy = to_screen(star.x, star.y)
        if 0 <= sx < SCREEN_WIDTH and 0 <= sy < SCREEN_HEIGHT:
            pygame.draw.circle(surface, _dimmed(star.color, star.brightness), (sx, sy), star.size)
