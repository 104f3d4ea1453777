"""Seed inspector screen — preview what a seed generates nearby."""

from __future__ import annotations

import pygame

from ..constants import (
    AMBER,
    CYAN,
    LIGHT_GREY,
    PANEL_BORDER,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WHITE,
)
from ..models.debug import RegionAnalysis, SeedInspector
from ..models.universe import random_seed
from ..states import GameState

MAX_RADIUS = 4


class SeedInspectorScreen:
    """Runs ``SeedInspector`` off to the side of the live universe."""

    def __init__(self, seed: int, center: tuple[int, int]) -> None:
        self.font_title = pygame.font.Font(None, 40)
        self.font_info = pygame.font.Font(None, 24)
        self.inspector = SeedInspector()
        self.seed = seed
        self.center = center
        self.radius = 1
        self.next_state: GameState | None = None
        self.analysis: RegionAnalysis = self._analyse()

    def _analyse(self) -> RegionAnalysis:
        return self.inspector.analyze_region(self.seed, self.center[0], self.center[1], self.radius)

    def handle_events(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.radius = min(MAX_RADIUS, self.radius + 1)
            self.analysis = self._analyse()
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.radius = max(0, self.radius - 1)
            self.analysis = self._analyse()
        elif event.key == pygame.K_n:
            self.seed = random_seed()
            self.analysis = self._analyse()
        elif event.key in (pygame.K_i, pygame.K_RETURN):
            self.next_state = GameState.UNIVERSE

    def update(self, dt: float) -> None:
        pass

    def draw(self, surface: pygame.Surface) -> None:
        title = self.font_title.render("SEED INSPECTOR", True, AMBER)
        surface.blit(title, (SCREEN_WIDTH // 2 - title.get_width() // 2, 40))

        y = 100
        for i, line in enumerate(self.analysis.summary()):
            color = CYAN if i == 0 else WHITE if line.startswith("  ") else LIGHT_GREY
            surf = self.font_info.render(line, True, color)
            surface.blit(surf, (80, y))
            y += 26

        # Star type histogram
        y += 10
        pygame.draw.line(surface, PANEL_BORDER, (80, y), (SCREEN_WIDTH - 80, y))
        y += 12
        total = sum(self.analysis.star_types.values()) or 1
        for star_type, count in sorted(self.analysis.star_types.items(), key=lambda kv: -kv[1]):
            label = self.font_info.render(f"{star_type:<12} {count}", True, LIGHT_GREY)
            surface.blit(label, (80, y))
            pygame.draw.rect(surface, AMBER, (260, y + 4, int(400 * count / total), 12))
            y += 22

        hint = self.font_info.render("+/- radius   N random seed   I or ENTER back", True, LIGHT_GREY)
        surface.blit(hint, (10, SCREEN_HEIGHT - 25))
