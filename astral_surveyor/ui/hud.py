"""HUD overlay — seed, position, region, discoveries, gravity warning."""

from __future__ import annotations

import pygame

from ..constants import (
    AMBER,
    CYAN,
    HULL_GREEN,
    LIGHT_GREY,
    PANEL_BG,
    PANEL_BORDER,
    RED_ALERT,
    SCREEN_WIDTH,
    WHITE,
)
from ..models.regions import RegionInfo

WARNING_LABELS = {
    1: ("Gravity anomaly", AMBER),
    2: ("Strong gravity well", RED_ALERT),
    3: ("EVENT HORIZON", RED_ALERT),
}


class HUD:
    """Persistent heads-up display drawn over the universe view."""

    BAR_HEIGHT = 40
    # Left edge of each stat column
    COLUMNS = (15, 205, 455, 715)

    def __init__(self) -> None:
        self.value_font = pygame.font.Font(None, 24)
        self.label_font = pygame.font.Font(None, 20)

    def draw(
        self,
        surface: pygame.Surface,
        seed: int,
        position: tuple[float, float],
        region: RegionInfo | None,
        discoveries: int,
        warning_level: int = 0,
    ) -> None:
        backdrop = pygame.Surface((SCREEN_WIDTH, self.BAR_HEIGHT), pygame.SRCALPHA)
        backdrop.fill(PANEL_BG)
        surface.blit(backdrop, (0, 0))
        pygame.draw.line(surface, PANEL_BORDER, (0, self.BAR_HEIGHT), (SCREEN_WIDTH, self.BAR_HEIGHT))

        stats = [
            ("Seed", str(seed), CYAN),
            ("Pos", f"{position[0]:,.0f}, {position[1]:,.0f}", WHITE),
            None,
            ("Found", f"{discoveries:,}", AMBER),
        ]
        if region is not None:
            stats[2] = ("Region", region.definition.name, HULL_GREEN if region.influence > 0.5 else LIGHT_GREY)

        for left, stat in zip(self.COLUMNS, stats):
            if stat:
                self._stat(surface, left, *stat)

        if warning_level:
            text, color = WARNING_LABELS[warning_level]
            warning = self.value_font.render(text, True, color)
            surface.blit(warning, warning.get_rect(topright=(SCREEN_WIDTH - 15, 9)))

    def _stat(self, surface: pygame.Surface, left: int, label: str, value: str, color) -> None:
        caption = self.label_font.render(label, True, LIGHT_GREY)
        surface.blit(caption, (left, 12))
        surface.blit(self.value_font.render(value, True, color), (left + caption.get_width() + 8, 9))
