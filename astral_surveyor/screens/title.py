"""Title screen: pick which universe to explore."""

from __future__ import annotations

import enum
from pathlib import Path

import pygame

from ..constants import (
    AMBER,
    CYAN,
    GAME_SUBTITLE,
    GAME_TITLE,
    GAME_VERSION,
    LIGHT_GREY,
    PANEL_BORDER,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WHITE,
)
from ..models import save
from ..states import GameState

MAX_SEED_LENGTH = 32


class MenuAction(enum.Enum):
    CONTINUE = "continue"
    SHARED = "shared"
    NEW = "new"
    ENTER_SEED = "enter_seed"
    QUIT = "quit"


class TitleScreen:
    """Fades in the logo, then offers saved, shared, random or typed seeds."""

    def __init__(self, shared_seed: str | int | None = None, save_dir: Path | None = None) -> None:
        self.font_large = pygame.font.Font(None, 96)
        self.font_medium = pygame.font.Font(None, 40)
        self.font_menu = pygame.font.Font(None, 36)
        self.font_version = pygame.font.Font(None, 22)
        self.timer = 0.0
        self.fade = 0.0  # 0..2: title, then subtitle
        self.next_state: GameState | None = None

        # Outcome read by the game once next_state is set
        self.action: MenuAction | None = None
        self.typed_seed = ""
        self.entering_seed = False

        self.saved_seed = save.load_seed(save_dir)
        self.menu = self._build_menu(shared_seed)
        self.selected = 0

    def _build_menu(self, shared_seed: str | int | None) -> list[tuple[str, MenuAction]]:
        menu = []
        if shared_seed is not None:
            menu.append((f"Explore Shared Universe ({shared_seed})", MenuAction.SHARED))
        if self.saved_seed is not None:
            menu.append((f"Continue (seed {self.saved_seed})", MenuAction.CONTINUE))
        menu += [
            ("New Random Universe", MenuAction.NEW),
            ("Enter Seed...", MenuAction.ENTER_SEED),
            ("Quit", MenuAction.QUIT),
        ]
        return menu

    @property
    def ready(self) -> bool:
        return self.fade >= 2.0

    @property
    def quit_requested(self) -> bool:
        return self.action == MenuAction.QUIT

    def handle_events(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN or not self.ready:
            return
        if self.entering_seed:
            self._edit_seed(event)
            return
        if event.key in (pygame.K_UP, pygame.K_w):
            self.selected = (self.selected - 1) % len(self.menu)
        elif event.key in (pygame.K_DOWN, pygame.K_s):
            self.selected = (self.selected + 1) % len(self.menu)
        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
            _, action = self.menu[self.selected]
            if action == MenuAction.ENTER_SEED:
                self.entering_seed = True
                self.typed_seed = ""
                return
            self._choose(action)

    def _edit_seed(self, event: pygame.event.Event) -> None:
        if event.key == pygame.K_RETURN:
            if self.typed_seed.strip():
                self._choose(MenuAction.ENTER_SEED)
        elif event.key == pygame.K_BACKSPACE:
            self.typed_seed = self.typed_seed[:-1]
        elif event.key == pygame.K_TAB:
            self.entering_seed = False
        elif event.unicode and event.unicode.isprintable() and len(self.typed_seed) < MAX_SEED_LENGTH:
            self.typed_seed += event.unicode

    def _choose(self, action: MenuAction) -> None:
        self.action = action
        if action != MenuAction.QUIT:
            self.next_state = GameState.UNIVERSE

    def update(self, dt: float) -> None:
        self.timer += dt
        self.fade = min(2.0, self.fade + dt * 0.55)

    def draw(self, surface: pygame.Surface) -> None:
        title_alpha = int(255 * min(1.0, self.fade))
        subtitle_alpha = int(255 * max(0.0, self.fade - 1.0))

        title = self.font_large.render(GAME_TITLE, True, AMBER)
        title.set_alpha(title_alpha)
        surface.blit(title, title.get_rect(center=(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 3)))

        subtitle = self.font_medium.render(GAME_SUBTITLE, True, CYAN)
        subtitle.set_alpha(subtitle_alpha)
        surface.blit(subtitle, subtitle.get_rect(center=(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 3 + 70)))

        if self.ready:
            if self.entering_seed:
                self._draw_seed_entry(surface)
            else:
                self._draw_menu(surface)

        version = self.font_version.render(f"v{GAME_VERSION}", True, LIGHT_GREY)
        version.set_alpha(120)
        surface.blit(version, (SCREEN_WIDTH - version.get_width() - 10, SCREEN_HEIGHT - 24))

    def _draw_menu(self, surface: pygame.Surface) -> None:
        top = SCREEN_HEIGHT // 2 + 20
        for i, (label, _) in enumerate(self.menu):
            chosen = i == self.selected
            text = self.font_menu.render(("▸ " if chosen else "  ") + label, True, AMBER if chosen else LIGHT_GREY)
            surface.blit(text, text.get_rect(center=(SCREEN_WIDTH // 2, top + i * 45)))

    def _draw_seed_entry(self, surface: pygame.Surface) -> None:
        box = pygame.Rect(0, 0, 520, 56)
        box.center = (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 + 60)
        pygame.draw.rect(surface, PANEL_BORDER, box, 2, border_radius=6)
        caret = "_" if int(self.timer * 2) % 2 == 0 else " "
        text = self.font_menu.render(self.typed_seed + caret, True, WHITE)
        surface.blit(text, text.get_rect(midleft=(box.left + 14, box.centery)))

        hint = self.font_version.render("Any number or word. ENTER to explore, TAB to go back.", True, LIGHT_GREY)
        surface.blit(hint, hint.get_rect(center=(SCREEN_WIDTH // 2, box.bottom + 24)))
