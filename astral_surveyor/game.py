"""Astral Surveyor — main game module (state router)."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pygame

from .constants import (
    CYAN,
    DARK_GREY,
    FPS,
    LIGHT_GREY,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TITLE,
    WHITE,
)
from .log_setup import setup_logging
from .models import save
from .models.discovery import DiscoveryStore
from .models.universe import (
    GenerationContext,
    initialize_context,
    parse_share_link,
    safe_spawn_position,
)
from .models.world import ChunkManager
from .screens.seed_inspector import SeedInspectorScreen
from .screens.title import MenuAction, TitleScreen
from .screens.universe_view import UniverseView
from .states import GameState
from .ui.hud import HUD
from .ui.starfield import StarField

log = logging.getLogger(__name__)

REBIRTH_OVERLAY_TIME = 4.0


class Game:
    """Core game class — routes state to screen objects."""

    def __init__(self, options: argparse.Namespace) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.running = True
        self.state = GameState.TITLE

        # Shared components
        self.starfield = StarField()
        self.hud = HUD()

        # Startup seed and position from the command line or a share link
        self.save_dir: Path | None = options.save_dir
        self.explicit_seed: str | int | None = options.seed
        self.start_position = (0.0, 0.0)
        if options.link:
            link_seed, link_position = parse_share_link(options.link)
            if self.explicit_seed is None:
                self.explicit_seed = link_seed
            if link_position is not None:
                self.start_position = link_position
        if options.x is not None and options.y is not None:
            self.start_position = (options.x, options.y)

        self.store = DiscoveryStore.load(self.save_dir)
        self.manager: ChunkManager | None = None

        # Screens
        self.title_screen = TitleScreen(self.explicit_seed, self.save_dir)
        self.universe_view: UniverseView | None = None
        self.inspector_screen: SeedInspectorScreen | None = None

        # Rebirth overlay state
        self._rebirth_timer = 0.0
        self._rebirth_archived = 0

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(FPS) / 1000.0
            self._handle_events()
            self._update(dt)
            self._draw()

        self.store.flush()
        pygame.quit()
        sys.exit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._handle_escape()
                continue

            # Route to active screen
            if self.state == GameState.TITLE:
                self.title_screen.handle_events(event)
            elif self.state == GameState.UNIVERSE and self.universe_view:
                self.universe_view.handle_events(event)
            elif self.state == GameState.SEED_INSPECTOR and self.inspector_screen:
                self.inspector_screen.handle_events(event)

    def _handle_escape(self) -> None:
        """Navigate back through screens, or quit from title."""
        if self.state == GameState.TITLE:
            self.running = False
        elif self.state == GameState.UNIVERSE:
            self.store.flush()
            self.state = GameState.TITLE
            self.title_screen = TitleScreen(self.explicit_seed, self.save_dir)
        elif self.state == GameState.SEED_INSPECTOR:
            self.state = GameState.UNIVERSE

    def _update(self, dt: float) -> None:
        self.starfield.update(dt)

        if self.state == GameState.TITLE:
            self.title_screen.update(dt)
            if self.title_screen.quit_requested:
                self.running = False
            elif self.title_screen.next_state:
                self._start_universe(self.title_screen.action, self.title_screen.typed_seed)
                self.state = self.title_screen.next_state
                self.title_screen.next_state = None

        elif self.state == GameState.UNIVERSE and self.universe_view:
            if self._rebirth_timer > 0:
                self._rebirth_timer = max(0.0, self._rebirth_timer - dt)
                return

            self.universe_view.update(dt)
            if self.universe_view.rebirth_requested:
                self._rebirth()
            elif self.universe_view.next_state == GameState.SEED_INSPECTOR:
                view = self.universe_view
                self.inspector_screen = SeedInspectorScreen(
                    view.manager.context.seed,
                    view.manager.get_chunk_coords(view.x, view.y),
                )
                self.state = GameState.SEED_INSPECTOR
                view.next_state = None

        elif self.state == GameState.SEED_INSPECTOR and self.inspector_screen:
            self.inspector_screen.update(dt)
            if self.inspector_screen.next_state:
                self.state = self.inspector_screen.next_state
                self.inspector_screen = None

    def _draw(self) -> None:
        self.screen.fill(DARK_GREY)
        view = self.universe_view

        if self.state == GameState.TITLE:
            self.starfield.draw(self.screen)
            self.title_screen.draw(self.screen)
        elif self.state == GameState.UNIVERSE and view:
            self.starfield.draw(self.screen, view.x, view.y)
            view.draw(self.screen)
            self.hud.draw(
                self.screen,
                view.manager.context.seed,
                (view.x, view.y),
                view.region,
                len(self.store),
                view.warning_level,
            )
            if self._rebirth_timer > 0:
                self._draw_rebirth_overlay()
        elif self.state == GameState.SEED_INSPECTOR and self.inspector_screen:
            self.starfield.draw(self.screen)
            self.inspector_screen.draw(self.screen)

        pygame.display.flip()

    # ------------------------------------------------------------------
    # Universe lifecycle
    # ------------------------------------------------------------------

    def _start_universe(self, action: MenuAction, typed_seed: str = "") -> None:
        """Build the context for the menu choice and open the universe view.

        Any choice other than continuing the saved universe archives the
        current logbook first.
        """
        saved_seed = save.load_seed(self.save_dir)
        position = (0.0, 0.0)
        if action == MenuAction.CONTINUE:
            context = initialize_context(None, saved_seed, save.load_reset_count(self.save_dir))
        elif action == MenuAction.SHARED:
            context = initialize_context(self.explicit_seed)
            position = self.start_position
        elif action == MenuAction.ENTER_SEED:
            context = initialize_context(typed_seed)
        else:
            context = initialize_context()

        if context.seed != saved_seed and len(self.store):
            self.store.archive()
        self._persist_context(context)
        self.manager = ChunkManager(context, self.store)
        self.universe_view = UniverseView(self.manager, *position)

    def _persist_context(self, context: GenerationContext) -> None:
        save.save_seed(context.seed, self.save_dir)
        save.save_reset_count(context.reset_count, self.save_dir)

    def _rebirth(self) -> None:
        """Singularity collision: carry the logbook into a new universe."""
        manager = self.manager
        reborn = manager.context.reborn()
        archived = manager.reset_universe(reborn, preserve_history=True)
        self._persist_context(reborn)
        self.universe_view.reset_position(*safe_spawn_position(reborn))
        self._rebirth_archived = len(archived)
        self._rebirth_timer = REBIRTH_OVERLAY_TIME
        log.info("Universe reborn with seed %d after %d resets", reborn.seed, reborn.reset_count)

    def _draw_rebirth_overlay(self) -> None:
        """Fade to white while the new universe takes shape."""
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        alpha = int(220 * min(1.0, self._rebirth_timer / REBIRTH_OVERLAY_TIME * 1.5))
        overlay.fill((240, 240, 255, alpha))
        self.screen.blit(overlay, (0, 0))

        font_big = pygame.font.Font(None, 56)
        font_small = pygame.font.Font(None, 26)
        title = font_big.render("A NEW UNIVERSE", True, CYAN)
        self.screen.blit(title, ((SCREEN_WIDTH - title.get_width()) // 2, 220))
        body = font_small.render(
            f"{self._rebirth_archived:,} discoveries preserved in the logbook archive", True, DARK_GREY,
        )
        self.screen.blit(body, ((SCREEN_WIDTH - body.get_width()) // 2, 290))
        seed = font_small.render(f"Seed {self.manager.context.seed}", True, LIGHT_GREY if alpha < 120 else WHITE)
        self.screen.blit(seed, ((SCREEN_WIDTH - seed.get_width()) // 2, 320))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="astral-surveyor", description="Explore a procedurally generated universe.")
    parser.add_argument("--seed", help="universe seed (integer or any word)")
    parser.add_argument("--x", type=float, help="starting world x")
    parser.add_argument("--y", type=float, help="starting world y")
    parser.add_argument("--link", help="share link, e.g. astral://universe?seed=42&x=0&y=0")
    parser.add_argument("--log-level", default="INFO", help="logging level (default: INFO)")
    parser.add_argument("--log-file", type=Path, help="also write logs to this file")
    parser.add_argument("--save-dir", type=Path, help="override the per-user data directory")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the astral-surveyor command."""
    options = build_parser().parse_args(argv)
    setup_logging(options.log_level, options.log_file)
    game = Game(options)
    game.run()


if __name__ == "__main__":
    main()
