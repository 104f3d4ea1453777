"""Universe view — fly through the chunked universe and survey objects."""

from __future__ import annotations

import logging
import math

import pygame

from ..constants import (
    AMBER,
    BLACK,
    CAMERA_BOOST,
    CAMERA_SPEED,
    CYAN,
    DISCOVERY_VALUES,
    LIGHT_GREY,
    MAX_ZOOM,
    MIN_ZOOM,
    PANEL_BG,
    PANEL_BORDER,
    RED_ALERT,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WHITE,
    WORMHOLE_EXIT_OFFSET,
)
from ..models.bodies import (
    AsteroidGarden,
    BlackHole,
    CelestialObject,
    Comet,
    CrystalGarden,
    DarkNebula,
    Nebula,
    Protostar,
    Wormhole,
    subtype_of,
)
from ..models.debug import DEBUG_BLACK_HOLE_OFFSET, DebugSpawner
from ..models.discovery import find_discoverable
from ..models.naming import name_for
from ..models.regions import RegionInfo, region_at
from ..models.universe import share_link
from ..models.world import ChunkManager
from ..states import GameState
from ..ui.starfield import draw_background_stars

log = logging.getLogger(__name__)

NOTIFICATION_TIME = 4.0
WORMHOLE_COOLDOWN = 2.0


class UniverseView:
    """Free-flight view with keyboard movement, zoom and a logbook panel."""

    def __init__(self, manager: ChunkManager, x: float = 0.0, y: float = 0.0) -> None:
        self.manager = manager
        self.spawner = DebugSpawner(manager)
        self.font_name = pygame.font.Font(None, 28)
        self.font_info = pygame.font.Font(None, 22)

        # Viewpoint
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        self.zoom = 0.5

        # Interaction
        self.hovered: CelestialObject | None = None
        self.next_state: GameState | None = None
        self.rebirth_requested = False
        self.show_logbook = False
        self.region: RegionInfo | None = None
        self.warning_level = 0
        self.notifications: list[list] = []  # [text, seconds left]

        self._keys_held: set[int] = set()
        self._wormhole_cooldown = 0.0

        self.manager.update_active_chunks(self.x, self.y)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_events(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            self._keys_held.add(event.key)
            if event.key == pygame.K_l:
                self.show_logbook = not self.show_logbook
            elif event.key == pygame.K_i:
                self.next_state = GameState.SEED_INSPECTOR
            elif event.key == pygame.K_F5:
                link = share_link(self.manager.context, self.x, self.y)
                log.info("Share link: %s", link)
                self.notify(link)
            elif event.key == pygame.K_F2:
                self._report(self.spawner.spawn("star", None, self.x + 600, self.y))
            elif event.key == pygame.K_F3:
                self._report(self.spawner.spawn_wormhole_pair(self.x, self.y))
            elif event.key == pygame.K_F4:
                self._report(self.spawner.spawn("blackhole", None, self.x + DEBUG_BLACK_HOLE_OFFSET, self.y))
        elif event.type == pygame.KEYUP:
            self._keys_held.discard(event.key)
        elif event.type == pygame.MOUSEWHEEL:
            factor = 1.15 if event.y > 0 else 1 / 1.15
            self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, self.zoom * factor))

    def notify(self, text: str) -> None:
        self.notifications.append([text, NOTIFICATION_TIME])
        del self.notifications[:-5]

    def _report(self, result) -> None:
        self.notify(result.message if result.ok else f"Spawn failed: {result.message}")

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        self._move(dt)
        self.manager.update_active_chunks(self.x, self.y)
        self.manager.advance(dt)
        self.region = region_at(self.manager.context, self.x, self.y)

        self._apply_gravity(dt)
        self._scan()
        self._check_wormholes(dt)

        for note in self.notifications:
            note[1] -= dt
        self.notifications = [n for n in self.notifications if n[1] > 0]

        mx, my = pygame.mouse.get_pos()
        self.hovered = self._object_at_screen_pos(mx, my)

    def _move(self, dt: float) -> None:
        speed = CAMERA_SPEED / max(self.zoom, 0.25)
        if pygame.K_LSHIFT in self._keys_held or pygame.K_RSHIFT in self._keys_held:
            speed *= CAMERA_BOOST
        dx = dy = 0.0
        if pygame.K_w in self._keys_held or pygame.K_UP in self._keys_held:
            dy -= 1
        if pygame.K_s in self._keys_held or pygame.K_DOWN in self._keys_held:
            dy += 1
        if pygame.K_a in self._keys_held or pygame.K_LEFT in self._keys_held:
            dx -= 1
        if pygame.K_d in self._keys_held or pygame.K_RIGHT in self._keys_held:
            dx += 1
        self.x += (dx * speed + self.vx) * dt
        self.y += (dy * speed + self.vy) * dt

    def _apply_gravity(self, dt: float) -> None:
        self.warning_level = 0
        for black_hole in self.manager.get_all_active_objects()["black_holes"]:
            ax, ay = black_hole.gravity_pull(self.x, self.y)
            self.vx += ax * dt
            self.vy += ay * dt
            self.warning_level = max(self.warning_level, black_hole.warning_level(self.x, self.y))
            if black_hole.touches_singularity(self.x, self.y):
                log.info("Singularity reached at (%.0f, %.0f)", self.x, self.y)
                self.rebirth_requested = True
        if self.warning_level == 0:
            # Drift decays once clear of every gravity well
            self.vx *= max(0.0, 1 - dt)
            self.vy *= max(0.0, 1 - dt)

    def _scan(self) -> None:
        for obj in find_discoverable(self.manager.active_objects(), self.x, self.y):
            record = self.manager.mark_object_discovered(obj, name_for(obj, self.manager.resolve))
            self.notify(f"Discovered {record.display_name} (+{DISCOVERY_VALUES.get(record.kind, 0)})")

    def _check_wormholes(self, dt: float) -> None:
        self._wormhole_cooldown = max(0.0, self._wormhole_cooldown - dt)
        if self._wormhole_cooldown:
            return
        for wormhole in self.manager.get_all_active_objects()["wormholes"]:
            if math.hypot(wormhole.x - self.x, wormhole.y - self.y) <= wormhole.radius:
                angle = math.atan2(self.y - wormhole.y, self.x - wormhole.x)
                self.x = wormhole.twin_x + math.cos(angle) * WORMHOLE_EXIT_OFFSET
                self.y = wormhole.twin_y + math.sin(angle) * WORMHOLE_EXIT_OFFSET
                self._wormhole_cooldown = WORMHOLE_COOLDOWN
                log.info("Traversed %s to (%.0f, %.0f)", wormhole.pair_id, self.x, self.y)
                self.notify(f"Traversed {wormhole.pair_id}")
                self.manager.update_active_chunks(self.x, self.y)
                return

    def reset_position(self, x: float, y: float) -> None:
        self.x, self.y = x, y
        self.vx = self.vy = 0.0
        self.rebirth_requested = False
        self.manager.update_active_chunks(self.x, self.y)

    # ------------------------------------------------------------------
    # Coordinate conversion
    # ------------------------------------------------------------------

    def _world_to_screen(self, wx: float, wy: float) -> tuple[int, int]:
        sx = int((wx - self.x) * self.zoom + SCREEN_WIDTH / 2)
        sy = int((wy - self.y) * self.zoom + SCREEN_HEIGHT / 2)
        return sx, sy

    def _screen_to_world(self, sx: int, sy: int) -> tuple[float, float]:
        wx = (sx - SCREEN_WIDTH / 2) / self.zoom + self.x
        wy = (sy - SCREEN_HEIGHT / 2) / self.zoom + self.y
        return wx, wy

    def _object_at_screen_pos(self, mx: int, my: int) -> CelestialObject | None:
        wx, wy = self._screen_to_world(mx, my)
        best: CelestialObject | None = None
        best_dist = float("inf")
        for obj in self.manager.active_objects():
            dist = math.hypot(obj.x - wx, obj.y - wy)
            reach = max(_visual_radius(obj), 12 / self.zoom)
            if dist < reach and dist < best_dist:
                best = obj
                best_dist = dist
        return best

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, surface: pygame.Surface) -> None:
        objects = self.manager.get_all_active_objects()
        draw_background_stars(surface, objects["stars"], self._world_to_screen)

        for category in (
            "dark_nebulae", "nebulae", "asteroid_gardens", "crystal_gardens", "black_holes",
            "celestial_stars", "protostars", "planets", "moons", "rogue_planets", "comets", "wormholes",
        ):
            for obj in objects[category]:
                self._draw_object(surface, obj)

        # Ship marker
        pygame.draw.polygon(surface, CYAN, [
            (SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 - 8),
            (SCREEN_WIDTH // 2 - 6, SCREEN_HEIGHT // 2 + 6),
            (SCREEN_WIDTH // 2 + 6, SCREEN_HEIGHT // 2 + 6),
        ])

        if self.hovered:
            self._draw_tooltip(surface, self.hovered)
        self._draw_notifications(surface)
        if self.show_logbook:
            self._draw_logbook(surface)

        font = pygame.font.Font(None, 22)
        hint = font.render("WASD fly   L logbook   I inspector   F5 share link   F2-F4 debug", True, LIGHT_GREY)
        surface.blit(hint, (10, SCREEN_HEIGHT - 25))

    def _draw_object(self, surface: pygame.Surface, obj: CelestialObject) -> None:
        sx, sy = self._world_to_screen(obj.x, obj.y)
        radius = max(1, int(_visual_radius(obj) * self.zoom))
        if sx + radius < 0 or sx - radius > SCREEN_WIDTH or sy + radius < 0 or sy - radius > SCREEN_HEIGHT:
            return

        if isinstance(obj, (Nebula, AsteroidGarden)):
            color = pygame.Color(obj.colors[0])
            haze = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(haze, (color.r, color.g, color.b, 60), (radius, radius), radius)
            surface.blit(haze, (sx - radius, sy - radius))
        elif isinstance(obj, DarkNebula):
            points = [
                (sx + math.cos(a) * r * self.zoom, sy + math.sin(a) * r * self.zoom)
                for a, r in obj.shape_vertices
            ]
            if len(points) >= 3:
                pygame.draw.polygon(surface, pygame.Color(obj.color), points)
            else:
                pygame.draw.circle(surface, pygame.Color(obj.color), (sx, sy), radius)
        elif isinstance(obj, BlackHole):
            pygame.draw.circle(surface, AMBER, (sx, sy), radius, 2)
            pygame.draw.circle(surface, BLACK, (sx, sy), max(1, int(obj.event_horizon_radius * self.zoom)))
        elif isinstance(obj, Wormhole):
            pulse = 1.0 + 0.2 * math.sin(pygame.time.get_ticks() / 250)
            pygame.draw.circle(surface, CYAN, (sx, sy), max(2, int(radius * pulse)), 2)
        elif isinstance(obj, Comet):
            if obj.tail_length > 0:
                away = math.atan2(obj.y - obj.star_y, obj.x - obj.star_x)
                tail = obj.tail_length * self.zoom
                end = (sx + math.cos(away) * tail, sy + math.sin(away) * tail)
                pygame.draw.line(surface, LIGHT_GREY, (sx, sy), end, 1)
            pygame.draw.circle(surface, WHITE, (sx, sy), max(1, radius))
        elif isinstance(obj, CrystalGarden):
            pygame.draw.circle(surface, pygame.Color(obj.color), (sx, sy), radius, 1)
        else:
            pygame.draw.circle(surface, pygame.Color(obj.color), (sx, sy), radius)
            if isinstance(obj, Protostar):
                pygame.draw.circle(surface, AMBER, (sx, sy), int(obj.accretion_disk_size * self.zoom), 1)
            elif getattr(obj, "has_rings", False):
                ring = pygame.Rect(0, 0, int(obj.ring_outer * 2 * self.zoom), int(obj.ring_outer * self.zoom))
                ring.center = (sx, sy)
                pygame.draw.ellipse(surface, LIGHT_GREY, ring, 1)

        if obj.discovered and self.zoom > 0.3 and obj.display_name:
            label = self.font_info.render(obj.display_name, True, LIGHT_GREY)
            surface.blit(label, (sx - label.get_width() // 2, sy + radius + 4))

    def _draw_tooltip(self, surface: pygame.Surface, obj: CelestialObject) -> None:
        mx, my = pygame.mouse.get_pos()
        lines = [
            obj.display_name if obj.discovered else "Unknown object",
            f"Kind: {obj.identity.kind.value}",
            f"Type: {subtype_of(obj).replace('_', ' ').title()}",
            f"At: {obj.x:,.0f}, {obj.y:,.0f}",
        ]
        if obj.discovered:
            lines.append("✓ Surveyed")

        rendered = [self.font_info.render(line, True, AMBER if i == 0 else LIGHT_GREY) for i, line in enumerate(lines)]
        box = pygame.Rect(mx + 20, my - 10, 260, 16 + 22 * len(rendered))
        box.clamp_ip(surface.get_rect().inflate(-20, -20))

        backing = pygame.Surface(box.size, pygame.SRCALPHA)
        backing.fill((15, 15, 25, 220))
        surface.blit(backing, box.topleft)
        pygame.draw.rect(surface, PANEL_BORDER, box, 1, border_radius=4)
        for row, surf in enumerate(rendered):
            surface.blit(surf, (box.x + 10, box.y + 8 + row * 22))

    def _draw_notifications(self, surface: pygame.Surface) -> None:
        y = 56
        for text, remaining in self.notifications:
            surf = self.font_name.render(text, True, AMBER)
            surf.set_alpha(int(255 * min(1.0, remaining)))
            surface.blit(surf, (SCREEN_WIDTH // 2 - surf.get_width() // 2, y))
            y += 30

    def _draw_logbook(self, surface: pygame.Surface) -> None:
        """Right-hand panel listing the most recent discoveries."""
        records = self.manager.store.all_records()
        panel_w = 360
        panel = pygame.Surface((panel_w, SCREEN_HEIGHT - 80), pygame.SRCALPHA)
        panel.fill(PANEL_BG)
        surface.blit(panel, (SCREEN_WIDTH - panel_w, 45))
        pygame.draw.line(surface, PANEL_BORDER, (SCREEN_WIDTH - panel_w, 45), (SCREEN_WIDTH - panel_w, SCREEN_HEIGHT - 35))

        score = sum(DISCOVERY_VALUES.get(record.kind, 0) for record in records)
        title = self.font_name.render(f"Logbook ({len(records)})   Survey score {score:,}", True, AMBER)
        surface.blit(title, (SCREEN_WIDTH - panel_w + 14, 55))
        y = 90
        for record in reversed(records[-24:]):
            color = RED_ALERT if record.kind == "blackhole" else LIGHT_GREY
            surf = self.font_info.render(f"{record.display_name} [{record.kind}]", True, color)
            surface.blit(surf, (SCREEN_WIDTH - panel_w + 14, y))
            y += 22


def _visual_radius(obj: CelestialObject) -> float:
    if isinstance(obj, BlackHole):
        return obj.accretion_disk_radius
    if isinstance(obj, Comet):
        return obj.nucleus_radius
    return getattr(obj, "radius", 10.0)
