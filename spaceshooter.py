"""
Space Shooter — single-file pygame game.
File: spaceshooter.py

How to run:
  pip install pygame
  python spaceshooter.py

Move the ship with Left/Right (or A/D) and hold Space to fire. Enemies drop in
from the top and fall faster as the score grows; one touching the ship ends the
run. The best score survives between runs in a small JSON key/value file.
"""
from __future__ import annotations
import argparse
import json
import logging
import os
import random
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import pygame

logger = logging.getLogger(__name__)

# ============================
# SETTINGS & CONSTANTS
# ============================
WIDTH, HEIGHT = 800, 600
FPS = 60
TITLE = "Space Shooter"
HIGHSCORE_KEY = "highScore"
HIGHSCORE_PATH = os.environ.get(
    "SPACE_SHOOTER_HIGHSCORE",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "highscore.json"),
)

# Colors
COLOR_BG = (0, 0, 0)
COLOR_FADE = (0, 0, 0, 26)       # rgba(0, 0, 0, 0.1)
COLOR_SHIP = (0, 255, 255)
COLOR_PROJECTILE = (0, 255, 255)
COLOR_ENEMY = (255, 0, 0)
COLOR_UI = (230, 235, 255)
COLOR_DIM = (80, 90, 120)
COLOR_HIGHLIGHT = (160, 200, 255)

# Gameplay constants (per-frame units)
SHIP_SIZE = (40, 40)
SHIP_SPEED = 5
SHIP_BOTTOM_MARGIN = 50

PROJECTILE_SIZE = (4, 10)
PROJECTILE_SPEED = 7
FIRE_INTERVAL = 10               # frames between shots while fire is held

ENEMY_SIZE = (30, 30)
ENEMY_BASE_SPEED = 2
ENEMY_SPEEDUP_SCORE = 50         # +1 enemy speed per this many points
SPAWN_INTERVAL = 60              # frames between enemy spawns
ENEMY_REWARD = 10

# Input
KEY_BINDINGS: Dict[str, Tuple[int, ...]] = {
    "left": (pygame.K_LEFT, pygame.K_a),
    "right": (pygame.K_RIGHT, pygame.K_d),
    "fire": (pygame.K_SPACE,),
}
ACK_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


# ============================
# UTILS
# ============================
def check_collision(a, b) -> bool:
    """Strict axis-aligned overlap of two rects; shared edges do not count."""
    return (a.x < b.x + b.width and
            a.x + a.width > b.x and
            a.y < b.y + b.height and
            a.y + a.height > b.y)


class HighScoreStore:
    """A tiny persistent key/value file holding the high score as a string."""

    def __init__(self, path: str = HIGHSCORE_PATH, key: str = HIGHSCORE_KEY):
        self.path = path
        self.key = key

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("invalid structure")
            return data
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return {}

    def load(self) -> int:
        raw = self._read().get(self.key)
        if raw is None:
            return 0
        try:
            return max(0, int(str(raw).strip()))
        except ValueError:
            logger.debug("High score entry %r is not a number, using 0", raw)
            return 0

    def save(self, value: int):
        data = self._read()
        data[self.key] = str(int(value))
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            # The game keeps running when the disk is read-only
            logger.warning("Could not save high score to %s: %s", self.path, exc)


# ============================
# INPUT
# ============================
@dataclass(frozen=True)
class InputSnapshot:
    left: bool = False
    right: bool = False
    fire: bool = False


class KeyState:
    """Pressed/released flag per key code, fed by KEYDOWN/KEYUP events.

    The frame loop never looks at events directly; it calls snapshot() once at
    the top of each frame so the update step sees a fixed view of the keys.
    """

    def __init__(self, bindings: Dict[str, Tuple[int, ...]] = KEY_BINDINGS):
        self.bindings = bindings
        self.pressed: Dict[int, bool] = {}

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.KEYDOWN:
            self.pressed[event.key] = True
        elif event.type == pygame.KEYUP:
            self.pressed[event.key] = False

    def is_held(self, action: str) -> bool:
        return any(self.pressed.get(k, False) for k in self.bindings[action])

    def snapshot(self) -> InputSnapshot:
        return InputSnapshot(
            left=self.is_held("left"),
            right=self.is_held("right"),
            fire=self.is_held("fire"),
        )


# ============================
# ENTITIES
# ============================
class Projectile:
    def __init__(self, x: int, y: int):
        self.rect = pygame.Rect(x, y, *PROJECTILE_SIZE)
        self.speed = PROJECTILE_SPEED
        self.alive = True

    def update(self):
        self.rect.y -= self.speed
        if self.rect.bottom <= 0:
            self.alive = False


class Ship:
    def __init__(self, x: int, y: int):
        self.rect = pygame.Rect(x, y, *SHIP_SIZE)
        self.speed = SHIP_SPEED

    def update(self, snapshot: InputSnapshot):
        # Each direction clamps on its own, so holding both is a no-op mid-field
        if snapshot.left:
            self.rect.x = max(0, self.rect.x - self.speed)
        if snapshot.right:
            self.rect.x = min(WIDTH - self.rect.width, self.rect.x + self.speed)

    def shoot(self) -> Projectile:
        return Projectile(self.rect.centerx - PROJECTILE_SIZE[0] // 2, self.rect.top)

    def outline(self) -> List[Tuple[int, int]]:
        r = self.rect
        return [(r.centerx, r.top), (r.left, r.bottom), (r.right, r.bottom)]


class Enemy:
    def __init__(self, x: int, speed: int):
        self.rect = pygame.Rect(x, -ENEMY_SIZE[1], *ENEMY_SIZE)
        self.speed = speed

    def update(self):
        self.rect.y += self.speed

    def escaped(self) -> bool:
        return self.rect.top >= HEIGHT

    def outline(self) -> List[Tuple[int, int]]:
        r = self.rect
        return [(r.centerx, r.bottom), (r.left, r.top), (r.right, r.top)]


# ============================
# SIMULATION
# ============================
@dataclass
class GameOverNotice:
    score: int
    high_score: int
    new_high_score: bool

    @property
    def message(self) -> str:
        if self.new_high_score:
            return f"New High Score: {self.score}!\nGame Over!"
        return f"Game Over! Score: {self.score}\nHigh Score: {self.high_score}"


class Simulation:
    """All state of one session, advanced one frame at a time by step().

    The high score is read from the store when the session starts and written
    back the moment the running score passes it. A session ends on the first
    enemy that reaches the ship; after that step() does nothing and the host is
    expected to build a fresh Simulation.
    """

    def __init__(self, store: Optional[HighScoreStore] = None,
                 rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng if rng is not None else random.Random()
        self.high_score = store.load() if store is not None else 0
        self.starting_high_score = self.high_score
        self.ship = Ship(WIDTH // 2, HEIGHT - SHIP_BOTTOM_MARGIN)
        self.projectiles: List[Projectile] = []
        self.enemies: List[Enemy] = []
        self.score = 0
        self.frame_count = 0
        self.shots_fired = 0
        self.enemies_spawned = 0
        self.notice: Optional[GameOverNotice] = None

    @property
    def over(self) -> bool:
        return self.notice is not None

    def enemy_speed(self) -> int:
        return ENEMY_BASE_SPEED + self.score // ENEMY_SPEEDUP_SCORE

    def spawn_enemy(self) -> Enemy:
        x = self.rng.randint(0, WIDTH - ENEMY_SIZE[0])
        enemy = Enemy(x, self.enemy_speed())
        self.enemies.append(enemy)
        self.enemies_spawned += 1
        return enemy

    def fire(self) -> Projectile:
        projectile = self.ship.shoot()
        self.projectiles.append(projectile)
        self.shots_fired += 1
        return projectile

    def step(self, snapshot: InputSnapshot) -> Optional[GameOverNotice]:
        if self.over:
            return self.notice

        # 1) Input -> ship
        self.ship.update(snapshot)
        if snapshot.fire and self.frame_count % FIRE_INTERVAL == 0:
            self.fire()

        # 2) Projectiles
        for p in self.projectiles:
            p.update()
        self.projectiles = [p for p in self.projectiles if p.alive]

        # 3) Spawns
        if self.frame_count % SPAWN_INTERVAL == 0:
            self.spawn_enemy()

        # 4) Enemies: move, then projectile hits, ship hit, escape
        for e in list(self.enemies):
            if self.over:
                break
            e.update()
            hit = self._first_hit(e)
            if hit is not None:
                self.projectiles.remove(hit)
                self.enemies.remove(e)
                self.score_add(ENEMY_REWARD)
            elif check_collision(e.rect, self.ship.rect):
                self.enemies.remove(e)
                self.game_over()
            elif e.escaped():
                self.enemies.remove(e)

        self.frame_count += 1
        return self.notice

    def _first_hit(self, enemy: Enemy) -> Optional[Projectile]:
        for p in self.projectiles:
            if check_collision(p.rect, enemy.rect):
                return p
        return None

    def score_add(self, points: int):
        self.score += points
        if self.score > self.high_score:
            self.high_score = self.score
            if self.store is not None:
                self.store.save(self.high_score)

    def game_over(self):
        new_high = self.score > self.starting_high_score
        if new_high:
            self.high_score = max(self.high_score, self.score)
            if self.store is not None:
                self.store.save(self.high_score)
            logger.info("New high score: %d", self.score)
        self.notice = GameOverNotice(self.score, self.high_score, new_high)
        logger.info("Game over at frame %d with score %d", self.frame_count, self.score)

    def summary(self) -> str:
        return (f"Frame {self.frame_count} | Score {self.score} | High {self.high_score} | "
                f"Enemies {len(self.enemies)}/{self.enemies_spawned} | "
                f"Projectiles {len(self.projectiles)}/{self.shots_fired} | "
                f"Enemy speed {self.enemy_speed()}")


# ============================
# RENDERING
# ============================
def make_fade_overlay(size: Tuple[int, int]) -> pygame.Surface:
    overlay = pygame.Surface(size, pygame.SRCALPHA)
    overlay.fill(COLOR_FADE)
    return overlay


def render(sim: Simulation, surf: pygame.Surface, fade: Optional[pygame.Surface] = None):
    # Translucent fill instead of a clear leaves short motion trails
    if fade is None:
        fade = make_fade_overlay(surf.get_size())
    surf.blit(fade, (0, 0))
    pygame.draw.polygon(surf, COLOR_SHIP, sim.ship.outline())
    for p in sim.projectiles:
        pygame.draw.rect(surf, COLOR_PROJECTILE, p.rect)
    for e in sim.enemies:
        pygame.draw.polygon(surf, COLOR_ENEMY, e.outline())


# ============================
# GAME
# ============================
class Game:
    def __init__(self, store: HighScoreStore, fps: int = FPS,
                 rng: Optional[random.Random] = None):
        pygame.init()
        pygame.display.set_caption(TITLE)
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        self.canvas = pygame.Surface((WIDTH, HEIGHT))
        self.fade = make_fade_overlay((WIDTH, HEIGHT))
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(None, 26)
        self.bigfont = pygame.font.SysFont(None, 48)
        self.store = store
        self.fps = fps
        self.rng = rng if rng is not None else random.Random()
        self.running = True
        self._start_session()

    def _start_session(self):
        self.keys = KeyState()
        self.sim = Simulation(self.store, self.rng)
        self.canvas.fill(COLOR_BG)
        logger.info("Session started, high score %d", self.sim.high_score)

    # ============================
    # MAIN LOOP
    # ============================
    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
        elif self.sim.over:
            # Game-over notice is modal: only an acknowledgement gets through
            if ((event.type == pygame.KEYDOWN and event.key in ACK_KEYS)
                    or event.type == pygame.MOUSEBUTTONDOWN):
                self._start_session()
        else:
            if event.type == pygame.KEYDOWN and event.key == pygame.K_F1:
                logger.info(self.sim.summary())
            self.keys.handle_event(event)

    def tick(self):
        if not self.sim.over:
            self.sim.step(self.keys.snapshot())
            render(self.sim, self.canvas, self.fade)
        self.draw()

    def run(self):
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            if not self.running:
                break
            self.tick()
            self.clock.tick(self.fps)
        pygame.quit()

    # ============================
    # RENDERING
    # ============================
    def draw(self):
        self.screen.blit(self.canvas, (0, 0))
        self.draw_hud()
        if self.sim.over:
            self.draw_game_over()
        pygame.display.flip()

    def draw_hud(self):
        pad = 8
        txt = self.font.render(f"Score: {self.sim.score}", True, COLOR_UI)
        self.screen.blit(txt, (pad, pad))
        txt2 = self.font.render(f"High Score: {self.sim.high_score}", True, COLOR_UI)
        self.screen.blit(txt2, (pad, pad + 22))

    def draw_game_over(self):
        overlay = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 140))
        self.screen.blit(overlay, (0, 0))
        lines = self.sim.notice.message.split("\n")
        y = HEIGHT // 2 - 80
        for i, line in enumerate(lines):
            font = self.bigfont if i == 0 else self.font
            s = font.render(line, True, COLOR_HIGHLIGHT if self.sim.notice.new_high_score else COLOR_UI)
            self.screen.blit(s, (WIDTH // 2 - s.get_width() // 2, y))
            y += s.get_height() + 12
        hint = self.font.render("Press Enter to play again", True, COLOR_DIM)
        self.screen.blit(hint, (WIDTH // 2 - hint.get_width() // 2, y + 20))


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="space-shooter", description=TITLE)
    parser.add_argument("--highscore-path", default=HIGHSCORE_PATH,
                        help="JSON file the high score is kept in")
    parser.add_argument("--fps", type=int, default=FPS, help="Frames per second")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for enemy placement (random if omitted)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s - %(levelname)s - %(message)s")
    Game(HighScoreStore(args.highscore_path), fps=args.fps,
         rng=random.Random(args.seed)).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
