"""
World - the whole simulation state of one game of Catch the Stars
------------------------------------------------------------------
- A paddle at the bottom moves left/right, clamped to the screen
- Stars fall every 1.5s (+10 when caught), bombs every 3.0s (-20, floored at 0)
- Falling objects despawn once they drop 50px below the screen
- A round lasts 60s; afterwards everything freezes until a restart

The world never draws and never reads the keyboard. The host calls
``update(dt, inputs)`` once per frame and renders what it finds here.

Frame order: round timer -> spawn timers -> motion -> collisions.
"""

from __future__ import annotations

import math
import random
from typing import Callable, Dict, List, Optional

from .controls import FrameInput
from .entities import (
    BOMB,
    BOMB_FALL_SPEED,
    BOMB_SIZE,
    PLAYER_SPEED,
    PLAYER_WIDTH,
    STAR,
    STAR_FALL_SPEED,
    STAR_RADIUS,
    STAR_SPIN_SPEED,
    Entity,
    make_bomb,
    make_player,
    make_star,
)
from .utils import ceil_seconds, clamp, rects_overlap

STAR_POINTS = 10
BOMB_PENALTY = 20


def bomb_pulse(game_time: float) -> float:
    """Cosmetic bomb scale, a function of the remaining round time only"""
    return math.sin(game_time * 8) * 0.1 + 1.0


def _fall_star(star: Entity, dt: float, _game_time: float):
    star.y += STAR_FALL_SPEED * dt
    star.angle += STAR_SPIN_SPEED * dt


def _fall_bomb(bomb: Entity, dt: float, game_time: float):
    bomb.y += BOMB_FALL_SPEED * dt
    bomb.pulse = bomb_pulse(game_time)


_MOTION: Dict[str, Callable[[Entity, float, float], None]] = {
    STAR: _fall_star,
    BOMB: _fall_bomb,
}


class World:
    """Round state machine plus every entity in play"""

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        round_time: float = 60.0,
        star_spawn_interval: float = 1.5,  # seconds
        bomb_spawn_interval: float = 3.0,  # seconds
        offscreen_margin: float = 50.0,
        seed: Optional[int] = None,
    ):
        # Arena
        self.width = float(width)
        self.height = float(height)

        # Round config
        self.round_time = round_time
        self.star_spawn_interval = star_spawn_interval
        self.bomb_spawn_interval = bomb_spawn_interval
        self.offscreen_margin = offscreen_margin

        self.rng = random.Random(seed)
        self._pending_size = None

        # Round state
        self.score = 0
        self.game_time = round_time
        self.game_over = False
        self.stars_caught = 0
        self.bombs_hit = 0

        # Internal timers
        self._star_spawn_timer = 0.0
        self._bomb_spawn_timer = 0.0

        self.player = make_player(*self._player_start())
        self.falling: List[Entity] = []

    # ----------------------------
    # Host API
    # ----------------------------

    def seed(self, seed: Optional[int]):
        self.rng.seed(seed)

    def resize(self, width: float, height: float):
        """Change the playfield size. A running round keeps its size until it ends."""
        self._pending_size = (float(width), float(height))
        if self.game_over:
            self._apply_pending_size()

    def _apply_pending_size(self):
        if self._pending_size is None:
            return
        self.width, self.height = self._pending_size
        self._pending_size = None
        self.player.x = clamp(self.player.x, 0.0, self._player_max_x())

    def update(self, dt: float, inputs: Optional[FrameInput] = None):
        """Advance the simulation by one frame of ``dt`` seconds"""
        if inputs is None:
            inputs = FrameInput()

        if inputs.restart:
            self.restart()

        if self.game_over:
            return

        self.game_time -= dt
        if self.game_time <= 0:
            self._end_round()
            return

        self._spawn_logic(dt)

        self._update_player(dt, inputs.move_left, inputs.move_right)
        self._update_falling(dt)

        self._handle_collisions()

    def restart(self):
        """Start a new round. Ignored while a round is running."""
        if not self.game_over:
            return
        self.new_round()

    def new_round(self):
        """Reset every piece of round state, whatever state the round is in"""
        self.score = 0
        self.game_time = self.round_time
        self.game_over = False
        self.stars_caught = 0
        self.bombs_hit = 0
        self._star_spawn_timer = 0.0
        self._bomb_spawn_timer = 0.0

        self._apply_pending_size()
        self.falling = []
        self.player.x, self.player.y = self._player_start()

    # ----------------------------
    # Read-only views for the host
    # ----------------------------

    @property
    def stars(self) -> List[Entity]:
        return [e for e in self.falling if e.kind == STAR]

    @property
    def bombs(self) -> List[Entity]:
        return [e for e in self.falling if e.kind == BOMB]

    @property
    def time_left(self) -> int:
        return ceil_seconds(self.game_time)

    @property
    def score_text(self) -> str:
        return f"Score: {self.score}"

    @property
    def time_text(self) -> str:
        return f"Time: {self.time_left}"

    @property
    def banner(self) -> Optional[str]:
        if not self.game_over:
            return None
        return f"GAME OVER!\nFinal Score: {self.score}\nPress R to restart"

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _player_start(self):
        return self.width / 2 - PLAYER_WIDTH / 2, self.height - 100

    def _player_max_x(self) -> float:
        # A screen narrower than the paddle pins it to 0
        return max(0.0, self.width - PLAYER_WIDTH)

    def _end_round(self):
        self.game_over = True
        self._apply_pending_size()

    def _spawn_logic(self, dt: float):
        # Timers restart from zero; overshoot past the interval is dropped
        self._star_spawn_timer += dt
        if self._star_spawn_timer >= self.star_spawn_interval:
            self._spawn_star()
            self._star_spawn_timer = 0.0

        self._bomb_spawn_timer += dt
        if self._bomb_spawn_timer >= self.bomb_spawn_interval:
            self._spawn_bomb()
            self._bomb_spawn_timer = 0.0

    def _spawn_star(self) -> Entity:
        star = make_star(self.rng.random() * (self.width - STAR_RADIUS * 2))
        self.falling.append(star)
        return star

    def _spawn_bomb(self) -> Entity:
        bomb = make_bomb(self.rng.random() * (self.width - BOMB_SIZE))
        self.falling.append(bomb)
        return bomb

    def _update_player(self, dt: float, move_left: bool, move_right: bool):
        p = self.player
        if move_left:
            p.x -= PLAYER_SPEED * dt
        if move_right:
            p.x += PLAYER_SPEED * dt
        p.x = clamp(p.x, 0.0, self._player_max_x())

    def _update_falling(self, dt: float):
        for e in self.falling:
            _MOTION[e.kind](e, dt, self.game_time)

        # Remove anything that fell past the bottom margin
        limit = self.height + self.offscreen_margin
        self.falling = [e for e in self.falling if e.y <= limit]

    def _handle_collisions(self):
        player_rect = self.player.rect()

        # Stars are scored before bombs
        remaining = []
        for e in self.falling:
            if e.kind == STAR and rects_overlap(player_rect, e.rect()):
                self.score += STAR_POINTS
                self.stars_caught += 1
            else:
                remaining.append(e)

        self.falling = []
        for e in remaining:
            if e.kind == BOMB and rects_overlap(player_rect, e.rect()):
                self.score = max(0, self.score - BOMB_PENALTY)
                self.bombs_hit += 1
            else:
                self.falling.append(e)
