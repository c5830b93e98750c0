"""
CatchStarsEnv - Catch the Stars as a Gymnasium environment
----------------------------------------------------------
- The World does all the simulation; this class only adapts it
- Discrete action space: 0 stay, 1 left, 2 right
- Vector observation: paddle x, round progress, top-K nearest stars and
  top-M nearest bombs as relative offsets
- Reward is the score change of the step (+10 star, -20 bomb or less at 0)

Quick test:
    python -m game.catch2D.catch_env
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .controls import FrameInput
from .entities import Entity
from .utils import clamp
from .world import World

ACTION_STAY = 0
ACTION_LEFT = 1
ACTION_RIGHT = 2


class CatchStarsEnv(gym.Env):
    """Gymnasium wrapper around a single World"""

    metadata = {"render_modes": ["human"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        dt: float = 1 / 30,
        max_steps: Optional[int] = None,  # default: one full round plus a step
        k_stars: int = 3,
        m_bombs: int = 2,
        round_time: float = 60.0,
        star_spawn_interval: float = 1.5,
        bomb_spawn_interval: float = 3.0,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        assert dt > 0, "dt must be positive"
        self.render_mode = render_mode

        self.dt = dt
        # dt rarely divides the round exactly, so leave room for the final step
        if max_steps is None:
            max_steps = math.ceil(round_time / dt) + 1
        self.max_steps = max_steps
        self.k_stars = k_stars
        self.m_bombs = m_bombs

        self.world = World(
            width=width,
            height=height,
            round_time=round_time,
            star_spawn_interval=star_spawn_interval,
            bomb_spawn_interval=bomb_spawn_interval,
        )

        self.action_space = spaces.Discrete(3)

        # Paddle x(1) progress(1) + each star (2) + each bomb (2)
        obs_dim = 2 + self.k_stars * 2 + self.m_bombs * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        # Derive the world's spawn randomness from the env's seeded generator
        self.world.seed(int(self.np_random.integers(0, 2**31 - 1)))
        self.world.new_round()
        self._step_count = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        inputs = FrameInput(
            move_left=action == ACTION_LEFT,
            move_right=action == ACTION_RIGHT,
        )

        score_before = self.world.score
        self.world.update(self.dt, inputs)
        reward = float(self.world.score - score_before)

        terminated = self.world.game_over
        self._step_count += 1
        truncated = not terminated and self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _relative(self, entities: List[Entity], n: int) -> List[float]:
        px, py = self.world.player.center
        w, h = self.world.width, self.world.height

        def dist2(e: Entity) -> float:
            ex, ey = e.center
            return (ex - px) ** 2 + (ey - py) ** 2

        parts: List[float] = []
        nearest = sorted(entities, key=dist2)
        for i in range(n):
            if i < len(nearest):
                ex, ey = nearest[i].center
                parts += [clamp((ex - px) / w, -1, 1), clamp((ey - py) / h, -1, 1)]
            else:
                parts += [0.0, 0.0]
        return parts

    def _get_obs(self) -> np.ndarray:
        world = self.world
        span = max(1e-6, world.width - world.player.width)
        px = clamp(world.player.x / span, 0, 1)
        progress = clamp(world.game_time / max(1e-6, world.round_time), 0, 1)

        obs_parts = [px * 2 - 1, progress * 2 - 1]  # map to [-1,1]
        obs_parts += self._relative(world.stars, self.k_stars)
        obs_parts += self._relative(world.bombs, self.m_bombs)

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.world.score,
            "time_left": self.world.time_left,
            "stars_caught": self.world.stars_caught,
            "bombs_hit": self.world.bombs_hit,
            "num_stars": len(self.world.stars),
            "num_bombs": len(self.world.bombs),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode != "human":
            return None

        if self._window is None:
            # Imported lazily so training never needs a display
            from .window import CatchStarsWindow
            self._window = CatchStarsWindow(self.world, drive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> float:
    """Play one round with a random policy"""
    env = CatchStarsEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total}  (stars {info['stars_caught']}, bombs {info['bombs_hit']})")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode(render=True)
