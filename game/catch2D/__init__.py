"""2D Game module - Catch the Stars"""

from .controls import FrameInput, HeldKeys
from .entities import Entity
from .world import World
from .catch_env import CatchStarsEnv, run_random_episode

__all__ = ['CatchStarsEnv', 'Entity', 'FrameInput', 'HeldKeys', 'World', 'run_random_episode']
