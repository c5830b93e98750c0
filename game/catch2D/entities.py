"""
Game entity dataclasses

Every object in the playfield is a single ``Entity`` record tagged with its
kind. Per-kind fields (star rotation, bomb pulse) live on the same record and
are simply unused by the other kinds.
"""

from dataclasses import dataclass

from .utils import Rect

PLAYER = "player"
STAR = "star"
BOMB = "bomb"

PLAYER_WIDTH = 50.0
PLAYER_HEIGHT = 30.0
PLAYER_SPEED = 250.0  # px/s

STAR_RADIUS = 15.0
STAR_FALL_SPEED = 100.0  # px/s
STAR_SPIN_SPEED = 2.0  # rad/s
STAR_SPAWN_Y = -30.0

BOMB_SIZE = 25.0
BOMB_FALL_SPEED = 120.0  # px/s
BOMB_SPAWN_Y = -25.0


@dataclass
class Entity:
    """Positioned, sized game object (origin top-left)"""
    kind: str
    x: float
    y: float
    width: float
    height: float
    angle: float = 0.0  # stars only, radians
    pulse: float = 1.0  # bombs only, cosmetic scale

    def rect(self) -> Rect:
        """Axis-aligned bounding box used for collisions"""
        return (self.x, self.y, self.width, self.height)

    @property
    def center(self):
        return self.x + self.width * 0.5, self.y + self.height * 0.5


def make_player(x: float, y: float) -> Entity:
    return Entity(PLAYER, x, y, PLAYER_WIDTH, PLAYER_HEIGHT)


def make_star(x: float, y: float = STAR_SPAWN_Y) -> Entity:
    # Collision uses the square around the star's circle, not its outline
    return Entity(STAR, x, y, STAR_RADIUS * 2, STAR_RADIUS * 2)


def make_bomb(x: float, y: float = BOMB_SPAWN_Y) -> Entity:
    return Entity(BOMB, x, y, BOMB_SIZE, BOMB_SIZE)
