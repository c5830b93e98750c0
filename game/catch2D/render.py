"""
Pure description of what to draw for a world state.

Nothing here touches a graphics library: the window turns these records
into actual draw calls. Coordinates use the world's top-left origin.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .entities import BOMB, PLAYER, STAR, Entity
from .world import World

Color = Tuple[int, int, int, int]

BACKGROUND_C: Color = (0x00, 0x11, 0x22, 0xFF)
PLAYER_C: Color = (0x00, 0xFF, 0xFF, 0xFF)  # cyan
STAR_C: Color = (0xFF, 0xEB, 0x3B, 0xFF)  # yellow
BOMB_C: Color = (0xF4, 0x43, 0x36, 0xFF)  # red
HUD_C: Color = (0xFF, 0xFF, 0xFF, 0xFF)
BANNER_C: Color = (0xFF, 0xEB, 0x3B, 0xFF)
OVERLAY_C: Color = (0x00, 0x00, 0x00, 0x8A)  # black54

_COLORS = {PLAYER: PLAYER_C, STAR: STAR_C, BOMB: BOMB_C}

STAR_INNER_RATIO = 0.4


@dataclass(frozen=True)
class Drawable:
    kind: str
    x: float
    y: float
    width: float
    height: float
    angle: float = 0.0
    scale: float = 1.0
    color: Color = HUD_C


@dataclass(frozen=True)
class TextItem:
    text: str
    x: float
    y: float
    size: int
    color: Color
    centered: bool = False


def to_drawable(entity: Entity) -> Drawable:
    angle = entity.angle if entity.kind == STAR else 0.0
    scale = entity.pulse if entity.kind == BOMB else 1.0
    return Drawable(
        kind=entity.kind,
        x=entity.x,
        y=entity.y,
        width=entity.width,
        height=entity.height,
        angle=angle,
        scale=scale,
        color=_COLORS[entity.kind],
    )


def drawables(world: World) -> List[Drawable]:
    """Player first, then falling objects in spawn order"""
    return [to_drawable(world.player)] + [to_drawable(e) for e in world.falling]


def star_points(cx: float, cy: float, radius: float, angle: float = 0.0) -> List[Tuple[float, float]]:
    """Vertices of a five-pointed star, alternating outer and inner points"""
    inner = radius * STAR_INNER_RATIO
    points = []
    for i in range(5):
        a = i * 2 * math.pi / 5 - math.pi / 2 + angle
        points.append((cx + radius * math.cos(a), cy + radius * math.sin(a)))
        b = a + math.pi / 5
        points.append((cx + inner * math.cos(b), cy + inner * math.sin(b)))
    return points


def hud_items(world: World) -> List[TextItem]:
    return [
        TextItem(world.score_text, 20, 30, 24, HUD_C),
        TextItem(world.time_text, world.width - 150, 30, 24, HUD_C),
    ]


def banner_item(world: World) -> Optional[TextItem]:
    text = world.banner
    if text is None:
        return None
    return TextItem(text, world.width / 2, world.height / 2, 32, BANNER_C, centered=True)
