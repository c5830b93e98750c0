"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
from typing import Tuple

Rect = Tuple[float, float, float, float]  # x, y, width, height (top-left origin)


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Check if two axis-aligned rectangles intersect with non-zero area.

    Rectangles that only share an edge or a corner do not overlap.
    """
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah


def ceil_seconds(t: float) -> int:
    """Seconds shown on the HUD for a remaining time"""
    return int(math.ceil(t))
