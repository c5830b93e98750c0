"""
Arcade window hosting a World: keyboard in, shapes out.

Run:
    catch-stars --width 800 --height 600
"""

from __future__ import annotations

import argparse
from typing import Optional

import arcade

from .controls import HeldKeys
from .entities import STAR
from .render import (
    BACKGROUND_C,
    OVERLAY_C,
    banner_item,
    drawables,
    hud_items,
    star_points,
)
from .world import World

LEFT_KEYS = (arcade.key.LEFT, arcade.key.A)
RIGHT_KEYS = (arcade.key.RIGHT, arcade.key.D)
RESTART_KEYS = (arcade.key.R,)


class CatchStarsWindow(arcade.Window):
    """Arcade window for playing (or watching) a World

    With ``drive=False`` the window only draws; somebody else steps the world
    (the gymnasium env does this in human render mode).
    """

    def __init__(self, world: World, title: str = "Catch the Stars", drive: bool = True):
        super().__init__(int(world.width), int(world.height), title, resizable=drive)
        self.world = world
        self.drive = drive
        self.keys = HeldKeys(LEFT_KEYS, RIGHT_KEYS, RESTART_KEYS)
        self.background_color = BACKGROUND_C
        self._was_over = world.game_over

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        self.keys.press(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self.keys.release(symbol)

    def on_deactivate(self):
        self.keys.clear()

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        self.world.resize(width, height)

    # ----------------------------
    # Simulation
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.drive:
            return
        self.world.update(max(0.0, delta_time), self.keys.to_frame_input())

        if self.world.game_over != self._was_over:
            self._was_over = self.world.game_over
            if self.world.game_over:
                print(f"Round over - final score {self.world.score}")
            else:
                print("New round started")

    # ----------------------------
    # Rendering
    # ----------------------------

    def _flip_y(self, y: float) -> float:
        # World origin is top-left, arcade's is bottom-left
        return self.world.height - y

    def on_draw(self):
        self.clear()

        for d in drawables(self.world):
            cx = d.x + d.width * 0.5
            cy = self._flip_y(d.y + d.height * 0.5)
            if d.kind == STAR:
                # Arcade rotates counter-clockwise, the world clockwise
                pts = star_points(cx, cy, d.width * 0.5, -d.angle)
                arcade.draw_polygon_filled(pts, d.color)
            else:
                half_w = d.width * 0.5 * d.scale
                half_h = d.height * 0.5 * d.scale
                arcade.draw_lrbt_rectangle_filled(
                    cx - half_w, cx + half_w, cy - half_h, cy + half_h, d.color
                )

        for t in hud_items(self.world):
            arcade.draw_text(t.text, t.x, self._flip_y(t.y), t.color, t.size,
                             anchor_y="top", bold=True)

        banner = banner_item(self.world)
        if banner is not None:
            arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, OVERLAY_C)
            arcade.draw_text(
                banner.text, banner.x, self._flip_y(banner.y), banner.color, banner.size,
                anchor_x="center", anchor_y="center", multiline=True,
                width=int(self.world.width), align="center", bold=True,
            )


def play(width: int = 800, height: int = 600, seed: Optional[int] = None):
    world = World(width=width, height=height, seed=seed)
    CatchStarsWindow(world)
    print("Left/Right or A/D to move, R to restart after the round, ESC to quit.")
    arcade.run()
    return world


def main():
    parser = argparse.ArgumentParser(description="Catch falling stars, dodge the bombs")
    parser.add_argument("--width", type=int, default=800, help="Window width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Window height (default: 600)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for spawn positions")
    args = parser.parse_args()

    world = play(width=args.width, height=args.height, seed=args.seed)
    print(f"Final score: {world.score}")


if __name__ == "__main__":
    main()
