"""Tests for held-key tracking."""
from __future__ import annotations

from game.catch2D.controls import FrameInput, HeldKeys

LEFT, A, RIGHT, D, R, SPACE = 1, 2, 3, 4, 5, 6


def make_keys() -> HeldKeys:
    return HeldKeys((LEFT, A), (RIGHT, D), (R,))


class TestHeldKeys:
    def test_nothing_held(self) -> None:
        assert make_keys().to_frame_input() == FrameInput()

    def test_either_key_moves_left(self) -> None:
        keys = make_keys()
        keys.press(A)
        assert keys.move_left
        keys.release(A)
        keys.press(LEFT)
        assert keys.move_left
        assert not keys.move_right

    def test_level_triggered_until_release(self) -> None:
        keys = make_keys()
        keys.press(RIGHT)
        assert keys.to_frame_input().move_right
        assert keys.to_frame_input().move_right
        keys.release(RIGHT)
        assert not keys.to_frame_input().move_right

    def test_releasing_one_of_two_keeps_direction(self) -> None:
        keys = make_keys()
        keys.press(RIGHT)
        keys.press(D)
        keys.release(RIGHT)
        assert keys.move_right

    def test_restart_is_consumed_once(self) -> None:
        keys = make_keys()
        keys.press(R)
        assert keys.to_frame_input().restart
        assert not keys.to_frame_input().restart

    def test_restart_latched_after_release(self) -> None:
        keys = make_keys()
        keys.press(R)
        keys.release(R)
        assert keys.to_frame_input().restart

    def test_unmapped_key_ignored(self) -> None:
        keys = make_keys()
        keys.press(SPACE)
        assert keys.to_frame_input() == FrameInput()

    def test_clear(self) -> None:
        keys = make_keys()
        keys.press(LEFT)
        keys.press(R)
        keys.clear()
        assert keys.to_frame_input() == FrameInput()
