"""Tests for the World: spawning, motion, collisions and the round lifecycle."""
from __future__ import annotations

import math

import pytest

from game.catch2D.controls import FrameInput
from game.catch2D.entities import BOMB, STAR, make_bomb, make_star
from game.catch2D.world import World, bomb_pulse

LEFT = FrameInput(move_left=True)
RIGHT = FrameInput(move_right=True)
RESTART = FrameInput(restart=True)


def run_out_round(world: World) -> None:
    while not world.game_over:
        world.update(1.0)


def state_of(world: World) -> tuple:
    return (
        world.score,
        world.game_time,
        world.game_over,
        world._star_spawn_timer,
        world._bomb_spawn_timer,
        [(e.kind, e.x, e.y) for e in world.falling],
        (world.player.x, world.player.y),
    )


# ── initial state ─────────────────────────────────────────────────


class TestInitialState:
    def test_fresh_round(self) -> None:
        world = World()
        assert world.score == 0
        assert world.game_time == 60.0
        assert not world.game_over
        assert world.falling == []

    def test_player_start_position(self) -> None:
        world = World(width=800, height=600)
        assert world.player.x == 375.0
        assert world.player.y == 500.0
        assert (world.player.width, world.player.height) == (50.0, 30.0)

    def test_hud_text(self) -> None:
        world = World()
        assert world.score_text == "Score: 0"
        assert world.time_text == "Time: 60"
        assert world.banner is None


# ── spawner ───────────────────────────────────────────────────────


class TestSpawner:
    def test_one_star_when_interval_crossed_once(self) -> None:
        world = World(seed=1)
        for _ in range(2):
            world.update(0.5)
        assert world.stars == []
        world.update(0.5)
        assert len(world.stars) == 1
        assert world._star_spawn_timer == 0.0

    def test_overshoot_is_dropped(self) -> None:
        world = World(seed=1)
        for _ in range(3):
            world.update(0.7)
        assert len(world.stars) == 1
        assert world._star_spawn_timer == 0.0
        # Carrying the 0.6s overshoot would spawn again on frame 5
        world.update(0.7)
        world.update(0.7)
        assert len(world.stars) == 1
        world.update(0.7)
        assert len(world.stars) == 2

    def test_bomb_cadence(self) -> None:
        world = World(seed=1)
        for _ in range(5):
            world.update(0.5)
        assert world.bombs == []
        world.update(0.5)
        assert len(world.bombs) == 1
        assert world._bomb_spawn_timer == 0.0

    def test_spawn_positions_within_screen(self) -> None:
        world = World(width=400, height=600, seed=3)
        for _ in range(50):
            star = world._spawn_star()
            bomb = world._spawn_bomb()
            assert 0.0 <= star.x <= 400 - 30
            assert star.y == -30.0
            assert 0.0 <= bomb.x <= 400 - 25
            assert bomb.y == -25.0

    def test_spawned_star_moves_in_same_frame(self) -> None:
        world = World(seed=1)
        world.update(1.0)
        world.update(0.5)
        (star,) = world.stars
        assert star.y == pytest.approx(-30.0 + 100 * 0.5)

    def test_same_seed_same_spawns(self) -> None:
        a, b = World(seed=9), World(seed=9)
        for _ in range(20):
            a.update(0.5)
            b.update(0.5)
        assert [(e.kind, e.x) for e in a.falling] == [(e.kind, e.x) for e in b.falling]

    def test_spawns_use_current_width(self) -> None:
        world = World(width=800, round_time=1.0, seed=5)
        world.update(1.0)
        world.resize(100, 600)
        world.restart()
        for _ in range(30):
            assert world._spawn_star().x <= 70


# ── motion ────────────────────────────────────────────────────────


class TestMotion:
    def test_star_falls_and_spins(self) -> None:
        world = World()
        star = make_star(0.0, 0.0)
        world.falling.append(star)
        world.update(0.1)
        assert star.y == pytest.approx(10.0)
        assert star.angle == pytest.approx(0.2)

    def test_star_y_strictly_increasing(self) -> None:
        world = World()
        star = make_star(0.0, -30.0)
        world.falling.append(star)
        last = star.y
        for _ in range(20):
            world.update(1 / 60)
            assert star.y > last
            last = star.y

    def test_bomb_falls_and_pulses_from_game_time(self) -> None:
        world = World()
        bomb = make_bomb(0.0, 0.0)
        world.falling.append(bomb)
        world.update(0.1)
        assert bomb.y == pytest.approx(12.0)
        assert bomb.pulse == pytest.approx(math.sin(world.game_time * 8) * 0.1 + 1.0)
        assert bomb.pulse == bomb_pulse(world.game_time)

    def test_pulse_does_not_change_collision_box(self) -> None:
        bomb = make_bomb(10.0, 10.0)
        bomb.pulse = 1.1
        assert bomb.rect() == (10.0, 10.0, 25.0, 25.0)

    def test_despawn_below_margin(self) -> None:
        world = World(width=800, height=600)
        star = make_star(0.0, 650.0)  # exactly at the limit: kept
        bomb = make_bomb(0.0, 649.0)
        world.falling += [star, bomb]
        world.update(0.0)
        assert world.falling == [star, bomb]
        world.update(0.02)
        assert world.falling == []


class TestPlayerMotion:
    def test_moves_left_and_right(self) -> None:
        world = World()
        world.update(0.1, LEFT)
        assert world.player.x == pytest.approx(375.0 - 25.0)
        world.update(0.2, RIGHT)
        assert world.player.x == pytest.approx(375.0 + 25.0)

    def test_no_vertical_motion(self) -> None:
        world = World()
        for _ in range(10):
            world.update(0.1, RIGHT)
        assert world.player.y == 500.0

    def test_clamped_at_left_edge(self) -> None:
        world = World(width=400, height=600)
        world.player.x = 200.0
        for _ in range(100):
            world.update(0.1, LEFT)
        assert world.player.x == 0.0

    def test_clamped_at_right_edge(self) -> None:
        world = World(width=400, height=600)
        for _ in range(100):
            world.update(0.1, RIGHT)
        assert world.player.x == 350.0

    def test_both_directions_cancel(self) -> None:
        world = World()
        world.update(0.1, FrameInput(move_left=True, move_right=True))
        assert world.player.x == pytest.approx(375.0)

    def test_narrow_screen_pins_to_zero(self) -> None:
        world = World(width=40, height=600)
        world.update(0.1, RIGHT)
        assert world.player.x == 0.0

    def test_resize_between_rounds_keeps_player_inside(self) -> None:
        world = World(width=800, height=600, round_time=1.0)
        world.player.x = 700.0
        world.update(1.0)
        world.resize(300, 600)
        assert world.width == 300.0
        assert world.player.x == 250.0

    def test_resize_mid_round_waits_for_next_round(self) -> None:
        world = World(width=800, height=600, round_time=1.0)
        world.update(0.1)
        world.resize(800, 300)
        assert (world.width, world.height) == (800.0, 600.0)
        assert world.player.y + world.player.height <= world.height

        world.update(1.0)
        assert world.game_over
        assert (world.width, world.height) == (800.0, 300.0)
        world.restart()
        assert world.player.y == 200.0
        assert world.player.y + world.player.height <= world.height

    def test_mid_round_resize_keeps_collisions_working(self) -> None:
        world = World(width=800, height=600)
        world.update(0.1)
        world.resize(400, 300)
        p = world.player
        world.falling.append(make_star(p.x, p.y))
        world.update(0.0)
        assert world.score == 10


# ── collisions & scoring ──────────────────────────────────────────


class TestCollisions:
    def test_star_one_pixel_overlap_scores(self) -> None:
        world = World()
        star = make_star(375.0 + 50 - 1, 500.0 + 30 - 1)
        world.falling.append(star)
        world.update(0.0)
        assert world.score == 10
        assert star not in world.falling
        assert world.stars_caught == 1

    def test_star_sharing_edge_is_missed(self) -> None:
        world = World()
        star = make_star(375.0 + 50, 500.0 + 30 - 1)
        world.falling.append(star)
        world.update(0.0)
        assert world.score == 0
        assert star in world.falling

    def test_bomb_takes_twenty(self) -> None:
        world = World()
        world.score = 50
        world.falling.append(make_bomb(380.0, 500.0))
        world.update(0.0)
        assert world.score == 30
        assert world.bombs == []
        assert world.bombs_hit == 1

    def test_score_never_negative(self) -> None:
        world = World()
        world.score = 10
        for _ in range(5):
            world.falling.append(make_bomb(380.0, 500.0))
            world.update(0.0)
            assert world.score >= 0
        assert world.score == 0

    def test_all_simultaneous_hits_apply(self) -> None:
        world = World()
        world.falling += [make_star(375.0, 495.0), make_star(390.0, 495.0), make_star(0.0, 0.0)]
        world.update(0.0)
        assert world.score == 20
        assert len(world.stars) == 1

    def test_stars_scored_before_bombs(self) -> None:
        world = World()
        world.score = 10
        world.falling += [make_bomb(380.0, 500.0), make_star(380.0, 500.0)]
        world.update(0.0)
        assert world.score == 0

    def test_falling_object_scored_after_moving(self) -> None:
        world = World()
        # Just above the paddle; one frame of fall brings it into contact
        star = make_star(380.0, 500.0 - 30 - 5)
        world.falling.append(star)
        world.update(0.1)
        assert world.score == 10


# ── round state machine ───────────────────────────────────────────


class TestRound:
    def test_time_counts_down_and_display_rounds_up(self) -> None:
        world = World()
        world.update(0.5)
        assert world.game_time == pytest.approx(59.5)
        assert world.time_text == "Time: 60"
        world.update(1.0)
        assert world.time_text == "Time: 59"

    def test_time_non_increasing(self) -> None:
        world = World(seed=2)
        last = world.game_time
        for _ in range(200):
            world.update(0.4)
            assert world.game_time <= last
            last = world.game_time

    def test_round_ends_after_sixty_frames_of_one_second(self) -> None:
        world = World(seed=4)
        for _ in range(59):
            world.update(1.0)
        assert not world.game_over
        world.update(1.0)
        assert world.game_over

        frozen = state_of(world)
        for _ in range(10):
            world.update(1.0, LEFT)
        assert state_of(world) == frozen

    def test_banner_has_final_score(self) -> None:
        world = World(round_time=1.0)
        world.score = 30
        world.update(1.0)
        assert world.game_over
        assert world.banner == "GAME OVER!\nFinal Score: 30\nPress R to restart"

    def test_restart_ignored_while_running(self) -> None:
        world = World()
        world.score = 30
        world.update(1.0)
        world.restart()
        assert world.score == 30
        assert world.game_time == pytest.approx(59.0)

    def test_restart_resets_round(self) -> None:
        world = World(seed=6)
        for _ in range(20):
            world.update(0.5, LEFT)
        world.score = 40
        run_out_round(world)
        world.restart()

        assert not world.game_over
        assert world.score == 0
        assert world.game_time == 60.0
        assert world.falling == []
        assert (world.player.x, world.player.y) == (375.0, 500.0)
        assert world._star_spawn_timer == 0.0
        assert world._bomb_spawn_timer == 0.0

    def test_player_is_repositioned_not_recreated(self) -> None:
        world = World()
        player = world.player
        run_out_round(world)
        world.restart()
        assert world.player is player

    def test_second_restart_has_no_effect(self) -> None:
        world = World(seed=8)
        run_out_round(world)
        world.restart()
        once = state_of(world)
        world.restart()
        assert state_of(world) == once

    def test_restart_input_starts_new_round(self) -> None:
        world = World()
        run_out_round(world)
        world.update(0.5, RESTART)
        assert not world.game_over
        assert world.game_time == pytest.approx(59.5)

    def test_restart_input_while_running_is_noop(self) -> None:
        world = World()
        world.score = 10
        world.update(0.5, RESTART)
        assert world.score == 10

    def test_restart_uses_current_screen_size(self) -> None:
        world = World(width=800, height=600)
        run_out_round(world)
        world.resize(400, 300)
        world.restart()
        assert (world.player.x, world.player.y) == (175.0, 200.0)

    def test_falling_entities_are_stars_or_bombs(self) -> None:
        world = World(seed=11)
        for _ in range(40):
            world.update(0.5)
        assert {e.kind for e in world.falling} <= {STAR, BOMB}
