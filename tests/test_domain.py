"""
Tests for the domain entities: grid, snake, spawner, powerups and snapshots.
"""

import os
import random
import sys
from collections import deque

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from powersnake.domain import (
    ActiveEffect,
    GameState,
    Grid,
    Powerup,
    PowerupKind,
    PowerupLifecycle,
    RoundState,
    ShieldGuard,
    Snake,
    Spawner,
)
from powersnake.domain.constants import DEFAULT_FOOD_CELL


def make_lifecycle(**overrides):
    params = dict(
        enabled=True,
        spawn_delay_min=1.0,
        spawn_delay_max=2.0,
        ttl=8.0,
        effect_duration=8.0,
        rng=random.Random(0),
    )
    params.update(overrides)
    return PowerupLifecycle(**params)


class TestGrid:
    """Tests for the Grid class."""

    def test_in_bounds_is_one_indexed(self):
        """Cells run from 1 to width/height inclusive."""
        grid = Grid(5, 4)
        assert grid.in_bounds((1, 1))
        assert grid.in_bounds((5, 4))
        assert not grid.in_bounds((0, 1))
        assert not grid.in_bounds((6, 1))
        assert not grid.in_bounds((1, 5))

    def test_wrap_each_axis(self):
        """Wrapping brings a cell that stepped off one edge in from the other."""
        grid = Grid(5, 5)
        assert grid.wrap((0, 3)) == (5, 3)
        assert grid.wrap((6, 3)) == (1, 3)
        assert grid.wrap((3, 0)) == (3, 5)
        assert grid.wrap((3, 6)) == (3, 1)
        assert grid.wrap((6, 0)) == (1, 5)

    def test_wrap_leaves_in_bounds_cells_alone(self):
        """In-bounds cells are unchanged by wrapping."""
        grid = Grid(5, 5)
        assert grid.wrap((2, 4)) == (2, 4)

    def test_clamp(self):
        """Clamping returns the nearest in-bounds cell."""
        grid = Grid(5, 5)
        assert grid.clamp((6, 3)) == (5, 3)
        assert grid.clamp((0, 0)) == (1, 1)
        assert grid.clamp((3, 3)) == (3, 3)

    def test_cell_count(self):
        """cell_count is width times height."""
        assert Grid(4, 3).cell_count == 12


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_initialization(self):
        """Snake initializes alive with its positions."""
        snake = Snake([(3, 3), (2, 3), (1, 3)])
        assert list(snake.positions) == [(3, 3), (2, 3), (1, 3)]
        assert isinstance(snake.positions, deque)
        assert snake.alive is True
        assert snake.death_reason is None
        assert snake.death_tick is None

    def test_snake_requires_a_segment(self):
        """An empty snake is rejected."""
        with pytest.raises(ValueError):
            Snake([])

    def test_head_and_tail(self):
        """head is the first position, tail the last."""
        snake = Snake([(3, 3), (2, 3), (1, 3)])
        assert snake.head == (3, 3)
        assert snake.tail == (1, 3)
        assert len(snake) == 3

    def test_occupies(self):
        """occupies checks every segment."""
        snake = Snake([(3, 3), (2, 3), (1, 3)])
        assert snake.occupies((3, 3))
        assert snake.occupies((1, 3))
        assert not snake.occupies((4, 3))

    def test_occupies_can_skip_tail(self):
        """exclude_tail ignores only the last segment."""
        snake = Snake([(3, 3), (2, 3), (1, 3)])
        assert not snake.occupies((1, 3), exclude_tail=True)
        assert snake.occupies((2, 3), exclude_tail=True)

    def test_single_segment_excluding_tail_occupies_nothing(self):
        """A one-cell snake has nothing left once its tail is excluded."""
        snake = Snake([(2, 2)])
        assert not snake.occupies((2, 2), exclude_tail=True)

    def test_push_head_and_pop_tail(self):
        """push_head adds at the front, pop_tail removes from the back."""
        snake = Snake([(3, 3), (2, 3), (1, 3)])
        snake.push_head((4, 3))
        assert snake.head == (4, 3)
        assert snake.pop_tail() == (1, 3)
        assert list(snake.positions) == [(4, 3), (3, 3), (2, 3)]


class TestSpawner:
    """Tests for food and powerup placement."""

    def test_food_avoids_snake_and_powerup(self):
        """Food only lands on the one cell left free."""
        spawner = Spawner(Grid(3, 1), random.Random(1))
        snake = Snake([(1, 1)])
        powerup = Powerup(kind=PowerupKind.SHIELD, position=(2, 1), ttl=5.0)

        # 3 attempts per call on a 3-cell board can miss, so retry until placed
        cells = {spawner.spawn_food(snake, powerup) for _ in range(50)}
        assert cells <= {(3, 1), DEFAULT_FOOD_CELL}
        assert (3, 1) in cells

    def test_food_falls_back_on_full_board(self):
        """A full board yields the default food cell instead of looping forever."""
        spawner = Spawner(Grid(3, 1), random.Random(2))
        snake = Snake([(3, 1), (2, 1), (1, 1)])
        assert spawner.spawn_food(snake, None) == DEFAULT_FOOD_CELL

    def test_food_on_open_board_is_free(self):
        """Food spawned on a roomy board never overlaps the snake."""
        spawner = Spawner(Grid(10, 10), random.Random(3))
        snake = Snake([(5, 5), (4, 5), (3, 5)])
        for _ in range(100):
            assert not snake.occupies(spawner.spawn_food(snake, None))

    def test_powerup_avoids_snake_and_food(self):
        """Powerups never land on the snake or the food."""
        spawner = Spawner(Grid(3, 1), random.Random(4))
        snake = Snake([(1, 1)])
        placed = [spawner.spawn_powerup(snake, (3, 1), ttl=8.0) for _ in range(50)]
        positions = {p.position for p in placed if p is not None}
        assert positions == {(2, 1)}
        for powerup in placed:
            if powerup is not None:
                assert powerup.ttl == 8.0
                assert powerup.kind in PowerupKind

    def test_powerup_gives_up_on_full_board(self):
        """No free cell means no powerup."""
        spawner = Spawner(Grid(3, 1), random.Random(5))
        snake = Snake([(3, 1), (2, 1)])
        assert spawner.spawn_powerup(snake, (1, 1), ttl=8.0) is None

    def test_powerup_kinds_are_all_reachable(self):
        """Every kind shows up over enough spawns."""
        spawner = Spawner(Grid(10, 10), random.Random(6))
        snake = Snake([(5, 5)])
        kinds = {spawner.spawn_powerup(snake, None, ttl=1.0).kind for _ in range(200)}
        assert kinds == set(PowerupKind)


class TestShieldGuard:
    """Tests for per-tick Shield consumption."""

    def test_absorb_consumes_shield_once(self):
        """The first hazard consumes the Shield, the second rides on it."""
        lifecycle = make_lifecycle()
        lifecycle.shield = True
        guard = ShieldGuard(lifecycle)

        assert guard.absorb() is True
        assert lifecycle.shield is False
        assert guard.consumed is True
        assert guard.absorb() is True
        assert lifecycle.shield is False

    def test_absorb_without_shield(self):
        """Without a Shield nothing is absorbed."""
        lifecycle = make_lifecycle()
        guard = ShieldGuard(lifecycle)
        assert guard.absorb() is False

    def test_new_tick_needs_a_new_shield(self):
        """A fresh guard does not inherit the previous tick's consumption."""
        lifecycle = make_lifecycle()
        lifecycle.shield = True
        ShieldGuard(lifecycle).absorb()
        assert ShieldGuard(lifecycle).absorb() is False


class TestPowerupLifecycle:
    """Tests for the powerup state machine."""

    def test_initial_countdown_in_range(self):
        """A fresh lifecycle is empty with a countdown in the delay range."""
        lifecycle = make_lifecycle()
        assert lifecycle.powerup is None
        assert lifecycle.active_effect is None
        assert lifecycle.shield is False
        assert 1.0 <= lifecycle.next_spawn_in <= 2.0

    def test_spawns_when_countdown_runs_out(self):
        """The spawn callable is only used once the countdown reaches zero."""
        lifecycle = make_lifecycle(spawn_delay_min=1.0, spawn_delay_max=1.0)
        powerup = Powerup(kind=PowerupKind.GHOST, position=(2, 2), ttl=8.0)
        calls = []

        def spawn():
            calls.append(1)
            return powerup

        lifecycle.update(0.5, spawn)
        assert lifecycle.powerup is None
        assert calls == []

        lifecycle.update(0.6, spawn)
        assert lifecycle.powerup is powerup
        assert calls == [1]

    def test_failed_spawn_reschedules(self):
        """A spawn that finds no cell draws a new countdown."""
        lifecycle = make_lifecycle()
        lifecycle.next_spawn_in = 0.01
        lifecycle.update(0.02, lambda: None)
        assert lifecycle.powerup is None
        assert 1.0 <= lifecycle.next_spawn_in <= 2.0

    def test_powerup_expires(self):
        """An uncollected powerup disappears once its ttl runs out."""
        lifecycle = make_lifecycle()
        lifecycle.powerup = Powerup(kind=PowerupKind.SLOW, position=(1, 1), ttl=0.01)
        lifecycle.update(0.02, lambda: pytest.fail("should not spawn"))
        assert lifecycle.powerup is None
        assert 1.0 <= lifecycle.next_spawn_in <= 2.0

    def test_disabled_never_spawns(self):
        """Disabled powerups leave the slot alone."""
        lifecycle = make_lifecycle(enabled=False)
        lifecycle.next_spawn_in = 0.0
        lifecycle.update(100.0, lambda: pytest.fail("should not spawn"))
        assert lifecycle.powerup is None

    def test_shield_pickup_is_idempotent(self):
        """Collecting a Shield while holding one keeps a single Shield."""
        lifecycle = make_lifecycle()
        lifecycle.apply(PowerupKind.SHIELD)
        lifecycle.apply(PowerupKind.SHIELD)
        assert lifecycle.shield is True
        assert lifecycle.active_effect is None

        # One consumption empties it
        assert ShieldGuard(lifecycle).absorb() is True
        assert lifecycle.shield is False

    def test_timed_pickup_replaces_current_effect(self):
        """A new timed effect pre-empts the running one with full duration."""
        lifecycle = make_lifecycle(effect_duration=5.0)
        lifecycle.apply(PowerupKind.GHOST)
        lifecycle.update(3.0, lambda: None)
        lifecycle.apply(PowerupKind.DOUBLE)
        assert lifecycle.active_effect == ActiveEffect(kind=PowerupKind.DOUBLE, remaining=5.0)
        assert not lifecycle.effect_active(PowerupKind.GHOST)

    def test_same_timed_pickup_restarts_duration(self):
        """Picking up the running kind again resets rather than stacks."""
        lifecycle = make_lifecycle(effect_duration=5.0)
        lifecycle.apply(PowerupKind.SLOW)
        lifecycle.update(2.0, lambda: None)
        lifecycle.apply(PowerupKind.SLOW)
        assert lifecycle.active_effect.remaining == 5.0

    def test_shield_coexists_with_timed_effect(self):
        """Shield is orthogonal to the timed effect."""
        lifecycle = make_lifecycle()
        lifecycle.apply(PowerupKind.GHOST)
        lifecycle.apply(PowerupKind.SHIELD)
        assert lifecycle.shield is True
        assert lifecycle.effect_active(PowerupKind.GHOST)

    def test_effect_wears_off(self):
        """The timed effect clears once its remaining time is used up."""
        lifecycle = make_lifecycle(effect_duration=1.0, enabled=False)
        lifecycle.apply(PowerupKind.DOUBLE)
        lifecycle.update(0.5, lambda: None)
        assert lifecycle.effect_active(PowerupKind.DOUBLE)
        lifecycle.update(0.5, lambda: None)
        assert lifecycle.active_effect is None

    def test_collect_clears_slot_and_reschedules(self):
        """Collecting applies the effect and empties the slot."""
        lifecycle = make_lifecycle()
        lifecycle.powerup = Powerup(kind=PowerupKind.SHIELD, position=(3, 3), ttl=4.0)
        lifecycle.next_spawn_in = -1.0

        assert lifecycle.collect() is PowerupKind.SHIELD
        assert lifecycle.powerup is None
        assert lifecycle.shield is True
        assert 1.0 <= lifecycle.next_spawn_in <= 2.0

    def test_collect_without_powerup_raises(self):
        """Collecting from an empty slot is a programming error."""
        with pytest.raises(RuntimeError):
            make_lifecycle().collect()

    def test_reset(self):
        """reset clears the slot, the effect and the Shield."""
        lifecycle = make_lifecycle()
        lifecycle.powerup = Powerup(kind=PowerupKind.SLOW, position=(1, 1), ttl=4.0)
        lifecycle.apply(PowerupKind.GHOST)
        lifecycle.apply(PowerupKind.SHIELD)
        lifecycle.reset()
        assert lifecycle.powerup is None
        assert lifecycle.active_effect is None
        assert lifecycle.shield is False


class TestGameState:
    """Tests for the GameState snapshot."""

    def make_state(self, **overrides):
        params = dict(
            round_state=RoundState.RUNNING,
            tick=4,
            snake_positions=[(3, 2), (2, 2), (1, 2)],
            food=(5, 1),
            powerup={"kind": PowerupKind.GHOST, "position": (1, 3), "ttl": 2.5},
            score=3,
            shield=True,
            active_effect={"kind": PowerupKind.SLOW, "remaining": 1.5},
            width=5,
            height=3,
        )
        params.update(overrides)
        return GameState(**params)

    def test_print_board(self):
        """The board shows head, body, food and powerup symbols row by row."""
        board = self.make_state().print_board().split("\n")
        assert board[0] == " 1 . . . . F"
        assert board[1] == " 2 o o H . ."
        assert board[2] == " 3 G . . . ."
        assert board[3] == "   1 2 3 4 5"

    def test_print_board_without_items(self):
        """Food and powerup are optional."""
        board = self.make_state(food=None, powerup=None).print_board()
        assert "F" not in board
        assert "G" not in board

    def test_to_dict_uses_plain_values(self):
        """to_dict turns enums into their string values."""
        data = self.make_state().to_dict()
        assert data["round_state"] == "running"
        assert data["powerup"] == {"kind": "ghost", "position": (1, 3), "ttl": 2.5}
        assert data["active_effect"] == {"kind": "slow", "remaining": 1.5}
        assert data["score"] == 3
        assert data["death_reason"] is None

    def test_repr(self):
        """GameState has a useful string representation."""
        repr_str = repr(self.make_state())
        assert "running" in repr_str
        assert "score=3" in repr_str
