"""
Single-snake simulation engine with powerups.

The engine owns every piece of mutable round state. External code feeds it
input (request_direction, toggle_pause, restart) and elapsed real time
(update), and reads it back through snapshot().
"""

import logging
import random
import uuid
from typing import Any, Dict, List, Optional, Tuple

from .config import EngineConfig
from .domain.constants import (
    DIRECTION_VECTORS,
    OPPOSITE,
    RIGHT,
    SLOW_INTERVAL_MULTIPLIER,
    SPEED_STEP_PER_POINT,
    VALID_MOVES,
    PowerupKind,
    RoundState,
)
from .domain.game_state import GameState
from .domain.grid import Grid
from .domain.powerups import Powerup, PowerupLifecycle, ShieldGuard
from .domain.snake import Snake
from .domain.spawner import Spawner

logger = logging.getLogger(__name__)

# Float slack when draining the accumulator, so 0.1 * 1.75 still fires at 0.175
TICK_EPSILON = 1e-9


class SnakeEngine:
    """
    Manages:
      - Board geometry
      - The snake and its direction
      - Food
      - The powerup slot, timed effect and Shield
      - Score
      - Round state
      - The fixed-step tick scheduler
      - Optional per-tick history for replays
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rng: Optional[random.Random] = None,
        record_history: bool = False,
        game_id: Optional[str] = None
    ):
        self.config = config or EngineConfig()
        self.rng = rng or random.Random()
        self.game_id = game_id or str(uuid.uuid4())
        self.record_history = record_history

        self.grid = Grid(self.config.width, self.config.height)
        self.spawner = Spawner(self.grid, self.rng)
        self.powerups = PowerupLifecycle(
            enabled=self.config.powerups_enabled,
            spawn_delay_min=self.config.spawn_delay_min,
            spawn_delay_max=self.config.spawn_delay_max,
            ttl=self.config.powerup_ttl,
            effect_duration=self.config.effect_duration,
            rng=self.rng,
        )

        self.snake: Snake
        self.direction = RIGHT
        self.next_direction = RIGHT
        self.food: Optional[Tuple[int, int]] = None
        self.score = 0
        self.tick = 0
        self.accumulator = 0.0
        self.round_state = RoundState.NOT_STARTED
        self.history: List[GameState] = []

        self.reset_round()

    # ------------------------------------------------------------------
    # Round lifecycle and input
    # ------------------------------------------------------------------

    def _start_positions(self) -> List[Tuple[int, int]]:
        start_x = max((self.grid.width + 1) // 2, 3)
        start_y = (self.grid.height + 1) // 2
        return [(start_x, start_y), (start_x - 1, start_y), (start_x - 2, start_y)]

    def reset_round(self) -> None:
        """Create every round entity fresh and go back to NOT_STARTED."""
        self.score = 0
        self.tick = 0
        self.accumulator = 0.0
        self.round_state = RoundState.NOT_STARTED

        self.snake = Snake(self._start_positions())
        self.direction = RIGHT
        self.next_direction = RIGHT

        self.powerups.reset()
        self.food = None
        self.spawn_food()
        self.history = []

    def request_direction(self, direction: str) -> None:
        """
        Buffer a direction for the next tick.

        A request that reverses the current direction is ignored. The first
        accepted request of a fresh round starts it.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction {direction!r}. Expected one of {sorted(VALID_MOVES)}.")
        if self.round_state == RoundState.ENDED:
            return
        if direction == OPPOSITE[self.direction]:
            return

        self.next_direction = direction
        if self.round_state == RoundState.NOT_STARTED:
            self.round_state = RoundState.RUNNING
            logger.info(f"Round {self.game_id} started heading {direction}")

    def toggle_pause(self) -> None:
        if self.round_state == RoundState.RUNNING:
            self.round_state = RoundState.PAUSED
            logger.debug("Paused")
        elif self.round_state == RoundState.PAUSED:
            self.round_state = RoundState.RUNNING
            logger.debug("Resumed")

    def restart(self) -> None:
        logger.info(f"Restarting round (previous score {self.score})")
        self.reset_round()

    def _end_round(self, reason: str) -> None:
        self.round_state = RoundState.ENDED
        self.snake.alive = False
        self.snake.death_reason = reason
        self.snake.death_tick = self.tick
        logger.info(f"Round over: hit {reason} at tick {self.tick} with score {self.score}")
        self._record()

    # ------------------------------------------------------------------
    # Spawning
    # ------------------------------------------------------------------

    def spawn_food(self) -> None:
        self.food = self.spawner.spawn_food(self.snake, self.powerups.powerup)

    def spawn_powerup(self) -> Optional[Powerup]:
        """
        Return a new powerup on a free cell.

        Returns None when powerups are disabled, one is already on the board,
        or no free cell was found.
        """
        if not self.config.powerups_enabled or self.powerups.powerup is not None:
            return None
        return self.spawner.spawn_powerup(self.snake, self.food, self.config.powerup_ttl)

    # ------------------------------------------------------------------
    # Scheduler
    # ------------------------------------------------------------------

    def current_interval(self) -> float:
        """Seconds per tick given the score and the active effect."""
        interval = self.config.base_interval
        if self.config.speed_scaling:
            interval -= SPEED_STEP_PER_POINT * self.score
        interval = min(max(interval, self.config.min_interval), self.config.base_interval)

        if self.powerups.effect_active(PowerupKind.SLOW):
            interval *= SLOW_INTERVAL_MULTIPLIER
        return interval

    def update(self, dt: float) -> int:
        """
        Feed dt seconds of real time into the scheduler.

        Powerup timers advance by dt, then as many whole ticks as fit in the
        accumulated time are resolved. Does nothing unless the round is
        running.

        Returns:
            The number of ticks resolved.

        Raises:
            ValueError: if dt is negative
        """
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")
        if self.round_state != RoundState.RUNNING:
            return 0

        self.powerups.update(dt, self.spawn_powerup)

        self.accumulator += dt
        ticks = 0
        interval = self.current_interval()
        while self.accumulator + TICK_EPSILON >= interval:
            self.accumulator -= interval
            self.step()
            ticks += 1
            if self.round_state != RoundState.RUNNING:
                break
            interval = self.current_interval()
        return ticks

    # ------------------------------------------------------------------
    # Resolver
    # ------------------------------------------------------------------

    def step(self) -> None:
        """
        Resolve one tick:
          1) Commit the buffered direction
          2) Compute the new head
          3) Walls: wrap, or absorb with the Shield, or die
          4) Check whether the new head lands on food
          5) Self-collision unless Ghost is active: absorb with the Shield, or die
          6) Move the head
          7) Collect a powerup under the head
          8) Grow and score on food, otherwise drop the tail
        """
        if not self.snake.alive:
            return

        self.direction = self.next_direction
        self.tick += 1

        dx, dy = DIRECTION_VECTORS[self.direction]
        hx, hy = self.snake.head
        new_head = (hx + dx, hy + dy)

        # One guard for both hazards, so the Shield goes at most once per tick
        guard = ShieldGuard(self.powerups)

        if self.config.wrap_walls:
            new_head = self.grid.wrap(new_head)
        elif not self.grid.in_bounds(new_head):
            if not guard.absorb():
                self._end_round("wall")
                return
            # Clamping a single step always lands back on the head, so the
            # snake holds its position this tick.
            new_head = self.grid.clamp(new_head)
            logger.info(f"Shield absorbed a wall hit at {new_head}")
            self._record()
            return

        will_eat = new_head == self.food
        ghost_active = self.powerups.effect_active(PowerupKind.GHOST)

        if not ghost_active and self.snake.occupies(new_head, exclude_tail=not will_eat):
            if not guard.absorb():
                self._end_round("self")
                return
            logger.info(f"Shield absorbed a self collision at {new_head}")

        self.snake.push_head(new_head)

        powerup = self.powerups.powerup
        if powerup is not None and powerup.position == new_head:
            self.powerups.collect()

        if will_eat:
            gain = 2 if self.powerups.effect_active(PowerupKind.DOUBLE) else 1
            self.score += gain
            self.spawn_food()
        else:
            self.snake.pop_tail()

        self._record()

    # ------------------------------------------------------------------
    # Snapshots and history
    # ------------------------------------------------------------------

    def snapshot(self) -> GameState:
        """Return a read-only copy of the current round for rendering or logging."""
        powerup = None
        if self.powerups.powerup is not None:
            powerup = {
                "kind": self.powerups.powerup.kind,
                "position": self.powerups.powerup.position,
                "ttl": max(0.0, self.powerups.powerup.ttl),
            }
        active_effect = None
        if self.powerups.active_effect is not None:
            active_effect = {
                "kind": self.powerups.active_effect.kind,
                "remaining": max(0.0, self.powerups.active_effect.remaining),
            }

        return GameState(
            round_state=self.round_state,
            tick=self.tick,
            snake_positions=list(self.snake.positions),
            food=self.food,
            powerup=powerup,
            score=self.score,
            shield=self.powerups.shield,
            active_effect=active_effect,
            width=self.grid.width,
            height=self.grid.height,
            death_reason=self.snake.death_reason
        )

    def _record(self) -> None:
        if self.record_history:
            self.history.append(self.snapshot())

    def serialize_history(self) -> List[Dict[str, Any]]:
        """Convert the recorded snapshots to JSON-serializable dicts."""
        return [state.to_dict() for state in self.history]

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.snapshot().print_board() + "\n")

    def __repr__(self):
        return (
            f"<SnakeEngine {self.grid.width}x{self.grid.height} {self.round_state.value} "
            f"tick={self.tick} score={self.score}>"
        )
