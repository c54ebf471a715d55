"""
Powerup entities and the lifecycle that spawns, expires and applies them.

A single powerup slot cycles Empty -> Present -> (Collected | Expired) -> Empty.
While empty, a countdown drawn from the configured delay range runs down and
triggers a spawn attempt. A present powerup loses ttl until it is collected or
disappears. Timed effects (Ghost, Double, Slow) share one slot and replace each
other on pickup; Shield is a separate one-shot flag.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .constants import PowerupKind

logger = logging.getLogger(__name__)


@dataclass
class Powerup:
    kind: PowerupKind
    position: Tuple[int, int]
    ttl: float


@dataclass
class ActiveEffect:
    kind: PowerupKind
    remaining: float


class ShieldGuard:
    """
    Shield consumption for a single tick.

    Both hazard checks of a tick go through the same guard, so the Shield is
    consumed at most once per tick. Once it has absorbed a hazard, any later
    hazard in the same tick is covered by that consumption.
    """

    def __init__(self, lifecycle: "PowerupLifecycle"):
        self._lifecycle = lifecycle
        self.consumed = False

    def absorb(self) -> bool:
        if self.consumed:
            return True
        if self._lifecycle.shield:
            self._lifecycle.shield = False
            self.consumed = True
            logger.debug("Shield consumed")
            return True
        return False


class PowerupLifecycle:
    """
    Owns the powerup slot, the timed effect and the Shield flag.

    Attributes:
        powerup: the powerup on the board, if any
        active_effect: the running timed effect, if any
        shield: whether a Shield is held
        next_spawn_in: seconds until the next spawn attempt (only meaningful
            while the slot is empty)
    """

    def __init__(
        self,
        enabled: bool,
        spawn_delay_min: float,
        spawn_delay_max: float,
        ttl: float,
        effect_duration: float,
        rng: Optional[random.Random] = None,
    ):
        self.enabled = enabled
        self.spawn_delay_min = spawn_delay_min
        self.spawn_delay_max = spawn_delay_max
        self.ttl = ttl
        self.effect_duration = effect_duration
        self.rng = rng or random.Random()

        self.powerup: Optional[Powerup] = None
        self.active_effect: Optional[ActiveEffect] = None
        self.shield = False
        self.next_spawn_in = 0.0
        self.reset()

    def reset(self) -> None:
        self.powerup = None
        self.active_effect = None
        self.shield = False
        self.schedule_next()

    def schedule_next(self) -> None:
        self.next_spawn_in = self.rng.uniform(self.spawn_delay_min, self.spawn_delay_max)

    def effect_active(self, kind: PowerupKind) -> bool:
        return self.active_effect is not None and self.active_effect.kind is kind

    def update(self, dt: float, spawn: Callable[[], Optional[Powerup]]) -> None:
        """
        Advance every timer by dt seconds.

        Args:
            dt: elapsed real time
            spawn: callable returning a freshly placed powerup, or None when
                no free cell was found
        """
        if self.enabled:
            if self.powerup is not None:
                self.powerup.ttl -= dt
                if self.powerup.ttl <= 0:
                    logger.debug(
                        f"Powerup {self.powerup.kind.value} expired at {self.powerup.position}"
                    )
                    self.powerup = None
                    self.schedule_next()
            else:
                self.next_spawn_in -= dt
                if self.next_spawn_in <= 0:
                    self.powerup = spawn()
                    if self.powerup is None:
                        logger.debug("No free cell for a powerup, retrying later")
                        self.schedule_next()
                    else:
                        logger.debug(
                            f"Spawned {self.powerup.kind.value} at {self.powerup.position}"
                        )

        if self.active_effect is not None:
            self.active_effect.remaining -= dt
            if self.active_effect.remaining <= 0:
                logger.debug(f"Effect {self.active_effect.kind.value} wore off")
                self.active_effect = None

    def apply(self, kind: PowerupKind) -> None:
        if kind is PowerupKind.SHIELD:
            self.shield = True
        elif kind in (PowerupKind.GHOST, PowerupKind.DOUBLE, PowerupKind.SLOW):
            self.active_effect = ActiveEffect(kind=kind, remaining=self.effect_duration)
        else:
            raise ValueError(f"Unknown powerup kind: {kind!r}")

    def collect(self) -> PowerupKind:
        """Apply the powerup on the board, remove it and restart the spawn timer."""
        if self.powerup is None:
            raise RuntimeError("No powerup to collect.")
        kind = self.powerup.kind
        self.apply(kind)
        logger.debug(f"Collected {kind.value} at {self.powerup.position}")
        self.powerup = None
        self.schedule_next()
        return kind
