"""
Engine configuration.

Defaults reproduce the classic 32x24 board. Every field can be overridden from
the environment (POWERSNAKE_WIDTH, POWERSNAKE_WRAP_WALLS, ...), which is how
the CLI picks up values from a local .env file.
"""

import math
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

ENV_PREFIX = "POWERSNAKE_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_DURATION_FIELDS = (
    "base_interval",
    "min_interval",
    "spawn_delay_min",
    "spawn_delay_max",
    "powerup_ttl",
    "effect_duration",
)


class ConfigError(ValueError):
    """Raised when an engine configuration cannot be used."""


@dataclass(frozen=True)
class EngineConfig:
    width: int = 32
    height: int = 24
    base_interval: float = 0.10  # seconds per tick
    min_interval: float = 0.05
    speed_scaling: bool = True  # speed up slowly as score grows
    wrap_walls: bool = False
    powerups_enabled: bool = True
    spawn_delay_min: float = 10.0
    spawn_delay_max: float = 18.0
    powerup_ttl: float = 8.0
    effect_duration: float = 8.0

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        # NaN slips through every comparison below, so rule it out first
        for name in _DURATION_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number, got {value!r}")

        # The three-cell starting snake has to fit on the board
        if self.width < 3:
            raise ConfigError(f"width must be at least 3, got {self.width}")
        if self.height < 1:
            raise ConfigError(f"height must be at least 1, got {self.height}")
        if self.base_interval <= 0:
            raise ConfigError(f"base_interval must be positive, got {self.base_interval}")
        if self.min_interval <= 0:
            raise ConfigError(f"min_interval must be positive, got {self.min_interval}")
        if self.min_interval > self.base_interval:
            raise ConfigError(
                f"min_interval ({self.min_interval}) cannot exceed base_interval ({self.base_interval})"
            )
        if self.spawn_delay_min < 0 or self.spawn_delay_min > self.spawn_delay_max:
            raise ConfigError(
                f"spawn delay range [{self.spawn_delay_min}, {self.spawn_delay_max}] is invalid"
            )
        if self.powerup_ttl <= 0:
            raise ConfigError(f"powerup_ttl must be positive, got {self.powerup_ttl}")
        if self.effect_duration <= 0:
            raise ConfigError(f"effect_duration must be positive, got {self.effect_duration}")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "EngineConfig":
        """
        Build a config from POWERSNAKE_* environment variables.

        Args:
            environ: mapping to read instead of os.environ
            **overrides: explicit values that win over the environment
                (None values are ignored)

        Raises:
            ConfigError: if a variable cannot be parsed or the result is invalid
        """
        if environ is None:
            environ = os.environ

        values: Dict[str, Any] = {}
        for field in fields(cls):
            raw = environ.get(ENV_PREFIX + field.name.upper())
            if raw is None or raw.strip() == "":
                continue
            values[field.name] = _parse_value(field.name, field.type, raw.strip())

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _parse_value(name: str, type_: Any, raw: str) -> Any:
    if type_ in (bool, "bool"):
        lowered = raw.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigError(f"{ENV_PREFIX}{name.upper()} must be a boolean, got {raw!r}")

    if type_ in (int, "int"):
        converter, expected = int, "an integer"
    else:
        converter, expected = float, "a number"
    try:
        return converter(raw)
    except ValueError as exc:
        raise ConfigError(f"{ENV_PREFIX}{name.upper()} must be {expected}, got {raw!r}") from exc
