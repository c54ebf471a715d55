"""
powersnake - a fixed-step snake simulation engine with powerups.
"""

from .config import ConfigError, EngineConfig
from .controls import handle_key
from .engine import SnakeEngine

__all__ = [
    'ConfigError',
    'EngineConfig',
    'SnakeEngine',
    'handle_key',
]

__version__ = "0.1.0"
