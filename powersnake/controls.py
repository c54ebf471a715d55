"""
Keyboard bindings for the engine.

Maps key names, as a windowing or terminal layer reports them, to engine
commands. Polling the keyboard is left to the caller.
"""

from typing import TYPE_CHECKING

from .domain.constants import UP, DOWN, LEFT, RIGHT

if TYPE_CHECKING:
    from .engine import SnakeEngine

DIRECTION_KEYS = {
    "w": UP,
    "a": LEFT,
    "s": DOWN,
    "d": RIGHT,
    "up": UP,
    "left": LEFT,
    "down": DOWN,
    "right": RIGHT,
}

PAUSE_KEY = "p"
RESTART_KEY = "r"


def handle_key(engine: "SnakeEngine", key: str) -> bool:
    """
    Forward a key press to the engine.

    Returns:
        True if the key is bound to a command, False otherwise.
    """
    key = key.strip().lower()

    if key == PAUSE_KEY:
        engine.toggle_pause()
        return True
    if key == RESTART_KEY:
        engine.restart()
        return True

    direction = DIRECTION_KEYS.get(key)
    if direction is None:
        return False
    engine.request_direction(direction)
    return True
