from __future__ import annotations

from typing import Dict, Optional

import pygame

from .core import Command
from .engine import GameEngine
from .state import GameState


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_a: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_d: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_s: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_SPACE: Command.ROTATE,
    pygame.K_w: Command.ROTATE,
    pygame.K_p: Command.TOGGLE_PAUSE,
}


def command_for_key(key: int, game_state: GameState) -> Optional[Command]:
    """Resolve `key` to a command, or None when it is unmapped or gated off.

    Everything is live only while playing; the pause key also works while
    paused so it can resume.
    """
    command = KEY_TO_COMMAND.get(key)
    if command is None:
        return None
    if game_state is GameState.PLAYING:
        return command
    if game_state is GameState.PAUSED and command == Command.TOGGLE_PAUSE:
        return command
    return None


def handle_key(engine: GameEngine, key: int) -> bool:
    """Apply `key` to `engine`. Returns True when the key was consumed,
    i.e. the host should suppress its own handling of it."""
    command = command_for_key(key, engine.game_state)
    if command is None:
        return False
    engine.dispatch(command)
    return True


def handle_event(engine: GameEngine, event: pygame.event.Event) -> bool:
    if event.type != pygame.KEYDOWN:
        return False
    return handle_key(engine, event.key)
