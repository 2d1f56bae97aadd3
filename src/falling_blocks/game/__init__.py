"""Game module for Falling Blocks.

Exports the core engine and supporting pieces:
- Piece / TetrominoType / PieceGenerator: catalog, rotation and random draws
- is_valid / place / clear_lines: collision and board placement
- ScoringRules: line scores, leveling and gravity speed
- EngineState / GameState / GameStats: immutable engine state
- Scheduler / GameClock: cancellable periodic ticks
- GameEngine: stateful shell wiring state, clock and commands together
"""

from .pieces import CATALOG, Piece, PieceGenerator, TetrominoType, rotate
from .grid import clear_lines, is_valid, lock_piece, place
from .rules import ScoringRules
from .state import ActivePiece, EngineState, GameResult, GameState, GameStats, format_time
from .core import Command, GameConfig
from .clock import GameClock, Scheduler, TimerHandle
from .engine import GameEngine
from .controls import KEY_TO_COMMAND, command_for_key, handle_event, handle_key

__all__ = [
    "CATALOG",
    "Piece",
    "PieceGenerator",
    "TetrominoType",
    "rotate",
    "clear_lines",
    "is_valid",
    "lock_piece",
    "place",
    "ScoringRules",
    "ActivePiece",
    "EngineState",
    "GameResult",
    "GameState",
    "GameStats",
    "format_time",
    "Command",
    "GameConfig",
    "GameClock",
    "Scheduler",
    "TimerHandle",
    "GameEngine",
    "KEY_TO_COMMAND",
    "command_for_key",
    "handle_event",
    "handle_key",
]
