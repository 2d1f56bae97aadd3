from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import drop_distance, empty_board, is_valid, lock_piece
from .pieces import Piece, PieceGenerator
from .rules import ScoringRules
from .state import ActivePiece, EngineState, GameState, GameStats

logger = logging.getLogger(__name__)


class Command(IntEnum):
    START = 0
    PAUSE = 1
    RESUME = 2
    TOGGLE_PAUSE = 3
    MOVE_LEFT = 4
    MOVE_RIGHT = 5
    SOFT_DROP = 6
    HARD_DROP = 7
    ROTATE = 8


@dataclass(frozen=True)
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0
    elapsed_tick_ms: int = 1000

    def __post_init__(self) -> None:
        # The I piece is 4 wide lying down and 4 tall standing up
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        # Cells above row 0 are dropped on lock, so spawns must start on the board
        if not 0 <= self.spawn_y < self.height:
            raise ValueError(f"spawn_y must be within [0, {self.height}), got {self.spawn_y}")
        if self.elapsed_tick_ms <= 0:
            raise ValueError(f"elapsed_tick_ms must be positive, got {self.elapsed_tick_ms}")


def initial_state(config: GameConfig) -> EngineState:
    return EngineState(board=empty_board(config.width, config.height))


def spawn_position(piece: Piece, config: GameConfig) -> Tuple[int, int]:
    return config.width // 2 - piece.width // 2, config.spawn_y


def _spawn(state: EngineState, piece: Piece, generator: PieceGenerator, config: GameConfig) -> EngineState:
    x, y = spawn_position(piece, config)
    upcoming = generator.next_piece()
    if not is_valid(piece, x, y, state.board):
        logger.info(
            "Game over: %s blocked at spawn (score=%d lines=%d level=%d time=%ds)",
            piece.kind.name, state.stats.score, state.stats.lines, state.stats.level,
            state.stats.elapsed_seconds,
        )
        return replace(state, game_state=GameState.GAME_OVER, active=None, next_piece=upcoming)
    logger.debug("Spawned %s at (%d, %d), next %s", piece.kind.name, x, y, upcoming.kind.name)
    return replace(state, active=ActivePiece(piece, x, y), next_piece=upcoming)


def start_game(state: EngineState, generator: PieceGenerator, config: GameConfig, now_ms: int) -> EngineState:
    if state.game_state not in (GameState.IDLE, GameState.GAME_OVER):
        return state
    fresh = EngineState(
        board=empty_board(config.width, config.height),
        game_state=GameState.PLAYING,
        stats=GameStats(),
        session_start_ms=now_ms,
    )
    logger.info("New game started")
    return _spawn(fresh, generator.next_piece(), generator, config)


def pause_game(state: EngineState, now_ms: int) -> EngineState:
    if state.game_state is not GameState.PLAYING:
        return state
    elapsed_ms = now_ms - state.session_start_ms if state.session_start_ms is not None else 0
    return replace(state, game_state=GameState.PAUSED, paused_elapsed_ms=max(0, elapsed_ms))


def resume_game(state: EngineState, now_ms: int) -> EngineState:
    if state.game_state is not GameState.PAUSED:
        return state
    # Rebase so that the paused interval never counts towards elapsed time
    return replace(
        state,
        game_state=GameState.PLAYING,
        session_start_ms=now_ms - state.paused_elapsed_ms,
    )


def toggle_pause(state: EngineState, now_ms: int) -> EngineState:
    if state.game_state is GameState.PLAYING:
        return pause_game(state, now_ms)
    return resume_game(state, now_ms)


def move(state: EngineState, dx: int, dy: int) -> EngineState:
    if state.game_state is not GameState.PLAYING or state.active is None:
        return state
    candidate = state.active.moved(dx, dy)
    if not is_valid(candidate.piece, candidate.x, candidate.y, state.board):
        return state
    return replace(state, active=candidate)


def rotate_active(state: EngineState) -> EngineState:
    if state.game_state is not GameState.PLAYING or state.active is None:
        return state
    active = state.active
    rotated = active.piece.rotated()
    # No wall kicks: the rotated shape must fit where the piece already is
    if not is_valid(rotated, active.x, active.y, state.board):
        return state
    return replace(state, active=ActivePiece(rotated, active.x, active.y))


def hard_drop(state: EngineState) -> EngineState:
    """Move the active piece to its lowest valid row; locking is left to gravity."""
    if state.game_state is not GameState.PLAYING or state.active is None:
        return state
    active = state.active
    distance = drop_distance(active.piece, active.x, active.y, state.board)
    if distance == 0:
        return state
    return replace(state, active=active.moved(0, distance))


def gravity_tick(
    state: EngineState,
    generator: PieceGenerator,
    config: GameConfig,
    rules: ScoringRules,
) -> EngineState:
    if state.game_state is not GameState.PLAYING or state.active is None:
        return state
    moved = move(state, 0, 1)
    if moved is not state:
        return moved

    active = state.active
    result = lock_piece(active.piece, active.x, active.y, state.board)
    stats = rules.apply_clear(state.stats, result.lines_cleared)
    if result.lines_cleared:
        logger.debug(
            "Cleared %d line(s): score=%d lines=%d level=%d",
            result.lines_cleared, stats.score, stats.lines, stats.level,
        )
    locked = replace(state, board=result.board, stats=stats, active=None)
    upcoming = state.next_piece if state.next_piece is not None else generator.next_piece()
    return _spawn(locked, upcoming, generator, config)


def elapsed_tick(state: EngineState, now_ms: int) -> EngineState:
    if state.game_state is not GameState.PLAYING or state.session_start_ms is None:
        return state
    seconds = max(state.stats.elapsed_seconds, (now_ms - state.session_start_ms) // 1000)
    if seconds == state.stats.elapsed_seconds:
        return state
    return replace(state, stats=replace(state.stats, elapsed_seconds=seconds))


def step(
    state: EngineState,
    command: Command,
    generator: PieceGenerator,
    config: GameConfig,
    now_ms: int,
) -> EngineState:
    if command == Command.START:
        return start_game(state, generator, config, now_ms)
    elif command == Command.PAUSE:
        return pause_game(state, now_ms)
    elif command == Command.RESUME:
        return resume_game(state, now_ms)
    elif command == Command.TOGGLE_PAUSE:
        return toggle_pause(state, now_ms)
    elif command == Command.MOVE_LEFT:
        return move(state, -1, 0)
    elif command == Command.MOVE_RIGHT:
        return move(state, 1, 0)
    elif command == Command.SOFT_DROP:
        return move(state, 0, 1)
    elif command == Command.HARD_DROP:
        return hard_drop(state)
    elif command == Command.ROTATE:
        return rotate_active(state)
    return state


def composite_board(state: EngineState) -> np.ndarray:
    # Overlay the active piece on a copy of the board for presenters
    board = state.board.copy()
    active = state.active
    if active is not None:
        height, width = board.shape
        for x, y in active.piece.cells_at(active.x, active.y):
            if 0 <= y < height and 0 <= x < width:
                board[y, x] = active.piece.color
    return board
