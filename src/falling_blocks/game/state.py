from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

import numpy as np

from .pieces import Piece


class GameState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class GameStats:
    score: int = 0
    lines: int = 0
    level: int = 1
    elapsed_seconds: int = 0


@dataclass(frozen=True, eq=False)
class ActivePiece:
    piece: Piece
    x: int
    y: int

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return ActivePiece(self.piece, self.x + dx, self.y + dy)


@dataclass(frozen=True)
class GameResult:
    """Final stats handed to whoever records a finished game."""

    score: int
    lines: int
    level: int
    elapsed_seconds: int

    @classmethod
    def from_stats(cls, stats: GameStats) -> "GameResult":
        return cls(stats.score, stats.lines, stats.level, stats.elapsed_seconds)

    def as_dict(self) -> Dict[str, int]:
        return {
            "score": self.score,
            "lines": self.lines,
            "level": self.level,
            "time": self.elapsed_seconds,
        }


@dataclass(frozen=True, eq=False)
class EngineState:
    """Everything the engine knows, as one immutable value.

    ``active`` is only set while playing or paused. ``session_start_ms`` is the
    reference the elapsed-time tick measures from; ``paused_elapsed_ms`` holds
    the exact elapsed time captured at pause so resume can rebase it.
    """

    board: np.ndarray
    game_state: GameState = GameState.IDLE
    active: Optional[ActivePiece] = None
    next_piece: Optional[Piece] = None
    stats: GameStats = field(default_factory=GameStats)
    session_start_ms: Optional[int] = None
    paused_elapsed_ms: int = 0


def format_time(seconds: int) -> str:
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
