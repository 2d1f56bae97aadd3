from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

import numpy as np

from . import core
from .clock import GameClock, Scheduler
from .core import Command, GameConfig
from .pieces import Piece, PieceGenerator
from .rules import ScoringRules
from .state import ActivePiece, EngineState, GameResult, GameState, GameStats

logger = logging.getLogger(__name__)


class GameEngine:
    """Stateful shell around the pure transitions in :mod:`core`.

    Holds the current :class:`EngineState`, feeds commands and clock ticks
    through the transition functions and keeps the gravity and elapsed-time
    schedules in line with the game state: armed while playing, cancelled
    otherwise, and gravity re-armed whenever the level changes.

    Time only moves when the host pumps the scheduler with its wall clock,
    e.g. from a pygame loop::

        engine = GameEngine(scheduler=Scheduler(pygame.time.get_ticks()))
        engine.start()
        while running:
            for event in pygame.event.get():
                handle_event(engine, event)
            engine.scheduler.advance_to(pygame.time.get_ticks())
            clock.tick(60)
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.scheduler = scheduler or Scheduler()
        self.clock = GameClock(self.scheduler)
        self.generator = PieceGenerator(self.config.random_seed)
        self._state = core.initial_state(self.config)
        self._closed = False

    # ---------- Queries ----------
    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def board(self) -> np.ndarray:
        return self._state.board

    @property
    def active(self) -> Optional[ActivePiece]:
        return self._state.active

    @property
    def next_piece(self) -> Optional[Piece]:
        return self._state.next_piece

    @property
    def game_state(self) -> GameState:
        return self._state.game_state

    @property
    def stats(self) -> GameStats:
        return self._state.stats

    @property
    def closed(self) -> bool:
        return self._closed

    def composite_board(self) -> np.ndarray:
        return core.composite_board(self._state)

    def final_result(self) -> Optional[GameResult]:
        if self._state.game_state is not GameState.GAME_OVER:
            return None
        return GameResult.from_stats(self._state.stats)

    # ---------- Commands ----------
    def dispatch(self, command: Command) -> EngineState:
        if self._closed:
            return self._state
        new = core.step(self._state, command, self.generator, self.config, self.scheduler.now_ms())
        self._commit(new)
        return self._state

    def start(self) -> EngineState:
        return self.dispatch(Command.START)

    def pause(self) -> EngineState:
        return self.dispatch(Command.PAUSE)

    def resume(self) -> EngineState:
        return self.dispatch(Command.RESUME)

    def toggle_pause(self) -> EngineState:
        return self.dispatch(Command.TOGGLE_PAUSE)

    def move_left(self) -> EngineState:
        return self.dispatch(Command.MOVE_LEFT)

    def move_right(self) -> EngineState:
        return self.dispatch(Command.MOVE_RIGHT)

    def soft_drop_step(self) -> EngineState:
        return self.dispatch(Command.SOFT_DROP)

    def hard_drop(self) -> EngineState:
        return self.dispatch(Command.HARD_DROP)

    def rotate(self) -> EngineState:
        return self.dispatch(Command.ROTATE)

    def close(self) -> None:
        """Cancel every schedule; later commands and stray ticks do nothing."""
        self.clock.cancel_all()
        self._closed = True

    # ---------- Clock callbacks ----------
    def _on_gravity(self) -> None:
        if self._closed:
            return
        new = core.gravity_tick(self._state, self.generator, self.config, self.rules)
        if new.game_state is GameState.GAME_OVER:
            # The elapsed tick due at this instant is about to be cancelled
            elapsed = core.elapsed_tick(self._state, self.scheduler.now_ms()).stats.elapsed_seconds
            new = replace(new, stats=replace(new.stats, elapsed_seconds=elapsed))
        self._commit(new)

    def _on_elapsed(self) -> None:
        if self._closed:
            return
        self._commit(core.elapsed_tick(self._state, self.scheduler.now_ms()))

    # ---------- Internals ----------
    def _commit(self, new: EngineState) -> None:
        old = self._state
        if new is old:
            return
        self._state = new
        was_playing = old.game_state is GameState.PLAYING
        is_playing = new.game_state is GameState.PLAYING
        if is_playing and not was_playing:
            self._arm_clocks()
        elif was_playing and not is_playing:
            self.clock.cancel_all()
            logger.debug("Clocks cancelled (%s)", new.game_state.value)
        elif is_playing and new.stats.level != old.stats.level:
            logger.info("Level up: %d", new.stats.level)
            self.clock.arm_gravity(self.rules.gravity_period_ms(new.stats.level), self._on_gravity)

    def _arm_clocks(self) -> None:
        level = self._state.stats.level
        self.clock.arm_gravity(self.rules.gravity_period_ms(level), self._on_gravity)
        self.clock.arm_elapsed(self.config.elapsed_tick_ms, self._on_elapsed)
