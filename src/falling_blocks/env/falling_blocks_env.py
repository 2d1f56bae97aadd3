from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, GameConfig, GameEngine, GameState, ScoringRules, Scheduler
from falling_blocks.game.grid import count_holes, get_max_height


# Action index -> engine command (None = let gravity act alone)
ACTIONS: Tuple[Optional[Command], ...] = (
    None,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
    Command.HARD_DROP,
)


class FallingBlocksEnv(gym.Env):
    """One player action followed by one gravity tick per step.

    Time is virtual: each step advances the engine's scheduler by the current
    gravity period, so elapsed seconds and level speed-ups behave as they
    would in real play.
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 max_level: int = 999) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.engine = GameEngine(self.config, self.rules, Scheduler())
        self._has_reset = False

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=7, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(8),
                "level": spaces.Box(low=1, high=max_level, shape=(1,), dtype=np.int32),
            }
        )
        self.action_space = spaces.Discrete(len(ACTIONS))

    def _get_obs(self) -> Dict[str, Any]:
        nxt = self.engine.next_piece
        return {
            "board": self.engine.composite_board().astype(np.int8),
            "next_piece": int(nxt.kind) if nxt is not None else 0,
            "level": np.array([self.engine.stats.level], dtype=np.int32),
        }

    def _get_info(self) -> Dict[str, Any]:
        stats = self.engine.stats
        board = self.engine.board
        return {
            "score": stats.score,
            "lines": stats.lines,
            "level": stats.level,
            "elapsed_seconds": stats.elapsed_seconds,
            "game_state": self.engine.game_state.value,
            "max_height": get_max_height(board),
            "holes": count_holes(board),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        if seed is None and not self._has_reset:
            seed = self.config.random_seed
        super().reset(seed=seed)
        self._has_reset = True
        self.engine.close()
        # Unseeded resets continue the np_random stream instead of replaying a game
        piece_seed = int(self.np_random.integers(0, 2**31 - 1))
        config = replace(self.config, random_seed=piece_seed)
        self.engine = GameEngine(config, self.rules, Scheduler())
        self.engine.start()
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = ACTIONS[int(action)]
        score_before = self.engine.stats.score

        if command is not None:
            self.engine.dispatch(command)
        period = self.engine.clock.gravity_period_ms
        if period is not None:
            self.engine.scheduler.advance(period)

        terminated = self.engine.game_state is GameState.GAME_OVER
        reward = float(self.engine.stats.score - score_before)
        info = self._get_info()
        if terminated:
            info["result"] = self.engine.final_result().as_dict()
        return self._get_obs(), reward, terminated, False, info

    def close(self) -> None:
        self.engine.close()
