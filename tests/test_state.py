from __future__ import annotations

import pytest

from falling_blocks.game.state import GameResult, GameState, GameStats, format_time


@pytest.mark.parametrize("seconds, text", [(0, "00:00"), (59, "00:59"), (61, "01:01"), (3600, "60:00")])
def test_format_time(seconds, text):
    assert format_time(seconds) == text


def test_game_result_from_stats():
    result = GameResult.from_stats(GameStats(score=1200, lines=12, level=2, elapsed_seconds=95))
    assert result.as_dict() == {"score": 1200, "lines": 12, "level": 2, "time": 95}


def test_game_state_values():
    assert [s.value for s in GameState] == ["idle", "playing", "paused", "gameOver"]
