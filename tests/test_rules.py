from __future__ import annotations

import pytest

from falling_blocks.game.rules import ScoringRules
from falling_blocks.game.state import GameStats


def test_level_follows_lines():
    rules = ScoringRules()
    assert rules.level_for_lines(0) == 1
    assert rules.level_for_lines(9) == 1
    assert rules.level_for_lines(10) == 2
    assert rules.level_for_lines(35) == 4


def test_single_clear_at_level_one():
    stats = ScoringRules().apply_clear(GameStats(), 1)
    assert stats == GameStats(score=100, lines=1, level=1)


def test_four_line_clear_uses_new_level():
    stats = ScoringRules().apply_clear(GameStats(), 4)
    assert stats.score == 800 * stats.level == 800
    stats = ScoringRules().apply_clear(GameStats(lines=8), 4)
    assert (stats.lines, stats.level, stats.score) == (12, 2, 1600)


def test_level_up_clear_paid_at_new_level():
    before = GameStats(score=1000, lines=9, level=1, elapsed_seconds=42)
    after = ScoringRules().apply_clear(before, 1)
    assert after.lines == 10
    assert after.level == 2
    assert after.score - before.score == 200
    assert after.elapsed_seconds == 42


def test_no_clear_returns_stats_unchanged():
    stats = GameStats(score=300, lines=2)
    assert ScoringRules().apply_clear(stats, 0) is stats


@pytest.mark.parametrize("count, expected", [(1, 100), (2, 300), (3, 500), (4, 800), (5, 1200)])
def test_score_table(count, expected):
    assert ScoringRules().score_for_lines(count) == expected


@pytest.mark.parametrize("level, period", [(1, 1000), (2, 900), (5, 600), (10, 100), (25, 100)])
def test_gravity_period(level, period):
    assert ScoringRules().gravity_period_ms(level) == period


def test_invalid_rules_raise():
    with pytest.raises(ValueError):
        ScoringRules(line_clear_scores=(100, 300, 500))  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        ScoringRules(lines_per_level=0)
    with pytest.raises(ValueError):
        ScoringRules(min_gravity_ms=0)
