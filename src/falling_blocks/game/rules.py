from __future__ import annotations

from dataclasses import dataclass, replace

from .state import GameStats


@dataclass(frozen=True)
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    lines_per_level: int = 10
    base_gravity_ms: int = 1000
    gravity_step_ms: int = 100
    min_gravity_ms: int = 100

    def __post_init__(self) -> None:
        if len(self.line_clear_scores) != 4 or any(s < 0 for s in self.line_clear_scores):
            raise ValueError(f"line_clear_scores must be 4 non-negative values, got {self.line_clear_scores}")
        if self.lines_per_level <= 0:
            raise ValueError(f"lines_per_level must be positive, got {self.lines_per_level}")
        if self.min_gravity_ms <= 0 or self.base_gravity_ms < self.min_gravity_ms:
            raise ValueError(
                f"gravity periods must satisfy 0 < min_gravity_ms <= base_gravity_ms, "
                f"got {self.min_gravity_ms} / {self.base_gravity_ms}"
            )
        if self.gravity_step_ms < 0:
            raise ValueError(f"gravity_step_ms must be non-negative, got {self.gravity_step_ms}")

    def level_for_lines(self, lines: int) -> int:
        return lines // self.lines_per_level + 1

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1] * level
        # Unreachable with the stock catalog; extrapolate for taller pieces
        return (self.line_clear_scores[-1] + (lines - 4) * 400) * level

    def gravity_period_ms(self, level: int) -> int:
        return max(self.min_gravity_ms, self.base_gravity_ms - (level - 1) * self.gravity_step_ms)

    def apply_clear(self, stats: GameStats, count: int) -> GameStats:
        """Fold `count` cleared rows into `stats`.

        The score multiplier is the level reached *after* this clear, so a
        clear that levels up is paid at the new level.
        """
        if count <= 0:
            return stats
        lines = stats.lines + count
        level = self.level_for_lines(lines)
        return replace(
            stats,
            score=stats.score + self.score_for_lines(count, level),
            lines=lines,
            level=level,
        )
