from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_base: int = 100
    lock_bonus: int = 10
    level_threshold: int = 1000
    interval_step: int = 50
    min_interval: int = 100

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * lines * self.line_clear_base

    def score_for_lock(self, lines: int, dropped_rows: int = 0) -> int:
        return self.score_for_lines(lines) + self.lock_bonus + max(0, dropped_rows)

    def should_level_up(self, score: int, level: int) -> bool:
        return score >= level * self.level_threshold

    def next_interval(self, interval: int) -> int:
        return max(interval - self.interval_step, self.min_interval)
