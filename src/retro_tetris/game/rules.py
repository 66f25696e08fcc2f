from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_multiplier: int = 100
    soft_drop_points: int = 1

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        # Quadratic: 100, 400, 900, 1600 for one to four rows
        return lines * lines * self.line_clear_multiplier


@dataclass
class GravityRules:
    base_interval: float = 1.0
    speed_step: float = 0.05
    min_interval: float = 0.1

    def interval_for_lines(self, lines: int) -> float:
        return max(self.min_interval, self.base_interval - lines * self.speed_step)
