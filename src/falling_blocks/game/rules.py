from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_line: int = 100

    def score_for_lines(self, lines: int) -> int:
        # Linear: four rows in one settle is 4x one row, no bonus.
        if lines < 0:
            raise ValueError(f"lines must be >= 0, got {lines}")
        return lines * self.points_per_line
