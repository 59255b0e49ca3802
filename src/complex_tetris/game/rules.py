from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 100, 300, 500, 800)
    lines_per_level: int = 10

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        if lines < len(self.line_clear_scores):
            base = self.line_clear_scores[lines]
        else:
            # Unreachable with four-cell pieces
            base = self.line_clear_scores[-1] + (lines - 4) * 400
        return base * (level + 1)

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level


DEFAULT_RULES = ScoringRules()


def calculate_score(lines_cleared: int, level: int) -> int:
    return DEFAULT_RULES.score_for_lines(lines_cleared, level)


def level_for_lines(total_lines: int) -> int:
    return DEFAULT_RULES.level_for_lines(total_lines)


def drop_interval_ms(level: int) -> int:
    """Auto-drop period for the timer driver: 1 s at level 0, 100 ms faster per level."""
    return max(100, 1000 - level * 100)
