from __future__ import annotations

from dataclasses import dataclass

from blinker import Signal


@dataclass
class ScoringRules:
    line_clear_factor: int = 50
    soft_drop_points: int = 1
    hard_drop_points_per_row: int = 2

    def score_for_lines(self, lines: int) -> int:
        # Quadratic: a four-line clear is worth sixteen singles.
        if lines <= 0:
            return 0
        return self.line_clear_factor * lines * lines

    def score_for_hard_drop(self, rows: int) -> int:
        return self.hard_drop_points_per_row * max(0, rows)


class Score:
    """Running score. ``changed`` fires with the new value after every update."""

    def __init__(self) -> None:
        self.changed = Signal("score-changed")
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    def add(self, delta: int) -> None:
        if delta == 0:
            return
        self._value += delta
        self.changed.send(self, value=self._value)

    def reset(self) -> None:
        self._value = 0
        self.changed.send(self, value=self._value)

    def __repr__(self) -> str:
        return f"Score({self._value})"
