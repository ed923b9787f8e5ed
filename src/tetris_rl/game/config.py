from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class GameConfig:
    """Board geometry, spawn anchor and pacing for a falling-block game.

    ``height`` counts the hidden spawn buffer; only the last
    ``height - hidden_rows`` rows are shown to the player.
    """

    width: int = 10
    height: int = 25
    hidden_rows: int = 2
    spawn_x: int = 4
    spawn_y: int = 2
    random_seed: Optional[int] = None
    lines_per_level: int = 10
    initial_drop_interval_ms: int = 1000
    min_drop_interval_ms: int = 10
    preview_depth: int = 3

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be non-empty, got {self.width}x{self.height}")
        if not 0 <= self.hidden_rows < self.height:
            raise ValueError(f"hidden_rows must be in [0, {self.height}), got {self.hidden_rows}")
        if not (0 <= self.spawn_x < self.width and 0 <= self.spawn_y < self.height):
            raise ValueError(f"spawn anchor ({self.spawn_x}, {self.spawn_y}) lies outside the grid")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")
        if self.min_drop_interval_ms <= 0:
            raise ValueError("min_drop_interval_ms must be positive")
        if self.preview_depth < 1:
            raise ValueError("preview_depth must be at least 1")

    @property
    def visible_height(self) -> int:
        return self.height - self.hidden_rows
