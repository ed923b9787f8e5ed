from __future__ import annotations

import logging
from dataclasses import dataclass


logger = logging.getLogger(__name__)

LINES_PER_LEVEL = 10
INITIAL_DROP_INTERVAL_MS = 1000
MIN_DROP_INTERVAL_MS = 10


def level_for_lines(total_lines: int, lines_per_level: int = LINES_PER_LEVEL) -> int:
    return total_lines // lines_per_level + 1


def drop_interval_for_level(level: int, min_interval_ms: int = MIN_DROP_INTERVAL_MS) -> int:
    """Guideline gravity curve: (0.8 - (level-1)*0.01) ** (level-1) seconds.

    Milliseconds are truncated toward zero, then clamped to ``min_interval_ms``.
    """
    seconds = (0.8 - (level - 1) * 0.01) ** (level - 1)
    return max(min_interval_ms, int(seconds * 1000))


@dataclass(frozen=True)
class LevelUpdate:
    level: int
    total_lines: int
    drop_interval_ms: int
    level_increased: bool


class LevelManager:
    def __init__(self, lines_per_level: int = LINES_PER_LEVEL,
                 initial_drop_interval_ms: int = INITIAL_DROP_INTERVAL_MS,
                 min_drop_interval_ms: int = MIN_DROP_INTERVAL_MS) -> None:
        self.lines_per_level = lines_per_level
        self.initial_drop_interval_ms = initial_drop_interval_ms
        self.min_drop_interval_ms = min_drop_interval_ms
        self.level = 1
        self.total_lines = 0
        self.drop_interval_ms = initial_drop_interval_ms

    def reset(self) -> None:
        self.level = 1
        self.total_lines = 0
        self.drop_interval_ms = self.initial_drop_interval_ms

    def snapshot(self, level_increased: bool = False) -> LevelUpdate:
        return LevelUpdate(self.level, self.total_lines, self.drop_interval_ms, level_increased)

    def add_lines_cleared(self, lines: int) -> LevelUpdate:
        if lines <= 0:
            return self.snapshot()
        self.total_lines += lines
        new_level = level_for_lines(self.total_lines, self.lines_per_level)
        if new_level <= self.level:
            return self.snapshot()
        self.level = new_level
        self.drop_interval_ms = drop_interval_for_level(new_level, self.min_drop_interval_ms)
        logger.info("level %d reached after %d lines, drop interval %d ms",
                    self.level, self.total_lines, self.drop_interval_ms)
        return self.snapshot(level_increased=True)
