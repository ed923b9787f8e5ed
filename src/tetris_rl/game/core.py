from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np
from blinker import Signal

from .board import Board, ViewData
from .config import GameConfig
from .grid import ClearResult
from .pieces import TetrominoType
from .progression import LevelManager, LevelUpdate
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    HOLD = 5
    NONE = 6


class EventSource(Enum):
    USER = "user"
    THREAD = "thread"


@dataclass(frozen=True)
class DownResult:
    clear: Optional[ClearResult]
    view: ViewData
    level: Optional[LevelUpdate] = None


@dataclass
class HoldSlot:
    piece: Optional[TetrominoType] = None
    rotation: int = 0
    can_hold: bool = True

    def clear(self) -> None:
        self.piece = None
        self.rotation = 0
        self.can_hold = True


class GameEvents:
    """Signals a front-end may subscribe to. None of them are required."""

    def __init__(self) -> None:
        self.piece_locked = Signal("piece-locked")
        self.lines_cleared = Signal("lines-cleared")
        self.level_up = Signal("level-up")
        self.game_over = Signal("game-over")


class TetrisGame:
    """Drives a Board through the spawn -> fall -> lock -> clear cycle.

    Calls must be serialized by the embedder; nothing here blocks or spawns
    threads, and pacing is left to whoever calls ``on_down``.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 board: Optional[Board] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.board = board or Board(self.config, self.rules)
        self.levels = LevelManager(
            lines_per_level=self.config.lines_per_level,
            initial_drop_interval_ms=self.config.initial_drop_interval_ms,
            min_drop_interval_ms=self.config.min_drop_interval_ms,
        )
        self.events = GameEvents()
        self.hold_slot = HoldSlot()
        self.game_over = False
        self.pieces_locked = 0
        self.step_count = 0
        self.reset()

    def reset(self) -> None:
        self.new_game()

    def new_game(self) -> None:
        collided = self.board.new_game()
        self.levels.reset()
        self.hold_slot.clear()
        self.game_over = False
        self.pieces_locked = 0
        self.step_count = 0
        if collided:
            self._end_game()

    @property
    def score(self) -> int:
        return self.board.score.value

    @property
    def level(self) -> int:
        return self.levels.level

    @property
    def total_lines(self) -> int:
        return self.levels.total_lines

    @property
    def drop_interval_ms(self) -> int:
        return self.levels.drop_interval_ms

    def view(self) -> ViewData:
        return self.board.get_view_data()

    def _end_game(self) -> None:
        self.game_over = True
        logger.info("game over: score=%d lines=%d level=%d", self.score, self.total_lines, self.level)
        self.events.game_over.send(self, score=self.score)

    def _lock(self) -> Tuple[ClearResult, LevelUpdate]:
        self.board.merge_brick_to_background()
        self.pieces_locked += 1
        self.events.piece_locked.send(self, piece=self.board.active.piece)
        clear = self.board.clear_rows()
        if clear.lines_removed > 0:
            self.board.score.add(clear.score_bonus)
            self.events.lines_cleared.send(self, lines=clear.lines_removed, bonus=clear.score_bonus)
        update = self.levels.add_lines_cleared(clear.lines_removed)
        if update.level_increased:
            self.events.level_up.send(self, level=update.level, drop_interval_ms=update.drop_interval_ms)
        if self.board.create_new_brick():
            self._end_game()
        else:
            self.hold_slot.can_hold = True
        return clear, update

    def on_down(self, source: EventSource = EventSource.THREAD) -> DownResult:
        if self.game_over:
            return DownResult(None, self.view())
        if self.board.move_brick_down():
            if source is EventSource.USER:
                self.board.score.add(self.rules.soft_drop_points)
            return DownResult(None, self.view())
        clear, update = self._lock()
        return DownResult(clear, self.view(), update)

    def hard_drop(self) -> DownResult:
        if self.game_over:
            return DownResult(None, self.view())
        rows = 0
        while self.board.move_brick_down():
            rows += 1
        self.board.score.add(self.rules.score_for_hard_drop(rows))
        clear, update = self._lock()
        return DownResult(clear, self.view(), update)

    def on_left(self) -> ViewData:
        if not self.game_over:
            self.board.move_brick_left()
        return self.view()

    def on_right(self) -> ViewData:
        if not self.game_over:
            self.board.move_brick_right()
        return self.view()

    def on_rotate(self) -> ViewData:
        if not self.game_over:
            self.board.rotate_left_brick()
        return self.view()

    def on_hold(self) -> ViewData:
        slot = self.hold_slot
        if self.game_over or not slot.can_hold:
            return self.view()
        current = self.board.active.piece
        rotation = self.board.active.rotation
        if slot.piece is None:
            slot.piece, slot.rotation = current, rotation
            collided = self.board.create_new_brick()
        else:
            held, held_rotation = slot.piece, slot.rotation
            slot.piece, slot.rotation = current, rotation
            collided = self.board.set_brick(held, held_rotation)
        slot.can_hold = False
        logger.debug("held %s, active now %s", slot.piece.name, self.board.active.piece.name)
        if collided:
            self._end_game()
        return self.view()

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.get_state(), 0, True, self._info()

        before = self.score
        lines = 0
        action = Action(action)
        if action == Action.LEFT:
            self.on_left()
        elif action == Action.RIGHT:
            self.on_right()
        elif action == Action.ROTATE:
            self.on_rotate()
        elif action == Action.SOFT_DROP:
            result = self.on_down(EventSource.USER)
            lines = result.clear.lines_removed if result.clear else 0
        elif action == Action.HARD_DROP:
            result = self.hard_drop()
            lines = result.clear.lines_removed if result.clear else 0
        elif action == Action.HOLD:
            self.on_hold()
        elif action == Action.NONE:
            pass

        self.step_count += 1
        info = self._info()
        info["lines_cleared"] = lines
        return self.get_state(), self.score - before, self.game_over, info

    def _info(self) -> dict:
        return {
            "score": self.score,
            "level": self.level,
            "lines_cleared_total": self.total_lines,
            "drop_interval_ms": self.drop_interval_ms,
            "pieces_locked": self.pieces_locked,
        }

    def get_state(self) -> np.ndarray:
        if self.game_over:
            return self.board.get_board_matrix()
        return self.board.overlay()
