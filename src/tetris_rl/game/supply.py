from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, List, Optional

from .pieces import TetrominoType


logger = logging.getLogger(__name__)


class BagRandomizer:
    """7-bag piece supply with a peekable queue.

    The bag holds one of each piece type in shuffled order. Pieces are drained
    from the bag into a FIFO queue that is kept ``depth`` entries deep, so
    every block of seven draws aligned to a refill is a permutation of all
    seven types.
    """

    def __init__(self, rng: Optional[random.Random] = None, depth: int = 3) -> None:
        self.rng = rng or random.Random()
        self.depth = depth
        self._bag: List[TetrominoType] = []
        self._queue: Deque[TetrominoType] = deque()
        self.refills = 0
        self._refill_bag()
        self._ensure_queue(self.depth)

    def _refill_bag(self) -> None:
        self._bag = list(TetrominoType)
        self.rng.shuffle(self._bag)
        self.refills += 1
        logger.debug("bag refilled (#%d): %s", self.refills, [t.name for t in self._bag])

    def _ensure_queue(self, min_size: int) -> None:
        while len(self._queue) < min_size:
            if not self._bag:
                self._refill_bag()
            self._queue.append(self._bag.pop(0))

    def get_brick(self) -> TetrominoType:
        """Consume and return the head of the queue."""
        self._ensure_queue(1)
        brick = self._queue.popleft()
        self._ensure_queue(self.depth)
        return brick

    def peek(self, index: int = 0) -> TetrominoType:
        """Return the ``index``-th queued piece (0 is next) without consuming it."""
        if index < 0:
            raise ValueError(f"peek index must be non-negative, got {index}")
        self._ensure_queue(index + 1)
        return self._queue[index]

    def get_next_brick(self) -> TetrominoType:
        return self.peek(0)

    def get_second_next_brick(self) -> TetrominoType:
        return self.peek(1)

    def get_third_next_brick(self) -> TetrominoType:
        return self.peek(2)

    def upcoming(self, count: Optional[int] = None) -> List[TetrominoType]:
        count = self.depth if count is None else count
        self._ensure_queue(count)
        return list(self._queue)[:count]
