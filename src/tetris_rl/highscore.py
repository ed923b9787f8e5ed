from __future__ import annotations

import logging
import os
from typing import Union


logger = logging.getLogger(__name__)

DEFAULT_HIGHSCORE_FILE = "highscore.txt"


class HighScoreStore:
    """Best score kept as a single integer in a text file.

    A missing or unreadable file counts as 0. Failed writes are logged and
    otherwise ignored so a read-only directory never interrupts play.
    """

    def __init__(self, path: Union[str, os.PathLike] = DEFAULT_HIGHSCORE_FILE) -> None:
        self.path = os.fspath(path)

    def load(self) -> int:
        if not os.path.exists(self.path):
            return 0
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                text = fh.read().split()
        except OSError as exc:
            logger.warning("could not read high score from %s: %s", self.path, exc)
            return 0
        if not text:
            return 0
        try:
            return int(text[0])
        except ValueError:
            logger.warning("ignoring malformed high score file %s", self.path)
            return 0

    def save(self, score: int) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as fh:
                fh.write(str(int(score)))
        except OSError as exc:
            logger.error("failed to save high score to %s: %s", self.path, exc)

    def submit(self, score: int) -> bool:
        """Persist ``score`` if it beats the stored one. Returns True if it did."""
        if score <= self.load():
            return False
        self.save(score)
        return True
