import os
import sys

import pytest

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC = os.path.join(ROOT, "src")
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

from tetris_rl.game import Board, GameConfig, TetrisGame  # noqa: E402


@pytest.fixture
def config():
    return GameConfig(random_seed=1234)


@pytest.fixture
def board(config):
    b = Board(config)
    b.create_new_brick()
    return b


@pytest.fixture
def game(config):
    return TetrisGame(config)
