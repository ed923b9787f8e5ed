from __future__ import annotations

import logging
from typing import Callable, Dict

import pygame

from tetris_rl.game import EventSource, TetrisGame
from tetris_rl.highscore import HighScoreStore
from .renderer import Renderer


logger = logging.getLogger(__name__)


KEY_TO_COMMAND: Dict[int, Callable[[TetrisGame], object]] = {
    pygame.K_LEFT: TetrisGame.on_left,
    pygame.K_a: TetrisGame.on_left,
    pygame.K_RIGHT: TetrisGame.on_right,
    pygame.K_d: TetrisGame.on_right,
    pygame.K_UP: TetrisGame.on_rotate,
    pygame.K_w: TetrisGame.on_rotate,
    pygame.K_DOWN: lambda g: g.on_down(EventSource.USER),
    pygame.K_s: lambda g: g.on_down(EventSource.USER),
    pygame.K_SPACE: TetrisGame.hard_drop,
    pygame.K_c: TetrisGame.on_hold,
}


def run(highscore_path: str = "highscore.txt") -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame()
        store = HighScoreStore(highscore_path)
        high_score = store.load()

        def _on_game_over(sender: TetrisGame, score: int) -> None:
            nonlocal high_score
            if store.submit(score):
                high_score = score
                logger.info("new high score %d", score)

        game.events.game_over.connect(_on_game_over)

        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Tetris RL - Human Play")

        last_fall = pygame.time.get_ticks()
        paused = False
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_n:
                        game.new_game()
                        paused = False
                        last_fall = pygame.time.get_ticks()
                    elif event.key == pygame.K_p and not game.game_over:
                        paused = not paused
                    elif not paused and not game.game_over:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            command(game)

            # Gravity follows the level's drop interval
            now = pygame.time.get_ticks()
            if not paused and not game.game_over and now - last_fall >= game.drop_interval_ms:
                game.on_down(EventSource.THREAD)
                last_fall = now

            renderer.draw(screen, game, high_score=high_score, paused=paused)
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run()
