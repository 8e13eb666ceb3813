from __future__ import annotations

import argparse
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, FallingBlockGame, GameConfig, GameState
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_a: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_d: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_w: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_s: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
}


def _report_score(score: int) -> None:
    print(f"Game over - final score: {score}")


def handle_key(game: FallingBlockGame, key: int) -> None:
    if key in (pygame.K_RETURN, pygame.K_r):
        if key == pygame.K_RETURN and game.game_state() is not GameState.READY:
            return
        game.start_game()
    elif key == pygame.K_p:
        game.toggle_pause()
    else:
        action = KEY_TO_ACTION.get(key)
        if action is not None:
            game.step(action)


def run(seed: Optional[int] = None, cell_size: int = 24, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlockGame(GameConfig(random_seed=seed), on_game_over=_report_score)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        handle_key(game, event.key)

            game.tick(clock.tick(fps))
            renderer.draw(screen, game)
    finally:
        pygame.quit()


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=24)
    p.add_argument("--fps", type=int, default=60)
    args = p.parse_args()
    run(args.seed, args.cell_size, args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
