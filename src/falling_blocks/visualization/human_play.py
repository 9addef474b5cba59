from __future__ import annotations

import argparse
from typing import Dict

import pygame

from falling_blocks.game import Action, GameConfig, GameSession
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.HARD_DROP,
    pygame.K_z: Action.ROTATE,
    pygame.K_x: Action.STORE,
}

VOLUMETRIC_KEYS: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_UP: Action.FORWARD,
    pygame.K_z: Action.BACKWARD,
    pygame.K_x: Action.ROTATE_X,
    pygame.K_y: Action.ROTATE_Y,
    pygame.K_c: Action.ROTATE,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block game with the keyboard")
    p.add_argument("--mode", choices=["classic", "canvas", "volumetric"], default="canvas")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell", type=int, default=28)
    return p


def run(mode: str = "canvas", seed: int | None = None, cell_size: int = 28) -> None:
    config = getattr(GameConfig, mode)(random_seed=seed)
    keymap = VOLUMETRIC_KEYS if config.ndim == 3 else KEY_TO_ACTION

    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = GameSession(config)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(config.dims))
        pygame.display.set_caption("Falling Blocks")

        last_fall = pygame.time.get_ticks()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
                        last_fall = pygame.time.get_ticks()
                    else:
                        action = keymap.get(event.key)
                        if action is not None:
                            game.step(action)

            # Gravity is suspended once the game is over
            now = pygame.time.get_ticks()
            if not game.game_over and now - last_fall >= game.gravity_interval:
                game.advance_gravity()
                last_fall = now

            renderer.draw(screen, game.snapshot())
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    run(mode=args.mode, seed=args.seed, cell_size=args.cell)


if __name__ == "__main__":  # pragma: no cover
    main()
