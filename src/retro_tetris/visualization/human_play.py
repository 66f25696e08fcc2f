from __future__ import annotations

import argparse
import time
from typing import Callable, Dict, Optional

import pygame

from retro_tetris.game import GameConfig, TetrisGame
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Callable[[TetrisGame], object]] = {
    pygame.K_LEFT: TetrisGame.move_left,
    pygame.K_a: TetrisGame.move_left,
    pygame.K_RIGHT: TetrisGame.move_right,
    pygame.K_d: TetrisGame.move_right,
    pygame.K_DOWN: TetrisGame.soft_drop,
    pygame.K_s: TetrisGame.soft_drop,
    pygame.K_UP: TetrisGame.rotate,
    pygame.K_w: TetrisGame.rotate,
    pygame.K_RETURN: TetrisGame.hard_drop,
    pygame.K_KP_ENTER: TetrisGame.hard_drop,
    pygame.K_r: TetrisGame.restart,
    pygame.K_ESCAPE: TetrisGame.quit,
}

CONTROLS = [
    "Left / A      - Move left",
    "Right / D     - Move right",
    "Down / S      - Soft drop",
    "Up / W        - Rotate",
    "Enter         - Hard drop",
    "Space         - Start / Pause / Resume",
    "R             - Restart",
    "ESC           - Exit",
]


def handle_key(game: TetrisGame, key: int) -> None:
    if key == pygame.K_SPACE:
        if not game.has_started():
            game.start_game()
        else:
            game.toggle_pause()
        return
    command = KEY_TO_COMMAND.get(key)
    if command is not None:
        command(game)


class StatusPrinter:
    """Prints pause/resume and game-over messages once per transition."""

    def __init__(self) -> None:
        self.pause_printed = False
        self.game_over_printed = False

    def update(self, game: TetrisGame) -> None:
        if game.is_game_over():
            if not self.game_over_printed:
                print("\n=== GAME OVER ===")
                print(f"Final Score: {game.get_score()}")
                print(f"Lines Cleared: {game.get_lines()}")
                print("Press R to restart or ESC to quit")
                self.game_over_printed = True
            return
        self.game_over_printed = False
        if game.is_paused() and not self.pause_printed:
            print("\n=== GAME PAUSED ===")
            print("Press SPACE to resume")
            self.pause_printed = True
        elif not game.is_paused() and self.pause_printed:
            print("Game resumed!")
            self.pause_printed = False


def run(seed: Optional[int] = None, cell_size: int = 30, fps: int = 60) -> None:
    for line in CONTROLS:
        print(line)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(GameConfig(random_seed=seed), clock=time.monotonic)
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Retro Tetris")
        pygame.key.set_repeat(170, 50)
        status = StatusPrinter()

        while not game.quit_requested:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.quit()
                elif event.type == pygame.KEYDOWN:
                    handle_key(game, event.key)

            # Gravity
            game.update(time.monotonic())

            # Render
            renderer.draw(screen, game)
            status.update(game)

            clock.tick(fps)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Retro Tetris")
    p.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer")
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    return p


def main() -> None:
    args = build_parser().parse_args()
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
