from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from complex_tetris.complexlib import ComplexFunction, function_label
from complex_tetris.game import Action, GameConfig, TetrisGame
from .function_plot import GRID_SIZE, KEY_TO_FUNCTION, FunctionPlot
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_RETURN: Action.HARD_DROP,
    pygame.K_p: Action.TOGGLE_PAUSE,
    pygame.K_r: Action.RESTART,
}

TURN_KEYS = (pygame.K_UP, pygame.K_SPACE)


def handle_key(
    game: TetrisGame,
    key: int,
    turn_action: Action,
    plot: Optional[FunctionPlot] = None,
    now_ms: Optional[int] = None,
) -> Optional[Action]:
    """Apply one key press to the game; returns the command issued, if any."""
    if key in TURN_KEYS:
        game.step(turn_action)
        return turn_action
    if key in KEY_TO_FUNCTION:
        kind = KEY_TO_FUNCTION[key]
        game.select_transform(kind)
        if plot is not None:
            plot.select(kind, now_ms)
        logger.info("Selected %s", function_label(kind))
        return None
    action = KEY_TO_ACTION.get(key)
    if action is not None:
        game.step(action)
    return action


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Complex Tetris")
    p.add_argument("--mode", choices=["classic", "complex"], default="classic",
                   help="classic: Up/Space rotates by i; complex: Up/Space applies the selected function")
    p.add_argument("--function", choices=[f.value for f in ComplexFunction], default=ComplexFunction.ROTATION.value)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--no-visualizer", action="store_true", help="hide the complex plane panel")
    p.add_argument("--log-level", default="INFO")
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    complex_mode = args.mode == "complex"
    game = TetrisGame(GameConfig(random_seed=args.seed), transform_kind=ComplexFunction(args.function))
    turn_action = Action.TRANSFORM if complex_mode else Action.ROTATE
    renderer = Renderer(cell_size=28)

    plot: Optional[FunctionPlot] = None
    if not args.no_visualizer:
        plot = FunctionPlot(ComplexFunction.SQUARE if not complex_mode else game.transform_kind)
        plot.on_piece(game.snapshot())
        game.add_observer(plot.on_piece)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        board_w, board_h = renderer.window_size(game.machine.config.width, game.machine.config.height)
        width = board_w + (GRID_SIZE + renderer.margin if plot is not None else 0)
        height = max(board_h, GRID_SIZE + renderer.margin * 2 if plot is not None else 0)
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Complex Tetris" if complex_mode else "Tetris with i·z rotations")
        plot_surface = pygame.Surface((GRID_SIZE, GRID_SIZE)) if plot is not None else None

        last_fall = pygame.time.get_ticks()
        running = True
        while running:
            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif handle_key(game, event.key, turn_action, plot, pygame.time.get_ticks()) == Action.RESTART:
                        last_fall = pygame.time.get_ticks()

            # Gravity
            now = pygame.time.get_ticks()
            if game.state.is_running and now - last_fall >= game.drop_interval_ms:
                game.tick()
                last_fall = now
            elif not game.state.is_running:
                last_fall = now

            # Render
            renderer.draw(screen, game.state, game.transform_kind if complex_mode else None)
            if plot is not None and plot_surface is not None:
                plot.draw(plot_surface, now)
                screen.blit(plot_surface, (board_w, renderer.margin))
            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
