"""Complex function visualizer.

Plots where a grid of sample points lands under f(z) = i·z, z², eᶻ or 1/z,
coloured by phase (hue) and magnitude (lightness), together with the image
of the unit circle. The current Tetris piece can be overlaid by registering
`FunctionPlot.on_piece` as a game observer.
"""

from __future__ import annotations

import argparse
import logging
import math
from typing import List, Optional, Tuple

import numpy as np
import pygame

from complex_tetris.complexlib import (
    Complex,
    ComplexFunction,
    apply_function,
    from_polar,
    function_label,
    magnitude,
    phase,
    rotate_by_i,
)
from complex_tetris.game.session import PieceSnapshot


logger = logging.getLogger(__name__)

GRID_SIZE = 400
GRID_RANGE = 3.0  # -3 to 3 on both axes
GRID_STEP = 0.2
ANIMATION_MS = 2000
SAMPLE_POINT = Complex(1.5, 0.5)

KEY_TO_FUNCTION = {
    pygame.K_1: ComplexFunction.ROTATION,
    pygame.K_2: ComplexFunction.SQUARE,
    pygame.K_3: ComplexFunction.EXP,
    pygame.K_4: ComplexFunction.RECIPROCAL,
}


def complex_to_canvas(z: Complex, size: int = GRID_SIZE, extent: float = GRID_RANGE) -> Tuple[float, float]:
    half = size / 2
    return (z.re / extent) * half + half, -(z.im / extent) * half + half


def on_canvas(point: Tuple[float, float], size: int = GRID_SIZE) -> bool:
    x, y = point
    return math.isfinite(x) and math.isfinite(y) and 0 <= x < size and 0 <= y < size


def complex_color(z: Complex, show_magnitude: bool = True, show_phase: bool = True) -> pygame.Color:
    if not show_magnitude and not show_phase:
        return pygame.Color(100, 100, 100, 128)

    hue, saturation, lightness = 0.0, 0.0, 50.0
    if show_phase:
        ph = phase(z)
        # Map phase (-pi, pi] onto hue [0, 360)
        hue = ((ph + math.pi) / (2 * math.pi) * 360) % 360 if math.isfinite(ph) else 0.0
        saturation = 80.0
    if show_magnitude:
        mag = magnitude(z)
        normalized = min(mag / 2, 1.0) if math.isfinite(mag) else 1.0
        lightness = 20 + normalized * 60

    color = pygame.Color(0, 0, 0)
    color.hsla = (hue, saturation, lightness, 70)
    return color


def interpolate(z: Complex, target: Complex, progress: float) -> Complex:
    return Complex(z.re + (target.re - z.re) * progress, z.im + (target.im - z.im) * progress)


def sample_grid(extent: float = GRID_RANGE, step: float = GRID_STEP) -> List[Complex]:
    axis = np.arange(-extent, extent + step / 2, step)
    return [Complex(float(re), float(im)) for re in axis for im in axis]


def unit_circle(step: float = 0.05) -> List[Complex]:
    return [from_polar(1.0, float(theta)) for theta in np.arange(0.0, 2 * math.pi + step / 2, step)]


class FunctionPlot:
    def __init__(self, kind: ComplexFunction = ComplexFunction.SQUARE, size: int = GRID_SIZE) -> None:
        self.kind = kind
        self.size = size
        self.show_magnitude = True
        self.show_phase = True
        self.piece: Optional[PieceSnapshot] = None
        self._animation_start: Optional[int] = None
        self._samples = sample_grid()
        self._circle = unit_circle()
        self._font: Optional[pygame.font.Font] = None

    def select(self, kind: ComplexFunction, now_ms: Optional[int] = None) -> None:
        self.kind = kind
        self._animation_start = now_ms

    def on_piece(self, snapshot: PieceSnapshot) -> None:
        self.piece = snapshot

    def progress(self, now_ms: Optional[int]) -> float:
        if self._animation_start is None or now_ms is None:
            return 1.0
        done = (now_ms - self._animation_start) / ANIMATION_MS
        if done >= 1.0:
            self._animation_start = None
            return 1.0
        return max(0.0, done)

    def _image(self, z: Complex, progress: float) -> Complex:
        target = apply_function(self.kind, z)
        if progress >= 1.0:
            return target
        return interpolate(z, target, progress)

    def _canvas(self, z: Complex) -> Tuple[float, float]:
        return complex_to_canvas(z, self.size)

    def _draw_axes(self, surface: pygame.Surface) -> None:
        for i in np.arange(-GRID_RANGE, GRID_RANGE + 0.25, 0.5):
            x, y = self._canvas(Complex(float(i), float(i)))
            pygame.draw.line(surface, (51, 51, 51), (x, 0), (x, self.size))
            pygame.draw.line(surface, (51, 51, 51), (0, y), (self.size, y))
        half = self.size // 2
        pygame.draw.line(surface, (102, 102, 102), (0, half), (self.size, half), 2)
        pygame.draw.line(surface, (102, 102, 102), (half, 0), (half, self.size), 2)

    def _draw_arrow(self, surface: pygame.Surface, start: Tuple[float, float], end: Tuple[float, float]) -> None:
        color = (255, 255, 0)
        pygame.draw.line(surface, color, start, end, 2)
        angle = math.atan2(end[1] - start[1], end[0] - start[0])
        for side in (-math.pi / 6, math.pi / 6):
            tip = (end[0] - 10 * math.cos(angle + side), end[1] - 10 * math.sin(angle + side))
            pygame.draw.line(surface, color, end, tip, 2)

    def _draw_piece(self, surface: pygame.Surface, progress: float) -> None:
        if self.piece is None:
            return
        for pos in self.piece.offsets:
            src = self._canvas(pos)
            dst = self._canvas(self._image(pos, progress))
            if on_canvas(src, self.size):
                pygame.draw.rect(surface, (255, 255, 255), pygame.Rect(src[0] - 4, src[1] - 4, 8, 8), 1)
            if on_canvas(dst, self.size):
                pygame.draw.rect(surface, (255, 80, 200), pygame.Rect(dst[0] - 4, dst[1] - 4, 8, 8))
            if on_canvas(src, self.size) and on_canvas(dst, self.size):
                pygame.draw.line(surface, (255, 80, 200), src, dst)

    def draw(self, surface: pygame.Surface, now_ms: Optional[int] = None) -> None:
        progress = self.progress(now_ms)
        surface.fill((0, 0, 0))
        self._draw_axes(surface)

        points = pygame.Surface((self.size, self.size), pygame.SRCALPHA)
        for z in self._samples:
            w = self._image(z, progress)
            x, y = self._canvas(w)
            if on_canvas((x, y), self.size):
                color = complex_color(w, self.show_magnitude, self.show_phase)
                pygame.draw.rect(points, color, pygame.Rect(x - 2, y - 2, 4, 4))
        surface.blit(points, (0, 0))

        circle = [self._canvas(self._image(z, progress)) for z in self._circle]
        circle = [p for p in circle if math.isfinite(p[0]) and math.isfinite(p[1])]
        if len(circle) >= 2:
            pygame.draw.lines(surface, (0, 255, 0), False, circle, 2)

        if self.kind == ComplexFunction.SQUARE or self._animation_start is None:
            self._draw_arrow(surface, self._canvas(SAMPLE_POINT), self._canvas(rotate_by_i(SAMPLE_POINT)))

        self._draw_piece(surface, progress)

        if self._font is None:
            self._font = pygame.font.SysFont("monospace", 18, bold=True)
        surface.blit(self._font.render(function_label(self.kind), True, (255, 255, 255)), (10, 10))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Plot complex functions")
    p.add_argument("--function", choices=[f.value for f in ComplexFunction], default=ComplexFunction.SQUARE.value)
    p.add_argument("--fps", type=int, default=30)
    p.add_argument("--log-level", default="INFO")
    return p


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    pygame.init()
    try:
        screen = pygame.display.set_mode((GRID_SIZE, GRID_SIZE))
        pygame.display.set_caption("Complex Function Visualizer")
        clock = pygame.time.Clock()
        plot = FunctionPlot(ComplexFunction(args.function))

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in KEY_TO_FUNCTION:
                        plot.select(KEY_TO_FUNCTION[event.key], pygame.time.get_ticks())
                        logger.info("Plotting %s", function_label(plot.kind))
                    elif event.key == pygame.K_m:
                        plot.show_magnitude = not plot.show_magnitude
                    elif event.key == pygame.K_p:
                        plot.show_phase = not plot.show_phase
            plot.draw(screen, pygame.time.get_ticks())
            pygame.display.flip()
            clock.tick(args.fps)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
