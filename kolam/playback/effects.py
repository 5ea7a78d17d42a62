"""
Stochastic powder effects.

Loose particles, grain hairlines and ground specks that make the
strokes look hand-laid in rice flour. Effects only ever add paint;
they never touch stroke geometry or playback state.
"""

from typing import Optional, Sequence

import numpy as np

from kolam.core.logging import get_logger
from kolam.geometry.primitives import Point
from kolam.playback.renderer import DrawStyle, Renderer

logger = get_logger(__name__)

# Dot stroke markers
DOT_RADIUS = 2.0
DOT_RADIUS_JITTER = 0.5
DOT_GLOW = 4.0
DOT_SCATTER_COUNT = 6
DOT_SCATTER_SPREAD = 8.0
DOT_SCATTER_ALPHA = (0.2, 0.7)
DOT_SCATTER_SIZE = (0.3, 1.5)

# Incremental line/curve strokes
STROKE_GLOW = 8.0
STROKE_SCATTER_COUNT = 4
STROKE_SCATTER_SPREAD = 5.0
STROKE_SCATTER_ALPHA = (0.15, 0.75)
STROKE_SCATTER_SIZE = (0.4, 2.2)

TEXTURE_PROBABILITY = 0.4
TEXTURE_HALF_LENGTH = 3.0
TEXTURE_WIDTH = 0.3
TEXTURE_ALPHA = 0.7

GROUND_SPECKS = 1200
GROUND_ALPHA = 0.4
GROUND_MAX_SIZE = 3.0
GROUND_HIGHLIGHTS = 300
GROUND_HIGHLIGHT_ALPHA = 0.1


class PowderEffects:
    """
    Emits visual-only paint requests with randomized placement.

    The random source is injectable: pass a seeded ``numpy.random.Generator``
    (or a seed) for reproducible particles, or nothing for fresh entropy.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        enabled: bool = True
    ):
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.enabled = enabled

    def _offset(self, point: Point, spread: float) -> Point:
        dx, dy = (self.rng.random(2) - 0.5) * spread
        return Point(point.x + float(dx), point.y + float(dy))

    def _scatter(
        self,
        renderer: Renderer,
        point: Point,
        color: str,
        count: int,
        spread: float,
        alpha_range,
        size_range
    ) -> None:
        for _ in range(count):
            renderer.draw_scatter(
                self._offset(point, spread),
                DrawStyle(
                    color=color,
                    alpha=float(self.rng.uniform(*alpha_range)),
                    size=float(self.rng.uniform(*size_range))
                )
            )

    def dot_burst(self, renderer: Renderer, points: Sequence[Point], color: str) -> None:
        """Paint every lattice dot, each with its own ring of loose powder."""
        style = DrawStyle(color=color, size=DOT_RADIUS, glow=DOT_GLOW)
        if not self.enabled:
            renderer.draw_dots(points, style)
            return

        radii = DOT_RADIUS + self.rng.uniform(0.0, DOT_RADIUS_JITTER, len(points))
        renderer.draw_dots(points, style, sizes=radii.tolist())

        for point in points:
            self._scatter(
                renderer, point, color,
                DOT_SCATTER_COUNT, DOT_SCATTER_SPREAD,
                DOT_SCATTER_ALPHA, DOT_SCATTER_SIZE
            )

    def stroke_particles(self, renderer: Renderer, tip: Point, color: str) -> None:
        """Loose powder around the tip of the segment just drawn."""
        if not self.enabled:
            return
        self._scatter(
            renderer, tip, color,
            STROKE_SCATTER_COUNT, STROKE_SCATTER_SPREAD,
            STROKE_SCATTER_ALPHA, STROKE_SCATTER_SIZE
        )

    def texture(self, renderer: Renderer, point: Point, color: str) -> bool:
        """
        Maybe paint one grain hairline through ``point``.

        Returns:
            True if a hairline was drawn
        """
        if not self.enabled or self.rng.random() >= TEXTURE_PROBABILITY:
            return False
        renderer.draw_texture(
            point,
            DrawStyle(
                color=color,
                thickness=TEXTURE_WIDTH,
                alpha=TEXTURE_ALPHA,
                angle=float(self.rng.uniform(0.0, np.pi)),
                length=TEXTURE_HALF_LENGTH
            )
        )
        return True

    def ground(self, renderer: Renderer, width: float, height: float) -> None:
        """Sprinkle earthy specks and faint highlights over the background."""
        if not self.enabled:
            return

        xs = self.rng.random(GROUND_SPECKS) * width
        ys = self.rng.random(GROUND_SPECKS) * height
        sizes = self.rng.random(GROUND_SPECKS) * GROUND_MAX_SIZE
        brightness = (self.rng.random(GROUND_SPECKS) * 100 + 100).astype(int)
        for x, y, size, b in zip(xs, ys, sizes, brightness):
            renderer.draw_ground(
                Point(float(x), float(y)),
                DrawStyle(
                    color=f"rgb({b}, {b - 20}, {b - 40})",
                    alpha=GROUND_ALPHA,
                    size=float(size)
                )
            )

        xs = self.rng.random(GROUND_HIGHLIGHTS) * width
        ys = self.rng.random(GROUND_HIGHLIGHTS) * height
        for x, y in zip(xs, ys):
            renderer.draw_ground(
                Point(float(x), float(y)),
                DrawStyle(color='#FFFFFF', alpha=GROUND_HIGHLIGHT_ALPHA, size=1.0)
            )
