"""
2D point type and sampling helpers shared by the motif generators.
"""

from typing import NamedTuple, Tuple
import math
import operator

import numpy as np
from numpy.typing import NDArray

TWO_PI = 2 * np.pi

# Guards the inclusive upper bound against float drift in arange.
_EPS = 1e-9


class Point(NamedTuple):
    """Immutable 2D coordinate."""
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Point at fraction ``t`` along the way to ``other``."""
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)


def unit_samples(step: float) -> NDArray[np.float64]:
    """
    Sample the closed interval [0, 1] at a fixed step.

    Args:
        step: Spacing between samples (must divide 1 evenly)

    Returns:
        Array with ``round(1 / step) + 1`` values, both endpoints exact
    """
    count = int(round(1.0 / step)) + 1
    return np.linspace(0.0, 1.0, count)


def angle_samples(step: float, end: float = TWO_PI) -> NDArray[np.float64]:
    """Angles 0, step, 2*step, ... up to and including ``end`` if reached."""
    return np.arange(0.0, end + _EPS, step)


def polar(center_x: float, center_y: float, radius: float, angle: float) -> Point:
    """Point at ``radius`` from the center along ``angle``."""
    return Point(
        float(center_x + radius * np.cos(angle)),
        float(center_y + radius * np.sin(angle))
    )


def to_points(xs: NDArray[np.float64], ys: NDArray[np.float64]) -> Tuple[Point, ...]:
    """Zip coordinate arrays into a tuple of plain-float Points."""
    return tuple(Point(float(x), float(y)) for x, y in zip(xs, ys))


def as_index(value) -> int:
    """
    Coerce an integer-like value (``int``, ``numpy.integer``) to ``int``.

    Raises:
        TypeError: For bools, floats and anything else without ``__index__``
    """
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"Expected an integer, got {value!r}")
    return operator.index(value)
