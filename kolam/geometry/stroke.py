"""
Stroke: the unit of drawing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Sequence, Tuple

from kolam.core.exceptions import EmptyStrokeError, ValidationError
from kolam.geometry.primitives import Point


class StrokeKind(Enum):
    """Selects the rendering algorithm for a stroke."""
    LINE = "line"    # straight segments
    CURVE = "curve"  # Bezier-smoothed segments
    DOT = "dot"      # independent point markers
    FILL = "fill"    # filled region (accepted, not produced by generators)


@dataclass(frozen=True)
class Stroke:
    """
    Ordered points plus style.

    ``delay`` is an ordering hint in milliseconds carried over from the
    authored timeline; playback is strictly sequential and does not wait on it.
    """
    points: Tuple[Point, ...]
    color: str
    thickness: float
    delay: int
    kind: StrokeKind = StrokeKind.CURVE

    def validate(self) -> "Stroke":
        """
        Check the stroke invariants.

        Raises:
            EmptyStrokeError: No points, or one point on a non-dot stroke
            ValidationError: Negative delay or non-positive thickness

        Returns:
            self, so calls can be chained
        """
        if not self.points:
            raise EmptyStrokeError(f"{self.kind.value} stroke has no points")
        if len(self.points) == 1 and self.kind is not StrokeKind.DOT:
            raise EmptyStrokeError(
                f"{self.kind.value} stroke needs at least two points"
            )
        if self.delay < 0:
            raise ValidationError(f"Stroke delay must be non-negative, got {self.delay}")
        if self.thickness <= 0:
            raise ValidationError(
                f"Stroke thickness must be positive, got {self.thickness}"
            )
        return self

    def to_dict(self) -> Dict:
        return {
            'points': [[p.x, p.y] for p in self.points],
            'color': self.color,
            'thickness': self.thickness,
            'delay': self.delay,
            'type': self.kind.value
        }


def make_stroke(
    points: Sequence[Point],
    color: str,
    thickness: float,
    delay: int,
    kind: StrokeKind = StrokeKind.CURVE
) -> Stroke:
    """Build a Stroke from any point sequence."""
    return Stroke(
        points=tuple(points),
        color=color,
        thickness=thickness,
        delay=int(delay),
        kind=kind
    )
