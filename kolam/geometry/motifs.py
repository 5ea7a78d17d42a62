"""
Motif generators.

Parametric formulas for the decorative shape families of a kolam:
dot lattices, lotus flowers, leaves, vines, peacocks and borders.
Every generator is deterministic; hand-drawn irregularity is added
only at render time.
"""

from typing import Dict, List, Tuple

import numpy as np

from kolam.core.exceptions import ValidationError
from kolam.geometry.primitives import (
    Point,
    angle_samples,
    as_index,
    polar,
    to_points,
    unit_samples,
)
from kolam.geometry.stroke import Stroke, StrokeKind, make_stroke

OUTER_PETAL_COLORS = ('#FF69B4', '#FF1493')
INNER_PETAL_COLOR = '#FFD700'
FLOWER_CENTER_COLOR = '#FF4500'
FEATHER_EYE_COLORS = ('#FF69B4', '#FFD700', '#FF4500')
VINE_COLOR = '#32CD32'
LEAF_COLOR = '#228B22'
DOT_COLOR = '#FFFFFF'


def _require_positive(name: str, value: float) -> None:
    if not value > 0:
        raise ValidationError(f"{name} must be positive, got {value}")


def dot_grid(size: int, spacing: float, center_x: float, center_y: float) -> Tuple[Point, ...]:
    """
    Generate a square dot lattice.

    Args:
        size: Dots per side
        spacing: Distance between neighbouring dots
        center_x: Lattice center x
        center_y: Lattice center y

    Returns:
        ``size * size`` points in row-major order, centered on (center_x, center_y)
    """
    try:
        size = as_index(size)
    except TypeError:
        raise ValidationError(f"Grid size must be a positive integer, got {size!r}")
    if size <= 0:
        raise ValidationError(f"Grid size must be a positive integer, got {size}")
    _require_positive("Dot spacing", spacing)

    offsets = (np.arange(size) - (size - 1) / 2) * spacing
    xs, ys = np.meshgrid(center_x + offsets, center_y + offsets)

    return to_points(xs.ravel(), ys.ravel())


def _petal(
    center_x: float,
    center_y: float,
    angle: float,
    radii: np.ndarray,
    t: np.ndarray,
    return_offset: float
) -> Tuple[Point, ...]:
    # Out along ``angle``, back along ``angle + return_offset``; both legs
    # start and end at the center, so the loop closes.
    out_x = center_x + radii * np.cos(angle) * t
    out_y = center_y + radii * np.sin(angle) * t

    back_t = t[::-1]
    back_r = radii[::-1]
    side = angle + return_offset
    back_x = center_x + back_r * np.cos(side) * back_t
    back_y = center_y + back_r * np.sin(side) * back_t

    return to_points(np.concatenate([out_x, back_x]), np.concatenate([out_y, back_y]))


def flower(center_x: float, center_y: float, scale: float = 1.0) -> List[Stroke]:
    """
    Generate a layered lotus flower.

    8 outer petals in alternating pinks, 4 gold inner petals on the
    diagonals, then the center circle. Delays increase in drawing order.

    Args:
        center_x: Flower center x
        center_y: Flower center y
        scale: Linear size multiplier (1.0 = 25px base radius)

    Returns:
        13 curve strokes
    """
    _require_positive("Flower scale", scale)
    base_radius = 25 * scale
    strokes: List[Stroke] = []

    # Outer petals
    t = unit_samples(0.05)
    radii = base_radius * (0.8 + 0.6 * np.sin(t * np.pi))
    for i in range(8):
        angle = i * np.pi / 4
        strokes.append(make_stroke(
            _petal(center_x, center_y, angle, radii, t, 0.3),
            color=OUTER_PETAL_COLORS[i % 2],
            thickness=3,
            delay=1000 + i * 200
        ))

    # Inner petals
    t = unit_samples(0.1)
    radii = base_radius * 0.6 * (0.5 + 0.8 * np.sin(t * np.pi))
    for i in range(4):
        angle = i * np.pi / 2 + np.pi / 4
        strokes.append(make_stroke(
            _petal(center_x, center_y, angle, radii, t, 0.4),
            color=INNER_PETAL_COLOR,
            thickness=2.5,
            delay=2600 + i * 150
        ))

    theta = angle_samples(0.1)
    center_radius = base_radius * 0.3
    strokes.append(make_stroke(
        to_points(
            center_x + center_radius * np.cos(theta),
            center_y + center_radius * np.sin(theta)
        ),
        color=FLOWER_CENTER_COLOR,
        thickness=2,
        delay=3200
    ))

    return strokes


def leaf(center_x: float, center_y: float, angle: float, scale: float = 1.0) -> Tuple[Point, ...]:
    """
    Generate a closed teardrop leaf outline.

    The forward pass runs along ``angle`` offset to one side, the return
    pass comes back offset to the other.

    Args:
        center_x: Leaf base x
        center_y: Leaf base y
        angle: Direction of the leaf tip in radians
        scale: Size multiplier (1.0 = 20px long, 12px wide)

    Returns:
        Outline points
    """
    _require_positive("Leaf scale", scale)
    length = 20 * scale
    width = 12 * scale

    t = unit_samples(0.05)
    along = length * t
    across = width * np.sin(t * np.pi) * 0.8
    normal = angle + np.pi / 2

    fwd_x = center_x + along * np.cos(angle) + across * np.cos(normal)
    fwd_y = center_y + along * np.sin(angle) + across * np.sin(normal)

    along, across = along[::-1], across[::-1]
    back_x = center_x + along * np.cos(angle) - across * np.cos(normal)
    back_y = center_y + along * np.sin(angle) - across * np.sin(normal)

    return to_points(np.concatenate([fwd_x, back_x]), np.concatenate([fwd_y, back_y]))


def vine(
    start_x: float,
    start_y: float,
    end_x: float,
    end_y: float,
    complexity: float = 5
) -> Tuple[Point, ...]:
    """
    Generate a wobbling vine between two points.

    Args:
        start_x, start_y: Vine start
        end_x, end_y: Vine end
        complexity: Wobble frequency (higher = more wiggles)

    Returns:
        51 points
    """
    t = np.linspace(0.0, 1.0, 51)
    wave_x = np.sin(t * np.pi * complexity) * 15
    wave_y = np.cos(t * np.pi * complexity * 1.5) * 10

    xs = start_x + (end_x - start_x) * t + wave_x
    ys = start_y + (end_y - start_y) * t + wave_y

    return to_points(xs, ys)


def peacock(center_x: float, center_y: float) -> List[Stroke]:
    """
    Generate a peacock: body, neck, crown and a fan of 15 tail feathers.

    Each tail feather is a straight stem followed by a circular eye at its
    tip; eye colors cycle through three hues.

    Returns:
        Strokes in drawing order (2 + 5 + 15 * 2)
    """
    strokes: List[Stroke] = []

    body = [
        (0, 20), (12, 15), (18, 0), (15, -15), (8, -25), (0, -30),
        (-8, -25), (-15, -15), (-18, 0), (-12, 15), (0, 20)
    ]
    strokes.append(make_stroke(
        [Point(center_x + dx, center_y + dy) for dx, dy in body],
        color='#4169E1',
        thickness=3,
        delay=500
    ))

    neck = [(0, -30), (5, -40), (8, -50), (6, -60), (0, -65), (-6, -60), (-4, -50)]
    strokes.append(make_stroke(
        [Point(center_x + dx, center_y + dy) for dx, dy in neck],
        color='#00CED1',
        thickness=2.5,
        delay=800
    ))

    # Crown
    for i in range(5):
        offset = i - 2
        strokes.append(make_stroke(
            [
                Point(center_x + offset * 6, center_y - 65),
                Point(center_x + offset * 8, center_y - 75),
                Point(center_x + offset * 6, center_y - 85),
            ],
            color=INNER_PETAL_COLOR,
            thickness=2,
            delay=1100 + i * 100
        ))

    # Tail
    t = np.linspace(0.0, 1.0, 21)
    eye_theta = angle_samples(0.2)
    for i in range(15):
        angle = (i - 7) * np.pi / 20
        feather_length = 70 + i * 2
        tip_x = center_x + feather_length * np.sin(angle)
        tip_y = center_y + 25 + feather_length * np.cos(angle)

        strokes.append(make_stroke(
            to_points(
                center_x + feather_length * np.sin(angle) * t,
                center_y + 25 + feather_length * np.cos(angle) * t
            ),
            color=VINE_COLOR,
            thickness=1.5,
            delay=1600 + i * 80,
            kind=StrokeKind.LINE
        ))
        strokes.append(make_stroke(
            to_points(tip_x + 8 * np.cos(eye_theta), tip_y + 8 * np.sin(eye_theta)),
            color=FEATHER_EYE_COLORS[i % 3],
            thickness=2,
            delay=1800 + i * 80
        ))

    return strokes


def border(center_x: float, center_y: float, radius: float) -> List[Stroke]:
    """
    Generate a scalloped border ring with 12 rosettes just inside it.

    Args:
        center_x: Ring center x
        center_y: Ring center y
        radius: Mean ring radius

    Returns:
        1 scalloped circle stroke followed by 12 rosette strokes
    """
    _require_positive("Border radius", radius)
    strokes: List[Stroke] = []

    theta = angle_samples(0.05)
    r = radius + 20 * np.sin(theta * 8)
    strokes.append(make_stroke(
        to_points(center_x + r * np.cos(theta), center_y + r * np.sin(theta)),
        color=VINE_COLOR,
        thickness=3,
        delay=4000
    ))

    for i in range(12):
        hub = polar(center_x, center_y, radius * 0.9, i * np.pi / 6)
        rosette: List[Point] = []
        for petal in range(6):
            rosette.append(polar(hub.x, hub.y, 8, petal * np.pi / 3))
            if petal == 0:
                rosette.append(hub)
        strokes.append(make_stroke(
            rosette,
            color=OUTER_PETAL_COLORS[0],
            thickness=2,
            delay=4200 + i * 100
        ))

    return strokes


def star_rays(center_x: float, center_y: float, count: int = 8) -> List[Stroke]:
    """Straight rays radiating from the center, three samples each."""
    strokes: List[Stroke] = []
    for i in range(count):
        angle = i * 2 * np.pi / count
        strokes.append(make_stroke(
            [polar(center_x, center_y, 30 + j * 15, angle) for j in range(3)],
            color=INNER_PETAL_COLOR if i % 2 == 0 else OUTER_PETAL_COLORS[0],
            thickness=2.5,
            delay=500 + i * 100,
            kind=StrokeKind.LINE
        ))
    return strokes


def ripple_rings(center_x: float, center_y: float, levels: int = 4) -> List[Stroke]:
    """Concentric rings with a ripple that tightens on each outer level."""
    strokes: List[Stroke] = []
    theta = angle_samples(0.1)
    for level in range(levels):
        radius = 60 + level * 25 + 5 * np.sin(theta * (8 + level * 2))
        strokes.append(make_stroke(
            to_points(center_x + radius * np.cos(theta), center_y + radius * np.sin(theta)),
            color=VINE_COLOR if level % 2 == 0 else FLOWER_CENTER_COLOR,
            thickness=2,
            delay=1300 + level * 200
        ))
    return strokes


def leaf_ring(
    center_x: float,
    center_y: float,
    radius: float,
    count: int = 16,
    scale: float = 0.8,
    base_delay: int = 3900
) -> List[Stroke]:
    """Leaves evenly spaced on a circle, each pointing along the tangent."""
    strokes: List[Stroke] = []
    for i in range(count):
        angle = i * 2 * np.pi / count
        base = polar(center_x, center_y, radius, angle)
        strokes.append(make_stroke(
            leaf(base.x, base.y, angle + np.pi / 2, scale),
            color=LEAF_COLOR,
            thickness=1.5,
            delay=base_delay + i * 50
        ))
    return strokes


def vine_stroke(
    start: Tuple[float, float],
    end: Tuple[float, float],
    complexity: float,
    delay: int,
    color: str = VINE_COLOR,
    thickness: float = 2
) -> Stroke:
    """Wrap a vine into a curve stroke."""
    return make_stroke(
        vine(start[0], start[1], end[0], end[1], complexity),
        color=color,
        thickness=thickness,
        delay=delay
    )


def dots_stroke(
    size: int,
    spacing: float,
    center_x: float,
    center_y: float,
    thickness: float = 2
) -> Stroke:
    """The lattice as a dot stroke, always drawn first."""
    return make_stroke(
        dot_grid(size, spacing, center_x, center_y),
        color=DOT_COLOR,
        thickness=thickness,
        delay=0,
        kind=StrokeKind.DOT
    )


def get_available_motifs() -> List[Dict]:
    """
    Get list of available motif generators.

    Returns:
        List of motif descriptions
    """
    return [
        {
            'id': 'dot_grid',
            'name': 'Dot Grid',
            'description': 'Square lattice of guide dots',
            'output': 'points'
        },
        {
            'id': 'flower',
            'name': 'Lotus Flower',
            'description': 'Eight outer petals, four inner petals and a center ring',
            'output': 'strokes'
        },
        {
            'id': 'leaf',
            'name': 'Leaf',
            'description': 'Closed teardrop outline along a direction',
            'output': 'points'
        },
        {
            'id': 'vine',
            'name': 'Vine',
            'description': 'Wobbling connector between two points',
            'output': 'points'
        },
        {
            'id': 'peacock',
            'name': 'Peacock',
            'description': 'Body, crown and fifteen eyed tail feathers',
            'output': 'strokes'
        },
        {
            'id': 'border',
            'name': 'Scalloped Border',
            'description': 'Scalloped ring with twelve rosettes',
            'output': 'strokes'
        }
    ]
