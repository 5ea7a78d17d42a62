"""
Procedural geometry for kolam motifs.

Pure generators that turn a few numeric parameters into ordered
point sequences and strokes.
"""

from kolam.geometry.primitives import Point
from kolam.geometry.stroke import Stroke, StrokeKind, make_stroke
from kolam.geometry.motifs import (
    border,
    dot_grid,
    flower,
    leaf,
    peacock,
    vine,
)

__all__ = [
    'Point',
    'Stroke',
    'StrokeKind',
    'make_stroke',
    'border',
    'dot_grid',
    'flower',
    'leaf',
    'peacock',
    'vine',
]
