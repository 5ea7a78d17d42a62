"""
Pattern assembler.

Composes motif generator output into the fixed pattern catalogue.
The table is built once at import and shared read-only by every
playback session.
"""

from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from kolam.core.exceptions import InvalidPatternIndexError
from kolam.core.logging import get_logger
from kolam.geometry import motifs
from kolam.geometry.primitives import as_index
from kolam.geometry.stroke import Stroke
from kolam.patterns.models import Pattern

logger = get_logger(__name__)

CANVAS_CENTER = (225, 225)


def build_pattern(
    pattern_id: str,
    name: str,
    description: str,
    grid_size: int,
    dot_spacing: float,
    background: str,
    strokes: Sequence[Stroke]
) -> Pattern:
    """
    Validate strokes and freeze them into a Pattern.

    Raises:
        EmptyStrokeError: A generator produced a stroke without enough points
        ValidationError: A stroke carries an invalid delay or thickness
    """
    for stroke in strokes:
        stroke.validate()

    return Pattern(
        id=pattern_id,
        name=name,
        description=description,
        grid_size=grid_size,
        dot_spacing=dot_spacing,
        background=background,
        strokes=tuple(strokes)
    )


def _lotus_mandala() -> Pattern:
    cx, cy = CANVAS_CENTER
    strokes: List[Stroke] = [motifs.dots_stroke(17, 18, cx, cy, thickness=2)]

    strokes += motifs.flower(cx, cy, 1)
    # Satellites: north, east, south, west
    for sx, sy in [(225, 150), (300, 225), (225, 300), (150, 225)]:
        strokes += motifs.flower(sx, sy, 0.5)

    vines = [
        ((225, 175), (225, 125)),
        ((250, 225), (325, 225)),
        ((225, 275), (225, 325)),
        ((200, 225), (125, 225)),
    ]
    for i, (start, end) in enumerate(vines):
        strokes.append(motifs.vine_stroke(start, end, 3, delay=3500 + i * 100))

    strokes += motifs.leaf_ring(cx, cy, 85, count=16, scale=0.8, base_delay=3900)
    strokes += motifs.border(cx, cy, 130)

    return build_pattern(
        'complete-lotus-mandala',
        'Complete Lotus Mandala',
        'Intricate lotus mandala with detailed petals and decorative borders',
        grid_size=17,
        dot_spacing=18,
        background='#4A2C2A',
        strokes=strokes
    )


def _peacock_kolam() -> Pattern:
    cx, cy = CANVAS_CENTER
    strokes: List[Stroke] = [motifs.dots_stroke(19, 16, cx, cy, thickness=1.5)]

    strokes += motifs.peacock(225, 240)
    for fx, fy in [(150, 180), (300, 180), (150, 320), (300, 320)]:
        strokes += motifs.flower(fx, fy, 0.4)

    corners = [
        ((100, 100), (150, 150)),
        ((350, 100), (300, 150)),
        ((350, 350), (300, 300)),
        ((100, 350), (150, 300)),
    ]
    for i, (start, end) in enumerate(corners):
        strokes.append(motifs.vine_stroke(start, end, 4, delay=4000 + i * 100))

    return build_pattern(
        'detailed-peacock-kolam',
        'Detailed Peacock Kolam',
        'Complete peacock design with intricate feathers and decorative elements',
        grid_size=19,
        dot_spacing=16,
        background='#2F2F2F',
        strokes=strokes
    )


def _traditional_rangoli() -> Pattern:
    cx, cy = CANVAS_CENTER
    strokes: List[Stroke] = [motifs.dots_stroke(21, 14, cx, cy, thickness=1.5)]

    strokes += motifs.star_rays(cx, cy, count=8)
    strokes += motifs.ripple_rings(cx, cy, levels=4)
    for fx, fy in [(120, 120), (330, 120), (330, 330), (120, 330)]:
        strokes += motifs.flower(fx, fy, 0.6)

    connectors = [
        ((225, 80), (225, 120)),
        ((370, 225), (330, 225)),
        ((225, 370), (225, 330)),
        ((80, 225), (120, 225)),
    ]
    for i, (start, end) in enumerate(connectors):
        strokes.append(motifs.vine_stroke(
            start, end, 5, delay=3000 + i * 150, color='#FF1493'
        ))

    return build_pattern(
        'traditional-rangoli',
        'Traditional Rangoli Pattern',
        'Complete traditional rangoli with geometric patterns and floral motifs',
        grid_size=21,
        dot_spacing=14,
        background='#3D2914',
        strokes=strokes
    )


PATTERN_BUILDERS: Tuple[Callable[[], Pattern], ...] = (
    _lotus_mandala,
    _peacock_kolam,
    _traditional_rangoli,
)


def build_pattern_table() -> Tuple[Pattern, ...]:
    """Run every builder once; construction errors propagate."""
    table = tuple(builder() for builder in PATTERN_BUILDERS)
    logger.info(
        "pattern_table_built",
        patterns=len(table),
        total_strokes=int(np.sum([p.stroke_count for p in table]))
    )
    return table


PATTERNS: Tuple[Pattern, ...] = build_pattern_table()


def pattern_count() -> int:
    return len(PATTERNS)


def get_pattern(index: int) -> Pattern:
    """
    Look up a pattern by catalogue index.

    Raises:
        InvalidPatternIndexError: If index is outside the catalogue
    """
    try:
        position = as_index(index)
    except TypeError:
        raise InvalidPatternIndexError(index, len(PATTERNS))
    if not 0 <= position < len(PATTERNS):
        raise InvalidPatternIndexError(index, len(PATTERNS))
    return PATTERNS[position]


def list_patterns() -> List[Dict]:
    """Metadata for every pattern, with its catalogue index."""
    return [
        {'index': i, **pattern.metadata()}
        for i, pattern in enumerate(PATTERNS)
    ]
