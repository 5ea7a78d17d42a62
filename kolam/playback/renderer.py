"""
Renderer interface consumed by the playback engine.

The engine decides what to paint; a Renderer paints it onto some 2D
surface (canvas, image, or a stream of instructions for a frontend).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from kolam.core.exceptions import NoSurfaceError
from kolam.geometry.primitives import Point
from kolam.geometry.stroke import StrokeKind


@dataclass(frozen=True)
class DrawStyle:
    """Paint attributes for one draw request."""
    color: str
    thickness: float = 1.0
    alpha: float = 1.0
    size: float = 1.0    # marker radius / speck size
    glow: float = 0.0    # shadow blur
    angle: float = 0.0   # texture hairline orientation
    length: float = 0.0  # texture hairline half-length

    def to_dict(self) -> Dict:
        return {
            'color': self.color,
            'thickness': self.thickness,
            'alpha': self.alpha,
            'size': self.size,
            'glow': self.glow,
            'angle': self.angle,
            'length': self.length
        }


Bounds = Tuple[float, float, float, float]  # x, y, width, height


class Renderer(ABC):
    """
    Abstract drawing surface.

    ``available`` is False when there is no surface to paint on; the
    engine then treats every tick as a no-op. Draw methods may raise
    NoSurfaceError if the surface disappears mid-request.
    """

    available: bool = True

    @abstractmethod
    def clear(self, bounds: Bounds) -> None:
        """Erase the given rectangle."""
        pass

    @abstractmethod
    def fill_background(self, color: str) -> None:
        """Fill the whole surface with a solid color."""
        pass

    @abstractmethod
    def draw_dots(
        self,
        points: Sequence[Point],
        style: DrawStyle,
        sizes: Optional[Sequence[float]] = None
    ) -> None:
        """
        Paint each point as an independent round marker.

        Args:
            points: Marker centers
            style: Shared marker style
            sizes: Per-marker radii overriding ``style.size``, one per point
        """
        pass

    @abstractmethod
    def draw_segment(
        self,
        start: Point,
        end: Point,
        kind: StrokeKind,
        style: DrawStyle,
        control_points: Optional[Tuple[Point, Point]] = None
    ) -> None:
        """
        Paint one segment of a stroke.

        Args:
            start: Segment start
            end: Segment end
            kind: LINE for a straight segment, CURVE for a cubic Bezier
            style: Stroke style
            control_points: Bezier control points for CURVE segments
        """
        pass

    @abstractmethod
    def draw_scatter(self, point: Point, style: DrawStyle) -> None:
        """Paint one loose powder particle."""
        pass

    @abstractmethod
    def draw_texture(self, point: Point, style: DrawStyle) -> None:
        """Paint one short grain hairline through ``point``."""
        pass

    def draw_ground(self, point: Point, style: DrawStyle) -> None:
        """Paint one background speck; surfaces without ground texture ignore it."""
        pass


@dataclass
class DrawCall:
    """One recorded renderer request."""
    op: str
    args: Dict = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {'op': self.op, **self.args}


def _pt(point: Point) -> List[float]:
    return [point.x, point.y]


class RecordingRenderer(Renderer):
    """
    Renderer that records every request as a DrawCall.

    Used headless by tests and by the WebSocket shell, which forwards the
    recorded calls to a browser canvas.
    """

    def __init__(self, available: bool = True) -> None:
        self.available = available
        self.calls: List[DrawCall] = []

    def _record(self, op: str, **args) -> None:
        if not self.available:
            raise NoSurfaceError(f"Cannot {op}: no drawing surface")
        self.calls.append(DrawCall(op, args))

    def clear(self, bounds: Bounds) -> None:
        self._record('clear', bounds=list(bounds))

    def fill_background(self, color: str) -> None:
        self._record('fill_background', color=color)

    def draw_dots(
        self,
        points: Sequence[Point],
        style: DrawStyle,
        sizes: Optional[Sequence[float]] = None
    ) -> None:
        self._record(
            'draw_dots',
            points=[_pt(p) for p in points],
            style=style.to_dict(),
            sizes=[float(s) for s in sizes] if sizes is not None else None
        )

    def draw_segment(
        self,
        start: Point,
        end: Point,
        kind: StrokeKind,
        style: DrawStyle,
        control_points: Optional[Tuple[Point, Point]] = None
    ) -> None:
        self._record(
            'draw_segment',
            start=_pt(start),
            end=_pt(end),
            kind=kind.value,
            style=style.to_dict(),
            control_points=[_pt(p) for p in control_points] if control_points else None
        )

    def draw_scatter(self, point: Point, style: DrawStyle) -> None:
        self._record('draw_scatter', point=_pt(point), style=style.to_dict())

    def draw_texture(self, point: Point, style: DrawStyle) -> None:
        self._record('draw_texture', point=_pt(point), style=style.to_dict())

    def draw_ground(self, point: Point, style: DrawStyle) -> None:
        self._record('draw_ground', point=_pt(point), style=style.to_dict())

    def ops(self, op: Optional[str] = None) -> List[DrawCall]:
        """Recorded calls, optionally filtered by op name."""
        if op is None:
            return list(self.calls)
        return [call for call in self.calls if call.op == op]

    def drain(self) -> List[DrawCall]:
        """Return and forget everything recorded so far."""
        calls, self.calls = self.calls, []
        return calls
