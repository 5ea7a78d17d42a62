"""
Playback engine.

Timer-driven state machine that walks a pattern's strokes, and within
each stroke its points, painting one step per tick through a Renderer.

States:
    IDLE     no tick pending
    RUNNING  exactly one tick pending on the scheduler

Each tick is either a dot burst (a whole ``dot`` stroke at once) or an
incremental step (one more segment of a line/curve stroke). The pattern
is complete when ``stroke_index == len(strokes)``.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

from kolam.core.config import settings
from kolam.core.exceptions import InvalidPatternIndexError, NoSurfaceError, ValidationError
from kolam.core.logging import get_logger
from kolam.geometry.primitives import Point, as_index
from kolam.geometry.stroke import Stroke, StrokeKind
from kolam.patterns.assembler import PATTERNS
from kolam.patterns.models import Pattern
from kolam.playback.effects import STROKE_GLOW, PowderEffects
from kolam.playback.renderer import DrawStyle, Renderer
from kolam.playback.scheduler import Scheduler, TimerHandle

logger = get_logger(__name__)

# Bezier handle length as a fraction of the neighbouring chord
CURVE_TENSION = 0.3


class PlaybackPhase(Enum):
    """Engine states."""
    IDLE = "idle"
    RUNNING = "running"


@dataclass
class PlaybackState:
    """Mutable playback position, owned by one engine."""
    pattern_index: int = 0
    stroke_index: int = 0
    point_index: int = 0
    playing: bool = False
    speed_factor: float = 1.0

    @property
    def phase(self) -> PlaybackPhase:
        return PlaybackPhase.RUNNING if self.playing else PlaybackPhase.IDLE

    def to_dict(self) -> Dict:
        return {
            'pattern_index': self.pattern_index,
            'stroke_index': self.stroke_index,
            'point_index': self.point_index,
            'playing': self.playing,
            'speed_factor': self.speed_factor,
            'phase': self.phase.value
        }


@dataclass(frozen=True)
class PlaybackProgress:
    """Externally visible progress snapshot."""
    stroke_index: int
    total_strokes: int
    pattern: Pattern

    @property
    def fraction(self) -> float:
        if self.total_strokes == 0:
            return 1.0
        return self.stroke_index / self.total_strokes

    def to_dict(self) -> Dict:
        return {
            'stroke_index': self.stroke_index,
            'total_strokes': self.total_strokes,
            'fraction': self.fraction,
            'pattern': self.pattern.metadata()
        }


def curve_controls(start: Point, end: Point, after: Point) -> tuple:
    """
    Bezier control points for the segment ``start -> end``.

    The second handle mirrors the direction toward ``after`` so consecutive
    segments meet smoothly.
    """
    cp1 = start.lerp(end, CURVE_TENSION)
    cp2 = Point(
        end.x - (after.x - end.x) * CURVE_TENSION,
        end.y - (after.y - end.y) * CURVE_TENSION
    )
    return cp1, cp2


class PlaybackEngine:
    """
    Incremental kolam drawing driven by a Scheduler.

    All intents (play, pause, reset, select_pattern, set_speed) go through
    the engine, which cancels its pending tick before touching state.
    """

    def __init__(
        self,
        renderer: Renderer,
        scheduler: Scheduler,
        patterns: Sequence[Pattern] = PATTERNS,
        effects: Optional[PowderEffects] = None,
        base_tick_ms: Optional[float] = None,
        floor_tick_ms: Optional[float] = None,
        on_progress: Optional[Callable[[PlaybackProgress], None]] = None,
        on_state_change: Optional[Callable[[PlaybackState], None]] = None
    ):
        """
        Initialize playback engine.

        Args:
            renderer: Surface to paint on
            scheduler: Source of cancellable delayed calls
            patterns: Pattern table (shared, read-only)
            effects: Powder effects; defaults from settings
            base_tick_ms: Tick interval at speed 1.0
            floor_tick_ms: Shortest allowed tick interval
            on_progress: Called whenever the stroke index changes
            on_state_change: Called on play/pause/reset/selection/completion
        """
        if not patterns:
            raise ValidationError("Playback needs at least one pattern")

        self.renderer = renderer
        self.scheduler = scheduler
        self.patterns = tuple(patterns)
        self.effects = effects or PowderEffects(
            seed=settings.random_seed,
            enabled=settings.enable_effects
        )
        self.base_tick_ms = base_tick_ms if base_tick_ms is not None else settings.base_tick_ms
        self.floor_tick_ms = floor_tick_ms if floor_tick_ms is not None else settings.floor_tick_ms
        self.bounds = (0, 0, settings.canvas_width, settings.canvas_height)

        self.on_progress = on_progress
        self.on_state_change = on_state_change

        self.state = PlaybackState(speed_factor=settings.default_speed)
        self._pending: Optional[TimerHandle] = None
        self.ticks = 0

        logger.info(
            "playback_engine_initialized",
            patterns=len(self.patterns),
            base_tick_ms=self.base_tick_ms,
            floor_tick_ms=self.floor_tick_ms
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def pattern(self) -> Pattern:
        return self.patterns[self.state.pattern_index]

    @property
    def pattern_count(self) -> int:
        return len(self.patterns)

    @property
    def is_complete(self) -> bool:
        return self.state.stroke_index >= len(self.pattern.strokes)

    @property
    def has_pending_tick(self) -> bool:
        return self._pending is not None

    def tick_interval_ms(self) -> float:
        """Delay before the next tick at the current speed."""
        return max(self.floor_tick_ms, self.base_tick_ms / self.state.speed_factor)

    def progress(self) -> PlaybackProgress:
        return PlaybackProgress(
            stroke_index=self.state.stroke_index,
            total_strokes=len(self.pattern.strokes),
            pattern=self.pattern
        )

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def play(self) -> bool:
        """
        Start or resume drawing.

        Returns:
            True if the engine is running afterwards
        """
        if self.state.playing and self._pending is not None:
            return True
        if not self.renderer.available:
            logger.warning("playback_no_surface", pattern=self.pattern.id)
            self.state.playing = False
            return False
        if self.is_complete:
            logger.info("playback_already_complete", pattern=self.pattern.id)
            self.state.playing = False
            return False

        self.state.playing = True
        self._schedule()
        logger.info(
            "playback_started",
            pattern=self.pattern.id,
            stroke_index=self.state.stroke_index,
            point_index=self.state.point_index
        )
        self._emit_state()
        return True

    def pause(self) -> None:
        """Stop scheduling; the position is kept for resuming."""
        self._cancel_pending()
        if not self.state.playing:
            return
        self.state.playing = False
        logger.info(
            "playback_paused",
            stroke_index=self.state.stroke_index,
            point_index=self.state.point_index
        )
        self._emit_state()

    def reset(self) -> None:
        """Rewind to the first stroke and repaint the bare background."""
        self._cancel_pending()
        self.state.playing = False
        self.state.stroke_index = 0
        self.state.point_index = 0
        self._repaint()
        logger.info("playback_reset", pattern=self.pattern.id)
        self._emit_progress()
        self._emit_state()

    def select_pattern(self, index: int) -> Pattern:
        """
        Switch to another pattern and reset.

        Raises:
            InvalidPatternIndexError: If index is outside the table; state
                is left untouched
        """
        try:
            position = as_index(index)
        except TypeError:
            position = -1
        if not 0 <= position < len(self.patterns):
            logger.warning("invalid_pattern_index", index=repr(index), count=len(self.patterns))
            raise InvalidPatternIndexError(index, len(self.patterns))

        index = position
        self._cancel_pending()
        self.state.pattern_index = index
        logger.info("pattern_selected", index=index, pattern=self.pattern.id)
        self.reset()
        return self.pattern

    def set_speed(self, factor: float) -> None:
        """
        Change the speed multiplier; takes effect at the next scheduling decision.

        Raises:
            ValidationError: If factor is not a positive finite number
        """
        if not isinstance(factor, (int, float)) or not math.isfinite(factor) or factor <= 0:
            raise ValidationError(f"Speed factor must be positive, got {factor}")
        self.state.speed_factor = float(factor)
        logger.debug("playback_speed_changed", speed_factor=self.state.speed_factor)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance one step. Does nothing unless running."""
        if not self.state.playing:
            return

        if not self.renderer.available:
            logger.warning("tick_skipped_no_surface", stroke_index=self.state.stroke_index)
            self._halt()
            return

        if self.is_complete:
            self._finish()
            return

        self.ticks += 1
        stroke = self.pattern.strokes[self.state.stroke_index]

        try:
            if stroke.kind is StrokeKind.DOT:
                self.effects.dot_burst(self.renderer, stroke.points, stroke.color)
                self._advance_stroke()
            elif self.state.point_index >= len(stroke.points) - 1:
                self._advance_stroke()
            else:
                self._draw_step(stroke)
        except NoSurfaceError as e:
            # Position covers only completed segments; resuming redraws the failed one
            logger.warning(
                "tick_aborted_no_surface",
                stroke_index=self.state.stroke_index,
                error=e.message
            )
            self._halt()
            return
        except Exception:
            logger.exception(
                "tick_failed",
                stroke_index=self.state.stroke_index,
                point_index=self.state.point_index
            )
            self._halt()
            raise

        if self.is_complete:
            self._finish()
        else:
            self._schedule()

    def _draw_step(self, stroke: Stroke) -> None:
        points = stroke.points
        i = self.state.point_index
        start, end = points[i], points[i + 1]

        style = DrawStyle(color=stroke.color, thickness=stroke.thickness, glow=STROKE_GLOW)
        if stroke.kind is StrokeKind.CURVE:
            after = points[min(i + 2, len(points) - 1)]
            self.renderer.draw_segment(
                start, end, stroke.kind, style,
                control_points=curve_controls(start, end, after)
            )
        else:
            self.renderer.draw_segment(start, end, stroke.kind, style)
        self.state.point_index += 1

        self.effects.stroke_particles(self.renderer, end, stroke.color)
        self.effects.texture(self.renderer, end, stroke.color)

    def _advance_stroke(self) -> None:
        self.state.stroke_index += 1
        self.state.point_index = 0
        self._emit_progress()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_timer(self) -> None:
        self._pending = None
        self.tick()

    def _schedule(self) -> None:
        self._cancel_pending()
        self._pending = self.scheduler.call_later(self.tick_interval_ms(), self._on_timer)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _halt(self) -> None:
        self._cancel_pending()
        self.state.playing = False
        self._emit_state()

    def _finish(self) -> None:
        logger.info(
            "playback_complete",
            pattern=self.pattern.id,
            strokes=len(self.pattern.strokes),
            ticks=self.ticks
        )
        self._halt()

    def _repaint(self) -> None:
        if not self.renderer.available:
            logger.warning("repaint_skipped_no_surface")
            return
        self.renderer.clear(self.bounds)
        self.renderer.fill_background(self.pattern.background)
        if settings.ground_texture:
            self.effects.ground(self.renderer, self.bounds[2], self.bounds[3])

    def _emit_progress(self) -> None:
        if self.on_progress is not None:
            self.on_progress(self.progress())

    def _emit_state(self) -> None:
        if self.on_state_change is not None:
            self.on_state_change(replace(self.state))
