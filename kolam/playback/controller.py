"""
Controller surface for a presentational shell.

Maps the shell's buttons, slider and selector onto PlaybackEngine intents.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from kolam.core.config import settings
from kolam.core.exceptions import ValidationError
from kolam.core.logging import get_logger
from kolam.patterns.assembler import PATTERNS
from kolam.patterns.models import Pattern
from kolam.playback.effects import PowderEffects
from kolam.playback.engine import PlaybackEngine, PlaybackProgress, PlaybackState
from kolam.playback.renderer import Renderer
from kolam.playback.scheduler import Scheduler

logger = get_logger(__name__)


class KolamController:
    """
    Play/pause/reset/speed/pattern controls over one engine.

    Speed is clamped to the slider range from settings; out-of-range pattern
    indices are rejected without touching the engine.
    """

    def __init__(
        self,
        renderer: Renderer,
        scheduler: Scheduler,
        patterns: Sequence[Pattern] = PATTERNS,
        effects: Optional[PowderEffects] = None,
        on_progress: Optional[Callable[[PlaybackProgress], None]] = None,
        on_state_change: Optional[Callable[[PlaybackState], None]] = None
    ):
        self.engine = PlaybackEngine(
            renderer=renderer,
            scheduler=scheduler,
            patterns=patterns,
            effects=effects,
            on_progress=on_progress,
            on_state_change=on_state_change
        )
        self.speed_min = settings.speed_min
        self.speed_max = settings.speed_max
        # Paint the initial background
        self.engine.reset()

    @property
    def state(self) -> PlaybackState:
        return self.engine.state

    def patterns(self) -> List[Dict]:
        return [
            {'index': i, **pattern.metadata()}
            for i, pattern in enumerate(self.engine.patterns)
        ]

    def select_pattern(self, index: int) -> Pattern:
        return self.engine.select_pattern(index)

    def next_pattern(self) -> Pattern:
        """Cycle to the following pattern, wrapping around."""
        index = (self.engine.state.pattern_index + 1) % self.engine.pattern_count
        return self.engine.select_pattern(index)

    def play(self) -> bool:
        return self.engine.play()

    def pause(self) -> None:
        self.engine.pause()

    def toggle(self) -> bool:
        """Play/pause button; returns whether playback is now running."""
        if self.engine.state.playing:
            self.engine.pause()
            return False
        return self.engine.play()

    def reset(self) -> None:
        self.engine.reset()

    def set_speed(self, factor: float) -> float:
        """
        Set the speed multiplier, clamped to the slider range.

        Raises:
            ValidationError: If factor is not positive

        Returns:
            The speed actually applied
        """
        if not isinstance(factor, (int, float)) or not factor > 0:
            raise ValidationError(f"Speed factor must be positive, got {factor}")
        applied = min(max(float(factor), self.speed_min), self.speed_max)
        if applied != factor:
            logger.debug("speed_clamped", requested=factor, applied=applied)
        self.engine.set_speed(applied)
        return applied

    def get_progress(self) -> Tuple[int, int, Dict]:
        """(current stroke index, total strokes, pattern metadata)."""
        progress = self.engine.progress()
        return progress.stroke_index, progress.total_strokes, progress.pattern.metadata()
