"""
Timed, incremental playback of kolam patterns.
"""

from kolam.playback.scheduler import (
    AsyncioScheduler,
    ManualScheduler,
    Scheduler,
    TimerHandle,
)
from kolam.playback.renderer import DrawCall, DrawStyle, RecordingRenderer, Renderer
from kolam.playback.effects import PowderEffects
from kolam.playback.engine import (
    PlaybackEngine,
    PlaybackPhase,
    PlaybackProgress,
    PlaybackState,
)
from kolam.playback.controller import KolamController

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "Scheduler",
    "TimerHandle",
    "DrawCall",
    "DrawStyle",
    "RecordingRenderer",
    "Renderer",
    "PowderEffects",
    "PlaybackEngine",
    "PlaybackPhase",
    "PlaybackProgress",
    "PlaybackState",
    "KolamController",
]
