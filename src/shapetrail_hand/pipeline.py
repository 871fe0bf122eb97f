"""
One frame step: classify -> stabilize -> trail.

`process_frame` is pure. It takes the previous `PipelineState` and the
landmarks of the current frame (or None when no hand was detected) and
returns the new state together with what should be drawn.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import DEFAULT_CLASSIFIER_CONFIG, ClassifierConfig, StabilizerConfig, TrailConfig
from .geometry import classify_frame
from .stabilizer import TemporalStabilizer
from .trail import TrailBuffer
from .types import ClassifiedFrame, DrawRequest, Frame, StabilizedFrame, TrailEntry
from .utils import to_pixels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineState:
    stabilizer: TemporalStabilizer = field(default_factory=TemporalStabilizer)
    trail: TrailBuffer = field(default_factory=TrailBuffer)
    classifier_config: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG

    @classmethod
    def create(
        cls,
        classifier_config: Optional[ClassifierConfig] = None,
        stabilizer_config: Optional[StabilizerConfig] = None,
        trail_config: Optional[TrailConfig] = None,
    ) -> "PipelineState":
        return cls(
            stabilizer=TemporalStabilizer(config=stabilizer_config or StabilizerConfig()),
            trail=TrailBuffer(config=trail_config or TrailConfig()),
            classifier_config=classifier_config or DEFAULT_CLASSIFIER_CONFIG,
        )

    def clear_trail(self) -> "PipelineState":
        return PipelineState(self.stabilizer, self.trail.clear(), self.classifier_config)


@dataclass(frozen=True)
class FrameResult:
    hand_present: bool
    classified: Optional[ClassifiedFrame]
    stabilized: Optional[StabilizedFrame]
    draw: Optional[DrawRequest]
    trail: List[Tuple[TrailEntry, float]]  # (entry, opacity), oldest first


def process_frame(
    state: PipelineState,
    landmarks: Optional[Frame],
    width: int,
    height: int,
) -> Tuple[PipelineState, FrameResult]:
    if not landmarks:
        stabilizer = state.stabilizer.reset()
        new_state = PipelineState(stabilizer, state.trail, state.classifier_config)
        return new_state, FrameResult(False, None, None, None, state.trail.with_opacity())

    classified = classify_frame(landmarks, state.classifier_config)
    stabilizer, stabilized = state.stabilizer.push(classified, state.classifier_config)

    trail = state.trail
    draw: Optional[DrawRequest] = None
    if stabilized is not None:
        x, y = to_pixels(stabilized.center[0], stabilized.center[1], width, height)
        draw = DrawRequest(stabilized.shape, x, y, stabilized.size, stabilized.color)
        trail = trail.push(draw)
    else:
        logger.debug("gesture not recognized (%d fingers)", classified.extended_finger_count)

    new_state = PipelineState(stabilizer, trail, state.classifier_config)
    return new_state, FrameResult(True, classified, stabilized, draw, trail.with_opacity())
