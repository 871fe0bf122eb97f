"""
Temporal smoothing of the per-frame classifier output.

Each channel keeps a short window of its most recent raw values. The shape
channel returns the mode of its window, size and hue return the mean. Windows
are plain tuples and every push returns a new window, so the whole stabilizer
is an immutable value that the frame loop threads through explicitly.
"""

from __future__ import annotations

import logging
import math
import statistics
from dataclasses import dataclass, field, replace
from typing import Dict, Hashable, Optional, Tuple, TypeVar

from .config import DEFAULT_CLASSIFIER_CONFIG, DEFAULT_STABILIZER_CONFIG, ClassifierConfig, StabilizerConfig
from .geometry import calculate_size
from .types import ClassifiedFrame, HslColor, Shape, StabilizedFrame

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Hashable)


def push_window(window: Tuple[T, ...], value: T, history_size: int) -> Tuple[T, ...]:
    """Append `value`, dropping the oldest entries beyond `history_size`."""
    window = window + (value,)
    if len(window) > history_size:
        window = window[len(window) - history_size :]
    return window


def window_mode(window: Tuple[T, ...]) -> T:
    counts: Dict[T, int] = {}
    for value in window:
        counts[value] = counts.get(value, 0) + 1

    # Strict '>' keeps the earliest-seen value on ties.
    best = window[-1]
    best_count = 0
    for value, count in counts.items():
        if count > best_count:
            best, best_count = value, count
    return best


def window_mean(window: Tuple[float, ...]) -> float:
    return statistics.mean(window)


def push_mode(
    window: Tuple[T, ...], value: T, history_size: int = DEFAULT_STABILIZER_CONFIG.history_size
) -> Tuple[Tuple[T, ...], T]:
    window = push_window(window, value, history_size)
    return window, window_mode(window)


def push_mean(
    window: Tuple[float, ...], value: float, history_size: int = DEFAULT_STABILIZER_CONFIG.history_size
) -> Tuple[Tuple[float, ...], float]:
    window = push_window(window, value, history_size)
    return window, window_mean(window)


@dataclass(frozen=True)
class TemporalStabilizer:
    """Shape / size / hue windows. Empty until the first recognized frame."""

    config: StabilizerConfig = field(default=DEFAULT_STABILIZER_CONFIG)
    shapes: Tuple[Shape, ...] = ()
    sizes: Tuple[float, ...] = ()
    hues: Tuple[float, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.shapes

    @property
    def is_full(self) -> bool:
        return len(self.shapes) >= self.config.history_size

    def reset(self) -> "TemporalStabilizer":
        if not self.is_empty:
            logger.debug("hand lost, clearing %d-frame history", len(self.shapes))
        return TemporalStabilizer(config=self.config)

    def push(
        self,
        classified: ClassifiedFrame,
        classifier_cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG,
    ) -> Tuple["TemporalStabilizer", Optional[StabilizedFrame]]:
        """
        Feed one classified frame.

        Frames without a recognized shape leave the windows untouched and
        produce no output.
        """
        if classified.shape is None:
            return self, None

        n = self.config.history_size
        raw_size = calculate_size(classified.pinch_distance, classifier_cfg)
        raw_hue = classified.hand_height * 360

        shapes, shape = push_mode(self.shapes, classified.shape, n)
        sizes, size = push_mean(self.sizes, raw_size, n)
        hues, hue = push_mean(self.hues, raw_hue, n)

        if self.shapes and shape != window_mode(self.shapes):
            logger.debug("stable shape %s -> %s", window_mode(self.shapes).value, shape.value)

        out = StabilizedFrame(
            shape=shape,
            size=size,
            color=HslColor(int(math.floor(hue)), classifier_cfg.saturation, classifier_cfg.lightness),
            center=classified.center,
        )
        return replace(self, shapes=shapes, sizes=sizes, hues=hues), out
