"""Tunable thresholds for shape classification, smoothing and the trail."""

from __future__ import annotations

from dataclasses import dataclass


# =============================================================================
# FINGER EXTENSION
# =============================================================================
EXTENDED_THRESHOLD = 0.05  # tip must sit this far above its MCP (normalized y)
THUMB_EXTENDED_THRESHOLD = 0.08
THUMB_MAX_WRIST_DY = 0.3


# =============================================================================
# PINCH
# =============================================================================
PINCH_THRESHOLD = 0.3  # normalized by thumb-base / index-base distance


# =============================================================================
# SIZE / COLOR
# =============================================================================
MIN_PINCH_DIST = 0.02
MAX_PINCH_DIST = 0.4
MIN_SIZE_PX = 30.0
MAX_SIZE_PX = 350.0

SATURATION = 70
LIGHTNESS = 50

VISIBILITY_THRESHOLD = 0.5


# =============================================================================
# SMOOTHING / TRAIL
# =============================================================================
HISTORY_SIZE = 5
TRAIL_CAPACITY = 10
TRAIL_MAX_OPACITY = 0.5


@dataclass(frozen=True)
class ClassifierConfig:
    extended_threshold: float = EXTENDED_THRESHOLD
    thumb_extended_threshold: float = THUMB_EXTENDED_THRESHOLD
    thumb_max_wrist_dy: float = THUMB_MAX_WRIST_DY
    pinch_threshold: float = PINCH_THRESHOLD
    min_pinch_dist: float = MIN_PINCH_DIST
    max_pinch_dist: float = MAX_PINCH_DIST
    min_size_px: float = MIN_SIZE_PX
    max_size_px: float = MAX_SIZE_PX
    saturation: int = SATURATION
    lightness: int = LIGHTNESS
    visibility_threshold: float = VISIBILITY_THRESHOLD

    def __post_init__(self) -> None:
        if self.max_pinch_dist <= self.min_pinch_dist:
            raise ValueError("max_pinch_dist must be greater than min_pinch_dist")


@dataclass(frozen=True)
class StabilizerConfig:
    history_size: int = HISTORY_SIZE

    def __post_init__(self) -> None:
        if self.history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {self.history_size}")


@dataclass(frozen=True)
class TrailConfig:
    capacity: int = TRAIL_CAPACITY
    max_opacity: float = TRAIL_MAX_OPACITY

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {self.capacity}")


DEFAULT_CLASSIFIER_CONFIG = ClassifierConfig()
DEFAULT_STABILIZER_CONFIG = StabilizerConfig()
DEFAULT_TRAIL_CONFIG = TrailConfig()
