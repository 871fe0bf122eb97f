"""
Per-frame geometry over the 21 hand landmarks.

Everything here is a pure function of a single frame: finger extension,
pinch distance, shape classification and the size/color/position channels
that drive rendering. Image coordinates are normalized, so a smaller y means
higher on screen.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .config import DEFAULT_CLASSIFIER_CONFIG, ClassifierConfig
from .types import LM, ClassifiedFrame, Frame, HslColor, Landmark, PinchData, Shape
from .utils import clamp, mean_point, planar_distance, spatial_distance


# (tip, base, mid) for index, middle, ring, pinky
FINGERS: Tuple[Tuple[int, int, int], ...] = (
    (LM.INDEX_TIP, LM.INDEX_MCP, LM.INDEX_PIP),
    (LM.MIDDLE_TIP, LM.MIDDLE_MCP, LM.MIDDLE_PIP),
    (LM.RING_TIP, LM.RING_MCP, LM.RING_PIP),
    (LM.PINKY_TIP, LM.PINKY_MCP, LM.PINKY_PIP),
)


def is_finger_extended(
    tip: Landmark,
    base: Landmark,
    mid: Landmark,
    cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG,
) -> bool:
    """
    A finger is extended when its tip is clearly above the MCP and it is straight.

    A curled finger folds the tip back towards the base, so tip-to-base drops
    below mid-to-base.
    """
    above = tip.y < base.y - cfg.extended_threshold
    return above and planar_distance(tip, base) > planar_distance(mid, base)


def _finger_extended(frame: Frame, finger: Tuple[int, int, int], cfg: ClassifierConfig) -> bool:
    tip, base, mid = finger
    return is_finger_extended(frame[tip], frame[base], frame[mid], cfg)


def is_thumb_extended(frame: Frame, cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG) -> bool:
    # The thumb opens sideways, so test horizontal spread instead of height.
    tip = frame[LM.THUMB_TIP]
    base = frame[LM.THUMB_BASE]
    wrist = frame[LM.WRIST]
    horizontal = abs(tip.x - base.x)
    vertical = abs(tip.y - wrist.y)
    return horizontal > cfg.thumb_extended_threshold and vertical < cfg.thumb_max_wrist_dy


def _extension_flags(frame: Frame, cfg: ClassifierConfig) -> Tuple[bool, Tuple[bool, ...]]:
    """(thumb, (index, middle, ring, pinky))"""
    return is_thumb_extended(frame, cfg), tuple(_finger_extended(frame, f, cfg) for f in FINGERS)


def count_extended_fingers(frame: Frame, cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG) -> int:
    thumb, fingers = _extension_flags(frame, cfg)
    return int(thumb) + sum(fingers)


def pinch(frame: Frame, cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG) -> PinchData:
    """
    Thumb-tip to index-tip distance.

    The raw 3D distance is divided by the thumb-base / index-base spacing so the
    pinch threshold does not depend on how far the hand is from the camera.
    """
    distance = spatial_distance(frame[LM.THUMB_TIP], frame[LM.INDEX_TIP])
    base_dist = planar_distance(frame[LM.THUMB_BASE], frame[LM.INDEX_MCP])
    normalized = distance / (base_dist or 1.0)
    return PinchData(
        distance=distance,
        normalized_distance=normalized,
        is_pinching=normalized < cfg.pinch_threshold,
    )


def _classify(thumb: bool, fingers: Tuple[bool, ...], pinching: bool) -> Optional[Shape]:
    count = int(thumb) + sum(fingers)

    if count == 5 and not pinching:
        return Shape.CIRCLE
    if count == 0 or (count == 1 and thumb):
        return Shape.SQUARE
    if count == 2:
        # Only the index + middle "V" counts.
        index_ext, middle_ext = fingers[0], fingers[1]
        if index_ext and middle_ext:
            return Shape.TRIANGLE
        return None
    if count == 3:
        # Any three fingers are accepted as the alternate triangle.
        return Shape.TRIANGLE
    return None


def classify_shape(frame: Frame, cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG) -> Optional[Shape]:
    thumb, fingers = _extension_flags(frame, cfg)
    return _classify(thumb, fingers, pinch(frame, cfg).is_pinching)


def calculate_size(pinch_distance: float, cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG) -> float:
    """Map raw pinch distance onto a pixel size with quadratic easing."""
    clamped = clamp(pinch_distance, cfg.min_pinch_dist, cfg.max_pinch_dist)
    normalized = (clamped - cfg.min_pinch_dist) / (cfg.max_pinch_dist - cfg.min_pinch_dist)
    eased = normalized * normalized
    return cfg.min_size_px + eased * (cfg.max_size_px - cfg.min_size_px)


def hand_height(frame: Frame) -> float:
    return 1.0 - frame[LM.WRIST].y


def calculate_hue(height: float) -> int:
    return int(math.floor(height * 360))


def calculate_color(height: float, cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG) -> HslColor:
    return HslColor(calculate_hue(height), cfg.saturation, cfg.lightness)


def hand_center(frame: Frame) -> Tuple[float, float]:
    # Averaging four joints damps the jitter of any single one.
    return mean_point(
        [frame[LM.WRIST], frame[LM.INDEX_MCP], frame[LM.MIDDLE_MCP], frame[LM.RING_MCP]]
    )


def hand_confidence(frame: Frame, cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG) -> float:
    if not frame:
        return 0.0
    visible = 0
    for lm in frame:
        if lm.visibility is not None and lm.visibility > cfg.visibility_threshold:
            visible += 1
    return visible / len(frame)


def classify_frame(frame: Frame, cfg: ClassifierConfig = DEFAULT_CLASSIFIER_CONFIG) -> ClassifiedFrame:
    p = pinch(frame, cfg)
    thumb, fingers = _extension_flags(frame, cfg)
    return ClassifiedFrame(
        shape=_classify(thumb, fingers, p.is_pinching),
        pinch_distance=p.distance,
        normalized_pinch_distance=p.normalized_distance,
        is_pinching=p.is_pinching,
        hand_height=hand_height(frame),
        center=hand_center(frame),
        extended_finger_count=int(thumb) + sum(fingers),
        confidence=hand_confidence(frame, cfg),
    )
