from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

import cv2
import numpy as np

from .types import DrawRequest, Frame, HslColor, Shape, TrailEntry


BGR = Tuple[int, int, int]

OUTLINE_COLOR: BGR = (255, 255, 255)
OUTLINE_THICKNESS = 3

HAND_CONNECTIONS: List[Tuple[int, int]] = [
    # thumb
    (0, 1),
    (1, 2),
    (2, 3),
    (3, 4),
    # index
    (0, 5),
    (5, 6),
    (6, 7),
    (7, 8),
    # middle
    (0, 9),
    (9, 10),
    (10, 11),
    (11, 12),
    # ring
    (0, 13),
    (13, 14),
    (14, 15),
    (15, 16),
    # pinky
    (0, 17),
    (17, 18),
    (18, 19),
    (19, 20),
    # palm
    (5, 9),
    (9, 13),
    (13, 17),
]

_HIGHLIGHTED_TIPS = (4, 8)  # thumb, index


def hsl_to_bgr(color: HslColor) -> BGR:
    # OpenCV 8-bit HLS: H in [0, 180), L and S in [0, 255].
    h = (color.hue % 360) / 2.0
    light = color.lightness * 255 / 100.0
    s = color.saturation * 255 / 100.0
    hls = np.array([[[h, light, s]]], dtype=np.uint8)
    b, g, r = cv2.cvtColor(hls, cv2.COLOR_HLS2BGR)[0, 0]
    return (int(b), int(g), int(r))


def _pt(x: float, y: float) -> Tuple[int, int]:
    return (int(round(x)), int(round(y)))


def draw_circle(frame, x: float, y: float, size: float, color: BGR):
    radius = max(1, int(round(size / 2)))
    cv2.circle(frame, _pt(x, y), radius, color, -1, cv2.LINE_AA)
    cv2.circle(frame, _pt(x, y), radius, OUTLINE_COLOR, OUTLINE_THICKNESS, cv2.LINE_AA)
    return frame


def draw_square(frame, x: float, y: float, size: float, color: BGR):
    half = size / 2
    p0 = _pt(x - half, y - half)
    p1 = _pt(x + half, y + half)
    cv2.rectangle(frame, p0, p1, color, -1)
    cv2.rectangle(frame, p0, p1, OUTLINE_COLOR, OUTLINE_THICKNESS)
    return frame


def triangle_points(x: float, y: float, size: float) -> np.ndarray:
    """Equilateral triangle with side `size`, apex up, centered vertically on y."""
    height = size * math.sqrt(3) / 2
    return np.array(
        [
            _pt(x, y - height / 2),
            _pt(x - size / 2, y + height / 2),
            _pt(x + size / 2, y + height / 2),
        ],
        dtype=np.int32,
    )


def draw_triangle(frame, x: float, y: float, size: float, color: BGR):
    pts = triangle_points(x, y, size)
    cv2.fillPoly(frame, [pts], color, cv2.LINE_AA)
    cv2.polylines(frame, [pts], True, OUTLINE_COLOR, OUTLINE_THICKNESS, cv2.LINE_AA)
    return frame


_DRAWERS = {
    Shape.CIRCLE: draw_circle,
    Shape.SQUARE: draw_square,
    Shape.TRIANGLE: draw_triangle,
}


def draw_shape(frame, request: DrawRequest, opacity: float = 1.0):
    drawer = _DRAWERS[request.shape]
    color = hsl_to_bgr(request.color)
    if opacity >= 1.0:
        return drawer(frame, request.x, request.y, request.size, color)

    overlay = frame.copy()
    drawer(overlay, request.x, request.y, request.size, color)
    cv2.addWeighted(overlay, opacity, frame, 1.0 - opacity, 0, dst=frame)
    return frame


def draw_trail(frame, trail: Iterable[Tuple[TrailEntry, float]]):
    for entry, opacity in trail:
        draw_shape(frame, entry.to_request(), opacity)
    return frame


def draw_hand_landmarks(frame, landmarks: Frame, connection_alpha: float = 0.5):
    h, w = frame.shape[:2]
    pts = [_pt(lm.x * w, lm.y * h) for lm in landmarks]

    overlay = frame.copy()
    for a, b in HAND_CONNECTIONS:
        if a < len(pts) and b < len(pts):
            cv2.line(overlay, pts[a], pts[b], (0, 255, 0), 2, cv2.LINE_AA)
    cv2.addWeighted(overlay, connection_alpha, frame, 1.0 - connection_alpha, 0, dst=frame)

    for idx, pt in enumerate(pts):
        color = (0, 0, 255) if idx in _HIGHLIGHTED_TIPS else (0, 255, 0)
        cv2.circle(frame, pt, 5, color, -1, lineType=cv2.LINE_AA)
    return frame


def draw_text(frame, text: str, org: Tuple[int, int], color=(255, 255, 255), scale=0.6, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def draw_status(frame, lines: Sequence[str], origin: Tuple[int, int] = (12, 28), line_height: int = 26):
    x, y = origin
    for i, line in enumerate(lines):
        draw_text(frame, line, (x, y + i * line_height))
    return frame
