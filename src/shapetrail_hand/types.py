from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


Point2f = Tuple[float, float]


class Shape(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"


@dataclass(frozen=True)
class Landmark:
    """A single hand landmark in normalized image coordinates."""

    x: float
    y: float
    z: float = 0.0
    visibility: Optional[float] = None


# Exactly 21 landmarks, indexed like MediaPipe Hands.
Frame = Sequence[Landmark]


class LM:
    WRIST = 0
    THUMB_BASE, THUMB_MID, THUMB_TIP = 2, 3, 4
    INDEX_MCP, INDEX_PIP, INDEX_TIP = 5, 6, 8
    MIDDLE_MCP, MIDDLE_PIP, MIDDLE_TIP = 9, 10, 12
    RING_MCP, RING_PIP, RING_TIP = 13, 14, 16
    PINKY_MCP, PINKY_PIP, PINKY_TIP = 17, 18, 20


@dataclass(frozen=True)
class HslColor:
    hue: int
    saturation: int = 70
    lightness: int = 50

    def css(self) -> str:
        return f"hsl({self.hue}, {self.saturation}%, {self.lightness}%)"


@dataclass(frozen=True)
class PinchData:
    distance: float
    normalized_distance: float
    is_pinching: bool


@dataclass(frozen=True)
class ClassifiedFrame:
    """Everything derived from one frame of landmarks. Holds no history."""

    shape: Optional[Shape]
    pinch_distance: float
    normalized_pinch_distance: float
    is_pinching: bool
    hand_height: float  # 1 - wrist.y
    center: Point2f  # normalized
    extended_finger_count: int
    confidence: float


@dataclass(frozen=True)
class StabilizedFrame:
    shape: Shape
    size: float  # px
    color: HslColor
    center: Point2f  # normalized


@dataclass(frozen=True)
class DrawRequest:
    """One shape instance for the rendering sink, in pixel coordinates."""

    shape: Shape
    x: float
    y: float
    size: float
    color: HslColor


@dataclass(frozen=True)
class TrailEntry:
    shape: Shape
    x: float
    y: float
    size: float
    color: HslColor
    age: int = 0  # entries pushed after this one

    @classmethod
    def from_request(cls, request: DrawRequest) -> "TrailEntry":
        return cls(request.shape, request.x, request.y, request.size, request.color)

    def to_request(self) -> DrawRequest:
        return DrawRequest(self.shape, self.x, self.y, self.size, self.color)
