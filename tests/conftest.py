from __future__ import annotations

from typing import Dict, List, Tuple

import pytest

from shapetrail_hand.types import Landmark

# Neutral right hand, palm facing the camera. Extended fingertips sit well above
# their MCP; curled fingertips drop back to just above it.
_WRIST = (0.5, 0.8)
_THUMB = {1: (0.46, 0.75), 2: (0.42, 0.7), 3: (0.38, 0.66)}
_THUMB_TIP_EXTENDED = (0.30, 0.65)
_THUMB_TIP_CURLED = (0.44, 0.62)

# name -> (mcp, pip, dip, tip) landmark indices and the finger's x position
_FINGERS = {
    "index": ((5, 6, 7, 8), 0.45),
    "middle": ((9, 10, 11, 12), 0.50),
    "ring": ((13, 14, 15, 16), 0.55),
    "pinky": ((17, 18, 19, 20), 0.60),
}
_MCP_Y = 0.6
_PIP_Y = 0.5
_DIP_Y = 0.42
_TIP_EXTENDED_Y = 0.35
_TIP_CURLED_Y = 0.58


def make_hand(
    thumb: bool = False,
    index: bool = False,
    middle: bool = False,
    ring: bool = False,
    pinky: bool = False,
    visibility=None,
    overrides: Dict[int, Tuple[float, ...]] = None,
) -> List[Landmark]:
    pts: Dict[int, Tuple[float, ...]] = {0: _WRIST}
    pts.update(_THUMB)
    pts[4] = _THUMB_TIP_EXTENDED if thumb else _THUMB_TIP_CURLED

    flags = {"index": index, "middle": middle, "ring": ring, "pinky": pinky}
    for name, ((mcp, pip, dip, tip), x) in _FINGERS.items():
        pts[mcp] = (x, _MCP_Y)
        pts[pip] = (x, _PIP_Y)
        pts[dip] = (x, _DIP_Y)
        pts[tip] = (x, _TIP_EXTENDED_Y if flags[name] else _TIP_CURLED_Y)

    pts.update(overrides or {})

    hand = []
    for i in range(21):
        p = pts[i]
        z = p[2] if len(p) > 2 else 0.0
        hand.append(Landmark(x=p[0], y=p[1], z=z, visibility=visibility))
    return hand


def scale_hand(hand: List[Landmark], factor: float) -> List[Landmark]:
    return [Landmark(lm.x * factor, lm.y * factor, lm.z * factor, lm.visibility) for lm in hand]


@pytest.fixture
def open_hand() -> List[Landmark]:
    return make_hand(thumb=True, index=True, middle=True, ring=True, pinky=True)


@pytest.fixture
def fist() -> List[Landmark]:
    return make_hand()
