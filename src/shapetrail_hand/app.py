from __future__ import annotations

import logging
from typing import List, Optional

import cv2

from .drawing import draw_hand_landmarks, draw_shape, draw_status, draw_trail
from .pipeline import FrameResult, PipelineState, process_frame
from .types import Frame

logger = logging.getLogger(__name__)

KEY_QUIT = (ord("q"), 27)
KEY_CLEAR = ord("c")
WINDOW_TITLE = "shapetrail - press c to clear, q to quit"


def status_lines(result: FrameResult) -> List[str]:
    if not result.hand_present:
        return ["hand: No", "shape: None"]

    lines = ["hand: Yes"]
    if result.stabilized is None:
        lines.append("shape: Gesture not recognized")
        return lines

    lines.append(f"shape: {result.stabilized.shape.value.capitalize()}")
    lines.append(f"size: {round(result.stabilized.size)}")
    lines.append(f"color: {result.stabilized.color.css()}")
    return lines


class ShapeTrailApp:
    """Owns the pipeline state between camera frames and renders each result."""

    def __init__(self, state: Optional[PipelineState] = None, draw_landmarks: bool = True) -> None:
        self.state = state or PipelineState()
        self.draw_landmarks = draw_landmarks
        self.last_result: Optional[FrameResult] = None

    def step(self, frame_bgr, landmarks: Optional[Frame]):
        h, w = frame_bgr.shape[:2]
        self.state, result = process_frame(self.state, landmarks, w, h)
        self.last_result = result

        if landmarks and self.draw_landmarks:
            draw_hand_landmarks(frame_bgr, landmarks)
        if result.draw is not None:
            draw_shape(frame_bgr, result.draw)
        draw_trail(frame_bgr, result.trail)
        draw_status(frame_bgr, status_lines(result))
        return frame_bgr

    def handle_key(self, key: int) -> bool:
        """Returns False when the app should quit."""
        if key in KEY_QUIT:
            return False
        if key == KEY_CLEAR:
            self.state = self.state.clear_trail()
            logger.info("canvas cleared")
        return True


def run_capture(cap, source, app: ShapeTrailApp, mirror: bool = True, window_title: str = WINDOW_TITLE) -> None:
    """Frame loop until the camera runs dry or the user quits. Always releases `cap`."""
    try:
        while True:
            ok, frame = cap.read()
            if not ok:
                break

            if mirror:
                frame = cv2.flip(frame, 1)

            frame = app.step(frame, source.detect(frame))

            cv2.imshow(window_title, frame)
            if not app.handle_key(cv2.waitKey(1) & 0xFF):
                break
    finally:
        cap.release()
        cv2.destroyAllWindows()
