from __future__ import annotations

import numpy as np
import pytest

cv2 = pytest.importorskip("cv2")

from conftest import make_hand  # noqa: E402
from shapetrail_hand.app import ShapeTrailApp, run_capture, status_lines  # noqa: E402
from shapetrail_hand.drawing import draw_hand_landmarks, draw_shape, draw_trail, hsl_to_bgr, triangle_points  # noqa: E402
from shapetrail_hand.pipeline import PipelineState, process_frame  # noqa: E402
from shapetrail_hand.trail import TrailBuffer  # noqa: E402
from shapetrail_hand.types import DrawRequest, HslColor, Shape  # noqa: E402


def canvas(w=200, h=200):
    return np.zeros((h, w, 3), dtype=np.uint8)


def test_hsl_to_bgr_primary_hues():
    b, g, r = hsl_to_bgr(HslColor(0))
    assert r > g and r > b
    b, g, r = hsl_to_bgr(HslColor(120))
    assert g > r and g > b
    b, g, r = hsl_to_bgr(HslColor(240))
    assert b > r and b > g


def test_hsl_to_bgr_wraps_full_circle():
    assert hsl_to_bgr(HslColor(360)) == hsl_to_bgr(HslColor(0))


@pytest.mark.parametrize("shape", list(Shape))
def test_draw_shape_fills_center(shape):
    color = HslColor(200)
    img = draw_shape(canvas(), DrawRequest(shape, 100, 100, 80, color))
    assert tuple(int(c) for c in img[100, 100]) == hsl_to_bgr(color)
    assert tuple(img[0, 0]) == (0, 0, 0)


def test_draw_shape_with_opacity_blends():
    color = HslColor(200)
    img = draw_shape(canvas(), DrawRequest(Shape.SQUARE, 100, 100, 80, color), opacity=0.5)
    expected = hsl_to_bgr(color)
    for got, want in zip(img[100, 100], expected):
        assert abs(int(got) - want / 2) <= 1


def test_triangle_geometry():
    pts = triangle_points(100, 100, 60)
    apex, left, right = pts
    assert apex[0] == 100
    assert right[0] - left[0] == 60
    assert left[1] == right[1] > apex[1]


def test_draw_trail_newest_on_top():
    trail = TrailBuffer()
    trail = trail.push(DrawRequest(Shape.SQUARE, 100, 100, 40, HslColor(0)))
    trail = trail.push(DrawRequest(Shape.SQUARE, 100, 100, 40, HslColor(120)))
    img = draw_trail(canvas(), trail.with_opacity())
    b, g, r = (int(c) for c in img[100, 100])
    assert g > r


def test_draw_hand_landmarks_marks_tips():
    img = draw_hand_landmarks(canvas(), make_hand())
    # thumb tip drawn red at (0.44, 0.62)
    b, g, r = (int(c) for c in img[int(0.62 * 200), int(0.44 * 200)])
    assert r > g


def test_status_lines():
    state = PipelineState()
    state, result = process_frame(state, None, 200, 200)
    assert status_lines(result) == ["hand: No", "shape: None"]

    state, result = process_frame(state, make_hand(index=True), 200, 200)
    assert status_lines(result) == ["hand: Yes", "shape: Gesture not recognized"]

    _, result = process_frame(state, make_hand(), 200, 200)
    lines = status_lines(result)
    assert lines[1] == "shape: Square"
    assert lines[2].startswith("size: ")
    assert lines[3] == f"color: {result.stabilized.color.css()}"


def test_app_step_and_clear_key():
    app = ShapeTrailApp()
    for _ in range(3):
        app.step(canvas(), make_hand())
    assert len(app.state.trail) == 3
    assert app.handle_key(ord("c"))
    assert len(app.state.trail) == 0
    assert not app.handle_key(ord("q"))
    assert not app.handle_key(27)


class FakeCapture:
    def __init__(self, frames):
        self.frames = list(frames)
        self.released = False

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True


class FakeSource:
    def __init__(self, landmarks=None, error=None):
        self.landmarks = landmarks
        self.error = error

    def detect(self, frame):
        if self.error is not None:
            raise self.error
        return self.landmarks


@pytest.fixture
def headless(monkeypatch):
    keys = []
    monkeypatch.setattr(cv2, "imshow", lambda title, frame: None)
    monkeypatch.setattr(cv2, "waitKey", lambda delay: keys.pop(0) if keys else -1)
    monkeypatch.setattr(cv2, "destroyAllWindows", lambda: None)
    return keys


def test_run_capture_until_camera_runs_dry(headless):
    cap = FakeCapture([canvas(), canvas()])
    app = ShapeTrailApp()
    run_capture(cap, FakeSource(make_hand()), app)
    assert cap.released
    assert len(app.state.trail) == 2


def test_run_capture_stops_on_quit_key(headless):
    headless.append(ord("q"))
    cap = FakeCapture([canvas(), canvas(), canvas()])
    run_capture(cap, FakeSource(None), ShapeTrailApp())
    assert cap.released
    assert len(cap.frames) == 2


def test_run_capture_releases_camera_on_error(headless):
    cap = FakeCapture([canvas()])
    with pytest.raises(RuntimeError):
        run_capture(cap, FakeSource(error=RuntimeError("backend died")), ShapeTrailApp())
    assert cap.released
