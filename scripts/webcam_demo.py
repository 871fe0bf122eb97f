from __future__ import annotations

import argparse
import logging
import os
import platform
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from shapetrail_hand.app import ShapeTrailApp, run_capture  # noqa: E402
from shapetrail_hand.config import HISTORY_SIZE, StabilizerConfig  # noqa: E402
from shapetrail_hand.detector import HandLandmarkSource  # noqa: E402
from shapetrail_hand.pipeline import PipelineState  # noqa: E402


def open_camera(index: int, width: int, height: int):
    if platform.system() == "Darwin":
        cap = cv2.VideoCapture(index, cv2.CAP_AVFOUNDATION)
    else:
        cap = cv2.VideoCapture(index)
    if not cap.isOpened():
        raise RuntimeError(
            f"Could not open camera index {index}. "
            "On macOS: System Settings -> Privacy & Security -> Camera -> allow your terminal."
        )

    cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    return cap


def main() -> int:
    ap = argparse.ArgumentParser(description="Draw shapes in the air: hand gestures pick the shape, pinch sets size.")
    ap.add_argument("--camera", type=int, default=0, help="Camera index (default: 0)")
    ap.add_argument("--width", type=int, default=1280, help="Capture width (best effort)")
    ap.add_argument("--height", type=int, default=720, help="Capture height (best effort)")
    ap.add_argument(
        "--no-mirror",
        action="store_true",
        help="Disable horizontal mirroring (default is mirrored/selfie mode)",
    )
    ap.add_argument("--no-landmarks", action="store_true", help="Hide the hand skeleton overlay")
    ap.add_argument("--history", type=int, default=HISTORY_SIZE, help="Smoothing window in frames")
    ap.add_argument("--min-confidence", type=float, default=0.7, help="Detection/tracking confidence")
    ap.add_argument(
        "--tasks-model",
        default="models/hand_landmarker.task",
        help="Path to MediaPipe Tasks model (auto-downloaded if missing)",
    )
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    app = ShapeTrailApp(
        PipelineState.create(stabilizer_config=StabilizerConfig(history_size=args.history)),
        draw_landmarks=not args.no_landmarks,
    )

    with HandLandmarkSource(
        min_detection_confidence=args.min_confidence,
        min_tracking_confidence=args.min_confidence,
        tasks_model_path=args.tasks_model,
    ) as source:
        cap = open_camera(args.camera, args.width, args.height)
        run_capture(cap, source, app, mirror=not args.no_mirror)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
